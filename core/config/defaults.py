# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for formatting, database, generation and markers
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Options recognized by the DDL generator, grouped by concern.
They can be overridden via environment variables or by the host
application passing its own option mapping (camelCase keys).

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional


_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


@dataclass(frozen=True)
class FormattingDefaults:
    """
    Defaults for the text emitter.
    """
    use_tab: bool = False
    indent_spaces: int = 4

    def indent_string(self) -> str:
        """Indent unit used by CodeWriter."""
        if self.use_tab:
            return "\t"
        return " " * self.indent_spaces

    @classmethod
    def from_env(cls) -> "FormattingDefaults":
        """Create from environment variables."""
        return cls(
            use_tab=_env_bool("DDL_USE_TAB", False),
            indent_spaces=int(os.getenv("DDL_INDENT_SPACES", 4)),
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """
    Defaults for CREATE DATABASE / CREATE SCHEMA.

    A collation of "default" omits LC_COLLATE and LC_CTYPE.
    """
    owner: str = "postgres"
    encoding: str = "UTF8"
    tablespace: str = "pg_default"
    collation: str = "default"

    @property
    def has_collation(self) -> bool:
        return self.collation != "default"

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            owner=os.getenv("DDL_OWNER", "postgres"),
            encoding=os.getenv("DDL_ENCODING", "UTF8"),
            tablespace=os.getenv("DDL_TABLESPACE", "pg_default"),
            collation=os.getenv("DDL_COLLATION", "default"),
        )


@dataclass(frozen=True)
class GenerationDefaults:
    """
    Switches for what gets generated.
    """
    drop_statements: bool = True  # gates every *_drop.sql file
    foreign_key_constraint: bool = True  # gates deferred FK ALTERs
    table_inserts: bool = False  # documentation -> seed INSERTs

    @classmethod
    def from_env(cls) -> "GenerationDefaults":
        """Create from environment variables."""
        return cls(
            drop_statements=_env_bool("DDL_DROP_STATEMENTS", True),
            foreign_key_constraint=_env_bool("DDL_FOREIGN_KEY_CONSTRAINT", True),
            table_inserts=_env_bool("DDL_TABLE_INSERTS", False),
        )


@dataclass(frozen=True)
class MarkerDefaults:
    """
    Marker names that reference tags must target to be picked up.
    """
    trigger: str = "trigger"
    function: str = "function"
    procedure: str = "procedure"

    @classmethod
    def from_env(cls) -> "MarkerDefaults":
        """Create from environment variables."""
        return cls(
            trigger=os.getenv("DDL_TRIGGER_MARKER", "trigger"),
            function=os.getenv("DDL_FUNCTION_MARKER", "function"),
            procedure=os.getenv("DDL_PROCEDURE_MARKER", "procedure"),
        )


# ============================================================================
# GENERATOR OPTIONS
# ============================================================================

# Host option key -> (group, field)
_OPTION_KEYS: Dict[str, tuple] = {
    "useTab": ("formatting", "use_tab"),
    "indentSpaces": ("formatting", "indent_spaces"),
    "owner": ("database", "owner"),
    "encoding": ("database", "encoding"),
    "tablespace": ("database", "tablespace"),
    "collation": ("database", "collation"),
    "dropStatements": ("generation", "drop_statements"),
    "foreignKeyConstraint": ("generation", "foreign_key_constraint"),
    "tableInserts": ("generation", "table_inserts"),
    "trigger": ("markers", "trigger"),
    "function": ("markers", "function"),
    "procedure": ("markers", "procedure"),
}


@dataclass(frozen=True)
class GeneratorOptions:
    """Container for all generator options."""
    formatting: FormattingDefaults = field(default_factory=FormattingDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    generation: GenerationDefaults = field(default_factory=GenerationDefaults)
    markers: MarkerDefaults = field(default_factory=MarkerDefaults)

    @classmethod
    def from_env(cls) -> "GeneratorOptions":
        """Create all options from environment variables."""
        return cls(
            formatting=FormattingDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
            generation=GenerationDefaults.from_env(),
            markers=MarkerDefaults.from_env(),
        )

    @classmethod
    def from_dict(
        cls,
        options: Mapping[str, Any],
        base: Optional["GeneratorOptions"] = None,
    ) -> "GeneratorOptions":
        """
        Build options from a host option mapping.

        Accepts the host's camelCase keys (useTab, dropStatements, ...) as
        well as the snake_case field names. Unknown keys are ignored.

        Args:
            options: Host option mapping
            base: Options to start from (defaults when omitted)

        Returns:
            New GeneratorOptions
        """
        result = base or cls()
        snake_keys = {f: (g, f) for g, f in _OPTION_KEYS.values()}

        updates: Dict[str, Dict[str, Any]] = {}
        for key, value in options.items():
            target = _OPTION_KEYS.get(key) or snake_keys.get(key)
            if target is None or value is None:
                continue
            group, name = target
            updates.setdefault(group, {})[name] = value

        for group, values in updates.items():
            current = getattr(result, group)
            coerced = {}
            for f in fields(current):
                if f.name not in values:
                    continue
                value = values[f.name]
                if f.type in (bool, "bool"):
                    value = _as_bool(value)
                elif f.type in (int, "int"):
                    value = int(value)
                else:
                    value = str(value)
                coerced[f.name] = value
            result = replace(result, **{group: replace(current, **coerced)})

        return result

    def indent_string(self) -> str:
        return self.formatting.indent_string()


_defaults: Optional[GeneratorOptions] = None


def get_defaults() -> GeneratorOptions:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = GeneratorOptions.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "FormattingDefaults",
    "DatabaseDefaults",
    "GenerationDefaults",
    "MarkerDefaults",
    "GeneratorOptions",
    "get_defaults",
    "reset_defaults",
]
