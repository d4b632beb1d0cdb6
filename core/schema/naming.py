# ============================================================================
# IDENTIFIER POLICY
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - SQL identifier normalization and validation
# PURPOSE: Resolve table, column, routine, schema and database names
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: normalize_name, is_valid_identifier, NameResolver, DatabaseName
# DEPENDENCIES: none
# ============================================================================
"""
Identifier Policy.

Every generated identifier goes through the same steps:
    1. Prefer the explicit override tag when present and non-empty
    2. Otherwise derive it from the display name (spaces -> underscores)
    3. Validate it as an unquoted PostgreSQL identifier
    4. On failure, report a diagnostic and return "" (caller skips it)

Names are lower-cased after validation.
"""

import re
from dataclasses import dataclass
from typing import Optional

from core.contracts import DEFAULT_SCHEMA, ElementData, Tag
from core.schema.tags import find_tag, string_tag, string_tag_for
from infrastructure.diagnostics import DiagnosticSink

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


def normalize_name(raw: str) -> str:
    """Replace spaces with underscores and lower-case."""
    return (raw or "").replace(" ", "_").lower()


def is_valid_identifier(name: str) -> bool:
    """True iff name is non-empty and legal as an unquoted identifier."""
    if not name:
        return False
    return _IDENTIFIER_RE.match(name) is not None


@dataclass(frozen=True)
class DatabaseName:
    """
    Result of the database name resolve-or-assign step.

    assignment is the tag the caller should add to the project when the
    project has no `database` tag yet (None otherwise).
    """
    name: str
    valid: bool
    assignment: Optional[Tag] = None


class NameResolver:
    """
    Resolves identifiers for model elements, reporting invalid ones.

    Usage:
        names = NameResolver(diagnostics)
        table = names.table_name(entity)
        if not table:
            ...  # skipped, diagnostic already reported
    """

    def __init__(self, diagnostics: DiagnosticSink):
        self.diagnostics = diagnostics

    def _resolve(
        self,
        element: ElementData,
        override_tag: str,
        label: str,
        report: bool = True,
    ) -> str:
        name = string_tag(override_tag, element)
        if not name:
            name = normalize_name(element.name)

        if not is_valid_identifier(name):
            if not report:
                return ""
            self.diagnostics.error(
                f"{label} name is not valid: {name.lower()}, "
                f"please edit the {override_tag} tag for {element.name}",
                element=element.name,
            )
            return ""
        return name.lower()

    def table_name(self, entity: ElementData, report: bool = True) -> str:
        return self._resolve(entity, "table", "Table", report)

    def column_name(self, column: ElementData, report: bool = True) -> str:
        return self._resolve(column, "column", "Column", report)

    def prefixed_table_name(self, entity: ElementData, prefix: str = "", report: bool = True) -> str:
        """
        Table name with its diagram prefix, lower-cased and validated.

        With report=False nothing is reported; callers resolving a table
        other than the one being generated report their own diagnostic.
        """
        base = self.table_name(entity, report)
        if not base:
            return ""

        name = (prefix + base).lower()
        if not is_valid_identifier(name):
            if report:
                self.diagnostics.error(
                    f"Table name is not valid: {name}, "
                    f"please edit the prefix tag of the diagram owning {entity.name}",
                    element=entity.name,
                )
            return ""
        return name

    def routine_name(self, tag: Tag) -> str:
        """Trigger/function/procedure name from a reference tag's name."""
        name = (tag.name or "").replace(" ", "_").replace("-", "_")
        if not is_valid_identifier(name):
            self.diagnostics.error(
                f"Routine name is not valid: {name}, please edit the name for {tag.name}",
                element=tag.name,
            )
            return ""
        return name.lower()

    def schema_name(self, data_model: Optional[ElementData]) -> str:
        """
        Schema for a data model (lower-cased `schema` tag, default "public").

        Returns "" and reports a warning for an invalid schema name.
        """
        if data_model is None:
            return DEFAULT_SCHEMA

        name = string_tag("schema", data_model)
        if not name:
            return DEFAULT_SCHEMA
        if not is_valid_identifier(name):
            self.diagnostics.warning(
                f"Schema name not valid: {name}", element=data_model.name
            )
            return ""
        return name.lower()

    def database_name(self, project: ElementData) -> DatabaseName:
        """
        Resolve the database name, proposing a `database` tag when absent.

        The returned assignment carries the normalized project name so the
        choice stays stable across regenerations. Nothing is assigned for
        an invalid name.
        """
        tag = find_tag("database", project)
        name = tag.value if tag is not None else ""
        if not name:
            name = normalize_name(project.name)

        if not is_valid_identifier(name):
            self.diagnostics.warning(
                f"Database name is not valid: {name}, "
                f"please edit the database tag for {project.name}",
                element=project.name,
            )
            return DatabaseName(name=name.lower(), valid=False)

        assignment = None
        if tag is None:
            assignment = string_tag_for("database", name.lower())
        return DatabaseName(name=name.lower(), valid=True, assignment=assignment)


__all__ = [
    "normalize_name",
    "is_valid_identifier",
    "DatabaseName",
    "NameResolver",
]
