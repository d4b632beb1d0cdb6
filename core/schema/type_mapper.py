# ============================================================================
# TYPE MAPPER
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - Abstract column type to PostgreSQL type
# PURPOSE: Map modeler types plus length to dialect spellings (serial overrides)
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: TYPE_MAP, TypeSpec, data_type, is_auto_increment_type
# DEPENDENCIES: none
# ============================================================================
"""
Type Mapper.

Each abstract type maps to a TypeSpec: the PostgreSQL spelling, whether a
"(N)" length clause is rendered from the column length, and an optional
auto-increment spelling used when the column length is the -1 sentinel.

Unrecognized types pass through verbatim (so "enum" stays "enum" and is
picked up by enum materialization).
"""

from dataclasses import dataclass
from typing import Dict, Optional

from core.models.column import Column

SERIAL_MARKER = "serial"


@dataclass(frozen=True)
class TypeSpec:
    """PostgreSQL spelling for one abstract type."""
    spelling: str
    with_length: bool = False
    auto_increment: Optional[str] = None


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP: Dict[str, TypeSpec] = {
    # Character
    "VARCHAR": TypeSpec("varchar", with_length=True),
    "CHAR": TypeSpec("char", with_length=True),
    "TEXT": TypeSpec("text"),

    # Numeric
    "INTEGER": TypeSpec("integer", auto_increment="serial"),
    "SMALLINT": TypeSpec("smallint", auto_increment="smallserial"),
    "BIGINT": TypeSpec("bigint", auto_increment="bigserial"),
    "DECIMAL": TypeSpec("numeric", with_length=True),
    "NUMERIC": TypeSpec("numeric", with_length=True),
    "FLOAT": TypeSpec("real"),
    "DOUBLE": TypeSpec("double precision"),
    "BIT": TypeSpec("bit", with_length=True),
    "BOOLEAN": TypeSpec("boolean"),

    # Binary
    "BINARY": TypeSpec("bytea"),
    "VARBINARY": TypeSpec("bytea"),
    "BLOB": TypeSpec("bytea"),

    # Date/time
    "DATE": TypeSpec("date"),
    "TIME": TypeSpec("time without time zone"),
    "DATETIME": TypeSpec("timestamp with time zone"),
    "TIMESTAMPTZ": TypeSpec("timestamp with time zone"),
    "TIMESTAMP": TypeSpec("timestamp without time zone"),

    # Geometric / network
    "POINT": TypeSpec("point"),
    "POLYGON": TypeSpec("polygon"),
    "CIDR": TypeSpec("cidr"),
    "INET": TypeSpec("inet"),
}


def _length_clause(column: Column) -> str:
    if column.length is None or str(column.length).strip() == "":
        return ""
    return f"({str(column.length).strip()})"


def data_type(column: Column) -> str:
    """
    Map a column's abstract type to a PostgreSQL type string.

    INTEGER/SMALLINT/BIGINT become serial/smallserial/bigserial only when
    the length is exactly -1; any other length (or none) keeps the plain type.

    Args:
        column: Column to map

    Returns:
        PostgreSQL type string
    """
    type_spec = TYPE_MAP.get(column.type)
    if type_spec is None:
        return column.type

    if type_spec.auto_increment and column.requests_auto_increment:
        return type_spec.auto_increment

    if type_spec.with_length:
        return type_spec.spelling + _length_clause(column)
    return type_spec.spelling


def is_auto_increment_type(sql_type: str) -> bool:
    """Serial types never get an explicit DEFAULT."""
    return SERIAL_MARKER in sql_type


__all__ = [
    "SERIAL_MARKER",
    "TYPE_MAP",
    "TypeSpec",
    "data_type",
    "is_auto_increment_type",
]
