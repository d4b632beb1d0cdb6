# ============================================================================
# DDL UTILITIES
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - DRY utilities for SQL DDL generation
# PURPOSE: Table, index, constraint, enum, comment, trigger, insert, schema,
#          database and routine builders using psycopg.sql
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: TableBuilder, IndexBuilder, IndexColumn, ConstraintBuilder,
#          EnumBuilder, CommentBuilder, TriggerBuilder, InsertBuilder,
#          SchemaBuilder, DatabaseBuilder, RoutineBuilder
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

All builders return psycopg.sql.Composed objects; CodeWriter renders them
without a connection. Identifiers reaching these builders have already
passed the identifier policy (core.schema.naming), so they are emitted
unquoted with sql.SQL. Values (comments, enum labels, seed data) always go
through sql.Literal so embedded quotes are escaped.

Usage:
    from core.schema.ddl_utils import IndexBuilder

    writer.write_line(IndexBuilder.simple("public.orders", "customer_id"))
    # CREATE INDEX ON public.orders (customer_id);
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from psycopg import sql


def _ident(name: str) -> sql.SQL:
    """Pre-validated (possibly schema-qualified) identifier."""
    return sql.SQL(name)


def _ident_list(names: Sequence[str]) -> sql.Composed:
    return sql.SQL(", ").join(_ident(n) for n in names)


# ============================================================================
# TABLE BUILDER
# ============================================================================

class TableBuilder:
    """
    Builder for CREATE TABLE pieces.
    """

    @staticmethod
    def create_open(table: str) -> sql.Composed:
        return sql.SQL("CREATE TABLE {} (").format(_ident(table))

    @staticmethod
    def column(
        name: str,
        sql_type: str,
        not_null: bool = False,
        default: Optional[str] = None,
    ) -> sql.Composed:
        """
        One column line of a CREATE TABLE body.

        Args:
            name: Column name
            sql_type: PostgreSQL type
            not_null: Append NOT NULL
            default: Raw default expression (emitted verbatim)
        """
        parts = [sql.SQL("{} {}").format(_ident(name), sql.SQL(sql_type))]
        if not_null:
            parts.append(sql.SQL("NOT NULL"))
        if default:
            parts.append(sql.SQL("DEFAULT {}").format(sql.SQL(default)))
        return sql.SQL(" ").join(parts)

    @staticmethod
    def drop(table: str) -> sql.Composed:
        return sql.SQL("DROP TABLE IF EXISTS {} CASCADE;").format(_ident(table))


# ============================================================================
# INDEX BUILDER
# ============================================================================

@dataclass(frozen=True)
class IndexColumn:
    """One member of a composite index."""
    column: str
    descending: bool = False


class IndexBuilder:
    """
    Builder for CREATE INDEX statements.

    Index names are left to PostgreSQL.
    """

    @staticmethod
    def simple(table: str, column: str) -> sql.Composed:
        """Single-column index (used for foreign-key columns)."""
        return sql.SQL("CREATE INDEX ON {} ({});").format(_ident(table), _ident(column))

    @staticmethod
    def composite(table: str, columns: Sequence[IndexColumn]) -> sql.Composed:
        """
        Multi-column index in the given order.

        Returns:
            CREATE INDEX ON table (c1, c2 DESC, ...);
        """
        col_parts = [
            sql.SQL("{} DESC").format(_ident(c.column)) if c.descending else _ident(c.column)
            for c in columns
        ]
        return sql.SQL("CREATE INDEX ON {} ({});").format(
            _ident(table),
            sql.SQL(", ").join(col_parts),
        )


# ============================================================================
# CONSTRAINT BUILDER
# ============================================================================

class ConstraintBuilder:
    """
    Builder for key constraints.
    """

    @staticmethod
    def primary_key(columns: Sequence[str]) -> sql.Composed:
        """Inline PRIMARY KEY clause (last entry of the column list)."""
        return sql.SQL("PRIMARY KEY ({})").format(_ident_list(columns))

    @staticmethod
    def unique(table: str, columns: Sequence[str]) -> sql.Composed:
        return sql.SQL("ALTER TABLE {} ADD UNIQUE ({});").format(
            _ident(table), _ident_list(columns)
        )

    @staticmethod
    def foreign_key(
        table: str,
        constraint_table: str,
        column: str,
        ref_schema: str,
        ref_table: str,
        ref_column: str,
    ) -> sql.Composed:
        """
        Named FK constraint, deferred until every table in the file exists.

        Args:
            table: Qualified table (schema.table)
            constraint_table: Unqualified (prefixed) table name for FK_<t>__<c>
            column: Referencing column
            ref_schema: Schema of the referenced table
            ref_table: Referenced table (with its own diagram prefix)
            ref_column: Referenced column
        """
        return sql.SQL(
            "ALTER TABLE {table} ADD CONSTRAINT {name} FOREIGN KEY ({column}) "
            "REFERENCES {ref_schema}.{ref_table}({ref_column});"
        ).format(
            table=_ident(table),
            name=_ident(f"FK_{constraint_table}__{column}"),
            column=_ident(column),
            ref_schema=_ident(ref_schema),
            ref_table=_ident(ref_table),
            ref_column=_ident(ref_column),
        )


# ============================================================================
# ENUM BUILDER
# ============================================================================

class EnumBuilder:
    """
    Builder for per-column ENUM types.
    """

    @staticmethod
    def create_type(type_name: str, values: Sequence[str]) -> sql.Composed:
        values_sql = sql.SQL(", ").join(sql.Literal(v) for v in values)
        return sql.SQL("CREATE TYPE {} AS ENUM({});").format(_ident(type_name), values_sql)

    @staticmethod
    def implicit_cast(type_name: str) -> sql.Composed:
        """Let varchar values be assigned to the enum column."""
        return sql.SQL(
            "CREATE CAST (CHARACTER VARYING AS {}) WITH INOUT AS IMPLICIT;"
        ).format(_ident(type_name))

    @staticmethod
    def drop_type(type_name: str) -> sql.Composed:
        return sql.SQL("DROP TYPE {} CASCADE;").format(_ident(type_name))


# ============================================================================
# COMMENT BUILDER
# ============================================================================

class CommentBuilder:
    """
    Builder for PostgreSQL COMMENT statements.
    """

    @staticmethod
    def _comment(target: str, name: str, comment: str) -> sql.Composed:
        return sql.SQL("COMMENT ON {} {} IS {};").format(
            sql.SQL(target), _ident(name), sql.Literal(comment)
        )

    @staticmethod
    def table(table: str, comment: str) -> sql.Composed:
        """Add comment to table."""
        return CommentBuilder._comment("TABLE", table, comment)

    @staticmethod
    def column(table: str, column: str, comment: str) -> sql.Composed:
        """Add comment to column."""
        return CommentBuilder._comment("COLUMN", f"{table}.{column}", comment)

    @staticmethod
    def schema(schema: str, comment: str) -> sql.Composed:
        return CommentBuilder._comment("SCHEMA", schema, comment)

    @staticmethod
    def database(database: str, comment: str) -> sql.Composed:
        return CommentBuilder._comment("DATABASE", database, comment)


# ============================================================================
# TRIGGER BUILDER
# ============================================================================

class TriggerBuilder:
    """
    Builder for user-defined triggers. The body is opaque SQL.
    """

    @staticmethod
    def create(trigger_name: str, event: str, table: str) -> sql.Composed:
        """
        CREATE TRIGGER header; the caller writes the body after it.

        Args:
            trigger_name: <table>_<routine>
            event: Timing/event text, e.g. "BEFORE INSERT OR UPDATE"
            table: Qualified table
        """
        return sql.SQL("CREATE TRIGGER {} {} ON {}").format(
            _ident(trigger_name), sql.SQL(event.strip()), _ident(table)
        )


# ============================================================================
# INSERT BUILDER
# ============================================================================

class InsertBuilder:
    """
    Builder for seed-data inserts.
    """

    @staticmethod
    def insert(table: str, columns: Sequence[str], values: Sequence[Optional[str]]) -> sql.Composed:
        """
        INSERT of one row; None values render as NULL.
        """
        return sql.SQL("INSERT INTO {} ({}) VALUES ({});").format(
            _ident(table),
            _ident_list(columns),
            sql.SQL(", ").join(sql.Literal(v) for v in values),
        )


# ============================================================================
# SCHEMA BUILDER
# ============================================================================

class SchemaBuilder:
    """
    Builder for schema-level DDL.
    """

    @staticmethod
    def create(schema: str, owner: str) -> sql.Composed:
        return sql.SQL("CREATE SCHEMA {} AUTHORIZATION {};").format(
            _ident(schema), _ident(owner)
        )

    @staticmethod
    def drop(schema: str) -> sql.Composed:
        return sql.SQL("DROP SCHEMA {};").format(_ident(schema))


# ============================================================================
# DATABASE BUILDER
# ============================================================================

class DatabaseBuilder:
    """
    Builder for CREATE/DROP DATABASE.
    """

    @staticmethod
    def create_lines(
        database: str,
        owner: str,
        encoding: str,
        tablespace: str,
        collation: Optional[str] = None,
    ) -> List[sql.Composed]:
        """
        CREATE DATABASE split into its lines, so the writer can indent the
        WITH options. LC_COLLATE/LC_CTYPE only when collation is given.
        """
        options = [
            sql.SQL("ENCODING = {}").format(sql.Literal(encoding)),
            sql.SQL("TABLESPACE = {}").format(_ident(tablespace)),
        ]
        if collation:
            options.append(sql.SQL("LC_COLLATE = {}").format(sql.Literal(collation)))
            options.append(sql.SQL("LC_CTYPE = {}").format(sql.Literal(collation)))
        options.append(sql.SQL("CONNECTION LIMIT = -1;"))

        return [
            sql.SQL("CREATE DATABASE {}").format(_ident(database)),
            sql.SQL("WITH OWNER = {}").format(_ident(owner)),
        ] + options

    @staticmethod
    def drop(database: str) -> sql.Composed:
        return sql.SQL("DROP DATABASE {};").format(_ident(database))


# ============================================================================
# ROUTINE BUILDER
# ============================================================================

class RoutineBuilder:
    """
    Builder for functions and procedures. Bodies are opaque SQL.
    """

    @staticmethod
    def create_or_replace(routine_kind: str, name: str) -> sql.Composed:
        """routine_kind is FUNCTION or PROCEDURE."""
        return sql.SQL("CREATE OR REPLACE {} {}").format(
            sql.SQL(routine_kind), _ident(name)
        )

    @staticmethod
    def drop(routine_kind: str, name: str) -> sql.Composed:
        return sql.SQL("DROP {} IF EXISTS {} () CASCADE;").format(
            sql.SQL(routine_kind), _ident(name)
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TableBuilder",
    "IndexColumn",
    "IndexBuilder",
    "ConstraintBuilder",
    "EnumBuilder",
    "CommentBuilder",
    "TriggerBuilder",
    "InsertBuilder",
    "SchemaBuilder",
    "DatabaseBuilder",
    "RoutineBuilder",
]
