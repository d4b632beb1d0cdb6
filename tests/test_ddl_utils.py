# ============================================================================
# DDL UTILITY TESTS
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Tests - Type mapping, code writer and statement builders
# PURPOSE: Verify PostgreSQL type spellings and rendered statements
# CREATED: 19 OCT 2026
# ============================================================================
"""
DDL Utility Tests

Unit tests for the building blocks of table generation:
- data_type(): abstract type + length -> PostgreSQL type
- CodeWriter indentation and content detection
- psycopg.sql builders rendered without a connection

Run with:
    pytest tests/test_ddl_utils.py -v
"""

import pytest
from psycopg import sql

from core.models import Column
from core.schema.code_writer import CodeWriter
from core.schema.ddl_utils import (
    CommentBuilder,
    ConstraintBuilder,
    DatabaseBuilder,
    EnumBuilder,
    IndexBuilder,
    IndexColumn,
    InsertBuilder,
    RoutineBuilder,
    SchemaBuilder,
    TableBuilder,
    TriggerBuilder,
)
from core.schema.type_mapper import data_type, is_auto_increment_type


def _render(composable):
    return composable.as_string(None)


# ============================================================================
# TYPE MAPPING
# ============================================================================

class TestDataType:
    @pytest.mark.parametrize("abstract, length, expected", [
        ("VARCHAR", 100, "varchar(100)"),
        ("VARCHAR", None, "varchar"),
        ("CHAR", 2, "char(2)"),
        ("DECIMAL", "10,2", "numeric(10,2)"),
        ("NUMERIC", "8", "numeric(8)"),
        ("BIT", 1, "bit(1)"),
        ("TEXT", 50, "text"),
        ("FLOAT", None, "real"),
        ("DOUBLE", None, "double precision"),
        ("BOOLEAN", None, "boolean"),
        ("BLOB", None, "bytea"),
        ("VARBINARY", 20, "bytea"),
        ("DATE", None, "date"),
        ("TIME", None, "time without time zone"),
        ("DATETIME", None, "timestamp with time zone"),
        ("TIMESTAMP", None, "timestamp without time zone"),
        ("TIMESTAMPTZ", None, "timestamp with time zone"),
        ("POINT", None, "point"),
        ("INET", None, "inet"),
    ])
    def test_mapping(self, abstract, length, expected):
        assert data_type(Column(name="c", type=abstract, length=length)) == expected

    @pytest.mark.parametrize("abstract, expected", [
        ("INTEGER", "serial"),
        ("SMALLINT", "smallserial"),
        ("BIGINT", "bigserial"),
    ])
    def test_serial_only_for_sentinel(self, abstract, expected):
        assert data_type(Column(name="c", type=abstract, length=-1)) == expected
        assert data_type(Column(name="c", type=abstract, length=10)) == abstract.lower()
        assert data_type(Column(name="c", type=abstract)) == abstract.lower()

    def test_unknown_type_passes_through(self):
        assert data_type(Column(name="c", type="jsonb")) == "jsonb"
        assert data_type(Column(name="c", type="ENUM")) == "ENUM"

    def test_is_auto_increment_type(self):
        assert is_auto_increment_type("bigserial")
        assert not is_auto_increment_type("integer")


# ============================================================================
# CODE WRITER
# ============================================================================

class TestCodeWriter:
    def test_indentation(self):
        writer = CodeWriter("  ")
        writer.write_line("a")
        writer.indent()
        writer.write_line("b")
        writer.indent()
        writer.write_line("c")
        writer.outdent()
        writer.outdent()
        writer.outdent()
        writer.write_line("d")
        assert writer.get_data() == "a\n  b\n    c\nd\n"

    def test_multi_line_text_indented_per_line(self):
        writer = CodeWriter("\t")
        writer.indent()
        writer.write_line("BEGIN\n\nEND;")
        assert writer.get_data() == "\tBEGIN\n\n\tEND;\n"

    def test_composable_rendered(self):
        writer = CodeWriter()
        writer.write_line(sql.SQL("DROP TABLE {};").format(sql.SQL("t")))
        assert writer.get_data() == "DROP TABLE t;\n"

    def test_blank_lines_are_not_content(self):
        writer = CodeWriter()
        assert not writer.has_content()
        assert writer.get_data() == ""
        writer.write_line()
        writer.write_line()
        assert not writer.has_content()
        assert len(writer) == 2
        writer.write_line("x")
        assert writer.has_content()


# ============================================================================
# BUILDERS
# ============================================================================

class TestTableBuilder:
    def test_column_line(self):
        line = TableBuilder.column("status", "varchar(10)", not_null=True, default="'new'")
        assert _render(line) == "status varchar(10) NOT NULL DEFAULT 'new'"

    def test_plain_column(self):
        assert _render(TableBuilder.column("note", "text")) == "note text"

    def test_create_and_drop(self):
        assert _render(TableBuilder.create_open("public.t")) == "CREATE TABLE public.t ("
        assert _render(TableBuilder.drop("public.t")) == "DROP TABLE IF EXISTS public.t CASCADE;"


class TestIndexBuilder:
    def test_simple(self):
        assert _render(IndexBuilder.simple("public.t", "a_id")) == "CREATE INDEX ON public.t (a_id);"

    def test_composite_with_desc(self):
        statement = IndexBuilder.composite(
            "public.t", [IndexColumn("b", descending=True), IndexColumn("a")]
        )
        assert _render(statement) == "CREATE INDEX ON public.t (b DESC, a);"


class TestConstraintBuilder:
    def test_primary_key(self):
        assert _render(ConstraintBuilder.primary_key(["a", "b"])) == "PRIMARY KEY (a, b)"

    def test_unique(self):
        assert _render(ConstraintBuilder.unique("public.t", ["email"])) == \
            "ALTER TABLE public.t ADD UNIQUE (email);"

    def test_foreign_key(self):
        statement = ConstraintBuilder.foreign_key(
            table="sales.ord_purchase",
            constraint_table="ord_purchase",
            column="customer_id",
            ref_schema="sales",
            ref_table="ord_customer",
            ref_column="id",
        )
        assert _render(statement) == (
            "ALTER TABLE sales.ord_purchase ADD CONSTRAINT FK_ord_purchase__customer_id "
            "FOREIGN KEY (customer_id) REFERENCES sales.ord_customer(id);"
        )


class TestEnumBuilder:
    def test_create_type(self):
        statement = EnumBuilder.create_type("public.t_status", ["new", "paid"])
        assert _render(statement) == "CREATE TYPE public.t_status AS ENUM('new', 'paid');"

    def test_cast_and_drop(self):
        assert _render(EnumBuilder.implicit_cast("public.t_status")) == \
            "CREATE CAST (CHARACTER VARYING AS public.t_status) WITH INOUT AS IMPLICIT;"
        assert _render(EnumBuilder.drop_type("public.t_status")) == "DROP TYPE public.t_status CASCADE;"


class TestCommentBuilder:
    def test_quotes_escaped(self):
        statement = CommentBuilder.table("public.t", "Customer's orders")
        assert _render(statement) == "COMMENT ON TABLE public.t IS 'Customer''s orders';"

    def test_column(self):
        assert _render(CommentBuilder.column("public.t", "a", "x")) == \
            "COMMENT ON COLUMN public.t.a IS 'x';"


class TestOtherBuilders:
    def test_trigger_header(self):
        statement = TriggerBuilder.create("t_touch", " BEFORE UPDATE ", "public.t")
        assert _render(statement) == "CREATE TRIGGER t_touch BEFORE UPDATE ON public.t"

    def test_insert_with_null(self):
        statement = InsertBuilder.insert("public.p", ["name", "age"], ["Bob", None])
        assert _render(statement) == "INSERT INTO public.p (name, age) VALUES ('Bob', NULL);"

    def test_schema(self):
        assert _render(SchemaBuilder.create("sales", "postgres")) == \
            "CREATE SCHEMA sales AUTHORIZATION postgres;"
        assert _render(SchemaBuilder.drop("sales")) == "DROP SCHEMA sales;"

    def test_database_lines(self):
        lines = [_render(line) for line in DatabaseBuilder.create_lines(
            "shop", owner="postgres", encoding="UTF8", tablespace="pg_default"
        )]
        assert lines == [
            "CREATE DATABASE shop",
            "WITH OWNER = postgres",
            "ENCODING = 'UTF8'",
            "TABLESPACE = pg_default",
            "CONNECTION LIMIT = -1;",
        ]

    def test_database_collation(self):
        lines = [_render(line) for line in DatabaseBuilder.create_lines(
            "shop", "postgres", "UTF8", "pg_default", collation="en_US.UTF-8"
        )]
        assert "LC_COLLATE = 'en_US.UTF-8'" in lines
        assert "LC_CTYPE = 'en_US.UTF-8'" in lines

    def test_routines(self):
        assert _render(RoutineBuilder.create_or_replace("FUNCTION", "touch")) == \
            "CREATE OR REPLACE FUNCTION touch"
        assert _render(RoutineBuilder.drop("PROCEDURE", "purge")) == \
            "DROP PROCEDURE IF EXISTS purge () CASCADE;"
