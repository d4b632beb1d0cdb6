# ============================================================================
# NAMING TESTS
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Tests - Identifier resolution
# PURPOSE: Verify name normalization, validation and resolver diagnostics
# CREATED: 19 OCT 2026
# ============================================================================
"""
Naming Tests

Unit tests for core.schema.naming:
- normalize_name / is_valid_identifier
- Table, column and routine names (tag overrides, error diagnostics)
- Schema names (public default, warnings)
- Database name resolve-or-assign

Run with:
    pytest tests/test_naming.py -v
"""

import pytest

from core.contracts import Tag, TagKind
from core.models import Column, DataModel, Entity, Project
from core.schema.naming import NameResolver, is_valid_identifier, normalize_name
from infrastructure.diagnostics import LoggingDiagnosticSink


# ============================================================================
# HELPERS
# ============================================================================

def _make_resolver():
    diagnostics = LoggingDiagnosticSink()
    return NameResolver(diagnostics), diagnostics


# ============================================================================
# NORMALIZATION
# ============================================================================

class TestNormalizeName:
    @pytest.mark.parametrize("raw, expected", [
        ("Customer", "customer"),
        ("Order Item", "order_item"),
        ("  Lead", "__lead"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_name(raw) == expected


class TestIsValidIdentifier:
    @pytest.mark.parametrize("name", ["a", "_x", "order_item", "T1", "price$"])
    def test_valid(self, name):
        assert is_valid_identifier(name)

    @pytest.mark.parametrize("name", ["", "1abc", "order_item!", "a-b", "a b", "$x"])
    def test_invalid(self, name):
        assert not is_valid_identifier(name)


# ============================================================================
# TABLE / COLUMN NAMES
# ============================================================================

class TestTableAndColumnNames:
    def test_table_from_entity_name(self):
        names, diagnostics = _make_resolver()
        assert names.table_name(Entity(name="Order Item")) == "order_item"
        assert diagnostics.diagnostics == []

    def test_table_tag_overrides_name(self):
        names, _ = _make_resolver()
        entity = Entity(name="Order Item!", tags=[Tag(name="table", value="Order_Items")])
        assert names.table_name(entity) == "order_items"

    def test_invalid_table_reports_error(self):
        names, diagnostics = _make_resolver()
        assert names.table_name(Entity(name="Order Item!")) == ""
        assert diagnostics.errors == [
            "Table name is not valid: order_item!, please edit the table tag for Order Item!"
        ]

    def test_column_tag_overrides_name(self):
        names, _ = _make_resolver()
        column = Column(name="First Name", tags=[Tag(name="column", value="given_name")])
        assert names.column_name(column) == "given_name"

    def test_invalid_column_reports_error(self):
        names, diagnostics = _make_resolver()
        assert names.column_name(Column(name="2nd")) == ""
        assert diagnostics.errors[0].startswith("Column name is not valid: 2nd")

    def test_prefixed_table_name(self):
        names, diagnostics = _make_resolver()
        assert names.prefixed_table_name(Entity(name="Customer"), "Ord_") == "ord_customer"
        assert names.prefixed_table_name(Entity(name="Customer"), "ord-") == ""
        assert len(diagnostics.errors) == 1

    def test_unreported_resolution(self):
        names, diagnostics = _make_resolver()
        assert names.prefixed_table_name(Entity(name="Bad Name!"), "app_", report=False) == ""
        assert names.prefixed_table_name(Entity(name="Customer"), "ord-", report=False) == ""
        assert names.column_name(Column(name="2nd"), report=False) == ""
        assert diagnostics.diagnostics == []


# ============================================================================
# ROUTINE NAMES
# ============================================================================

class TestRoutineName:
    def test_spaces_and_hyphens_become_underscores(self):
        names, _ = _make_resolver()
        tag = Tag(name="Touch Updated-At", kind=TagKind.REFERENCE)
        assert names.routine_name(tag) == "touch_updated_at"

    def test_invalid_routine_reports_error(self):
        names, diagnostics = _make_resolver()
        assert names.routine_name(Tag(name="9lives", kind=TagKind.REFERENCE)) == ""
        assert diagnostics.has_errors


# ============================================================================
# SCHEMA NAMES
# ============================================================================

class TestSchemaName:
    def test_default_public(self):
        names, _ = _make_resolver()
        assert names.schema_name(DataModel(name="Sales")) == "public"
        assert names.schema_name(None) == "public"

    def test_schema_tag_lower_cased(self):
        names, _ = _make_resolver()
        model = DataModel(name="Sales", tags=[Tag(name="schema", value="Sales")])
        assert names.schema_name(model) == "sales"

    def test_invalid_schema_warns(self):
        names, diagnostics = _make_resolver()
        model = DataModel(name="Sales", tags=[Tag(name="schema", value="sales-2")])
        assert names.schema_name(model) == ""
        assert diagnostics.warnings == ["Schema name not valid: sales-2"]
        assert not diagnostics.has_errors


# ============================================================================
# DATABASE NAME
# ============================================================================

class TestDatabaseName:
    def test_assigns_tag_when_missing(self):
        names, _ = _make_resolver()
        resolved = names.database_name(Project(name="My Shop"))
        assert resolved.name == "my_shop"
        assert resolved.valid is True
        assert resolved.assignment.name == "database"
        assert resolved.assignment.value == "my_shop"

    def test_existing_tag_not_reassigned(self):
        names, _ = _make_resolver()
        project = Project(name="My Shop", tags=[Tag(name="database", value="Shop_DB")])
        resolved = names.database_name(project)
        assert resolved.name == "shop_db"
        assert resolved.assignment is None

    def test_resolver_does_not_mutate_project(self):
        names, _ = _make_resolver()
        project = Project(name="Shop")
        names.database_name(project)
        assert project.tags == []

    def test_invalid_name_warns_without_assignment(self):
        names, diagnostics = _make_resolver()
        resolved = names.database_name(Project(name="Shop #1"))
        assert resolved.valid is False
        assert resolved.assignment is None
        assert len(diagnostics.warnings) == 1
