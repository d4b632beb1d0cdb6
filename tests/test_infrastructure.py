# ============================================================================
# INFRASTRUCTURE TESTS
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Tests - Sinks, diagnostics, logging and CLI
# PURPOSE: Verify file output, diagnostic collection, log formatting and the
#          generate_ddl command line
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure Tests

Run with:
    pytest tests/test_infrastructure.py -v
"""

import json
import logging
import sys

import pytest
from unittest.mock import MagicMock

from core.contracts import Severity
from core.logging import ComponentType, HumanFormatter, StructuredFormatter, get_current_context, log_context
from infrastructure.diagnostics import Diagnostic, DiagnosticSink, LoggingDiagnosticSink
from infrastructure.file_sink import LocalFileSink, MemoryFileSink
from scripts import generate_ddl


# ============================================================================
# HELPERS
# ============================================================================

def _record(message="hello", level=logging.INFO):
    return logging.LogRecord("core.schema", level, __file__, 1, message, None, None)


def _write_project(path):
    payload = {
        "kind": "project",
        "name": "Shop",
        "owned_elements": [{
            "kind": "data_model",
            "name": "Sales",
            "owned_elements": [{
                "kind": "entity",
                "name": "Customer",
                "columns": [{"name": "id", "type": "INTEGER", "length": -1, "primary_key": True}],
            }],
        }],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# ============================================================================
# FILE SINKS
# ============================================================================

class TestFileSinks:
    def test_local_sink_creates_directories(self, tmp_path):
        sink = LocalFileSink(tmp_path / "out" / "ddl")
        sink.write("db_create.sql", "CREATE DATABASE shop;\n")
        target = tmp_path / "out" / "ddl" / "db_create.sql"
        assert target.read_text(encoding="utf-8") == "CREATE DATABASE shop;\n"
        assert sink.written == [target]
        assert sink.location == str(tmp_path / "out" / "ddl")

    def test_memory_sink(self):
        sink = MemoryFileSink()
        sink.write("a.sql", "x")
        sink.write("a.sql", "y")
        assert sink.files == {"a.sql": "y"}
        assert sink.location == "<memory>"


# ============================================================================
# DIAGNOSTICS
# ============================================================================

class TestDiagnostics:
    def test_collects_by_severity(self):
        sink = LoggingDiagnosticSink()
        sink.info("started")
        sink.warning("odd", element="Customer")
        sink.error("broken")
        assert sink.infos == ["started"]
        assert sink.warnings == ["odd"]
        assert sink.errors == ["broken"]
        assert sink.has_errors
        assert sink.diagnostics[1] == Diagnostic(Severity.WARNING, "odd", "Customer")

    def test_logs_at_matching_level(self, caplog):
        sink = LoggingDiagnosticSink()
        with caplog.at_level(logging.INFO, logger="infrastructure.diagnostics"):
            sink.warning("Schema name not valid: x")
        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.records[-1].getMessage() == "Schema name not valid: x"

    def test_custom_sink(self):
        class ListSink(DiagnosticSink):
            def __init__(self):
                self.seen = []

            def report(self, diagnostic):
                self.seen.append(diagnostic.severity)

        sink = ListSink()
        sink.info("a")
        sink.error("b")
        assert sink.seen == [Severity.INFO, Severity.ERROR]

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            DiagnosticSink()


# ============================================================================
# LOGGING
# ============================================================================

class TestLogging:
    def test_context_nesting(self):
        with log_context(project="Shop", data_model="Sales"):
            with log_context(entity="Customer"):
                context = get_current_context()
                assert context.project == "Shop"
                assert context.entity == "Customer"
            assert get_current_context().entity is None
        assert get_current_context().project is None

    def test_human_formatter_includes_context(self):
        with log_context(data_model="Sales", diagram="Orders", entity="Customer"):
            line = HumanFormatter().format(_record())
        assert "[model=Sales, diagram=Orders, entity=Customer]" in line
        assert line.endswith("core.schema [model=Sales, diagram=Orders, entity=Customer]: hello")

    def test_structured_formatter(self):
        with log_context(project="Shop"):
            data = json.loads(StructuredFormatter().format(_record("done", logging.WARNING)))
        assert data["level"] == "WARNING"
        assert data["message"] == "done"
        assert data["context"] == {"project": "Shop"}


# ============================================================================
# COMMAND LINE
# ============================================================================

class TestCommandLine:
    @pytest.fixture(autouse=True)
    def quiet_logging(self, monkeypatch):
        """Keep the CLI from replacing the root handlers pytest installs."""
        monkeypatch.setattr(generate_ddl, "configure_logging", MagicMock())

    def test_writes_files(self, tmp_path, monkeypatch):
        project = _write_project(tmp_path / "shop.json")
        out = tmp_path / "ddl"
        monkeypatch.setattr(sys, "argv", ["generate_ddl", str(project), "-o", str(out), "--no-drop"])

        generate_ddl.main()

        assert (out / "db_create.sql").exists()
        assert "CREATE TABLE public.customer (" in (out / "sales_table_create.sql").read_text()
        assert not (out / "db_drop.sql").exists()

    def test_dry_run_prints(self, tmp_path, monkeypatch, capsys):
        project = _write_project(tmp_path / "shop.json")
        monkeypatch.setattr(sys, "argv", ["generate_ddl", str(project), "--dry-run", "-o", str(tmp_path / "x")])

        generate_ddl.main()

        out = capsys.readouterr().out
        assert "-- ===== db_create.sql =====" in out
        assert "CREATE DATABASE shop" in out
        assert not (tmp_path / "x").exists()

    def test_reports_through_cli_logger(self, tmp_path, monkeypatch, caplog):
        project = _write_project(tmp_path / "shop.json")
        monkeypatch.setattr(sys, "argv", ["generate_ddl", str(project), "--dry-run"])

        with caplog.at_level(logging.INFO, logger="scripts.generate_ddl"):
            generate_ddl.main()

        messages = [r.getMessage() for r in caplog.records if r.name == "scripts.generate_ddl"]
        assert messages[0].startswith("Loaded project Shop from ")
        assert messages[-1].startswith("Generated ")
        assert messages[-1].endswith(" files in <memory>")
        assert generate_ddl.logger.extra == {"component": ComponentType.CLI}

    def test_invalid_json_exits(self, tmp_path, monkeypatch):
        bad = tmp_path / "bad.json"
        bad.write_text('{"kind": "project", "owned_elements": [{"kind": "nope"}]}', encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["generate_ddl", str(bad)])

        with pytest.raises(SystemExit) as exc:
            generate_ddl.main()
        assert exc.value.code == 1

    def test_missing_file_exits(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["generate_ddl", str(tmp_path / "missing.json")])
        with pytest.raises(SystemExit) as exc:
            generate_ddl.main()
        assert exc.value.code == 1

    def test_build_options(self, monkeypatch):
        monkeypatch.delenv("DDL_OWNER", raising=False)
        parser_args = type("Args", (), {
            "no_drop": True,
            "no_foreign_keys": False,
            "table_inserts": True,
            "owner": "app",
        })()
        options = generate_ddl.build_options(parser_args)
        assert options.generation.drop_statements is False
        assert options.generation.foreign_key_constraint is True
        assert options.generation.table_inserts is True
        assert options.database.owner == "app"
