#!/usr/bin/env python
# ============================================================================
# DDL GENERATION SCRIPT
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# PURPOSE: Generate PostgreSQL DDL files from an ER model JSON export
# USAGE:
#   python scripts/generate_ddl.py model.json --dry-run        # Print SQL
#   python scripts/generate_ddl.py model.json -o build/ddl     # Write files
# ============================================================================

import sys
import os
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from __version__ import __version__
from core.config import GeneratorOptions
from core.logging import ComponentType, configure_logging, get_logger
from core.models import Project
from core.schema import DDLGenerator
from infrastructure import LocalFileSink, LoggingDiagnosticSink, MemoryFileSink

logger = get_logger("scripts.generate_ddl", ComponentType.CLI)


def build_options(args) -> GeneratorOptions:
    """Environment defaults overridden by command line flags."""
    overrides = {}
    if args.no_drop:
        overrides["dropStatements"] = False
    if args.no_foreign_keys:
        overrides["foreignKeyConstraint"] = False
    if args.table_inserts:
        overrides["tableInserts"] = True
    if args.owner:
        overrides["owner"] = args.owner
    return GeneratorOptions.from_dict(overrides, base=GeneratorOptions.from_env())


def main():
    parser = argparse.ArgumentParser(
        description="Generate PostgreSQL DDL from an ER model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/generate_ddl.py shop.json --dry-run     # Print DDL to stdout
  python scripts/generate_ddl.py shop.json -o build/ddl  # Write DDL files
  python scripts/generate_ddl.py shop.json --no-drop     # Skip *_drop.sql files

Environment Variables:
  DDL_USE_TAB              Indent with tabs (default: false)
  DDL_INDENT_SPACES        Spaces per indent level (default: 4)
  DDL_OWNER                Database/schema owner (default: postgres)
  DDL_ENCODING             Database encoding (default: UTF8)
  DDL_TABLESPACE           Database tablespace (default: pg_default)
  DDL_COLLATION            LC_COLLATE/LC_CTYPE (default: default = omitted)
  DDL_DROP_STATEMENTS      Write drop files (default: true)
  DDL_FOREIGN_KEY_CONSTRAINT  Emit FK constraints (default: true)
  DDL_TABLE_INSERTS        Documentation as seed inserts (default: false)
  LOG_FORMAT               Set to "json" for structured logs
        """
    )
    parser.add_argument(
        "project",
        type=str,
        help="ER model project exported as JSON"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=".",
        help="Output directory (default: current directory)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated files without writing them"
    )
    parser.add_argument(
        "--no-drop",
        action="store_true",
        help="Do not generate drop files"
    )
    parser.add_argument(
        "--no-foreign-keys",
        action="store_true",
        help="Do not generate foreign key constraints"
    )
    parser.add_argument(
        "--table-inserts",
        action="store_true",
        help="Render table documentation as seed INSERT statements"
    )
    parser.add_argument(
        "--owner",
        type=str,
        help="Owner of the database and schemas (overrides environment)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit structured JSON logs"
    )
    args = parser.parse_args()

    configure_logging(
        level="DEBUG" if args.verbose else "INFO",
        json_output=args.json_logs,
    )

    try:
        project = Project.model_validate_json(Path(args.project).read_text(encoding="utf-8"))
    except OSError as e:
        print(f"Cannot read {args.project}: {e}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as e:
        print(f"Invalid project model in {args.project}:\n{e}", file=sys.stderr)
        sys.exit(1)

    logger.info(f"Loaded project {project.name} from {args.project}")

    sink = MemoryFileSink() if args.dry_run else LocalFileSink(args.output)
    diagnostics = LoggingDiagnosticSink()
    generator = DDLGenerator(sink, options=build_options(args), diagnostics=diagnostics)

    result = generator.generate(project)

    if args.dry_run:
        for path, text in sink.files.items():
            print(f"-- ===== {path} =====")
            print(text)

    print("=" * 70, file=sys.stderr)
    for step in result.steps:
        print(f"[{step.status.upper()}] {step.name}: {step.message}", file=sys.stderr)
        if step.error:
            print(f"   Error: {step.error}", file=sys.stderr)
        if step.details and args.verbose:
            for key, value in step.details.items():
                print(f"   {key}: {value}", file=sys.stderr)

    for warning in diagnostics.warnings:
        print(f"WARNING: {warning}", file=sys.stderr)
    for error in diagnostics.errors:
        print(f"ERROR: {error}", file=sys.stderr)

    print("=" * 70, file=sys.stderr)
    if not result.success:
        print("Generation failed!", file=sys.stderr)
        sys.exit(1)
    logger.info(f"Generated {len(result.files)} files in {result.output_path}")
    print(f"Generated {len(result.files)} files in {result.output_path}", file=sys.stderr)
    if diagnostics.has_errors:
        sys.exit(2)


if __name__ == "__main__":
    main()
