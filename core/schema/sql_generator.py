# ============================================================================
# ER MODEL TO SQL GENERATOR
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - DDL generation from an ER model graph
# PURPOSE: Generate PostgreSQL create/drop scripts for a whole project
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: DDLGenerator, GenerationResult, StepResult
# DEPENDENCIES: psycopg, pydantic
# ============================================================================
"""
ER Model to PostgreSQL Script Generator.

Walks a Project and writes one create/drop file pair per artifact:

    db_create.sql / db_drop.sql                    CREATE/DROP DATABASE
    <model>_function_create.sql / _drop.sql        functions of a data model
    <model>_procedure_create.sql / _drop.sql       procedures of a data model
    <model>_<diagram>_create.sql / _drop.sql       tables of one diagram
    <model>_table_create.sql / _drop.sql           tables outside diagrams
    schema_create.sql / schema_drop.sql            non-public schemas

Order: database, then per data model functions, procedures and tables,
then the schema files. Drop files are only written when the
dropStatements option is on, and a pair is only written when its create
buffer has content.

Error policy:
    - Invalid identifiers: diagnostic, that element is skipped
    - No project: error diagnostic, run aborted
    - Unexpected exception: error diagnostic, run aborted (files already
      written stay on disk)

Usage:
    generator = DDLGenerator(LocalFileSink("build/ddl"))
    result = generator.generate(project)
    if not result.success:
        ...
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.config import GeneratorOptions, get_defaults
from core.logging import get_logger, log_checkpoint, log_context, ComponentType
from core.models import DataModel, ModelIndex, Project
from core.schema.code_writer import CodeWriter
from core.schema.ddl_utils import (
    CommentBuilder,
    DatabaseBuilder,
    RoutineBuilder,
    SchemaBuilder,
)
from core.schema.naming import NameResolver, normalize_name
from core.schema.table_generator import TableGenerator, TableGroupOutput
from core.schema.tags import reference_tags, string_tag
from core.contracts import DEFAULT_SCHEMA, ElementKind
from infrastructure.diagnostics import DiagnosticSink, LoggingDiagnosticSink
from infrastructure.file_sink import FileSink

logger = get_logger(__name__, ComponentType.GENERATOR)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single generation step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    message: str = ""
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GenerationResult:
    """Complete result of a generation run."""
    output_path: str
    timestamp: str
    success: bool
    steps: List[StepResult] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "output_path": self.output_path,
            "timestamp": self.timestamp,
            "success": self.success,
            "steps": [
                {
                    "name": s.name,
                    "status": s.status,
                    "message": s.message,
                    "error": s.error,
                    "details": s.details,
                }
                for s in self.steps
            ],
            "files": self.files,
            "errors": self.errors,
            "warnings": self.warnings,
            "summary": {
                "total_steps": len(self.steps),
                "successful": len([s for s in self.steps if s.status == "success"]),
                "failed": len([s for s in self.steps if s.status == "failed"]),
                "skipped": len([s for s in self.steps if s.status == "skipped"]),
                "files_written": len(self.files),
            },
        }


# ============================================================================
# DDL GENERATOR
# ============================================================================

class DDLGenerator:
    """
    Generate PostgreSQL DDL scripts from an ER model.

    The model graph is read-only except for the database tag default,
    which is assigned back onto the project when missing.
    """

    def __init__(
        self,
        sink: FileSink,
        options: Optional[GeneratorOptions] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        """
        Initialize the generator.

        Args:
            sink: Destination for generated files
            options: Generator options (environment defaults when omitted)
            diagnostics: Diagnostic sink (logging sink when omitted)
        """
        self.sink = sink
        self.options = options or get_defaults()
        self.diagnostics = diagnostics or LoggingDiagnosticSink()
        self.names = NameResolver(self.diagnostics)
        self.files: List[str] = []

    # =========================================================================
    # OUTPUT HELPERS
    # =========================================================================

    def _writer(self) -> CodeWriter:
        return CodeWriter(self.options.indent_string())

    def _write(self, path: str, writer: CodeWriter) -> None:
        self.sink.write(path, writer.get_data())
        self.files.append(path)

    def _write_pair(self, stem: str, create: CodeWriter, drop: CodeWriter) -> bool:
        """
        Write <stem>_create.sql (and <stem>_drop.sql when drops are on).

        Returns:
            False if the create buffer is empty (nothing written)
        """
        if not create.has_content():
            return False
        self._write(f"{stem}_create.sql", create)
        if self.options.generation.drop_statements:
            self._write(f"{stem}_drop.sql", drop)
        return True

    # =========================================================================
    # DATABASE
    # =========================================================================

    def generate_database(self, project: Project) -> bool:
        """
        Write db_create.sql / db_drop.sql.

        When the project has no `database` tag, the resolved name is
        assigned back onto it.

        Returns:
            False if the database name is invalid
        """
        resolved = self.names.database_name(project)
        if resolved.assignment is not None:
            project.tags.append(resolved.assignment)
            logger.info(f"Assigned database tag '{resolved.name}' to project {project.name}")
        if not resolved.valid:
            return False

        db = self.options.database
        writer = self._writer()
        writer.write_line(f"-- Database: {project.name}")
        writer.write_line(f"-- Author: {project.author}")

        create_line, owner_line, *option_lines = DatabaseBuilder.create_lines(
            resolved.name,
            owner=db.owner,
            encoding=db.encoding,
            tablespace=db.tablespace,
            collation=db.collation if db.has_collation else None,
        )
        writer.write_line(create_line)
        writer.indent()
        writer.write_line(owner_line)
        writer.indent()
        for line in option_lines:
            writer.write_line(line)
        writer.outdent()
        writer.outdent()

        if project.documentation:
            writer.write_line()
            writer.write_line(CommentBuilder.database(resolved.name, project.documentation))

        self._write("db_create.sql", writer)

        if self.options.generation.drop_statements:
            drop = self._writer()
            drop.write_line(DatabaseBuilder.drop(resolved.name))
            self._write("db_drop.sql", drop)

        return True

    # =========================================================================
    # SCHEMAS (and everything per data model)
    # =========================================================================

    def generate_schema(self, project: Project, index: Optional[ModelIndex] = None) -> List[StepResult]:
        """
        Generate routines and tables per data model, then the schema files.

        Schemas other than "public" are created once each, even when
        several data models share them.

        Returns:
            One StepResult per data model plus one for the schema files
        """
        index = index or ModelIndex.build(project)
        tables = TableGenerator(self.options, self.names, index, self.diagnostics)

        writer = self._writer()
        drop_writer = self._writer()
        schemas: List[str] = []
        steps: List[StepResult] = []

        for data_model in project.owned_elements:
            if data_model.kind != ElementKind.DATA_MODEL:
                continue

            model_name = normalize_name(data_model.name)
            with log_context(data_model=data_model.name):
                functions = self.generate_functions(data_model, model_name)
                procedures = self.generate_procedures(data_model, model_name)

                schema = self.names.schema_name(data_model)
                if not schema:
                    steps.append(StepResult(
                        name=f"data_model:{data_model.name}",
                        status="skipped",
                        message="Invalid schema name, tables not generated",
                        details={"functions": functions, "procedures": procedures},
                    ))
                    continue

                table_count = self.generate_tables(data_model, tables, schema, model_name)
                steps.append(StepResult(
                    name=f"data_model:{data_model.name}",
                    status="success",
                    message=f"Generated {table_count} tables in schema {schema}",
                    details={
                        "schema": schema,
                        "tables": table_count,
                        "functions": functions,
                        "procedures": procedures,
                    },
                ))

            if schema != DEFAULT_SCHEMA and schema not in schemas:
                schemas.append(schema)
                writer.write_line(f"-- Schema for: {data_model.name}")
                writer.write_line(SchemaBuilder.create(schema, self.options.database.owner))
                if data_model.documentation:
                    writer.write_line()
                    writer.write_line(CommentBuilder.schema(schema, data_model.documentation))
                writer.write_line()
                drop_writer.write_line(SchemaBuilder.drop(schema))

        if writer.has_content():
            self._write("schema_create.sql", writer)
            if self.options.generation.drop_statements:
                self._write("schema_drop.sql", drop_writer)
            steps.append(StepResult(
                name="schema",
                status="success",
                message=f"Generated {len(schemas)} schemas",
                details={"schemas": schemas},
            ))
        else:
            steps.append(StepResult(name="schema", status="skipped", message="Only the public schema is used"))

        return steps

    # =========================================================================
    # FUNCTIONS / PROCEDURES
    # =========================================================================

    def generate_functions(self, data_model: DataModel, model_name: str) -> int:
        return self._generate_routines(
            data_model, model_name, self.options.markers.function, "FUNCTION"
        )

    def generate_procedures(self, data_model: DataModel, model_name: str) -> int:
        return self._generate_routines(
            data_model, model_name, self.options.markers.procedure, "PROCEDURE"
        )

    def _generate_routines(
        self,
        data_model: DataModel,
        model_name: str,
        marker: str,
        routine_kind: str,
    ) -> int:
        """
        CREATE OR REPLACE / DROP for reference tags targeting marker.

        Writes <model>_<kind>_create.sql only if at least one routine exists.

        Returns:
            Number of routines generated
        """
        writer = self._writer()
        drop_writer = self._writer()
        count = 0

        for tag in reference_tags(data_model, marker):
            name = self.names.routine_name(tag)
            if not name:
                continue
            self.diagnostics.info(f"Generate {routine_kind.lower()} DDL for {tag.name}", element=tag.name)
            writer.write_line()
            writer.write_line()
            writer.write_line(RoutineBuilder.create_or_replace(routine_kind, name))
            writer.write_line(tag.value)
            drop_writer.write_line(RoutineBuilder.drop(routine_kind, name))
            count += 1

        self._write_pair(f"{model_name}_{routine_kind.lower()}", writer, drop_writer)
        return count

    # =========================================================================
    # TABLES
    # =========================================================================

    def generate_tables(
        self,
        data_model: DataModel,
        tables: TableGenerator,
        schema: str,
        model_name: str,
    ) -> int:
        """
        One file pair per diagram plus one for entities outside diagrams.

        Each group's FK constraints are flushed after all its tables.

        Returns:
            Number of tables generated
        """
        flat = TableGroupOutput.new(self.options.indent_string())
        count = 0

        for element in data_model.owned_elements:
            if element.kind == ElementKind.DIAGRAM:
                output = TableGroupOutput.new(self.options.indent_string())
                prefix = string_tag("prefix", element)
                with log_context(diagram=element.name):
                    for entity in element.owned_elements:
                        count += self._generate_entity(tables, entity, output, schema, prefix)
                output.flush_foreign_keys()
                diagram_name = normalize_name(element.name)
                self._write_pair(f"{model_name}_{diagram_name}", output.create, output.drop)
            elif element.kind == ElementKind.ENTITY:
                count += self._generate_entity(tables, element, flat, schema, "")

        flat.flush_foreign_keys()
        self._write_pair(f"{model_name}_table", flat.create, flat.drop)
        return count

    def _generate_entity(self, tables, entity, output, schema, prefix) -> int:
        self.diagnostics.info(f"Generate table DDL for {entity.name}", element=entity.name)
        with log_context(entity=entity.name):
            return 1 if tables.generate_table(entity, output, schema, prefix) else 0

    # =========================================================================
    # COMPLETE PROJECT GENERATION
    # =========================================================================

    def generate(self, project: Any) -> GenerationResult:
        """
        Generate every DDL file for a project.

        Args:
            project: Model root; anything other than a Project aborts the run

        Returns:
            GenerationResult with step results and written files
        """
        result = GenerationResult(
            output_path=self.sink.location,
            timestamp=datetime.now(timezone.utc).isoformat(),
            success=False,
        )
        self.files = []

        if getattr(project, "kind", None) != ElementKind.PROJECT:
            message = "No project found, database DDL generator expects a main project"
            self.diagnostics.error(message)
            result.errors.append(message)
            result.steps.append(StepResult(name="database", status="failed", error=message))
            return result

        with log_context(project=project.name):
            log_checkpoint("ddl_generation_started", {"project": project.name})
            try:
                if self.generate_database(project):
                    self.diagnostics.info("Database creation files completed.")
                    result.steps.append(StepResult(name="database", status="success"))
                else:
                    result.steps.append(StepResult(
                        name="database", status="skipped", message="Invalid database name"
                    ))

                result.steps.extend(self.generate_schema(project))
                result.success = True
                self.diagnostics.info(f"Project DDL files generated in {self.sink.location}")
            except Exception as ex:
                logger.exception(f"Project generation failed for {project.name}")
                message = f"Project generation failed: {ex}"
                self.diagnostics.error(message)
                result.errors.append(message)
                result.steps.append(StepResult(name="generate", status="failed", error=str(ex)))
            finally:
                result.files = list(self.files)
                result.warnings = list(getattr(self.diagnostics, "warnings", []))

            log_checkpoint("ddl_generation_completed", {
                "success": result.success,
                "files": len(result.files),
            })

        return result


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["DDLGenerator", "GenerationResult", "StepResult"]
