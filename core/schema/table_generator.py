# ============================================================================
# TABLE GENERATOR
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - Entity to CREATE TABLE assembly
# PURPOSE: Column lines, keys, enums, indexes, comments, triggers, seed inserts
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: TableGenerator, TableGroupOutput, ResolvedColumn, split_enum_values
# DEPENDENCIES: psycopg
# ============================================================================
"""
Entity to PostgreSQL Table Generator.

Turns one entity into its create and drop DDL, writing into a
TableGroupOutput shared by every entity of the same output file pair.

Per entity, the create side is emitted in this order:
    1. CREATE TYPE ... AS ENUM + implicit cast (one per enum column)
    2. CREATE TABLE with column lines and inline PRIMARY KEY
    3. ALTER TABLE ... ADD UNIQUE
    4. CREATE INDEX per foreign-key column
    5. CREATE INDEX per composite index group
    6. COMMENT ON TABLE / COMMENT ON COLUMN
    7. CREATE TRIGGER + body
    8. INSERT seed rows (seed-insert documentation mode)

Foreign-key constraints are not written inline. They are deferred on the
TableGroupOutput and flushed once by the owner after every table of the
group, so a constraint may reference a table declared later.

The drop side gets DROP TABLE ... CASCADE followed by the table's
DROP TYPE ... CASCADE statements.

Enum columns are never mutated: the resolved type lives in the
ResolvedColumn side table built per entity.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from psycopg import sql

from core.config import GeneratorOptions
from core.contracts import DocumentationMode, ElementKind
from core.logging import get_logger, ComponentType
from core.models import Column, Entity, ModelIndex
from core.schema.code_writer import CodeWriter
from core.schema.ddl_utils import (
    CommentBuilder,
    ConstraintBuilder,
    EnumBuilder,
    IndexBuilder,
    IndexColumn,
    InsertBuilder,
    TableBuilder,
    TriggerBuilder,
)
from core.schema.naming import NameResolver
from core.schema.tags import find_tag, find_tags, reference_tags, string_tag
from core.schema.type_mapper import data_type, is_auto_increment_type
from infrastructure.diagnostics import DiagnosticSink

logger = get_logger(__name__, ComponentType.SCHEMA)

ENUM_TYPE = "enum"

_ENUM_SPLIT_RE = re.compile(r"[,\n]")


def split_enum_values(raw: str) -> List[str]:
    """Enum tag value -> labels (comma or newline separated, trimmed)."""
    values = [v.strip() for v in _ENUM_SPLIT_RE.split(raw or "")]
    return [v for v in values if v]


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class ResolvedColumn:
    """
    Derived view of one column for the current entity.

    name is "" when the column name failed validation; such columns are
    skipped everywhere downstream.
    """
    column: Column
    name: str
    sql_type: str
    enum_type: Optional[str] = None
    enum_values: List[str] = field(default_factory=list)
    default: Optional[str] = None

    @property
    def is_enum(self) -> bool:
        return self.enum_type is not None


@dataclass
class TableGroupOutput:
    """
    Collector for one create/drop file pair.

    foreign_keys accumulates across every entity written into this group
    and is flushed exactly once, after the last table.
    """
    create: CodeWriter
    drop: CodeWriter
    foreign_keys: List[sql.Composed] = field(default_factory=list)
    tables: List[str] = field(default_factory=list)
    flushed: bool = False

    @classmethod
    def new(cls, indent_string: str) -> "TableGroupOutput":
        return cls(create=CodeWriter(indent_string), drop=CodeWriter(indent_string))

    def defer_foreign_key(self, statement: sql.Composed) -> None:
        if self.flushed:
            raise RuntimeError("Foreign keys already flushed for this table group")
        self.foreign_keys.append(statement)

    def flush_foreign_keys(self) -> int:
        """
        Append the deferred FK constraints to the create buffer.

        Returns:
            Number of constraints written (0 on a repeated flush)
        """
        if self.flushed:
            return 0
        for statement in self.foreign_keys:
            self.create.write_line(statement)
        self.flushed = True
        return len(self.foreign_keys)


# ============================================================================
# TABLE GENERATOR
# ============================================================================

class TableGenerator:
    """
    Generate table DDL for entities.

    Usage:
        tables = TableGenerator(options, names, index, diagnostics)
        output = TableGroupOutput.new(options.indent_string())
        for entity in entities:
            tables.generate_table(entity, output, "public", prefix="")
        output.flush_foreign_keys()
    """

    def __init__(
        self,
        options: GeneratorOptions,
        names: NameResolver,
        index: ModelIndex,
        diagnostics: DiagnosticSink,
    ):
        self.options = options
        self.names = names
        self.index = index
        self.diagnostics = diagnostics

    # =========================================================================
    # COLUMN RESOLUTION
    # =========================================================================

    def resolve_columns(self, entity: Entity, table: str) -> List[ResolvedColumn]:
        """
        Build the per-entity side table of resolved names and types.

        Args:
            entity: Entity being generated
            table: Qualified table name (schema.prefix+table)

        Returns:
            One ResolvedColumn per column, in declaration order
        """
        resolved = []
        for column in entity.columns:
            name = self.names.column_name(column)
            sql_type = data_type(column)
            enum_type = None
            enum_values: List[str] = []

            if sql_type.lower() == ENUM_TYPE:
                enum_values = split_enum_values(string_tag(ENUM_TYPE, column))
                if name and enum_values:
                    enum_type = f"{table}_{name}"
                    sql_type = enum_type
                elif name:
                    self.diagnostics.warning(
                        f"Enum column {column.name} of {table} has no enum values",
                        element=column.name,
                    )

            resolved.append(ResolvedColumn(
                column=column,
                name=name,
                sql_type=sql_type,
                enum_type=enum_type,
                enum_values=enum_values,
                default=string_tag("default", column) or None,
            ))
        return resolved

    def documentation_mode(self, entity: Entity) -> DocumentationMode:
        """
        Decide how the entity documentation is rendered.

        An entity-level boolean `inserts` tag overrides the tableInserts
        option for that entity.
        """
        if not entity.documentation.strip():
            return DocumentationMode.NONE

        tag = find_tag("inserts", entity)
        inserts = tag.checked if tag is not None else self.options.generation.table_inserts
        return DocumentationMode.SEED_INSERTS if inserts else DocumentationMode.COMMENT

    # =========================================================================
    # TABLE GENERATION
    # =========================================================================

    def generate_table(
        self,
        entity: Entity,
        output: TableGroupOutput,
        schema: str,
        prefix: str = "",
    ) -> bool:
        """
        Write create/drop DDL for one entity into output.

        Args:
            entity: Entity to generate
            output: Shared collector for the current file pair
            schema: Schema of the owning data model
            prefix: Table name prefix of the owning diagram

        Returns:
            False if the table name is invalid (nothing written)
        """
        table_name = self.names.prefixed_table_name(entity, prefix)
        if not table_name:
            return False

        table = f"{schema}.{table_name}"
        create = output.create

        logger.debug(f"Generating table {table} from entity {entity.name}")

        columns = self.resolve_columns(entity, table)
        enum_columns = [c for c in columns if c.is_enum]

        # Enums precede the table that uses them
        for rc in enum_columns:
            create.write_line(EnumBuilder.create_type(rc.enum_type, rc.enum_values))
            create.write_line()
            create.write_line(EnumBuilder.implicit_cast(rc.enum_type))
            create.write_line()

        # Drop the table first so CASCADE detaches column usage of the types
        output.drop.write_line(TableBuilder.drop(table))
        for rc in enum_columns:
            output.drop.write_line(EnumBuilder.drop_type(rc.enum_type))

        lines: List[sql.Composable] = []
        primary_keys: List[str] = []
        uniques: List[str] = []
        foreign_keys: List[str] = []
        comments: List[Tuple[str, str]] = []

        for rc in columns:
            if not rc.name:
                continue
            column = rc.column

            if column.primary_key:
                primary_keys.append(rc.name)
            elif column.unique:
                uniques.append(rc.name)
            elif column.foreign_key:
                foreign_keys.append(rc.name)

            if self.options.generation.foreign_key_constraint and column.reference_to:
                constraint = self._foreign_key(table, table_name, rc)
                if constraint is not None:
                    output.defer_foreign_key(constraint)

            default = None if is_auto_increment_type(rc.sql_type) else rc.default
            lines.append(TableBuilder.column(rc.name, rc.sql_type, column.is_required, default))

            if column.documentation:
                comments.append((rc.name, column.documentation))

        if primary_keys:
            lines.append(ConstraintBuilder.primary_key(primary_keys))

        create.write_line(TableBuilder.create_open(table))
        create.indent()
        for i, line in enumerate(lines):
            if i < len(lines) - 1:
                line = sql.SQL("{},").format(line)
            create.write_line(line)
        create.outdent()
        create.write_line(");")
        create.write_line()

        if uniques:
            create.write_line(ConstraintBuilder.unique(table, uniques))
            create.write_line()

        if foreign_keys:
            for column_name in foreign_keys:
                create.write_line(IndexBuilder.simple(table, column_name))
            create.write_line()

        self._write_user_indexes(create, table, columns)

        mode = self.documentation_mode(entity)
        if mode == DocumentationMode.COMMENT:
            create.write_line(CommentBuilder.table(table, entity.documentation))
        for column_name, doc in comments:
            create.write_line(CommentBuilder.column(table, column_name, doc))
        if mode == DocumentationMode.COMMENT or comments:
            create.write_line()

        self._write_triggers(create, entity, table, table_name)

        if mode == DocumentationMode.SEED_INSERTS:
            self._write_inserts(create, entity, table, columns)

        output.tables.append(table)
        return True

    # =========================================================================
    # FOREIGN KEYS
    # =========================================================================

    def _foreign_key(
        self,
        table: str,
        table_name: str,
        rc: ResolvedColumn,
    ) -> Optional[sql.Composed]:
        """
        Build the deferred FK constraint for a column with reference_to.

        The referenced table's prefix and schema come from the referenced
        entity's own diagram and data model.
        """
        target = self.index.column(rc.column.reference_to)
        ref_entity = self.index.parent(target) if target is not None else None
        if target is None or ref_entity is None:
            self.diagnostics.warning(
                f"Reference target {rc.column.reference_to} not found "
                f"for column {rc.name} of {table}",
                element=rc.column.name,
            )
            return None

        owner = self.index.parent(ref_entity)
        ref_prefix = ""
        if owner is not None and owner.kind == ElementKind.DIAGRAM:
            ref_prefix = string_tag("prefix", owner)

        # The referenced entity reports its own invalid names when generated
        ref_column = self.names.column_name(target, report=False)
        ref_table = self.names.prefixed_table_name(ref_entity, ref_prefix, report=False)
        ref_schema = self.names.schema_name(self.index.data_model_of(ref_entity))
        if not (ref_column and ref_table and ref_schema):
            self.diagnostics.warning(
                f"Reference target {ref_entity.name}.{target.name} has no valid name, "
                f"foreign key skipped for column {rc.name} of {table}",
                element=rc.column.name,
            )
            return None

        return ConstraintBuilder.foreign_key(
            table=table,
            constraint_table=table_name,
            column=rc.name,
            ref_schema=ref_schema,
            ref_table=ref_table,
            ref_column=ref_column,
        )

    # =========================================================================
    # USER INDEXES
    # =========================================================================

    def _write_user_indexes(
        self,
        writer: CodeWriter,
        table: str,
        columns: List[ResolvedColumn],
    ) -> None:
        """
        One CREATE INDEX per `index` tag name.

        Members are ordered by the tag number; ties keep column order.
        A checked tag marks the member DESC.
        """
        groups: Dict[str, List[Tuple[float, IndexColumn]]] = {}
        for rc in columns:
            if not rc.name:
                continue
            for tag in find_tags("index", rc.column):
                groups.setdefault(tag.value, []).append(
                    (tag.number, IndexColumn(rc.name, descending=tag.checked))
                )

        for index_name, members in groups.items():
            ordered = [member for _, member in sorted(members, key=lambda m: m[0])]
            writer.write_line(f"-- Index: {index_name}")
            writer.write_line(IndexBuilder.composite(table, ordered))
            writer.write_line()

    # =========================================================================
    # TRIGGERS
    # =========================================================================

    def _write_triggers(
        self,
        writer: CodeWriter,
        entity: Entity,
        table: str,
        table_name: str,
    ) -> None:
        for tag in reference_tags(entity, self.options.markers.trigger, through=True):
            routine = self.names.routine_name(tag)
            if not routine:
                continue
            writer.write_line(TriggerBuilder.create(
                f"{table_name}_{routine}", tag.reference.value, table
            ))
            writer.indent()
            writer.write_line(tag.value)
            writer.outdent()
            writer.write_line()

    # =========================================================================
    # SEED INSERTS
    # =========================================================================

    def _write_inserts(
        self,
        writer: CodeWriter,
        entity: Entity,
        table: str,
        columns: List[ResolvedColumn],
    ) -> None:
        """
        One INSERT per documentation line.

        Pipe-delimited fields map to columns by declaration position;
        missing or empty fields become NULL.
        """
        rows = [line for line in entity.documentation.strip().splitlines() if line.strip()]
        for row in rows:
            fields = row.split("|")
            names: List[str] = []
            values: List[Optional[str]] = []
            for position, rc in enumerate(columns):
                if not rc.name:
                    continue
                raw = fields[position].strip() if position < len(fields) else ""
                names.append(rc.name)
                values.append(raw or None)
            writer.write_line(InsertBuilder.insert(table, names, values))
        if rows:
            writer.write_line()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENUM_TYPE",
    "split_enum_values",
    "ResolvedColumn",
    "TableGroupOutput",
    "TableGenerator",
]
