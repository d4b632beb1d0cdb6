# ============================================================================
# SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - DDL generation from the ER model graph
# PURPOSE: Generate PostgreSQL create/drop scripts (database, schemas,
#          routines, tables)
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.schema.code_writer import CodeWriter
from core.schema.ddl_utils import (
    IndexBuilder,
    IndexColumn,
    TriggerBuilder,
    CommentBuilder,
    ConstraintBuilder,
    EnumBuilder,
)
from core.schema.naming import DatabaseName, NameResolver, is_valid_identifier, normalize_name
from core.schema.type_mapper import TYPE_MAP, data_type
from core.schema.table_generator import TableGenerator, TableGroupOutput
from core.schema.sql_generator import DDLGenerator, GenerationResult, StepResult

__all__ = [
    # Generator
    "DDLGenerator",
    "GenerationResult",
    "StepResult",
    "TableGenerator",
    "TableGroupOutput",
    # Naming
    "DatabaseName",
    "NameResolver",
    "is_valid_identifier",
    "normalize_name",
    # Utilities
    "CodeWriter",
    "IndexBuilder",
    "IndexColumn",
    "TriggerBuilder",
    "CommentBuilder",
    "ConstraintBuilder",
    "EnumBuilder",
    "TYPE_MAP",
    "data_type",
]
