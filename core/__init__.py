# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core module initialization
# PURPOSE: Export core contracts and the ER model graph
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
# Schema generation lives in core.schema and is imported from there;
# it depends on infrastructure, which depends on core.contracts.

from core.contracts import (
    DocumentationMode,
    ElementData,
    ElementKind,
    Severity,
    Tag,
    TagKind,
)
from core.models import (
    Column,
    Entity,
    Diagram,
    DataModel,
    Project,
    ModelIndex,
)

__all__ = [
    # Enums
    "DocumentationMode",
    "ElementKind",
    "Severity",
    "TagKind",
    # Models
    "ElementData",
    "Tag",
    "Column",
    "Entity",
    "Diagram",
    "DataModel",
    "Project",
    "ModelIndex",
]
