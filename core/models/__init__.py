# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Model exports
# PURPOSE: Central export point for the ER model graph
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for the ER model graph consumed by the DDL generator.
The graph is read-only during generation, apart from the documented
database tag write-back on the Project.

    Project -> DataModel -> (Diagram -> Entity | Entity) -> Column
"""

from core.models.column import Column
from core.models.entity import Entity
from core.models.diagram import Diagram
from core.models.data_model import DataModel, DataModelElement
from core.models.project import Project
from core.models.model_index import ModelIndex

__all__ = [
    "Column",
    "Entity",
    "Diagram",
    "DataModel",
    "DataModelElement",
    "Project",
    "ModelIndex",
]
