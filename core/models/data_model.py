# ============================================================================
# DATA MODEL
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core model - Schema-level grouping
# PURPOSE: Group diagrams and loose entities under one schema
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: DataModel, DataModelElement
# DEPENDENCIES: pydantic
# ============================================================================
"""
Data Model

A DataModel maps to one PostgreSQL schema (its `schema` tag, default
"public"). It owns diagrams and entities directly; entities that sit
outside a diagram form the flat table group.

Data-model-level reference tags carry function and procedure bodies.
"""

from typing import Annotated, List, Literal, Union
from pydantic import Field

from core.contracts import ElementData, ElementKind
from core.models.diagram import Diagram
from core.models.entity import Entity


DataModelElement = Annotated[Union[Diagram, Entity], Field(discriminator="kind")]


class DataModel(ElementData):
    """A named grouping of diagrams (and loose entities)."""

    kind: Literal["data_model"] = "data_model"

    owned_elements: List[DataModelElement] = Field(default_factory=list)

    @property
    def diagrams(self) -> List[Diagram]:
        return [e for e in self.owned_elements if e.kind == ElementKind.DIAGRAM]

    @property
    def entities(self) -> List[Entity]:
        """Entities owned directly (outside any diagram)."""
        return [e for e in self.owned_elements if e.kind == ElementKind.ENTITY]


__all__ = ["DataModel", "DataModelElement"]
