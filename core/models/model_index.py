# ============================================================================
# MODEL INDEX
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core model - Lookup side table for the model graph
# PURPOSE: Resolve element ids and owners without back pointers on the models
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ModelIndex
# DEPENDENCIES: none
# ============================================================================
"""
Model Index

The Pydantic model graph is a tree; foreign keys cross it by column id.
ModelIndex walks the tree once, dispatching on each element's `kind`, and
records every element and its owner so generators can answer questions like
"which diagram owns the entity of this referenced column?".
"""

from typing import Dict, Iterator, Optional, Union

from core.contracts import ElementKind
from core.models.column import Column
from core.models.data_model import DataModel
from core.models.diagram import Diagram
from core.models.entity import Entity
from core.models.project import Project

Element = Union[Project, DataModel, Diagram, Entity, Column]


class ModelIndex:
    """
    id -> element and id -> parent maps for one project.

    Usage:
        index = ModelIndex.build(project)
        target = index.column(col.reference_to)
        owner = index.parent(target)
    """

    def __init__(self):
        self._elements: Dict[str, Element] = {}
        self._parents: Dict[str, Element] = {}

    @classmethod
    def build(cls, project: Project) -> "ModelIndex":
        index = cls()
        index._register(project, None)
        return index

    def _register(self, element: Element, parent: Optional[Element]) -> None:
        self._elements[element.id] = element
        if parent is not None:
            self._parents[element.id] = parent

        for child in self._children(element):
            self._register(child, element)

    @staticmethod
    def _children(element: Element) -> Iterator[Element]:
        if element.kind in (ElementKind.PROJECT, ElementKind.DATA_MODEL, ElementKind.DIAGRAM):
            yield from element.owned_elements
        elif element.kind == ElementKind.ENTITY:
            yield from element.columns

    def get(self, element_id: Optional[str]) -> Optional[Element]:
        if element_id is None:
            return None
        return self._elements.get(element_id)

    def column(self, element_id: Optional[str]) -> Optional[Column]:
        """Get a column by id (None if missing or not a column)."""
        element = self.get(element_id)
        if element is None or element.kind != ElementKind.COLUMN:
            return None
        return element

    def parent(self, element: Element) -> Optional[Element]:
        return self._parents.get(element.id)

    def data_model_of(self, element: Element) -> Optional[DataModel]:
        """Walk up until a data model is found."""
        current = self.parent(element)
        while current is not None and current.kind != ElementKind.DATA_MODEL:
            current = self.parent(current)
        return current

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._elements


__all__ = ["ModelIndex", "Element"]
