# ============================================================================
# DIAGRAM MODEL
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core model - Entity grouping within a data model
# PURPOSE: Named group of entities sharing a table prefix and output file pair
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Diagram
# DEPENDENCIES: pydantic
# ============================================================================
"""
Diagram Model

A Diagram groups entities. Its `prefix` tag is prepended to every table
name it contains and it produces one create/drop file pair.
"""

from typing import List, Literal
from pydantic import Field

from core.contracts import ElementData
from core.models.entity import Entity


class Diagram(ElementData):
    """A named grouping of entities."""

    kind: Literal["diagram"] = "diagram"

    owned_elements: List[Entity] = Field(default_factory=list)


__all__ = ["Diagram"]
