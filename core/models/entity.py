# ============================================================================
# ENTITY MODEL
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core model - ER entity (table)
# PURPOSE: Ordered columns plus documentation and tags
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Entity
# DEPENDENCIES: pydantic
# ============================================================================
"""
Entity Model

An Entity becomes one table. Its identity is the resolved table name
within its schema.
"""

from typing import List, Literal
from pydantic import Field

from core.contracts import ElementData
from core.models.column import Column


class Entity(ElementData):
    """
    An ER entity.

    Maps to: <schema>.<prefix><table> table
    """

    kind: Literal["entity"] = "entity"

    columns: List[Column] = Field(default_factory=list)


__all__ = ["Entity"]
