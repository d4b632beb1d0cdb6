# ============================================================================
# COLUMN MODEL
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core model - Entity column
# PURPOSE: Typed column of an ER entity
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Column
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Model

A Column is one attribute of an Entity.

Maps to: one line of a CREATE TABLE body

The abstract type is a modeler-level name (VARCHAR, INTEGER, ...) that the
type mapper translates to a PostgreSQL spelling. A length of -1 on an
integer type requests an auto-increment (serial) column.
"""

from typing import Literal, Optional, Union
from pydantic import Field

from core.contracts import AUTO_INCREMENT_LENGTH, ElementData


class Column(ElementData):
    """
    A column of an entity.

    reference_to holds the id of the referenced column (FK target). It is
    resolved through ModelIndex, never through back pointers.
    """

    kind: Literal["column"] = "column"

    type: str = Field(default="VARCHAR", description="Abstract column type")
    length: Optional[Union[int, str]] = Field(
        default=None,
        description="Length/precision; -1 requests auto-increment for integers"
    )
    nullable: bool = Field(default=True)
    primary_key: bool = Field(default=False)
    unique: bool = Field(default=False)
    foreign_key: bool = Field(default=False)
    reference_to: Optional[str] = Field(
        default=None,
        description="Id of the referenced column"
    )

    @property
    def requests_auto_increment(self) -> bool:
        """Check the -1 length sentinel."""
        if self.length is None:
            return False
        return str(self.length).strip() == str(AUTO_INCREMENT_LENGTH)

    @property
    def is_required(self) -> bool:
        """Primary keys are always NOT NULL."""
        return self.primary_key or not self.nullable


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["Column"]
