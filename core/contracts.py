# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Foundation - Core enums and base contracts
# PURPOSE: Define element kinds, tag kinds, severities and the tagged element contract
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ElementKind, TagKind, Severity, DocumentationMode, Tag, ElementData
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the DDL generator.

These define the shapes every model element shares:
- A closed set of element kinds (the discriminant for traversal)
- Tags (typed key/value annotations attached to elements)
- The tagged element contract (id, name, documentation, tags)

Element-specific models in core.models inherit from ElementData.
"""

import uuid
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_SCHEMA = "public"

# Column length marker requesting an auto-increment (serial) integer
AUTO_INCREMENT_LENGTH = -1


# ============================================================================
# ENUMS
# ============================================================================

class ElementKind(str, Enum):
    """Discriminant for model graph elements."""
    PROJECT = "project"
    DATA_MODEL = "data_model"
    DIAGRAM = "diagram"
    ENTITY = "entity"
    COLUMN = "column"


class TagKind(str, Enum):
    """
    Kinds of annotations a modeler can attach to an element.

    STRING tags carry overrides (table, column, schema, prefix, database,
    default, enum). BOOLEAN/NUMBER tags are used together for index
    membership. REFERENCE tags point at another tag and carry an opaque
    SQL body as their value.
    """
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    REFERENCE = "reference"
    HIDDEN = "hidden"


class Severity(str, Enum):
    """Diagnostic severity."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DocumentationMode(str, Enum):
    """
    How an entity's documentation text is rendered.

    COMMENT      -> COMMENT ON TABLE
    SEED_INSERTS -> one INSERT per documentation line (pipe-delimited)
    NONE         -> entity has no documentation
    """
    NONE = "none"
    COMMENT = "comment"
    SEED_INSERTS = "seed_inserts"


# ============================================================================
# TAGS
# ============================================================================

class Tag(BaseModel):
    """
    A typed annotation attached to a model element.

    The meaning of value/checked/number depends on the tag name:
        table/column/schema/prefix/database/default/enum -> value
        index -> value = index name, number = position, checked = DESC
        reference tags -> value = SQL body, reference = target tag
    """
    name: str = Field(..., description="Annotation key, e.g. 'table' or 'index'")
    kind: TagKind = Field(default=TagKind.STRING)
    value: str = Field(default="")
    checked: bool = Field(default=False)
    number: float = Field(default=0)
    reference: Optional["Tag"] = Field(
        default=None,
        description="Referenced tag (REFERENCE kind only)"
    )

    def targets(self, marker: str) -> bool:
        """True if this is a reference tag pointing directly at `marker`."""
        return (
            self.kind == TagKind.REFERENCE
            and self.reference is not None
            and self.reference.name == marker
        )

    def targets_through(self, marker: str) -> bool:
        """True if this reference tag's target itself references `marker`."""
        return (
            self.kind == TagKind.REFERENCE
            and self.reference is not None
            and self.reference.reference is not None
            and self.reference.reference.name == marker
        )


Tag.model_rebuild()


# ============================================================================
# BASE ELEMENT CONTRACT
# ============================================================================

class ElementData(BaseModel):
    """
    Essential identity shared by every model element.
    """
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = Field(default="")
    documentation: str = Field(default="")
    tags: List[Tag] = Field(default_factory=list)

    model_config = {"frozen": False}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DEFAULT_SCHEMA",
    "AUTO_INCREMENT_LENGTH",
    "ElementKind",
    "TagKind",
    "Severity",
    "DocumentationMode",
    "Tag",
    "ElementData",
]
