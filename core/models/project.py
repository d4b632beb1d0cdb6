# ============================================================================
# PROJECT MODEL
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core model - Model graph root
# PURPOSE: Root element owning data models; source of the database name
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Project
# DEPENDENCIES: pydantic
# ============================================================================
"""
Project Model

The root of the model graph. Carries the `database` tag (defaulting to the
normalized project name) and the author written into db_create.sql.
"""

from typing import List, Literal
from pydantic import Field

from core.contracts import ElementData
from core.models.data_model import DataModel


class Project(ElementData):
    """
    Root of an ER model.

    Usage:
        project = Project.model_validate_json(path.read_text())
    """

    kind: Literal["project"] = "project"

    author: str = Field(default="")
    owned_elements: List[DataModel] = Field(default_factory=list)


__all__ = ["Project"]
