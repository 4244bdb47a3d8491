"""
Pydantic models for the VO Foundry views service.

All request/response shapes defined here. No imports from repos or routes.
"""

from backend.models.catalog import Actor, Bin, Catalog, Media, Scene, Take
from backend.models.view import (
    AuditResponse,
    CustomViewModel,
    FilterRuleModel,
    LevelModel,
    SaveViewRequest,
    TreeRequest,
    TreeResponse,
    ViewResponse,
    WarningModel,
)

__all__ = [
    # Catalog models
    "Actor",
    "Bin",
    "Catalog",
    "Media",
    "Scene",
    "Take",
    # View models
    "LevelModel",
    "FilterRuleModel",
    "SaveViewRequest",
    "CustomViewModel",
    "ViewResponse",
    "WarningModel",
    "TreeRequest",
    "TreeResponse",
    "AuditResponse",
]
