"""
Repository layer for the VO Foundry views service.

All persistence lives here and ONLY here.
"""

from backend.repos.view_repo import ViewRepo, get_view_repo

__all__ = [
    "ViewRepo",
    "get_view_repo",
]
