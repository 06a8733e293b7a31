# -*- coding: utf-8 -*-
"""
Repository Layer - local persistence.
"""

from .draft_repository import DraftRepository

__all__ = [
    "DraftRepository",
]
