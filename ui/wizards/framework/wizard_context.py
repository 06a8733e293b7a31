# -*- coding: utf-8 -*-
"""
Wizard Context - session-scoped state behind a wizard.

The context is plain data handed to its controller; it is never a global.
Persistence goes through `to_dict()` / `from_dict()` only.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional
import uuid


class WizardContext(ABC):
    """
    Base class for wizard state.

    Subclasses implement `_reset_fields()` and `from_dict()` and extend
    `to_dict()`.

    `generation` increases on every reset. A caller that captured it before
    a resource call can tell whether the draft it was working on survived.
    """

    def __init__(self):
        self.wizard_id: str = str(uuid.uuid4())
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = self.created_at
        self.user_id: Optional[str] = None
        self.generation: int = 0

    def touch(self):
        self.updated_at = datetime.now()

    def reset(self):
        """Drop all wizard data and open a new draft generation."""
        self._reset_fields()
        self.wizard_id = str(uuid.uuid4())
        self.generation += 1
        self.created_at = datetime.now()
        self.updated_at = self.created_at

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    @abstractmethod
    def _reset_fields(self):
        """Restore wizard-specific fields to their initial values."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wizard_id": self.wizard_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "user_id": self.user_id,
            "generation": self.generation,
        }

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WizardContext':
        """Rebuild a context from `to_dict()` output."""

    @staticmethod
    def _restore_base_fields(context: 'WizardContext', data: Dict[str, Any]):
        """
        Copy the shared fields onto `context`.

        Raises ValueError for malformed timestamps or generation so the
        caller can discard the whole draft.
        """
        context.wizard_id = data.get("wizard_id") or context.wizard_id
        context.user_id = data.get("user_id")
        context.generation = int(data.get("generation") or 0)
        if data.get("created_at"):
            context.created_at = datetime.fromisoformat(data["created_at"])
        if data.get("updated_at"):
            context.updated_at = datetime.fromisoformat(data["updated_at"])
