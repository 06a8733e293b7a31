# -*- coding: utf-8 -*-
"""
Base Controller
===============
Shared plumbing for the wizard and agreement controllers.

Every user-facing message leaves through the single `notification` signal,
so a failure is reported exactly once whatever path produced it.
"""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, Set, TypeVar

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

# Notification levels
LEVEL_SUCCESS = "success"
LEVEL_INFO = "info"
LEVEL_ERROR = "error"


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a terminal controller operation."""
    success: bool
    data: Optional[T] = None
    message: str = ""
    errors: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, data: T = None, message: str = "") -> 'OperationResult[T]':
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, errors: List[str] = None) -> 'OperationResult[T]':
        return cls(success=False, message=message, errors=list(errors or []))


class BaseController(QObject):
    """
    Base class for resource-calling controllers.

    Operations are bracketed by `_emit_started` and `_emit_completed`;
    `loading_changed` flips when the first operation starts and when the
    last running one finishes.
    """

    operation_started = pyqtSignal(str)  # operation name
    operation_completed = pyqtSignal(str, bool)  # operation name, success
    notification = pyqtSignal(str, str)  # level, message
    loading_changed = pyqtSignal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._running: Set[str] = set()
        self._last_error = ""

    @property
    def is_loading(self) -> bool:
        return bool(self._running)

    @property
    def last_error(self) -> str:
        return self._last_error

    def _notify(self, level: str, message: str):
        if level == LEVEL_ERROR:
            self._last_error = message
            logger.error(f"{self.__class__.__name__}: {message}")
        self.notification.emit(level, message)

    def _emit_started(self, operation: str):
        was_loading = self.is_loading
        self._running.add(operation)
        logger.debug(f"{self.__class__.__name__}.{operation} started")
        self.operation_started.emit(operation)
        if not was_loading:
            self.loading_changed.emit(True)

    def _emit_completed(self, operation: str, success: bool):
        was_running = operation in self._running
        self._running.discard(operation)
        if success:
            self._last_error = ""
        self.operation_completed.emit(operation, success)
        if was_running and not self.is_loading:
            self.loading_changed.emit(False)

    def _emit_error(self, operation: str, error: str):
        """Report a failed operation with exactly one message."""
        self._notify(LEVEL_ERROR, error)
        self._emit_completed(operation, False)
