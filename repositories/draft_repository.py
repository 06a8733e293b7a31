# -*- coding: utf-8 -*-
"""
Draft Repository - JSON file persistence for wizard drafts.

Entries are stored under a key, one file for all keys:

    {"tenancy-wizard-store": {"state": {...}, "version": 0}}

Persistence is best effort: an unreadable file reads as "no draft" and a
failed write is logged, never raised.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from app.config import Config
from utils.logger import get_logger

logger = get_logger(__name__)

STORE_VERSION = 0


class DraftRepository:
    """Repository for persisted wizard drafts."""

    def __init__(self, path: Union[str, Path] = None):
        self.path = Path(path) if path else Path(Config.DRAFT_STORE_PATH)

    def load(self, key: str = None) -> Optional[Dict[str, Any]]:
        """Return the stored state for key, or None."""
        key = key or Config.DRAFT_STORE_KEY
        entry = self._read_all().get(key)
        if not isinstance(entry, dict):
            return None
        if entry.get("version", STORE_VERSION) != STORE_VERSION:
            logger.warning(f"Discarding draft '{key}' with unsupported version {entry.get('version')}")
            return None
        state = entry.get("state")
        return state if isinstance(state, dict) else None

    def save(self, data: Dict[str, Any], key: str = None) -> bool:
        """Store state under key. Returns False when the write failed."""
        key = key or Config.DRAFT_STORE_KEY
        store = self._read_all()
        store[key] = {"state": data, "version": STORE_VERSION}
        return self._write_all(store)

    def clear(self, key: str = None) -> bool:
        key = key or Config.DRAFT_STORE_KEY
        store = self._read_all()
        if key not in store:
            return True
        del store[key]
        return self._write_all(store)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable draft store {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, store: Dict[str, Any]) -> bool:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(store, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving draft store {self.path}: {e}")
            return False
