# -*- coding: utf-8 -*-
"""
User API Service - user lookups via /api/users.
"""

from typing import Any, Dict, List, Optional

from models.user import User
from services.api_client import RentalApiClient, get_api_client
from utils.logger import get_logger

logger = get_logger(__name__)


class UserApiService:
    """Read-only user lookups (tenant picker)."""

    ENDPOINT = "/api/users"

    def __init__(self, api_client: Optional[RentalApiClient] = None):
        self._api = api_client or get_api_client()

    def get_users(
        self,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[User]:
        """List users with optional role / active / search filters."""
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if role:
            params["role"] = role
        if is_active is not None:
            params["isActive"] = "true" if is_active else "false"
        if search:
            params["search"] = search

        data = self._api.get(self.ENDPOINT, params=params)
        if isinstance(data, dict):
            data = data.get("users") or data.get("items") or []

        users = [User.from_dict(item) for item in data or []]
        logger.debug(f"Fetched {len(users)} users (role={role})")
        return users
