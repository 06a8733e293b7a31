# -*- coding: utf-8 -*-
"""
PropertyUnit API Service - Handles property unit lookups via REST API.

Connects to /api/units endpoint.
"""

from typing import List, Optional

from models.unit import Unit
from services.api_client import RentalApiClient, get_api_client
from utils.logger import get_logger

logger = get_logger(__name__)


class PropertyUnitApiService:
    """
    Read-only unit lookups used by the tenancy wizard's first step.
    """

    ENDPOINT = "/api/units"

    def __init__(self, api_client: Optional[RentalApiClient] = None):
        self._api = api_client or get_api_client()

    def get_units(self, owner_id: Optional[str] = None) -> List[Unit]:
        """
        Get units, optionally restricted to one owner.

        Args:
            owner_id: Landlord whose units are listed

        Returns:
            List of Unit objects
        """
        params = {"ownerId": owner_id} if owner_id else None
        data = self._api.get(self.ENDPOINT, params=params)

        if isinstance(data, dict):
            data = data.get("units") or data.get("items") or []

        units = [Unit.from_dict(item) for item in data or []]
        logger.info(f"Fetched {len(units)} units (owner={owner_id})")
        return units
