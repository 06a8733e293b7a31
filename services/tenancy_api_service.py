# -*- coding: utf-8 -*-
"""
Tenancy API Service - Handles tenancy operations via REST API.

Connects to /api/tenancies endpoint.
"""

from typing import Any, Dict, List, Optional

from models.tenancy import DepositDetails, RentDetails, Tenancy
from services.api_client import RentalApiClient, get_api_client
from services.exceptions import ApiException
from utils.logger import get_logger

logger = get_logger(__name__)


class TenancyApiService:
    """Service for tenancy operations via REST API."""

    ENDPOINT = "/api/tenancies"

    def __init__(self, api_client: Optional[RentalApiClient] = None):
        self._api = api_client or get_api_client()

    def create_tenancy(
        self,
        unit_id: str,
        owner_id: str,
        tenant_id: str,
        agreement_id: str,
        rent: RentDetails,
        deposit: Optional[DepositDetails] = None
    ) -> Tenancy:
        """
        Create a tenancy linked to a signed agreement.

        Args:
            unit_id: Unit being let
            owner_id: Landlord user id
            tenant_id: Tenant user id
            agreement_id: Agreement created by the wizard
            rent: Rent terms
            deposit: Optional deposit

        Returns:
            The created Tenancy
        """
        payload: Dict[str, Any] = {
            "unitId": unit_id,
            "ownerId": owner_id,
            "tenantId": tenant_id,
            "agreementId": agreement_id,
            "rent": rent.to_dict(),
        }
        if deposit is not None:
            payload["deposit"] = deposit.to_dict()

        logger.info(f"Creating tenancy: unit={unit_id}, tenant={tenant_id}, agreement={agreement_id}")
        data = self._api.post(self.ENDPOINT, json_data=payload)
        if isinstance(data, dict) and isinstance(data.get("tenancy"), dict):
            data = data["tenancy"]
        if not data:
            raise ApiException("Tenancy was not returned", status_code=500, context="create tenancy")

        tenancy = Tenancy.from_dict(data)
        logger.info(f"Tenancy created: {tenancy.id}")
        return tenancy

    def get_tenancies(
        self,
        owner_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
        unit_id: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Tenancy]:
        """List tenancies with optional filters."""
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if owner_id:
            params["ownerId"] = owner_id
        if tenant_id:
            params["tenantId"] = tenant_id
        if unit_id:
            params["unitId"] = unit_id
        if status:
            params["status"] = status

        data = self._api.get(self.ENDPOINT, params=params)
        if isinstance(data, dict):
            data = data.get("tenancies") or data.get("items") or []
        return [Tenancy.from_dict(item) for item in data or []]
