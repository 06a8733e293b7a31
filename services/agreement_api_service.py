# -*- coding: utf-8 -*-
"""
Agreement API Service - create, fetch and sign agreements.

Connects to the /api/agreements endpoints. Stateless: every call is a single
request/response and failures propagate as ApiException / NetworkException.
"""

from typing import Any, Dict, List, Optional

from models.agreement import Agreement, AgreementStatus, Clause
from models.tenancy import AgreementFormData
from services.api_client import RentalApiClient, get_api_client
from services.exceptions import ApiException
from utils.logger import get_logger

logger = get_logger(__name__)


class AgreementApiService:
    """Agreement resource operations."""

    ENDPOINT = "/api/agreements"

    def __init__(self, api_client: Optional[RentalApiClient] = None):
        self._api = api_client or get_api_client()

    def create_agreement(self, payload: Dict[str, Any]) -> Agreement:
        """
        Create an agreement.

        Args:
            payload: body built by build_create_payload()

        Returns:
            The created Agreement
        """
        logger.info(f"Creating agreement (tenancyId={payload.get('tenancyId')})")
        data = self._api.post(self.ENDPOINT, json_data=payload)
        agreement = self._to_agreement(data, "create agreement")
        logger.info(f"Agreement created: {agreement.id}")
        return agreement

    def get_agreement_by_id(self, agreement_id: str) -> Agreement:
        """Fetch one agreement; a missing resource raises ApiException(404)."""
        data = self._api.get(f"{self.ENDPOINT}/{agreement_id}")
        return self._to_agreement(data, f"agreement {agreement_id}")

    def sign_agreement(
        self,
        agreement_id: str,
        user_id: str,
        name: str,
        method: str = "manual"
    ) -> Agreement:
        """
        Record a signature for user_id.

        The server stamps signedAt and moves the agreement to "signed" once
        the last outstanding signer has signed.
        """
        payload = {"userId": user_id, "name": name, "method": method}
        logger.info(f"Signing agreement {agreement_id} as {user_id} ({method})")
        data = self._api.post(f"{self.ENDPOINT}/{agreement_id}/sign", json_data=payload)
        return self._to_agreement(data, f"agreement {agreement_id}")

    def get_agreements(
        self,
        tenancy_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> List[Agreement]:
        """List agreements, optionally filtered by tenancy, tenant or status."""
        params = {"page": page, "limit": limit}
        if tenancy_id:
            params["tenancyId"] = tenancy_id
        if tenant_id:
            params["tenantId"] = tenant_id
        if status:
            params["status"] = status

        data = self._api.get(self.ENDPOINT, params=params)
        if isinstance(data, dict):
            data = data.get("agreements") or data.get("items") or []
        return [Agreement.from_dict(item) for item in data or []]

    @staticmethod
    def build_create_payload(
        form_data: AgreementFormData,
        created_by: str,
        owner_id: str,
        tenant_id: str,
        unit_id: str,
        tenancy_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the POST /api/agreements body.

        Clauses whose text is blank are dropped. Without a tenancy id the
        tenancy is described inline, since the tenancy itself is created only
        after the agreement has been signed.
        """
        clauses = [
            Clause(text=c.text.strip(), key=c.key).to_dict()
            for c in form_data.clauses
            if c.text and c.text.strip()
        ]

        payload: Dict[str, Any] = {
            "clauses": clauses,
            "templateName": form_data.template_name,
            "stateCode": form_data.state_code,
            "createdBy": created_by,
            "status": AgreementStatus.PENDING_SIGNATURE.value,
            "signers": [],
        }

        if tenancy_id:
            payload["tenancyId"] = tenancy_id
        else:
            payload["tenancyData"] = {
                "ownerId": owner_id,
                "tenantId": tenant_id,
                "unitId": unit_id,
                "rent": form_data.rent.to_dict(),
                "deposit": form_data.deposit.to_dict() if form_data.deposit else None,
            }

        return payload

    @staticmethod
    def _to_agreement(data: Any, what: str) -> Agreement:
        if isinstance(data, dict) and isinstance(data.get("agreement"), dict):
            data = data["agreement"]
        if not data:
            raise ApiException(f"Not found: {what}", status_code=404, context=what)
        return Agreement.from_dict(data)
