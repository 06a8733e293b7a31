# -*- coding: utf-8 -*-
"""
Tenancy entity model and the agreement form data collected by the wizard.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.agreement import Clause
from models.user import normalize_id


@dataclass
class RentDetails:
    """Rent terms entered in step 2."""
    amount: float = 0
    cycle: str = "monthly"  # monthly, quarterly, yearly
    due_date_day: Optional[int] = 1  # 1-28
    utilities_included: Optional[bool] = False

    def to_dict(self) -> Dict[str, Any]:
        data = {"amount": self.amount, "cycle": self.cycle}
        if self.due_date_day is not None:
            data["dueDateDay"] = self.due_date_day
        if self.utilities_included is not None:
            data["utilitiesIncluded"] = self.utilities_included
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RentDetails":
        return cls(
            amount=data.get("amount", 0),
            cycle=data.get("cycle", "monthly"),
            due_date_day=data.get("dueDateDay", data.get("due_date_day")),
            utilities_included=data.get("utilitiesIncluded", data.get("utilities_included")),
        )


@dataclass
class DepositDetails:
    """Security deposit entered in step 2."""
    amount: Optional[float] = 0
    status: str = "upcoming"  # upcoming, held, returned, disputed

    def to_dict(self) -> Dict[str, Any]:
        data = {"status": self.status}
        if self.amount is not None:
            data["amount"] = self.amount
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DepositDetails":
        return cls(
            amount=data.get("amount"),
            status=data.get("status") or "upcoming",
        )


@dataclass
class AgreementFormData:
    """Rent, deposit and clause data carried across wizard steps."""
    rent: RentDetails = field(default_factory=RentDetails)
    deposit: Optional[DepositDetails] = field(default_factory=DepositDetails)
    clauses: List[Clause] = field(default_factory=list)
    template_name: Optional[str] = None
    state_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rent": self.rent.to_dict(),
            "deposit": self.deposit.to_dict() if self.deposit else None,
            "clauses": [c.to_dict() for c in self.clauses],
            "templateName": self.template_name,
            "stateCode": self.state_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgreementFormData":
        deposit = data.get("deposit")
        return cls(
            rent=RentDetails.from_dict(data.get("rent") or {}),
            deposit=DepositDetails.from_dict(deposit) if deposit else None,
            clauses=[Clause.from_dict(c) for c in data.get("clauses") or []],
            template_name=data.get("templateName"),
            state_code=data.get("stateCode"),
        )


@dataclass
class Tenancy:
    """Finalized link between a unit, its owner and a tenant."""
    id: str
    unit_id: str = ""
    owner_id: str = ""
    tenant_id: str = ""
    agreement_id: Optional[str] = None
    agreement_pdf_url: Optional[str] = None
    rent: Optional[RentDetails] = None
    deposit: Optional[DepositDetails] = None
    status: str = "upcoming"  # upcoming, active, terminated, pendingRenewal
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tenancy":
        agreement = data.get("agreement") or {}
        rent = data.get("rent")
        deposit = data.get("deposit")
        return cls(
            id=normalize_id(data.get("_id", data.get("id"))) or "",
            unit_id=normalize_id(data.get("unitId")) or "",
            owner_id=normalize_id(data.get("ownerId")) or "",
            tenant_id=normalize_id(data.get("tenantId")) or "",
            agreement_id=normalize_id(agreement.get("agreementId")),
            agreement_pdf_url=agreement.get("pdfUrl"),
            rent=RentDetails.from_dict(rent) if rent else None,
            deposit=DepositDetails.from_dict(deposit) if deposit else None,
            status=data.get("status", "upcoming") or "upcoming",
            created_at=data.get("createdAt"),
        )
