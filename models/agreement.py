# -*- coding: utf-8 -*-
"""
Agreement entity model.

Agreements are owned by the backend; the client only creates them, reads
them back and records signatures through the API.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from models.user import normalize_id


class AgreementStatus(str, Enum):
    """Lifecycle: draft -> pending_signature -> signed (or cancelled)."""
    DRAFT = "draft"
    PENDING_SIGNATURE = "pending_signature"
    SIGNED = "signed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AgreementStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.DRAFT


@dataclass
class Clause:
    """A single agreement clause."""
    text: str
    key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"text": self.text}
        if self.key is not None:
            data["key"] = self.key
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Clause":
        return cls(text=data.get("text", "") or "", key=data.get("key"))


@dataclass
class Signature:
    """Signer entry; no signed_at means the signature is still pending."""
    user_id: str
    name: Optional[str] = None
    method: Optional[str] = None  # esign, otp, manual
    signed_at: Optional[str] = None

    @property
    def is_signed(self) -> bool:
        return bool(self.signed_at)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Signature":
        return cls(
            user_id=normalize_id(data.get("userId", data.get("user_id"))) or "",
            name=data.get("name"),
            method=data.get("method"),
            signed_at=data.get("signedAt", data.get("signed_at")),
        )


@dataclass
class Agreement:
    """Server-side agreement document."""

    id: str
    status: AgreementStatus = AgreementStatus.DRAFT
    clauses: List[Clause] = field(default_factory=list)
    signers: List[Signature] = field(default_factory=list)
    pdf_url: Optional[str] = None
    version: Optional[int] = None
    template_name: Optional[str] = None
    state_code: Optional[str] = None
    created_by: Optional[str] = None
    tenancy_id: Optional[str] = None
    tenant_id: Optional[str] = None
    last_signed_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_fully_signed(self) -> bool:
        return self.status == AgreementStatus.SIGNED

    def find_signer(self, user_id: str) -> Optional[Signature]:
        """Return the signer entry for user_id, if any."""
        wanted = str(user_id)
        for signer in self.signers:
            if signer.user_id == wanted:
                return signer
        return None

    def is_signer(self, user_id: str) -> bool:
        return self.find_signer(user_id) is not None

    def has_signed(self, user_id: str) -> bool:
        """True when user_id appears among the signers with a signedAt timestamp."""
        signer = self.find_signer(user_id)
        return signer is not None and signer.is_signed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Agreement":
        """Create Agreement from the backend representation."""
        return cls(
            id=normalize_id(data.get("_id", data.get("id"))) or "",
            status=AgreementStatus.parse(data.get("status")),
            clauses=[Clause.from_dict(c) for c in data.get("clauses") or []],
            signers=[Signature.from_dict(s) for s in data.get("signers") or []],
            pdf_url=data.get("pdfUrl"),
            version=data.get("version"),
            template_name=data.get("templateName"),
            state_code=data.get("stateCode"),
            created_by=normalize_id(data.get("createdBy")),
            tenancy_id=normalize_id(data.get("tenancyId")),
            tenant_id=normalize_id(data.get("tenantId")),
            last_signed_at=data.get("lastSignedAt"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )
