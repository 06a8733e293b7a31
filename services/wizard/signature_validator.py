# -*- coding: utf-8 -*-
"""
Signature policy check.

A typed signature is accepted only when the signer confirmed reading the
agreement and typed their legal name exactly (case-sensitive, surrounding
whitespace ignored).
"""

from enum import Enum
from typing import Optional

from models.user import User
from services.translation_manager import tr


class SignatureCheck(Enum):
    VALID = "valid"
    MISSING_CONSENT = "missing_consent"
    NAME_MISMATCH = "name_mismatch"

    @property
    def is_valid(self) -> bool:
        return self is SignatureCheck.VALID

    def message(self) -> str:
        """User-facing message for a failed check; empty when valid."""
        if self is SignatureCheck.MISSING_CONSENT:
            return tr("signature.error.missing_consent")
        if self is SignatureCheck.NAME_MISMATCH:
            return tr("signature.error.name_mismatch")
        return ""


def legal_full_name(user: Optional[User]) -> str:
    """First and last name joined by one space."""
    if user is None:
        return ""
    return f"{user.first_name or ''} {user.last_name or ''}"


def validate_signature(
    typed_name: Optional[str],
    has_read_confirmation: bool,
    legal_name: str
) -> SignatureCheck:
    """
    Decide whether a signature attempt is acceptable.

    Consent is checked before the name. An empty typed name never matches.
    """
    if not has_read_confirmation:
        return SignatureCheck.MISSING_CONSENT

    typed = (typed_name or "").strip()
    if not typed or typed != (legal_name or "").strip():
        return SignatureCheck.NAME_MISMATCH

    return SignatureCheck.VALID
