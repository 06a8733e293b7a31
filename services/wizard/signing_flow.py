# -*- coding: utf-8 -*-
"""
Two-phase signing sub-machine.

    AWAITING_INPUT --request_confirmation (valid)--> AWAITING_CONFIRMATION
    AWAITING_CONFIRMATION --cancel--> AWAITING_INPUT (inputs kept)
    AWAITING_CONFIRMATION --confirm + server ok--> SIGNED

No server call is made here; the owner calls the sign endpoint between
confirm() and mark_signed() / collapse().
"""

from enum import Enum
from typing import Optional, Tuple

from app.config import Config
from services.wizard.signature_validator import SignatureCheck, validate_signature
from utils.logger import get_logger

logger = get_logger(__name__)


class SigningPhase(Enum):
    AWAITING_INPUT = "awaiting_input"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    SIGNED = "signed"


class SigningFlow:
    """Holds the transient signature attempt (typed name + consent)."""

    def __init__(self, method: Optional[str] = None):
        self.method = method or Config.SIGNATURE_METHOD
        self.phase = SigningPhase.AWAITING_INPUT
        self.typed_name = ""
        self.has_read_confirmation = False

    @property
    def is_awaiting_confirmation(self) -> bool:
        return self.phase == SigningPhase.AWAITING_CONFIRMATION

    def set_typed_name(self, name: str):
        self.typed_name = name or ""

    def set_has_read_confirmation(self, checked: bool):
        self.has_read_confirmation = bool(checked)

    def request_confirmation(self, legal_name: str) -> SignatureCheck:
        """
        Phase A: validate the inputs.

        A valid attempt moves AWAITING_INPUT to AWAITING_CONFIRMATION; any
        failure, or any other starting phase, leaves the phase unchanged.
        """
        check = validate_signature(self.typed_name, self.has_read_confirmation, legal_name)
        if check.is_valid and self.phase == SigningPhase.AWAITING_INPUT:
            self.phase = SigningPhase.AWAITING_CONFIRMATION
        elif self.phase == SigningPhase.SIGNED:
            logger.debug("Confirmation requested after signing, ignored")
        return check

    def cancel(self):
        """Close the confirmation without touching the inputs."""
        if self.is_awaiting_confirmation:
            self.phase = SigningPhase.AWAITING_INPUT

    def confirm(self) -> Tuple[str, str]:
        """
        Phase B: return the (name, method) to send to the server.

        Raises:
            RuntimeError: when no validated attempt is awaiting confirmation
        """
        if not self.is_awaiting_confirmation:
            raise RuntimeError("No signature is awaiting confirmation")
        return self.typed_name.strip(), self.method

    def mark_signed(self):
        """Server accepted the signature; drop the local inputs."""
        self.phase = SigningPhase.SIGNED
        self.typed_name = ""
        self.has_read_confirmation = False

    def collapse(self):
        """Server rejected the signature; back to input, inputs kept."""
        self.phase = SigningPhase.AWAITING_INPUT

    def prefill(self, name: str):
        """Show an existing signature; display only."""
        self.phase = SigningPhase.SIGNED
        self.typed_name = name or ""
        self.has_read_confirmation = True

    def clear(self):
        self.phase = SigningPhase.AWAITING_INPUT
        self.typed_name = ""
        self.has_read_confirmation = False
