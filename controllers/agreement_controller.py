# -*- coding: utf-8 -*-
"""
Agreement Controller
====================
Backs the tenant's "My Agreements" list and the agreement detail page.

Signing uses the same two-phase flow and signature policy as the wizard,
but success does not navigate anywhere and failures never touch a wizard
draft: every failure, a missing agreement included, is one message.
"""

from typing import List, Optional

from PyQt5.QtCore import pyqtSignal

from controllers.base_controller import BaseController, LEVEL_ERROR, LEVEL_SUCCESS
from models.agreement import Agreement, AgreementStatus
from models.user import User
from services.agreement_api_service import AgreementApiService
from services.error_mapper import map_exception
from services.exceptions import ErrorKind, classify_error
from services.translation_manager import tr
from services.wizard.signature_validator import SignatureCheck, legal_full_name
from services.wizard.signing_flow import SigningFlow
from utils.logger import get_logger

logger = get_logger(__name__)

MY_AGREEMENTS_LIMIT = 100


class AgreementController(BaseController):
    """Controller for viewing and signing a single agreement."""

    agreement_changed = pyqtSignal(object)
    agreements_loaded = pyqtSignal(list)
    confirmation_requested = pyqtSignal()

    def __init__(self, current_user: User,
                 agreement_service: Optional[AgreementApiService] = None,
                 parent=None):
        super().__init__(parent)
        self.current_user = current_user
        self._agreements = agreement_service or AgreementApiService()

        self.agreement: Optional[Agreement] = None
        self.agreements: List[Agreement] = []
        self.signing = SigningFlow()
        self.is_signing = False

    # ==================== Loading ====================

    def load_my_agreements(self) -> bool:
        """Agreements where the current user is the tenant."""
        operation = "load_my_agreements"
        self._emit_started(operation)
        try:
            agreements = self._agreements.get_agreements(
                tenant_id=self.current_user.id, limit=MY_AGREEMENTS_LIMIT
            )
        except Exception as e:
            self._emit_error(operation, map_exception(e, context=operation, fallback_key="agreement.list_failed"))
            return False

        self.agreements = agreements
        self.agreements_loaded.emit(agreements)
        self._emit_completed(operation, True)
        return True

    def load_agreement(self, agreement_id: str) -> bool:
        operation = "load_agreement"
        self._emit_started(operation)
        self.signing.clear()
        try:
            agreement = self._agreements.get_agreement_by_id(agreement_id)
        except Exception as e:
            self.agreement = None
            self.agreement_changed.emit(None)
            self._emit_error(operation, self._failure_message(e, operation, "agreement.load_failed"))
            return False

        self._set_agreement(agreement)
        self._emit_completed(operation, True)
        return True

    def _set_agreement(self, agreement: Agreement):
        self.agreement = agreement
        if self.has_user_signed():
            signer = agreement.find_signer(self.current_user.id)
            self.signing.prefill(signer.name or legal_full_name(self.current_user))
        self.agreement_changed.emit(agreement)

    # ==================== Status ====================

    def has_user_signed(self) -> bool:
        if self.agreement is None:
            return False
        return self.agreement.has_signed(self.current_user.id)

    def is_user_signer(self) -> bool:
        return self.agreement is not None and self.agreement.is_signer(self.current_user.id)

    def is_agreement_tenant(self) -> bool:
        return self.agreement is not None and self.agreement.tenant_id == self.current_user.id

    def display_status(self) -> AgreementStatus:
        """
        Status shown to the current user.

        The agreement's tenant sees pending_signature until they have signed,
        whatever the stored status; everyone else sees the stored status.
        """
        if self.agreement is None:
            return AgreementStatus.DRAFT
        if self.current_user.is_tenant and self.is_agreement_tenant() and not self.has_user_signed():
            return AgreementStatus.PENDING_SIGNATURE
        return self.agreement.status

    def can_sign(self) -> bool:
        return (
            self.current_user.is_tenant
            and self.is_agreement_tenant()
            and not self.has_user_signed()
            and not self.is_signing
        )

    # ==================== Signing ====================

    def set_signature_name(self, name: str):
        if self.can_sign():
            self.signing.set_typed_name(name)

    def set_has_read_agreement(self, checked: bool):
        if self.can_sign():
            self.signing.set_has_read_confirmation(checked)

    def proceed_to_sign(self) -> Optional[SignatureCheck]:
        if not self.can_sign():
            return None
        check = self.signing.request_confirmation(legal_full_name(self.current_user))
        if check.is_valid:
            self.confirmation_requested.emit()
        else:
            self._notify(LEVEL_ERROR, check.message())
        return check

    def cancel_signing(self):
        self.signing.cancel()

    def confirm_signing(self) -> bool:
        """Send the confirmed signature. The page stays where it is."""
        if self.is_signing or not self.signing.is_awaiting_confirmation or not self.can_sign():
            return False

        operation = "sign_agreement"
        name, method = self.signing.confirm()
        self.is_signing = True
        self._emit_started(operation)
        try:
            agreement = self._agreements.sign_agreement(
                self.agreement.id, self.current_user.id, name, method
            )
        except Exception as e:
            self.signing.collapse()
            self._emit_error(operation, self._failure_message(e, operation, "agreement.sign_failed"))
            return False
        finally:
            self.is_signing = False

        self.signing.mark_signed()
        self._set_agreement(agreement)
        self._notify(LEVEL_SUCCESS, tr("agreement.sign_success"))
        self._emit_completed(operation, True)
        return True

    @staticmethod
    def _failure_message(error: Exception, operation: str, fallback_key: str) -> str:
        if classify_error(error) == ErrorKind.NOT_FOUND:
            logger.warning(f"{operation}: agreement not found")
            return tr("agreement.not_found")
        return map_exception(error, context=operation, fallback_key=fallback_key)
