# -*- coding: utf-8 -*-
"""
Tenancy Wizard Controller
=========================
Drives the five-step tenancy creation wizard:

    1 Select unit & tenant -> 2 Rent details -> 3 Clauses
      -> 4 Sign agreement -> 5 Review & create tenancy

The controller owns every network call. The draft lives in a
TenancyWizardContext and is saved to the DraftRepository after each change.

Failure policy:
- not found (unit, tenant, agreement or tenancy gone): the draft is reset to
  step 1 through _handle_not_found(), the only automatic recovery;
- anything else: one message, state unchanged, the user retries.

Each network operation has an in-flight flag that rejects repeated
submissions, and captures the draft generation before calling out. A
response that arrives after a reset belongs to a discarded draft and is
dropped.
"""

from typing import List, Optional

from PyQt5.QtCore import pyqtSignal

from app.config import Config
from controllers.base_controller import (
    BaseController, OperationResult, LEVEL_ERROR, LEVEL_INFO, LEVEL_SUCCESS
)
from models.agreement import Agreement, Clause
from models.tenancy import DepositDetails, RentDetails
from models.unit import Unit
from models.user import User
from repositories.draft_repository import DraftRepository
from services.agreement_api_service import AgreementApiService
from services.error_mapper import map_exception
from services.exceptions import ErrorKind, classify_error
from services.property_unit_api_service import PropertyUnitApiService
from services.tenancy_api_service import TenancyApiService
from services.translation_manager import tr
from services.user_api_service import UserApiService
from services.wizard.signature_validator import SignatureCheck, legal_full_name
from services.wizard.signing_flow import SigningFlow
from services.wizard.step_validator import StepValidator
from ui.wizards.tenancy.tenancy_context import TenancyWizardContext
from utils.logger import get_logger

logger = get_logger(__name__)

STEP_SELECT = StepValidator.STEP_SELECT
STEP_RENT = StepValidator.STEP_RENT
STEP_CLAUSES = StepValidator.STEP_CLAUSES
STEP_SIGN = StepValidator.STEP_SIGN
STEP_REVIEW = StepValidator.STEP_REVIEW

TENANCIES_ROUTE = "/tenancies"


class TenancyWizardController(BaseController):
    """
    Orchestrator of the tenancy creation wizard.

    Signals:
        step_changed(int): current step after any transition or reset
        agreement_changed(object): Agreement loaded, created or signed (or None)
        confirmation_requested(): a valid signature awaits explicit confirmation
        tenancy_created(object): Tenancy returned by the backend
        wizard_reset(str): reason ("discarded", "not_found", "completed")
        navigate_requested(str): route the host should open
        units_loaded(list), tenants_loaded(list): step 1 lookups
    """

    step_changed = pyqtSignal(int)
    agreement_changed = pyqtSignal(object)
    confirmation_requested = pyqtSignal()
    tenancy_created = pyqtSignal(object)
    wizard_reset = pyqtSignal(str)
    navigate_requested = pyqtSignal(str)
    units_loaded = pyqtSignal(list)
    tenants_loaded = pyqtSignal(list)

    def __init__(
        self,
        current_user: User,
        context: Optional[TenancyWizardContext] = None,
        agreement_service: Optional[AgreementApiService] = None,
        tenancy_service: Optional[TenancyApiService] = None,
        unit_service: Optional[PropertyUnitApiService] = None,
        user_service: Optional[UserApiService] = None,
        draft_repository: Optional[DraftRepository] = None,
        parent=None
    ):
        super().__init__(parent)
        self.current_user = current_user
        self.context = context or TenancyWizardContext()
        self.context.user_id = current_user.id if current_user else None

        self._agreements = agreement_service or AgreementApiService()
        self._tenancies = tenancy_service or TenancyApiService()
        self._units = unit_service or PropertyUnitApiService()
        self._users = user_service or UserApiService()
        self._drafts = draft_repository

        self.agreement: Optional[Agreement] = None
        self.units: List[Unit] = []
        self.tenants: List[User] = []
        self.signing = SigningFlow()

        self.is_loading_units = False
        self.is_loading_tenants = False
        self.is_creating_agreement = False
        self.is_loading_agreement = False
        self.is_signing = False
        self.is_creating_tenancy = False

    @property
    def step(self) -> int:
        return self.context.step

    # =========================================================================
    # Draft persistence and reconciliation
    # =========================================================================

    def restore(self):
        """
        Load the persisted draft and reconcile it with the backend.

        A draft resumed on step 4 whose agreement is not in memory is fetched
        eagerly, so an agreement deleted between sessions resets the wizard.
        """
        if self._drafts is not None:
            state = self._drafts.load()
            if state:
                try:
                    self.context = TenancyWizardContext.from_dict(state)
                    self.context.user_id = self.current_user.id if self.current_user else None
                    logger.info(f"Restored wizard draft: {self.context.get_summary()}")
                except (ValueError, TypeError, KeyError, AttributeError) as e:
                    logger.warning(f"Discarding unreadable wizard draft: {e}")
                    self.context = TenancyWizardContext()
                    self._drafts.clear()

        if self.context.step >= STEP_SIGN and not self.context.agreement_id:
            logger.warning(f"Draft on step {self.context.step} has no agreement, back to clauses")
            self.context.set_step(STEP_CLAUSES)
            self._save_draft()

        self.step_changed.emit(self.context.step)

        if self.context.step == STEP_SIGN:
            self._enter_sign_step()

    def _save_draft(self):
        if self._drafts is not None:
            self._drafts.save(self.context.to_dict())

    # =========================================================================
    # Navigation
    # =========================================================================

    def _go_to(self, step: int):
        previous = self.context.step
        self.context.set_step(step)
        self._save_draft()
        logger.info(f"Wizard step {previous} -> {step}")

        if previous == STEP_SIGN and step != STEP_SIGN:
            self.signing.clear()

        self.step_changed.emit(step)

        if step == STEP_SIGN:
            self._enter_sign_step()

    def _on_step(self, step: int, action: str) -> bool:
        if self.context.step == step:
            return True
        logger.warning(f"{action} ignored on step {self.context.step}, expected step {step}")
        return False

    def go_back(self) -> bool:
        """Step back one page (5 -> 4 -> 3 -> 2 -> 1). No network call."""
        if self.context.step <= STEP_SELECT:
            return False
        self._go_to(self.context.step - 1)
        return True

    def continue_to_review(self) -> bool:
        """4 -> 5, allowed whenever an agreement exists."""
        if self.context.step != STEP_SIGN:
            return False
        if not self.context.agreement_id:
            self._notify(LEVEL_ERROR, tr("wizard.error.no_agreement"))
            return False
        self._go_to(STEP_REVIEW)
        return True

    # =========================================================================
    # Step 1 - unit and tenant
    # =========================================================================

    def load_units(self) -> bool:
        """Load the current landlord's units."""
        if self.is_loading_units:
            return False
        operation = "load_units"
        generation = self.context.generation
        self.is_loading_units = True
        self._emit_started(operation)
        try:
            units = self._units.get_units(self.current_user.id)
        except Exception as e:
            return self._handle_failure(
                operation, e, generation, "units.load_failed", "wizard.reset.resource_not_found"
            )
        finally:
            self.is_loading_units = False

        self.units = units
        self.units_loaded.emit(units)
        self._emit_completed(operation, True)
        return True

    def load_tenants(self) -> bool:
        """Load the tenants a unit can be let to."""
        if self.is_loading_tenants:
            return False
        operation = "load_tenants"
        generation = self.context.generation
        self.is_loading_tenants = True
        self._emit_started(operation)
        try:
            tenants = self._users.get_users(role="tenant", limit=Config.TENANT_LOOKUP_LIMIT)
        except Exception as e:
            return self._handle_failure(
                operation, e, generation, "tenants.load_failed", "wizard.reset.resource_not_found"
            )
        finally:
            self.is_loading_tenants = False

        self.tenants = tenants
        self.tenants_loaded.emit(tenants)
        self._emit_completed(operation, True)
        return True

    def select_unit(self, unit: Optional[Unit]):
        self.context.set_selected_unit(unit)
        self._save_draft()

    def select_tenant(self, tenant: Optional[User]):
        self.context.set_selected_tenant(tenant)
        self._save_draft()

    def select_unit_by_id(self, unit_id: str) -> bool:
        """Select one of the loaded units; an unknown id clears the selection."""
        unit = next((u for u in self.units if u.id == unit_id), None)
        self.select_unit(unit)
        return unit is not None

    def select_tenant_by_id(self, tenant_id: str) -> bool:
        tenant = next((t for t in self.tenants if t.id == tenant_id), None)
        self.select_tenant(tenant)
        return tenant is not None

    def can_continue_from_selection(self) -> bool:
        return StepValidator.validate_step(STEP_SELECT, self.context).is_valid

    def continue_to_rent_details(self) -> bool:
        """1 -> 2, only with both a unit and a tenant selected."""
        if not self._on_step(STEP_SELECT, "continue_to_rent_details"):
            return False
        result = StepValidator.validate_step(STEP_SELECT, self.context)
        if not result.is_valid:
            logger.debug("Continue blocked: unit or tenant missing")
            return False
        self._go_to(STEP_RENT)
        return True

    # =========================================================================
    # Step 2 - rent details
    # =========================================================================

    def submit_rent_details(self, rent: RentDetails,
                            deposit: Optional[DepositDetails] = None) -> bool:
        """2 -> 3 once the rent fields pass validation. No network call."""
        if not self._on_step(STEP_RENT, "submit_rent_details"):
            return False

        result = StepValidator.validate_rent_details(rent, deposit)
        if not result.is_valid:
            self._notify(LEVEL_ERROR, result.message)
            return False

        self.context.set_form_data(rent=rent, deposit=deposit)
        self._go_to(STEP_CLAUSES)
        return True

    # =========================================================================
    # Step 3 - clauses and agreement creation
    # =========================================================================

    def initial_clauses(self) -> List[Clause]:
        """Clauses to show on step 3: the draft's, or the defaults."""
        form_data = self.context.form_data
        if form_data and form_data.clauses:
            return [Clause(text=c.text, key=c.key) for c in form_data.clauses]
        return [Clause(text=c["text"], key=c["key"]) for c in Config.DEFAULT_CLAUSES]

    def initial_template_name(self) -> str:
        form_data = self.context.form_data
        return (form_data.template_name if form_data else None) or Config.DEFAULT_TEMPLATE_NAME

    def submit_clauses(self, clauses: List[Clause], template_name: Optional[str] = None,
                       state_code: Optional[str] = None) -> bool:
        """
        3 -> 4, creating the agreement when needed.

        An existing agreement is reused only when the clauses, template name
        and state code equal the snapshot it was created from; otherwise a new
        agreement replaces it.
        A template name or state code left as None keeps the stored value.
        """
        if self.is_creating_agreement:
            logger.warning("Agreement creation already in progress")
            return False
        if not self._on_step(STEP_CLAUSES, "submit_clauses"):
            return False

        result = StepValidator.validate_clauses(clauses)
        if not result.is_valid:
            self._notify(LEVEL_ERROR, result.message)
            return False

        if not self.context.selected_unit or not self.context.selected_tenant:
            self._notify(LEVEL_ERROR, tr("wizard.error.select_unit_tenant"))
            return False

        changes = {
            "clauses": [Clause(text=c.text.strip(), key=c.key) for c in clauses if c.text.strip()],
            "template_name": template_name if template_name is not None else self.initial_template_name(),
        }
        if state_code is not None:
            changes["state_code"] = state_code
        self.context.set_form_data(**changes)
        self._save_draft()

        if self.context.agreement_is_current():
            logger.info(f"Clauses unchanged, reusing agreement {self.context.agreement_id}")
            self._go_to(STEP_SIGN)
            return True

        return self._create_agreement()

    def _create_agreement(self) -> bool:
        operation = "create_agreement"
        superseded = self.context.agreement_id
        snapshot = self.context.current_snapshot()
        payload = AgreementApiService.build_create_payload(
            self.context.form_data,
            created_by=self.current_user.id,
            owner_id=self.current_user.id,
            tenant_id=self.context.selected_tenant.id,
            unit_id=self.context.selected_unit.id,
        )

        generation = self.context.generation
        self.is_creating_agreement = True
        self._emit_started(operation)
        try:
            agreement = self._agreements.create_agreement(payload)
        except Exception as e:
            return self._handle_failure(
                operation, e, generation, "agreement.create_failed", "wizard.reset.agreement_not_found"
            )
        finally:
            self.is_creating_agreement = False

        if not self._is_current(operation, generation):
            return False

        if superseded and superseded != agreement.id:
            # Left pending on the server; nothing cancels it
            logger.warning(f"Agreement {superseded} superseded by {agreement.id}")

        self.context.set_agreement_id(agreement.id, snapshot)
        self.agreement = agreement
        self.agreement_changed.emit(agreement)
        self._notify(LEVEL_SUCCESS, tr("agreement.created"))
        self._emit_completed(operation, True)
        self._go_to(STEP_SIGN)
        return True

    # =========================================================================
    # Step 4 - signing
    # =========================================================================

    def _enter_sign_step(self):
        self.signing.clear()
        agreement_id = self.context.agreement_id
        if agreement_id and (self.agreement is None or self.agreement.id != agreement_id):
            self.load_agreement()
        else:
            self._prefill_signature()

    def load_agreement(self) -> bool:
        """Fetch the draft's agreement; a missing one resets the wizard."""
        agreement_id = self.context.agreement_id
        if not agreement_id or self.is_loading_agreement:
            return False

        operation = "load_agreement"
        generation = self.context.generation
        self.is_loading_agreement = True
        self._emit_started(operation)
        try:
            agreement = self._agreements.get_agreement_by_id(agreement_id)
        except Exception as e:
            return self._handle_failure(
                operation, e, generation, "agreement.load_failed", "wizard.reset.agreement_not_found"
            )
        finally:
            self.is_loading_agreement = False

        if not self._is_current(operation, generation):
            return False

        self.agreement = agreement
        self.agreement_changed.emit(agreement)
        self._prefill_signature()
        self._emit_completed(operation, True)
        return True

    def _prefill_signature(self):
        """Show an existing signature of the current user; never signs."""
        if self.context.step != STEP_SIGN or not self.has_user_signed():
            return
        signer = self.agreement.find_signer(self.current_user.id)
        self.signing.prefill(signer.name or legal_full_name(self.current_user))

    def has_user_signed(self) -> bool:
        if self.agreement is None or self.current_user is None:
            return False
        return self.agreement.has_signed(self.current_user.id)

    def is_agreement_fully_signed(self) -> bool:
        return self.agreement is not None and self.agreement.is_fully_signed

    def can_sign(self) -> bool:
        """True while the signing form is shown and usable."""
        return (
            self.context.step == STEP_SIGN
            and self.agreement is not None
            and not self.has_user_signed()
            and not self.is_agreement_fully_signed()
            and not self.is_signing
        )

    def signing_status_message(self) -> str:
        if self.is_agreement_fully_signed():
            return tr("agreement.status.fully_signed")
        if self.has_user_signed():
            return tr("agreement.status.already_signed")
        return tr("agreement.status.review_before_signing")

    def set_signature_name(self, name: str):
        if self.can_sign():
            self.signing.set_typed_name(name)

    def set_has_read_agreement(self, checked: bool):
        if self.can_sign():
            self.signing.set_has_read_confirmation(checked)

    def proceed_to_sign(self) -> Optional[SignatureCheck]:
        """
        Phase A: validate the typed name and consent.

        Returns None when signing is not available (already signed, no
        agreement, call in flight).
        """
        if not self.can_sign():
            logger.debug("Proceed to sign ignored: signing not available")
            return None

        check = self.signing.request_confirmation(legal_full_name(self.current_user))
        if check.is_valid:
            self.confirmation_requested.emit()
        else:
            self._notify(LEVEL_ERROR, check.message())
        return check

    def cancel_signing(self):
        """Close the confirmation; the inputs stay as typed."""
        self.signing.cancel()

    def confirm_signing(self) -> bool:
        """Phase B: send the signature, then move on to the review step."""
        if self.is_signing or not self.signing.is_awaiting_confirmation:
            return False
        if not self.can_sign():
            self.signing.collapse()
            return False

        operation = "sign_agreement"
        name, method = self.signing.confirm()
        generation = self.context.generation
        self.is_signing = True
        self._emit_started(operation)
        try:
            agreement = self._agreements.sign_agreement(
                self.context.agreement_id, self.current_user.id, name, method
            )
        except Exception as e:
            if self.context.is_current(generation):
                self.signing.collapse()
            return self._handle_failure(
                operation, e, generation, "agreement.sign_failed", "wizard.reset.agreement_not_found"
            )
        finally:
            self.is_signing = False

        if not self._is_current(operation, generation):
            return False

        self.signing.mark_signed()
        self.agreement = agreement
        self.agreement_changed.emit(agreement)
        self._notify(LEVEL_SUCCESS, tr("agreement.sign_success"))
        self._emit_completed(operation, True)
        self._go_to(STEP_REVIEW)
        return True

    # =========================================================================
    # Step 5 - create tenancy
    # =========================================================================

    def can_create_tenancy(self) -> bool:
        return (
            not self.is_creating_tenancy
            and StepValidator.validate_step(STEP_REVIEW, self.context).is_valid
        )

    def create_tenancy(self) -> OperationResult:
        """Create the tenancy; on success the draft is reset and the host navigates away."""
        if self.is_creating_tenancy:
            logger.warning("Tenancy creation already in progress")
            return OperationResult.fail("in progress")

        result = StepValidator.validate_step(STEP_REVIEW, self.context)
        if not result.is_valid:
            self._notify(LEVEL_ERROR, result.message)
            return OperationResult.fail(result.message, errors=result.errors)

        operation = "create_tenancy"
        ctx = self.context
        generation = ctx.generation
        self.is_creating_tenancy = True
        self._emit_started(operation)
        try:
            tenancy = self._tenancies.create_tenancy(
                unit_id=ctx.selected_unit.id,
                owner_id=self.current_user.id,
                tenant_id=ctx.selected_tenant.id,
                agreement_id=ctx.agreement_id,
                rent=ctx.form_data.rent,
                deposit=ctx.form_data.deposit,
            )
        except Exception as e:
            self._handle_failure(
                operation, e, generation, "tenancy.create_failed", "wizard.reset.resource_not_found"
            )
            return OperationResult.fail(self.last_error or str(e))
        finally:
            self.is_creating_tenancy = False

        if not self._is_current(operation, generation):
            return OperationResult.fail("stale")

        self._notify(LEVEL_SUCCESS, tr("tenancy.created"))
        self._emit_completed(operation, True)
        self.tenancy_created.emit(tenancy)
        self._reset("completed")
        self.navigate_requested.emit(TENANCIES_ROUTE)
        return OperationResult.ok(data=tenancy, message=tr("tenancy.created"))

    # =========================================================================
    # Reset and failure handling
    # =========================================================================

    def discard_and_reset(self):
        """Throw the draft away and start again from step 1."""
        self._reset("discarded")
        self._notify(LEVEL_INFO, tr("wizard.reset.discarded"))

    def _reset(self, reason: str):
        logger.info(f"Resetting wizard ({reason})")
        self.context.reset_wizard()
        self.agreement = None
        self.signing.clear()
        if self._drafts is not None:
            self._drafts.clear()
        self.agreement_changed.emit(None)
        self.wizard_reset.emit(reason)
        self.step_changed.emit(self.context.step)

    def _handle_not_found(self, message_key: str):
        """Single recovery path for a missing resource: reset to step 1."""
        logger.warning(f"Referenced resource no longer exists: {message_key}")
        self._reset("not_found")
        self._notify(LEVEL_ERROR, tr(message_key))

    def _is_current(self, operation: str, generation: int) -> bool:
        """False (and the operation closed) when the draft was reset meanwhile."""
        if self.context.is_current(generation):
            return True
        logger.info(f"Dropping stale {operation} response (generation {generation} != {self.context.generation})")
        self._emit_completed(operation, False)
        return False

    def _handle_failure(self, operation: str, error: Exception, generation: int,
                        fallback_key: str, not_found_key: str) -> bool:
        """Convert a failed call into exactly one message. Always returns False."""
        if not self.context.is_current(generation):
            logger.info(f"Dropping stale {operation} failure: {error}")
            self._emit_completed(operation, False)
            return False

        if classify_error(error) == ErrorKind.NOT_FOUND:
            self._handle_not_found(not_found_key)
            self._emit_completed(operation, False)
            return False

        logger.error(f"{operation} failed: {error}")
        self._emit_error(operation, map_exception(error, context=operation, fallback_key=fallback_key))
        return False
