# -*- coding: utf-8 -*-
"""
Tenancy Context - Manages the draft of the tenancy creation wizard.

This context extends WizardContext with the tenancy draft:
- Current step (1-5)
- Selected unit and tenant
- Rent / deposit / clause form data
- The created agreement id and the snapshot it was created from

No network call originates here; the controller owns all I/O.
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from models.agreement import Clause
from models.tenancy import AgreementFormData, DepositDetails, RentDetails
from models.unit import Unit
from models.user import User
from ui.wizards.framework import WizardContext
from utils.logger import get_logger

logger = get_logger(__name__)

FIRST_STEP = 1
LAST_STEP = 5

_FORM_FIELDS = ("rent", "deposit", "clauses", "template_name", "state_code")


def _default_form_data() -> AgreementFormData:
    return AgreementFormData(
        rent=RentDetails(amount=0, cycle="monthly", due_date_day=1, utilities_included=False),
        deposit=DepositDetails(amount=0, status="upcoming"),
        clauses=[],
    )


@dataclass(frozen=True)
class AgreementSnapshot:
    """
    Agreement-relevant values recorded when an agreement was created.

    Clause text is compared trimmed; a missing key, template name or state
    code equals an empty one.
    """
    clauses: Tuple[Tuple[str, str], ...] = ()
    template_name: str = ""
    state_code: str = ""

    @classmethod
    def from_form_data(cls, form_data: Optional[AgreementFormData]) -> 'AgreementSnapshot':
        if form_data is None:
            return cls()
        return cls(
            clauses=tuple((c.key or "", (c.text or "").strip()) for c in form_data.clauses),
            template_name=form_data.template_name or "",
            state_code=form_data.state_code or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clauses": [{"key": key, "text": text} for key, text in self.clauses],
            "templateName": self.template_name,
            "stateCode": self.state_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AgreementSnapshot':
        return cls(
            clauses=tuple(
                (c.get("key") or "", (c.get("text") or "").strip())
                for c in data.get("clauses") or []
            ),
            template_name=data.get("templateName") or "",
            state_code=data.get("stateCode") or "",
        )


class TenancyWizardContext(WizardContext):
    """Draft state of the tenancy creation wizard."""

    def __init__(self):
        super().__init__()
        self._reset_fields()

    def _reset_fields(self):
        self.step: int = FIRST_STEP
        self.selected_unit: Optional[Unit] = None
        self.selected_tenant: Optional[User] = None
        self.form_data: Optional[AgreementFormData] = None
        self.agreement_id: Optional[str] = None
        self.agreement_snapshot: Optional[AgreementSnapshot] = None

    # =========================================================================
    # Mutations
    # =========================================================================

    def set_step(self, step: int):
        """Set the current step. Reachability is the caller's concern."""
        if not FIRST_STEP <= step <= LAST_STEP:
            raise ValueError(f"Step must be between {FIRST_STEP} and {LAST_STEP}, got {step}")
        self.step = step
        self.touch()

    def set_selected_unit(self, unit: Optional[Unit]):
        self.selected_unit = unit
        self.touch()

    def set_selected_tenant(self, tenant: Optional[User]):
        self.selected_tenant = tenant
        self.touch()

    def set_form_data(self, **changes):
        """
        Shallow-merge form fields into the draft.

        Accepted keywords: rent, deposit, clauses, template_name, state_code.
        The first write starts from the defaults (rent 0 monthly due on day 1
        without utilities, deposit 0 upcoming, no clauses).
        """
        unknown = set(changes) - set(_FORM_FIELDS)
        if unknown:
            raise ValueError(f"Unknown form fields: {sorted(unknown)}")

        if self.form_data is None:
            self.form_data = _default_form_data()

        for name, value in changes.items():
            if name == "clauses":
                value = [Clause(text=c.text, key=c.key) for c in value or []]
            else:
                value = copy.deepcopy(value)
            setattr(self.form_data, name, value)
        self.touch()

    def set_agreement_id(self, agreement_id: Optional[str],
                         snapshot: Optional[AgreementSnapshot] = None):
        """Record the created agreement and the values it was created from."""
        self.agreement_id = agreement_id
        self.agreement_snapshot = snapshot if agreement_id else None
        self.touch()

    def reset_wizard(self):
        """Back to the initial empty draft, in a new generation."""
        previous = self.agreement_id
        self.reset()
        logger.info(f"Wizard draft reset (generation {self.generation}, dropped agreement={previous})")

    # =========================================================================
    # Queries
    # =========================================================================

    def current_snapshot(self) -> AgreementSnapshot:
        return AgreementSnapshot.from_form_data(self.form_data)

    def agreement_is_current(self) -> bool:
        """True when an agreement exists and the clause values did not change since."""
        if not self.agreement_id or self.agreement_snapshot is None:
            return False
        return self.agreement_snapshot == self.current_snapshot()

    def draft_dict(self) -> Dict[str, Any]:
        """The draft fields only (no session metadata)."""
        return {
            "step": self.step,
            "selected_unit": self.selected_unit.to_dict() if self.selected_unit else None,
            "selected_tenant": self.selected_tenant.to_dict() if self.selected_tenant else None,
            "form_data": self.form_data.to_dict() if self.form_data else None,
            "agreement_id": self.agreement_id,
            "agreement_snapshot": self.agreement_snapshot.to_dict() if self.agreement_snapshot else None,
        }

    def is_initial(self) -> bool:
        return self.draft_dict() == TenancyWizardContext().draft_dict()

    def get_summary(self) -> Dict[str, Any]:
        return {
            "wizard_id": self.wizard_id,
            "step": self.step,
            "unit": self.selected_unit.title if self.selected_unit else None,
            "tenant": self.selected_tenant.full_name if self.selected_tenant else None,
            "agreement_id": self.agreement_id,
            "generation": self.generation,
        }

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context to dictionary."""
        base_data = super().to_dict()
        base_data.update(self.draft_dict())
        return base_data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TenancyWizardContext':
        """Restore context from dictionary; unreadable parts fall back to defaults."""
        ctx = cls()
        cls._restore_base_fields(ctx, data)

        step = data.get("step", FIRST_STEP)
        if isinstance(step, int) and FIRST_STEP <= step <= LAST_STEP:
            ctx.step = step
        else:
            logger.warning(f"Ignoring persisted step {step!r}")

        unit_data = data.get("selected_unit")
        if isinstance(unit_data, dict):
            ctx.selected_unit = Unit.from_dict(unit_data)

        tenant_data = data.get("selected_tenant")
        if isinstance(tenant_data, dict):
            ctx.selected_tenant = User.from_dict(tenant_data)

        form_data = data.get("form_data")
        if isinstance(form_data, dict):
            ctx.form_data = AgreementFormData.from_dict(form_data)

        ctx.agreement_id = data.get("agreement_id") or None
        snapshot = data.get("agreement_snapshot")
        if ctx.agreement_id and isinstance(snapshot, dict):
            ctx.agreement_snapshot = AgreementSnapshot.from_dict(snapshot)

        return ctx
