# -*- coding: utf-8 -*-
"""
Step validation service for the Tenancy Wizard.

Validates context data for each step without UI coupling.
"""

from dataclasses import dataclass
from numbers import Number
from typing import List

from app.config import Config
from services.translation_manager import tr


@dataclass
class StepValidationResult:
    """Result of step validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str] = None

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []

    def add_error(self, message: str):
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def message(self) -> str:
        """First error, the one shown to the user."""
        return self.errors[0] if self.errors else ""


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class StepValidator:
    """Validates wizard step data based on context."""

    # Step constants
    STEP_SELECT = 1
    STEP_RENT = 2
    STEP_CLAUSES = 3
    STEP_SIGN = 4
    STEP_REVIEW = 5

    @staticmethod
    def validate_step(step: int, context) -> StepValidationResult:
        """
        Validate step data from context.

        Args:
            step: Step number (1-5)
            context: TenancyWizardContext object
        """
        result = StepValidationResult(is_valid=True, errors=[])

        if step == StepValidator.STEP_SELECT:
            if not context.selected_unit or not context.selected_tenant:
                result.add_error(tr("wizard.error.select_unit_tenant"))

        elif step == StepValidator.STEP_RENT:
            if context.form_data is None:
                result.add_error(tr("wizard.error.missing_information"))
            else:
                StepValidator._check_rent(context.form_data.rent, result)
                StepValidator._check_deposit(context.form_data.deposit, result)

        elif step == StepValidator.STEP_CLAUSES:
            clauses = context.form_data.clauses if context.form_data else []
            StepValidator._check_clauses(clauses, result)

        elif step == StepValidator.STEP_SIGN:
            if not context.agreement_id:
                result.add_error(tr("wizard.error.no_agreement"))

        elif step == StepValidator.STEP_REVIEW:
            if (not context.selected_unit or not context.selected_tenant
                    or not context.agreement_id or context.form_data is None):
                result.add_error(tr("wizard.error.missing_information"))
            else:
                form_data = context.form_data
                StepValidator._check_rent(form_data.rent, result)
                StepValidator._check_deposit(form_data.deposit, result)
                StepValidator._check_clauses(form_data.clauses, result)

        return result

    @staticmethod
    def validate_rent_details(rent, deposit=None) -> StepValidationResult:
        """Schema check for the rent form before it is stored."""
        result = StepValidationResult(is_valid=True, errors=[])
        StepValidator._check_rent(rent, result)
        StepValidator._check_deposit(deposit, result)
        return result

    @staticmethod
    def validate_clauses(clauses) -> StepValidationResult:
        """Schema check for the clauses form before it is stored."""
        result = StepValidationResult(is_valid=True, errors=[])
        StepValidator._check_clauses(clauses, result)
        return result

    @staticmethod
    def _check_rent(rent, result: StepValidationResult):
        if rent is None or not _is_number(rent.amount) or rent.amount <= 0:
            result.add_error(tr("validation.rent.amount_positive"))
        if rent is None:
            return

        if rent.cycle not in Config.RENT_CYCLES:
            result.add_error(tr("validation.rent.cycle"))

        day = rent.due_date_day
        if day is not None:
            if (not isinstance(day, int) or isinstance(day, bool)
                    or not Config.DUE_DATE_DAY_MIN <= day <= Config.DUE_DATE_DAY_MAX):
                result.add_error(tr("validation.rent.due_date_day"))

    @staticmethod
    def _check_deposit(deposit, result: StepValidationResult):
        if deposit is None:
            return
        if deposit.amount is not None and (not _is_number(deposit.amount) or deposit.amount < 0):
            result.add_error(tr("validation.deposit.amount"))
        if deposit.status not in Config.DEPOSIT_STATUSES:
            result.add_error(tr("validation.deposit.status"))

    @staticmethod
    def _check_clauses(clauses, result: StepValidationResult):
        if not clauses:
            result.add_error(tr("validation.clauses.min_one"))
            return
        for index, clause in enumerate(clauses, start=1):
            if not (clause.text or "").strip():
                result.add_error(tr("validation.clauses.text_required", index=index))

    @staticmethod
    def get_step_name(step: int) -> str:
        """Get display name for step."""
        keys = {
            StepValidator.STEP_SELECT: "wizard.step.select_unit_tenant",
            StepValidator.STEP_RENT: "wizard.step.rent_details",
            StepValidator.STEP_CLAUSES: "wizard.step.clauses",
            StepValidator.STEP_SIGN: "wizard.step.sign_agreement",
            StepValidator.STEP_REVIEW: "wizard.step.review",
        }
        key = keys.get(step)
        return tr(key) if key else ""
