# -*- coding: utf-8 -*-
"""
Controllers Package
===================
Controllers coordinate services and wizard state and report to the host
through Qt signals.
"""

from .base_controller import BaseController, OperationResult
from .tenancy_wizard_controller import TenancyWizardController
from .agreement_controller import AgreementController

__all__ = [
    'BaseController',
    'OperationResult',
    'TenancyWizardController',
    'AgreementController',
]
