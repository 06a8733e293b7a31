# -*- coding: utf-8 -*-
"""
Tenancy Wizard Package.

- TenancyWizardContext: draft state shared by the five wizard steps
- AgreementSnapshot: clause values an agreement was created from
"""

from .tenancy_context import AgreementSnapshot, TenancyWizardContext

__all__ = [
    'AgreementSnapshot',
    'TenancyWizardContext',
]
