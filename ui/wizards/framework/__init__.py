# -*- coding: utf-8 -*-
"""
Wizard Framework - shared state handling for multi-step wizards.
"""

from .wizard_context import WizardContext

__all__ = [
    'WizardContext',
]
