# -*- coding: utf-8 -*-
"""Wizard services: step validation, signature policy and signing flow."""

from .signature_validator import SignatureCheck, legal_full_name, validate_signature
from .signing_flow import SigningFlow, SigningPhase
from .step_validator import StepValidationResult, StepValidator

__all__ = [
    'SignatureCheck',
    'legal_full_name',
    'validate_signature',
    'SigningFlow',
    'SigningPhase',
    'StepValidationResult',
    'StepValidator',
]
