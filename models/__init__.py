# -*- coding: utf-8 -*-
"""
Rental Manager Data Models
"""

from .user import User
from .unit import Unit
from .agreement import Agreement, AgreementStatus, Clause, Signature
from .tenancy import AgreementFormData, DepositDetails, RentDetails, Tenancy

__all__ = [
    "User",
    "Unit",
    "Agreement",
    "AgreementStatus",
    "Clause",
    "Signature",
    "AgreementFormData",
    "DepositDetails",
    "RentDetails",
    "Tenancy",
]
