# -*- coding: utf-8 -*-
"""
Rental Manager Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "RentalApiClient",
    "AgreementApiService",
    "TenancyApiService",
    "PropertyUnitApiService",
    "UserApiService",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "RentalApiClient":
        from .api_client import RentalApiClient
        return RentalApiClient
    elif name == "AgreementApiService":
        from .agreement_api_service import AgreementApiService
        return AgreementApiService
    elif name == "TenancyApiService":
        from .tenancy_api_service import TenancyApiService
        return TenancyApiService
    elif name == "PropertyUnitApiService":
        from .property_unit_api_service import PropertyUnitApiService
        return PropertyUnitApiService
    elif name == "UserApiService":
        from .user_api_service import UserApiService
        return UserApiService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
