# -*- coding: utf-8 -*-
"""
User entity model.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


def normalize_id(value: Any) -> Optional[str]:
    """
    Return an entity id as a string.

    The backend sends references either as a plain id or as a populated
    document carrying "_id"; both map to the same string.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("_id") or value.get("id")
        if value is None:
            return None
    return str(value)


@dataclass
class User:
    """Application user (landlord, tenant or admin)."""

    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: Optional[str] = None
    role: str = "tenant"  # tenant, landlord, admin
    is_active: bool = True

    @property
    def full_name(self) -> str:
        """Legal name used for signatures: first and last name."""
        return f"{self.first_name} {self.last_name}"

    @property
    def is_tenant(self) -> bool:
        return self.role == "tenant"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend (camelCase) representation."""
        return {
            "_id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create User from a backend or persisted dictionary."""
        return cls(
            id=normalize_id(data.get("_id", data.get("id"))) or "",
            first_name=data.get("firstName", data.get("first_name", "")) or "",
            last_name=data.get("lastName", data.get("last_name", "")) or "",
            email=data.get("email", "") or "",
            phone=data.get("phone"),
            role=data.get("role", "tenant") or "tenant",
            is_active=bool(data.get("isActive", data.get("is_active", True))),
        )
