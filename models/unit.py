# -*- coding: utf-8 -*-
"""
Property Unit entity model.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from models.user import normalize_id


@dataclass
class Unit:
    """
    Property unit owned by a landlord.

    Only the fields the tenancy wizard reads are modelled; the rest of the
    backend document is ignored.
    """

    id: str = ""
    owner_id: str = ""
    title: str = ""
    address: Dict[str, Optional[str]] = field(default_factory=dict)  # line1, line2, city, state, pincode
    beds: Optional[int] = None
    area_sq_ft: Optional[float] = None
    status: str = "vacant"  # vacant, occupied, maintenance

    @property
    def address_display(self) -> str:
        """Single-line address: line1, city, state, pincode."""
        parts = [
            self.address.get("line1"),
            self.address.get("city"),
            self.address.get("state"),
            self.address.get("pincode"),
        ]
        return ", ".join(p for p in parts if p)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "ownerId": self.owner_id,
            "title": self.title,
            "address": dict(self.address),
            "beds": self.beds,
            "areaSqFt": self.area_sq_ft,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Unit":
        return cls(
            id=normalize_id(data.get("_id", data.get("id"))) or "",
            owner_id=normalize_id(data.get("ownerId", data.get("owner_id"))) or "",
            title=data.get("title", "") or "",
            address=dict(data.get("address") or {}),
            beds=data.get("beds"),
            area_sq_ft=data.get("areaSqFt", data.get("area_sq_ft")),
            status=data.get("status", "vacant") or "vacant",
        )
