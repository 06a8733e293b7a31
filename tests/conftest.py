# -*- coding: utf-8 -*-
"""
Shared fixtures for the test suite.

Backend services are replaced by in-memory fakes; HTTP-level tests patch
requests.request directly.
"""

import os
import sys
import tempfile
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep logs and drafts out of the working tree; must run before app.config loads
_test_root = Path(tempfile.mkdtemp(prefix="rental_manager_tests_"))
os.environ.setdefault("LOGS_DIR", str(_test_root / "logs"))
os.environ.setdefault("DATA_DIR", str(_test_root / "data"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from models.agreement import Agreement, AgreementStatus, Clause, Signature
from models.tenancy import Tenancy
from models.unit import Unit
from models.user import User
from repositories.draft_repository import DraftRepository
from services.exceptions import ApiException
from controllers.tenancy_wizard_controller import TenancyWizardController

SIGNED_AT = "2026-01-15T10:00:00.000Z"


class FakeAgreementService:
    """In-memory agreement backend."""

    def __init__(self):
        self.agreements = {}
        self.create_calls = []
        self.get_calls = []
        self.sign_calls = []
        self.create_error = None
        self.get_error = None
        self.sign_error = None
        self.during_create = None
        self.during_sign = None
        self._next_id = 0

    def create_agreement(self, payload):
        self.create_calls.append(payload)
        if self.during_create:
            self.during_create()
        if self.create_error:
            raise self.create_error
        self._next_id += 1
        tenancy_data = payload.get("tenancyData") or {}
        agreement = Agreement(
            id=f"agr-{self._next_id}",
            status=AgreementStatus.PENDING_SIGNATURE,
            clauses=[Clause.from_dict(c) for c in payload["clauses"]],
            template_name=payload.get("templateName"),
            state_code=payload.get("stateCode"),
            created_by=payload.get("createdBy"),
            tenant_id=tenancy_data.get("tenantId"),
        )
        self.agreements[agreement.id] = agreement
        return agreement

    def get_agreement_by_id(self, agreement_id):
        self.get_calls.append(agreement_id)
        if self.get_error:
            raise self.get_error
        if agreement_id not in self.agreements:
            raise ApiException("Agreement not found", status_code=404)
        return self.agreements[agreement_id]

    def sign_agreement(self, agreement_id, user_id, name, method="manual"):
        self.sign_calls.append(
            {"agreement_id": agreement_id, "userId": user_id, "name": name, "method": method}
        )
        if self.during_sign:
            self.during_sign()
        if self.sign_error:
            raise self.sign_error
        if agreement_id not in self.agreements:
            raise ApiException("Agreement not found", status_code=404)
        agreement = self.agreements[agreement_id]
        agreement.signers.append(
            Signature(user_id=user_id, name=name, method=method, signed_at=SIGNED_AT)
        )
        return agreement

    def get_agreements(self, tenancy_id=None, tenant_id=None, status=None, page=1, limit=20):
        return [a for a in self.agreements.values() if tenant_id is None or a.tenant_id == tenant_id]


class FakeTenancyService:
    def __init__(self):
        self.calls = []
        self.error = None

    def create_tenancy(self, unit_id, owner_id, tenant_id, agreement_id, rent, deposit=None):
        self.calls.append({
            "unit_id": unit_id,
            "owner_id": owner_id,
            "tenant_id": tenant_id,
            "agreement_id": agreement_id,
            "rent": rent,
            "deposit": deposit,
        })
        if self.error:
            raise self.error
        return Tenancy(id="ten-1", unit_id=unit_id, owner_id=owner_id, tenant_id=tenant_id,
                       agreement_id=agreement_id, rent=rent, deposit=deposit)


class FakeUnitService:
    def __init__(self, units):
        self.units = units
        self.calls = []
        self.error = None

    def get_units(self, owner_id=None):
        self.calls.append(owner_id)
        if self.error:
            raise self.error
        return [u for u in self.units if owner_id is None or u.owner_id == owner_id]


class FakeUserService:
    def __init__(self, users):
        self.users = users
        self.calls = []
        self.error = None

    def get_users(self, role=None, is_active=None, search=None, page=1, limit=20):
        self.calls.append({"role": role, "limit": limit})
        if self.error:
            raise self.error
        return [u for u in self.users if role is None or u.role == role]


class SignalRecorder:
    """Collects every emission of the connected signals."""

    def __init__(self, **signals):
        self.events = {name: [] for name in signals}
        for name, signal in signals.items():
            signal.connect(lambda *args, _name=name: self.events[_name].append(args))

    def __getitem__(self, name):
        return self.events[name]


@pytest.fixture
def landlord():
    return User(id="landlord-1", first_name="John", last_name="Smith",
                email="john@example.com", role="landlord")


@pytest.fixture
def tenant():
    return User(id="tenant-1", first_name="Jane", last_name="Doe",
                email="jane@example.com", role="tenant")


@pytest.fixture
def unit(landlord):
    return Unit(id="unit-1", owner_id=landlord.id, title="Flat 2B",
                address={"line1": "12 Park Road", "city": "Pune", "state": "MH", "pincode": "411001"},
                beds=2)


@pytest.fixture
def agreement_service():
    return FakeAgreementService()


@pytest.fixture
def tenancy_service():
    return FakeTenancyService()


@pytest.fixture
def unit_service(unit):
    return FakeUnitService([unit])


@pytest.fixture
def user_service(tenant, landlord):
    return FakeUserService([tenant, landlord])


@pytest.fixture
def draft_repository(tmp_path):
    return DraftRepository(tmp_path / "drafts.json")


@pytest.fixture
def controller(qapp, landlord, agreement_service, tenancy_service,
               unit_service, user_service, draft_repository):
    """Wizard controller wired to fakes."""
    return TenancyWizardController(
        current_user=landlord,
        agreement_service=agreement_service,
        tenancy_service=tenancy_service,
        unit_service=unit_service,
        user_service=user_service,
        draft_repository=draft_repository,
    )
