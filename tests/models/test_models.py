# -*- coding: utf-8 -*-
"""
Tests for entity models.
"""

from models.agreement import Agreement, AgreementStatus
from models.tenancy import AgreementFormData, Tenancy
from models.unit import Unit
from models.user import User, normalize_id


class TestNormalizeId:

    def test_plain_and_populated(self):
        assert normalize_id("abc") == "abc"
        assert normalize_id({"_id": "abc", "firstName": "Jane"}) == "abc"
        assert normalize_id(None) is None
        assert normalize_id(42) == "42"


class TestUser:

    def test_from_backend(self):
        user = User.from_dict({"_id": "u1", "firstName": "Jane", "lastName": "Doe", "role": "tenant"})
        assert user.full_name == "Jane Doe"
        assert user.is_tenant

    def test_round_trip(self):
        user = User(id="u1", first_name="Jane", last_name="Doe", email="j@x.com", role="landlord")
        assert User.from_dict(user.to_dict()) == user


class TestUnit:

    def test_address_display(self):
        unit = Unit.from_dict({
            "_id": "unit-1",
            "ownerId": {"_id": "landlord-1"},
            "title": "Flat 2B",
            "address": {"line1": "12 Park Road", "line2": None, "city": "Pune", "state": "MH", "pincode": "411001"},
        })
        assert unit.owner_id == "landlord-1"
        assert unit.address_display == "12 Park Road, Pune, MH, 411001"


class TestAgreement:

    def test_unknown_status_defaults_to_draft(self):
        assert Agreement.from_dict({"_id": "a", "status": "archived"}).status == AgreementStatus.DRAFT

    def test_pending_signer(self):
        agreement = Agreement.from_dict({
            "_id": "a",
            "status": "pending_signature",
            "signers": [{"userId": "u1", "name": "Jane Doe"}],
        })
        assert agreement.is_signer("u1")
        assert not agreement.has_signed("u1")
        assert not agreement.is_fully_signed

    def test_fully_signed(self):
        agreement = Agreement.from_dict({
            "_id": "a",
            "status": "signed",
            "signers": [{"userId": "u1", "signedAt": "2026-01-15T10:00:00Z"}],
        })
        assert agreement.is_fully_signed
        assert agreement.has_signed("u1")
        assert not agreement.has_signed("u2")


class TestTenancy:

    def test_from_backend(self):
        tenancy = Tenancy.from_dict({
            "_id": "ten-1",
            "unitId": {"_id": "unit-1", "title": "Flat"},
            "tenantId": "tenant-1",
            "agreement": {"agreementId": "agr-1", "pdfUrl": "http://files/agr-1.pdf"},
            "rent": {"amount": 100, "cycle": "monthly"},
            "status": "active",
        })
        assert tenancy.unit_id == "unit-1"
        assert tenancy.agreement_id == "agr-1"
        assert tenancy.rent.amount == 100

    def test_form_data_without_deposit(self):
        data = AgreementFormData.from_dict({"rent": {"amount": 5, "cycle": "yearly"}, "deposit": None})
        assert data.deposit is None
        assert data.to_dict()["deposit"] is None
