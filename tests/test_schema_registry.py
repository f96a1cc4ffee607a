# -*- encoding: utf-8 -*-
"""
Tests for SchemaRegistry - schema registration and the global creator policy.

Tests:
- Registration with unrestricted and restricted creator policies
- Fresh identifiers per call (never reused, even for identical arguments)
- Immutable lookup snapshots
- AdminToken-gated wholesale policy replacement
- SchemaRegistered / SchemaCreatorsUpdated notifications
"""

import dataclasses
from unittest.mock import MagicMock

import pytest

from keri_attest.errors import (
    InvalidAdminToken,
    SchemaNotFound,
    UnauthorizedSchemaCreator,
)
from keri_attest.events import EventBus, SchemaCreatorsUpdated, SchemaRegistered
from keri_attest.governance.admin import AdminAuthority
from keri_attest.schemas import Schema, SchemaRegistry


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def authority():
    return AdminAuthority(holder="BDEPLOYER", registry="EREGISTRY")


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def registry(authority, events):
    return SchemaRegistry(admin=authority, events=events)


def register_kyc(registry, caller="BCREATOR", attesters=()):
    return registry.register("KYC", "desc", True, list(attesters), caller)


# ---------------------------------------------------------------------------
# TestRegister
# ---------------------------------------------------------------------------


class TestRegister:

    def test_register_returns_said(self, registry):
        schema_id = register_kyc(registry)
        assert isinstance(schema_id, str)
        assert schema_id.startswith("E")
        assert len(schema_id) == 44

    def test_record_fields(self, registry):
        schema_id = registry.register("KYC", "Know your customer", False, ["BA1"], "BCREATOR")
        schema = registry.lookup(schema_id)
        assert schema.schema_id == schema_id
        assert schema.name == "KYC"
        assert schema.description == "Know your customer"
        assert schema.creator == "BCREATOR"
        assert schema.revocable is False
        assert schema.authorized_attesters == ("BA1",)
        assert schema.created_at

    def test_identical_arguments_get_fresh_ids(self, registry):
        first = register_kyc(registry)
        second = register_kyc(registry)
        assert first != second
        assert len(registry) == 2

    def test_unrestricted_policy_allows_anyone(self, registry):
        assert registry.schema_creators == ()
        register_kyc(registry, caller="BANYONE")

    def test_restricted_policy_denies_non_member(self, authority):
        registry = SchemaRegistry(admin=authority, schema_creators=["BALICE"])
        with pytest.raises(UnauthorizedSchemaCreator):
            register_kyc(registry, caller="BMALLORY")
        assert len(registry) == 0

    def test_restricted_policy_allows_member(self, authority):
        registry = SchemaRegistry(admin=authority, schema_creators=["BALICE"])
        schema_id = register_kyc(registry, caller="BALICE")
        assert registry.lookup(schema_id).creator == "BALICE"

    def test_attester_list_is_copied(self, registry):
        attesters = ["BA1"]
        schema_id = registry.register("KYC", "desc", True, attesters, "BCREATOR")
        attesters.append("BA2")
        assert registry.lookup(schema_id).authorized_attesters == ("BA1",)

    def test_string_attesters_rejected(self, registry, events):
        observer = MagicMock()
        events.subscribe(observer)
        with pytest.raises(TypeError):
            registry.register("KYC", "desc", True, "BA1", "BCREATOR")
        assert len(registry) == 0
        observer.assert_not_called()

    def test_string_initial_creators_rejected(self, authority):
        with pytest.raises(TypeError):
            SchemaRegistry(admin=authority, schema_creators="BALICE")

    def test_uses_injected_clock(self, authority):
        registry = SchemaRegistry(admin=authority, clock=lambda: "2026-01-01T00:00:00+00:00")
        schema_id = register_kyc(registry)
        assert registry.lookup(schema_id).created_at == "2026-01-01T00:00:00+00:00"

    def test_emits_schema_registered(self, registry, events):
        observer = MagicMock()
        events.subscribe(observer)
        schema_id = register_kyc(registry)
        observer.assert_called_once_with(
            SchemaRegistered(schema_id=schema_id, name="KYC", creator="BCREATOR")
        )

    def test_denied_register_emits_nothing(self, authority, events):
        registry = SchemaRegistry(admin=authority, schema_creators=["BALICE"], events=events)
        observer = MagicMock()
        events.subscribe(observer)
        with pytest.raises(UnauthorizedSchemaCreator):
            register_kyc(registry, caller="BMALLORY")
        observer.assert_not_called()


# ---------------------------------------------------------------------------
# TestLookup
# ---------------------------------------------------------------------------


class TestLookup:

    def test_unknown_id_raises(self, registry):
        with pytest.raises(SchemaNotFound) as exc_info:
            registry.lookup("EUNKNOWN")
        assert exc_info.value.schema_id == "EUNKNOWN"

    def test_snapshot_is_immutable(self, registry):
        schema_id = register_kyc(registry, attesters=["BA1"])
        schema = registry.lookup(schema_id)
        with pytest.raises(dataclasses.FrozenInstanceError):
            schema.creator = "BMALLORY"
        assert isinstance(schema.authorized_attesters, tuple)
        assert registry.lookup(schema_id).creator == "BCREATOR"

    def test_list_schemas_filters_by_creator(self, registry):
        register_kyc(registry, caller="BALICE")
        register_kyc(registry, caller="BBOB")
        register_kyc(registry, caller="BALICE")
        assert len(registry.list_schemas()) == 3
        assert [s.creator for s in registry.list_schemas(creator="BALICE")] == ["BALICE", "BALICE"]

    def test_to_dict(self, registry):
        schema_id = register_kyc(registry, attesters=["BA1"])
        d = registry.lookup(schema_id).to_dict()
        assert d["schema_id"] == schema_id
        assert d["authorized_attesters"] == ["BA1"]
        assert d["revocable"] is True


# ---------------------------------------------------------------------------
# TestUpdateSchemaCreators
# ---------------------------------------------------------------------------


class TestUpdateSchemaCreators:

    def test_replaces_policy_wholesale(self, registry, authority):
        registry.update_schema_creators(authority.token, ["BALICE", "BBOB"])
        assert registry.schema_creators == ("BALICE", "BBOB")
        registry.update_schema_creators(authority.token, ["BCAROL"])
        assert registry.schema_creators == ("BCAROL",)

    def test_new_policy_takes_effect(self, registry, authority):
        registry.update_schema_creators(authority.token, ["BALICE"])
        with pytest.raises(UnauthorizedSchemaCreator):
            register_kyc(registry, caller="BBOB")
        register_kyc(registry, caller="BALICE")

    def test_empty_policy_reopens_registration(self, authority):
        registry = SchemaRegistry(admin=authority, schema_creators=["BALICE"])
        registry.update_schema_creators(authority.token, [])
        register_kyc(registry, caller="BANYONE")

    def test_invalid_token_rejected(self, registry):
        other = AdminAuthority(holder="BDEPLOYER", registry="EOTHER")
        with pytest.raises(InvalidAdminToken):
            registry.update_schema_creators(other.token, ["BMALLORY"])
        assert registry.schema_creators == ()

    def test_policy_membership_is_not_admin(self, authority):
        registry = SchemaRegistry(admin=authority, schema_creators=["BDEPLOYER"])
        with pytest.raises(InvalidAdminToken):
            registry.update_schema_creators("BDEPLOYER", [])

    def test_existing_schemas_unaffected(self, registry, authority):
        schema_id = register_kyc(registry, caller="BBOB")
        registry.update_schema_creators(authority.token, ["BALICE"])
        assert registry.lookup(schema_id).creator == "BBOB"

    def test_forged_holder_rejected(self, registry, authority):
        forged = dataclasses.replace(authority.token, holder="BMALLORY")
        with pytest.raises(InvalidAdminToken):
            registry.update_schema_creators(forged, ["BMALLORY"])
        assert registry.schema_creators == ()

    def test_string_policy_rejected(self, registry, authority):
        with pytest.raises(TypeError):
            registry.update_schema_creators(authority.token, "BALICE")
        assert registry.schema_creators == ()

    def test_emits_update_event(self, registry, authority, events):
        observer = MagicMock()
        events.subscribe(observer)
        registry.update_schema_creators(authority.token, ["BALICE"])
        observer.assert_called_once_with(
            SchemaCreatorsUpdated(holder="BDEPLOYER", creators=("BALICE",))
        )


def test_schema_is_public_property():
    schema = Schema("E1", "n", "d", "BC", True)
    assert schema.is_public
    assert not dataclasses.replace(schema, authorized_attesters=("BA1",)).is_public
