"""Tests for role to capability resolution."""

import pytest

from knowledge.access import (
    resolve_capabilities,
    user_capabilities,
    has_capability,
)
from knowledge.models import CapabilitySet, CAPABILITIES


class TestResolveCapabilities:
    def test_admin_has_every_capability(self):
        caps = resolve_capabilities("admin")
        assert all(caps.allows(cap) for cap in CAPABILITIES)

    def test_editor_can_upload_edit_and_read(self):
        caps = resolve_capabilities("editor")
        assert caps == CapabilitySet(can_upload=True, can_edit=True, can_read=True)
        assert not caps.can_delete
        assert not caps.can_manage_users

    def test_viewer_can_only_read(self):
        assert resolve_capabilities("viewer") == CapabilitySet(can_read=True)

    @pytest.mark.parametrize("role", [None, "", "superuser", "Admin", 3, ["admin"]])
    def test_missing_or_unknown_role_gets_nothing(self, role):
        """Unknown roles do not even get read access."""
        caps = resolve_capabilities(role)
        assert caps == CapabilitySet()
        assert not any(caps.allows(cap) for cap in CAPABILITIES)

    def test_no_argument_gets_nothing(self):
        assert resolve_capabilities() == CapabilitySet()

    def test_resolution_is_deterministic(self):
        assert resolve_capabilities("editor") == resolve_capabilities("editor")


class TestCapabilitySet:
    def test_allows_rejects_unrecognized_capability(self):
        caps = resolve_capabilities("admin")
        assert caps.allows("can_fly") is False  # type: ignore[arg-type]

    def test_is_immutable(self):
        caps = resolve_capabilities("viewer")
        with pytest.raises(Exception):
            caps.can_delete = True  # type: ignore[misc]


class TestUserHelpers:
    def test_anonymous_user_has_no_capabilities(self):
        assert user_capabilities(None) == CapabilitySet()
        assert not has_capability(None, "can_read")

    def test_has_capability_follows_role(self, user_factory):
        editor = user_factory.editor()
        assert has_capability(editor, "can_upload")
        assert not has_capability(editor, "can_delete")
