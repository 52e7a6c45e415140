"""Tests for pointer-encoding policies."""

import pytest

from fragview.pointer import MouseButton, PointerVariant


class TestPointerVariantParse:
    """Test suite for PointerVariant.parse."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("page", PointerVariant.PAGE),
            ("SURFACE", PointerVariant.SURFACE),
            ("Position", PointerVariant.POSITION),
            ("a", PointerVariant.PAGE),
            ("B", PointerVariant.SURFACE),
            (" c ", PointerVariant.POSITION),
        ],
    )
    def test_accepted_names(self, name, expected):
        """Test values, member names and letters resolve case-insensitively."""
        assert PointerVariant.parse(name) is expected

    def test_member_passes_through(self):
        assert PointerVariant.parse(PointerVariant.SURFACE) is PointerVariant.SURFACE

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown pointer variant"):
            PointerVariant.parse("d")


class TestPointerPolicy:
    """Test suite for the per-variant policy table."""

    def test_page_policy(self):
        policy = PointerVariant.PAGE.policy
        assert not policy.surface_relative
        assert not policy.invert_y
        assert policy.sentinels == {-1.0, 0.0, 1.0}
        assert policy.leave_state is None
        assert policy.mouse_components == 3

    def test_surface_policy(self):
        policy = PointerVariant.SURFACE.policy
        assert policy.surface_relative
        assert policy.invert_y
        assert policy.idle_state == -1.0
        assert policy.press_state == 0.0
        assert policy.release_state == -1.0
        assert policy.leave_state == -1.0
        assert policy.sentinels == {-1.0, 0.0}
        assert policy.mouse_components == 3

    def test_position_policy(self):
        policy = PointerVariant.POSITION.policy
        assert not policy.tracks_state
        assert policy.press_state is None
        assert policy.release_state is None
        assert policy.mouse_components == 2


def test_mouse_button_numbering():
    """Test buttons follow GLFW numbering."""
    assert MouseButton.PRIMARY == 0
    assert MouseButton.SECONDARY == 1
    assert MouseButton.MIDDLE == 2
