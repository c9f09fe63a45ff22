from __future__ import annotations

import pytest

from teamgen.colors import DEFAULT_PALETTE, assign_colors, validate_palette
from teamgen.errors import ConfigurationError


def test_default_palette_is_light_and_dark() -> None:
    assert DEFAULT_PALETTE == ("Light", "Dark")


def test_assigns_in_team_order_and_cycles() -> None:
    assert assign_colors([2, 2, 1, 3], ["White", "Black", "Red"], True) == ["White", "Black", "Red", "White"]


def test_empty_teams_get_no_color() -> None:
    assert assign_colors([3, 2, 0], DEFAULT_PALETTE, True) == ["Light", "Dark", None]


def test_disabled_colors_are_none() -> None:
    assert assign_colors([1, 1], DEFAULT_PALETTE, False) == [None, None]


def test_empty_palette_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        assign_colors([1], [], True)


@pytest.mark.parametrize("palette", [[], ["Light", ""], ["  "], ["Red", "Red"]])
def test_validate_palette_rejects_unusable(palette) -> None:
    with pytest.raises(ConfigurationError):
        validate_palette(palette)


def test_validate_palette_strips() -> None:
    assert validate_palette([" Red", "Blue "]) == ("Red", "Blue")
