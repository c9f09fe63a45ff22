from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from teamgen.errors import ConfigurationError

DEFAULT_PALETTE: Tuple[str, ...] = ("Light", "Dark")


def validate_palette(palette: Iterable[str]) -> Tuple[str, ...]:
    """Strip and check a jersey palette; raise `ConfigurationError` when unusable."""
    cleaned = tuple(str(color).strip() for color in palette)
    if not cleaned or any(not color for color in cleaned):
        raise ConfigurationError("Jersey color palette must contain at least one non-blank color")
    duplicates = sorted({color for color in cleaned if cleaned.count(color) > 1})
    if duplicates:
        raise ConfigurationError(f"Jersey color palette repeats colors: {', '.join(duplicates)}")
    return cleaned


def assign_colors(
    team_sizes: Sequence[int], palette: Sequence[str], use_jersey_colors: bool
) -> List[Optional[str]]:
    """
    Color label per team, in team-index order.

    Non-empty teams take palette[index % len(palette)]; empty teams and
    requests without jersey colors get None.
    """
    if not use_jersey_colors:
        return [None] * len(team_sizes)
    if not palette:
        raise ConfigurationError("Jersey color palette is empty")
    return [
        palette[index % len(palette)] if size > 0 else None
        for index, size in enumerate(team_sizes)
    ]
