"""
Entry point consumed by the FastAPI layer and the CLI.

`generate_teams` runs validation, block resolution, balancing and jersey color
assignment in one call. It is all-or-nothing: any failure raises a
`TeamGenerationError` subclass and no partial assignment escapes.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

import structlog

from teamgen.balancer import balance_blocks
from teamgen.colors import DEFAULT_PALETTE, assign_colors
from teamgen.errors import TeamGenerationError
from teamgen.models import Player, PlayerId, Team, TeamAssignment
from teamgen.resolver import resolve_blocks
from teamgen.validator import DEFAULT_MAX_ROSTER_SIZE, DEFAULT_MAX_TEAMS, validate_request

logger = structlog.get_logger(__name__)


def _empty_team_warning(empty: int, num_teams: int, placed_units: int) -> str:
    return (
        f"{empty} of {num_teams} teams are empty: "
        f"only {placed_units} player group(s) were available to place"
    )


def generate_teams(
    players: Sequence[Player | Mapping[str, Any]],
    num_teams: int,
    locked_players: Optional[Iterable[Iterable[PlayerId]]] = None,
    separated_players: Optional[Iterable[Iterable[PlayerId]]] = None,
    use_jersey_colors: bool = False,
    *,
    palette: Sequence[str] = DEFAULT_PALETTE,
    max_roster_size: int = DEFAULT_MAX_ROSTER_SIZE,
    max_teams: int = DEFAULT_MAX_TEAMS,
) -> TeamAssignment:
    try:
        request = validate_request(
            players,
            num_teams,
            locked_players,
            separated_players,
            use_jersey_colors,
            max_roster_size=max_roster_size,
            max_teams=max_teams,
        )
        blocks = resolve_blocks(request)
        placed = balance_blocks(blocks, request.num_teams)
    except TeamGenerationError as exc:
        logger.warning(
            "team_generation_rejected",
            error=exc.code,
            reason=exc.reason,
            players=exc.player_ids,
        )
        raise

    sizes = [sum(len(block.member_ids) for block in team) for team in placed]
    colors = assign_colors(sizes, palette, request.use_jersey_colors)

    teams: List[Team] = []
    for index, team_blocks in enumerate(placed):
        members: List[PlayerId] = []
        for block in team_blocks:
            members.extend(block.member_ids)
        teams.append(
            Team(
                number=index + 1,
                players=tuple(members),
                total_skill=sum((block.total_skill for block in team_blocks), 0.0),
                color=colors[index],
            )
        )

    warnings: List[str] = []
    empty = sum(1 for team in teams if team.is_empty)
    if empty:
        warnings.append(_empty_team_warning(empty, request.num_teams, len(blocks)))

    assignment = TeamAssignment(teams=tuple(teams), warnings=tuple(warnings))
    logger.info(
        "teams_generated",
        num_teams=request.num_teams,
        roster_size=len(request.players),
        blocks=len(blocks),
        locked_groups=len(request.locked_groups),
        separated_pairs=len(request.separated_pairs),
        skill_spread=assignment.skill_spread,
        empty_teams=empty,
    )
    return assignment
