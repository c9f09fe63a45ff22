"""
Longest-processing-time placement of blocks onto teams.

Blocks go heaviest first onto the lightest team that holds nothing they are
separated from. Ties are broken by smallest member id for blocks and by lowest
index for teams, so the same request always yields the same partition.
"""

from __future__ import annotations

from typing import List, Sequence

from teamgen.errors import InfeasibleConstraints
from teamgen.models import Block, PlayerId


def order_blocks(blocks: Sequence[Block]) -> List[Block]:
    return sorted(blocks, key=lambda block: block.sort_key)


def _conflicting(block: Block, team: Sequence[Block]) -> List[Block]:
    return [other for other in team if other.id in block.separated_from]


def balance_blocks(blocks: Sequence[Block], num_teams: int) -> List[List[Block]]:
    """Return the blocks placed on each team, in team-index order."""
    teams: List[List[Block]] = [[] for _ in range(num_teams)]
    totals: List[float] = [0.0] * num_teams

    for block in order_blocks(blocks):
        eligible = [
            index for index in range(num_teams) if not _conflicting(block, teams[index])
        ]
        if not eligible:
            blocking: List[PlayerId] = []
            for team in teams:
                for other in _conflicting(block, team):
                    blocking.extend(other.member_ids)
            raise InfeasibleConstraints(
                f"No team can take block {block.id} ({', '.join(map(repr, block.member_ids))}): "
                f"every one of the {num_teams} team(s) already holds a player it must be separated from",
                list(block.member_ids) + blocking,
                block_id=block.id,
                team_numbers=range(1, num_teams + 1),
            )
        target = min(eligible, key=lambda index: (totals[index], index))
        teams[target].append(block)
        totals[target] += block.total_skill

    return teams
