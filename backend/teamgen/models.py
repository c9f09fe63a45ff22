from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple, Union

PlayerId = Union[int, str]


@dataclass(frozen=True)
class Player:
    id: PlayerId
    skill_weight: float
    name: Optional[str] = None


@dataclass(frozen=True)
class TeamRequest:
    """Normalized request produced by the validator."""

    players: Tuple[Player, ...]
    num_teams: int
    locked_groups: Tuple[Tuple[PlayerId, ...], ...] = ()
    separated_pairs: Tuple[Tuple[PlayerId, PlayerId], ...] = ()
    use_jersey_colors: bool = False

    @property
    def roster_ids(self) -> List[PlayerId]:
        return [player.id for player in self.players]


@dataclass
class Block:
    id: int
    member_ids: List[PlayerId]
    total_skill: float
    separated_from: Set[int] = field(default_factory=set)

    @property
    def sort_key(self) -> Tuple[float, PlayerId]:
        # heaviest first, then smallest member id
        return (-self.total_skill, min(self.member_ids))


@dataclass(frozen=True)
class Team:
    number: int
    players: Tuple[PlayerId, ...]
    total_skill: float
    color: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.players

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "players": list(self.players),
            "total_skill": self.total_skill,
            "color": self.color,
        }


@dataclass(frozen=True)
class TeamAssignment:
    teams: Tuple[Team, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def skill_spread(self) -> float:
        if not self.teams:
            return 0.0
        totals = [team.total_skill for team in self.teams]
        return max(totals) - min(totals)

    def team_of(self, player_id: PlayerId) -> Optional[int]:
        for team in self.teams:
            if player_id in team.players:
                return team.number
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teams": [team.to_dict() for team in self.teams],
            "warnings": list(self.warnings),
        }
