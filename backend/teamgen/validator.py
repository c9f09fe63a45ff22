"""
Request validation and normalization.

`validate_request` is pure: it either returns a `TeamRequest` with duplicates
collapsed and separation sets expanded into pairs, or raises `InvalidRequest`.
Contradictions between locks and separations are left to the resolver, which
only sees them once locked groups are merged into blocks.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from teamgen.errors import InvalidRequest
from teamgen.models import Player, PlayerId, TeamRequest

DEFAULT_MAX_ROSTER_SIZE = 500
DEFAULT_MAX_TEAMS = 100


def _is_player_id(value: Any) -> bool:
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def coerce_player(raw: Player | Mapping[str, Any]) -> Player:
    """Accept a `Player` or a mapping with id/skill_weight/name keys."""
    if isinstance(raw, Player):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidRequest(f"Player entries must be objects, got {type(raw).__name__}")
    if "id" not in raw:
        raise InvalidRequest("Player entry is missing an id")
    if "skill_weight" not in raw:
        raise InvalidRequest(f"Player {raw['id']!r} is missing a skill_weight", [raw["id"]])
    return Player(id=raw["id"], skill_weight=raw["skill_weight"], name=raw.get("name"))


def _check_num_teams(num_teams: Any, max_teams: int) -> int:
    if not isinstance(num_teams, int) or isinstance(num_teams, bool):
        raise InvalidRequest(f"num_teams must be an integer, got {num_teams!r}")
    if num_teams < 1:
        raise InvalidRequest(f"num_teams must be at least 1, got {num_teams}")
    if num_teams > max_teams:
        raise InvalidRequest(f"num_teams is {num_teams}; the maximum supported is {max_teams}")
    return num_teams


def _check_roster(players: Sequence[Player], max_roster_size: int) -> None:
    if len(players) > max_roster_size:
        raise InvalidRequest(
            f"Roster has {len(players)} players; the maximum supported is {max_roster_size}"
        )

    seen: set = set()
    duplicates: List[PlayerId] = []
    id_types = set()
    for player in players:
        if not _is_player_id(player.id):
            raise InvalidRequest(f"Player id {player.id!r} must be an integer or a string")
        id_types.add(type(player.id))
        if player.id in seen and player.id not in duplicates:
            duplicates.append(player.id)
        seen.add(player.id)

        weight = player.skill_weight
        if (
            not isinstance(weight, Real)
            or isinstance(weight, bool)
            or not math.isfinite(weight)
            or weight <= 0
        ):
            raise InvalidRequest(
                f"Player {player.id!r} has invalid skill_weight {weight!r}; it must be a positive number",
                [player.id],
            )

    if len(id_types) > 1:
        raise InvalidRequest("Player ids must all be integers or all be strings")
    if duplicates:
        raise InvalidRequest(
            f"Duplicate player ids in roster: {', '.join(map(repr, duplicates))}", duplicates
        )


def _dedupe(ids: Iterable[Any]) -> List[Any]:
    out: List[Any] = []
    for pid in ids:
        if pid not in out:
            out.append(pid)
    return out


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _as_groups(name: str, raw: Optional[Iterable[Any]]) -> List[List[Any]]:
    if raw is None:
        return []
    if not _is_sequence(raw):
        raise InvalidRequest(f"{name} must be a list of player id lists, got {raw!r}")
    groups: List[List[Any]] = []
    for entry in raw:
        if isinstance(entry, (str, bytes, Mapping)) or not isinstance(entry, Iterable):
            raise InvalidRequest(f"Each {name} entry must be a list of player ids, got {entry!r}")
        members = list(entry)
        bad = [pid for pid in members if not _is_player_id(pid)]
        if bad:
            raise InvalidRequest(f"{name} contains invalid player ids: {bad!r}")
        groups.append(members)
    return groups


def _normalize_locked(
    groups: List[List[Any]], roster: set, unknown: List[Any]
) -> Tuple[Tuple[PlayerId, ...], ...]:
    owner: Dict[PlayerId, int] = {}
    normalized: List[Tuple[PlayerId, ...]] = []
    for index, group in enumerate(groups):
        members = _dedupe(group)
        if not members:
            continue
        for pid in members:
            if pid not in roster:
                if pid not in unknown:
                    unknown.append(pid)
                continue
            if pid in owner:
                raise InvalidRequest(
                    f"Player {pid!r} appears in locked groups {owner[pid] + 1} and {index + 1}",
                    [pid],
                )
            owner[pid] = index
        normalized.append(tuple(members))
    return tuple(normalized)


def _normalize_separated(
    groups: List[List[Any]], roster: set, unknown: List[Any]
) -> Tuple[Tuple[PlayerId, PlayerId], ...]:
    pairs: List[Tuple[PlayerId, PlayerId]] = []
    seen_pairs: set = set()
    for group in groups:
        members = _dedupe(group)
        if len(members) < 2:
            raise InvalidRequest(
                f"Separation entry {group!r} must name at least two different players",
                members,
            )
        for pid in members:
            if pid not in roster and pid not in unknown:
                unknown.append(pid)
        for i, first in enumerate(members):
            for second in members[i + 1 :]:
                key = frozenset((first, second))
                if key in seen_pairs:
                    continue
                seen_pairs.add(key)
                pairs.append((first, second))
    return tuple(pairs)


def validate_request(
    players: Sequence[Player | Mapping[str, Any]],
    num_teams: Any,
    locked_players: Optional[Iterable[Iterable[PlayerId]]] = None,
    separated_players: Optional[Iterable[Iterable[PlayerId]]] = None,
    use_jersey_colors: bool = False,
    *,
    max_roster_size: int = DEFAULT_MAX_ROSTER_SIZE,
    max_teams: int = DEFAULT_MAX_TEAMS,
) -> TeamRequest:
    num_teams = _check_num_teams(num_teams, max_teams)
    if not _is_sequence(players):
        raise InvalidRequest(f"players must be a list of player objects, got {players!r}")
    if not isinstance(use_jersey_colors, bool):
        raise InvalidRequest(f"use_jersey_colors must be true or false, got {use_jersey_colors!r}")
    roster = [coerce_player(p) for p in players]
    _check_roster(roster, max_roster_size)

    roster_ids = {player.id for player in roster}
    unknown: List[Any] = []
    locked = _normalize_locked(_as_groups("locked_players", locked_players), roster_ids, unknown)
    separated = _normalize_separated(
        _as_groups("separated_players", separated_players), roster_ids, unknown
    )
    if unknown:
        raise InvalidRequest(
            f"Unknown player ids: {', '.join(map(repr, unknown))}",
            unknown,
        )

    return TeamRequest(
        players=tuple(roster),
        num_teams=num_teams,
        locked_groups=locked,
        separated_pairs=separated,
        use_jersey_colors=use_jersey_colors,
    )
