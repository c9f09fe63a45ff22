from __future__ import annotations

import math

import pytest

from teamgen.errors import InvalidRequest
from teamgen.models import Player
from teamgen.validator import validate_request


def _players(*ids: str) -> list[Player]:
    return [Player(id=pid, skill_weight=1) for pid in ids]


@pytest.mark.parametrize("num_teams", [0, -1, 1.5, "2", None, True])
def test_rejects_bad_team_counts(num_teams) -> None:
    with pytest.raises(InvalidRequest):
        validate_request(_players("A", "B"), num_teams)


def test_more_teams_than_players_is_allowed() -> None:
    request = validate_request(_players("A"), 4)
    assert request.num_teams == 4


def test_rejects_roster_over_limit() -> None:
    with pytest.raises(InvalidRequest, match="maximum supported is 3"):
        validate_request(_players("A", "B", "C", "D"), 2, max_roster_size=3)


def test_rejects_duplicate_ids() -> None:
    with pytest.raises(InvalidRequest) as excinfo:
        validate_request(_players("A", "B", "A"), 2)
    assert excinfo.value.player_ids == ["A"]


@pytest.mark.parametrize("weight", [0, -2, math.nan, math.inf, "3", None])
def test_rejects_bad_skill_weights(weight) -> None:
    roster = [Player(id="A", skill_weight=weight), Player(id="B", skill_weight=1)]
    with pytest.raises(InvalidRequest) as excinfo:
        validate_request(roster, 2)
    assert excinfo.value.player_ids == ["A"]


def test_rejects_mixed_id_types() -> None:
    roster = [Player(id=1, skill_weight=1), Player(id="2", skill_weight=1)]
    with pytest.raises(InvalidRequest, match="all be integers or all be strings"):
        validate_request(roster, 2)


def test_reports_every_unknown_id() -> None:
    with pytest.raises(InvalidRequest) as excinfo:
        validate_request(_players("A", "B"), 2, locked_players=[["A", "X"]], separated_players=[["B", "Y"]])
    assert excinfo.value.player_ids == ["X", "Y"]


def test_rejects_player_in_two_locked_groups() -> None:
    with pytest.raises(InvalidRequest, match="locked groups 1 and 2") as excinfo:
        validate_request(_players("A", "B", "C"), 2, locked_players=[["A", "B"], ["B", "C"]])
    assert excinfo.value.player_ids == ["B"]


def test_rejects_separation_of_a_player_from_itself() -> None:
    with pytest.raises(InvalidRequest):
        validate_request(_players("A", "B"), 2, separated_players=[["A", "A"]])


def test_rejects_non_list_entries() -> None:
    with pytest.raises(InvalidRequest):
        validate_request(_players("A", "B"), 2, locked_players=["AB"])
    with pytest.raises(InvalidRequest):
        validate_request(_players("A", "B"), 2, locked_players=[[["A"]]])


def test_normalizes_constraints() -> None:
    request = validate_request(
        _players("A", "B", "C", "D"),
        2,
        locked_players=[["A", "B", "A"], []],
        separated_players=[["C", "D", "A"], ["D", "C"]],
        use_jersey_colors=True,
    )
    assert request.locked_groups == (("A", "B"),)
    assert request.separated_pairs == (("C", "D"), ("C", "A"), ("D", "A"))
    assert request.use_jersey_colors is True
    assert request.roster_ids == ["A", "B", "C", "D"]


def test_accepts_mappings_and_requires_fields() -> None:
    request = validate_request([{"id": 7, "skill_weight": 2.5, "name": "Sam"}], 1)
    assert request.players == (Player(id=7, skill_weight=2.5, name="Sam"),)

    with pytest.raises(InvalidRequest, match="missing a skill_weight"):
        validate_request([{"id": 7}], 1)


def test_rejects_more_teams_than_the_cap() -> None:
    assert validate_request(_players("A"), 3, max_teams=3).num_teams == 3
    with pytest.raises(InvalidRequest, match="maximum supported is 3"):
        validate_request(_players("A"), 4, max_teams=3)


def test_default_team_cap_applies() -> None:
    with pytest.raises(InvalidRequest, match="maximum supported is 100"):
        validate_request(_players("A"), 3_000_000)


@pytest.mark.parametrize(
    "field, kwargs",
    [
        ("players", {"players": 5}),
        ("players", {"players": "AB"}),
        ("players", {"players": {"id": "A", "skill_weight": 1}}),
        ("locked_players", {"locked_players": 7}),
        ("locked_players", {"locked_players": "AB"}),
        ("separated_players", {"separated_players": {"A": "B"}}),
    ],
)
def test_rejects_non_list_fields(field, kwargs) -> None:
    args = {"players": _players("A", "B"), "num_teams": 2, **kwargs}
    with pytest.raises(InvalidRequest, match=field):
        validate_request(**args)


@pytest.mark.parametrize("value", ["false", 1, None])
def test_rejects_non_boolean_jersey_flag(value) -> None:
    with pytest.raises(InvalidRequest, match="use_jersey_colors"):
        validate_request(_players("A", "B"), 2, use_jersey_colors=value)
