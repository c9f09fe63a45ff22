from __future__ import annotations

import pytest

from teamgen.errors import InfeasibleConstraints
from teamgen.models import Player
from teamgen.resolver import UnionFind, resolve_blocks
from teamgen.validator import validate_request


def test_union_find_merges_components() -> None:
    uf = UnionFind("abcde")
    uf.union("a", "b")
    uf.union("c", "d")
    uf.union("b", "d")

    assert uf.connected("a", "c")
    assert not uf.connected("a", "e")
    assert uf.find("a") == uf.find("d")


def test_blocks_follow_roster_order_and_sum_skill() -> None:
    roster = [
        Player(id="A", skill_weight=1),
        Player(id="B", skill_weight=2),
        Player(id="C", skill_weight=3),
        Player(id="D", skill_weight=4),
    ]
    request = validate_request(roster, 2, locked_players=[["D", "B"]])
    blocks = resolve_blocks(request)

    assert [block.member_ids for block in blocks] == [["A"], ["B", "D"], ["C"]]
    assert [block.total_skill for block in blocks] == [1, 6, 3]
    assert [block.id for block in blocks] == [0, 1, 2]


def test_separations_are_lifted_to_blocks() -> None:
    roster = [Player(id=pid, skill_weight=1) for pid in "ABCD"]
    request = validate_request(roster, 2, locked_players=[["A", "B"]], separated_players=[["B", "C"], ["A", "D"]])
    blocks = resolve_blocks(request)

    by_member = {block.member_ids[0]: block for block in blocks}
    assert by_member["A"].separated_from == {by_member["C"].id, by_member["D"].id}
    assert by_member["C"].separated_from == {by_member["A"].id}
    assert by_member["D"].separated_from == {by_member["A"].id}


def test_separation_inside_a_block_is_infeasible() -> None:
    roster = [Player(id=pid, skill_weight=1) for pid in "ABC"]
    request = validate_request(roster, 3, locked_players=[["A", "B", "C"]], separated_players=[["C", "A"]])

    with pytest.raises(InfeasibleConstraints, match="locked together but must be separated") as excinfo:
        resolve_blocks(request)
    assert excinfo.value.player_ids == ["C", "A"]
    assert excinfo.value.block_id == 0
