"""
Merge locked groups into blocks.

A block is the smallest set of players that has to move as one. Blocks are
built with a union-find over player ids seeded by every locked group, then
separation pairs are lifted from players to the blocks that contain them.
"""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, List, TypeVar

from teamgen.errors import InfeasibleConstraints
from teamgen.models import Block, PlayerId, TeamRequest

T = TypeVar("T", bound=Hashable)


class UnionFind(Generic[T]):
    """Disjoint sets with path halving and union by size."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._parent: Dict[T, T] = {}
        self._size: Dict[T, int] = {}
        for item in items:
            self.add(item)

    def add(self, item: T) -> None:
        if item not in self._parent:
            self._parent[item] = item
            self._size[item] = 1

    def find(self, item: T) -> T:
        parent = self._parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a: T, b: T) -> T:
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return root_a
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        return root_a

    def connected(self, a: T, b: T) -> bool:
        return self.find(a) == self.find(b)


def resolve_blocks(request: TeamRequest) -> List[Block]:
    uf: UnionFind[PlayerId] = UnionFind(request.roster_ids)
    for group in request.locked_groups:
        first = group[0]
        for pid in group[1:]:
            uf.union(first, pid)

    # number blocks by first appearance in the roster
    blocks: List[Block] = []
    block_of_root: Dict[PlayerId, Block] = {}
    for player in request.players:
        root = uf.find(player.id)
        block = block_of_root.get(root)
        if block is None:
            block = Block(id=len(blocks), member_ids=[], total_skill=0.0)
            block_of_root[root] = block
            blocks.append(block)
        block.member_ids.append(player.id)
        block.total_skill += player.skill_weight

    for first, second in request.separated_pairs:
        block_a = block_of_root[uf.find(first)]
        block_b = block_of_root[uf.find(second)]
        if block_a is block_b:
            raise InfeasibleConstraints(
                f"Players {first!r} and {second!r} are locked together but must be separated",
                [first, second],
                block_id=block_a.id,
            )
        block_a.separated_from.add(block_b.id)
        block_b.separated_from.add(block_a.id)

    return blocks
