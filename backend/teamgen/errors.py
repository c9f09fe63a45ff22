"""
Error taxonomy for team generation.

Every failure carries a human-readable ``reason`` plus the player ids that caused
it so callers can point the organizer at the offending part of the request.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from teamgen.models import PlayerId


class TeamGenerationError(Exception):
    code = "team_generation_error"

    def __init__(self, reason: str, player_ids: Iterable[PlayerId] = ()) -> None:
        super().__init__(reason)
        self.reason = reason
        self.player_ids: List[PlayerId] = list(player_ids)

    def to_dict(self) -> dict:
        return {"detail": self.reason, "error": self.code, "players": list(self.player_ids)}


class InvalidRequest(TeamGenerationError):
    """Malformed or self-contradictory input, caught before any placement."""

    code = "invalid_request"


class InfeasibleConstraints(TeamGenerationError):
    """Lock/separate constraints that admit no placement."""

    code = "infeasible_constraints"

    def __init__(
        self,
        reason: str,
        player_ids: Iterable[PlayerId] = (),
        *,
        block_id: Optional[int] = None,
        team_numbers: Iterable[int] = (),
    ) -> None:
        super().__init__(reason, player_ids)
        self.block_id = block_id
        self.team_numbers: List[int] = list(team_numbers)

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.block_id is not None:
            data["block"] = self.block_id
        if self.team_numbers:
            data["teams"] = list(self.team_numbers)
        return data


class ConfigurationError(TeamGenerationError):
    """Bad process-wide configuration; fatal at startup, never per request."""

    code = "configuration_error"
