from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PlayerCreate(BaseModel):
    name: str = Field(min_length=1)
    skill_weight: int = Field(ge=1, le=5, description="Skill level 1 (lowest) to 5 (highest)")


class Player(BaseModel):
    id: int
    name: str
    skill_weight: int
    created_at: Optional[datetime] = None


class GroupCreate(BaseModel):
    name: str = Field(min_length=1)


class Group(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None


class GroupDetail(Group):
    players: List[Player]


class AddPlayerToGroupRequest(BaseModel):
    player_id: int


class GenerateTeamsRequest(BaseModel):
    num_teams: int = Field(description="Number of teams to split the group into")
    locked_players: List[List[int]] = Field(
        default_factory=list, description="Groups of player ids that must share a team"
    )
    separated_players: List[List[int]] = Field(
        default_factory=list, description="Sets of player ids that must not share a team"
    )
    use_jersey_colors: bool = False


class Team(BaseModel):
    number: int
    players: List[int]
    total_skill: float
    color: Optional[str] = None


class GenerateTeamsResponse(BaseModel):
    group_id: int
    teams: List[Team]
    warnings: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    detail: str
    error: str
    players: List[int] = Field(default_factory=list)
    block: Optional[int] = None
    teams: Optional[List[int]] = None


class MessageResponse(BaseModel):
    message: str
