from datetime import UTC, datetime
from typing import List, Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, Relationship, SQLModel


class GroupPlayer(SQLModel, table=True):
    __tablename__ = "group_players"

    group_id: Optional[int] = Field(default=None, foreign_key="group.id", primary_key=True)
    player_id: Optional[int] = Field(default=None, foreign_key="player.id", primary_key=True)


class Player(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    skill_weight: int = Field(nullable=False, description="Skill level 1 (lowest) to 5 (highest)")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), nullable=False)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC), nullable=False)

    groups: List["Group"] = Relationship(back_populates="players", link_model=GroupPlayer)

    __table_args__ = (CheckConstraint("skill_weight >= 1 AND skill_weight <= 5", name="ck_skill_weight"),)


class Group(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), nullable=False)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC), nullable=False)

    players: List[Player] = Relationship(back_populates="groups", link_model=GroupPlayer)
