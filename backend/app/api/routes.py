from datetime import UTC, datetime
from typing import Iterable, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from app import models
from app.core.config import get_settings
from app.core.logging_config import get_logger
from app.db import get_session
from app.schemas import (
    AddPlayerToGroupRequest,
    ErrorResponse,
    GenerateTeamsRequest,
    GenerateTeamsResponse,
    Group,
    GroupCreate,
    GroupDetail,
    MessageResponse,
    Player,
    PlayerCreate,
    Team,
)
from teamgen import Player as RosterPlayer
from teamgen import generate_teams as generate_balanced_teams

router = APIRouter()
logger = get_logger(__name__)


def _serialize_player(player: models.Player) -> Player:
    return Player(
        id=player.id,
        name=player.name,
        skill_weight=player.skill_weight,
        created_at=player.created_at,
    )


def _serialize_group(group: models.Group) -> Group:
    return Group(id=group.id, name=group.name, created_at=group.created_at)


def _roster_snapshot(players: Iterable[models.Player]) -> List[RosterPlayer]:
    """Read-only engine snapshot, ordered by id so generation is repeatable."""
    return [
        RosterPlayer(id=p.id, skill_weight=p.skill_weight, name=p.name)
        for p in sorted(players, key=lambda p: p.id)
    ]


def _get_group_or_404(session: Session, group_id: int) -> models.Group:
    group = session.get(models.Group, group_id)
    if not group:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return group


def _get_player_or_404(session: Session, player_id: int) -> models.Player:
    player = session.get(models.Player, player_id)
    if not player:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    return player


@router.post("/players", response_model=Player, status_code=status.HTTP_201_CREATED, tags=["players"])
def create_player(request: PlayerCreate, session: Session = Depends(get_session)) -> Player:
    player = models.Player(name=request.name.strip(), skill_weight=request.skill_weight)
    session.add(player)
    session.commit()
    session.refresh(player)
    return _serialize_player(player)


@router.get("/players", response_model=List[Player], tags=["players"])
def list_players(session: Session = Depends(get_session)) -> List[Player]:
    players = session.exec(select(models.Player).order_by(models.Player.name, models.Player.id)).all()
    return [_serialize_player(p) for p in players]


@router.post("/groups", response_model=Group, status_code=status.HTTP_201_CREATED, tags=["groups"])
def create_group(request: GroupCreate, session: Session = Depends(get_session)) -> Group:
    group = models.Group(name=request.name.strip())
    session.add(group)
    session.commit()
    session.refresh(group)
    return _serialize_group(group)


@router.get("/groups", response_model=List[Group], tags=["groups"])
def list_groups(session: Session = Depends(get_session)) -> List[Group]:
    groups = session.exec(select(models.Group).order_by(models.Group.created_at.desc(), models.Group.id.desc())).all()
    return [_serialize_group(g) for g in groups]


@router.get("/groups/{group_id}", response_model=GroupDetail, tags=["groups"])
def get_group(group_id: int, session: Session = Depends(get_session)) -> GroupDetail:
    group = _get_group_or_404(session, group_id)
    return GroupDetail(
        id=group.id,
        name=group.name,
        created_at=group.created_at,
        players=[_serialize_player(p) for p in sorted(group.players, key=lambda p: p.id)],
    )


@router.post("/groups/{group_id}/players", response_model=MessageResponse, tags=["groups"])
def add_player_to_group(
    group_id: int,
    request: AddPlayerToGroupRequest,
    session: Session = Depends(get_session),
) -> MessageResponse:
    group = _get_group_or_404(session, group_id)
    player = _get_player_or_404(session, request.player_id)
    if player not in group.players:
        group.players.append(player)
        group.updated_at = datetime.now(UTC)
        session.add(group)
        session.commit()
    return MessageResponse(message="player added to group")


@router.delete("/groups/{group_id}/players/{player_id}", response_model=MessageResponse, tags=["groups"])
def remove_player_from_group(
    group_id: int,
    player_id: int,
    session: Session = Depends(get_session),
) -> MessageResponse:
    group = _get_group_or_404(session, group_id)
    player = _get_player_or_404(session, player_id)
    if player not in group.players:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player is not in this group")
    group.players.remove(player)
    group.updated_at = datetime.now(UTC)
    session.add(group)
    session.commit()
    return MessageResponse(message="player removed from group")


@router.post(
    "/groups/{group_id}/generate-teams",
    response_model=GenerateTeamsResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
    tags=["teams"],
)
def generate_teams(
    group_id: int,
    request: GenerateTeamsRequest,
    session: Session = Depends(get_session),
) -> GenerateTeamsResponse:
    """Split the group's players into balanced teams; nothing is persisted."""
    group = _get_group_or_404(session, group_id)
    if not group.players:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Group has no players")

    settings = get_settings()
    log = logger.bind(group_id=group_id)
    log.info("generate_teams_requested", num_teams=request.num_teams, roster_size=len(group.players))

    # Engine errors propagate to the app-level handlers registered in main.py.
    assignment = generate_balanced_teams(
        _roster_snapshot(group.players),
        request.num_teams,
        request.locked_players,
        request.separated_players,
        request.use_jersey_colors,
        palette=settings.jersey_colors,
        max_roster_size=settings.max_roster_size,
        max_teams=settings.max_teams,
    )

    return GenerateTeamsResponse(
        group_id=group_id,
        teams=[
            Team(
                number=team.number,
                players=list(team.players),
                total_skill=team.total_skill,
                color=team.color,
            )
            for team in assignment.teams
        ],
        warnings=list(assignment.warnings),
    )
