"""Team and user endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.team import Team
from app.models.user import User
from app.schemas.team import TeamCreate, TeamInDB, UserCreate, UserInDB

router = APIRouter(tags=["teams"])


@router.get("/teams", response_model=List[TeamInDB])
async def list_teams(db: AsyncSession = Depends(get_db)):
    """List all teams ordered by name."""
    result = await db.execute(select(Team).order_by(Team.name))
    return result.scalars().all()


@router.post("/teams", response_model=TeamInDB, status_code=201)
async def create_team(
    team: TeamCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a team that can hold bookings."""
    db_team = Team(**team.model_dump())
    db.add(db_team)
    await db.commit()
    await db.refresh(db_team)

    return db_team


@router.post("/users", response_model=UserInDB, status_code=201)
async def create_user(
    user: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a user who can request bookings.

    Args:
        user: Username to register
        db: Database session

    Returns:
        Created user
    """
    result = await db.execute(select(User).where(User.username == user.username))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Username already exists")

    db_user = User(**user.model_dump())
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)

    return db_user
