"""Environment endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.environment import EnvironmentCreate, EnvironmentInDB
from app.services.environment_service import environment_service

router = APIRouter(prefix="/environments", tags=["environments"])


@router.get("", response_model=List[EnvironmentInDB])
async def list_environments(db: AsyncSession = Depends(get_db)):
    """List all environments ordered by name."""
    return await environment_service.list_environments(db)


@router.get("/{environment_id}", response_model=EnvironmentInDB)
async def get_environment(
    environment_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a specific environment by ID.

    Args:
        environment_id: Environment ID
        db: Database session

    Returns:
        Environment details
    """
    environment = await environment_service.get_environment(db, environment_id)

    if not environment:
        raise HTTPException(status_code=404, detail="Environment not found")

    return environment


@router.post("", response_model=EnvironmentInDB, status_code=201)
async def create_environment(
    environment: EnvironmentCreate,
    db: AsyncSession = Depends(get_db),
):
    """Register a new test environment."""
    return await environment_service.create_environment(db, environment)
