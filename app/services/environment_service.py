"""Environment lookup and registration."""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.environment import Environment
from app.schemas.environment import EnvironmentCreate

logger = logging.getLogger(__name__)


class EnvironmentService:
    """Service for managing environments."""

    async def list_environments(self, db: AsyncSession) -> List[Environment]:
        result = await db.execute(select(Environment).order_by(Environment.name))
        return list(result.scalars().all())

    async def get_environment(self, db: AsyncSession, environment_id: int) -> Optional[Environment]:
        result = await db.execute(select(Environment).where(Environment.id == environment_id))
        return result.scalar_one_or_none()

    async def require_environment(
        self, db: AsyncSession, environment_id: int, for_update: bool = False
    ) -> Environment:
        """
        Get an environment or raise.

        Args:
            db: Database session
            environment_id: Environment ID
            for_update: Lock the row until the current transaction ends

        Raises:
            ValueError: If the environment does not exist
        """
        query = select(Environment).where(Environment.id == environment_id)
        if for_update:
            query = query.with_for_update()

        result = await db.execute(query)
        environment = result.scalar_one_or_none()

        if not environment:
            raise ValueError(f"Environment {environment_id} not found")

        return environment

    async def create_environment(self, db: AsyncSession, data: EnvironmentCreate) -> Environment:
        environment = Environment(**data.model_dump())
        db.add(environment)
        await db.commit()
        await db.refresh(environment)

        logger.info(f"Created environment {environment.name} ({environment.id})")
        return environment


# Singleton instance
environment_service = EnvironmentService()
