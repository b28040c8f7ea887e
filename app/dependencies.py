from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.db.session import get_db_session
from app.services.engines.registry import EngineRegistry
from app.services.pipeline.orchestrator import VigenereAttack


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


# Database session dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with get_db_session() as session:
        yield session

DbSessionDep = Annotated[AsyncSession, Depends(get_db)]


# Attack pipeline dependency
def get_attack(settings: SettingsDep) -> VigenereAttack:
    """Build the attack pipeline from the current settings."""
    return VigenereAttack(settings)

AttackDep = Annotated[VigenereAttack, Depends(get_attack)]


# Engine registry dependency
def get_registry() -> EngineRegistry:
    """Get the engine registry."""
    return EngineRegistry()

RegistryDep = Annotated[EngineRegistry, Depends(get_registry)]
