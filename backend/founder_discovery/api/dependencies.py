"""Route dependencies: one DiscoveryService per request."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from founder_discovery.config import Settings, get_settings
from founder_discovery.infrastructure.database import get_db
from founder_discovery.services.discovery_service import DiscoveryService


async def get_discovery_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> DiscoveryService:
    return DiscoveryService(db, settings.validation_defaults())
