from __future__ import annotations

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from adapters.external.database.config_repository_mongodb import ConfigRepositoryMongoDB
from config.settings import Settings
from core.usecases.config_use_case import ConfigUseCase

from .auth import require_api_key
from .deps import get_db, get_settings
from .dtos.config_dtos import ConfigOutDTO, ConfigUpdateDTO

router = APIRouter(prefix="/config", tags=["config"])


def build_config_use_case(db: AsyncIOMotorDatabase, cfg: Settings) -> ConfigUseCase:
    """
    Build ConfigUseCase with the MongoDB repository and bootstrap defaults.
    """
    return ConfigUseCase(
        config_repo=ConfigRepositoryMongoDB(db),
        default_max_amount_usd=cfg.BOOTSTRAP_MAX_AMOUNT_USD,
        default_recheck_interval=cfg.BOOTSTRAP_RECHECK_INTERVAL,
    )


@router.get("", response_model=ConfigOutDTO)
async def get_config(
    db: AsyncIOMotorDatabase = Depends(get_db),
    cfg: Settings = Depends(get_settings),
) -> ConfigOutDTO:
    """
    Get the runtime configuration.
    """
    stored = await build_config_use_case(db, cfg).get_config()
    return ConfigOutDTO.model_validate(stored.model_dump())


@router.put("", response_model=ConfigOutDTO, dependencies=[Depends(require_api_key)])
async def update_config(
    dto: ConfigUpdateDTO,
    db: AsyncIOMotorDatabase = Depends(get_db),
    cfg: Settings = Depends(get_settings),
) -> ConfigOutDTO:
    """
    Merge the given fields into the runtime configuration.
    """
    stored = await build_config_use_case(db, cfg).update_config(dto.changes())
    return ConfigOutDTO.model_validate(stored.model_dump())
