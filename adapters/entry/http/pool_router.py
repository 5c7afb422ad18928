from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from adapters.external.database.network_repository_mongodb import NetworkRepositoryMongoDB
from adapters.external.database.pool_repository_mongodb import PoolRepositoryMongoDB
from core.domain.entities.pool_entity import PoolEntity
from core.usecases.pool_use_case import PoolUseCase

from .auth import require_api_key
from .deps import ChainIdParam, get_db, parse_address
from .dtos.pool_dtos import CountOutDTO, PoolCreateDTO, PoolOutDTO, PoolUpdateDTO

router = APIRouter(prefix="/pools", tags=["pools"])


def build_pool_use_case(db: AsyncIOMotorDatabase) -> PoolUseCase:
    return PoolUseCase(pool_repo=PoolRepositoryMongoDB(db), network_repo=NetworkRepositoryMongoDB(db))


def _out(pool: PoolEntity) -> PoolOutDTO:
    return PoolOutDTO.model_validate({**pool.model_dump(), "deleted": pool.deleted})


@router.get("", response_model=List[PoolOutDTO])
async def list_pools(db: AsyncIOMotorDatabase = Depends(get_db)) -> List[PoolOutDTO]:
    return [_out(p) for p in await build_pool_use_case(db).list_pools()]


@router.get("/network/{network_id}", response_model=List[PoolOutDTO])
async def list_pools_by_network(
    network_id: ChainIdParam,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> List[PoolOutDTO]:
    return [_out(p) for p in await build_pool_use_case(db).list_by_network(network_id)]


@router.get("/network/{network_id}/address/{address}", response_model=PoolOutDTO)
async def get_pool_by_address(
    network_id: ChainIdParam,
    address: str,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> PoolOutDTO:
    """
    Look up a pool by (network_id, address). Address casing does not matter.
    """
    return _out(await build_pool_use_case(db).get_by_address(network_id, parse_address(address)))


@router.get("/network/{network_id}/count", response_model=CountOutDTO)
async def count_pools_by_network(
    network_id: ChainIdParam,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> CountOutDTO:
    return CountOutDTO(count=await build_pool_use_case(db).count_by_network(network_id))


@router.post(
    "",
    response_model=PoolOutDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_pool(dto: PoolCreateDTO, db: AsyncIOMotorDatabase = Depends(get_db)) -> PoolOutDTO:
    """
    Register a pool. The network must exist; (network_id, address) must be unused.
    """
    stored = await build_pool_use_case(db).create_pool(network_id=dto.network_id, address=dto.address)
    return _out(stored)


@router.put("/{pool_id}", response_model=PoolOutDTO, dependencies=[Depends(require_api_key)])
async def update_pool(
    pool_id: str,
    dto: PoolUpdateDTO,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> PoolOutDTO:
    return _out(await build_pool_use_case(db).update_pool(pool_id, dto.changes()))


@router.delete(
    "/{pool_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_api_key)],
)
async def delete_pool(pool_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> Response:
    """
    Soft delete. The pool keeps being listed, with deleted=true.
    """
    await build_pool_use_case(db).delete_pool(pool_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{pool_id}/hard",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_api_key)],
)
async def hard_delete_pool(pool_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> Response:
    """
    Permanently remove a pool that was soft-deleted before.
    """
    await build_pool_use_case(db).hard_delete_pool(pool_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
