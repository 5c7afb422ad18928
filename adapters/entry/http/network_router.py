from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from adapters.external.database.network_repository_mongodb import NetworkRepositoryMongoDB
from core.domain.entities.network_entity import NetworkEntity
from core.usecases.network_use_case import NetworkUseCase

from .auth import require_api_key
from .deps import ChainIdParam, get_db
from .dtos.network_dtos import (
    NetworkCreateDTO,
    NetworkFactoriesUpdateDTO,
    NetworkOutDTO,
    NetworkUpdateDTO,
)

router = APIRouter(prefix="/networks", tags=["networks"])


def _uc(db: AsyncIOMotorDatabase) -> NetworkUseCase:
    return NetworkUseCase(network_repo=NetworkRepositoryMongoDB(db))


def _out(network: NetworkEntity) -> NetworkOutDTO:
    return NetworkOutDTO.model_validate(network.model_dump())


@router.get("", response_model=List[NetworkOutDTO])
async def list_networks(db: AsyncIOMotorDatabase = Depends(get_db)) -> List[NetworkOutDTO]:
    """
    List all networks ordered by chain_id.
    """
    return [_out(n) for n in await _uc(db).list_networks()]


@router.get("/{chain_id}", response_model=NetworkOutDTO)
async def get_network(chain_id: ChainIdParam, db: AsyncIOMotorDatabase = Depends(get_db)) -> NetworkOutDTO:
    return _out(await _uc(db).get_network(chain_id))


@router.post(
    "",
    response_model=NetworkOutDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_network(dto: NetworkCreateDTO, db: AsyncIOMotorDatabase = Depends(get_db)) -> NetworkOutDTO:
    """
    Register a network. 409 if chain_id is already registered.
    """
    stored = await _uc(db).create_network(NetworkEntity(**dto.model_dump()))
    return _out(stored)


@router.put("/{chain_id}", response_model=NetworkOutDTO, dependencies=[Depends(require_api_key)])
async def update_network(
    chain_id: ChainIdParam,
    dto: NetworkUpdateDTO,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> NetworkOutDTO:
    """
    Partial update: fields absent from the body keep their stored value.
    """
    return _out(await _uc(db).update_network(chain_id, dto.changes()))


@router.put("/{chain_id}/factories", response_model=NetworkOutDTO, dependencies=[Depends(require_api_key)])
async def update_factories(
    chain_id: ChainIdParam,
    dto: NetworkFactoriesUpdateDTO,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> NetworkOutDTO:
    """
    Replace v2_factory_to_fee and aero_factory_addresses in one write.
    """
    stored = await _uc(db).update_factories(
        chain_id,
        v2_factory_to_fee=dto.v2_factory_to_fee,
        aero_factory_addresses=dto.aero_factory_addresses,
    )
    return _out(stored)


@router.delete(
    "/{chain_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_api_key)],
)
async def delete_network(chain_id: ChainIdParam, db: AsyncIOMotorDatabase = Depends(get_db)) -> Response:
    await _uc(db).delete_network(chain_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
