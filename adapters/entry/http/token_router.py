from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from adapters.external.database.network_repository_mongodb import NetworkRepositoryMongoDB
from adapters.external.database.token_repository_mongodb import TokenRepositoryMongoDB
from core.domain.entities.token_entity import TokenEntity
from core.usecases.token_use_case import TokenUseCase

from .auth import require_api_key
from .deps import ChainIdParam, get_db, parse_address
from .dtos.pool_dtos import CountOutDTO
from .dtos.token_dtos import TokenCreateDTO, TokenOutDTO, TokenUpdateDTO

router = APIRouter(prefix="/tokens", tags=["tokens"])


def _uc(db: AsyncIOMotorDatabase) -> TokenUseCase:
    return TokenUseCase(token_repo=TokenRepositoryMongoDB(db), network_repo=NetworkRepositoryMongoDB(db))


def _out(token: TokenEntity) -> TokenOutDTO:
    return TokenOutDTO.model_validate(token.model_dump())


@router.get("", response_model=List[TokenOutDTO])
async def list_tokens(db: AsyncIOMotorDatabase = Depends(get_db)) -> List[TokenOutDTO]:
    return [_out(t) for t in await _uc(db).list_tokens()]


@router.get("/network/{network_id}", response_model=List[TokenOutDTO])
async def list_tokens_by_network(
    network_id: ChainIdParam,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> List[TokenOutDTO]:
    return [_out(t) for t in await _uc(db).list_by_network(network_id)]


@router.get("/network/{network_id}/address/{address}", response_model=TokenOutDTO)
async def get_token_by_address(
    network_id: ChainIdParam,
    address: str,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> TokenOutDTO:
    return _out(await _uc(db).get_by_address(network_id, parse_address(address)))


@router.get("/network/{network_id}/count", response_model=CountOutDTO)
async def count_tokens_by_network(
    network_id: ChainIdParam,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> CountOutDTO:
    return CountOutDTO(count=await _uc(db).count_by_network(network_id))


@router.post(
    "",
    response_model=TokenOutDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_token(dto: TokenCreateDTO, db: AsyncIOMotorDatabase = Depends(get_db)) -> TokenOutDTO:
    stored = await _uc(db).create_token(**dto.model_dump())
    return _out(stored)


@router.put("/{token_id}", response_model=TokenOutDTO, dependencies=[Depends(require_api_key)])
async def update_token(
    token_id: str,
    dto: TokenUpdateDTO,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> TokenOutDTO:
    """
    Partial update of token metadata (name, symbol, decimals).
    """
    return _out(await _uc(db).update_token(token_id, dto.changes()))


@router.delete(
    "/network/{network_id}/address/{address}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_api_key)],
)
async def delete_token_by_address(
    network_id: ChainIdParam,
    address: str,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> Response:
    await _uc(db).delete_by_address(network_id, parse_address(address))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
