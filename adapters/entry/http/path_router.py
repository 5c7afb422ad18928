from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from adapters.external.database.network_repository_mongodb import NetworkRepositoryMongoDB
from adapters.external.database.path_repository_mongodb import PathRepositoryMongoDB
from core.domain.entities.path_entity import PathEntity
from core.usecases.path_use_case import PathUseCase

from .auth import require_api_key
from .deps import ChainIdParam, get_db, parse_address
from .dtos.path_dtos import PathCreateDTO, PathOutDTO, PathUpdateDTO
from .pool_router import build_pool_use_case

router = APIRouter(prefix="/paths", tags=["paths"])


def _uc(db: AsyncIOMotorDatabase) -> PathUseCase:
    return PathUseCase(
        path_repo=PathRepositoryMongoDB(db),
        network_repo=NetworkRepositoryMongoDB(db),
        pool_use_case=build_pool_use_case(db),
    )


def _out(path: PathEntity) -> PathOutDTO:
    return PathOutDTO.model_validate({**path.model_dump(), "deleted": path.deleted})


@router.get("", response_model=List[PathOutDTO])
async def list_paths(db: AsyncIOMotorDatabase = Depends(get_db)) -> List[PathOutDTO]:
    return [_out(p) for p in await _uc(db).list_paths()]


@router.get("/anchor-token/{address}", response_model=List[PathOutDTO])
async def list_paths_by_anchor_token(address: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> List[PathOutDTO]:
    """
    List paths organized around the given anchor token (case-insensitive match).
    """
    items = await _uc(db).list_by_anchor_token(parse_address(address, "anchor_token"))
    return [_out(p) for p in items]


@router.get("/chain/{chain_id}", response_model=List[PathOutDTO])
async def list_paths_by_chain(chain_id: ChainIdParam, db: AsyncIOMotorDatabase = Depends(get_db)) -> List[PathOutDTO]:
    return [_out(p) for p in await _uc(db).list_by_chain_id(chain_id)]


@router.get("/{path_id}", response_model=PathOutDTO)
async def get_path(path_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> PathOutDTO:
    return _out(await _uc(db).get_path(path_id))


@router.post(
    "",
    response_model=PathOutDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_path(dto: PathCreateDTO, db: AsyncIOMotorDatabase = Depends(get_db)) -> PathOutDTO:
    """
    Store a path. Pools used by its hops are registered for the chain if the network exists.
    """
    stored = await _uc(db).create_path(PathEntity.model_validate(dto.model_dump()))
    return _out(stored)


@router.put("/{path_id}", response_model=PathOutDTO, dependencies=[Depends(require_api_key)])
async def update_path(
    path_id: str,
    dto: PathUpdateDTO,
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> PathOutDTO:
    return _out(await _uc(db).update_path(path_id, dto.changes()))


@router.delete(
    "/{path_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_api_key)],
)
async def delete_path(path_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> Response:
    """
    Soft delete. The path stays readable with deleted=true.
    """
    await _uc(db).delete_path(path_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{path_id}/undelete", response_model=PathOutDTO, dependencies=[Depends(require_api_key)])
async def undelete_path(path_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> PathOutDTO:
    return _out(await _uc(db).undelete_path(path_id))


@router.delete(
    "/{path_id}/hard",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_api_key)],
)
async def hard_delete_path(path_id: str, db: AsyncIOMotorDatabase = Depends(get_db)) -> Response:
    """
    Permanently remove a path that was soft-deleted before.
    """
    await _uc(db).hard_delete_path(path_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
