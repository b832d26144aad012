"""
MemoPad Backend — Memo Route Handlers
=======================================

What:  REST endpoints over MemoRepository.
How:   Each handler takes a repository bound to the request's session,
       calls exactly one repository operation, and shapes the response.
Who:   Called by the memo list, detail and editor screens of the frontend.

Caching:
    Memos are mutable, so responses carry no cache headers.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.exceptions import NotFoundError
from app.schemas.memo import (
    ErrorResponse,
    Memo,
    MemoCountResponse,
    MemoForm,
    SeedResponse,
)
from app.services.memo_repository import MemoRepository, get_memo_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Memos"])

_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}


@router.get(
    "/memos",
    response_model=List[Memo],
    responses=_SERVER_ERROR,
    summary="List all memos, newest first",
)
async def list_memos(
    repo: MemoRepository = Depends(get_memo_repository),
) -> List[Memo]:
    return await repo.list_memos()


@router.get(
    "/memos/count",
    response_model=MemoCountResponse,
    summary="Count stored memos",
    description="Returns 0 when the count cannot be determined.",
)
async def count_memos(
    repo: MemoRepository = Depends(get_memo_repository),
) -> MemoCountResponse:
    return MemoCountResponse(count=await repo.count_memos())


@router.post(
    "/memos/seed",
    response_model=SeedResponse,
    responses=_SERVER_ERROR,
    summary="Insert sample memos into an empty store",
    description=(
        "Inserts six sample memos when no memos exist. Returns seeded=false "
        "without changes when the store already has data."
    ),
)
async def seed_sample_data(
    repo: MemoRepository = Depends(get_memo_repository),
) -> SeedResponse:
    return SeedResponse(seeded=await repo.seed_sample_data())


@router.get(
    "/memos/{memo_id}",
    response_model=Memo,
    responses={
        404: {"description": "Memo not found", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Get a single memo by ID",
)
async def get_memo(
    memo_id: str,
    repo: MemoRepository = Depends(get_memo_repository),
) -> Memo:
    memo = await repo.get_memo_by_id(memo_id)
    if memo is None:
        raise NotFoundError(resource="memo", resource_id=memo_id)
    return memo


@router.post(
    "/memos",
    status_code=status.HTTP_201_CREATED,
    response_model=Memo,
    responses=_SERVER_ERROR,
    summary="Create a memo",
)
async def create_memo(
    form: MemoForm,
    repo: MemoRepository = Depends(get_memo_repository),
) -> Memo:
    return await repo.create_memo(form)


@router.put(
    "/memos/{memo_id}",
    response_model=Memo,
    responses={
        404: {"description": "Memo not found", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Overwrite a memo",
    description="Replaces title, content, category and tags. This is not a partial update.",
)
async def update_memo(
    memo_id: str,
    form: MemoForm,
    repo: MemoRepository = Depends(get_memo_repository),
) -> Memo:
    return await repo.update_memo(memo_id, form)


@router.delete(
    "/memos/{memo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_SERVER_ERROR,
    summary="Delete a memo",
    description="Deleting an ID that does not exist succeeds.",
)
async def delete_memo(
    memo_id: str,
    repo: MemoRepository = Depends(get_memo_repository),
) -> Response:
    await repo.delete_memo(memo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/memos",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_SERVER_ERROR,
    summary="Delete every memo",
)
async def clear_all_memos(
    repo: MemoRepository = Depends(get_memo_repository),
) -> Response:
    await repo.clear_all_memos()
    logger.warning("All memos cleared by API request")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
