"""WIGs router — /api/wigs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wigs.api.deps import get_session, get_wig_service
from wigs.api.schemas.wig import WigRequest, WigResponse
from wigs.services.wig_service import WigService

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"description": "Input validation failed"},
    404: {"description": "WIG not found"},
}


@router.post("", response_model=WigResponse, status_code=201, responses=_ERROR_RESPONSES)
@router.post("/", response_model=WigResponse, status_code=201, include_in_schema=False)
async def create_wig(
    body: WigRequest,
    session: AsyncSession = Depends(get_session),
    svc: WigService = Depends(get_wig_service),
) -> WigResponse:
    result = await svc.create(session, body.to_input())
    return WigResponse.model_validate(result.unwrap())


@router.get("", response_model=list[WigResponse])
@router.get("/", response_model=list[WigResponse], include_in_schema=False)
async def list_wigs(
    session: AsyncSession = Depends(get_session),
    svc: WigService = Depends(get_wig_service),
) -> list[WigResponse]:
    result = await svc.list_all(session)
    return [WigResponse.model_validate(view) for view in result.unwrap()]


@router.get("/{wig_id}", response_model=WigResponse, responses=_ERROR_RESPONSES)
async def get_wig(
    wig_id: int,
    session: AsyncSession = Depends(get_session),
    svc: WigService = Depends(get_wig_service),
) -> WigResponse:
    result = await svc.get(session, wig_id)
    return WigResponse.model_validate(result.unwrap())


@router.put("/{wig_id}", response_model=WigResponse, responses=_ERROR_RESPONSES)
async def update_wig(
    wig_id: int,
    body: WigRequest,
    session: AsyncSession = Depends(get_session),
    svc: WigService = Depends(get_wig_service),
) -> WigResponse:
    result = await svc.update(session, wig_id, body.to_input())
    return WigResponse.model_validate(result.unwrap())


@router.delete("/{wig_id}", status_code=204, response_class=Response, responses=_ERROR_RESPONSES)
async def delete_wig(
    wig_id: int,
    session: AsyncSession = Depends(get_session),
    svc: WigService = Depends(get_wig_service),
) -> Response:
    result = await svc.delete(session, wig_id)
    result.unwrap()
    return Response(status_code=204)
