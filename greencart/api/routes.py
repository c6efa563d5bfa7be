"""
Routes API endpoints.
CRUD over delivery routes; routeId is unique and referenced by orders.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from greencart.core.exceptions import RecordConflictError, RecordNotFoundError
from greencart.database import get_db
from greencart.schemas.route import RouteInput, RouteResponse
from greencart.services import record_service

router = APIRouter(prefix="/routes", tags=["Routes"])


@router.get(
    "",
    response_model=List[RouteResponse],
    summary="List routes",
)
async def list_routes(db: AsyncSession = Depends(get_db)) -> List[RouteResponse]:
    routes = await record_service.list_routes(db)
    return [RouteResponse.model_validate(r) for r in routes]


@router.post(
    "",
    response_model=RouteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a route",
    description="Fails with 409 when the routeId is already in use.",
)
async def create_route(
    payload: RouteInput,
    db: AsyncSession = Depends(get_db),
) -> RouteResponse:
    try:
        route = await record_service.create_route(db, payload)
    except RecordConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return RouteResponse.model_validate(route)


@router.put(
    "/{route_id}",
    response_model=RouteResponse,
    summary="Update a route",
)
async def update_route(
    route_id: UUID,
    payload: RouteInput,
    db: AsyncSession = Depends(get_db),
) -> RouteResponse:
    try:
        route = await record_service.update_route(db, route_id, payload)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Route with ID {route_id} not found",
        )
    except RecordConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return RouteResponse.model_validate(route)


@router.delete(
    "/{route_id}",
    summary="Delete a route",
)
async def delete_route(
    route_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    try:
        await record_service.delete_route(db, route_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Route with ID {route_id} not found",
        )
    return {"message": "Route deleted successfully"}
