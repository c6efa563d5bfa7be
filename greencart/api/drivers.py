"""
Drivers API endpoints.
CRUD over the driver roster used by simulations.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from greencart.core.exceptions import RecordNotFoundError
from greencart.database import get_db
from greencart.schemas.driver import DriverInput, DriverResponse
from greencart.services import record_service

router = APIRouter(prefix="/drivers", tags=["Drivers"])


@router.get(
    "",
    response_model=List[DriverResponse],
    summary="List drivers",
    description="Returns all drivers in roster order (the order simulations assign them in).",
)
async def list_drivers(db: AsyncSession = Depends(get_db)) -> List[DriverResponse]:
    drivers = await record_service.list_drivers(db)
    return [DriverResponse.model_validate(d) for d in drivers]


@router.post(
    "",
    response_model=DriverResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a driver",
)
async def create_driver(
    payload: DriverInput,
    db: AsyncSession = Depends(get_db),
) -> DriverResponse:
    driver = await record_service.create_driver(db, payload)
    return DriverResponse.model_validate(driver)


@router.put(
    "/{driver_id}",
    response_model=DriverResponse,
    summary="Update a driver",
)
async def update_driver(
    driver_id: UUID,
    payload: DriverInput,
    db: AsyncSession = Depends(get_db),
) -> DriverResponse:
    try:
        driver = await record_service.update_driver(db, driver_id, payload)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Driver with ID {driver_id} not found",
        )
    return DriverResponse.model_validate(driver)


@router.delete(
    "/{driver_id}",
    summary="Delete a driver",
)
async def delete_driver(
    driver_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    try:
        await record_service.delete_driver(db, driver_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Driver with ID {driver_id} not found",
        )
    return {"message": "Driver deleted successfully"}
