"""
Simulation API endpoints.
Handles POST /simulate plus read access to simulation history.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from greencart.config import get_settings
from greencart.core.exceptions import (
    InsufficientDataError,
    SimulationNotFoundError,
    StorageFailureError,
)
from greencart.database import get_db
from greencart.schemas.simulation import SimulationRequest, SimulationReportResponse
from greencart.services.simulation_engine import RunParameters
from greencart.services.simulation_service import (
    build_report_response,
    execute_simulation,
    get_simulation,
    list_recent_simulations,
)

router = APIRouter(prefix="/simulate", tags=["Simulation"])


@router.post(
    "",
    response_model=SimulationReportResponse,
    status_code=status.HTTP_200_OK,
    summary="Run a delivery simulation",
    description="""
    Assigns every stored order to the first `driversAvailable` drivers
    round-robin, starting at `startTime` with at most `maxHoursPerDriver`
    hours each, then stores and returns the resulting report.
    """,
)
async def run_simulation(
    request: SimulationRequest,
    db: AsyncSession = Depends(get_db),
) -> SimulationReportResponse:
    params = RunParameters(
        drivers_available=request.drivers_available,
        start_time=request.start_time,
        max_hours_per_driver=request.max_hours_per_driver,
    )
    try:
        result = await execute_simulation(db, params)
    except InsufficientDataError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageFailureError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to run simulation",
        )
    return build_report_response(result)


@router.get(
    "/history",
    response_model=List[SimulationReportResponse],
    summary="Recent simulation runs",
    description="Most recent simulation reports, newest first.",
)
async def simulation_history(
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> List[SimulationReportResponse]:
    limit = limit or get_settings().history_limit
    try:
        results = await list_recent_simulations(db, limit)
    except StorageFailureError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load simulation history",
        )
    return [build_report_response(r) for r in results]


@router.get(
    "/{simulation_id}",
    response_model=SimulationReportResponse,
    summary="Get one simulation run",
)
async def get_simulation_report(
    simulation_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> SimulationReportResponse:
    try:
        result = await get_simulation(db, simulation_id)
    except SimulationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Simulation not found",
        )
    except StorageFailureError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load simulation",
        )
    return build_report_response(result)
