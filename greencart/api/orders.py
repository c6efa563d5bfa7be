"""
Orders API endpoints.
CRUD over delivery orders. An order may only reference an existing routeId.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from greencart.core.exceptions import (
    RecordConflictError,
    RecordNotFoundError,
    UnknownRouteError,
)
from greencart.database import get_db
from greencart.schemas.order import OrderInput, OrderResponse
from greencart.services import record_service

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get(
    "",
    response_model=List[OrderResponse],
    summary="List orders",
)
async def list_orders(db: AsyncSession = Depends(get_db)) -> List[OrderResponse]:
    orders = await record_service.list_orders(db)
    return [OrderResponse.model_validate(o) for o in orders]


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an order",
    description="400 when routeId does not exist, 409 when orderId is taken.",
)
async def create_order(
    payload: OrderInput,
    db: AsyncSession = Depends(get_db),
) -> OrderResponse:
    try:
        order = await record_service.create_order(db, payload)
    except UnknownRouteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RecordConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return OrderResponse.model_validate(order)


@router.put(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Update an order",
)
async def update_order(
    order_id: UUID,
    payload: OrderInput,
    db: AsyncSession = Depends(get_db),
) -> OrderResponse:
    try:
        order = await record_service.update_order(db, order_id, payload)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with ID {order_id} not found",
        )
    except UnknownRouteError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RecordConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return OrderResponse.model_validate(order)


@router.delete(
    "/{order_id}",
    summary="Delete an order",
)
async def delete_order(
    order_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    try:
        await record_service.delete_order(db, order_id)
    except RecordNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with ID {order_id} not found",
        )
    return {"message": "Order deleted successfully"}
