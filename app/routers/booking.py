from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.deps import CurrentUser, get_current_user, require_hotel
from app.errors import NotFound
from app.schemas import (
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
    IdInput,
)
from app.services.booking import booking_service

router = APIRouter(prefix="/rpc", tags=["booking"])


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@router.get("/booking.getAll", response_model=list[BookingResponse])
async def get_all(
    current_user: CurrentUser = Depends(get_current_user),
) -> list[BookingResponse]:
    """Bookings of the caller's hotel, latest event first."""
    if current_user.hotel_id is None:
        return []
    return await booking_service.list_bookings(current_user.hotel_id)


@router.get("/booking.getById", response_model=BookingResponse)
async def get_by_id(
    id: UUID,
    current_user: CurrentUser = Depends(require_hotel),
) -> BookingResponse:
    booking = await booking_service.get_booking(id, current_user.hotel_id)
    if booking is None:
        raise NotFound("Booking not found")
    return booking


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@router.post(
    "/booking.create",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create(
    payload: BookingCreate,
    current_user: CurrentUser = Depends(require_hotel),
) -> BookingResponse:
    return await booking_service.create_booking(
        payload,
        hotel_id=current_user.hotel_id,
        created_by_id=current_user.id,
    )


@router.post("/booking.update", response_model=BookingResponse)
async def update(
    payload: BookingUpdate,
    current_user: CurrentUser = Depends(require_hotel),
) -> BookingResponse:
    return await booking_service.update_booking(payload, current_user.hotel_id)


@router.post("/booking.updateStatus", response_model=BookingResponse)
async def update_status(
    payload: BookingStatusUpdate,
    current_user: CurrentUser = Depends(require_hotel),
) -> BookingResponse:
    return await booking_service.update_status(
        payload.id,
        current_user.hotel_id,
        payload.status,
    )


@router.post("/booking.cancel", response_model=BookingResponse)
async def cancel(
    payload: IdInput,
    current_user: CurrentUser = Depends(require_hotel),
) -> BookingResponse:
    return await booking_service.cancel(payload.id, current_user.hotel_id)
