from fastapi import APIRouter, Depends, status

from app.deps import CurrentUser, get_current_user, require_hotel
from app.errors import PreconditionFailed
from app.roles import UserRole
from app.schemas import HotelResponse, HotelSettingsUpdate, HotelSetup
from app.services.hotel import hotel_service
from app.sessions import refresh_session

router = APIRouter(prefix="/rpc", tags=["hotel"])


@router.post(
    "/hotel.setup",
    response_model=HotelResponse,
    status_code=status.HTTP_201_CREATED,
)
async def setup(
    payload: HotelSetup,
    current_user: CurrentUser = Depends(get_current_user),
) -> HotelResponse:
    """Onboard the caller as the owner of a new hotel tenant."""
    hotel = await hotel_service.setup_hotel(current_user.id, payload)

    # The caller's session now belongs to the new tenant
    if current_user.token:
        current_user.hotel_id = hotel.id
        current_user.role = UserRole.HOTEL_ADMIN
        current_user.is_onboarded = True
        await refresh_session(current_user.token, current_user.to_session())
    return hotel


@router.get("/hotel.getSettings", response_model=HotelResponse)
async def get_settings(
    current_user: CurrentUser = Depends(get_current_user),
) -> HotelResponse:
    if current_user.hotel_id is None:
        raise PreconditionFailed("User is not attached to a hotel")
    hotel = await hotel_service.get_settings(current_user.hotel_id)
    if hotel is None:
        raise PreconditionFailed("User is not attached to a hotel")
    return hotel


@router.post("/hotel.updateSettings", response_model=HotelResponse)
async def update_settings(
    payload: HotelSettingsUpdate,
    current_user: CurrentUser = Depends(require_hotel),
) -> HotelResponse:
    return await hotel_service.update_settings(current_user.hotel_id, payload)


@router.post("/hotel.deactivate", response_model=HotelResponse)
async def deactivate(
    current_user: CurrentUser = Depends(require_hotel),
) -> HotelResponse:
    return await hotel_service.deactivate(current_user.hotel_id, current_user.id)
