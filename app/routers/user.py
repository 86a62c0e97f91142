from fastapi import APIRouter, Depends, status

from app.deps import CurrentUser, get_current_user, require_hotel
from app.schemas import StaffCreate, UserResponse
from app.services.user import user_service

router = APIRouter(prefix="/rpc", tags=["user"])


@router.get("/user.getAll", response_model=list[UserResponse])
async def get_all(
    current_user: CurrentUser = Depends(get_current_user),
) -> list[UserResponse]:
    """Members of the caller's hotel. Callers without a hotel get an empty list."""
    if current_user.hotel_id is None:
        return []
    return await user_service.list_hotel_users(current_user.hotel_id)


@router.post(
    "/user.addStaff",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_staff(
    payload: StaffCreate,
    current_user: CurrentUser = Depends(require_hotel),
) -> UserResponse:
    return await user_service.add_staff(payload, current_user.hotel_id)
