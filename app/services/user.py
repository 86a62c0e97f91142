from uuid import UUID

from app.errors import BadRequest
from app.models import User
from app.schemas import AdminUserResponse, StaffCreate, UserResponse


class UserService:
    async def list_hotel_users(self, hotel_id: UUID) -> list[UserResponse]:
        users = await User.filter(hotel_id=hotel_id).order_by("-created_at")
        return [UserResponse.model_validate(u) for u in users]

    async def list_all_users(self) -> list[AdminUserResponse]:
        users = await User.all().select_related("hotel").order_by("-created_at")
        return [
            AdminUserResponse(
                **UserResponse.model_validate(u).model_dump(),
                hotel_name=u.hotel.name if u.hotel is not None else None,
            )
            for u in users
        ]

    async def add_staff(self, payload: StaffCreate, hotel_id: UUID) -> UserResponse:
        email = payload.email.lower()
        if await User.exists(email=email):
            raise BadRequest("Email already registered")
        user = await User.create(
            name=payload.name,
            email=email,
            role=payload.role,
            hotel_id=hotel_id,
            is_onboarded=True,
        )
        return UserResponse.model_validate(user)


user_service = UserService()