from datetime import datetime, timezone
from uuid import UUID

from loguru import logger
from tortoise.transactions import in_transaction

from app.errors import Conflict, Forbidden, NotFound, PreconditionFailed
from app.models import Hotel, User
from app.roles import UserRole
from app.schemas import HotelResponse, HotelSettingsUpdate, HotelSetup

# Nullable columns settings may clear by sending null
_CLEARABLE = {"address", "description"}


class HotelService:
    async def setup_hotel(self, user_id: UUID, payload: HotelSetup) -> HotelResponse:
        """Create a hotel tenant and make the caller its HOTEL_ADMIN."""
        user = await User.get_or_none(id=user_id)
        if user is None:
            raise NotFound("User not found")
        if user.hotel_id is not None or user.is_onboarded:  # type: ignore[attr-defined]
            raise PreconditionFailed("User is already associated with a hotel.")

        if await Hotel.exists(subdomain=payload.subdomain):
            raise Conflict("This subdomain is already taken.")

        async with in_transaction():
            hotel = await Hotel.create(
                **payload.model_dump(exclude_none=True),
                owner_id=user_id,
            )
            user.hotel_id = hotel.id  # type: ignore[attr-defined]
            user.role = UserRole.HOTEL_ADMIN  # type: ignore[assignment]
            user.is_onboarded = True
            await user.save(update_fields=["hotel_id", "role", "is_onboarded"])

        logger.info(
            "Hotel {} ({}) set up by user {}", hotel.id, hotel.subdomain, user_id
        )
        return HotelResponse.model_validate(hotel)

    async def get_settings(self, hotel_id: UUID) -> HotelResponse | None:
        hotel = await Hotel.get_or_none(id=hotel_id)
        if hotel is None:
            return None
        return HotelResponse.model_validate(hotel)

    async def update_settings(
        self, hotel_id: UUID, payload: HotelSettingsUpdate
    ) -> HotelResponse:
        hotel = await Hotel.get_or_none(id=hotel_id)
        if hotel is None:
            raise NotFound("Hotel not found")
        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k in _CLEARABLE
        }
        hotel.update_from_dict(changes)
        await hotel.save()
        return HotelResponse.model_validate(hotel)

    async def deactivate(self, hotel_id: UUID, user_id: UUID) -> HotelResponse:
        """Soft-delete a hotel. Only its owner may do this."""
        hotel = await Hotel.get_or_none(id=hotel_id)
        if hotel is None or hotel.owner_id != user_id:
            raise Forbidden("Only the hotel owner can deactivate the property.")

        hotel.is_deactivated = True
        hotel.deactivated_at = datetime.now(timezone.utc)
        await hotel.save(
            update_fields=["is_deactivated", "deactivated_at", "updated_at"]
        )
        logger.info("Hotel {} deactivated by owner {}", hotel_id, user_id)
        return HotelResponse.model_validate(hotel)


hotel_service = HotelService()
