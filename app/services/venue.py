import random
import re
import string
from uuid import UUID

from app.errors import NotFound
from app.models import Venue
from app.schemas import PublicVenueResponse, VenueCreate, VenueResponse, VenueUpdate

_SLUG_ALPHABET = string.ascii_lowercase + string.digits

# NOT NULL columns; a null in an update means "leave as is"
_REQUIRED = {"name"}


def is_publicly_visible(
    venue_active: bool, hotel_verified: bool, hotel_deactivated: bool
) -> bool:
    """A venue shows on the marketplace only if it and its hotel are live."""
    return venue_active and hotel_verified and not hotel_deactivated


def make_slug(name: str) -> str:
    base = re.sub(r"\s+", "-", name.strip().lower())
    suffix = "".join(random.choices(_SLUG_ALPHABET, k=5))
    return f"{base}-{suffix}"


class VenueService:
    async def list_venues(self, hotel_id: UUID) -> list[VenueResponse]:
        venues = await Venue.filter(hotel_id=hotel_id).order_by("-created_at")
        return [VenueResponse.model_validate(v) for v in venues]

    async def get_venue(
        self, venue_id: UUID, hotel_id: UUID
    ) -> VenueResponse | None:
        inst = await Venue.get_or_none(id=venue_id, hotel_id=hotel_id)
        if inst is None:
            return None
        return VenueResponse.model_validate(inst)

    async def create_venue(
        self, payload: VenueCreate, hotel_id: UUID
    ) -> VenueResponse:
        inst = await Venue.create(
            **payload.model_dump(),
            hotel_id=hotel_id,
            slug=make_slug(payload.name),
        )
        return VenueResponse.model_validate(inst)

    async def update_venue(
        self, payload: VenueUpdate, hotel_id: UUID
    ) -> VenueResponse:
        inst = await Venue.get_or_none(id=payload.id, hotel_id=hotel_id)
        if inst is None:
            raise NotFound("Venue not found")
        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True, exclude={"id"}).items()
            if v is not None or k not in _REQUIRED
        }
        inst.update_from_dict(changes)
        await inst.save()
        return VenueResponse.model_validate(inst)

    async def list_public(self) -> list[PublicVenueResponse]:
        venues = (
            await Venue.filter(
                is_active=True,
                hotel__is_verified=True,
                hotel__is_deactivated=False,
            )
            .select_related("hotel")
            .order_by("-created_at")
        )
        return [
            PublicVenueResponse(
                **VenueResponse.model_validate(v).model_dump(),
                hotel_name=v.hotel.name,
            )
            for v in venues
        ]


venue_service = VenueService()
