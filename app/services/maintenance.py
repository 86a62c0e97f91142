"""Out-of-band corrective jobs over the whole venue catalogue."""

from dataclasses import dataclass
from uuid import UUID

from app.models import Hotel, Venue
from app.services.venue import is_publicly_visible


@dataclass(frozen=True)
class FixResult:
    hotels_updated: int
    venues_updated: int


@dataclass(frozen=True)
class VenueReport:
    venue_id: UUID
    venue_name: str
    is_active: bool
    hotel_id: UUID
    hotel_name: str
    hotel_is_verified: bool
    hotel_is_deactivated: bool

    @property
    def is_visible(self) -> bool:
        return is_publicly_visible(
            self.is_active, self.hotel_is_verified, self.hotel_is_deactivated
        )


async def fix_venues() -> FixResult:
    """
    Mark every hotel verified and active and every venue active.
    Unconditional: running it twice leaves the same end state.
    """
    hotels_updated = await Hotel.all().update(is_verified=True, is_deactivated=False)
    venues_updated = await Venue.all().update(is_active=True)
    return FixResult(hotels_updated=hotels_updated, venues_updated=venues_updated)


async def check_venues() -> list[VenueReport]:
    venues = await Venue.all().select_related("hotel").order_by("name")
    return [
        VenueReport(
            venue_id=v.id,
            venue_name=v.name,
            is_active=v.is_active,
            hotel_id=v.hotel.id,
            hotel_name=v.hotel.name,
            hotel_is_verified=v.hotel.is_verified,
            hotel_is_deactivated=v.hotel.is_deactivated,
        )
        for v in venues
    ]
