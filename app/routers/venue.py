from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.deps import CurrentUser, get_current_user, require_hotel
from app.errors import NotFound
from app.schemas import PublicVenueResponse, VenueCreate, VenueResponse, VenueUpdate
from app.services.venue import venue_service

router = APIRouter(prefix="/rpc", tags=["venue"])


@router.get("/venue.getPublic", response_model=list[PublicVenueResponse])
async def get_public() -> list[PublicVenueResponse]:
    """Marketplace listing: active venues of verified, non-deactivated hotels."""
    return await venue_service.list_public()


@router.get("/venue.getAll", response_model=list[VenueResponse])
async def get_all(
    current_user: CurrentUser = Depends(get_current_user),
) -> list[VenueResponse]:
    if current_user.hotel_id is None:
        return []
    return await venue_service.list_venues(current_user.hotel_id)


@router.get("/venue.getById", response_model=VenueResponse)
async def get_by_id(
    id: UUID,
    current_user: CurrentUser = Depends(require_hotel),
) -> VenueResponse:
    venue = await venue_service.get_venue(id, current_user.hotel_id)
    if venue is None:
        raise NotFound("Venue not found")
    return venue


@router.post(
    "/venue.create",
    response_model=VenueResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create(
    payload: VenueCreate,
    current_user: CurrentUser = Depends(require_hotel),
) -> VenueResponse:
    return await venue_service.create_venue(payload, current_user.hotel_id)


@router.post("/venue.update", response_model=VenueResponse)
async def update(
    payload: VenueUpdate,
    current_user: CurrentUser = Depends(require_hotel),
) -> VenueResponse:
    return await venue_service.update_venue(payload, current_user.hotel_id)
