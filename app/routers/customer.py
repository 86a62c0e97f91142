from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.deps import CurrentUser, get_current_user, require_hotel
from app.errors import NotFound
from app.schemas import CustomerCreate, CustomerResponse, CustomerUpdate
from app.services.customer import customer_service

router = APIRouter(prefix="/rpc", tags=["customer"])


@router.get("/customer.getAll", response_model=list[CustomerResponse])
async def get_all(
    current_user: CurrentUser = Depends(get_current_user),
) -> list[CustomerResponse]:
    """Customers of the caller's hotel, newest first."""
    if current_user.hotel_id is None:
        return []
    return await customer_service.list_customers(current_user.hotel_id)


@router.get("/customer.getById", response_model=CustomerResponse)
async def get_by_id(
    id: UUID,
    current_user: CurrentUser = Depends(require_hotel),
) -> CustomerResponse:
    customer = await customer_service.get_customer(id, current_user.hotel_id)
    if customer is None:
        raise NotFound("Customer not found")
    return customer


@router.post(
    "/customer.create",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create(
    payload: CustomerCreate,
    current_user: CurrentUser = Depends(require_hotel),
) -> CustomerResponse:
    return await customer_service.create_customer(payload, current_user.hotel_id)


@router.post("/customer.update", response_model=CustomerResponse)
async def update(
    payload: CustomerUpdate,
    current_user: CurrentUser = Depends(require_hotel),
) -> CustomerResponse:
    return await customer_service.update_customer(payload, current_user.hotel_id)
