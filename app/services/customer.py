from uuid import UUID

from app.errors import NotFound
from app.models import Customer
from app.schemas import CustomerCreate, CustomerResponse, CustomerUpdate

# Columns that are NOT NULL; a null in an update means "leave as is"
_REQUIRED = {"company_name", "type"}


class CustomerService:
    async def list_customers(self, hotel_id: UUID) -> list[CustomerResponse]:
        customers = await Customer.filter(hotel_id=hotel_id).order_by("-created_at")
        return [CustomerResponse.model_validate(c) for c in customers]

    async def get_customer(
        self, customer_id: UUID, hotel_id: UUID
    ) -> CustomerResponse | None:
        inst = await Customer.get_or_none(id=customer_id, hotel_id=hotel_id)
        if inst is None:
            return None
        return CustomerResponse.model_validate(inst)

    async def create_customer(
        self, payload: CustomerCreate, hotel_id: UUID
    ) -> CustomerResponse:
        inst = await Customer.create(**payload.model_dump(), hotel_id=hotel_id)
        return CustomerResponse.model_validate(inst)

    async def update_customer(
        self, payload: CustomerUpdate, hotel_id: UUID
    ) -> CustomerResponse:
        inst = await Customer.get_or_none(id=payload.id, hotel_id=hotel_id)
        if inst is None:
            raise NotFound("Customer not found")
        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True, exclude={"id"}).items()
            if v is not None or k not in _REQUIRED
        }
        inst.update_from_dict(changes)
        await inst.save()
        return CustomerResponse.model_validate(inst)


customer_service = CustomerService()
