from fastapi import APIRouter, Depends

from app.deps import CurrentUser, require_hotel
from app.schemas import BillingSummary
from app.services.billing import billing_service

router = APIRouter(prefix="/rpc", tags=["billing"])


@router.get("/billing.getSummary", response_model=BillingSummary)
async def get_summary(
    current_user: CurrentUser = Depends(require_hotel),
) -> BillingSummary:
    """Revenue, VAT and service charge totals over the caller's hotel."""
    return await billing_service.get_revenue_summary(current_user.hotel_id)
