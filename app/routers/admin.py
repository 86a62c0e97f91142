from fastapi import APIRouter, Depends

from app.deps import require_admin
from app.schemas import AdminUserResponse
from app.services.user import user_service

router = APIRouter(prefix="/rpc", tags=["admin"])


@router.get(
    "/admin.getAllUsers",
    response_model=list[AdminUserResponse],
    dependencies=[Depends(require_admin)],
)
async def get_all_users() -> list[AdminUserResponse]:
    """Every account on the platform, newest first, with its hotel name."""
    return await user_service.list_all_users()
