# medlink/routers/application_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.database import get_db
from medlink.core.security import get_current_user_id
from medlink.services.application_service import ApplicationService
from medlink.schemas.application_schema import ApplicationStatusUpdate, ApplicationUpdateOut

router = APIRouter(
    prefix="/applications",
    tags=["Applications"],
    dependencies=[Depends(get_current_user_id)]
)


@router.patch("/{application_id}/status", response_model=ApplicationUpdateOut, summary="更新應徵狀態")
async def update_application_status(
    application_id: int,
    status_data: ApplicationStatusUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    (組織 admin) 將應徵狀態改為 pending / reviewed / accepted / rejected
    """
    application = await ApplicationService(db).update_application_status(
        user_id, application_id, status_data.status
    )
    return {"application": application, "success": True}
