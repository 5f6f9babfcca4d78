"""Dependencies shared by the booking routers."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from libs.auth.dependencies import require_academy_user
from libs.auth.models import AcademyContext, AuthUser
from libs.common.config import get_settings
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.booking_service.models import Academy
from services.booking_service.pricing.errors import BookingValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

settings = get_settings()
logger = get_logger(__name__)


def _impersonated_owner_id(request: Request) -> Optional[str]:
    """User id of the academy owner an admin is acting as, if any."""
    return request.cookies.get(settings.IMPERSONATION_COOKIE) or None


async def get_academy_context(
    request: Request,
    current_user: AuthUser = Depends(require_academy_user),
    db: AsyncSession = Depends(get_async_db),
) -> AcademyContext:
    """Resolve the academy the request acts on.

    Admins act on the academy owned by the user named in the impersonation
    cookie when present.
    """
    impersonated_id = _impersonated_owner_id(request) if current_user.is_admin else None
    owner_id = impersonated_id or current_user.user_id
    result = await db.execute(select(Academy).where(Academy.user_id == owner_id))
    academy = result.scalar_one_or_none()

    if not academy:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Academy not found"
        )
    if impersonated_id is not None:
        logger.info(
            "Admin %s acting as academy %s", current_user.user_id, academy.id
        )
    return AcademyContext(
        academy_id=academy.id,
        user_id=current_user.user_id,
        impersonating=impersonated_id is not None,
    )


def validation_http_error(exc: BookingValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": exc.message, "field": exc.field},
    )
