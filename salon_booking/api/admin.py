from fastapi import APIRouter, Depends

from salon_booking.api.schemas import (
    AdminSessionSchema,
    AdminUserSchema,
    LogoutRequestSchema,
    LogoutResponseSchema,
)
from salon_booking.application.use_cases.admin_session import AdminSessionUseCase
from salon_booking.wiring.dependencies import get_admin_session_use_case

router = APIRouter(prefix="/admin")


@router.get("/session", response_model=AdminSessionSchema)
def current_session(uc: AdminSessionUseCase = Depends(get_admin_session_use_case)):
    session = uc.current_session()
    user = session.user
    return AdminSessionSchema(
        authenticated=session.authenticated,
        user=(
            AdminUserSchema(
                id=user.id,
                username=user.username,
                email=user.email,
                display_name=user.display_name,
                avatar_url=user.avatar_url,
            )
            if user else None
        ),
    )


@router.post("/logout", response_model=LogoutResponseSchema)
def logout(
    req: LogoutRequestSchema,
    uc: AdminSessionUseCase = Depends(get_admin_session_use_case),
):
    result = uc.logout(req.redirect_to)
    return LogoutResponseSchema(success=result.success, redirect_target=result.redirect_target)
