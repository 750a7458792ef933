"""
Session routes

- GET  /api/v1/auth/me        signed-in user and role
- POST /api/v1/auth/sign-out  revoke the current session
"""
from fastapi import APIRouter, Depends, status

from helpdesk.dependencies import get_auth_service
from helpdesk.middleware.auth import get_access_token, get_current_user
from helpdesk.models.schemas import CurrentUser
from helpdesk.services.auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUser)
async def read_current_user(user: CurrentUser = Depends(get_current_user)):
    return user


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    user: CurrentUser = Depends(get_current_user),
    access_token: str = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service)
):
    await auth_service.sign_out(access_token)
