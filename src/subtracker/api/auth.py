"""Auth API — registration and login.

Learn: Routes for user authentication:
- POST /auth/register → create account, returns token + user (201)
- POST /auth/login → email/password → token + user

Both are open routes. Error mapping (400/401/409) happens in the
AppError handler, so these handlers are just translation.
"""

from fastapi import APIRouter, Depends

from subtracker.api.dependencies import get_auth_service
from subtracker.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from subtracker.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    svc: AuthService = Depends(get_auth_service),
):
    """Create a new user account and sign them in."""
    return await svc.register(body.name, body.email, body.password)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    svc: AuthService = Depends(get_auth_service),
):
    """Login with email and password → JWT."""
    return await svc.login(body.email, body.password)
