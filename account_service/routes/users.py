"""
User account endpoints: register, login and profile.
"""
from fastapi import APIRouter, Depends, status

from ..deps import get_account_service
from ..errors import InternalFailure, OperationFailed
from ..gate import get_current_user
from ..schemas import AuthResponse, ErrorResponse, UserCreate, UserLogin, UserOut
from ..service import AccountService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email already in use, invalid fields or store error", "model": ErrorResponse}},
)
def register(payload: UserCreate, service: AccountService = Depends(get_account_service)):
    try:
        result = service.register(payload.name, payload.email, payload.password)
    except InternalFailure as exc:
        raise OperationFailed("Registration failed", detail=exc.detail or exc.message) from exc
    return AuthResponse(token=result.token, user=result.user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Invalid request or store error", "model": ErrorResponse},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
    },
)
def login(payload: UserLogin, service: AccountService = Depends(get_account_service)):
    try:
        result = service.login(payload.email, payload.password)
    except InternalFailure as exc:
        raise OperationFailed("Login failed", detail=exc.detail or exc.message) from exc
    return AuthResponse(token=result.token, user=result.user)


@router.get(
    "/profile",
    response_model=UserOut,
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
)
def get_profile(user: UserOut = Depends(get_current_user)):
    """
    Get the profile of the authenticated user.
    Requires JWT authentication; the gate already resolved the user.
    """
    return user
