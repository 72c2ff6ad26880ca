from fastapi import APIRouter, Depends, Request
from ..models import RegisterRequest, LoginRequest, AuthResponse, ErrorResponse, ProfileUpdateRequest, UserResponse
from ..dependencies import get_auth_service, get_current_user_id, get_logger, internal_error
from ..services.auth_service import AuthService
from ...utils.exceptions import MarketplaceError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def register(req: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    try:
        session = service.register(req.email, req.password, req.first_name, req.last_name)
        return {"success": True, "message": "Registered", "data": session}
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Registration failed", "REGISTRATION_FAILED", e) from e


@router.post("/login", response_model=AuthResponse, responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def login(req: LoginRequest, service: AuthService = Depends(get_auth_service)):
    try:
        session = service.login(req.email, req.password)
        return {"success": True, "message": "Logged in", "data": session}
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Login failed", "LOGIN_FAILED", e) from e


@router.post("/logout", response_model=AuthResponse, responses={500: {"model": ErrorResponse}})
async def logout(request: Request):
    logger = get_logger()
    user_id = getattr(request.state, "user_id", None)
    logger.info("user_logged_out", user_id=user_id)
    return {"success": True, "message": "Logged out", "data": {"user_id": user_id, "logged_out": True}}


@router.get("/profile", response_model=UserResponse, responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def get_profile(user_id: str = Depends(get_current_user_id), service: AuthService = Depends(get_auth_service)):
    try:
        return {"success": True, "message": "Profile", "data": service.get_profile(user_id)}
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Failed to load profile", "PROFILE_FAILED", e) from e


@router.put("/profile", response_model=UserResponse, responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def update_profile(
    req: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
):
    try:
        profile = service.update_profile(user_id, req.model_dump(exclude_none=True))
        return {"success": True, "message": "Profile updated", "data": profile}
    except MarketplaceError:
        raise
    except Exception as e:
        raise internal_error("Profile update failed", "PROFILE_UPDATE_FAILED", e) from e
