"""Authentication routes.

This module handles HTTP endpoints for registration, login and the current
user's own profile, and provides the dependencies other routers use to
identify the caller.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from alumni_portal import config
from alumni_portal.core import permissions
from alumni_portal.core.dependencies import UserManagerDep
from alumni_portal.core.exceptions import UserAlreadyExistsError
from alumni_portal.schemas.user import (
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    RegisterRequest,
    User,
    UserInsert,
    UserPublic,
    to_public,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

# Missing credentials are reported by get_current_user, not by the scheme
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        data: Data to encode in the token.
        expires_delta: Optional expiration time delta.

    Returns:
        Encoded JWT token string.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(pytz.utc) + expires_delta
    else:
        expire = datetime.now(pytz.utc) + timedelta(
            minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def _credentials_error(detail: str = "Invalid authentication credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_user(
    user_manager: UserManagerDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[User]:
    """Resolve the caller from the Authorization header, if any.

    Args:
        user_manager: Injected UserManager instance.
        credentials: HTTP Bearer token credentials.

    Returns:
        The authenticated User, or None for anonymous requests.

    Raises:
        HTTPException: If a token is present but invalid or expired.
    """
    if credentials is None:
        return None
    try:
        payload = jwt.decode(
            credentials.credentials,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
        )
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise _credentials_error()

    user = await user_manager.get_user(user_id)
    if user is None:
        raise _credentials_error("User not found")
    return user


async def get_current_user(
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """Get current authenticated user.

    Raises:
        HTTPException: 401 if the request carries no credentials.
    """
    if not permissions.is_authenticated(user):
        raise _credentials_error("Unauthorized")
    return user


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """Get current user, requiring the admin flag.

    Raises:
        HTTPException: 403 if the user is not an administrator.
    """
    if not permissions.is_admin(current_user):
        logger.warning("User %s denied admin access", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required",
        )
    return current_user


def _login_response(user: User) -> LoginResponse:
    token = create_access_token(data={"sub": str(user.id)})
    return LoginResponse(user=to_public(user), token=token)


@router.post(
    "/register",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an alumni account",
)
async def register(
    req: RegisterRequest,
    user_manager: UserManagerDep,
) -> LoginResponse:
    """Register a new user and log them in.

    Registrants are alumni. Presenting the configured ADMIN_TOKEN registers
    an administrator instead.

    Args:
        req: Registration request with credentials and profile fields.
        user_manager: Injected UserManager instance.

    Returns:
        LoginResponse with the new user and a JWT token.

    Raises:
        HTTPException: If registration fails.
    """
    is_admin = False
    if req.admin_token is not None:
        if not config.ADMIN_TOKEN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin registration is not configured.",
            )
        if req.admin_token != config.ADMIN_TOKEN:
            logger.warning("Admin registration rejected for %s", req.username)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid admin token",
            )
        is_admin = True

    fields = req.model_dump(exclude={"password", "admin_token"})
    try:
        user = await user_manager.create_user(
            UserInsert(
                **fields,
                password_hash=user_manager.hash_password(req.password),
                is_admin=is_admin,
            )
        )
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return _login_response(user)


@router.post("/login", response_model=LoginResponse, summary="Log in")
async def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
) -> LoginResponse:
    """Login with username and password.

    Raises:
        HTTPException: If the username or password is wrong.
    """
    user = await user_manager.get_user_by_username(req.username)
    if user is None or not user_manager.verify_password(req.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    logger.info("User logged in: %s", user.username)
    return _login_response(user)


@router.post("/logout", summary="Log out")
async def logout() -> dict:
    """Logout endpoint.

    Note: Since we're using stateless JWT tokens, logout is handled
    client-side by removing the token. This endpoint exists for API
    consistency.
    """
    return {"success": True, "message": "Logged out successfully"}


@router.get("/user", response_model=UserPublic, summary="Current user")
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
) -> UserPublic:
    return to_public(current_user)


@router.put("/profile", response_model=UserPublic, summary="Update own profile")
async def update_profile(
    req: ProfileUpdate,
    user_manager: UserManagerDep,
    current_user: User = Depends(get_current_user),
) -> UserPublic:
    """Update the current user's profile. Unset fields are left unchanged."""
    try:
        user = await user_manager.update_user(
            current_user.id, req.model_dump(exclude_unset=True)
        )
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return to_public(user)
