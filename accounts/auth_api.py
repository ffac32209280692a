"""
Authentication API endpoints with JWT token authentication.

Provides account authentication functionality:
- POST /auth/login - Login with email and password returning JWT tokens
- POST /auth/refresh - Refresh access token
- POST /auth/logout - Logout (client discards tokens)
- GET /auth/me - Get current authenticated account via JWT

Uses JWT (JSON Web Tokens) for stateless authentication.
"""

import logging

from django.contrib.auth import authenticate
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError
from ninja_jwt.authentication import JWTAuth
from ninja_jwt.exceptions import TokenError

from common.schemas import StatusResponse

from .auth_schemas import issue_token_pair, refresh_access_token
from .schemas import LoginRequest, RefreshRequest, RefreshResponse, TokenPairResponse, UserResponse

logger = logging.getLogger(__name__)

# Create authentication router
auth_router = Router()


@auth_router.post('/login', response=TokenPairResponse)
def user_login(request: HttpRequest, payload: LoginRequest):
    """
    JWT login endpoint.

    Authenticates an account with email and password, returns JWT access and
    refresh tokens together with the account.

    Status Codes:
        200: Login successful
        400: Missing credentials
        401: Invalid credentials
        500: Server error

    Example:
        POST /api/v1/auth/login
        {"email": "pm@example.com", "password": "secret-pass"}

    Response:
        {
            "success": true,
            "message": "Login successful",
            "access_token": "eyJ0eXAiOiJKV1QiLCJhbGc...",
            "refresh_token": "eyJ0eXAiOiJKV1QiLCJhbGc...",
            "user": {"user_id": "User-00001", "user_type": "ProjectManager", ...}
        }
    """
    try:
        email = payload.email.strip().lower()
        if not email or not payload.password:
            logger.warning('Login failed: Missing email or password')
            raise HttpError(400, 'Email and password are required')

        logger.info(f'Login attempt for account: {email}')

        user = authenticate(request, username=email, password=payload.password)

        if user is None:
            logger.warning(f'Login failed for account: {email}')
            raise HttpError(401, 'Invalid email or password')

        logger.info(f'Login successful: {user.user_id} ({user.user_type})')
        return TokenPairResponse(**issue_token_pair(user))

    except HttpError:
        raise
    except Exception as e:
        logger.error(f'Login error: {str(e)}')
        raise HttpError(500, 'Login failed, please try again') from e


@auth_router.post('/refresh', response=RefreshResponse)
def refresh_token(request: HttpRequest, payload: RefreshRequest):
    """
    Refresh access token using refresh token.

    Status Codes:
        200: Token refreshed successfully
        401: Invalid or expired refresh token

    Note:
        Frontend should replace the old access_token with the new one.
    """
    try:
        return RefreshResponse(access_token=refresh_access_token(payload.refresh))
    except TokenError as e:
        logger.warning(f'Token refresh rejected: {str(e)}')
        raise HttpError(401, 'Invalid or expired refresh token') from e


@auth_router.post('/logout', response=StatusResponse, auth=JWTAuth())
def user_logout(request: HttpRequest):
    """
    JWT logout endpoint.

    With JWT, logout is handled client-side: the frontend deletes
    access_token and refresh_token from storage.
    """
    logger.info(f'Account logout: {getattr(request.auth, "user_id", "unknown")}')
    return StatusResponse(success=True, message='Logout successful')


@auth_router.get('/me', response=UserResponse, auth=JWTAuth())
def get_current_user(request: HttpRequest):
    """
    Get current authenticated account via JWT.

    Example:
        GET /api/v1/auth/me
        Authorization: Bearer eyJ0eXAiOiJKV1Qi...
    """
    return UserResponse(success=True, user=request.auth.to_dict())  # type: ignore[attr-defined]
