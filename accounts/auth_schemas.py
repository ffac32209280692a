"""
JWT token issuing for frontend compatibility.

Returns 'access_token' and 'refresh_token' instead of the default 'access'
and 'refresh', plus the account and a status message, in one payload.
"""

from ninja_jwt.tokens import RefreshToken


def issue_token_pair(user) -> dict:
    """
    Generate JWT tokens and account info for an authenticated user.

    The role is embedded as a ``user_type`` claim for clients; the server
    always re-reads it from the account record.

    Args:
        user: Authenticated account

    Returns:
        Dict with access_token, refresh_token, user info, success and message
    """
    refresh_token = RefreshToken.for_user(user)
    refresh_token['user_type'] = user.user_type
    access_token = refresh_token.access_token

    return {
        'access_token': str(access_token),
        'refresh_token': str(refresh_token),
        'user': user.to_dict(),
        'success': True,
        'message': 'Login successful',
    }


def refresh_access_token(raw_refresh: str) -> str:
    """Return a new access token for a refresh token.

    Raises:
        ninja_jwt.exceptions.TokenError: when the token is invalid or expired
    """
    return str(RefreshToken(raw_refresh).access_token)
