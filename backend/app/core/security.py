# app/core/security.py
"""
Security module for session tokens and the OAuth anti-forgery state.
Handles JWT token creation/validation and state token generation/comparison.
"""
import os
import hmac
import secrets
import datetime as dt
import jwt  # PyJWT
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables from project root
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # Secret key for JWT signing (use strong secret in production)
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))  # 7 days
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)

# Cookie names shared by the auth router and the request dependencies
ACCESS_TOKEN_COOKIE = "accessToken"
OAUTH_STATE_COOKIE = "oauthState"
OAUTH_STATE_MAX_AGE_SEC = 10 * 60

def create_access_token(user_id: str, role: str) -> str:
    """
    Create a JWT session token for a signed-in member.

    Args:
        user_id: Internal user id (stringified integer)
        role: "admin" or "user" at the time of login

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID)
        - role: Role at login time (informational; authorization re-reads the user row)
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT session token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])

def generate_state() -> str:
    """Random anti-forgery token for the OAuth round trip (64 hex chars)."""
    return secrets.token_hex(32)

def validate_state(expected: str | None, received: str | None) -> bool:
    """Constant-time comparison of the stored and returned OAuth state."""
    if not expected or not received:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8"))
