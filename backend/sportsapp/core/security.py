from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import bcrypt
import hashlib
import secrets

from sportsapp.core.config import settings
from sportsapp.core.exceptions import AuthenticationError

SESSION_TOKEN_TYPE = "session"
ADMIN_TOKEN_TYPE = "admin"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def _encode(data: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime.utcnow() + expires_delta, "type": token_type})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create the JWT carried in the user session cookie"""
    return _encode(
        {"sub": str(user_id)},
        SESSION_TOKEN_TYPE,
        expires_delta or timedelta(days=settings.SESSION_EXPIRE_DAYS),
    )


def create_admin_token(username: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create the JWT carried in the admin session cookie"""
    return _encode(
        {"sub": username},
        ADMIN_TOKEN_TYPE,
        expires_delta or timedelta(hours=settings.ADMIN_SESSION_EXPIRE_HOURS),
    )


def decode_token(token: str) -> Dict[str, Any]:
    """Decode JWT token"""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Could not validate credentials")


def generate_remember_token() -> str:
    """Generate an opaque remember-me token (64 hex chars)"""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    """Digest stored in place of the raw remember-me token"""
    return hashlib.sha256(token.encode('utf-8')).hexdigest()
