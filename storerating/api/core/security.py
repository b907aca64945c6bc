import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from passlib.context import CryptContext
from jose import JWTError, jwt
from sqlmodel import Session, select
from fastapi import (
    Depends,
    Security,
    status,
)
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBearer,
)

from storerating.config import ACCESS_TOKEN_EXPIRE_MINUTES, SECRET_KEY
from storerating.api.core.response import api_response
from storerating.api.models import User, UserRoleEnum

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)

# auto_error is off so a missing header maps to 401 rather than FastAPI's default
bearer_scheme = HTTPBearer(auto_error=False)


## get user
def exist_user(db: Session, email: str) -> Optional[User]:
    return db.exec(select(User).where(User.email == email)).first()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_data: dict,
    expires: Optional[timedelta] = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "user": user_data,
        "exp": expire,
    }
    return jwt.encode(
        payload,
        SECRET_KEY,
        algorithm=ALGORITHM,
    )


def decode_token(
    token: str,
) -> Optional[Dict]:
    try:
        return jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"verify_exp": True},  # Ensure expiration is verified
        )
    except JWTError as e:
        logger.debug("Token decoding failed: %s", e)
        return None


def require_signin(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Dict:
    """
    Resolve the bearer credential into the caller's identity
    ({"id", "name", "email", "role"}). Any failure is a 401.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        api_response(status.HTTP_401_UNAUTHORIZED, "Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None:
        api_response(status.HTTP_401_UNAUTHORIZED, "Invalid token")

    user = payload.get("user")
    if not isinstance(user, dict) or user.get("id") is None:
        api_response(status.HTTP_401_UNAUTHORIZED, "Invalid token: no user data")

    try:
        UserRoleEnum(user.get("role"))
    except ValueError:
        api_response(status.HTTP_401_UNAUTHORIZED, "Invalid token: unknown role")

    return user


def require_role(*roles: UserRoleEnum):
    """Exact role membership; roles do not inherit one another."""
    allowed = {UserRoleEnum(role).value for role in roles}

    def role_checker(user: dict = Depends(require_signin)):
        if user.get("role") not in allowed:
            logger.debug(
                "Role %s denied for user %s, requires one of %s",
                user.get("role"),
                user.get("id"),
                sorted(allowed),
            )
            api_response(status.HTTP_403_FORBIDDEN, "Access denied")
        return user

    return role_checker
