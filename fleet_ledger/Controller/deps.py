#fleet_ledger/Controller/deps.py

from typing import Generator, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from fleet_ledger.Core.config import settings
from fleet_ledger.Core.errors import ForbiddenError
from fleet_ledger.DB.session import SessionLocal
from fleet_ledger.Services.trip_policy import Caller, Role

security = HTTPBearer(auto_error=False)


def get_DB() -> Generator:
    DB = SessionLocal()
    try:
        yield DB
    finally:
        DB.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Caller:
    """
    Build the Caller from the bearer token issued by the auth service.

    Claims used:
        sub (or id): caller id
        role: 'admin' or 'driver'

    Raises:
        HTTPException 401: Missing, expired or invalid token
        ForbiddenError: Role outside the known set
    """
    if credentials is None:
        raise _unauthorized("No token provided")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        print(f"[AUTH] Invalid token: {e}")
        raise _unauthorized("Invalid authentication token")

    caller_id = payload.get("sub") or payload.get("id")
    if not caller_id:
        raise _unauthorized("Invalid token payload")

    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise ForbiddenError("Unknown role")

    return Caller(id=str(caller_id), role=role)
