"""
Core dependencies for route protection
"""

from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from gift_planner.core.exceptions import AuthenticationError
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.auth.service import AuthService
from gift_planner.modules.users.schemas import User

# auto_error is off so a missing header is reported with our own message and a 401
security = HTTPBearer(auto_error=False)


def get_auth_service(repository: Repository = Depends(get_repository)) -> AuthService:
    return AuthService(repository)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """Resolve the bearer token to the signed-in user"""
    if credentials is None:
        raise AuthenticationError("Authorization header required")
    if credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError("Invalid authorization header format")
    return auth_service.get_current_user(credentials.credentials)
