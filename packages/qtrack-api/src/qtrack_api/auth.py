"""Bearer token authentication."""
from __future__ import annotations

from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from qtrack_api.deps import Container, get_container

security = HTTPBearer()


async def verify_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
    container: Container = Depends(get_container),
) -> str:
    """Validate the Bearer token against the configured admin token."""
    if credentials.credentials != container.config.admin_token:
        raise HTTPException(status_code=401, detail="Invalid token")
    return credentials.credentials
