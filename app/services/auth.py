import logging
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth
from firebase_admin.exceptions import FirebaseError
from pydantic import BaseModel

from app.services.firebase import firebase_service

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must be a 401, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


class Identity(BaseModel):
    """Verified caller, as decoded from the identity token."""

    uid: str
    email: str
    name: Optional[str] = None


TokenVerifier = Callable[[str], dict]


def verify_firebase_token(token: str) -> dict:
    if not firebase_service.initialize():
        raise RuntimeError("Firebase Admin is not configured")
    return firebase_auth.verify_id_token(
        token, app=firebase_service.app, check_revoked=True
    )


def get_token_verifier() -> TokenVerifier:
    return verify_firebase_token


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verify_token: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized access",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        decoded = verify_token(credentials.credentials)
    except (ValueError, FirebaseError) as e:
        logger.warning(f"Identity token rejected: {e}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden access")

    email = decoded.get("email")
    if not email:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden access")

    return Identity(
        uid=decoded.get("uid") or decoded.get("sub", ""),
        email=email,
        name=decoded.get("name"),
    )
