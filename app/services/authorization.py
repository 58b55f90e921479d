import enum
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.crud import user as user_crud
from app.models.user import UserRole
from app.services.auth import Identity

logger = logging.getLogger(__name__)


class Capability(str, enum.Enum):
    ADMIN = "admin"
    SELF = "self"
    OTHER = "other"


class AuthorizationPolicy:
    """
    Role-based authorization. A caller is an administrator when the user row
    stored under their verified email has role "admin". A caller with no user
    row is never an administrator.
    """

    def __init__(self, db: Session):
        self.db = db

    def is_admin(self, identity: Identity) -> bool:
        db_user = user_crud.get_user_by_email(self.db, identity.email)
        return db_user is not None and db_user.role == UserRole.ADMIN.value

    def classify(self, identity: Identity, owner_email: str = None) -> Capability:
        if self.is_admin(identity):
            return Capability.ADMIN
        if owner_email is not None and owner_email == identity.email:
            return Capability.SELF
        return Capability.OTHER

    def require_admin(self, identity: Identity) -> None:
        if not self.is_admin(identity):
            logger.warning(f"Admin access denied for {identity.email}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
            )

    def require_self_or_admin(self, identity: Identity, owner_email: str) -> Capability:
        capability = self.classify(identity, owner_email)
        if capability == Capability.OTHER:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden access"
            )
        return capability
