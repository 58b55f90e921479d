from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.database import get_db
from app.crud import user as crud
from app.models.user import UserRole
from app.schemas.user import UserCreate, UserUpdate, UserResponse, UserRoleResponse
from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy, Capability

router = APIRouter()
members_router = APIRouter()

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {"name", "photo_url"}


@router.post("/", response_model=UserResponse)
def register_user(
    user: UserCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """
    Registers the signed-in user. Calling it again for an existing email
    returns the stored record unchanged.
    """
    if not user.email:
        raise HTTPException(status_code=400, detail="Email is required")

    policy = AuthorizationPolicy(db)
    policy.require_self_or_admin(identity, user.email)

    existing = crud.get_user_by_email(db, user.email)
    if existing:
        return existing

    db_user = crud.create_user(db, user)
    logger.info(f"User registered: {db_user.email}")
    return db_user


@router.get("/", response_model=List[UserResponse])
def read_users(
    email: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    policy = AuthorizationPolicy(db)
    if not policy.is_admin(identity):
        # Non-admins only ever see their own record
        if email and email != identity.email:
            return []
        return crud.get_users(db, email=identity.email)

    return crud.get_users(db, email=email, search=search)


@router.get("/{email}", response_model=UserResponse)
def read_user(
    email: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_self_or_admin(identity, email)

    db_user = crud.get_user_by_email(db, email)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.get("/{email}/role", response_model=UserRoleResponse)
def read_user_role(
    email: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_self_or_admin(identity, email)

    db_user = crud.get_user_by_email(db, email)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserRoleResponse(role=db_user.role or "user")


@router.patch("/{email}", response_model=UserResponse)
def update_user(
    email: str,
    user: UserUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    capability = AuthorizationPolicy(db).require_self_or_admin(identity, email)

    if capability != Capability.ADMIN:
        changed = set(user.model_dump(exclude_unset=True))
        if not changed <= PROFILE_FIELDS:
            raise HTTPException(
                status_code=403, detail="Only admins can change roles"
            )

    db_user = crud.get_user_by_email(db, email)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")

    db_user = crud.update_user(db, db_user, user)
    if user.role is not None:
        logger.info(f"{identity.email} set role of {email} to {db_user.role}")
    return db_user


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    success = crud.delete_user(db, user_id)
    if not success:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info(f"User {user_id} deleted by {identity.email}")
    return {"message": "User deleted successfully"}


@members_router.get("/", response_model=List[UserResponse])
def read_members(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)
    return crud.get_members(db, search=search)


@members_router.delete("/{user_id}")
def delete_member(
    user_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    AuthorizationPolicy(db).require_admin(identity)

    db_user = crud.get_user(db, user_id)
    if db_user is None or db_user.role != UserRole.MEMBER.value:
        raise HTTPException(status_code=404, detail="Member not found")

    crud.delete_user(db, user_id)
    logger.info(f"Member {user_id} deleted by {identity.email}")
    return {"message": "Member deleted successfully"}
