from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_users(
    db: Session, email: Optional[str] = None, search: Optional[str] = None
) -> List[User]:
    query = db.query(User)

    if email:
        query = query.filter(User.email == email)
    elif search:
        pattern = f"%{search}%"
        query = query.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

    return query.order_by(User.created_at.desc(), User.id.desc()).all()


def get_members(db: Session, search: Optional[str] = None) -> List[User]:
    query = db.query(User).filter(User.role == UserRole.MEMBER.value)
    if search:
        query = query.filter(User.name.ilike(f"%{search}%"))
    return query.order_by(User.member_since.desc(), User.id.desc()).all()


def count_users(db: Session) -> int:
    return db.query(User).count()


def count_members(db: Session) -> int:
    return db.query(User).filter(User.role == UserRole.MEMBER.value).count()


def create_user(db: Session, user: UserCreate) -> User:
    db_user = User(
        email=user.email,
        name=user.name,
        photo_url=user.photo_url,
        role=UserRole.USER.value,
        is_member=False,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def apply_role(db_user: User, role: UserRole) -> None:
    """Set the role and keep the membership flags in step with it."""
    db_user.role = role.value
    if role == UserRole.MEMBER:
        db_user.is_member = True
        if db_user.member_since is None:
            db_user.member_since = datetime.utcnow()
    elif role == UserRole.USER:
        db_user.is_member = False
        db_user.member_since = None


def update_user(db: Session, db_user: User, user: UserUpdate) -> User:
    update_data = user.model_dump(exclude_unset=True)
    role = update_data.pop("role", None)

    for field, value in update_data.items():
        setattr(db_user, field, value)
    if role is not None:
        apply_role(db_user, UserRole(role))

    db.commit()
    db.refresh(db_user)
    return db_user


def promote_to_member(db: Session, email: str) -> User:
    """
    Upsert the user with this email as a member. Does not commit: the caller
    commits it together with the booking change that triggered it.
    """
    db_user = get_user_by_email(db, email)
    if db_user is None:
        db_user = User(email=email, role=UserRole.USER.value, is_member=False)
        db.add(db_user)
        logger.info(f"Created user record for {email} during promotion")

    if db_user.role == UserRole.ADMIN.value:
        # admins keep their role, they are only flagged as members
        db_user.is_member = True
        if db_user.member_since is None:
            db_user.member_since = datetime.utcnow()
    else:
        apply_role(db_user, UserRole.MEMBER)

    return db_user


def ensure_admin(db: Session, email: str) -> User:
    db_user = get_user_by_email(db, email)
    if db_user is None:
        db_user = User(email=email, name=email.split("@")[0])
        db.add(db_user)
    db_user.role = UserRole.ADMIN.value
    db.commit()
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, user_id: int) -> bool:
    db_user = get_user(db, user_id)
    if not db_user:
        return False

    db.delete(db_user)
    db.commit()
    return True
