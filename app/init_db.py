from sqlalchemy.orm import Session
from app.crud import user as user_crud
import logging
import os

logger = logging.getLogger(__name__)


def get_admin_emails() -> list:
    return [
        email.strip()
        for email in os.getenv("ADMIN_EMAIL", "").split(",")
        if email.strip()
    ]


def create_initial_admins(db: Session, emails: list = None):
    """
    Gives role "admin" to every address listed in ADMIN_EMAIL, creating the
    user record when it does not exist yet.
    """
    if emails is None:
        emails = get_admin_emails()

    if not emails:
        logger.info("ADMIN_EMAIL not set, no initial admins seeded.")
        return []

    admins = []
    for email in emails:
        admins.append(user_crud.ensure_admin(db, email))
        logger.info(f"Admin ensured: {email}")
    return admins
