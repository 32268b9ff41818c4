# app/services/contact_service.py
"""Stores contact-form messages."""

from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.exceptions import PersistenceError, ValidationError
from app.models.contact import Contact
from app.utils.logger import get_logger

logger = get_logger(__name__)


def save_contact(db: Session, name, email, message) -> Contact:
    fields = [v.strip() if isinstance(v, str) else "" for v in (name, email, message)]
    if not all(fields):
        raise ValidationError("Missing fields")

    contact = Contact(name=fields[0], email=fields[1], message=fields[2], created_at=datetime.utcnow())
    try:
        db.add(contact)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Contact insert failed: {e}")
        raise PersistenceError("Failed to save contact.") from e

    logger.info(f"✉️ Contact message from {contact.email}")
    return contact
