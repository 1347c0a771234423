"""Database operations for newsletter subscribers."""

import logging
from datetime import UTC, datetime

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from src.database.subscribers.models import NewsletterSubscriber

logger = logging.getLogger(__name__)


def subscribe_email(session: Session, email: str) -> bool:
    """Add an email to the newsletter list.

    Uses ``INSERT ... ON CONFLICT DO NOTHING`` so repeated subscriptions are
    a no-op rather than an error.

    :param session: The database session.
    :param email: The subscriber's email address.
    :returns: True if a new row was inserted, False if the email already existed.
    """
    statement = (
        insert(NewsletterSubscriber)
        .values(email=email, created_at=datetime.now(UTC))
        .on_conflict_do_nothing(index_elements=[NewsletterSubscriber.email])
        .returning(NewsletterSubscriber.id)
    )
    is_new = session.execute(statement).first() is not None

    logger.info(f"Subscribe: is_new={is_new}")
    return is_new
