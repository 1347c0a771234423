"""Newsletter subscriber database models and operations."""

from src.database.subscribers.models import NewsletterSubscriber
from src.database.subscribers.operations import subscribe_email

__all__ = [
    "NewsletterSubscriber",
    "subscribe_email",
]
