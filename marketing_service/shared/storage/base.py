"""Submission store interface shared by the in-memory and SQL backends."""

from abc import ABC, abstractmethod
from typing import List

from marketing_service.shared.storage.models import (
    ContactCreate,
    ContactSubmission,
    NewsletterCreate,
    NewsletterSubscription,
)


class StorageUnavailableError(Exception):
    """The store's backing resource failed. Callers decide whether to retry."""


class SubmissionStore(ABC):
    """
    Holds contact requests and newsletter subscriptions.

    The two collections are independent: each has its own id counter and
    nothing in one refers to the other. Inputs are trusted; validation
    happens in the HTTP layer before the store is called.
    """

    def initialize(self) -> None:
        """Prepare the backing resource. Called once at startup."""

    @abstractmethod
    def create_contact(self, data: ContactCreate) -> ContactSubmission:
        """Insert a new contact request. Contacts are never deduplicated."""

    @abstractmethod
    def list_contacts(self) -> List[ContactSubmission]:
        """Snapshot of all contact requests in insertion order."""

    @abstractmethod
    def subscribe_newsletter(self, data: NewsletterCreate) -> NewsletterSubscription:
        """
        Return the subscription for data.email, creating it if needed.

        Emails are compared by exact string equality. An existing record
        is returned unchanged: same id, same created_at.
        """

    @abstractmethod
    def list_newsletter_subscriptions(self) -> List[NewsletterSubscription]:
        """Snapshot of all subscriptions in insertion order."""
