"""Newsletter signup routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from marketing_service.shared.newsletter.schemas import NewsletterRequest, NewsletterResponse
from marketing_service.shared.storage.base import StorageUnavailableError, SubmissionStore
from marketing_service.shared.storage.dependencies import get_store
from marketing_service.shared.storage.models import NewsletterSubscription

router = APIRouter(prefix="/api", tags=["newsletter"])


@router.post("/newsletter", response_model=NewsletterResponse, status_code=status.HTTP_200_OK)
async def subscribe_newsletter(
    newsletter_data: NewsletterRequest,
    store: SubmissionStore = Depends(get_store)
):
    """
    Subscribe an email to the newsletter.

    Subscribing an address that is already on the list succeeds and
    returns the original subscription unchanged.
    """
    try:
        newsletter = store.subscribe_newsletter(newsletter_data)
    except StorageUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"success": False, "error": str(e)}
        )

    logging.info(f"Newsletter subscription {newsletter.id} for {newsletter.email}")
    return NewsletterResponse(success=True, newsletter=newsletter)


@router.get("/newsletters", response_model=List[NewsletterSubscription])
async def list_newsletter_subscriptions(store: SubmissionStore = Depends(get_store)):
    """Get all newsletter subscriptions (for admin purposes)."""
    try:
        return store.list_newsletter_subscriptions()
    except StorageUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to fetch newsletter subscriptions"
        )
