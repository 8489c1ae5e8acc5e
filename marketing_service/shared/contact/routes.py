"""Contact routes for demo requests sent from the website."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from marketing_service.shared.contact.schemas import ContactRequest, ContactResponse
from marketing_service.shared.storage.base import StorageUnavailableError, SubmissionStore
from marketing_service.shared.storage.dependencies import get_store
from marketing_service.shared.storage.models import ContactSubmission

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact", response_model=ContactResponse, status_code=status.HTTP_200_OK)
async def submit_contact_form(
    contact_data: ContactRequest,
    store: SubmissionStore = Depends(get_store)
):
    """
    Store a contact / demo request.

    Every submission creates a new record, even if an identical one
    was sent before.
    """
    try:
        contact = store.create_contact(contact_data)
    except StorageUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"success": False, "error": str(e)}
        )

    logging.info(f"Contact request {contact.id} received from {contact.email}")
    return ContactResponse(success=True, contact=contact)


@router.get("/contacts", response_model=List[ContactSubmission])
async def list_contacts(store: SubmissionStore = Depends(get_store)):
    """Get all contact requests in the order they were received (for admin purposes)."""
    try:
        return store.list_contacts()
    except StorageUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to fetch contacts"
        )
