"""FastAPI dependency that hands routes the application's submission store."""

from fastapi import Request

from marketing_service.shared.storage.base import SubmissionStore


def get_store(request: Request) -> SubmissionStore:
    """Dependency to get the store the app was created with."""
    return request.app.state.store
