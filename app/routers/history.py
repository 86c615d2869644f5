"""Device history API endpoint.

Returns the usage history of the user identified by the session cookie,
each entry joined with its device category.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas import ErrorResponse, HistoryResponseItem
from app.services.history_service import HistoryService
from app.sessions import SessionStore, get_session_store

router = APIRouter(tags=["History"])


def get_history_service(
    db: Session = Depends(get_db),
    session_store: SessionStore = Depends(get_session_store),
) -> HistoryService:
    """Dependency that builds a HistoryService for the current request."""
    return HistoryService(session_store=session_store, db=db)


@router.get(
    "/history",
    response_model=List[HistoryResponseItem],
    summary="Get the caller's device usage history",
    description=(
        "Returns every device usage entry recorded by the logged-in user, "
        "joined with its category. An empty history is returned as an "
        "empty array."
    ),
    responses={
        401: {"model": ErrorResponse, "description": "No authenticated session"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Session or database failure"},
    },
)
def device_history(
    request: Request,
    service: HistoryService = Depends(get_history_service),
) -> List[HistoryResponseItem]:
    """Get the device usage history of the logged-in user."""
    return service.get_device_history(request)
