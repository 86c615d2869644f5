"""Device history retrieval service.

Resolves the caller from their session, then loads every usage entry they
own together with its category in a single joined query and projects the
rows into response items.
"""

import logging
from contextlib import closing
from typing import List

from fastapi import Request
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import (
    HistoryError,
    IterationFailed,
    QueryFailed,
    ScanFailed,
    SessionUnavailable,
    Unauthenticated,
    UserResolutionFailed,
)
from app.models import Kategori, RiwayatPerangkat, User
from app.schemas import HistoryResponseItem
from app.sessions import SessionStore

logger = logging.getLogger(__name__)


def build_history_query(user_id: int):
    """Build the joined history query for one user.

    The inner join drops entries whose category no longer exists.
    Column order is fixed; see ``_project_row``.
    """
    return (
        select(
            RiwayatPerangkat.id,
            RiwayatPerangkat.nama_perangkat,
            RiwayatPerangkat.merek,
            RiwayatPerangkat.daya,
            RiwayatPerangkat.durasi,
            RiwayatPerangkat.tanggal_input,
            Kategori.kategori_id,
            Kategori.nama_kategori,
        )
        .join(Kategori, RiwayatPerangkat.kategori_id == Kategori.kategori_id)
        .where(RiwayatPerangkat.user_id == user_id)
    )


def _project_row(row) -> HistoryResponseItem:
    """Map one positional history row onto a response item."""
    (
        record_id,
        nama_perangkat,
        merek,
        daya,
        durasi,
        tanggal_input,
        kategori_id,
        nama_kategori,
    ) = row
    return HistoryResponseItem(
        id=record_id,
        brand=merek,
        nama_perangkat=nama_perangkat,
        daya=daya,
        durasi=durasi,
        tanggal_input=tanggal_input,
        category_id=kategori_id,
        category_name=nama_kategori,
    )


class HistoryService:
    """Serves the device history of the user behind a request's session.

    Args:
        session_store: Where request sessions are looked up.
        db: Request-scoped database session.
    """

    def __init__(self, session_store: SessionStore, db: Session):
        self.session_store = session_store
        self.db = db

    def resolve_username(self, request: Request) -> str:
        """Return the username stored in the request's session.

        Raises:
            SessionUnavailable: If the session store fails.
            Unauthenticated: If the session has no string username.
        """
        try:
            session = self.session_store.get(request)
        except HistoryError:
            raise
        except Exception as exc:
            logger.error("Error getting session in device history: %s", exc)
            raise SessionUnavailable() from exc
        username = session.get_username()
        if username is None:
            logger.warning("Unauthorized access to device history: username not found in session")
            raise Unauthenticated()
        return username

    def resolve_user_id(self, username: str) -> int:
        """Look up the user id for a username.

        An unknown username is reported the same way as a database error.
        """
        try:
            return self.db.execute(
                select(User.user_id).where(User.username == username)
            ).scalar_one()
        except SQLAlchemyError as exc:
            logger.error("Error getting user ID for username %s: %s", username, exc)
            raise UserResolutionFailed() from exc

    def fetch_history(self, user_id: int) -> List[HistoryResponseItem]:
        """Load and project all history entries of a user.

        Either every row is returned or an error is raised; rows read
        before a failure are discarded.
        """
        try:
            result = self.db.execute(build_history_query(user_id))
        except SQLAlchemyError as exc:
            logger.error("Error executing history query for user %d: %s", user_id, exc)
            raise QueryFailed() from exc

        history = []
        with closing(result):
            try:
                for row in result:
                    history.append(_project_row(row))
            except SQLAlchemyError as exc:
                logger.error("Error iterating over history rows for user %d: %s", user_id, exc)
                raise IterationFailed() from exc
            except (ValidationError, ValueError, TypeError) as exc:
                # column type processing happens while the cursor is read
                logger.error("Error scanning history row for user %d: %s", user_id, exc)
                raise ScanFailed() from exc

        logger.debug("Loaded %d history entries for user %d", len(history), user_id)
        return history

    def get_device_history(self, request: Request) -> List[HistoryResponseItem]:
        """Return the device history of the user behind ``request``."""
        username = self.resolve_username(request)
        user_id = self.resolve_user_id(username)
        return self.fetch_history(user_id)
