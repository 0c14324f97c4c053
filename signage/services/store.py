import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from signage.db import utcnow
from signage.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


class Store:
    """Shared plumbing for the collection stores.

    Writes surface backend failures as StorageUnavailableError after a
    rollback. ``_list`` degrades to an empty list instead, so list pages can
    still render.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def _list(self, model, *order_by) -> list:
        try:
            query = self.db.query(model)
            if order_by:
                query = query.order_by(*order_by)
            return query.all()
        except SQLAlchemyError:
            logger.warning("Listing %s failed, returning no rows", model.__tablename__, exc_info=True)
            self._rollback()
            return []

    def _get(self, model, record_id: str):
        try:
            return self.db.get(model, record_id)
        except SQLAlchemyError as exc:
            self._rollback()
            raise StorageUnavailableError("Storage is unavailable") from exc

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StorageUnavailableError("Storage is unavailable") from exc

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.debug("Rollback failed", exc_info=True)
