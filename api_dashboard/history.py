from __future__ import annotations

import json
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api_dashboard import models
from api_dashboard.errors import StorageError

HISTORY_PAGE_SIZE = 50


def body_for_storage(body: Any) -> Any:
    """Strings are stored as JSON string literals; structured bodies as-is."""
    if body is None:
        return None
    if isinstance(body, str):
        return json.dumps(body)
    return body


class HistoryStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self, owner_id: int) -> list[models.ApiRequest]:
        return list(
            self.db.scalars(
                select(models.ApiRequest)
                .where(models.ApiRequest.user_id == owner_id)
                .order_by(models.ApiRequest.created_at.desc(), models.ApiRequest.id.desc())
                .limit(HISTORY_PAGE_SIZE)
            ).all()
        )

    def get(self, record_id: int, owner_id: int) -> models.ApiRequest | None:
        return self.db.scalar(
            select(models.ApiRequest).where(
                models.ApiRequest.id == record_id,
                models.ApiRequest.user_id == owner_id,
            )
        )

    def update(
        self,
        record_id: int,
        owner_id: int,
        *,
        method: str,
        url: str,
        headers: dict[str, Any] | None,
        body: Any,
    ) -> models.ApiRequest | None:
        record = self.get(record_id, owner_id)
        if record is None:
            return None

        record.method = method
        record.url = url
        record.headers = dict(headers or {})
        record.body = body_for_storage(body)
        self._commit()
        self.db.refresh(record)
        return record

    def delete(self, record_id: int, owner_id: int) -> bool:
        record = self.get(record_id, owner_id)
        if record is None:
            return False

        self.db.delete(record)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"Failed to save request history: {exc.__class__.__name__}") from exc
