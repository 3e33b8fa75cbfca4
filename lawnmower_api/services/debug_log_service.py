import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..models import DebugLogEntry
from .log_store import LogStore

logger = logging.getLogger(__name__)


class InvalidLogBatchError(ValueError):
    """Raised when a submitted log batch is missing, not a list, or empty."""
    pass


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value, default=str)


def normalize_log_entry(entry: Any) -> Tuple[str, Optional[str]]:
    """
    Split one submitted entry into (message, level).

    Plain strings are the message. Mappings provide `message` and an optional
    `level`; anything that is not text is serialized to JSON so the stored
    message is always text.
    """
    if isinstance(entry, str):
        return entry, None
    if isinstance(entry, Mapping):
        level = entry.get("level")
        return _as_text(entry.get("message")), _as_text(level) if level else None
    return _as_text(entry), None


class DebugLogService:
    """Writes client debug log batches atomically to the injected log store."""

    def __init__(self, store: LogStore):
        self._store = store

    def store_batch(
        self,
        logs: Any,
        session_id: Any = None,
        user_id: Any = None,
    ) -> int:
        """
        Persist every entry of a batch in one transaction.

        Args:
            logs: Submitted entries, each a string or a {"message", "level"} object.
            session_id: Client session identifier stored on every row.
                Non-text values (numeric ids) are stored as text.
            user_id: Client user identifier stored on every row, same rules.

        Returns:
            Number of rows written.

        Raises:
            InvalidLogBatchError: If logs is missing, not a list, or empty.
                Raised before the store is touched.
            LogStoreConnectionError: If no store connection could be acquired.
            LogWriteError: If any insert or the commit failed; nothing was persisted.
        """
        if not isinstance(logs, Sequence) or isinstance(logs, (str, bytes)) or not logs:
            raise InvalidLogBatchError("Invalid or empty logs array provided.")

        session_id = _as_text(session_id) if session_id is not None else None
        user_id = _as_text(user_id) if user_id is not None else None

        with self._store.transaction() as batch:
            for entry in logs:
                message, level = normalize_log_entry(entry)
                batch.insert(
                    DebugLogEntry(
                        session_id=session_id,
                        user_id=user_id,
                        timestamp=datetime.now(timezone.utc).isoformat(),
                        message=message,
                        level=level,
                    )
                )

        logger.info(f"Stored {len(logs)} debug log entries for session {session_id}")
        return len(logs)

    def close(self) -> None:
        """Release the underlying store (closes the PostgreSQL pool)."""
        self._store.close()
