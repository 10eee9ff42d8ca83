"""Recent request and ledger activity, kept in memory for ``GET /api/logs``.

Entries are either HTTP-level (``request``, ``error``) or ledger events
(``ledger``) that carry the account, the operation and the amount involved, so
the activity of one account can be pulled out without parsing messages.
"""
import threading
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from ledger_api.core.config import settings

LOG_TYPES = ("request", "ledger", "error")


@dataclass(frozen=True)
class LogEntry:
    type: str
    message: str
    account_id: str | None = None
    operation: str | None = None
    amount: str | None = None
    status: int | None = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return asdict(self)


class LedgerLogBuffer:
    def __init__(self, maxlen: int = 1000):
        self._entries: deque[LogEntry] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self.enabled: bool = False

    def _append(self, entry: LogEntry) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._entries.append(entry)

    def record_request(self, method: str, path: str, status: int, duration_ms: float) -> None:
        self._append(LogEntry(
            type="request",
            message=f"{method} {path} -> {status} in {duration_ms}ms",
            status=status,
        ))

    def record_error(self, message: str, status: int = 500) -> None:
        self._append(LogEntry(type="error", message=message, status=status))

    def record_ledger_event(self, operation: str, account_id: str, amount=None, message: str = "") -> None:
        self._append(LogEntry(
            type="ledger",
            message=message or f"{operation} on {account_id}",
            account_id=account_id,
            operation=operation,
            amount=None if amount is None else str(amount),
        ))

    def get_logs(
        self,
        log_type: str | None = None,
        account_id: str | None = None,
        operation: str | None = None,
        limit: int = 200,
        offset: int = 0,
    ) -> list[dict]:
        with self._lock:
            entries = list(self._entries)
        if log_type and log_type != "all":
            entries = [e for e in entries if e.type == log_type]
        if account_id:
            entries = [e for e in entries if e.account_id == account_id]
        if operation:
            entries = [e for e in entries if e.operation == operation]
        entries.reverse()
        return [e.to_dict() for e in entries[offset:offset + limit]]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def start(self) -> None:
        self.enabled = True

    def stop(self) -> None:
        self.enabled = False


logging_buffer = LedgerLogBuffer(maxlen=settings.LOG_BUFFER_MAXLEN)
