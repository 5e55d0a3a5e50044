import logging
from typing import Iterable, List, Optional, Tuple

from utils.constants import MAX_LOG_LINES

logger = logging.getLogger(__name__)


class RunLog:
    """Diagnostic lines returned with a roster. Lines past `limit` are dropped."""

    def __init__(self, lines: Optional[Iterable[str]] = None, limit: int = MAX_LOG_LINES):
        self.limit = limit
        self._lines: List[str] = []
        if lines:
            self.extend(lines)

    def add(self, message: str):
        if len(self._lines) < self.limit:
            self._lines.append(message)
        logger.debug(message)

    def extend(self, messages: Iterable[str]):
        for message in messages:
            self.add(message)

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    def __len__(self):
        return len(self._lines)
