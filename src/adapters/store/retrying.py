"""
Retrying key-value store - Bounded retry with exponential backoff.

Wraps any KeyValueStore and retries operations that raise StoreError.
After the final attempt the last StoreError is re-raised unchanged.

Retrying put_if_absent or pop after an ambiguous failure (the statement
committed but the reply was lost) reports the key as taken or missing.
For position claims this can skip a position.
"""

import logging

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.domain.exceptions import StoreError
from src.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)


class RetryingKeyValueStore:
    """
    Implements KeyValueStore protocol by delegating to another store.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, inner: KeyValueStore, attempts: int = 3, initial_wait: float = 0.1) -> None:
        self._inner = inner
        self._attempts = max(1, attempts)
        self._initial_wait = initial_wait

    def _retrying(self) -> Retrying:
        return Retrying(
            retry=retry_if_exception_type(StoreError),
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=self._initial_wait, max=self._initial_wait * 8),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def get(self, key: str) -> str | None:
        return self._retrying()(self._inner.get, key)

    def put(self, key: str, value: str) -> None:
        self._retrying()(self._inner.put, key, value)

    def put_if_absent(self, key: str, value: str) -> bool:
        return self._retrying()(self._inner.put_if_absent, key, value)

    def delete(self, key: str) -> bool:
        return self._retrying()(self._inner.delete, key)

    def pop(self, key: str) -> str | None:
        return self._retrying()(self._inner.pop, key)

    def list_keys(self, prefix: str = "") -> list[str]:
        return self._retrying()(self._inner.list_keys, prefix)
