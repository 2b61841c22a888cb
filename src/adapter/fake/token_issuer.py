"""In-memory implementation of TokenIssuer for testing."""

import itertools
from typing import Any


class FakeTokenIssuer:
    def __init__(self):
        self.issued: dict[str, dict[str, Any]] = {}
        self._counter = itertools.count(1)

    def issue(self, payload: dict[str, Any]) -> str:
        token = f"fake-token-{next(self._counter)}"
        self.issued[token] = dict(payload)
        return token

    def verify(self, token: str) -> dict[str, Any] | None:
        payload = self.issued.get(token)
        return dict(payload) if payload is not None else None
