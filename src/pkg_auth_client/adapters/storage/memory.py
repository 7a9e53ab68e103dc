from __future__ import annotations

from typing import Dict, Optional

from ...domain.ports import KeyValueBackend


class InMemoryBackend(KeyValueBackend):
    """
    `sessionStorage` equivalent: values live as long as the process does.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
