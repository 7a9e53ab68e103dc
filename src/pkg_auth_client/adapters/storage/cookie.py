from __future__ import annotations

from typing import Optional

import httpx

from ...domain.ports import KeyValueBackend


class CookieJarBackend(KeyValueBackend):
    """
    `cookie` equivalent: tokens are kept in an `httpx.Cookies` jar.

    Pass the managed client's own jar (`client.cookies`) and its host as
    `domain`, and the tokens are also sent as cookies on every request,
    the same way a browser would.
    """

    def __init__(self, jar: httpx.Cookies, domain: str = "", path: str = "/") -> None:
        self._jar = jar
        self._domain = domain
        self._path = path

    def get(self, key: str) -> Optional[str]:
        # scoped to our own domain and path: the server may set same-named cookies elsewhere
        return self._jar.get(key, domain=self._domain or None, path=self._path)

    def set(self, key: str, value: str) -> None:
        self._jar.set(key, value, domain=self._domain, path=self._path)

    def delete(self, key: str) -> None:
        # with domain and path both set httpx goes straight to CookieJar.clear, which raises on a miss
        if self.get(key) is None:
            return
        self._jar.delete(key, domain=self._domain or None, path=self._path)
