"""Session cookie map for one client instance (value object holder, no persistence)."""
from __future__ import annotations

from typing import Iterable, Mapping


def parse_set_cookie(raw: str) -> dict[str, str]:
    """Parse one Set-Cookie value into {name: value}.

    Only the leading name=value pair is the cookie; every later segment is an
    attribute (Path, Expires, Version, ...) and is dropped.
    """
    name, sep, value = raw.split(";", 1)[0].partition("=")
    name = name.strip()
    if not sep or not name:
        return {}
    return {name: value.strip().strip('"')}


class CookieStore:
    """Flat cookie name -> value map scoped to a single client."""

    def __init__(self) -> None:
        self._cookies: dict[str, str] = {}

    @property
    def cookies(self) -> dict[str, str]:
        return dict(self._cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def extract_cookies(self, set_cookie_values: Iterable[str], *, replace: bool = False) -> None:
        """Record cookies from raw Set-Cookie values.

        With replace=True the previous map is discarded even when no cookie is
        found; otherwise found cookies are merged over the existing ones.
        """
        found: dict[str, str] = {}
        for raw in set_cookie_values:
            found.update(parse_set_cookie(raw))
        if replace:
            self._cookies = found
        elif found:
            self._cookies = {**self._cookies, **found}

    def attach(self, headers: Mapping[str, str] | None) -> dict[str, str]:
        """Return a copy of headers with a Cookie header for the current map."""
        merged = dict(headers) if headers else {}
        if self._cookies:
            merged["Cookie"] = "; ".join(f"{name}={value}" for name, value in self._cookies.items())
        return merged
