# credentials.py - session credentials for the typeahead service, read from a browser cookie string

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict
from urllib.parse import unquote


def parse_cookie(raw: str) -> Dict[str, str]:
    """
    Parse a `k=v; k2=v2` cookie string (URL-decoded first).
    Entries without '=' map to ''. Later duplicates win.
    """
    out: Dict[str, str] = {}
    for entry in unquote(raw or "").split(";"):
        entry = entry.strip()
        if not entry:
            continue
        key, _, value = entry.partition("=")
        out[key.strip()] = value.strip()
    return out


@dataclass(frozen=True)
class SessionCredentials:
    auth_token: str = ""
    csrf_token: str = ""
    guest_token: str = ""
    bearer: str = ""
    language: str = "en"
    cookie: str = ""

    @classmethod
    def from_cookie(cls, raw: str, bearer: str = "", language: str = "en") -> "SessionCredentials":
        c = parse_cookie(raw)
        return cls(
            auth_token=c.get("auth_token", ""),
            csrf_token=c.get("ct0", ""),
            guest_token=c.get("gt", ""),
            bearer=bearer,
            language=language,
            cookie=raw or "",
        )

    @property
    def is_logged_in(self) -> bool:
        return bool(self.auth_token)

    def headers(self) -> Dict[str, str]:
        h = {
            "x-csrf-token": self.csrf_token,
            "x-twitter-active-user": "yes",
            "x-twitter-client-language": self.language,
        }
        if self.is_logged_in:
            h["x-twitter-auth-type"] = "OAuth2Session"
        else:
            h["x-guest-token"] = self.guest_token
        if self.cookie:
            h["cookie"] = self.cookie
        if self.bearer:
            h["authorization"] = f"Bearer {self.bearer}"
        return h

    def __repr__(self) -> str:
        # never print tokens into logs
        return f"SessionCredentials(logged_in={self.is_logged_in}, language={self.language!r})"
