# config_manager.py - JSON config manager

import json
import logging
import os

from rich.console import Console
from rich.table import Table

from ..core.engine import EngineSettings
from ..transport.credentials import SessionCredentials

logger = logging.getLogger(__name__)

COOKIE_ENV = "KEYWORD_TYPEAHEAD_COOKIE"

DEFAULTS = {
    "keywords": ["from:"],
    "debounce_ms": 200,
    "max_candidates": 8,
    "base_url": "https://twitter.com",
    "bearer_token": "",
    "cookie": "",
    "client_language": "en",
    "request_timeout": 5.0,
    "log_path": os.path.join("logs", "typeahead.log"),
    "log_level": "INFO",
}


def _coerce(default, val):
    if isinstance(val, type(default)):
        return val
    if isinstance(default, bool):
        return str(val).strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, list):
        return [v.strip() for v in str(val).split(",") if v.strip()]
    return type(default)(val)


class Config:
    def __init__(self, path="config.json", create=True):
        self.path = path
        self.data = json.loads(json.dumps(DEFAULTS))  # deep copy
        self._load(create)

    def _load(self, create):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    self.data.update(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning("ignoring unreadable config %s: %s", self.path, e)
        elif create:
            self.save()

    def save(self):
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self, console=None):
        table = Table(title=self.path)
        table.add_column("option")
        table.add_column("value")
        for k, v in self.data.items():
            if k in ("cookie", "bearer_token") and v:
                v = "<set>"
            table.add_row(k, str(v))
        (console or Console()).print(table)

    def set(self, key, val):
        if key not in DEFAULTS:
            raise KeyError(f"No such option: {key}")
        self.data[key] = _coerce(DEFAULTS[key], val)
        self.save()

    def get(self, key):
        return self.data.get(key, DEFAULTS.get(key))

    # derived objects ---------------------------------------------------------
    def cookie(self):
        return os.environ.get(COOKIE_ENV) or self.get("cookie")

    def credentials(self):
        return SessionCredentials.from_cookie(
            self.cookie(),
            bearer=self.get("bearer_token"),
            language=self.get("client_language"),
        )

    def engine_settings(self):
        return EngineSettings(
            debounce_ms=int(self.get("debounce_ms")),
            max_candidates=int(self.get("max_candidates")),
        )
