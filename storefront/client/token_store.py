# storefront/client/token_store.py
"""
Where the bearer token lives between calls.

The browser keeps it in localStorage under `token` (and `adminToken` for the
admin screens). Here the same keys live either in memory or in a small JSON
file so the CLI stays logged in across runs.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
ADMIN_TOKEN_KEY = "adminToken"


class TokenStore:
    """Key/value storage for session data, in memory."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def _flush(self) -> None:
        """Hook for persistent stores."""

    # Session helpers

    @property
    def token(self) -> Optional[str]:
        """Shopper token, sent with cart and account calls."""
        return self.get_item(TOKEN_KEY)

    @property
    def admin_token(self) -> Optional[str]:
        """Token for admin screens and token validation."""
        return self.get_item(ADMIN_TOKEN_KEY) or self.get_item(TOKEN_KEY)

    def save_token(self, token: str) -> None:
        self.set_item(TOKEN_KEY, token)
        self.set_item(ADMIN_TOKEN_KEY, token)

    def clear_token(self) -> None:
        self.remove_item(TOKEN_KEY)
        self.remove_item(ADMIN_TOKEN_KEY)


class FileTokenStore(TokenStore):
    """TokenStore persisted as JSON on disk (readable by the owner only)."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        super().__init__(self._load())

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # The mode above only applies to new files
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
