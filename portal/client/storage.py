# portal/client/storage.py
import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class Credentials:
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None

    def is_empty(self) -> bool:
        return not (self.access_token or self.refresh_token or self.user)


class CredentialStore:
    """Access token, refresh token and the serialised user of one session.

    The base class keeps them in memory only.
    """

    def __init__(self, initial: Optional[Credentials] = None):
        self._creds = initial or Credentials()

    @property
    def access_token(self) -> Optional[str]:
        return self._creds.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._creds.refresh_token

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._creds.user

    def save_login(self, access_token: str, refresh_token: Optional[str], user: Dict[str, Any]) -> None:
        self._creds = Credentials(access_token=access_token, refresh_token=refresh_token, user=user)
        self._persist()

    def set_access_token(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        self._creds.access_token = access_token
        if refresh_token:
            self._creds.refresh_token = refresh_token
        self._persist()

    def set_user(self, user: Dict[str, Any]) -> None:
        self._creds.user = user
        self._persist()

    def clear_session(self) -> None:
        """Drop the access token and cached user (refresh failure)."""
        self._creds.access_token = None
        self._creds.user = None
        self._persist()

    def clear(self) -> None:
        """Drop everything (logout)."""
        self._creds = Credentials()
        self._persist()

    def _persist(self) -> None:
        pass


class FileCredentialStore(CredentialStore):
    """Credentials persisted as one JSON file, so a session survives a restart."""

    def __init__(self, path: os.PathLike):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Credentials:
        if not self.path.is_file():
            return Credentials()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable credential file %s: %s", self.path, e)
            return Credentials()
        return Credentials(
            access_token=data.get("accessToken"),
            refresh_token=data.get("refreshToken"),
            user=data.get("user"),
        )

    def _persist(self) -> None:
        if self._creds.is_empty():
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        raw = asdict(self._creds)
        data = {"accessToken": raw["access_token"], "refreshToken": raw["refresh_token"], "user": raw["user"]}
        tmp = self.path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp, self.path)

    def move_to(self, path: os.PathLike) -> None:
        """Re-home the credentials under ``path`` and drop the old file."""
        old = self.path
        self.path = Path(path)
        if old == self.path:
            return
        self._persist()
        old.unlink(missing_ok=True)
