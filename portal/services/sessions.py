# portal/services/sessions.py
import logging
import re
import secrets
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import httpx

from portal.client.http import ApiClient
from portal.client.storage import CredentialStore, FileCredentialStore
from portal.core.config import Settings
from portal.store.store import Store

logger = logging.getLogger(__name__)

_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]{32,64}$")


@dataclass
class PortalSession:
    """One browser session: its credentials, its upstream client (and so its
    own refresh state) and its slices."""

    id: str
    client: ApiClient
    store: Store
    last_seen: float = field(default_factory=time.monotonic)

    @property
    def credentials(self) -> CredentialStore:
        return self.client.credentials

    @property
    def user(self) -> Optional[dict]:
        return self.credentials.user

    def touch(self) -> None:
        self.last_seen = time.monotonic()


class SessionManager:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        # tests swap in an httpx.MockTransport standing for the upstream API
        self.transport = transport
        self._sessions: Dict[str, PortalSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def _credentials_path(self, session_id: str) -> Path:
        return Path(self.settings.CREDENTIALS_DIR) / f"{session_id}.json"

    def _credentials_for(self, session_id: str) -> CredentialStore:
        if self.settings.CREDENTIALS_DIR:
            return FileCredentialStore(self._credentials_path(session_id))
        return CredentialStore()

    def create(self, session_id: Optional[str] = None) -> PortalSession:
        sid = session_id or secrets.token_urlsafe(32)
        client = ApiClient(
            self.settings.API_BASE_URL,
            self._credentials_for(sid),
            timeout=self.settings.API_TIMEOUT_SECONDS,
            transport=self.transport,
        )
        session = PortalSession(id=sid, client=client, store=Store(client))
        self._sessions[sid] = session
        logger.debug("Session %s opened", sid[:8])
        return session

    def get(self, session_id: Optional[str]) -> Optional[PortalSession]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: Optional[str]) -> PortalSession:
        session = self.get(session_id)
        if session is None:
            # with file-backed credentials an unknown id may be a session from before a restart
            restore = None
            if session_id and self.settings.CREDENTIALS_DIR and _SESSION_ID.match(session_id):
                restore = session_id
            session = self.create(restore)
        session.touch()
        return session

    def rotate(self, session: PortalSession) -> PortalSession:
        """Give ``session`` a fresh id, keeping its client and slices.
        Called after login so an id handed out before authentication stops working."""
        new_id = secrets.token_urlsafe(32)
        self._sessions.pop(session.id, None)
        creds = session.credentials
        if isinstance(creds, FileCredentialStore):
            creds.move_to(self._credentials_path(new_id))
        logger.debug("Session %s rotated to %s", session.id[:8], new_id[:8])
        session.id = new_id
        self._sessions[new_id] = session
        return session

    async def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            await session.client.aclose()

    async def purge_idle(self, now: Optional[float] = None) -> int:
        """Close sessions idle longer than SESSION_IDLE_MINUTES; returns how many."""
        now = time.monotonic() if now is None else now
        cutoff = now - self.settings.SESSION_IDLE_MINUTES * 60
        stale = [sid for sid, s in self._sessions.items() if s.last_seen < cutoff]
        for sid in stale:
            await self.close(sid)
        return len(stale)

    async def close_all(self) -> None:
        for sid in list(self._sessions):
            await self.close(sid)

    def purge_credential_files(self, now: Optional[float] = None) -> int:
        """Delete credential files of sessions not seen for SESSION_IDLE_MINUTES.
        Files of live sessions are kept."""
        if not self.settings.CREDENTIALS_DIR:
            return 0
        directory = Path(self.settings.CREDENTIALS_DIR)
        if not directory.is_dir():
            return 0
        now = time.time() if now is None else now
        cutoff = now - self.settings.SESSION_IDLE_MINUTES * 60
        removed = 0
        for path in directory.glob("*.json"):
            if path.stem in self._sessions:
                continue
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    removed += 1
            except FileNotFoundError:
                continue
        return removed
