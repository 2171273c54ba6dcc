"""Persists the logged-in user and plan (the only durable state)."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from agro.domain.Session import Session
from agro.infra.paths import SESSION_FILE

logger = logging.getLogger(__name__)


class SessionRepository:
    def __init__(self, path=SESSION_FILE):
        self.path = Path(path)

    def load(self) -> Session:
        '''
        Restores the session; a missing or unreadable file means logged out.
        '''
        if not self.path.exists():
            return Session()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return Session.from_dict(json.load(f))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Session file %s is unreadable; starting logged out", self.path)
            return Session()

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".session_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(session.to_dict(), tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
