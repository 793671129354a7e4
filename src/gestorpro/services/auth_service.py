from __future__ import annotations

import logging
from typing import Optional

from gestorpro.domain.errors import AuthorizationError
from gestorpro.domain.ids import IdGenerator
from gestorpro.domain.models import User
from gestorpro.repositories.contracts import DocumentStore, KeyValueStore
from gestorpro.repositories.session_store import ACTIVE_USER_KEY
from gestorpro.repositories.unit_of_work import DocumentUnitOfWork

log = logging.getLogger(__name__)


class AuthService:
    """Email/password accounts kept in the ``users`` collection.

    Passwords are stored as entered, matching the existing document layout.
    The signed-in user is cached in the session store so the next start
    resumes without asking for credentials.
    """

    def __init__(self, store: DocumentStore, sessions: KeyValueStore, ids: IdGenerator | None = None):
        self.store = store
        self.sessions = sessions
        self.ids = ids or IdGenerator()

    def list_users(self) -> list[User]:
        return [User.from_dict(r) for r in self.store.get_collection("users")]

    def register(self, name: str, email: str, password: str) -> User:
        name_clean = (name or "").strip()
        email_clean = (email or "").strip()
        if not name_clean:
            raise AuthorizationError("Name is required.")
        if not email_clean:
            raise AuthorizationError("Email is required.")
        if not password:
            raise AuthorizationError("Password is required.")

        user = User(id=self.ids.next_int(), name=name_clean, email=email_clean, password=password)
        with DocumentUnitOfWork(self.store) as uow:
            records = uow.get("users")
            if any(str(r.get("email")) == email_clean for r in records):
                log.warning("user_duplicate_email email=%s", email_clean)
            records.append(user.to_dict())
            uow.stage("users", records)

        self._remember(user)
        log.info("user_registered id=%s", user.id)
        return user

    def login(self, email: str, password: str) -> User:
        email_clean = (email or "").strip()
        if not email_clean:
            raise AuthorizationError("Email is required.")

        # First match wins when emails are duplicated.
        for user in self.list_users():
            if user.email == email_clean and user.password == password:
                self._remember(user)
                log.info("user_login id=%s", user.id)
                return user

        log.warning("user_login_failed email=%s", email_clean)
        raise AuthorizationError("Invalid credentials.")

    def logout(self) -> None:
        self.sessions.remove(ACTIVE_USER_KEY)

    def resume_session(self) -> Optional[User]:
        data = self.sessions.get(ACTIVE_USER_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return User.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            log.warning("session_marker_invalid error=%s", e)
            return None

    def _remember(self, user: User) -> None:
        if not self.sessions.set(ACTIVE_USER_KEY, user.to_dict()):
            log.warning("session_marker_not_saved id=%s", user.id)
