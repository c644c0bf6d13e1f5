"""
passforge.accounts
Local user accounts with a capped history of generated passwords.

Records live in one JSON file ({"users": [...]}) that is re-read on every call;
there is no in-memory copy to drift from it. Identity is carried explicitly in
a Session rather than held as global state. Login passwords are hashed with
Argon2id.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pendulum
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from .errors import AccountError, AuthenticationError
from .storage import (
    default_accounts_path,
    default_session_path,
    read_json_file,
    remove_file,
    write_json_file,
)

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20
MIN_ACCOUNT_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class Session:
    user_id: str
    username: str


@dataclass
class PasswordHistoryEntry:
    password: str
    strength: str
    timestamp: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PasswordHistoryEntry":
        return cls(password=data["password"], strength=data["strength"], timestamp=data["timestamp"])


@dataclass
class UserRecord:
    id: str
    username: str
    email: str
    password_hash: str
    created_at: str
    password_history: List[PasswordHistoryEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at,
            "passwordHistory": [asdict(h) for h in self.password_history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        return cls(
            id=data["id"],
            username=data["username"],
            email=data["email"],
            password_hash=data["passwordHash"],
            created_at=data["createdAt"],
            password_history=[PasswordHistoryEntry.from_dict(h) for h in data.get("passwordHistory") or []],
        )


def _now_iso() -> str:
    return pendulum.now("UTC").to_iso8601_string()


class AccountStore:
    def __init__(self, path: Optional[str] = None, hasher: Optional[PasswordHasher] = None):
        self.path = path or default_accounts_path()
        self.hasher = hasher or PasswordHasher()

    # ----------------- persistence -----------------
    def _load(self) -> List[UserRecord]:
        try:
            data = read_json_file(self.path, default={"users": []})
            return [UserRecord.from_dict(u) for u in data.get("users", [])]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # no empty fallback: the next _save would overwrite every user
            raise AccountError(f"Corrupt accounts file {self.path}: {e!r}") from e

    def _save(self, users: List[UserRecord]) -> None:
        write_json_file(self.path, {"users": [u.to_dict() for u in users]})

    def _update(self, user_id: str, change: Callable[[UserRecord], None]) -> UserRecord:
        users = self._load()
        for user in users:
            if user.id == user_id:
                change(user)
                self._save(users)
                return user
        raise AccountError(f"Unknown user id: {user_id}")

    # ----------------- accounts -----------------
    def register(self, username: str, email: str, password: str) -> UserRecord:
        if not username or not email or not password:
            raise AccountError("All fields are required")
        if len(password) < MIN_ACCOUNT_PASSWORD_LENGTH:
            raise AccountError(f"Password must be at least {MIN_ACCOUNT_PASSWORD_LENGTH} characters")

        users = self._load()
        if any(u.email == email or u.username == username for u in users):
            raise AccountError("User already exists")

        taken = {u.id for u in users}
        stamp = int(pendulum.now("UTC").float_timestamp * 1000)
        while str(stamp) in taken:
            stamp += 1

        user = UserRecord(
            id=str(stamp),
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
            created_at=_now_iso(),
        )
        users.append(user)
        self._save(users)
        logger.info("registered user %s", username)
        return user

    def login(self, identifier: str, password: str) -> Session:
        users = self._load()
        user = next((u for u in users if u.email == identifier or u.username == identifier), None)
        if user is None:
            raise AuthenticationError("Invalid credentials")
        try:
            self.hasher.verify(user.password_hash, password)
        except (VerificationError, InvalidHashError) as e:
            raise AuthenticationError("Invalid credentials") from e

        if self.hasher.check_needs_rehash(user.password_hash):
            user.password_hash = self.hasher.hash(password)
            self._save(users)
            logger.debug("rehashed password for %s", user.username)
        return Session(user_id=user.id, username=user.username)

    def get_user(self, user_id: str) -> UserRecord:
        for user in self._load():
            if user.id == user_id:
                return user
        raise AccountError(f"Unknown user id: {user_id}")

    # ----------------- history -----------------
    def history(self, session: Session) -> List[PasswordHistoryEntry]:
        """Generated passwords for the session's user, newest first."""
        return self.get_user(session.user_id).password_history

    def add_to_history(self, session: Session, password: str, strength: str) -> PasswordHistoryEntry:
        entry = PasswordHistoryEntry(password=password, strength=strength, timestamp=_now_iso())

        def _prepend(user: UserRecord) -> None:
            user.password_history = [entry] + user.password_history[: HISTORY_LIMIT - 1]

        self._update(session.user_id, _prepend)
        return entry

    def clear_history(self, session: Session) -> None:
        def _clear(user: UserRecord) -> None:
            user.password_history = []

        self._update(session.user_id, _clear)

    def is_password_unique(self, session: Session, password: str) -> bool:
        return all(h.password != password for h in self.history(session))

    def uniqueness_predicate(self, session: Session) -> Callable[[str], bool]:
        """Membership test against the history as it stands now, for generate_unique."""
        seen = {h.password for h in self.history(session)}
        return lambda candidate: candidate not in seen


# ----------------- session file -----------------

def save_session(session: Session, path: Optional[str] = None) -> None:
    write_json_file(path or default_session_path(), asdict(session))


def load_session(path: Optional[str] = None) -> Optional[Session]:
    path = path or default_session_path()
    try:
        data = read_json_file(path)
        if not data:
            return None
        return Session(user_id=data["user_id"], username=data["username"])
    except (ValueError, KeyError, TypeError) as e:
        raise AccountError(f"Corrupt session file {path}: {e!r}; run 'passforge account logout'") from e


def clear_session(path: Optional[str] = None) -> bool:
    return remove_file(path or default_session_path())
