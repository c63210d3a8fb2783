from abc import ABC, abstractmethod
from collections.abc import Mapping
from urllib.parse import quote, unquote

from fastapi import Response

AUTH_TOKEN_KEY = "auth_token"
AUTH_USER_KEY = "auth_user"


class CredentialStore(ABC):
    """Persistent key-value storage for the session token and cached user."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemoryCredentialStore(CredentialStore):
    def __init__(self, values: Mapping[str, str] | None = None):
        self.values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


class CookieCredentialStore(CredentialStore):
    """Credential store persisted in the visitor's browser as cookies.

    Reads come from the incoming request cookies. Writes and removals are
    visible to later reads immediately and are flushed onto the outgoing
    response by ``apply``.
    """

    def __init__(self, cookies: Mapping[str, str], *, secure: bool = False, max_age: int | None = None):
        self._values = {key: unquote(value) for key, value in cookies.items()}
        self._pending: dict[str, str | None] = {}
        self.secure = secure
        self.max_age = max_age

    def get(self, key: str) -> str | None:
        if key in self._pending:
            return self._pending[key]
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._pending[key] = value

    def remove(self, key: str) -> None:
        if key in self._values or key in self._pending:
            self._pending[key] = None

    @property
    def has_pending_changes(self) -> bool:
        return bool(self._pending)

    def apply(self, response: Response) -> None:
        for key, value in self._pending.items():
            if value is None:
                response.delete_cookie(key, path="/", secure=self.secure, httponly=True, samesite="lax")
            else:
                response.set_cookie(
                    key=key,
                    value=quote(value, safe=""),
                    max_age=self.max_age,
                    path="/",
                    secure=self.secure,
                    httponly=True,
                    samesite="lax",
                )
        self._pending.clear()
