import logging

from pydantic import ValidationError

from movebetter.auth.credential_store import AUTH_TOKEN_KEY, AUTH_USER_KEY, CredentialStore
from movebetter.auth.models import AccountKind, AuthOutcome, AuthReply, SessionUser
from movebetter.auth.service_client import AuthServiceClient

logger = logging.getLogger(__name__)


class SessionContext:
    """Who the current visitor is. ``is_loading`` stays true until ``bootstrap`` runs."""

    def __init__(
        self,
        store: CredentialStore,
        client: AuthServiceClient,
        kind: AccountKind = AccountKind.ADMIN,
    ):
        self.store = store
        self.client = client
        self.kind = kind
        self.user: SessionUser | None = None
        self.is_loading = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def bootstrap(self) -> None:
        token = self.store.get(AUTH_TOKEN_KEY)
        user_data = self.store.get(AUTH_USER_KEY)

        self.user = None
        if token and user_data:
            try:
                self.user = SessionUser.model_validate_json(user_data)
            except ValidationError:
                logger.warning("Discarding stored session with an unreadable user record")
                self.store.remove(AUTH_TOKEN_KEY)
                self.store.remove(AUTH_USER_KEY)

        self.is_loading = False

    async def login(self, email: str, password: str) -> AuthOutcome:
        if self.kind == AccountKind.PATIENT:
            reply = await self.client.patient_login(email, password)
        else:
            reply = await self.client.login(email, password)
        return self._complete(reply, action="login", fallback_error="Login failed")

    async def register(self, name: str, email: str, password: str, cpf: str | None = None) -> AuthOutcome:
        if self.kind == AccountKind.PATIENT:
            return AuthOutcome(success=False, error="Patient accounts are created by the clinic")

        reply = await self.client.register(name, email, password, cpf)
        return self._complete(reply, action="registration", fallback_error="Registration failed")

    def logout(self) -> None:
        self.user = None
        self.store.remove(AUTH_TOKEN_KEY)
        self.store.remove(AUTH_USER_KEY)

    def _complete(self, reply: AuthReply, action: str, fallback_error: str) -> AuthOutcome:
        if not reply.success or reply.user is None or not reply.token:
            if reply.network_failure:
                error = f"Network error during {action}"
            else:
                error = reply.error or fallback_error
            logger.info("%s %s rejected: %s", self.kind.value.capitalize(), action, error)
            return AuthOutcome(success=False, error=error)

        self.store.set(AUTH_TOKEN_KEY, reply.token)
        self.store.set(AUTH_USER_KEY, reply.user.model_dump_json())
        self.user = reply.user
        logger.info("%s %s succeeded for user %s", self.kind.value.capitalize(), action, reply.user.id)
        return AuthOutcome(success=True)
