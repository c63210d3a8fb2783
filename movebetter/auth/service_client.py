import logging

import httpx
from pydantic import ValidationError

from movebetter.auth.models import AuthReply

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
PATIENT_LOGIN_PATH = "/auth/patient"

NETWORK_ERROR = "Network error"
MALFORMED_REPLY_ERROR = "Unexpected response from authentication service"


class AuthServiceClient:
    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def login(self, email: str, password: str) -> AuthReply:
        return await self._post(LOGIN_PATH, {"email": email, "password": password})

    async def patient_login(self, email: str, password: str) -> AuthReply:
        return await self._post(PATIENT_LOGIN_PATH, {"email": email, "password": password})

    async def register(self, name: str, email: str, password: str, cpf: str | None = None) -> AuthReply:
        payload = {"name": name, "email": email, "password": password}
        if cpf is not None:
            payload["cpf"] = cpf
        return await self._post(REGISTER_PATH, payload)

    async def _post(self, path: str, payload: dict) -> AuthReply:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Auth request to %s failed: %s", path, exc)
            return AuthReply(success=False, error=NETWORK_ERROR, network_failure=True)

        try:
            body = response.json()
        except ValueError:
            logger.warning("Auth reply from %s was not JSON (status %s)", path, response.status_code)
            return AuthReply(success=False, error=MALFORMED_REPLY_ERROR)

        if not isinstance(body, dict):
            return AuthReply(success=False, error=MALFORMED_REPLY_ERROR)

        if not response.is_success:
            error = body.get("error")
            return AuthReply(
                success=False,
                error=error if isinstance(error, str) and error else f"Request failed with status {response.status_code}",
            )

        try:
            reply = AuthReply.model_validate(body)
        except ValidationError:
            logger.warning("Auth reply from %s did not match the expected shape", path)
            return AuthReply(success=False, error=MALFORMED_REPLY_ERROR)

        if reply.success and (reply.user is None or not reply.token):
            return AuthReply(success=False, error=MALFORMED_REPLY_ERROR)
        if not reply.success:
            return AuthReply(success=False, error=reply.error)
        return reply
