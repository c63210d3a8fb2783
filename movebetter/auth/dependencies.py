from fastapi import Depends, Request

from movebetter.auth.credential_store import CredentialStore
from movebetter.auth.models import AccountKind
from movebetter.auth.service_client import AuthServiceClient
from movebetter.auth.session import SessionContext


def get_credential_store(request: Request) -> CredentialStore:
    return request.state.credential_store


def get_auth_client(request: Request) -> AuthServiceClient:
    return request.app.state.auth_client


def get_session(
    store: CredentialStore = Depends(get_credential_store),
    client: AuthServiceClient = Depends(get_auth_client),
) -> SessionContext:
    session = SessionContext(store, client, kind=AccountKind.ADMIN)
    session.bootstrap()
    return session


def get_patient_session(
    store: CredentialStore = Depends(get_credential_store),
    client: AuthServiceClient = Depends(get_auth_client),
) -> SessionContext:
    session = SessionContext(store, client, kind=AccountKind.PATIENT)
    session.bootstrap()
    return session
