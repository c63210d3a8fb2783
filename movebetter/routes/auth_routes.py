import re

from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, ValidationError, field_validator

from movebetter.auth.dependencies import get_patient_session, get_session
from movebetter.auth.guard import PATIENT_HOME_PATH, ROOT_PATH, landing_path_for
from movebetter.auth.session import SessionContext
from movebetter.views import render_login_page

router = APIRouter(tags=['auth'])

PATIENT_LOGIN_PATH = '/paciente-login'
CPF_LENGTH = 11
CNPJ_LENGTH = 14


def _normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    if not normalized:
        raise ValueError('Email is required.')
    return normalized


def _require_password(value: str) -> str:
    if not value.strip():
        raise ValueError('Password is required.')
    return value


class LoginForm(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _require_password(value)


class RegisterForm(BaseModel):
    name: str
    email: str
    password: str
    cpf: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _require_password(value)

    @field_validator('cpf')
    @classmethod
    def validate_cpf(cls, value: str | None) -> str | None:
        if value is None:
            return None

        digits = re.sub(r'[\s./-]', '', value)
        if not digits:
            return None

        if not digits.isdigit() or len(digits) not in (CPF_LENGTH, CNPJ_LENGTH):
            raise ValueError('CPF must have 11 digits or CNPJ 14 digits.')

        return digits


def first_error_message(exc: ValidationError) -> str:
    message = exc.errors()[0]['msg']
    return message.removeprefix('Value error, ')


def safe_return_path(from_path: str | None) -> str | None:
    if not from_path or not from_path.startswith('/') or from_path.startswith('//'):
        return None
    return from_path


def _login_page(status_code: int = status.HTTP_200_OK, **kwargs) -> HTMLResponse:
    return HTMLResponse(render_login_page(**kwargs), status_code=status_code)


def _patient_login_page(status_code: int = status.HTTP_200_OK, **kwargs) -> HTMLResponse:
    return HTMLResponse(
        render_login_page(action=PATIENT_LOGIN_PATH, allow_register=False, **kwargs),
        status_code=status_code,
    )


@router.get('/auth', response_class=HTMLResponse)
def login_page(
    from_path: str | None = Query(None, alias='from'),
    session: SessionContext = Depends(get_session),
):
    if session.is_authenticated:
        return RedirectResponse(url=landing_path_for(session.user.role), status_code=status.HTTP_302_FOUND)
    return _login_page(from_path=safe_return_path(from_path))


@router.post('/auth/login')
async def login(
    email: str = Form(''),
    password: str = Form(''),
    from_path: str | None = Form(None, alias='from'),
    session: SessionContext = Depends(get_session),
):
    return_path = safe_return_path(from_path)
    try:
        data = LoginForm(email=email, password=password)
    except ValidationError as exc:
        return _login_page(
            status.HTTP_400_BAD_REQUEST,
            from_path=return_path,
            email=email,
            error=first_error_message(exc),
        )

    outcome = await session.login(data.email, data.password)
    if not outcome.success:
        return _login_page(
            status.HTTP_401_UNAUTHORIZED,
            from_path=return_path,
            email=data.email,
            error=outcome.error,
        )

    target = return_path or landing_path_for(session.user.role)
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


@router.post('/auth/register')
async def register(
    name: str = Form(''),
    email: str = Form(''),
    password: str = Form(''),
    cpf: str | None = Form(None),
    session: SessionContext = Depends(get_session),
):
    try:
        data = RegisterForm(name=name, email=email, password=password, cpf=cpf)
    except ValidationError as exc:
        return _login_page(status.HTTP_400_BAD_REQUEST, email=email, error=first_error_message(exc))

    outcome = await session.register(data.name, data.email, data.password, data.cpf)
    if not outcome.success:
        return _login_page(status.HTTP_400_BAD_REQUEST, email=data.email, error=outcome.error)

    return RedirectResponse(url=ROOT_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get(PATIENT_LOGIN_PATH, response_class=HTMLResponse)
def patient_login_page(session: SessionContext = Depends(get_patient_session)):
    if session.is_authenticated:
        return RedirectResponse(url=landing_path_for(session.user.role), status_code=status.HTTP_302_FOUND)
    return _patient_login_page()


@router.post(PATIENT_LOGIN_PATH)
async def patient_login(
    email: str = Form(''),
    password: str = Form(''),
    session: SessionContext = Depends(get_patient_session),
):
    try:
        data = LoginForm(email=email, password=password)
    except ValidationError as exc:
        return _patient_login_page(status.HTTP_400_BAD_REQUEST, email=email, error=first_error_message(exc))

    outcome = await session.login(data.email, data.password)
    if not outcome.success:
        return _patient_login_page(status.HTTP_401_UNAUTHORIZED, email=data.email, error=outcome.error)

    return RedirectResponse(url=PATIENT_HOME_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.post('/logout')
def logout(session: SessionContext = Depends(get_session)):
    session.logout()
    return RedirectResponse(url='/auth', status_code=status.HTTP_303_SEE_OTHER)
