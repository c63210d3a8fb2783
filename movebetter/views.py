from html import escape

from movebetter.auth.models import SessionUser


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>"
        '<html lang="pt-BR">'
        f"<head><meta charset=\"utf-8\"><title>{escape(title)} | MoveBetter</title></head>"
        f"<body>{body}</body>"
        "</html>"
    )


def _error_banner(error: str | None) -> str:
    if not error:
        return ""
    return f'<div role="alert" class="toast toast-error">{escape(error)}</div>'


def render_loading_page() -> str:
    return _page(
        "Carregando",
        '<main class="loading"><h2>Carregando</h2><p>Inicializando sistema...</p></main>',
    )


def render_login_page(
    *,
    action: str = "/auth/login",
    from_path: str | None = None,
    email: str = "",
    error: str | None = None,
    allow_register: bool = True,
) -> str:
    hidden_from = ""
    if from_path:
        hidden_from = f'<input type="hidden" name="from" value="{escape(from_path)}">'

    register_form = ""
    if allow_register:
        register_form = (
            '<form method="post" action="/auth/register" class="register">'
            "<h2>Criar conta</h2>"
            '<input name="name" placeholder="Nome" required>'
            '<input name="email" type="email" placeholder="E-mail" required>'
            '<input name="password" type="password" placeholder="Senha" required>'
            '<input name="cpf" placeholder="CPF/CNPJ (opcional)">'
            '<button type="submit">Cadastrar</button>'
            "</form>"
            '<a href="/paciente-login" class="patient-login">Sou paciente</a>'
        )

    return _page(
        "Entrar",
        "<main>"
        f"{_error_banner(error)}"
        f'<form method="post" action="{escape(action)}" class="login">'
        "<h1>Entrar</h1>"
        f"{hidden_from}"
        f'<input name="email" type="email" placeholder="E-mail" value="{escape(email)}" required>'
        '<input name="password" type="password" placeholder="Senha" required>'
        '<button type="submit">Entrar</button>'
        "</form>"
        f"{register_form}"
        "</main>",
    )


def _logout_form() -> str:
    return '<form method="post" action="/logout"><button type="submit">Sair</button></form>'


def render_dashboard(user: SessionUser) -> str:
    return _page(
        "Painel",
        f"<header><h1>Olá, {escape(user.name)}</h1>{_logout_form()}</header>"
        "<nav>"
        '<a href="/perfil">Dados pessoais</a>'
        "</nav>",
    )


def render_patient_home(user: SessionUser) -> str:
    return _page(
        "Área do paciente",
        f"<header><h1>Bem-vindo(a), {escape(user.name)}</h1>{_logout_form()}</header>"
        '<nav><a href="/perfil">Meus dados</a></nav>',
    )


def render_personal_data(user: SessionUser) -> str:
    return _page(
        "Dados pessoais",
        "<main><h1>Dados pessoais</h1>"
        "<dl>"
        f"<dt>Nome</dt><dd>{escape(user.name)}</dd>"
        f"<dt>E-mail</dt><dd>{escape(user.email)}</dd>"
        f"<dt>Perfil</dt><dd>{escape(user.role.value)}</dd>"
        "</dl></main>",
    )
