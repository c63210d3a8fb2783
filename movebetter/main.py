import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse

from movebetter.auth.credential_store import CookieCredentialStore
from movebetter.auth.service_client import AuthServiceClient
from movebetter.core import config
from movebetter.exceptions import GuardRedirect, SessionLoading
from movebetter.routes import auth_routes, console_routes
from movebetter.views import render_loading_page

logger = logging.getLogger(__name__)


def create_app(auth_client: AuthServiceClient | None = None) -> FastAPI:
    logging.basicConfig(level=config.LOG_LEVEL)
    config.validate_runtime_config()

    app = FastAPI()
    app.state.auth_client = auth_client or AuthServiceClient(
        config.AUTH_API_BASE_URL,
        timeout=config.AUTH_API_TIMEOUT_SECONDS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.middleware('http')
    async def persist_credentials(request: Request, call_next):
        store = CookieCredentialStore(
            request.cookies,
            secure=config.SESSION_COOKIE_SECURE,
            max_age=config.SESSION_COOKIE_MAX_AGE,
        )
        request.state.credential_store = store
        response = await call_next(request)
        store.apply(response)
        return response

    @app.exception_handler(GuardRedirect)
    async def handle_guard_redirect(request: Request, exc: GuardRedirect):
        return RedirectResponse(url=exc.location, status_code=status.HTTP_302_FOUND)

    @app.exception_handler(SessionLoading)
    async def handle_session_loading(request: Request, exc: SessionLoading):
        return HTMLResponse(render_loading_page())

    @app.get('/health')
    def health():
        return {'status': 'MoveBetter console running'}

    app.include_router(auth_routes.router)
    app.include_router(console_routes.router)

    logger.info('Console configured against auth API %s', app.state.auth_client.base_url)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run('movebetter.main:app', host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == '__main__':
    run()
