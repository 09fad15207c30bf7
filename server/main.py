# server/main.py

import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from api import auth, costs, pages
from core.config import Settings
from core.errors import Unauthorized
from core.security import AuthService
from core.state import SessionManager
from database import create_db_engine, create_session_factory, init_db


logger = logging.getLogger(__name__)


def unauthorized_handler(request: Request, exc: Unauthorized):
    if exc.json_body:
        return JSONResponse(status_code=401, content={"message": exc.message})
    return PlainTextResponse(exc.message, status_code=401)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Builds the application and everything handlers share: database engine,
    session factory, auth service and session store all hang off app.state.
    """
    settings = settings or Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    engine = create_db_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="Expense Tracker")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.auth = AuthService(rounds=settings.bcrypt_rounds)
    app.state.sessions = SessionManager(settings.session_secret, lifetime=settings.session_lifetime)

    app.add_exception_handler(Unauthorized, unauthorized_handler)

    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(costs.router)

    logger.info("Expense tracker configured (env=%s)", settings.app_env)

    return app


def run():
    settings = Settings()
    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
