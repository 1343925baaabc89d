import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kop_signup.core.config import settings
from kop_signup.core.db import close_db, ensure_indexes, get_db
from kop_signup.core.log import configure_logging
from kop_signup.routes.signup import router as signup_router


log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === STARTUP ===
    await ensure_indexes(get_db())
    log.info("signup-api-startup", env=settings.ENV)
    yield
    # === SHUTDOWN ===
    await close_db()
    log.info("signup-api-shutdown", env=settings.ENV)


def create_app(use_lifespan: bool = True) -> FastAPI:
    configure_logging()

    app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan if use_lifespan else None)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.include_router(signup_router)

    @app.get("/alive")
    async def alive():
        return {"status": "ok", "env": settings.ENV}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("kop_signup.main:app", host=settings.HOST, port=settings.PORT)
