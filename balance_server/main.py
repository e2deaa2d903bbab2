from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from balance_server import __version__
from balance_server.core.config import get_settings
from balance_server.core.logging_config import configure_logging
from balance_server.infrastructure.database import init_db
from balance_server.infrastructure.database.session import dispose_engine
from balance_server.interfaces.http import create_api_router, register_exception_handlers

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    await init_db()
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Device-gated balance ledger service",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "balance_server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )
