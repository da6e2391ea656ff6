import importlib
import logging
import pkgutil
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, FastAPI
from fastapi.responses import ORJSONResponse
from starlette.middleware.cors import CORSMiddleware

from apps.settings import settings
from core.db.core import engine
from core.fastapi.handlers import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def discover_routers(apps_dir: str) -> list[APIRouter]:
    """
    Import ``<apps_dir>.api.<module>.router`` for every API module and
    collect the ``router`` objects they define.
    """
    api_package = importlib.import_module(f"{apps_dir}.api")
    routers = []
    for module_info in sorted(pkgutil.iter_modules(api_package.__path__), key=lambda m: m.name):
        if not module_info.ispkg:
            continue
        module_name = f"{apps_dir}.api.{module_info.name}.router"
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name != module_name:
                raise
            continue
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            routers.append(router)
            logger.debug("Registered router %s", module_name)
    return routers


def create_app(
    apps_dir: str = "apps",
    on_startup: Optional[Callable[[], Awaitable[None]]] = None,
    api_prefix: str = "/api",
) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if on_startup is not None:
            await on_startup()
        yield
        await engine.dispose()

    app = FastAPI(
        title="SmartPark API",
        debug=settings.DEBUG,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in discover_routers(apps_dir):
        app.include_router(router, prefix=api_prefix)
    return app
