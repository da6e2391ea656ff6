import logging

from apps.settings import settings
from core.fastapi.app import create_app

logger = logging.getLogger("smartpark")


async def on_startup():
    logger.info("Application starting up (debug=%s)", settings.DEBUG)


app = create_app(apps_dir="apps", on_startup=on_startup)


@app.get("/api/ping", summary="Ping the API", tags=["Health Check"])
async def ping():
    return {"success": True, "message": "pong"}
