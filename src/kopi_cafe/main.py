import logging

from fastapi import FastAPI

from kopi_cafe.api import health
from kopi_cafe.api.routes.orders import router as orders_router
from kopi_cafe.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Kopi Cafe")

app.include_router(health.router)
app.include_router(orders_router)


@app.on_event("startup")
async def on_startup():
    logger.info("Application started")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Application stopped")
