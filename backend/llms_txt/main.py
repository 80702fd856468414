import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from llms_txt.api.main import api_router
from llms_txt.core.config import settings
from llms_txt.core.redis import redis_conn
from llms_txt.exceptions import LlmsTxtError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Connecting to Redis...")
    try:
        await redis_conn.connect()
    except (RedisError, OSError):
        # Documents are still served, just without caching.
        logger.error("Redis unavailable at startup, llms.txt will be generated uncached")
    yield
    logger.info("Closing Redis connection...")
    await redis_conn.close()


app = FastAPI(title="llms.txt", lifespan=lifespan)
app.include_router(api_router)


@app.exception_handler(LlmsTxtError)
async def llms_txt_exception_handler(request: Request, exc: LlmsTxtError) -> PlainTextResponse:
    logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.exception_handler(SQLAlchemyError)
async def repository_exception_handler(request: Request, exc: SQLAlchemyError) -> PlainTextResponse:
    # No retries here; the client decides whether to try again.
    logger.error(f"Generating {request.url.path} failed: {exc}")
    return PlainTextResponse("Document generation failed", status_code=503)
