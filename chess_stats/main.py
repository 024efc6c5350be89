from contextlib import asynccontextmanager
import logging

import aiohttp
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from chess_stats.routes.stats import router as stats_router
from chess_stats.services.setup.setup_poller_service import SetupPollError, SetupTimeoutError
from chess_stats.services.stats_api_service import StatsApiServiceError


def _ensure_logging() -> None:
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(logging.INFO)
        for handler in root.handlers:
            handler.setFormatter(formatter)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_logging()
    async with aiohttp.ClientSession() as session:
        app.state.http_session = session
        yield
    app.state.http_session = None


app = FastAPI(lifespan=lifespan)

app.include_router(stats_router)


@app.exception_handler(StatsApiServiceError)
async def stats_api_error_handler(request: Request, exc: StatsApiServiceError) -> JSONResponse:
    """Map stats backend failures to a consistent HTTP response.

    Returns:
        502 Bad Gateway with a JSON body: {"detail": "..."}
    """
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


@app.exception_handler(SetupPollError)
async def setup_poll_error_handler(request: Request, exc: SetupPollError) -> JSONResponse:
    status_code = status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, SetupTimeoutError):
        status_code = status.HTTP_504_GATEWAY_TIMEOUT
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/")
async def root():
    return {"message": "Hello World! Chess stats service is running."}
