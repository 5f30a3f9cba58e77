"""FastAPI dependencies and error mapping.

The AppState store is created in the application lifespan (main.py) and
kept on ``app.state.store``. Every view endpoint reads it through
``get_app_state``.
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
import logging

from medcrew.services.app_state import AppState
from medcrew.services.base import InvalidInputError, ViewBusyError

logger = logging.getLogger(__name__)


async def get_app_state(request: Request) -> AppState:
    """Return the process-wide AppState.

    Raises:
        HTTP 503 – if the lifespan has not initialised the store
    """
    store: AppState | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Application state not initialised.",
        )
    return store


async def _invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.info(f"Rejected input on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


async def _view_busy_handler(request: Request, exc: ViewBusyError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidInputError, _invalid_input_handler)
    app.add_exception_handler(ViewBusyError, _view_busy_handler)
