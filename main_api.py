"""
Voter Registry Lookup: FastAPI Backend
======================================
JSON API consumed by the search UI:
  - POST /api/search   one registry search (paginated scrape)
  - GET  /api/health   liveness probe

Start:
    uvicorn main_api:app --reload --port 5000

Interactive docs:
    http://localhost:5000/docs
"""

import logging
import os
import time
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from voterlookup.domain import errors
from voterlookup.domain.entities.search_params import SearchParams


def _resolve_log_level(value: Optional[str]) -> int:
    # An unknown level is reported by Config at startup; logging falls back to INFO
    level = logging.getLevelName((value or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=_resolve_log_level(os.getenv("LOG_LEVEL")),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Armenian Election Registry Search API"
UNAVAILABLE_MESSAGE = (
    "Service unavailable. Please try again later. / Ծառայությունն անհասանելի է։"
)
INVALID_REQUEST_MESSAGE = "Invalid request body / Անվավեր հարցում"

# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(title=SERVICE_NAME, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# ── Dependency-injection container (initialised at startup) ───────────────────

_container = None
_startup_error: Optional[str] = None


@app.on_event("startup")
async def startup():
    global _container, _startup_error
    try:
        from voterlookup.infrastructure.config import Config
        from voterlookup.infrastructure.container import Container

        _container = Container(Config.from_env())
        logger.info(
            f"Container initialised | env={_container.config.app_env} | "
            f"proxy={'on' if _container.config.effective_proxy else 'off'}"
        )
    except Exception as e:
        _startup_error = str(e)
        logger.error(f"Container startup failed: {e}")


def get_container():
    return _container


# ── Request / Response models ─────────────────────────────────────────────────


class SearchRequest(BaseModel):
    # Names are optional here so that missing ones get the bilingual 400
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    birth_date: Optional[str] = None
    region: Optional[str] = None
    community: Optional[str] = None
    street: Optional[str] = None
    building: Optional[str] = None
    apartment: Optional[str] = None
    district: Optional[str] = None


def _error(status_code: int, message: str, details: Optional[str] = None) -> JSONResponse:
    body = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _details(e: Exception) -> Optional[str]:
    c = get_container()
    if c is not None and c.config.is_development:
        return str(e) or type(e).__name__
    return None


# ── Health ────────────────────────────────────────────────────────────────────


@app.get("/api/health", tags=["meta"])
async def health():
    c = get_container()
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "token_cache": c.token_cache.status() if c is not None else "unavailable",
        "error": _startup_error,
    }


# ── Search ────────────────────────────────────────────────────────────────────


@app.post("/api/search", tags=["search"])
async def search(req: SearchRequest, request: Request):
    """
    Run one registry search. An empty result list is a success;
    only validation, token and first-page network failures are errors.
    """
    c = get_container()
    if c is None:
        detail = f"Service misconfigured: {_startup_error}" if _startup_error else "Service not ready."
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, detail)

    started = time.monotonic()
    params = SearchParams.from_dict(req.model_dump())
    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"[API] /api/search from {client_ip}")

    try:
        response = await c.search_use_case.execute(params)
    except errors.ValidationError as e:
        logger.warning(f"[API] Rejected: {e}")
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except errors.TokenUnavailable as e:
        logger.error(f"[API] Token unavailable after {time.monotonic() - started:.2f}s: {e}")
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, UNAVAILABLE_MESSAGE, _details(e))
    except Exception as e:
        logger.exception(f"[API] Search failed after {time.monotonic() - started:.2f}s: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, UNAVAILABLE_MESSAGE, _details(e))

    logger.info(
        f"[API] OK {response.count} results in {time.monotonic() - started:.2f}s"
        + (" (partial)" if response.is_partial else "")
    )
    return {
        "success": True,
        "count": response.count,
        "results": [row.to_dict() for row in response.results],
    }


# ── 404 ───────────────────────────────────────────────────────────────────────


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error(status.HTTP_404_NOT_FOUND, "Endpoint not found")
    return _error(exc.status_code, str(exc.detail))


# ── 400 for malformed bodies ──────────────────────────────────────────────────


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"[API] Malformed body on {request.url.path}: {exc.errors()}")
    return _error(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE)
