from fastapi import FastAPI, Request, Security
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.security.api_key import APIKeyHeader
from api.roster import router as roster_router
from api.healthcheck import router as healthcheck_router
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from dotenv import load_dotenv
from utils.logger import logger
import os
import secrets
import time

load_dotenv()
# env
API_KEY = os.getenv("API_KEY")
CORS_ALLOW_ORIGINS = [o for o in os.getenv("CORS_ALLOW_ORIGINS", "").split(",") if o]
ALLOWED_HOSTS = [h for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h] or ["*"]
# rosters for a large department with a previous-month tail stay well below 2 MB
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(2 * 1024 * 1024)))  # 0 = no limit

APP_DESCRIPTION = """
Monthly duty roster generation for clinical (physician) and nursing teams.

Rosters are built by a greedy layered engine that never breaks the hard rules,
repeated with Monte Carlo restarts or refined by a genetic search. Unstaffable
positions are returned as `EMPTY` assignments together with a diagnostic log.
"""

# app
api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)
app = FastAPI(title="Duty Roster Engine", version="0.1.0", description=APP_DESCRIPTION)

# Paths served without an API key
PUBLIC_EXACT = {
    "/openapi.json",
    "/redoc",
    "/docs",
    "/api/health/check",
}

PUBLIC_PREFIXES = (
    "/docs/",
    "/api/health/check",
)

# middlewares
if os.getenv("ENABLE_CORS") == "true":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# allowed hosts
app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)


# request size guard for roster payloads
@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    if MAX_BODY_BYTES > 0:
        cl = request.headers.get("content-length")
        if cl and cl.isdigit() and int(cl) > MAX_BODY_BYTES:
            logger.warning(f"🚫 Rejected {request.url.path}: body of {cl} bytes")
            return JSONResponse(
                status_code=413, content={"detail": "Payload too large"}
            )
    return await call_next(request)


# API key middleware
@app.middleware("http")
async def api_key_guard(request: Request, call_next):
    path = request.url.path

    if request.method == "OPTIONS":
        return await call_next(request)

    if path in PUBLIC_EXACT or any(path.startswith(p) for p in PUBLIC_PREFIXES):
        return await call_next(request)

    if not API_KEY:
        logger.warning("API_KEY not set; API key auth is DISABLED (dev mode).")
        return await call_next(request)

    client_key = request.headers.get("x-api-key")
    if not client_key or not secrets.compare_digest(str(client_key), str(API_KEY)):
        return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

    return await call_next(request)


# generation runs can take seconds; log how long each request took
@app.middleware("http")
async def log_timing(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started
    if request.url.path.startswith("/api/roster"):
        logger.info(
            f"⏱️ {request.method} {request.url.path} -> {response.status_code} in {elapsed:.2f}s"
        )
    return response


# log rejected roster payloads before returning the usual 422
@app.exception_handler(RequestValidationError)
async def log_validation_error(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    logger.warning(
        f"❌ Invalid payload for {request.url.path}: {len(exc.errors())} error(s), "
        f"first at {first.get('loc')}: {first.get('msg')}"
    )
    return await request_validation_exception_handler(request, exc)


# get api key
def get_api_key(api_key_header: str = Security(api_key_header)):
    return api_key_header


# enable header api key
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # security scheme definition
    schema.setdefault("components", {}).setdefault("securitySchemes", {})[
        "ApiKeyAuth"
    ] = {
        "type": "apiKey",
        "in": "header",
        "name": "x-api-key",
        "description": "Enter your API key",
    }

    # roster routes require the key
    for path, methods in schema.get("paths", {}).items():
        for op in methods.values():
            op.setdefault("security", [{"ApiKeyAuth": []}])

    # health stays public in the docs
    if "/api/health/check" in schema.get("paths", {}):
        for op in schema["paths"]["/api/health/check"].values():
            op["security"] = []

    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi

# Register routers
app.include_router(roster_router, prefix="/api")
app.include_router(healthcheck_router, prefix="/api")
