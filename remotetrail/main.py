import logging
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from remotetrail.api.routes import admin, auth, health, jobs, listing
from remotetrail.core import config
from remotetrail.core.errors import JobBoardError, JobValidationError
from remotetrail.core.logging_config import setup_logging

setup_logging(config.LOG_LEVEL, config.LOG_DIR or None)
logger = logging.getLogger(__name__)


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="RemoteTrail Job Board")

# ✅ CORS: ONLY THE CONFIGURED FRONTENDS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ ERROR RESPONSES: {"success": false, "message": ...}
# ============================================

@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError):
    # Server-side details stay in the logs
    message = exc.message if exc.status_code < 500 else JobBoardError.default_message
    content = {"success": False, "message": message}
    if isinstance(exc, JobValidationError):
        content["missing"] = exc.missing
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # 401 keeps its WWW-Authenticate header, 429 its limit message
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(jobs.router)
app.include_router(listing.router)
app.include_router(admin.router)
app.include_router(health.router)

# ✅ UPLOADED LOGOS
Path(config.UPLOADS_DIR).mkdir(parents=True, exist_ok=True)
app.mount(config.UPLOADS_URL_PREFIX, StaticFiles(directory=config.UPLOADS_DIR), name="uploads")


# ============================================
# ✅ ROOT ENDPOINT
# ============================================

@app.get("/")
def root():
    return {"status": "RemoteTrail API running"}
