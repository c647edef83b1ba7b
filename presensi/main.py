from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import time

from presensi.core.config import get_settings
from presensi.core.security import TokenError, warn_if_secret_missing
from presensi.core.activity_log import log_activity, activity_kind_for_path
from presensi.routers import auth, pin, validation, presensi

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

# Endpoint yang di-poll aplikasi, tidak perlu dicatat di activity log
SKIP_ACTIVITY_PATHS = ["/validation/location"]


@asynccontextmanager
async def lifespan(app):
    warn_if_secret_missing(settings)
    logging.getLogger("presensi").info(f"✅ {settings.APP_NAME} started (TZ={settings.TIMEZONE})")
    yield
    logging.getLogger("presensi").info("🛑 Presensi API stopped")


app_fastapi = FastAPI(
    title=settings.APP_NAME,
    description="Backend presensi karyawan: login NIK/PIN, validasi lokasi (geofence), absen masuk/pulang",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


@app_fastapi.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    path = request.url.path
    if path.startswith("/api") and not any(skip in path for skip in SKIP_ACTIVITY_PATHS):
        duration_ms = int((time.time() - start) * 1000)
        log_activity(
            activity_kind_for_path(path),
            f"{request.method} {path}",
            {
                "status": response.status_code,
                "duration": f"{duration_ms}ms",
                "ip": request.client.host if request.client else None,
            },
            success=response.status_code < 400,
        )
    return response


@app_fastapi.exception_handler(TokenError)
async def token_error_handler(request: Request, exc: TokenError):
    # Sampai sini hanya jika penerbitan token gagal (mis. JWT_SECRET kosong)
    logging.getLogger("security").error(f"Token error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": {"code": "SERVER_ERROR", "message": "Internal server error"}},
    )


app_fastapi.include_router(auth.router)
app_fastapi.include_router(pin.router)
app_fastapi.include_router(validation.router)
app_fastapi.include_router(presensi.router)


@app_fastapi.get("/")
def read_root():
    return {"message": "Presensi API is running"}


app = app_fastapi
