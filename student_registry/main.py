from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse

import student_registry.db.base  # noqa: F401
from student_registry.api.main import api_router
from student_registry.core.errors import NotFoundError
from student_registry.core.logging import configure_logging, get_logger
from student_registry.core.security import CSPMiddleware
from student_registry.core.settings import Env, settings
from student_registry.middlewares.telemetry import RequestContextMiddleware
from student_registry.version import APP_VERSION, BUILD_TIME_UTC, GIT_SHA
from student_registry.web.routes import students
from student_registry.web.templating import STATIC_DIR, render

configure_logging(json=settings.LOG_JSON, level=settings.LOG_LEVEL)

app = FastAPI(debug=settings.DEBUG, title="Student Registry", version=APP_VERSION)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# --- Request context / logging
app.add_middleware(RequestContextMiddleware)

# --- CORS (only matters for the JSON API)
allowed_origins = []
for host in settings.ALLOWED_HOSTS.split(","):
    _host = host.strip()
    if not _host:
        continue
    if _host.startswith("http"):
        allowed_origins.append(_host)
    else:
        allowed_origins.append(f"http://{_host}")
        allowed_origins.append(f"https://{_host}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# --- HTTPS only in prod
if settings.APP_ENV == Env.PROD:
    app.add_middleware(HTTPSRedirectMiddleware)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)

    if settings.APP_ENV == Env.PROD:
        response.headers["Strict-Transport-Security"] = (
            "max-age=15552000; includeSubDomains"
        )
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "no-referrer"
    return response


# Signed session: flash messages and the anti-forgery token
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SECURE_COOKIES,
)
app.add_middleware(CSPMiddleware)

app.include_router(api_router)
app.include_router(students.router)


@app.exception_handler(NotFoundError)
async def student_not_found(request: Request, exc: NotFoundError):
    get_logger().info("student.not_found", student_id=exc.student_id)
    if request.url.path.startswith("/api/"):
        return JSONResponse({"detail": str(exc)}, status_code=404)
    ctx = {"message": str(exc), "trail": [("/students", "Students")]}
    return render(request, "pages/errors/404.html", ctx, status_code=404)


# --- Endpoints
@app.get("/healthz", tags=["ops"])
def healthz():
    get_logger().info("health.check")
    return {"status": "ok", "env": settings.APP_ENV, "version": APP_VERSION}


@app.get("/version", tags=["ops"])
def version():
    return {
        "version": APP_VERSION,
        "git_sha": GIT_SHA,
        "build_time_utc": BUILD_TIME_UTC,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
    }


@app.get("/", include_in_schema=False)
def home_redirect():
    return RedirectResponse("/students", status_code=303)
