import logging
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from supabase import Client

from app.config import settings
from app.core.notifications import NOTIFICATIONS_HEADER, get_notifier
from app.database.supabase_client import get_supabase
from app.modules.auth import routes as auth_routes
from app.modules.users import routes as users_routes
from app.modules.departments import routes as departments_routes
from app.modules.classes import routes as classes_routes
from app.modules.equipment import routes as equipment_routes
from app.modules.rooms import routes as rooms_routes
from app.modules.reservations import routes as reservations_routes
from app.modules.equipment_requests import routes as equipment_requests_routes
from app.modules.printing_requests import routes as printing_requests_routes
from app.modules.room_requests import routes as room_requests_routes
from app.modules.approvals import routes as approvals_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(StarletteHTTPException)
async def notify_http_exception(request: Request, exc: StarletteHTTPException):
    """Every error response carries a destructive notification; services may already have pushed one."""
    notifier = get_notifier(request)
    if not any(n.variant == "destructive" for n in notifier.notifications):
        notifier.error("Request failed", str(exc.detail))
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.middleware("http")
async def notifications_middleware(request: Request, call_next):
    notifier = get_notifier(request)
    response = await call_next(request)
    if notifier.notifications:
        response.headers[NOTIFICATIONS_HEADER] = notifier.to_header()
    return response


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[NOTIFICATIONS_HEADER],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(users_routes.router, prefix="/api/v1")
app.include_router(departments_routes.router, prefix="/api/v1")
app.include_router(classes_routes.router, prefix="/api/v1")
app.include_router(equipment_routes.router, prefix="/api/v1")
app.include_router(rooms_routes.router, prefix="/api/v1")
app.include_router(reservations_routes.router, prefix="/api/v1")
app.include_router(equipment_requests_routes.router, prefix="/api/v1")
app.include_router(printing_requests_routes.router, prefix="/api/v1")
app.include_router(room_requests_routes.router, prefix="/api/v1")
app.include_router(approvals_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup ({settings.environment})")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to booking-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready(response: Response, supabase: Client = Depends(get_supabase)):
    """Readiness check: 503 when Supabase cannot be queried"""
    try:
        supabase.table("departments").select("id").limit(1).execute()
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        response.status_code = 503
        return {"status": "not_ready", "checks": {"supabase": False}}
    return {"status": "ready", "checks": {"supabase": True}}
