import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from gift_planner.config import settings
from gift_planner.core.exceptions import GiftPlannerError
from gift_planner.database import get_repository
from gift_planner.modules.auth import routes as auth_routes
from gift_planner.modules.users import routes as users_routes
from gift_planner.modules.groups import routes as groups_routes
from gift_planner.modules.events import routes as events_routes
from gift_planner.modules.receivers import routes as receivers_routes
from gift_planner.modules.wishlists import routes as wishlists_routes
from gift_planner.modules.gifts import routes as gifts_routes
from gift_planner.modules.assignments import routes as assignments_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(GiftPlannerError)
async def gift_planner_exception_handler(request: Request, exc: GiftPlannerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


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


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Public auth routes, then the bearer-protected resources
app.include_router(auth_routes.router, prefix="/api")
app.include_router(users_routes.router, prefix="/api")
app.include_router(groups_routes.router, prefix="/api")
app.include_router(events_routes.router, prefix="/api")
app.include_router(receivers_routes.router, prefix="/api")
app.include_router(wishlists_routes.router, prefix="/api")
app.include_router(gifts_routes.router, prefix="/api")
app.include_router(assignments_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    repository = get_repository()
    logger.info("Application startup (%s backend)", repository.backend_name)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to gift-planner", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "ok"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: the data backend has been constructed"""
    get_repository()
    return {"status": "ready"}
