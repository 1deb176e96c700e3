import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings
from app.core.middleware import CORSGateMiddleware, SecurityHeadersMiddleware
from app.core.rate_limit import limiter
from app.modules.auth import routes as auth_routes
from app.modules.profile import routes as profile_routes
from app.modules.events import routes as events_routes
from app.modules.wishes import routes as wishes_routes
from app.modules.notes import routes as notes_routes
from app.modules.photos import routes as photos_routes
from app.modules.invites import routes as invites_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request",
            "errors": [
                {
                    "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                    "message": error.get("msg", ""),
                }
                for error in exc.errors()
            ],
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Outermost: disallowed origins never reach the routes
app.add_middleware(CORSGateMiddleware, allow_origins=settings.get_cors_origins_list())

# Include module routes
app.include_router(auth_routes.router, prefix=settings.api_prefix)
app.include_router(profile_routes.router, prefix=settings.api_prefix)
app.include_router(events_routes.router, prefix=settings.api_prefix)
app.include_router(wishes_routes.router, prefix=settings.api_prefix)
app.include_router(notes_routes.router, prefix=settings.api_prefix)
app.include_router(photos_routes.router, prefix=settings.api_prefix)
app.include_router(invites_routes.router, prefix=settings.api_prefix)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup ({settings.environment}), routes under {settings.api_prefix}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
@app.get(f"{settings.api_prefix}/")
@limiter.exempt
async def root():
    return {"message": f"Welcome to {settings.app_name}", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with a Supabase ping if needed."""
    return {"status": "ready"}
