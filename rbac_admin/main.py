import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from timing_asgi import TimingMiddleware, TimingClient  # type: ignore
from timing_asgi.integrations import StarletteScopeToName  # type: ignore

from rbac_admin.core import config
from rbac_admin.core.admin import RBACAdmin
from rbac_admin.core.database.repository import Repository, SqlAlchemyRepository
from rbac_admin.core.dependencies import get_authorization_header
from rbac_admin.core.seed import default_snapshot
from rbac_admin.features.users.routes import router as user_router
from rbac_admin.features.roles.routes import router as role_router
from rbac_admin.features.permissions.routes import router as permission_router
from rbac_admin.utils import get_logger


log = get_logger(__name__)


class PrintTimings(TimingClient):
    def timing(self, metric_name, timing, tags):
        log.debug(dict(route=metric_name.removeprefix("main.rbac_admin.features."), timing=timing, tags=tags))


async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    errors = dict()
    for error in exc.errors():
        if "loc" not in error or "msg" not in error:
            continue
        key = error["loc"][-1]
        if key == "__root__":
            key = "root"
        errors[key] = error["msg"]
    log.info("Request validation error %s", errors)
    return JSONResponse(status_code=400, content=jsonable_encoder(errors))


def rate_limit_exceeded_handler(_request: Request, _exc: RateLimitExceeded) -> Response:
    return JSONResponse({"error": "You are going too fast"}, status_code=429)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the user and role collections and build the RBAC core."""
    repository: Repository = app.state.repository
    await repository.init()

    if app.state.admin is None:
        users, roles = await repository.load()
        if not users and not roles and app.state.seed_defaults:
            log.info("Empty repository, seeding default users and roles")
            users, roles = default_snapshot()
            await repository.save(users, roles)
        app.state.admin = RBACAdmin.from_snapshot(
            users, roles, enforce_role_references=app.state.enforce_role_references
        )

    log.info("RBAC core ready with %d users and %d roles", len(app.state.admin.users), len(app.state.admin.roles))
    yield


def create_app(
    repository: Optional[Repository] = None,
    admin: Optional[RBACAdmin] = None,
    seed_defaults: bool = config.SEED_DEFAULTS,
    enforce_role_references: bool = config.ENFORCE_ROLE_REFERENCES,
    rate_limit: str = config.RATE_LIMIT,
) -> FastAPI:
    """
    Build the admin API.

    Args:
        repository: Persistence adapter (defaults to the SQLAlchemy one on DATABASE_URL).
        admin: A ready RBAC core; when given, nothing is loaded from the repository.
        seed_defaults: Seed the default users/roles into an empty repository.
        enforce_role_references: Reject users whose role does not exist.
        rate_limit: slowapi limit applied to every route.
    """
    log.info("Initializing server")
    app = FastAPI(
        title="RBAC Admin",
        description="User and role-based access control administration API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if config.ENABLE_DOCS else None,
        redoc_url="/redoc" if config.ENABLE_DOCS else None,
        openapi_url="/openapi.json" if config.ENABLE_DOCS else None
    )
    app.state.repository = repository if repository is not None else SqlAlchemyRepository()
    app.state.admin = admin
    app.state.seed_defaults = seed_defaults
    app.state.enforce_role_references = enforce_role_references
    app.state.save_lock = asyncio.Lock()

    app.state.limiter = Limiter(key_func=get_authorization_header, default_limits=[rate_limit])
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(TimingMiddleware, client=PrintTimings(), metric_namer=StarletteScopeToName("main", app))

    if config.ENABLE_DOCS:
        log.warning("Docs enabled")
    if config.ALLOW_ORIGIN:
        log.warning("Setting allow origin to %s", config.ALLOW_ORIGIN)
        origins = [config.ALLOW_ORIGIN]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.get("/")
    async def root():
        """Root endpoint - API health check."""
        return {
            "message": "RBAC Admin API",
            "version": "0.1.0",
            "status": "online",
            "docs": "/docs" if config.ENABLE_DOCS else None,
            "features": {
                "users": "User management with search, sort and two-phase delete",
                "roles": "Roles carrying permission sets",
                "permissions": "Read-only permission catalog with display labels",
            }
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Include routers
    app.include_router(user_router, prefix="/users", tags=["users"])
    app.include_router(role_router, prefix="/roles", tags=["roles"])
    app.include_router(permission_router, prefix="/permissions", tags=["permissions"])

    return app


app = create_app()
