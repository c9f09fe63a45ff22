from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import db
from app.api.routes import router
from app.core.config import get_settings
from app.core.logging_config import configure_logging, get_logger
from teamgen import InfeasibleConstraints, InvalidRequest

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    # A bad palette is a startup failure, never a per-request one.
    settings.validate()
    db.init_db()
    logger.info(
        "startup_complete",
        jersey_colors=list(settings.jersey_colors),
        max_roster_size=settings.max_roster_size,
        max_teams=settings.max_teams,
    )
    yield


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidRequest)
async def invalid_request_handler(request: Request, exc: InvalidRequest) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


@app.exception_handler(InfeasibleConstraints)
async def infeasible_constraints_handler(request: Request, exc: InfeasibleConstraints) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=exc.to_dict())


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(router, prefix=settings.api_prefix)
