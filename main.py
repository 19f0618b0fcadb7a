#!/usr/bin/env python
import traceback
import uuid
from contextlib import asynccontextmanager
from datetime import datetime

import certifi
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient

from assemblers import get_assembler_registry
from config import settings
from exceptions import ClubAPIException
from logging_config import logger
from routers.coaches import router as coaches_router
from routers.feeds import router as feeds_router
from routers.halls import router as halls_router
from routers.role_coaches import router as role_coaches_router
from routers.root import router as root_router
from routers.teams import router as teams_router
from routers.training_sessions import router as training_sessions_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Club Training API server...")
    get_assembler_registry()
    logger.info(f"Connecting to MongoDB: {settings.DB_NAME}")
    app.state.client = AsyncIOMotorClient(settings.DB_URL, tlsCAFile=certifi.where())
    app.state.mongodb = app.state.client[settings.DB_NAME]
    logger.info("MongoDB connection established")

    yield

    # Shutdown
    logger.info("Shutting down Club Training API server...")
    app.state.client.close()
    logger.info("MongoDB connection closed")


app = FastAPI(
    lifespan=lifespan,
    title="Club Training API",
    version="1.0.0",
    description="""
## Club Training API

Training administration for a sports club: coaches, halls, teams, weekly training
sessions and the roles coaches hold in teams, plus a mirror of the club's Facebook feed.

### Hypermedia

Responses use `application/prs.hal-forms+json`. Every resource carries `_links`
(`self`, `collection`, related resources) and, for administrators, `_templates`
describing the operations currently allowed on it.

### Authentication

Reading is public. Creating, updating and deleting require a bearer token with the
`ADMIN` role:

```
Authorization: Bearer <your_access_token>
```

### Pagination

List endpoints accept `page` (0-indexed), `size` and `sort` (`field,asc|desc`) query
parameters. `/all` endpoints return the full collection.

### Error Handling

All errors return a standardized format with correlation IDs for debugging:

```json
{
  "error": {
    "message": "Resource not found",
    "status_code": 404,
    "correlation_id": "uuid",
    "timestamp": "ISO-8601",
    "path": "/api/endpoint"
  }
}
```
    """,
    openapi_tags=[
        {"name": "root", "description": "API index"},
        {"name": "halls", "description": "Training halls and their addresses"},
        {"name": "coaches", "description": "Coach management"},
        {"name": "teams", "description": "Teams, their training sessions and their coaches"},
        {"name": "training-sessions", "description": "Weekly training slots"},
        {"name": "role-coaches", "description": "Roles held by coaches in teams"},
        {"name": "feeds", "description": "Posts of the club's Facebook page"},
    ],
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_body(request: Request, correlation_id: str, message, status_code: int, details=None) -> dict:
    return {
        "error": {
            "message": message,
            "status_code": status_code,
            "correlation_id": correlation_id,
            "timestamp": datetime.utcnow().isoformat(),
            "path": request.url.path,
            "details": details,
        }
    }


# Exception Handlers
@app.exception_handler(ClubAPIException)
async def club_exception_handler(request: Request, exc: ClubAPIException):
    """Handle all custom API exceptions"""
    correlation_id = str(uuid.uuid4())

    # Log the error with correlation ID
    logger.error(
        f"[{correlation_id}] {exc.__class__.__name__}: {exc.message}",
        extra={
            "correlation_id": correlation_id,
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, correlation_id, exc.message, exc.status_code, exc.details),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request body and parameter validation failures as 400"""
    correlation_id = str(uuid.uuid4())
    errors = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]

    logger.warning(f"[{correlation_id}] Validation failed on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=400,
        content=error_body(request, correlation_id, "Request validation failed", 400, {"errors": errors}),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle FastAPI HTTPExceptions with consistent format"""
    correlation_id = str(uuid.uuid4())

    logger.error(
        f"[{correlation_id}] HTTPException: {exc.detail}",
        extra={
            "correlation_id": correlation_id,
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code, content=error_body(request, correlation_id, exc.detail, exc.status_code)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected exceptions"""
    correlation_id = str(uuid.uuid4())

    # Log full traceback for unexpected errors
    logger.error(
        f"[{correlation_id}] Unhandled exception: {str(exc)}",
        extra={
            "correlation_id": correlation_id,
            "path": request.url.path,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=500, content=error_body(request, correlation_id, "An unexpected error occurred", 500)
    )


app.include_router(root_router, prefix=settings.API_PREFIX, tags=["root"])
app.include_router(halls_router, prefix=f"{settings.API_PREFIX}/halls", tags=["halls"])
app.include_router(coaches_router, prefix=f"{settings.API_PREFIX}/coaches", tags=["coaches"])
app.include_router(teams_router, prefix=f"{settings.API_PREFIX}/teams", tags=["teams"])
app.include_router(
    training_sessions_router, prefix=f"{settings.API_PREFIX}/training-sessions", tags=["training-sessions"]
)
app.include_router(role_coaches_router, prefix=f"{settings.API_PREFIX}/role-coaches", tags=["role-coaches"])
app.include_router(feeds_router, prefix=f"{settings.API_PREFIX}/feeds", tags=["feeds"])

# if __name__ == "__main__":
#    uvicorn.run("main:app", reload=True)
