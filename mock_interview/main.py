from dotenv import load_dotenv
from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
# Rate Limiter
from mock_interview.core.route_limiters import limiter
# Routers
from mock_interview.routes.health import router as health_router
from mock_interview.routes.auth import router as auth_router
from mock_interview.routes.interviews import router as interviews_router
from mock_interview.routes.transcription import router as transcription_router
# CORS Middleware
from mock_interview.core.cors_middleware import add_cors_middleware
# Logger
from loguru import logger
# Database
from mock_interview.database import create_tables
# Error Handling
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY
from sqlalchemy.exc import IntegrityError

from mock_interview.errors.handlers import http_exception_handler, generic_exception_handler, database_integrity_handler

# Load environment variables
load_dotenv()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    # Startup
    try:
        create_tables()
        logger.info("Application startup completed successfully")
    except Exception as e:
        logger.error(f"Error during application startup: {e}")
        raise

    yield

    logger.info("Application shutdown")

# Initialize FastAPI app
app = FastAPI(
    title="Mock Interview API",
    description="API for creating mock interviews, scoring answers and resolving doubts",
    version="0.1.0",
    lifespan=lifespan
)
# Add CORS middleware
add_cors_middleware(app)

# Centralized error handlers
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)
app.add_exception_handler(IntegrityError, database_integrity_handler)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )

# Add rate limiter to the app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(interviews_router)
app.include_router(transcription_router)
