"""
Health check endpoint for the application.

Description:
This module defines a FastAPI route for checking the health status of the
application. The route always answers 200 while the process is up; a failing
database only marks the response as degraded.

Returns:
- {"status": "ok", "database": "ok"}, or {"status": "degraded", "database": "unavailable"}.

Dependencies:
- fastapi: For defining routes.
- sqlalchemy: For the database round trip.
- mock_interview.core.route_limiters: For rate limiting functionality.
- mock_interview.schemas.health_response: For defining the response model.
- loguru: For logging information about the health check endpoint.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from mock_interview.core.route_limiters import limiter
from mock_interview.database import get_db_session
from mock_interview.schemas.health_response import HealthResponse
from loguru import logger

router = APIRouter(
    prefix="/api",
    tags=["health"],
    responses={404: {"description": "Not found"}}
)

@router.get("/health", response_model=HealthResponse)
@limiter.limit("10/minute")  # Custom limit for this endpoint
async def health(request: Request, session: Session = Depends(get_db_session)):
    """
    Request parameter is required for rate limiting.
    """
    logger.info("Health check endpoint called")
    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database query failed: {e}")
        return HealthResponse(status="degraded", database="unavailable")
    return HealthResponse(status="ok", database="ok")
