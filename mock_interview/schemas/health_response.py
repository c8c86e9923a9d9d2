"""
Description:
Response model for the health check route.

Dependencies:
- pydantic: For data validation.
"""
from typing import Literal
from pydantic import BaseModel, Field

class HealthResponse(BaseModel):
    """
    Liveness of the service and reachability of its database.
    """
    status: Literal["ok", "degraded"] = Field(..., description="'degraded' when a dependency is unreachable")
    database: Literal["ok", "unavailable"] = Field(..., description="Result of a trivial query against the database")
