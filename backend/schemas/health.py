"""
Health check endpoint schemas.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health.

    Served outside the auth gate, so monitors get JSON whether or not the
    caller has a session cookie.
    """

    status: str = Field(
        default="ok",
        description="Always 'ok' if the process is responding",
        examples=["ok"]
    )
    service: str = Field(default="invoice-dashboard", description="Service name")
    environment: str = Field(..., description="Value of ENVIRONMENT", examples=["production"])
