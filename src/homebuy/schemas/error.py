# This project was developed with assistance from AI tools.
"""Problem Details (RFC 7807) body returned for every error response."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints.

    Only malformed requests and internal failures produce one. Money text
    that does not read as a number is reported inside a normal summary.
    """

    type: str = "about:blank"
    title: str = Field(description="HTTP reason phrase for ``status``.")
    status: int
    detail: str = Field(
        default="",
        description="What was wrong; for validation errors, one entry per field.",
    )
    instance: str = Field(default="", description="Path of the failing request.")
    request_id: str = Field(
        default="",
        description="Value of the x-request-id header, or a generated UUID.",
    )
