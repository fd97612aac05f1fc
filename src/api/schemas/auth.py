"""Response models for the signup and login stubs."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement message."""

    message: str = Field(..., examples=["Signup successful"])


class TokenResponse(BaseModel):
    """Access token issued by the login endpoint."""

    token: str = Field(..., description="Bearer token for protected endpoints")
