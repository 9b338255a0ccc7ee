"""Outbound HTTP call configuration."""

from pydantic import BaseModel, Field


class DownstreamConfig(BaseModel):
    """Target of the outbound call made by GET /hello."""

    url: str = Field(
        default="https://example.com",
        description="URL fetched once per /hello request",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Total timeout for the outbound request",
    )
