"""Response model for GET /hello."""

from pydantic import BaseModel


class HelloResponse(BaseModel):
    """Body returned by GET /hello, whatever the downstream outcome."""

    message: str
