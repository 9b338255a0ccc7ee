"""Dependency injection for API routes.

Dependencies can be overridden for testing through
`app.dependency_overrides`.
"""

from typing import Annotated

from fastapi import Depends, Request

from hello_otel.config.settings import Settings
from hello_otel.downstream import DownstreamClient
from hello_otel.observability.logging import get_logger

logger = get_logger(__name__)

# Shared outbound client - created once and reused across requests
_downstream_client: DownstreamClient | None = None


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings  # type: ignore[no-any-return]


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_downstream_client(settings: SettingsDep) -> DownstreamClient:
    """Get the shared downstream client.

    Creates the client on first access.

    Returns:
        DownstreamClient instance
    """
    global _downstream_client
    if _downstream_client is None:
        _downstream_client = DownstreamClient(
            settings.downstream.url,
            timeout_seconds=settings.downstream.timeout_seconds,
        )
        logger.info("downstream_client_created", url=settings.downstream.url)
    return _downstream_client


DownstreamClientDep = Annotated[DownstreamClient, Depends(get_downstream_client)]


async def reset_dependencies() -> None:
    """Close and drop cached dependencies.

    Called on application shutdown and between tests.
    """
    global _downstream_client

    if _downstream_client is not None:
        await _downstream_client.aclose()
        _downstream_client = None
        logger.debug("downstream_client_closed")
