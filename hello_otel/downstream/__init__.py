"""Outbound HTTP call made by GET /hello."""

from hello_otel.downstream.client import DownstreamClient, DownstreamError

__all__ = ["DownstreamClient", "DownstreamError"]
