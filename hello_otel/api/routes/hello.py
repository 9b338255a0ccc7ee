"""Demo routes: a static greeting and the instrumented /hello."""

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from hello_otel.api.dependencies import DownstreamClientDep
from hello_otel.api.models.hello import HelloResponse
from hello_otel.downstream import DownstreamError
from hello_otel.observability.logging import get_logger
from hello_otel.observability.tracing import create_span, record_exception

logger = get_logger(__name__)

router = APIRouter()

GREETING = "Hello OTEL! Hit /hello to create spans + logs."
HELLO_MESSAGE = "hello, otel!"

# Span emitted by /hello and its attributes
HELLO_SPAN_NAME = "say-hello"
HELLO_TAG_ATTRIBUTE = "hello.tag"
DOWNSTREAM_STATUS_ATTRIBUTE = "example.status"


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Static greeting."""
    return GREETING


@router.get("/hello", response_model=HelloResponse)
async def hello(client: DownstreamClientDep) -> HelloResponse:
    """Log, trace and call the downstream service once.

    A downstream failure is logged and marks the span as errored but never
    changes the response.

    Returns:
        HelloResponse with the fixed message
    """
    logger.info("handling_hello", utc=datetime.now(UTC).isoformat())

    with create_span(HELLO_SPAN_NAME, attributes={HELLO_TAG_ATTRIBUTE: "world"}) as span:
        try:
            status_code = await client.fetch_status()
            span.set_attribute(DOWNSTREAM_STATUS_ATTRIBUTE, status_code)
        except DownstreamError as e:
            logger.exception("downstream_call_failed", url=e.url, error=e.message)
            record_exception(span, e)

    return HelloResponse(message=HELLO_MESSAGE)
