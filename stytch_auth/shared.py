"""
Request/response pipeline.

Request Builder -> Transport -> Decoder -> Outcome Classifier. The decoded
payload is returned to the resource layer, which normalizes it into
entities.
"""

import asyncio
import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import urljoin

import httpx

from .errors import RequestFailure, ServiceError
from .types import (
    AsyncTransport,
    FetchConfig,
    OutboundRequest,
    ParamValue,
    RawResponse,
    RequestConfig,
    Transport,
)


logger = logging.getLogger("stytch_auth")

JSON_CONTENT_TYPE = "application/json"


def build_url(base_url: str, path: str, params: Optional[Mapping[str, ParamValue]] = None) -> str:
    """Resolve ``path`` against ``base_url`` and append query parameters."""
    url = httpx.URL(urljoin(base_url, path))
    if params:
        url = url.copy_merge_params({key: str(value) for key, value in params.items()})
    return str(url)


def build_outbound_request(fetch_config: FetchConfig, request_config: RequestConfig) -> OutboundRequest:
    """Compose the request a transport will execute."""
    headers = dict(fetch_config.headers)
    content: Optional[bytes] = None
    if request_config.data is not None:
        content = json.dumps(request_config.data).encode("utf-8")
        # Drop any case variant so the body encoding header is authoritative
        headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
        headers["Content-Type"] = JSON_CONTENT_TYPE

    return OutboundRequest(
        method=request_config.method,
        url=build_url(fetch_config.base_url, request_config.url, request_config.params),
        headers=headers,
        timeout=fetch_config.timeout,
        content=content,
    )


def decode_body(content: bytes, request_config: RequestConfig) -> Any:
    """Parse a JSON body, raising ``RequestFailure`` on garbage."""
    try:
        return json.loads(content)
    except ValueError as e:
        logger.debug("Undecodable body for %s %s: %s", request_config.method, request_config.url, e)
        raise RequestFailure(
            f"Unable to parse JSON response from server: {e}",
            request_config,
        ) from e


def classify(status_code: int, data: Any, request_config: RequestConfig) -> Any:
    """
    Decide the outcome of a decoded response.

    Any status >= 400 is a service error whatever the body looks like;
    everything below is a success and the payload is returned as-is.
    """
    if status_code >= 400:
        error = ServiceError.from_json(data, status_code)
        logger.debug(
            "%s %s failed: %s (%s)",
            request_config.method,
            request_config.url,
            error.error_type,
            error.request_id,
        )
        raise error
    return data


def _handle_response(response: RawResponse, request_config: RequestConfig) -> Any:
    logger.debug("%s %s -> %d", request_config.method, request_config.url, response.status_code)
    data = decode_body(response.content, request_config)
    return classify(response.status_code, data, request_config)


def request(fetch_config: FetchConfig, request_config: RequestConfig, transport: Transport) -> Any:
    """Run one call through the pipeline and return the decoded payload."""
    outbound = build_outbound_request(fetch_config, request_config)
    logger.debug("%s %s", outbound.method, outbound.url)

    try:
        response = transport(outbound)
    except Exception as e:
        logger.debug("Transport failure for %s %s: %s", outbound.method, outbound.url, e)
        raise RequestFailure(str(e) or e.__class__.__name__, request_config) from e

    return _handle_response(response, request_config)


async def async_request(
    fetch_config: FetchConfig,
    request_config: RequestConfig,
    transport: AsyncTransport,
) -> Any:
    """Async variant of ``request``. Cancellation surfaces as ``RequestFailure``."""
    outbound = build_outbound_request(fetch_config, request_config)
    logger.debug("%s %s", outbound.method, outbound.url)

    try:
        response = await transport(outbound)
    except asyncio.CancelledError as e:
        logger.debug("Request cancelled: %s %s", outbound.method, outbound.url)
        raise RequestFailure("Request was cancelled", request_config) from e
    except Exception as e:
        logger.debug("Transport failure for %s %s: %s", outbound.method, outbound.url, e)
        raise RequestFailure(str(e) or e.__class__.__name__, request_config) from e

    return _handle_response(response, request_config)
