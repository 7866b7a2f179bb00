from typing import Annotated, Dict, Optional

import structlog
from litestar import Request, route
from litestar.enums import HttpMethod, MediaType
from litestar.exceptions import MethodNotAllowedException
from litestar.params import Dependency
from litestar.response import Response
from litestar.status_codes import HTTP_200_OK

from fabricator.config import Settings
from fabricator.models.errors import (
    ErrorKind,
    ErrorResponse,
    PlainErrorResponse,
    SynthesisError,
)
from fabricator.services.synthesizer import EndpointSynthesizer
from fabricator.utils.request_helper import (
    RequestHelper,
    parse_fields,
    resolve_resource_name,
)

log = structlog.get_logger()

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
}

UNKNOWN_ENDPOINT = "unknown"
HIDDEN_DETAILS = "Something went wrong"


def error_response(
    kind: ErrorKind,
    settings: Settings,
    endpoint: Optional[str] = None,
    details: Optional[str] = None,
) -> Response:
    """Render an ErrorKind as the HTTP response sent to the caller."""
    if kind.is_plain:
        body = PlainErrorResponse(error=kind.message)
    else:
        if kind.hides_details and not settings.is_development:
            details = HIDDEN_DETAILS
        body = ErrorResponse(
            error=kind.code,
            message=kind.message,
            endpoint=endpoint or UNKNOWN_ENDPOINT,
            details=details,
        )

    return Response(
        content=body.model_dump_json(exclude_none=True).encode(),
        status_code=kind.status_code,
        media_type=MediaType.JSON,
        headers=CORS_HEADERS,
    )


def method_not_allowed_handler(settings: Settings):
    """Exception handler for methods the router itself turns away (HEAD, TRACE)."""

    def handler(request: Request, exc: MethodNotAllowedException) -> Response:
        log.info("Rejected method", method=request.method, path=request.url.path)
        return error_response(ErrorKind.METHOD_NOT_ALLOWED, settings)

    return handler


@route(
    ["/", "/{path:path}"],
    http_method=[
        HttpMethod.GET,
        HttpMethod.OPTIONS,
        HttpMethod.POST,
        HttpMethod.PUT,
        HttpMethod.PATCH,
        HttpMethod.DELETE,
    ],
    include_in_schema=False,
)
async def synthesize_endpoint(
    request: Request,
    synthesizer: Annotated[EndpointSynthesizer, Dependency(skip_validation=True)],
    settings: Annotated[Settings, Dependency(skip_validation=True)],
) -> Response:
    """
    Answer any GET with a JSON document the model invents for the path.
    The optional ``fields`` query parameter names keys the document should have.
    """
    log.info(RequestHelper.request_details(request))
    log.debug(RequestHelper.request_dump(request))

    if request.method == HttpMethod.OPTIONS:
        return Response(content=b"", status_code=HTTP_200_OK, headers=CORS_HEADERS)

    if request.method != HttpMethod.GET:
        return error_response(ErrorKind.METHOD_NOT_ALLOWED, settings)

    endpoint = None
    structlog.contextvars.clear_contextvars()
    try:
        if not settings.OPENAI_API_KEY:
            log.error("OPENAI_API_KEY is not set in environment variables")
            return error_response(ErrorKind.SERVER_MISCONFIGURED, settings)

        endpoint = resolve_resource_name(request.url.path, settings.API_PREFIX)
        structlog.contextvars.bind_contextvars(endpoint=endpoint)
        fields = parse_fields(request.query_params.get("fields"))

        content = await synthesizer.synthesize(endpoint, fields)
        return Response(
            content=content.encode(),
            status_code=HTTP_200_OK,
            media_type=MediaType.JSON,
            headers=CORS_HEADERS,
        )
    except SynthesisError as e:
        return error_response(e.kind, settings, e.endpoint or endpoint, e.details)
    except Exception as e:
        log.exception("Error calling the model or processing request")
        return error_response(ErrorKind.UNHANDLED, settings, endpoint, details=str(e))
    finally:
        structlog.contextvars.clear_contextvars()
