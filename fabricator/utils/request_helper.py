import json
from typing import List, Optional

from litestar.connection import Request

DEFAULT_RESOURCE = "default"


class RequestHelper:
    """Helper class for request handling."""

    @staticmethod
    def request_dump(request: Request) -> str:
        """Get the request details."""
        log_data = {
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
            "query_params": dict(request.query_params),
            "path_params": request.path_params,
        }

        return json.dumps(log_data, indent=2, default=str)

    @staticmethod
    def request_details(request: Request) -> str:
        """Get the request details."""

        ip = request.client.host if request.client else "-"
        method = request.method
        path = request.url.path
        http_version = f'HTTP/{request.scope.get("http_version")}'

        return f'{ip} - "{method} {path} {http_version}" Connected'


def resolve_resource_name(path: str, prefix: str = "/api/") -> str:
    """
    Turn a request path into the resource name the model writes about.

    The prefix is removed when present, otherwise only the leading slash.
    Trailing slashes never matter and an empty remainder is "default".
    """
    if prefix and path.startswith(prefix):
        name = path[len(prefix):]
    elif prefix and path == prefix.rstrip("/"):
        name = ""
    else:
        name = path.lstrip("/")

    return name.rstrip("/") or DEFAULT_RESOURCE


def parse_fields(raw: Optional[str]) -> Optional[List[str]]:
    """
    Split the ``fields`` query parameter into field names.

    Order and duplicates are kept, blank entries are dropped.
    """
    if not raw:
        return None
    fields = [field.strip() for field in raw.split(",")]
    fields = [field for field in fields if field]
    return fields or None
