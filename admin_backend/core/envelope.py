"""
Success envelope for API responses.
Every 2xx JSON payload X leaves the API as {code: 200, message: "success", data: X}.
"""

import json
from typing import Any, Callable, Coroutine, Dict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

SUCCESS_CODE = 200
SUCCESS_MESSAGE = "success"


def success_body(data: Any) -> Dict[str, Any]:
    return {"code": SUCCESS_CODE, "message": SUCCESS_MESSAGE, "data": data}


def _should_wrap(response: Response) -> bool:
    # FastAPI renders response_model routes as a plain Response, so match on content type
    if not 200 <= response.status_code < 300 or not hasattr(response, "body"):
        return False
    content_type = response.headers.get("content-type", "")
    return content_type.split(";")[0].strip() == "application/json"


class EnvelopeRoute(APIRoute):
    """APIRoute that wraps successful JSON responses in the success envelope."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_handler = super().get_route_handler()

        async def envelope_handler(request: Request) -> Response:
            response = await original_handler(request)
            if not _should_wrap(response):
                return response

            payload = json.loads(response.body) if response.body else None
            wrapped = JSONResponse(
                content=success_body(payload),
                status_code=response.status_code,
                background=response.background,
            )
            # Keep headers set by the endpoint (cookies, cache control, ...)
            wrapped.raw_headers.extend(
                (key, value)
                for key, value in response.raw_headers
                if key not in (b"content-length", b"content-type")
            )
            return wrapped

        return envelope_handler
