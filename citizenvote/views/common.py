"""Helpers shared by the API views."""

from typing import Any

from rest_framework.request import Request


def request_payload(request: Request) -> dict[str, Any]:
    """
    Return the request body as a flat dict.

    JSON bodies are passed through; form bodies (QueryDict) keep the last
    value for each key. Key presence is preserved, which partial updates
    rely on.
    """
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    return dict(data) if isinstance(data, dict) else {}
