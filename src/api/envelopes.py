from typing import Any

from django.http import JsonResponse


def request_id(request) -> str:
    headers = getattr(request, "headers", None) or {}
    meta = getattr(request, "META", None) or {}
    return headers.get("X-Request-Id", "") or meta.get("HTTP_X_REQUEST_ID", "") or ""


def envelope_payload(request, *, message: str, status: int, code: str, data=None, errors=None, extra=None) -> dict[str, Any]:
    return {
        "success": 200 <= status < 400,
        "message": message,
        "data": data or {},
        "extra": extra or {},
        "errors": errors,
        "code": code,
        "request_id": request_id(request),
    }


def envelope(request, *, message: str, status: int, code: str, data=None, errors=None, extra=None) -> JsonResponse:
    return JsonResponse(
        envelope_payload(request, message=message, status=status, code=code, data=data, errors=errors, extra=extra),
        status=status,
    )
