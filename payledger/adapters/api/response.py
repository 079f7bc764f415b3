"""Response envelope helpers for the ledger API."""

from typing import Any

from pydantic import TypeAdapter

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

_JSON = TypeAdapter(Any)


def success_response(data: Any) -> dict:
    """Wrap a payload in the success envelope."""
    return {"success": True, "data": data}


def error_response(code: str, message: str) -> dict:
    """Wrap an error code and message in the failure envelope."""
    return {"success": False, "error": {"code": code, "message": message}}


def to_jsonable(value: Any) -> Any:
    """Convert domain objects into JSON-compatible structures.

    Dataclasses become dicts, dates ISO strings and enums their value.
    Decimal amounts become strings so cents are never rounded.
    """
    return _JSON.dump_python(value, mode="json")


__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "success_response",
    "error_response",
    "to_jsonable",
]
