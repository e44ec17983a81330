"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from typing import Any

from slugline.cli.formatters.base import OutputFormat, OutputFormatter
from slugline.exceptions import SluglineError


def _to_jsonable(data: Any) -> Any:
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if isinstance(data, dict):
        return {str(k): _to_jsonable(v) for k, v in data.items()}
    if isinstance(data, list | tuple):
        return [_to_jsonable(item) for item in data]
    return data


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as JSON.

        Objects with a ``to_dict`` method (screenplay models, outline nodes,
        breakdowns) and pydantic models are converted first.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        return json.dumps(_to_jsonable(data), default=str, indent=2)

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response."""
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = _to_jsonable(data)
        return json.dumps(response, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Args:
            error: Error message or exception
            code: Error code

        Returns:
            JSON string with ``success``, ``error`` and ``code`` keys, plus
            ``hint`` for Slugline errors that carry one.
        """
        if isinstance(error, SluglineError):
            response: dict[str, Any] = {
                "success": False,
                "error": error.message,
                "code": code,
            }
            if error.hint:
                response["hint"] = error.hint
        else:
            error_msg = str(error) if isinstance(error, Exception) else error
            response = {"success": False, "error": error_msg, "code": code}
        return json.dumps(response, default=str, indent=2)
