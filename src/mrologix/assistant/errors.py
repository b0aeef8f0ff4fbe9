"""Errors raised while serving an assistant turn.

Tool errors never escape the dispatcher: they are converted into an error
payload that is fed back to the model. :class:`ModelServiceError` is the only
error the request handler sees.
"""

from __future__ import annotations

from typing import Any


class ToolError(Exception):
    code = "tool_error"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def payload(self) -> dict[str, Any]:
        out: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            out["details"] = self.details
        return out


class UnknownFunction(ToolError):
    code = "unknown_function"

    def __init__(self, name: Any):
        super().__init__(f"Unknown function: {name}", details={"function": str(name)})
        self.name = name


class MissingRequiredArgument(ToolError):
    code = "missing_required_argument"

    def __init__(self, function: str, argument: str):
        super().__init__(
            f"Missing required argument '{argument}' for {function}",
            details={"function": function, "argument": argument},
        )
        self.function = function
        self.argument = argument


class AdapterFailure(ToolError):
    code = "adapter_failure"

    def __init__(self, function: str, cause: BaseException):
        super().__init__(
            f"Failed to execute {function}",
            details={"function": function, "reason": f"{type(cause).__name__}: {cause}"},
        )
        self.function = function
        self.cause = cause


class ModelServiceError(RuntimeError):
    """The language-model service could not produce a reply."""
