"""Error taxonomy shared by the HTTP client, the parsers and the tool router."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENTS = "InvalidArguments"
    TRANSPORT_FAILURE = "TransportFailure"
    UNKNOWN_TOOL = "UnknownTool"
    EXTRACTION_FAILURE = "ExtractionFailure"


class ToolError(Exception):
    kind: ErrorKind = ErrorKind.EXTRACTION_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArguments(ToolError):
    """Missing or mistyped tool argument; raised before any network work."""

    kind = ErrorKind.INVALID_ARGUMENTS


class TransportFailure(ToolError, RuntimeError):
    """Network or HTTP-status failure from the fetch step."""

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class UnknownTool(ToolError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name
