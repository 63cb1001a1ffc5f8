"""Line-delimited JSON-RPC 2.0 loop over stdin/stdout (MCP tool subset).

One JSON object per line in, one per line out. Logging goes to stderr so it
never mixes with responses.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from . import __version__
from .errors import ErrorKind
from .tools import Failure, ToolRouter

PROTOCOL_VERSION = "2024-11-05"
SERVER_INFO = {"name": "rightmove-mcp-server", "version": __version__}

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


def _result(msg_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": msg_id, "result": result}


def _error(msg_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": msg_id, "error": {"code": code, "message": message}}


class StdioServer:
    def __init__(self, router: ToolRouter, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.router = router
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        line = line.strip()
        if not line:
            return None
        try:
            msg = json.loads(line)
        except ValueError as e:
            logging.warning(f"Unparseable request line: {e}")
            return _error(None, PARSE_ERROR, f"Parse error: {e}")
        if not isinstance(msg, dict) or not isinstance(msg.get("method"), str):
            msg_id = msg.get("id") if isinstance(msg, dict) else None
            return _error(msg_id, INVALID_REQUEST, "Invalid Request")
        return self.handle_message(msg)

    def handle_message(self, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        method = msg["method"]
        msg_id = msg.get("id")
        params = msg.get("params") or {}
        # requests without an id are notifications and get no reply
        notification = "id" not in msg

        if method == "initialize":
            response = _result(msg_id, {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": dict(SERVER_INFO),
            })
        elif method == "ping":
            response = _result(msg_id, {})
        elif method == "tools/list":
            response = _result(msg_id, {"tools": self.router.list_tools()})
        elif method == "tools/call":
            if not isinstance(params, dict) or not isinstance(params.get("name"), str):
                response = _error(msg_id, INVALID_PARAMS, "tools/call requires a tool name")
            else:
                outcome = self.router.dispatch(params["name"], params.get("arguments"))
                if isinstance(outcome, Failure) and outcome.kind is ErrorKind.UNKNOWN_TOOL:
                    response = _error(msg_id, INVALID_PARAMS, outcome.message)
                else:
                    response = _result(msg_id, outcome.to_response())
        elif method.startswith("notifications/"):
            return None
        else:
            response = _error(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        return None if notification else response

    def serve(self) -> None:
        print("Rightmove MCP server running on stdio", file=sys.stderr, flush=True)
        for line in self.stdin:
            response = self.handle_line(line)
            if response is None:
                continue
            self.stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
            self.stdout.flush()
        logging.info("stdin closed, shutting down")
