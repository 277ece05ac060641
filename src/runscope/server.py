"""RunScope MCP server — stdio JSON-RPC 2.0 loop."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Sequence

from runscope.config import ScanConfig, get_default_workers, get_log_level, load_config
from runscope.errors import err
from runscope.sources import RawSource, default_sources
from runscope.store import Store
from runscope.tools import (
    handle_list_sources,
    handle_scan_autoruns,
    handle_get_autorun,
    handle_get_scan,
    handle_resolve_launch_string,
    handle_get_server_info,
)

logger = logging.getLogger(__name__)

TOOLS_LIST: list[dict[str, Any]] = [
    {
        "name": "list_sources",
        "description": "List autorun sources in scan order (run keys, services, startup folders).",
        "inputSchema": {"type": "object", "properties": {}, "additionalProperties": False},
        "annotations": {"readOnlyHint": True},
    },
    {
        "name": "scan_autoruns",
        "description": (
            "Enumerate autorun entries and resolve each launch string to an image path, "
            "arguments and MD5/SHA1/SHA256 digests. Unresolvable entries are still reported."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "sources": {"type": "array", "items": {"type": "string"}},
                "workers": {"type": "integer", "minimum": 1},
            },
            "additionalProperties": False,
        },
        "annotations": {"readOnlyHint": True},
    },
    {
        "name": "get_autorun",
        "description": "Return full details for an autorunId returned by scan_autoruns.",
        "inputSchema": {
            "type": "object",
            "properties": {"autorunId": {"type": "string"}},
            "required": ["autorunId"],
            "additionalProperties": False,
        },
        "annotations": {"readOnlyHint": True},
    },
    {
        "name": "get_scan",
        "description": "Return the autorunIds of a previous scan, in scan order.",
        "inputSchema": {
            "type": "object",
            "properties": {"scanId": {"type": "string"}},
            "required": ["scanId"],
            "additionalProperties": False,
        },
        "annotations": {"readOnlyHint": True},
    },
    {
        "name": "resolve_launch_string",
        "description": (
            "Split one raw launch string (as stored in the registry) into executable "
            "and arguments. Expands %VAR%, strips \\??\\, resolves unquoted paths with spaces."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {"launchString": {"type": "string"}},
            "required": ["launchString"],
            "additionalProperties": False,
        },
        "annotations": {"readOnlyHint": True},
    },
    {
        "name": "get_server_info",
        "description": "Server metadata: name, version, platform, sources, and capabilities.",
        "inputSchema": {"type": "object", "properties": {}, "additionalProperties": False},
        "annotations": {"readOnlyHint": True},
    },
]


class RunScopeServer:
    """MCP server with tool routing over stdio JSON-RPC."""

    def __init__(
        self,
        config: ScanConfig,
        sources: Sequence[RawSource],
        store: Store,
        default_workers: int = 1,
    ) -> None:
        self.config = config
        self.sources = list(sources)
        self.store = store
        self.default_workers = default_workers

    def handle_rpc(self, req: dict[str, Any]) -> dict[str, Any]:
        """Route a single JSON-RPC request to the appropriate handler."""
        rpc_id = req.get("id")
        method = req.get("method", "")
        params = req.get("params") or {}

        if method == "tools/list":
            return self._rpc_ok(rpc_id, {"tools": TOOLS_LIST})

        handlers = {
            "list_sources": lambda p: handle_list_sources(p, self.sources),
            "scan_autoruns": lambda p: handle_scan_autoruns(
                p, self.config, self.sources, self.store, self.default_workers,
            ),
            "get_autorun": lambda p: handle_get_autorun(p, self.store),
            "get_scan": lambda p: handle_get_scan(p, self.store),
            "resolve_launch_string": lambda p: handle_resolve_launch_string(p, self.config),
            "get_server_info": lambda p: handle_get_server_info(p, self.sources),
        }

        handler = handlers.get(method)
        if not handler:
            return {
                "jsonrpc": "2.0",
                "id": rpc_id,
                "error": {"code": -32601, "message": f"Method not found: {method}"},
            }

        try:
            result = handler(params)
            return self._rpc_ok(rpc_id, result)
        except Exception as e:
            logger.exception("handler %s failed", method)
            return self._rpc_ok(
                rpc_id,
                err("E_INTERNAL", "Unhandled server error.", {"exception": str(e)}),
            )

    def _rpc_ok(self, rpc_id: Any, result: Any) -> dict[str, Any]:
        return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def main() -> None:
    """Entry point: load config, run stdio JSON-RPC loop."""
    # stdout carries JSON-RPC; logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config()
    store = Store()
    server = RunScopeServer(config, default_sources(config), store, get_default_workers())

    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        try:
            req = json.loads(line)
        except json.JSONDecodeError:
            resp = {
                "jsonrpc": "2.0",
                "id": None,
                "error": {"code": -32700, "message": "Parse error"},
            }
            sys.stdout.write(json.dumps(resp) + "\n")
            sys.stdout.flush()
            continue

        resp = server.handle_rpc(req)
        sys.stdout.write(json.dumps(resp) + "\n")
        sys.stdout.flush()


if __name__ == "__main__":
    main()
