"""Tool handlers: list_sources, scan_autoruns, get_autorun, get_scan, resolve_launch_string."""

from __future__ import annotations

import platform
import time
from typing import Any, Sequence

from runscope.config import SERVER_NAME, SERVER_VERSION, ScanConfig
from runscope.errors import ParseError, err, ok
from runscope.locator import Locator
from runscope.records import parse_launch_string
from runscope.scanner import scan
from runscope.sources import RawSource
from runscope.store import Store


def handle_list_sources(
    _args: dict[str, Any],
    sources: Sequence[RawSource],
) -> dict[str, Any]:
    """List configured sources in scan order."""
    return ok({"sources": [s.name for s in sources]})


def handle_scan_autoruns(
    args: dict[str, Any],
    config: ScanConfig,
    sources: Sequence[RawSource],
    store: Store,
    default_workers: int = 1,
) -> dict[str, Any]:
    """Run one scan pass over all (or the named) sources and store the records."""
    wanted = args.get("sources")
    workers = args.get("workers", default_workers)

    if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
        return err("E_INVALID_REQUEST", "workers must be a positive integer.", {"workers": workers})

    if wanted is not None and (
        not isinstance(wanted, list) or not all(isinstance(name, str) for name in wanted)
    ):
        return err("E_INVALID_REQUEST", "sources must be a list of source names.", {"sources": wanted})

    selected = list(sources)
    if wanted is not None:
        known = {s.name for s in sources}
        unknown = [name for name in wanted if name not in known]
        if unknown:
            return err(
                "E_UNKNOWN_SOURCE",
                "Unknown source name(s).",
                {"unknown": unknown, "known": sorted(known)},
                next_steps=[{"action": "LIST_SOURCES", "tool": "list_sources", "args": {}}],
            )
        selected = [s for s in sources if s.name in wanted]

    start = time.time()
    autoruns = scan(config, selected, workers=workers)
    dur_ms = int((time.time() - start) * 1000)

    scan_id = store.new_id("scan")
    results: list[dict[str, Any]] = []
    for autorun in autoruns:
        autorun_id = store.new_id("ar")
        store.put_autorun(autorun_id, autorun)
        results.append({"autorunId": autorun_id, **autorun.to_dict()})
    store.register_scan(scan_id, [r["autorunId"] for r in results])

    return ok({
        "scanId": scan_id,
        "autoruns": results,
        "stats": {
            "sources": [s.name for s in selected],
            "records": len(results),
            "unresolved": sum(1 for a in autoruns if not a.sha256),
            "durationMs": dur_ms,
        },
    })


def handle_get_autorun(
    args: dict[str, Any],
    store: Store,
) -> dict[str, Any]:
    """Return one stored record by ID."""
    autorun_id = args["autorunId"]
    autorun = store.get_autorun(autorun_id)
    if not autorun:
        return err("E_NOT_FOUND", "Autorun not found.", {"autorunId": autorun_id})
    return ok({"autorun": {"autorunId": autorun_id, **autorun.to_dict()}})


def handle_get_scan(
    args: dict[str, Any],
    store: Store,
) -> dict[str, Any]:
    """Return the autorun IDs of a previous scan, in scan order."""
    scan_id = args["scanId"]
    ids = store.get_scan_autoruns(scan_id)
    if ids is None:
        return err("E_NOT_FOUND", "Scan not found.", {"scanId": scan_id})
    return ok({"scanId": scan_id, "autorunIds": ids})


def handle_resolve_launch_string(
    args: dict[str, Any],
    config: ScanConfig,
) -> dict[str, Any]:
    """Normalize and split a single launch string without hashing."""
    value = args["launchString"]
    try:
        executable, arguments = parse_launch_string(value, config, Locator(config))
    except ParseError as e:
        return err(e.code, "Launch string could not be resolved.", {
            "launchString": value,
            "reason": type(e).__name__,
        })
    return ok({"launchString": value, "executable": executable, "arguments": arguments})


def handle_get_server_info(
    _args: dict[str, Any],
    sources: Sequence[RawSource],
) -> dict[str, Any]:
    """Server metadata: name, version, platform, capabilities."""
    return ok({
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "platform": platform.system(),
        "python": platform.python_version(),
        "sources": [s.name for s in sources],
        "capabilities": {
            "registry": platform.system() == "Windows",
            "digests": ["md5", "sha1", "sha256"],
            "parallelScan": True,
        },
    })
