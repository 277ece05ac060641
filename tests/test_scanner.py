"""Tests for the scan pass: source ordering, parallel builds, per-entry isolation."""

from __future__ import annotations

from runscope.models import EntryType, RawEntry
from runscope.scanner import collect, scan
from runscope.sources import StaticSource


def _sources(tmp_path):
    agent = tmp_path / "agent.exe"
    agent.write_bytes(b"agent")
    run_keys = StaticSource("run_keys", [
        RawEntry(EntryType.RUN_KEY, "CURRENT_USER\\Run", f"{agent} /tray", True, "Agent"),
        RawEntry(EntryType.RUN_KEY, "CURRENT_USER\\Run", "", True, "Empty"),
        RawEntry(EntryType.RUN_KEY, "CURRENT_USER\\Run", '"C:\\broken.exe', True, "Broken"),
    ])
    services = StaticSource("services", [
        RawEntry(EntryType.SERVICE, "LOCAL_MACHINE\\Services\\Svc", f'"{agent}" -service', True),
    ])
    startup = StaticSource("startup", [
        RawEntry(EntryType.STARTUP, str(tmp_path), str(tmp_path / "z.lnk"), False),
    ])
    return agent, [run_keys, services, startup]


def test_collect_keeps_source_order(tmp_path):
    _, sources = _sources(tmp_path)
    raw = collect(sources)
    assert [r.entryType for r in raw] == [
        EntryType.RUN_KEY, EntryType.RUN_KEY, EntryType.RUN_KEY,
        EntryType.SERVICE, EntryType.STARTUP,
    ]
    assert [r.name for r in raw[:3]] == ["Agent", "Empty", "Broken"]


def test_scan_one_record_per_entry(tmp_path, host_config):
    agent, sources = _sources(tmp_path)
    records = scan(host_config, sources)

    assert len(records) == 5
    assert records[0].imagePath == str(agent)
    assert records[0].arguments == "/tray"
    assert records[0].md5
    assert records[1].imagePath == ""
    assert records[2].imagePath == '"C:\\broken.exe'
    assert records[3].arguments == "-service"
    assert records[4].type is EntryType.STARTUP
    assert records[4].sha256 == ""


def test_parallel_scan_matches_sequential(tmp_path, host_config):
    _, sources = _sources(tmp_path)
    sequential = scan(host_config, sources, workers=1)
    parallel = scan(host_config, sources, workers=4)
    assert parallel == sequential


def test_launch_strings_survive_scan(tmp_path, host_config):
    _, sources = _sources(tmp_path)
    raw_values = [r.rawValue for r in collect(sources)]
    assert [a.launchString for a in scan(host_config, sources, workers=3)] == raw_values


def test_scan_without_entries(host_config):
    assert scan(host_config, [StaticSource("none", [])]) == []
