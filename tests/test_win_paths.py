"""Tests for launch-string normalization: kernel prefix, root tokens, %VAR% expansion."""

from __future__ import annotations

import pytest

from runscope.errors import EmptyInputError, ExpansionError
from runscope.win_paths import expand_env, image_name, normalize_launch_string


def test_kernel_prefix_stripped(config):
    raw = "\\??\\C:\\Windows\\System32\\drivers\\svc.exe"
    assert normalize_launch_string(raw, config) == "C:\\Windows\\System32\\drivers\\svc.exe"


def test_kernel_prefix_only_at_start(config):
    raw = "C:\\x\\??\\y.exe"
    assert normalize_launch_string(raw, config) == raw


@pytest.mark.parametrize("token", ["\\SystemRoot", "\\systemroot", "\\SYSTEMROOT"])
def test_systemroot_token(config, token):
    raw = token + "\\System32\\drivers\\acpi.sys"
    assert normalize_launch_string(raw, config) == "C:\\Windows\\System32\\drivers\\acpi.sys"


def test_prefix_stripped_before_systemroot(config):
    """A stripped kernel path may itself start with the root token."""
    raw = "\\??\\\\SystemRoot\\system32\\ntoskrnl.exe"
    assert normalize_launch_string(raw, config) == "C:\\Windows\\system32\\ntoskrnl.exe"


@pytest.mark.parametrize("token", ["system32", "System32", "SYSTEM32", "sYsTeM32"])
def test_system32_token(config, token):
    raw = token + "\\foo.exe"
    assert normalize_launch_string(raw, config) == "C:\\Windows\\System32\\foo.exe"


def test_system32_token_keeps_arguments(config):
    raw = "system32\\svchost.exe -k netsvcs"
    assert normalize_launch_string(raw, config) == "C:\\Windows\\System32\\svchost.exe -k netsvcs"


def test_env_expansion(config):
    raw = "%ProgramFiles%\\Vendor\\agent.exe /background"
    assert normalize_launch_string(raw, config) == "C:\\Program Files\\Vendor\\agent.exe /background"


def test_env_names_case_insensitive(config):
    assert expand_env("%programfiles%", config) == "C:\\Program Files"
    assert expand_env("%WinDir%\\x", config) == "C:\\Windows\\x"


def test_multiple_references(config):
    assert expand_env("%WINDIR%;%PROGRAMFILES%", config) == "C:\\Windows;C:\\Program Files"


def test_unset_variable_expands_to_empty(config):
    assert expand_env("%NOT_SET_ANYWHERE%\\tool.exe", config) == "\\tool.exe"


def test_unterminated_reference_is_literal(config):
    assert expand_env("%ProgramFiles\\tool.exe", config) == "%ProgramFiles\\tool.exe"
    assert expand_env("mixer.exe /volume 50%", config) == "mixer.exe /volume 50%"


def test_percent_span_across_quotes_is_literal(config):
    raw = '"C:\\Tools\\open.exe" "%1" "%2"'
    assert normalize_launch_string(raw, config) == raw


def test_reference_after_literal_percent(config):
    assert expand_env('"%1" %WINDIR%', config) == '"%1" C:\\Windows'


def test_empty_variable_name(config):
    with pytest.raises(ExpansionError):
        expand_env("C:\\100%% done.exe", config)


def test_empty_input(config):
    with pytest.raises(EmptyInputError):
        normalize_launch_string("", config)


def test_plain_value_untouched(config):
    raw = '"C:\\Program Files\\App\\app.exe" --tray'
    assert normalize_launch_string(raw, config) == raw


@pytest.mark.parametrize("path,expected", [
    ("", ""),
    ("C:\\Windows\\System32\\svchost.exe", "svchost.exe"),
    ("/opt/startup/agent.lnk", "agent.lnk"),
    ("C:\\dir\\sub\\", "sub"),
    ("notepad.exe", "notepad.exe"),
])
def test_image_name(path, expected):
    assert image_name(path) == expected
