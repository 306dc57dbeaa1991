import sys

import pytest

from xvn.shell.protocol import CommandOutput, OutputProtocol


def test_detect_unix(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert OutputProtocol.detect() is OutputProtocol.FD3


def test_detect_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    assert OutputProtocol.detect() is OutputProtocol.JSON


def test_from_env_without_powershell(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("PSModulePath", raising=False)
    assert OutputProtocol.from_env() is OutputProtocol.FD3


def test_from_env_with_powershell_on_unix(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("PSModulePath", "/usr/share/powershell")
    assert OutputProtocol.from_env() is OutputProtocol.JSON


def test_from_env_on_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.delenv("PSModulePath", raising=False)
    assert OutputProtocol.from_env() is OutputProtocol.JSON


def test_json_serialization():
    output = CommandOutput(commands=["cmd1", "cmd2"])
    assert output.to_json() == '{"commands":["cmd1","cmd2"]}'


def test_json_round_trip():
    output = CommandOutput(commands=['$env:X = "a`$b"', "Write-Host 'Hi'"])
    assert CommandOutput.from_json(output.to_json()) == output


@pytest.mark.parametrize("text", ['{"other": []}', "[]", '{"commands": [1]}', '{"commands": "x"}'])
def test_from_json_rejects_bad_shape(text):
    with pytest.raises(ValueError):
        CommandOutput.from_json(text)