"""
Tests for the operator CLI input checks.
"""

from types import SimpleNamespace

from click.testing import CliRunner

from cultural_spa import cli as cli_module
from cultural_spa.cli import cli


def _fail_if_called(username, password):
    raise AssertionError("create-admin reached the database with invalid input")


def test_create_admin_rejects_long_username(monkeypatch):
    monkeypatch.setattr(cli_module, "_create_admin", _fail_if_called)
    result = CliRunner().invoke(cli, ["create-admin", "--username", "a" * 40, "--password", "secret123"])
    assert result.exit_code == 2
    assert "--username" in result.output


def test_create_admin_rejects_password_over_72_bytes(monkeypatch):
    monkeypatch.setattr(cli_module, "_create_admin", _fail_if_called)
    result = CliRunner().invoke(cli, ["create-admin", "--username", "ops", "--password", "\U0001F600" * 20])
    assert result.exit_code == 2
    assert "--password" in result.output


def test_create_admin_normalizes_username(monkeypatch):
    calls = []

    async def fake_create_admin(username, password):
        calls.append((username, password))
        return SimpleNamespace(id=1, username=username)

    monkeypatch.setattr(cli_module, "_create_admin", fake_create_admin)
    result = CliRunner().invoke(cli, ["create-admin", "--username", "  Ops ", "--password", "secret123"])
    assert result.exit_code == 0, result.output
    assert calls == [("ops", "secret123")]
    assert "Admin created: 1 ops" in result.output
