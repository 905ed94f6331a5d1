from __future__ import annotations

import json
import logging

import pytest

from rave_payments import CardCipher
from rave_payments.cli import run_cli

from .conftest import TEST_PUBLIC_KEY, TEST_SECRET_KEY, FakeResponse, FakeSession

KNOWN_DIGEST = "a14ac4eba0902e8fd6b5fdf542f46d6efc18885a63c3d5f100c26715c7c8d8f4"


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("RAVE_PUBKEY", raising=False)
    monkeypatch.delenv("RAVE_SECKEY", raising=False)
    monkeypatch.delenv("RAVE_LIVE", raising=False)
    monkeypatch.delenv("RAVE_BASE_URL", raising=False)
    monkeypatch.delenv("RAVE_TIMEOUT_SECONDS", raising=False)
    path = tmp_path / ".env"
    path.write_text(
        f"RAVE_PUBKEY={TEST_PUBLIC_KEY}\nRAVE_SECKEY={TEST_SECRET_KEY}\n", encoding="utf-8"
    )
    return str(path)


def test_checksum_command(env_file, payment_page_fields, capsys):
    pairs = [f"{key}={value}" for key, value in payment_page_fields.items()]

    assert run_cli(["--env-file", env_file, "checksum", *pairs]) == 0
    assert capsys.readouterr().out.strip() == KNOWN_DIGEST


def test_checksum_command_reports_missing_field(env_file, capsys):
    assert run_cli(["--env-file", env_file, "checksum", "amount=20"]) == 1
    assert capsys.readouterr().out == ""


def test_encrypt_command(env_file, capsys):
    assert run_cli(["--env-file", env_file, "encrypt", "Hello world"]) == 0
    ciphertext = capsys.readouterr().out.strip()
    assert CardCipher(TEST_SECRET_KEY).decrypt(ciphertext) == "Hello world"


def test_encrypt_json_command(env_file, capsys):
    card = {"cardno": "5438898014560229", "cvv": "789"}

    assert run_cli(["--env-file", env_file, "encrypt", "--json", json.dumps(card)]) == 0
    ciphertext = capsys.readouterr().out.strip()
    assert json.loads(CardCipher(TEST_SECRET_KEY).decrypt(ciphertext)) == card


def test_set_overrides_secret(env_file, capsys):
    other = "FLWSECK-00000000000000000000000000000000-X"
    assert run_cli(["--env-file", env_file, "--set", f"RAVE_SECKEY={other}", "encrypt", "x"]) == 0
    ciphertext = capsys.readouterr().out.strip()
    assert CardCipher(other).decrypt(ciphertext) == "x"


def test_missing_secret_fails(tmp_path, monkeypatch):
    monkeypatch.delenv("RAVE_SECKEY", raising=False)
    missing = str(tmp_path / "absent.env")

    assert run_cli(["--env-file", missing, "encrypt", "Hello world"]) == 1
    assert run_cli(["--env-file", missing, "banks"]) == 1


def test_banks_command(env_file, monkeypatch, capsys):
    banks = [{"bankname": "ACCESS BANK NIGERIA", "bankcode": "044"}]
    session = FakeSession(FakeResponse(payload=banks))
    monkeypatch.setattr("rave_payments.cli.requests.Session", lambda: session)

    assert run_cli(["--env-file", env_file, "--live", "banks"]) == 0
    assert json.loads(capsys.readouterr().out) == banks
    assert session.calls[0]["url"].startswith("https://api.ravepay.co/")


def test_api_error_exit_code(env_file, monkeypatch):
    error = {"status": "error", "message": "No transaction found"}
    session = FakeSession(FakeResponse(status_code=404, payload=error))
    monkeypatch.setattr("rave_payments.cli.requests.Session", lambda: session)

    assert run_cli(["--env-file", env_file, "verify", "--flw-ref", "FLW-MOCK-1"]) == 1
    assert session.calls[0]["json"]["flw_ref"] == "FLW-MOCK-1"


def test_encrypt_strips_secret_like_the_client(env_file, capsys):
    padded = f"RAVE_SECKEY={TEST_SECRET_KEY} "

    assert run_cli(["--env-file", env_file, "--set", padded, "encrypt", '{"a":1}']) == 0
    plain = capsys.readouterr().out.strip()
    assert run_cli(["--env-file", env_file, "--set", padded, "encrypt", "--json", '{"a":1}']) == 0
    as_json = capsys.readouterr().out.strip()

    assert plain == as_json == CardCipher(TEST_SECRET_KEY).encrypt('{"a":1}')


def test_debug_log_lists_setting_names_only(env_file, caplog, capsys):
    caplog.set_level(logging.DEBUG)

    assert run_cli(["--env-file", env_file, "--log-level", "DEBUG", "encrypt", "x"]) == 0

    assert "RAVE_PUBKEY, RAVE_SECKEY" in caplog.text
    assert TEST_SECRET_KEY not in caplog.text
