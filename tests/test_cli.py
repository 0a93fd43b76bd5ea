"""
Tests for kraken_client/cli.py

Covers argument parsing, the credential guard for private commands,
JSON output, and the exit code each failure kind maps to.
"""

import json
import os
import subprocess
import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from kraken_client import cli
from kraken_client.exceptions import APIError, DeserializationError, ProtocolError, TransportError
from kraken_client.kraken_client import KrakenClient
from kraken_client.schemas import OrderDescription, Time

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's .env and exported keys out of CLI tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("KRAKEN_API_KEY", "KRAKEN_API_SECRET", "KRAKEN_API_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def with_credentials(monkeypatch):
    monkeypatch.setenv("KRAKEN_API_KEY", "cli-key")
    monkeypatch.setenv("KRAKEN_API_SECRET", "c2VjcmV0")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestParser:
    """Tests for build_parser()"""

    def test_repeated_pairs(self):
        args = cli.build_parser().parse_args(["ticker", "--pair", "XBTUSD", "--pair", "ETHUSD"])
        assert args.pair == ["XBTUSD", "ETHUSD"]

    def test_flags_default_to_unset(self):
        """Edge case: boolean filters are omitted unless given."""
        args = cli.build_parser().parse_args(["open-orders"])
        assert args.trades is None

    def test_depth_count_out_of_range(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["depth", "--pair", "XBTUSD", "--count", "501"])

    def test_ohlc_interval_choices(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["ohlc", "--pair", "XBTUSD", "--interval", "7"])

    def test_every_command_has_a_handler(self):
        parser = cli.build_parser()
        subparsers = next(a for a in parser._actions if a.dest == "command")
        assert set(subparsers.choices) == set(cli.COMMANDS)
        assert cli.PRIVATE_COMMANDS <= set(cli.COMMANDS)


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMain:
    """Tests for main()"""

    def test_prints_json_result(self, capsys):
        result = Time(unixtime=1616492376, rfc1123="Tue, 23 Mar 21 09:39:36 +0000")
        with patch.object(KrakenClient, "get_server_time", new=AsyncMock(return_value=result)):
            code = cli.main(["time"])

        assert code == cli.EXIT_OK
        assert json.loads(capsys.readouterr().out) == {
            "unixtime": 1616492376,
            "rfc1123": "Tue, 23 Mar 21 09:39:36 +0000",
        }

    def test_private_command_without_credentials(self, capsys):
        """Failure: private commands stop before any request when keys are missing."""
        with patch.object(KrakenClient, "get_balance", new=AsyncMock()) as get_balance:
            code = cli.main(["balance"])

        assert code == cli.EXIT_USAGE
        get_balance.assert_not_awaited()
        assert "KRAKEN_API_KEY" in capsys.readouterr().err

    def test_private_command_with_credentials(self, with_credentials, capsys):
        balance = {"ZUSD": Decimal("10.5")}
        with patch.object(KrakenClient, "get_balance", new=AsyncMock(return_value=balance)):
            code = cli.main(["balance"])

        assert code == cli.EXIT_OK
        assert json.loads(capsys.readouterr().out) == {"ZUSD": "10.5"}

    def test_passes_arguments_through(self):
        with patch.object(KrakenClient, "get_depth", new=AsyncMock(return_value={})) as get_depth:
            cli.main(["depth", "--pair", "XBTUSD", "--count", "10"])
        get_depth.assert_awaited_once_with("XBTUSD", 10)

    def test_api_error_lists_every_error(self, capsys):
        error = APIError(["EGeneral:Invalid arguments", "EQuery:Unknown asset pair"])
        with patch("kraken_client.cli.run", new=AsyncMock(side_effect=error)):
            code = cli.main(["ticker", "--pair", "NOPE"])

        assert code == cli.EXIT_API
        err = capsys.readouterr().err
        assert "API error: EGeneral:Invalid arguments" in err
        assert "API error: EQuery:Unknown asset pair" in err

    @pytest.mark.parametrize(
        "error, expected",
        [
            (ProtocolError(), cli.EXIT_PROTOCOL),
            (DeserializationError("not JSON"), cli.EXIT_DESERIALIZATION),
            (TransportError("GET failed", cause=httpx.ConnectError("refused")), cli.EXIT_TRANSPORT),
            (ValueError("bad argument"), cli.EXIT_USAGE),
        ],
    )
    def test_exit_codes(self, error, expected):
        with patch("kraken_client.cli.run", new=AsyncMock(side_effect=error)):
            assert cli.main(["time"]) == expected

    @pytest.mark.parametrize("name, value", [("LOG_LEVEL", "bogus"), ("KRAKEN_REQUEST_TIMEOUT", "soon")])
    def test_invalid_configuration_at_startup(self, name, value):
        """Failure: a bad environment value exits 1 from a fresh interpreter, without a traceback."""
        env = dict(os.environ)
        env.pop("KRAKEN_API_URL", None)
        env[name] = value
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))

        proc = subprocess.run(
            [sys.executable, "-m", "kraken_client.cli", "time"],
            env=env,
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert proc.returncode == cli.EXIT_USAGE
        assert "invalid configuration" in proc.stderr
        assert "Traceback" not in proc.stderr


class TestFormatResult:
    """Tests for format_result()"""

    def test_uses_wire_field_names(self):
        descr = OrderDescription(
            pair="XBTUSD",
            type="buy",
            ordertype="limit",
            price="37500",
            price2="0",
            leverage="none",
            order="buy 1.25 XBTUSD @ limit 37500",
        )
        data = json.loads(cli.format_result({"descr": descr}))
        assert data["descr"]["type"] == "buy"
        assert data["descr"]["price"] == "37500"
