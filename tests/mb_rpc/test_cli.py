"""Tests for the mb-rpc command line."""

import json
from pathlib import Path

from typer.testing import CliRunner

from mb_rpc.cli import app

runner = CliRunner()


def _invoke(tmp_path: Path, *args: str, input_: str | None = None):
    return runner.invoke(app, ["--data-dir", str(tmp_path), *args], input=input_)


class TestCall:
    """`call` command."""

    def test_prints_result_json(self, tmp_path, server):
        """JSON mode prints an ok envelope with the result."""
        server.responder = lambda req: json.dumps({"result": sum(req["params"]), "id": req["id"]})
        result = _invoke(tmp_path, "--json", "--url", server.url, "call", "sum", "[2, 3]")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["result"] == 5

    def test_protocol_error(self, tmp_path, server):
        """A server error object exits with its code and message."""
        server.responder = lambda req: json.dumps({"error": {"code": -32601, "message": "Method not found"}, "id": req["id"]})
        result = _invoke(tmp_path, "--json", "--url", server.url, "call", "nope")
        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"ok": False, "error": "-32601", "message": "Method not found"}

    def test_mismatched_id(self, tmp_path, server):
        """A reply with the wrong id is reported as mismatched_id."""
        server.responder = lambda req: json.dumps({"result": 1, "id": req["id"] + 1})
        result = _invoke(tmp_path, "--json", "--url", server.url, "call", "sum", "[1]")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "mismatched_id"

    def test_invalid_params(self, tmp_path, server):
        """Params that are not a JSON array or object are rejected."""
        result = _invoke(tmp_path, "--json", "--url", server.url, "call", "sum", "5")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "invalid_params"
        assert server.requests == []

    def test_no_url(self, tmp_path):
        """Without a URL the command fails with no_url."""
        result = _invoke(tmp_path, "--json", "call", "sum")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "no_url"

    def test_connection_refused(self, tmp_path, closed_port):
        """Transport errors are reported by code."""
        result = _invoke(tmp_path, "--json", "--url", f"http://127.0.0.1:{closed_port}/", "call", "sum")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "connection_failed"


class TestNotify:
    """`notify` command."""

    def test_sends_notification(self, tmp_path, server):
        """Notification is sent without an id."""
        result = _invoke(tmp_path, "--url", server.url, "notify", "log", '{"msg": "hi"}')
        assert result.exit_code == 0
        assert "Notification 'log' sent." in result.stdout
        body = json.loads(server.requests[0].partition(b"\r\n\r\n")[2])
        assert body == {"method": "log", "params": {"msg": "hi"}}


class TestBatch:
    """`batch` command."""

    def test_batch_from_stdin(self, tmp_path, server):
        """Results are printed in request order."""
        server.reply_json('[{"result": "b", "id": 2}, {"result": "a", "id": 1}]')
        requests = [{"method": "a", "id": 1}, {"method": "n"}, {"method": "b", "params": [1], "id": 2}]
        result = _invoke(tmp_path, "--json", "--url", server.url, "batch", "-", input_=json.dumps(requests))
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert [r["result"] for r in data["responses"]] == ["a", "b"]

    def test_missing_response(self, tmp_path, server):
        """A missing id is reported as missing_response."""
        server.reply_json('[{"result": "b", "id": 2}]')
        batch_file = tmp_path / "batch.json"
        batch_file.write_text(json.dumps([{"method": "a", "id": 1}, {"method": "b", "id": 2}]))
        result = _invoke(tmp_path, "--json", "--url", server.url, "batch", str(batch_file))
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "missing_response"

    def test_invalid_batch(self, tmp_path, server):
        """A batch entry without a method is rejected before sending."""
        result = _invoke(tmp_path, "--json", "--url", server.url, "batch", "-", input_='[{"id": 1}]')
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "invalid_batch"
        assert server.requests == []

    def test_empty_batch(self, tmp_path, server):
        """An empty array is sent as-is and prints no responses."""
        result = _invoke(tmp_path, "--json", "--url", server.url, "batch", "-", input_="[]")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["responses"] == []
        assert server.requests[0].endswith(b"\r\n\r\n[]")
