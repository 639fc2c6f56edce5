import json
import os
import subprocess
import sys
import time
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
ENTRY = ROOT / "src" / "mavenlookup.py"


def _spawn_mcp_stdio(env=None):
    cmd = [sys.executable, "-u", str(ENTRY), "mcp"]
    return subprocess.Popen(
        cmd,
        cwd=str(ROOT),
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env or os.environ.copy(),
        bufsize=1,
    )


def _rpc_envelope(method, params=None, id_=None):
    message = {"jsonrpc": "2.0", "method": method, "params": params or {}}
    if id_ is not None:
        message["id"] = id_
    return json.dumps(message) + "\n"


def _send_json(proc, payload_str: str) -> None:
    assert proc.stdin is not None
    proc.stdin.write(payload_str)
    proc.stdin.flush()


def _read_json_response(proc, expected_id, timeout=5):
    """Read line-delimited JSON-RPC messages until one carries ``expected_id``."""
    assert proc.stdout is not None
    end = time.time() + timeout
    while time.time() < end:
        line = proc.stdout.readline()
        if not line:
            return None
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except ValueError:
            continue
        if obj.get("id") == expected_id:
            return obj
    return None


def test_mcp_stdio_initialize_and_list_tools():
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    env.pop("MAVEN_LOOKUP_CONFIG", None)

    proc = _spawn_mcp_stdio(env)
    try:
        _send_json(proc, _rpc_envelope(
            "initialize",
            {
                "protocolVersion": "2024-11-05",
                "clientInfo": {"name": "pytest", "version": "0.0.0"},
                "capabilities": {},
            },
            id_=11,
        ))
        init = _read_json_response(proc, expected_id=11, timeout=10)
        assert init is not None, "No initialize response from MCP server"
        assert init["result"]["serverInfo"]["name"] == "maven-lookup-mcp"

        _send_json(proc, _rpc_envelope("notifications/initialized"))
        _send_json(proc, _rpc_envelope("tools/list", {}, id_=1))
        response = _read_json_response(proc, expected_id=1, timeout=5)
        assert response is not None, "No tools/list response from MCP server"

        names = {t.get("name") for t in response.get("result", {}).get("tools", [])}
        assert {"resolve_version_from_maven", "search_packages_from_maven"}.issubset(names)
    finally:
        if proc.stdin:
            proc.stdin.close()
        proc.terminate()
        proc.wait(timeout=5)
