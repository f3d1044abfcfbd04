#!/usr/bin/env python3
"""Towers of Hanoi: local dev server (stdlib only).

Serves a JSON API wrapping the backend HanoiEngine. Auto-solve pacing is left
to the client: it fetches /api/solution (or /api/hint) and replays moves with
its own timer, since this server is thread-based and the sequencer needs an
event loop.

Run from repo root:
  python frontend/server.py

Then try:
  curl http://127.0.0.1:8000/api/state
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import socket
import sys
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, HTTPServer
from socketserver import ThreadingMixIn
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlsplit


REPO_ROOT = Path(__file__).resolve().parents[1]
BACKEND_ROOT = REPO_ROOT / "backend"

# Ensure backend package import works without an install
sys.path.insert(0, str(BACKEND_ROOT))

from towers_of_hanoi.api import HanoiEngine, result_to_dict
from towers_of_hanoi.core import DEFAULT_DISKS, Result


LOGGER = logging.getLogger("hanoi.server")


class PayloadTooLargeError(ValueError):
    pass


class RequestReadTimeoutError(ValueError):
    pass


def _json_read(
    rfile,
    *,
    content_length: Optional[int],
    max_bytes: int = 64_000,
    socket_obj: Optional[socket.socket] = None,
    read_timeout_s: Optional[float] = None,
) -> Dict[str, Any]:
    if content_length is None:
        raise ValueError("Missing Content-Length")

    max_allowed = int(os.environ.get("HANOI_HTTP_MAX", str(max_bytes)))
    if content_length < 0:
        raise ValueError("Invalid Content-Length")
    if content_length > max_allowed:
        raise PayloadTooLargeError("Payload too large")

    prev_timeout = None
    if socket_obj is not None and read_timeout_s is not None:
        prev_timeout = socket_obj.gettimeout()
        socket_obj.settimeout(read_timeout_s)

    try:
        raw = rfile.read(content_length) if content_length > 0 else b""
    except (TimeoutError, socket.timeout) as e:
        raise RequestReadTimeoutError("Request body read timed out") from e
    finally:
        if socket_obj is not None and read_timeout_s is not None:
            socket_obj.settimeout(prev_timeout)

    if not raw:
        return {}
    try:
        body = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(body, dict):
        raise ValueError("JSON body must be an object")
    return body


def _json_write(handler: BaseHTTPRequestHandler, status: int, payload: Dict[str, Any]) -> None:
    data = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "application/json; charset=utf-8")
    handler.send_header("Cache-Control", "no-store")
    handler.send_header("Content-Length", str(len(data)))
    # Same-origin by default; allow localhost tools to talk to it.
    handler.send_header("Access-Control-Allow-Origin", "*")
    handler.end_headers()
    handler.wfile.write(data)


def _bad(handler: BaseHTTPRequestHandler, msg: str, status: int = 400, reason: str = "BAD_REQUEST") -> None:
    _json_write(handler, status, {"ok": False, "error": {"reason": reason, "message": msg, "details": {}}})


def _reply(handler: BaseHTTPRequestHandler, res: Result) -> None:
    _json_write(handler, 200 if res.ok else 400, result_to_dict(res))


class _State:
    engine: HanoiEngine

    def __init__(self) -> None:
        self.engine = HanoiEngine()

STATE = _State()
STATE_LOCK = threading.RLock()


class ThreadingHTTPServer(ThreadingMixIn, HTTPServer):
    daemon_threads = True


class Handler(BaseHTTPRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        LOGGER.debug("http_request", extra={"client": self.client_address[0], "line": format % args})

    def do_OPTIONS(self) -> None:
        self.send_response(HTTPStatus.NO_CONTENT)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET,POST,OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    def do_GET(self) -> None:
        if self.path.startswith("/api/"):
            self._handle_api_get()
            return
        self.send_error(HTTPStatus.NOT_FOUND, "No such endpoint")

    def do_POST(self) -> None:
        if self.path.startswith("/api/"):
            self._handle_api_post()
            return
        self.send_error(HTTPStatus.NOT_FOUND, "No such endpoint")

    def _handle_api_get(self) -> None:
        url = urlsplit(self.path)
        route = url.path
        try:
            if route == "/api/state":
                with STATE_LOCK:
                    res = STATE.engine.state()
                _reply(self, res)
                return
            if route == "/api/stats":
                with STATE_LOCK:
                    res = STATE.engine.stats()
                _reply(self, res)
                return
            if route == "/api/hint":
                with STATE_LOCK:
                    res = STATE.engine.hint()
                _reply(self, res)
                return
            if route == "/api/solution":
                with STATE_LOCK:
                    res = STATE.engine.solution()
                _reply(self, res)
                return
            if route == "/api/destinations":
                peg = parse_qs(url.query).get("peg", [""])[0]
                if not peg.isdigit():
                    _bad(self, "peg query parameter must be 0, 1, or 2", 400, "INVALID_PEG")
                    return
                with STATE_LOCK:
                    res = STATE.engine.valid_destinations(int(peg))
                _reply(self, res)
                return
        except Exception:
            LOGGER.exception("api_get_unhandled", extra={"path": self.path})
            _bad(self, "Internal server error", 500, "INTERNAL")
            return

        self.send_error(HTTPStatus.NOT_FOUND, "No such endpoint")

    def _handle_api_post(self) -> None:
        try:
            length_header = self.headers.get("Content-Length")
            length = int(length_header) if length_header is not None else None
        except (TypeError, ValueError):
            _bad(self, "Invalid Content-Length", 400)
            return

        try:
            body = _json_read(
                self.rfile,
                content_length=length,
                socket_obj=self.connection,
                read_timeout_s=float(os.environ.get("HANOI_HTTP_READ_TIMEOUT", "5.0")),
            )
        except PayloadTooLargeError as e:
            _bad(self, str(e), 413)
            return
        except RequestReadTimeoutError as e:
            _bad(self, str(e), 408)
            return
        except ValueError as e:
            msg = str(e)
            if msg == "Missing Content-Length":
                _bad(self, msg, 411)
            else:
                _bad(self, msg, 400)
            return
        except Exception:
            LOGGER.exception("json_read_unhandled", extra={"path": self.path})
            _bad(self, "Invalid request body", 400)
            return

        route = urlsplit(self.path).path
        try:
            if route == "/api/reset":
                with STATE_LOCK:
                    res = STATE.engine.reset()
                _reply(self, res)
                return

            if route == "/api/newgame":
                with STATE_LOCK:
                    if "position" in body:
                        res = STATE.engine.load_position(str(body["position"]))
                    else:
                        res = STATE.engine.new_game(body.get("disks", DEFAULT_DISKS))
                _reply(self, res)
                return

            if route == "/api/select":
                with STATE_LOCK:
                    res = STATE.engine.select_peg(body.get("peg"))  # type: ignore[arg-type]
                _reply(self, res)
                return

            if route == "/api/clear":
                with STATE_LOCK:
                    res = STATE.engine.clear_selection()
                _reply(self, res)
                return

            if route == "/api/move":
                with STATE_LOCK:
                    if "source" in body:
                        res = STATE.engine.move(body.get("source"), body.get("target"))  # type: ignore[arg-type]
                    else:
                        res = STATE.engine.move_selected_to(body.get("target"))  # type: ignore[arg-type]
                _reply(self, res)
                return

            if route == "/api/auto":
                with STATE_LOCK:
                    res = STATE.engine.auto_move(body.get("peg"))  # type: ignore[arg-type]
                _reply(self, res)
                return

            if route == "/api/undo":
                with STATE_LOCK:
                    res = STATE.engine.undo()
                _reply(self, res)
                return
        except Exception:
            LOGGER.exception("api_post_unhandled", extra={"path": self.path})
            _bad(self, "Internal server error", 500, "INTERNAL")
            return

        self.send_error(HTTPStatus.NOT_FOUND, "No such endpoint")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s %(message)s")
    httpd = ThreadingHTTPServer((args.host, args.port), Handler)
    LOGGER.info("server_listening", extra={"host": args.host, "port": httpd.server_port})
    print(f"Serving on http://{args.host}:{httpd.server_port}/")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
