"""HTTP interface serving train, elevator and complex data as a WSGI app."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any
from wsgiref.simple_server import make_server

from .states import States

_log = logging.getLogger(__name__)

_JSON = "application/json"
_TEXT = "text/plain; charset=utf-8"
_HTML = "text/html; charset=utf-8"
_SVG = "image/svg+xml"

_REASONS = {
    200: "OK",
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
}


class _HttpError(Exception):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


_Response = tuple[int, str, bytes]


def _json(value: Any) -> _Response:
    return 200, _JSON, json.dumps(value).encode("utf-8")


def _complex_id(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise _HttpError(400, f"Invalid URL: Cannot parse `{text}` as a complex id")
    return int(text)


def _not_found(complex_id: int) -> _HttpError:
    return _HttpError(404, f"complex '{complex_id}' not found")


class WebApp:
    """WSGI application answering GET requests from the shared state."""

    allowed_origin: str | None = None

    def __init__(self, states: States, ui_dir: str | Path = "ui") -> None:
        self.states = states
        self.ui_dir = Path(ui_dir)
        self._with_arg: dict[str, Callable[[str], _Response]] = {
            "upcoming": self._upcoming,
            "elevators": self._elevators,
            "complex": self._complex,
            "c": self._complex_page,
            "f": self._file,
        }
        self._plain: dict[str, Callable[[], _Response]] = {
            "elevators_overview": self._overview,
            "hello": self._hello,
            "favicon.ico": self._favicon,
        }

    def __call__(self, environ: dict[str, Any], start_response) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET").upper()
        raw_path = environ.get("PATH_INFO", "") or "/"
        path = raw_path.encode("latin-1", "replace").decode("utf-8", "replace")
        try:
            handler = self._route(path)
            if method not in ("GET", "HEAD"):
                raise _HttpError(405, "")
            status, content_type, body = handler()
        except _HttpError as err:
            status, content_type, body = err.status, _TEXT, err.message.encode("utf-8")
        headers = [("Content-Type", content_type), ("Content-Length", str(len(body)))]
        if status == 405:
            headers.append(("Allow", "GET,HEAD"))
        if self.allowed_origin is not None:
            headers.append(("Access-Control-Allow-Origin", self.allowed_origin))
            headers.append(("Access-Control-Allow-Methods", "GET"))
        start_response(f"{status} {_REASONS.get(status, '')}".rstrip(), headers)
        return [b""] if method == "HEAD" else [body]

    def _route(self, path: str) -> Callable[[], _Response]:
        parts = path.split("/")
        if len(parts) == 2 and parts[0] == "" and parts[1] in self._plain:
            return self._plain[parts[1]]
        if len(parts) == 3 and parts[0] == "" and parts[1] in self._with_arg and parts[2]:
            handler, arg = self._with_arg[parts[1]], parts[2]
            return lambda: handler(arg)
        raise _HttpError(404, "")

    def _upcoming(self, arg: str) -> _Response:
        complex_id = _complex_id(arg)
        upcoming = self.states.trains.get(complex_id)
        if upcoming is None:
            _log.warning("no such upcoming: %s", complex_id)
            raise _not_found(complex_id)
        _log.info("serving upcoming: %s", complex_id)
        return _json([u.to_json() for u in upcoming])

    def _elevators(self, arg: str) -> _Response:
        complex_id = _complex_id(arg)
        elevators = self.states.elevators.get(complex_id)
        if elevators is None:
            _log.warning("no such elevators: %s", complex_id)
            raise _not_found(complex_id)
        _log.info("serving elevator list: %s", complex_id)
        return _json([e.to_json() for e in elevators])

    def _overview(self) -> _Response:
        return _json(self.states.elevators.get_summary().to_json())

    def _complex(self, arg: str) -> _Response:
        complex_id = _complex_id(arg)
        full = self.states.get_full(complex_id)
        if full is None:
            raise _not_found(complex_id)
        return _json(full.to_json())

    def _read(self, name: str, content_type: str) -> _Response:
        try:
            text = (self.ui_dir / name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise _HttpError(404, str(exc)) from exc
        return 200, content_type, text.encode("utf-8")

    def _complex_page(self, arg: str) -> _Response:
        return self._read("index.html", _HTML)

    def _favicon(self) -> _Response:
        return self._read("elevator4.svg", _SVG)

    def _hello(self) -> _Response:
        return 200, _TEXT, b"hell world"

    def _file(self, name: str) -> _Response:
        _log.debug("get file %s", name)
        if name.startswith("..") or "/" in name or "\\" in name:
            raise _HttpError(400, f"refusing file name '{name}'")
        return self._read(name, _TEXT)


def serve(states: States, host: str = "0.0.0.0", port: int = 3000, ui_dir: str | Path = "ui") -> None:
    """Serve the state over HTTP until interrupted."""
    app = WebApp(states, ui_dir)
    with make_server(host, port, app) as server:
        _log.info("listening at %s:%s", host, port)
        server.serve_forever()