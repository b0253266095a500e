"""Command-line client for a running mascot server's HTTP API."""

from __future__ import annotations

import io
import json
import random
import re
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, TextIO, Union

import requests

from .args import ArgType, Option, OptionParser, UsageError

__all__ = [
    "DEFAULT_BASE_URL",
    "ApiError",
    "ApiReply",
    "ApiClient",
    "parse_api_result",
    "shimeji_attributes",
    "format_mascot",
    "resolve_mascot_id",
    "run",
    "main",
]

DEFAULT_BASE_URL = "http://127.0.0.1:32456"
"""Address the mascot server listens on."""

_API_ROOT = "/shijima/api/v1"
_PROGRAM = "shimectl"
_NOT_RUNNING = "Request failed. Is the mascot server running?"
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_JSON_OPTION = Option("json", "Print the API response as JSON", ArgType.BOOL)
_SELECTOR_HELP = "JavaScript code for filtering shimeji"


class ApiError(Exception):
    """A request to the API failed or returned an unusable response."""

    def __init__(
        self,
        message: str,
        *,
        body: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        unreachable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.body = body
        self.data = data
        self.unreachable = unreachable


class ApiReply(NamedTuple):
    """A successful API response: its raw text and its decoded object."""

    body: str
    data: Dict[str, Any]


def parse_api_result(body: Union[str, bytes]) -> Dict[str, Any]:
    """Decode an API response body, raising ApiError if it reports a failure."""
    try:
        document = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ApiError(f"Failed to parse response: {exc}") from None
    if not isinstance(document, dict):
        raise ApiError("Response JSON does not contain an object")
    if "error" in document:
        value = document["error"]
        reason = value if isinstance(value, str) else "Unknown error"
        raise ApiError(f"API request failed: {reason}", data=document)
    return document


def _compact_json(obj: Dict[str, Any]) -> bytes:
    return json.dumps(
        obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False
    ).encode("utf-8")


def _indented_json(obj: Dict[str, Any]) -> bytes:
    if not obj:
        return b"{\n}\n"
    text = json.dumps(obj, indent=4, sort_keys=True, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


class ApiClient:
    """Thin client for the mascot server's HTTP API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        content: Optional[bytes] = None,
    ) -> ApiReply:
        headers = {"Content-Type": "application/json"} if content is not None else None
        try:
            response = self.session.request(
                method,
                self.base_url + _API_ROOT + path,
                params=params,
                data=content,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ApiError(_NOT_RUNNING, unreachable=True) from exc
        body = response.content.decode("utf-8", errors="replace")
        try:
            data = parse_api_result(body)
        except ApiError as exc:
            exc.body = body
            raise
        return ApiReply(body, data)

    def list_mascots(self, selector: Optional[str] = None) -> ApiReply:
        """List the active mascots, optionally filtered by a selector."""
        params = {"selector": selector} if selector is not None else None
        return self._request("GET", "/mascots", params=params)

    def loaded_mascots(self) -> ApiReply:
        """List the mascot templates that can be spawned."""
        return self._request("GET", "/loadedMascots")

    def spawn(self, payload: Dict[str, Any]) -> ApiReply:
        """Spawn a new mascot described by ``payload``."""
        return self._request("POST", "/mascots", content=_compact_json(payload))

    def alter(self, mascot_id: int, payload: Dict[str, Any]) -> ApiReply:
        """Change the behaviour or position of an active mascot."""
        return self._request(
            "PUT", f"/mascots/{int(mascot_id)}", content=_compact_json(payload)
        )

    def dismiss(self, mascot_id: int) -> ApiReply:
        """Remove one active mascot."""
        return self._request("DELETE", f"/mascots/{int(mascot_id)}")

    def dismiss_all(self, selector: Optional[str] = None) -> ApiReply:
        """Remove every active mascot, or those matching the selector."""
        payload = {"selector": selector} if selector is not None else {}
        return self._request("DELETE", "/mascots", content=_indented_json(payload))


def shimeji_attributes(
    behaviors: Optional[Sequence[str]], x: Optional[float], y: Optional[float]
) -> Dict[str, Any]:
    """Request fields for an initial position and a behaviour.

    One behaviour is picked at random from ``behaviors``. ``x`` and ``y``
    must be given together or not at all.
    """
    if (x is None) != (y is None):
        raise ValueError("X and Y must be specified together")
    attributes: Dict[str, Any] = {}
    if x is not None and y is not None:
        attributes["anchor"] = {"x": float(x), "y": float(y)}
    if behaviors:
        attributes["behavior"] = random.choice(list(behaviors))
    return attributes


def _json_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _json_int(value: Any) -> int:
    number = _json_number(value)
    if number is None or not number.is_integer() or not _INT_MIN <= number <= _INT_MAX:
        return 0
    return int(number)


def _json_double(value: Any) -> float:
    number = _json_number(value)
    return 0.0 if number is None else number


def _json_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def format_mascot(obj: Dict[str, Any]) -> str:
    """Human-readable description of one mascot object from the API."""
    anchor = obj.get("anchor")
    if not isinstance(anchor, dict):
        anchor = {}
    return "\n".join(
        [
            f"[{_json_int(obj.get('id'))}] {_json_str(obj.get('name'))}",
            f"  Data ID: {_json_int(obj.get('data_id'))}",
            f"  Active behavior: {_json_str(obj.get('active_behavior'))}",
            f"  Anchor: {{{_json_double(anchor.get('x')):g}, "
            f"{_json_double(anchor.get('y')):g}}}",
        ]
    )


def _to_int(text: str) -> Optional[int]:
    stripped = text.strip()
    if not _INT_PATTERN.fullmatch(stripped):
        return None
    value = int(stripped)
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


def _id_at(mascots: List[Any], index: int) -> Optional[int]:
    if not 0 <= index < len(mascots):
        return None
    entry = mascots[index]
    if not isinstance(entry, dict):
        return None
    number = _json_number(entry.get("id"))
    return None if number is None else int(number)


_PICKERS: Dict[str, Callable[[List[Any]], Optional[int]]] = {
    "newest": lambda mascots: _id_at(mascots, len(mascots) - 1),
    "oldest": lambda mascots: _id_at(mascots, 0),
    "random": lambda mascots: _id_at(mascots, random.randrange(len(mascots))),
}


def resolve_mascot_id(
    client: ApiClient,
    value: Union[int, str],
    selectors: Union[Sequence[str], str, None] = None,
) -> int:
    """Turn a numeric ID or one of ``oldest``, ``newest``, ``random`` into an ID.

    Automatic IDs are looked up among the mascots matching each selector
    in turn, the first that yields an ID winning.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise TypeError("mascot ID must be an int or a str")

    if isinstance(selectors, str):
        selector_list = [selectors]
    elif selectors:
        selector_list = list(selectors)
    else:
        selector_list = [""]

    numeric = _to_int(value)
    if numeric is not None:
        if selector_list[0] != "":
            raise ValueError(
                "You can't specify a numeric ID and a selector at the same time"
            )
        if numeric < 0:
            raise ValueError("ID must be greater than or equal to 0")
        return numeric

    picker = _PICKERS.get(value)
    if picker is None:
        raise ValueError(
            "Invalid auto ID, expected one of: " + ", ".join(sorted(_PICKERS))
        )
    for selector in selector_list:
        reply = client.list_mascots(selector or None)
        mascots = reply.data.get("mascots")
        if not isinstance(mascots, list):
            raise ApiError("Malformed response")
        if mascots:
            found = picker(mascots)
            if found is not None:
                return found
    raise ValueError("Failed to determine ID (are any mascots spawned?)")


@dataclass
class _Context:
    program: str
    command: str
    args: List[str]
    out: TextIO
    err: TextIO

    def options(self, parser: OptionParser) -> Optional[Dict[str, Any]]:
        try:
            return parser.parse(self.args)
        except UsageError:
            self.err.write(parser.usage(self.program, self.command))
            return None

    def report(self, exc: ApiError) -> None:
        if exc.unreachable:
            self.err.write(exc.message + "\n")
        else:
            self.err.write(f"ERROR: {exc.message}\n")


def _cmd_list(client: ApiClient, ctx: _Context) -> int:
    parser = OptionParser(
        [_JSON_OPTION, Option("selector", _SELECTOR_HELP, ArgType.STRING)]
    )
    opts = ctx.options(parser)
    if opts is None:
        return 1
    try:
        reply = client.list_mascots(opts["selector"])
    except ApiError as exc:
        ctx.report(exc)
        if opts["json"] and exc.data is not None and exc.body is not None:
            ctx.out.write(exc.body + "\n")
        return 1
    if opts["json"]:
        ctx.out.write(reply.body + "\n")
        return 0
    mascots = reply.data.get("mascots")
    if not isinstance(mascots, list):
        raise ApiError("Malformed response")
    for mascot in mascots:
        if isinstance(mascot, dict):
            ctx.out.write(format_mascot(mascot) + "\n")
    return 0


def _cmd_list_loaded(client: ApiClient, ctx: _Context) -> int:
    parser = OptionParser(
        [_JSON_OPTION, Option("sort-by-id", "Sort results by ID", ArgType.BOOL)]
    )
    opts = ctx.options(parser)
    if opts is None:
        return 1
    if opts["json"] and opts["sort-by-id"]:
        ctx.err.write("ERROR: --json and --sort-by-id cannot be used together.\n")
        return 1
    try:
        reply = client.loaded_mascots()
    except ApiError as exc:
        ctx.report(exc)
        if opts["json"] and exc.data is not None and exc.body is not None:
            ctx.out.write(exc.body + "\n")
        return 1
    if opts["json"]:
        ctx.out.write(reply.body + "\n")
        return 0
    loaded = reply.data.get("loaded_mascots")
    if not isinstance(loaded, list):
        raise ApiError("Malformed response")
    entries = [
        (_json_int(item.get("id")), _json_str(item.get("name")))
        for item in loaded
        if isinstance(item, dict)
    ]
    if opts["sort-by-id"]:
        entries.sort(key=lambda entry: entry[0])
    for mascot_id, name in entries:
        ctx.out.write(f"[{mascot_id}] {name}\n")
    return 0


def _finish_mascot_reply(
    ctx: _Context, print_json: bool, call: Callable[[], ApiReply]
) -> int:
    try:
        reply = call()
    except ApiError as exc:
        if exc.unreachable:
            raise
        ctx.report(exc)
        if print_json and exc.body is not None:
            ctx.out.write(exc.body + "\n")
        return 1
    status = 0
    if not print_json:
        mascot = reply.data.get("mascot")
        if isinstance(mascot, dict):
            ctx.out.write(format_mascot(mascot) + "\n")
        else:
            ctx.err.write("ERROR: Malformed response\n")
            status = 1
    else:
        ctx.out.write(reply.body + "\n")
    return status


def _cmd_spawn(client: ApiClient, ctx: _Context) -> int:
    parser = OptionParser(
        [
            Option("data-id", "Data ID of the shimeji to spawn", ArgType.INT),
            Option("name", "Name of the shimeji to spawn", ArgType.STRING),
            Option("behavior", "Initial behavior for the shimeji", ArgType.STRING_LIST),
            Option("x", "Initial X position for the shimeji", ArgType.DOUBLE),
            Option("y", "Initial Y position for the shimeji", ArgType.DOUBLE),
            _JSON_OPTION,
        ]
    )
    opts = ctx.options(parser)
    if opts is None:
        return 1
    if (opts["data-id"] is None) == (opts["name"] is None):
        ctx.err.write("ERROR: You must specify one of name or data-id.\n")
        ctx.err.write(parser.usage(ctx.program, ctx.command))
        return 1
    payload: Dict[str, Any] = (
        {"data_id": opts["data-id"]}
        if opts["data-id"] is not None
        else {"name": opts["name"]}
    )
    payload.update(shimeji_attributes(opts["behavior"], opts["x"], opts["y"]))
    return _finish_mascot_reply(ctx, opts["json"], lambda: client.spawn(payload))


def _cmd_alter(client: ApiClient, ctx: _Context) -> int:
    parser = OptionParser(
        [
            Option("id", "ID of the shimeji to alter", ArgType.STRING, required=True),
            Option("selector", _SELECTOR_HELP, ArgType.STRING_LIST),
            Option("behavior", "New behavior for the shimeji", ArgType.STRING_LIST),
            Option("x", "New X position for the shimeji", ArgType.DOUBLE),
            Option("y", "New Y position for the shimeji", ArgType.DOUBLE),
            _JSON_OPTION,
        ]
    )
    opts = ctx.options(parser)
    if opts is None:
        return 1
    mascot_id = resolve_mascot_id(client, opts["id"], opts["selector"])
    payload = shimeji_attributes(opts["behavior"], opts["x"], opts["y"])
    return _finish_mascot_reply(
        ctx, opts["json"], lambda: client.alter(mascot_id, payload)
    )


def _cmd_dismiss(client: ApiClient, ctx: _Context) -> int:
    parser = OptionParser(
        [
            Option("id", "ID of the shimeji to dismiss", ArgType.STRING, required=True),
            Option("selector", _SELECTOR_HELP, ArgType.STRING),
        ]
    )
    opts = ctx.options(parser)
    if opts is None:
        return 1
    mascot_id = resolve_mascot_id(client, opts["id"], opts["selector"])
    client.dismiss(mascot_id)
    return 0


def _cmd_dismiss_all(client: ApiClient, ctx: _Context) -> int:
    parser = OptionParser([Option("selector", _SELECTOR_HELP, ArgType.STRING)])
    opts = ctx.options(parser)
    if opts is None:
        return 1
    client.dismiss_all(opts["selector"])
    return 0


_COMMANDS: Dict[str, Callable[[ApiClient, _Context], int]] = {
    "list": _cmd_list,
    "list-loaded": _cmd_list_loaded,
    "spawn": _cmd_spawn,
    "alter": _cmd_alter,
    "dismiss": _cmd_dismiss,
    "dismiss-all": _cmd_dismiss_all,
}


def run(
    argv: Sequence[str],
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Run one client command; ``argv[0]`` is the program name.

    Returns the process exit status. ``--quiet`` before the command
    silences all output.
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    args = list(argv)
    if len(args) > 2 and args[1] == "--quiet":
        args = [args[0]] + args[2:]
        out = err = io.StringIO()
    program = args[0] if args else _PROGRAM

    command = _COMMANDS.get(args[1]) if len(args) > 1 else None
    if command is None:
        err.write(f"Usage: {program} [--quiet] <command> [options...]\n")
        err.write("   Possible commands are: " + ", ".join(_COMMANDS) + "\n")
        return 1

    ctx = _Context(program, args[1], args[2:], out, err)
    client = ApiClient()
    try:
        return command(client, ctx)
    except ApiError as exc:
        ctx.report(exc)
        return 1
    except ValueError as exc:
        err.write(f"ERROR: {exc}\n")
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``shimectl`` command."""
    args = sys.argv[1:] if argv is None else list(argv)
    return run([_PROGRAM, *args])