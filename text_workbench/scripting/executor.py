"""Run user scripts against a fixed set of bindings.

A script is the body of an ``async`` function. It sees ``selection``,
``text``, ``params``, ``app``, ``console`` and ``notice``, a reduced set
of builtins, and may import only pure-computation standard modules.
Attributes whose names start with an underscore are off limits, as are
frame, code and traceback links.

Return value contract:
    str       replaces the target region verbatim
    None      leaves the target region unchanged
    other     is converted with ``str()``
"""

from __future__ import annotations

import ast
import asyncio
import builtins
import importlib
import json
import logging
import re
import types
from typing import Any

import requests

from ..exceptions import ScriptExecutionError
from ..logger_config import ErrorCategory
from ..logger_config import log_structured_error
from ..notifications import LoggingNotifier
from ..notifications import Notifier
from ..utils.frontmatter import parse_frontmatter
from ..utils.frontmatter import split_frontmatter

script_logger = logging.getLogger("text_workbench.scripts")

SCRIPT_FUNCTION = "__script__"
BINDINGS = ("selection", "text", "params", "app", "console", "notice")

ALLOWED_MODULES = frozenset(
    {
        "re",
        "json",
        "math",
        "string",
        "textwrap",
        "datetime",
        "itertools",
        "collections",
        "unicodedata",
        "random",
        "statistics",
        "html",
        "urllib.parse",
    }
)

_SAFE_BUILTIN_NAMES = (
    "abs", "all", "any", "bin", "bool", "chr", "dict", "divmod", "enumerate",
    "filter", "float", "format", "frozenset", "hash", "hex", "int", "isinstance",
    "issubclass", "iter", "len", "list", "map", "max", "min", "next", "oct",
    "ord", "pow", "range", "repr", "reversed", "round", "set", "slice", "sorted",
    "str", "sum", "tuple", "zip",
    "Exception", "ArithmeticError", "AttributeError", "IndexError", "KeyError",
    "LookupError", "RuntimeError", "StopIteration", "TypeError", "ValueError",
    "ZeroDivisionError",
)

_SELECTION_RE = re.compile(r"\bselection\b")
_TEXT_RE = re.compile(r"\btext\b")

DEFAULT_REQUEST_TIMEOUT = 30


def requires_selection(code: str) -> bool:
    """True when ``code`` mentions ``selection`` and never ``text``.

    A textual check only; comments and strings count.
    """
    return bool(_SELECTION_RE.search(code)) and not _TEXT_RE.search(code)


def _restricted_import(name, globals=None, locals=None, fromlist=(), level=0):
    if level:
        raise ImportError("Relative imports are not available to scripts")
    if name not in ALLOWED_MODULES:
        submodules = [f"{name}.{item}" for item in fromlist or ()]
        if not submodules or not all(sub in ALLOWED_MODULES for sub in submodules):
            raise ImportError(f"Module '{name}' is not available to scripts")
    module = builtins.__import__(name, globals, locals, fromlist, level)
    if fromlist or "." not in name:
        return module

    # ``import a.b`` binds ``a``; hand back a view holding only the allowed path
    view: Any = importlib.import_module(name)
    for part in reversed(name.split(".")[1:]):
        view = types.SimpleNamespace(**{part: view})
    return view


class ScriptConsole:
    """Logging sink handed to scripts as ``console``."""

    def __init__(self, script_name: str):
        self._script_name = script_name

    def _emit(self, level: int, args: tuple) -> None:
        script_logger.log(level, " ".join(str(a) for a in args), extra={"script_name": self._script_name})

    def log(self, *args) -> None:
        self._emit(logging.INFO, args)

    info = log

    def debug(self, *args) -> None:
        self._emit(logging.DEBUG, args)

    def warn(self, *args) -> None:
        self._emit(logging.WARNING, args)

    warning = warn

    def error(self, *args) -> None:
        self._emit(logging.ERROR, args)


class ScriptResponse:
    """The parts of an HTTP response a script can read."""

    def __init__(self, response: requests.Response):
        self.status = response.status_code
        self.ok = response.ok
        self.headers = dict(response.headers)
        self.text = response.text
        self.url = response.url

    def json(self) -> Any:
        return json.loads(self.text)


class ScriptApp:
    """Read-only host handle handed to scripts as ``app``.

    It exposes the texts the script was started with, not the live
    buffer; scripts change the document only through their return value.
    """

    def __init__(self, full_text: str, selection_text: str, request_timeout: float = DEFAULT_REQUEST_TIMEOUT):
        self._full_text = full_text
        self._selection_text = selection_text
        self._request_timeout = request_timeout

    def get_text(self) -> str:
        return self._full_text

    def get_selection(self) -> str:
        return self._selection_text

    def parse_frontmatter(self, content: str) -> tuple[dict[str, Any], str]:
        return parse_frontmatter(content)

    def split_frontmatter(self, content: str) -> tuple[str, str]:
        return split_frontmatter(content)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json: Any = None,
        data: Any = None,
        timeout: float | None = None,
    ) -> ScriptResponse:
        """Perform an HTTP request in a worker thread."""
        response = await asyncio.to_thread(
            requests.request,
            method.upper(),
            url,
            params=params,
            headers=headers,
            json=json,
            data=data,
            timeout=timeout or self._request_timeout,
        )
        return ScriptResponse(response)


# frame, code and traceback links lead back into host module globals
_BLOCKED_ATTRIBUTES = frozenset(
    {
        "gi_frame", "gi_code", "gi_yieldfrom",
        "cr_frame", "cr_code", "cr_await", "cr_origin",
        "ag_frame", "ag_code", "ag_await",
        "tb_frame", "tb_next",
        "f_back", "f_globals", "f_locals", "f_builtins", "f_code",
    }
)


class _AttributeGuard(ast.NodeVisitor):
    def visit_Attribute(self, node: ast.Attribute) -> None:
        if node.attr.startswith("_") or node.attr in _BLOCKED_ATTRIBUTES:
            raise SyntaxError(f"Access to attribute '{node.attr}' is not allowed (line {node.lineno})")
        self.generic_visit(node)


class ScriptHost:
    """Builds and runs user scripts."""

    def __init__(self, notifier: Notifier | None = None, request_timeout: float = DEFAULT_REQUEST_TIMEOUT):
        self.notifier = notifier or LoggingNotifier()
        self.request_timeout = request_timeout
        self._builtins = {name: getattr(builtins, name) for name in _SAFE_BUILTIN_NAMES}
        self._builtins["__import__"] = _restricted_import

    def compile(self, code: str, name: str = "script"):
        """Compile ``code`` into an ``async def`` taking the script bindings.

        Top-level ``return`` and ``await`` are accepted because the body is
        grafted into the function before compilation.
        """
        filename = f"<script:{name}>"
        body = ast.parse(code, filename=filename)
        _AttributeGuard().visit(body)

        template = ast.parse(f"async def {SCRIPT_FUNCTION}({', '.join(BINDINGS)}):\n    pass\n", filename=filename)
        function = template.body[0]
        function.body = body.body or [ast.Pass()]
        ast.fix_missing_locations(template)
        return compile(template, filename, "exec")

    def _build_function(self, code: str, name: str):
        namespace: dict[str, Any] = {"__builtins__": dict(self._builtins), "__name__": SCRIPT_FUNCTION}
        namespace["__builtins__"]["print"] = ScriptConsole(name).log
        exec(self.compile(code, name), namespace)
        return namespace[SCRIPT_FUNCTION]

    async def execute(
        self,
        code: str,
        full_text: str,
        selection_text: str,
        params: dict[str, Any] | None = None,
        name: str = "script",
        notifier: Notifier | None = None,
    ) -> str:
        """Run ``code`` and return the replacement for the target region.

        The target region is the selection when there is one, else the full
        text. Any failure raises ``ScriptExecutionError`` chained to the
        original exception.
        """
        sink = notifier or self.notifier

        def notice(message: Any) -> None:
            sink.notify(str(message))

        try:
            function = self._build_function(code, name)
            result = await function(
                selection_text,
                full_text,
                dict(params or {}),
                ScriptApp(full_text, selection_text, self.request_timeout),
                ScriptConsole(name),
                notice,
            )
        except Exception as e:
            log_structured_error(
                ErrorCategory.ERROR,
                f"Script '{name}' failed",
                exception=e,
                operation="script_execute",
                script_name=name,
            )
            raise ScriptExecutionError(name, e) from e

        if result is None:
            return selection_text if selection_text else full_text
        if isinstance(result, str):
            return result
        return str(result)
