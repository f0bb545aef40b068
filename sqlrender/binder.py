"""
ArgumentBinder: per-render placeholder allocation and identifier quoting.

One binder belongs to exactly one render. ``bind`` appends values to ``args``
and returns the placeholder text for them; ``identifier`` validates and quotes
(optionally schema-qualified) names. Both are exposed to templates as
``bind(...)`` and ``identifier(...)``.
"""

import re
from collections.abc import Sequence
from typing import Any

from jinja2 import StrictUndefined, Undefined

from sqlrender.dialects import Dialect, placeholder, quote_identifier, resolve_dialect
from sqlrender.errors import InvalidIdentifierError

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9._]+")

# Empty IN-list: valid SQL that matches nothing
_EMPTY_LIST = "(NULL)"


def _is_collection(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


class ArgumentBinder:
    """Collects bound arguments and emits dialect-specific placeholders."""

    def __init__(self, dialect: Dialect | str) -> None:
        self.dialect = resolve_dialect(dialect)
        self.args: list[Any] = []

    def _append(self, value: Any) -> str:
        self.args.append(value)
        return placeholder(self.dialect, len(self.args))

    def bind(self, value: Any) -> str:
        """
        Bind *value* and return its placeholder.

        None -> one NULL argument. List/tuple (any non-string sequence) ->
        one argument per element, rendered as ``(p1, p2, ...)``; an empty
        sequence renders ``(NULL)`` and binds nothing. Anything else is bound
        as-is.
        """
        if isinstance(value, Undefined):
            if isinstance(value, StrictUndefined):
                value._fail_with_undefined_error()
            value = None
        if value is None:
            return self._append(None)
        if _is_collection(value):
            if len(value) == 0:
                return _EMPTY_LIST
            return "(" + ", ".join(self._append(v) for v in value) + ")"
        return self._append(value)

    def identifier(self, name: Any) -> str:
        """
        Quote *name* for the dialect. Non-strings and "" render as "".
        Raises InvalidIdentifierError for characters outside [A-Za-z0-9._].
        """
        if isinstance(name, StrictUndefined):
            name._fail_with_undefined_error()
        if not isinstance(name, str) or not name:
            return ""
        if not _IDENTIFIER_RE.fullmatch(name):
            raise InvalidIdentifierError(name)
        return ".".join(quote_identifier(self.dialect, part) for part in name.split("."))

    def functions(self) -> dict[str, Any]:
        """Template function table entries backed by this binder."""
        return {"bind": self.bind, "identifier": self.identifier}
