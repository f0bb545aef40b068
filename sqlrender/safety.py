"""
Static analysis for SQL templates: flag data inlined into SQL text.

Scans ``{{ expression }}`` outputs and warns about any that do not go through
``bind(...)`` (placeholder) or ``identifier(...)`` (validated, quoted name).
Such expressions paste values straight into the statement.

Usage::

    warnings = check_sql_template_safety(template_source)
    # [{"variable": "name", "line": 3, "message": "..."}]
"""

import re
from collections.abc import Iterable
from typing import Any

_SAFE_FUNCTIONS = ("bind", "identifier")

_EXPR_PATTERN = re.compile(r"\{\{-?(?P<expr>.*?)-?\}\}", re.DOTALL)
_CALL_PATTERN = re.compile(r"^(?P<name>[A-Za-z_]\w*)\s*\(")
_NAME_PATTERN = re.compile(r"[A-Za-z_]\w*")
_LITERAL_PATTERN = re.compile(r"""^(?:'[^']*'|"[^"]*"|-?\d+(?:\.\d+)?)$""")


def _call_end(expr: str, start: int) -> int:
    """Index just past the paren that closes the one opened at *start*, or -1."""
    depth = 0
    quote = None
    for i in range(start, len(expr)):
        ch = expr[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i + 1
    return -1


def _is_safe(expr: str, safe_functions: set[str]) -> bool:
    if _LITERAL_PATTERN.match(expr):
        return True
    call = _CALL_PATTERN.match(expr)
    if not call or call.group("name") not in safe_functions:
        return False
    # the safe call must be the whole expression: nothing chained after it
    return _call_end(expr, call.end() - 1) == len(expr)


def check_sql_template_safety(
    template: str, trusted_functions: Iterable[str] = ()
) -> list[dict[str, Any]]:
    """Return a warning per ``{{ }}`` output that is neither bound nor an identifier.

    *trusted_functions* names extra registered functions whose output is
    known to be SQL-safe. An empty list means no issues were found.
    """
    safe = set(_SAFE_FUNCTIONS) | set(trusted_functions)
    warnings: list[dict[str, Any]] = []

    for match in _EXPR_PATTERN.finditer(template):
        expr = match.group("expr").strip()
        if not expr or _is_safe(expr, safe):
            continue
        line_no = template.count("\n", 0, match.start()) + 1
        name = _NAME_PATTERN.search(expr)
        var_name = name.group(0) if name else expr
        warnings.append(
            {
                "variable": var_name,
                "line": line_no,
                "message": (
                    f"'{{{{ {expr} }}}}' is inlined into the SQL text. "
                    f"Use bind({var_name}) for values or identifier({var_name}) "
                    f"for table/column names."
                ),
            }
        )

    return warnings
