"""
Condition-clause tags for SQL templates.

{% where %} ... {% endwhere %} and {% having %} ... {% endhaving %} render
their body, drop a leading AND/OR, and emit ``WHERE <body>`` /
``HAVING <body>``, or nothing when the body is blank. Optional conditions can
then all be written as ``AND col = {{ bind(x) }}``.
"""

import re

from jinja2 import nodes
from jinja2.ext import Extension

_LEADING_CONJUNCTION_RE = re.compile(r"^(?:AND|OR)\b\s*", re.IGNORECASE)


class ConditionClauseExtension(Extension):
    """Block tags that wrap optional conditions in a WHERE or HAVING clause.

    The body is rendered once, in template order, so ``bind`` numbering inside
    it is the same as if the tag were not there.
    """

    tags = {"where", "having"}

    def parse(self, parser) -> nodes.CallBlock:
        token = next(parser.stream)
        keyword = token.value
        body = parser.parse_statements((f"name:end{keyword}",), drop_needle=True)
        call = self.call_method("_render_clause", [nodes.Const(keyword.upper())])
        return nodes.CallBlock(call, [], [], body).set_lineno(token.lineno)

    def _render_clause(self, keyword: str, caller) -> str:
        conditions = _LEADING_CONJUNCTION_RE.sub("", caller().strip(), count=1).strip()
        return f"{keyword} {conditions}" if conditions else ""


SQL_EXTENSIONS: list[type[Extension]] = [ConditionClauseExtension]
