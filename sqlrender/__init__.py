"""
sqlrender: render Jinja2 SQL templates into (sql, args) for a database dialect.

Exports: TemplateRenderer, ArgumentBinder, Dialect, render_sql,
render_sql_template, parse_parameters, check_sql_template_safety and the
error classes.
"""

import logging

from sqlrender.binder import ArgumentBinder
from sqlrender.dialects import Dialect
from sqlrender.errors import (
    InvalidIdentifierError,
    SQLRenderError,
    SQLTemplateExecutionError,
    SQLTemplateSyntaxError,
    TemplateNotFoundError,
    TemplateReadError,
    UnsupportedDialectError,
)
from sqlrender.renderer import (
    TemplateRenderer,
    parse_parameters,
    render_sql,
    render_sql_template,
)
from sqlrender.safety import check_sql_template_safety

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArgumentBinder",
    "Dialect",
    "TemplateRenderer",
    "render_sql",
    "render_sql_template",
    "parse_parameters",
    "check_sql_template_safety",
    "SQLRenderError",
    "SQLTemplateSyntaxError",
    "SQLTemplateExecutionError",
    "TemplateNotFoundError",
    "TemplateReadError",
    "UnsupportedDialectError",
    "InvalidIdentifierError",
]
