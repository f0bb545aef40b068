"""
TemplateRenderer: Jinja2 SQL templates -> (sql, args).

Each render gets its own ArgumentBinder, exposed to the template as
``bind(...)`` and ``identifier(...)`` next to any registered custom functions.
Custom functions can never shadow the two built-ins.

Configuration (default dialect, search paths, custom functions) is guarded by
a lock; every render works on a snapshot taken when the call starts, so it is
safe to reconfigure a renderer that other threads are rendering with.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jinja2 import (
    Environment,
    StrictUndefined,
    TemplateError,
    TemplateSyntaxError,
    Undefined,
    meta,
)

from sqlrender.binder import ArgumentBinder
from sqlrender.config import Settings, settings
from sqlrender.dialects import Dialect, resolve_dialect
from sqlrender.errors import (
    InvalidIdentifierError,
    SQLTemplateExecutionError,
    SQLTemplateSyntaxError,
)
from sqlrender.extensions import SQL_EXTENSIONS
from sqlrender.loader import load_template

_log = logging.getLogger(__name__)

BUILTIN_FUNCTIONS = ("bind", "identifier")


@dataclass(frozen=True)
class _Snapshot:
    default_dialect: Dialect
    search_paths: list[str]
    functions: dict[str, Callable[..., Any]]


def build_environment(config: Settings) -> Environment:
    """Return the Jinja2 Environment for SQL templates (extensions, undefined policy)."""
    return Environment(
        autoescape=False,
        extensions=SQL_EXTENSIONS,
        undefined=StrictUndefined if config.STRICT_UNDEFINED else Undefined,
        trim_blocks=config.TRIM_BLOCKS,
        lstrip_blocks=config.LSTRIP_BLOCKS,
        keep_trailing_newline=True,
    )


def _preview(source: str) -> str:
    return source[:500] + "..." if len(source) > 500 else source


class TemplateRenderer:
    """Renders SQL templates for a dialect and collects the bound arguments."""

    def __init__(
        self,
        default_dialect: Dialect | str | None = None,
        *,
        config: Settings | None = None,
    ) -> None:
        cfg = config or settings
        self._lock = threading.Lock()
        self._default_dialect = resolve_dialect(
            default_dialect if default_dialect is not None else cfg.DEFAULT_DIALECT
        )
        self._search_paths: list[str] = list(cfg.SEARCH_PATHS)
        self._functions: dict[str, Callable[..., Any]] = {}
        self._env = build_environment(cfg)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def default_dialect(self) -> Dialect:
        return self._default_dialect

    @property
    def search_paths(self) -> list[str]:
        with self._lock:
            return list(self._search_paths)

    @property
    def custom_functions(self) -> dict[str, Callable[..., Any]]:
        with self._lock:
            return dict(self._functions)

    def set_default_dialect(self, dialect: Dialect | str) -> "TemplateRenderer":
        """Dialect used when a render call passes no dialect."""
        resolved = resolve_dialect(dialect)
        with self._lock:
            self._default_dialect = resolved
        return self

    def add_search_path(self, path: str) -> "TemplateRenderer":
        """Append a directory consulted by ``render_template``."""
        with self._lock:
            self._search_paths.append(str(path))
        return self

    def set_search_paths(self, paths: Iterable[str]) -> "TemplateRenderer":
        """Replace all search paths."""
        new_paths = [str(p) for p in paths]
        with self._lock:
            self._search_paths = new_paths
        return self

    def add_function(self, name: str, fn: Callable[..., Any]) -> "TemplateRenderer":
        """Register a template function; an existing one with the same name is replaced."""
        with self._lock:
            self._functions[name] = fn
        return self

    def add_functions(
        self, functions: Mapping[str, Callable[..., Any]]
    ) -> "TemplateRenderer":
        """Register several template functions at once."""
        with self._lock:
            self._functions.update(functions)
        return self

    def _snapshot(self) -> _Snapshot:
        with self._lock:
            return _Snapshot(
                default_dialect=self._default_dialect,
                search_paths=list(self._search_paths),
                functions=dict(self._functions),
            )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        source: str,
        data: Mapping[str, Any] | None = None,
        dialect: Dialect | str | None = None,
    ) -> tuple[str, list[Any]]:
        """Render template *source* with *data*; return (sql, args)."""
        return self._render(source, data, dialect, self._snapshot())

    def render_template(
        self,
        name: str,
        data: Mapping[str, Any] | None = None,
        dialect: Dialect | str | None = None,
    ) -> tuple[str, list[Any]]:
        """Load template file *name* (direct path, then search paths) and render it."""
        snap = self._snapshot()
        source = load_template(name, snap.search_paths)
        return self._render(source, data, dialect, snap)

    def _render(
        self,
        source: str,
        data: Mapping[str, Any] | None,
        dialect: Dialect | str | None,
        snap: _Snapshot,
    ) -> tuple[str, list[Any]]:
        binder = ArgumentBinder(dialect if dialect is not None else snap.default_dialect)
        functions = {**snap.functions, **binder.functions()}
        context = self._build_context(data, functions)

        try:
            template = self._env.from_string(source, globals=functions)
        except TemplateSyntaxError as e:
            raise SQLTemplateSyntaxError(
                f"SQL template syntax error: {e} (line {e.lineno}). "
                f"Template preview:\n{_preview(source)}",
                lineno=e.lineno,
            ) from e

        try:
            sql = template.render(context)
        except InvalidIdentifierError:
            raise
        except TemplateError as e:
            raise SQLTemplateExecutionError(
                f"SQL template render error: {e}. "
                f"Available data: {sorted(context)}."
            ) from e
        except Exception as e:
            raise SQLTemplateExecutionError(
                f"SQL template function failed: {type(e).__name__}: {e}"
            ) from e

        _log.debug(
            "Rendered SQL template for %s with %d bound argument(s)",
            binder.dialect.value,
            len(binder.args),
        )
        return sql, binder.args

    @staticmethod
    def _build_context(
        data: Mapping[str, Any] | None, functions: Mapping[str, Any]
    ) -> dict[str, Any]:
        context = dict(data or {})
        collisions = sorted(key for key in context if key in functions)
        if collisions:
            raise SQLTemplateExecutionError(
                f"Data keys collide with template function names: {collisions}. "
                f"Rename the data keys or the registered functions."
            )
        return context

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def parse_parameters(self, source: str) -> list[str]:
        """Data names the template reads (undeclared variables), minus function names."""
        try:
            ast = self._env.parse(source)
        except TemplateSyntaxError as e:
            raise SQLTemplateSyntaxError(
                f"SQL template syntax error: {e} (line {e.lineno}).", lineno=e.lineno
            ) from e
        names = meta.find_undeclared_variables(ast)
        names -= set(BUILTIN_FUNCTIONS)
        names -= set(self.custom_functions)
        return sorted(names)


_DEFAULT_RENDERER: TemplateRenderer | None = None
_default_lock = threading.Lock()


def get_default_renderer() -> TemplateRenderer:
    """Return the process-wide renderer configured from ``settings``."""
    global _DEFAULT_RENDERER
    with _default_lock:
        if _DEFAULT_RENDERER is None:
            _DEFAULT_RENDERER = TemplateRenderer()
        return _DEFAULT_RENDERER


def render_sql(
    source: str,
    data: Mapping[str, Any] | None = None,
    dialect: Dialect | str | None = None,
) -> tuple[str, list[Any]]:
    """Render *source* with the default renderer."""
    return get_default_renderer().render(source, data, dialect)


def render_sql_template(
    name: str,
    data: Mapping[str, Any] | None = None,
    dialect: Dialect | str | None = None,
) -> tuple[str, list[Any]]:
    """Render template file *name* with the default renderer."""
    return get_default_renderer().render_template(name, data, dialect)


def parse_parameters(source: str) -> list[str]:
    """Data names *source* reads, as reported by the default renderer."""
    return get_default_renderer().parse_parameters(source)
