"""
Exceptions raised while rendering SQL templates.

``SQLRenderError`` covers every recoverable failure (bad template, bad data,
missing file). ``InvalidIdentifierError`` is deliberately outside that family:
it marks a template-authoring bug and always aborts the render.
"""


class SQLRenderError(Exception):
    """Base class for recoverable rendering failures."""

    pass


class UnsupportedDialectError(SQLRenderError, ValueError):
    """Raised when a dialect name does not match any ``Dialect``."""

    pass


class SQLTemplateSyntaxError(SQLRenderError):
    """Raised when the template source cannot be parsed."""

    def __init__(self, message: str, lineno: int | None = None) -> None:
        super().__init__(message)
        self.lineno = lineno


class SQLTemplateExecutionError(SQLRenderError):
    """Raised when expanding a parsed template fails (missing data, failing function)."""

    pass


class TemplateNotFoundError(SQLRenderError):
    """Raised when a named template is neither a direct path nor in any search path."""

    def __init__(self, name: str, search_paths: list[str]) -> None:
        super().__init__(
            f"Template {name!r} not found in search paths: {search_paths}"
        )
        self.name = name
        self.search_paths = list(search_paths)


class TemplateReadError(SQLRenderError):
    """Raised when a resolved template file cannot be read."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Template failed to read {path!r}: {cause}")
        self.path = path


class InvalidIdentifierError(RuntimeError):
    """Raised by ``identifier()`` for names outside ``[A-Za-z0-9._]``.

    Never wrapped by the renderer; the render is aborted and no SQL or
    arguments are returned.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Invalid SQL identifier: {identifier!r}")
        self.identifier = identifier
