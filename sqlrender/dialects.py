"""
SQL dialects: placeholder and identifier-quoting conventions per engine.

Dialects without a dedicated rule fall back to the ``?`` marker and backtick
quoting, so adding a member never changes the behavior of existing ones.
"""

from enum import Enum

from sqlrender.errors import UnsupportedDialectError


class Dialect(str, Enum):
    """Supported database engines (postgres, mysql, sqlite, sqlserver, snowflake, oracle)."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    SQLSERVER = "sqlserver"
    SNOWFLAKE = "snowflake"
    ORACLE = "oracle"


def resolve_dialect(dialect: Dialect | str) -> Dialect:
    """Return *dialect* as a ``Dialect``; accepts the enum or its string value."""
    if isinstance(dialect, Dialect):
        return dialect
    try:
        return Dialect(str(dialect).strip().lower())
    except ValueError as e:
        supported = ", ".join(d.value for d in Dialect)
        raise UnsupportedDialectError(
            f"Unsupported dialect: {dialect!r}. Supported: {supported}."
        ) from e


def placeholder(dialect: Dialect, position: int) -> str:
    """Placeholder text for the 1-based *position* of a bound value."""
    if dialect == Dialect.POSTGRES:
        return f"${position}"
    if dialect == Dialect.SQLSERVER:
        return f"@p{position}"
    if dialect == Dialect.ORACLE:
        return f":{position}"
    return "?"  # MySQL, SQLite, Snowflake


def quote_identifier(dialect: Dialect, segment: str) -> str:
    """Quote a single (unqualified) identifier segment."""
    if dialect in (Dialect.POSTGRES, Dialect.ORACLE):
        return f'"{segment}"'
    if dialect == Dialect.SQLSERVER:
        return f"[{segment}]"
    return f"`{segment}`"  # MySQL, SQLite, Snowflake
