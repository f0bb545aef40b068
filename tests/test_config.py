"""Unit tests for sqlrender.config (SQLRENDER_* environment settings)."""

import pytest

from sqlrender.config import Settings
from sqlrender.dialects import Dialect


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DEFAULT_DIALECT", "SEARCH_PATHS", "STRICT_UNDEFINED"):
            monkeypatch.delenv(f"SQLRENDER_{name}", raising=False)
        s = Settings(_env_file=None)
        assert s.DEFAULT_DIALECT is Dialect.POSTGRES
        assert s.SEARCH_PATHS == []
        assert s.STRICT_UNDEFINED is True

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SQLRENDER_DEFAULT_DIALECT", "sqlserver")
        monkeypatch.setenv("SQLRENDER_SEARCH_PATHS", '["sql", "/opt/sql"]')
        monkeypatch.setenv("SQLRENDER_STRICT_UNDEFINED", "false")
        s = Settings(_env_file=None)
        assert s.DEFAULT_DIALECT is Dialect.SQLSERVER
        assert s.SEARCH_PATHS == ["sql", "/opt/sql"]
        assert s.STRICT_UNDEFINED is False

    def test_invalid_dialect_rejected(self, monkeypatch):
        monkeypatch.setenv("SQLRENDER_DEFAULT_DIALECT", "db2")
        with pytest.raises(ValueError):
            Settings(_env_file=None)
