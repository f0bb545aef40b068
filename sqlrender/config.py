"""
Settings for sqlrender, read from ``SQLRENDER_*`` environment variables or ``.env``.

SEARCH_PATHS is a JSON list in the environment, e.g.
``SQLRENDER_SEARCH_PATHS='["sql", "/opt/app/sql"]'``.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from sqlrender.dialects import Dialect


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SQLRENDER_",
        env_ignore_empty=True,
        extra="ignore",
    )

    DEFAULT_DIALECT: Dialect = Dialect.POSTGRES
    SEARCH_PATHS: list[str] = []

    # Missing data names fail the render; when False they render as "" and bind as NULL
    STRICT_UNDEFINED: bool = True

    # Jinja2 block whitespace control for multi-line templates
    TRIM_BLOCKS: bool = True
    LSTRIP_BLOCKS: bool = True


settings = Settings()
