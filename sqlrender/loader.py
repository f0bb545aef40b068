"""
Template source resolution: direct path first, then each search path in order.

Filesystem access is limited to existence checks and whole-file reads.
"""

import logging
import os

from sqlrender.errors import TemplateNotFoundError, TemplateReadError

_log = logging.getLogger(__name__)


def find_template_file(name: str, search_paths: list[str]) -> str:
    """
    Return the path of template *name*.

    An existing entry at *name* itself wins; otherwise the first
    ``<search_path>/<name>`` that exists, in the order the paths were added.
    """
    if os.path.exists(name):
        return name
    for directory in search_paths:
        candidate = os.path.join(directory, name)
        if os.path.exists(candidate):
            return candidate
    raise TemplateNotFoundError(name, search_paths)


def read_template(path: str) -> str:
    """Read the whole template file at *path* as UTF-8."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateReadError(path, e) from e


def load_template(name: str, search_paths: list[str]) -> str:
    """Resolve *name* against *search_paths* and return its source."""
    path = find_template_file(name, search_paths)
    _log.debug("Resolved template %r to %s", name, path)
    return read_template(path)
