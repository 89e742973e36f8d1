"""Editor URI and path helpers."""

from __future__ import annotations

import os
import sys
from typing import Any
from urllib.parse import unquote, urlparse

from vctx.config.constants import FILE_URI_PREFIX


def file_uri_to_path(uri: str) -> str | None:
    """Convert a ``file://`` URI to a local path.

    Returns None for remote, untitled and other non-file URIs.
    """
    if not uri.startswith(FILE_URI_PREFIX):
        return None
    path = unquote(urlparse(uri).path)
    # file:///c%3A/Users/... -> c:/Users/...
    if sys.platform == "win32" and len(path) > 2 and path[0] == "/" and path[2] == ":":
        path = path[1:]
    return path or None


def path_key(path: str, pathmod: Any = os.path) -> str:
    """Comparison key for a local path.

    Tab paths come from ``fsPath`` while selection paths are decoded from
    URIs; on Windows these differ in drive-letter case and separators.
    """
    return pathmod.normcase(pathmod.normpath(path))
