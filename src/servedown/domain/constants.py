from __future__ import annotations

"""
Domain Constants.

Centralizes the content file format markers and the default behavior
values shared by directory nodes and repositories.
"""

from typing import Final, List

# -----------------------------------------------------------------------------
# CONTENT FILE FORMAT
# -----------------------------------------------------------------------------

# A line consisting solely of this token opens or closes the metadata header
METADATA_FENCE: Final[str] = "````"

FILE_ENCODING: Final[str] = "utf-8"

# Separator used for every root-relative path and URL segment
PATH_SEPARATOR: Final[str] = "/"

# -----------------------------------------------------------------------------
# BEHAVIOR DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_ALLOW_INDEX: Final[bool] = True
DEFAULT_INDEX_NAME: Final[str] = "index"
DEFAULT_HIDDEN_FILE_PREFIXES: Final[List[str]] = ["_"]
DEFAULT_FILE_EXTENSIONS: Final[List[str]] = ["markdown", "md", "textile", "txt"]
DEFAULT_CONFIG_CASCADE_WHITELIST: Final[List[str]] = []

BEHAVIOR_KEYS: Final[tuple] = (
    "allow_index",
    "hidden_file_prefixes",
    "index_name",
    "file_extensions",
    "config_cascade_whitelist",
)
