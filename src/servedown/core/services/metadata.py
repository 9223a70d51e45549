from __future__ import annotations

"""
Metadata Header Parser.

Turns the raw text of a content file's metadata header into a key/value
mapping using YAML.
"""

import logging
from typing import Any, Dict

import yaml

from servedown.domain.errors import ParseError

logger = logging.getLogger(__name__)


def parse_metadata(header_text: str) -> Dict[str, Any]:
    """
    Parse a YAML metadata header.

    Args:
        header_text: Raw header lines joined together, fences excluded.

    Returns:
        Dict[str, Any]: Parsed metadata; an empty document yields {}.

    Raises:
        ParseError: If the YAML is malformed or is not a mapping.
    """
    try:
        data = yaml.safe_load(header_text)
    except yaml.YAMLError as e:
        logger.debug(f"Metadata header rejected by YAML parser: {e}")
        raise ParseError(f"Malformed metadata header: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ParseError(
            f"Metadata header must be a mapping, received {type(data).__name__}."
        )

    return data
