from __future__ import annotations

"""
Resolution Error Taxonomy.

Construction failures (InvalidPath, InvalidIndex) signal misuse and always
propagate. Lookups that the caller asserted must exist raise NotFound, while
single-name probes report absence as a plain None/False result instead.
"""


class ServedownError(Exception):
    """Base class for every error raised while resolving content."""


class InvalidPath(ServedownError, ValueError):
    """A content node was built over a directory or a missing file."""


class InvalidIndex(ServedownError, ValueError):
    """A directory node was built over a file that is not a usable index."""


class NotFound(ServedownError, LookupError):
    """A fully-qualified item lookup references a path that does not exist."""


class OutOfBounds(ServedownError, ValueError):
    """A requested path resolves outside the repository root."""


class ParseError(ServedownError, ValueError):
    """The metadata header of a content file is malformed."""
