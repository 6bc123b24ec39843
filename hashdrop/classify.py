# -*- coding: utf-8 -*-
"""Infer a file extension from file content.

Only the leading bytes of the file are inspected, using the signature tables of
:mod:`filetype`. Client-supplied names and content types are never consulted.
"""

import logging

import filetype


logger = logging.getLogger(__name__)

#: Returned when no known signature matches the content.
UNKNOWN = "unknown"


def infer_extension(path: str) -> str:
    """Return the lowercase extension matching the content at `path`, or
    :data:`UNKNOWN` if the type isn't recognized.

    Raises:
        OSError: If the file can't be read.
    """
    kind = filetype.guess(path)

    if kind is None:
        return UNKNOWN

    logger.debug("classified %s as %s (%s)", path, kind.extension, kind.mime)
    return kind.extension.lower()
