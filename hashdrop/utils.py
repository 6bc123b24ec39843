# -*- coding: utf-8 -*-


"""
common utils for hashdrop
"""


import hashlib
import io
import os
from typing import Iterator


#: Prefix reserved for files that are still being uploaded.
STAGING_PREFIX = "tmp-upload-"


def truncate(text: str, n: int) -> str:
    """Return the first `n` code points of `text`."""
    return text[:n]


def truncations(digest: str, extension: str, start: int) -> Iterator[str]:
    """Yield candidate file names built from successively longer prefixes of
    `digest`, from `start` characters up to the full digest.
    """
    if extension.startswith(os.extsep):
        extension = extension[1:]

    for n in range(start, len(digest) + 1):
        yield truncate(digest, n) + os.extsep + extension


def is_staging_name(name: str) -> bool:
    """Return whether `name` is a temporary upload and not published content."""
    return os.path.basename(name).startswith(STAGING_PREFIX)


def computehash(stream, algorithm: str) -> str:
    """Compute the hex digest of a :class:`Stream` using `algorithm`."""
    hash = hashlib.new(algorithm)
    for data in stream:
        hash.update(data)
    return hash.hexdigest()


class Stream(object):
    """Common interface for file-like objects.

    The input `obj` can be a file-like object or a path to a file. If `obj` is
    a path to a file, then it will be opened until :meth:`close` is called.
    If `obj` is a file-like object, then it's original position will be
    restored when :meth:`close` is called instead of closing the object
    automatically.

    Successive readings of the stream is supported without having to manually
    set it's position back to ``0``.
    """

    chunk_size = 64 * 1024

    def __init__(self, obj):
        if hasattr(obj, "read"):
            pos = obj.tell()
        elif isinstance(obj, str) and os.path.isfile(obj):
            obj = io.open(obj, "rb")
            pos = None
        else:
            raise ValueError(
                "Object must be a valid file path or a readable object."
            )

        self._obj = obj
        self._pos = pos

    def __iter__(self):
        self._obj.seek(0)

        while True:
            data = self._obj.read(self.chunk_size)

            if not data:
                break

            yield data

        if self._pos is not None:
            self._obj.seek(self._pos)

    def close(self):
        """Close underlying IO object if we opened it, else return it to
        original position.
        """
        if self._pos is None:
            self._obj.close()
        else:
            self._obj.seek(self._pos)
