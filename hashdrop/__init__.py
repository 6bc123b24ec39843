# -*- coding: utf-8 -*-
"""HashDrop is a content-addressed file upload service. Clients POST a blob,
it is saved into a shared directory under the shortest prefix of its hash that
is not taken yet, and a public URL for that file is returned.

Typical use cases for this kind of system are ones where:

- Files are written once and never change (e.g. screenshots, pastes).
- Short, stable links are wanted without a database.
- The directory is served as-is by a static file server.
"""

from .__meta__ import (
    __title__,
    __summary__,
    __version__,
    __author__,
    __license__,
)

from .exceptions import (
    UploadError,
    StagingError,
    ClassificationError,
    NamingError,
    NameExhaustedError,
    PublishError,
    URLConstructionError,
)
from .hashdrop import HashDrop, HashAddress, StagedFile


__all__ = (
    "HashDrop",
    "HashAddress",
    "StagedFile",
    "UploadError",
    "StagingError",
    "ClassificationError",
    "NamingError",
    "NameExhaustedError",
    "PublishError",
    "URLConstructionError",
)
