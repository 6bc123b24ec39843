# -*- coding: utf-8 -*-
"""Upload failures, each carrying the message shown to the client and the
HTTP status it maps to. The underlying error is chained as ``__cause__``.
"""


class UploadError(Exception):
    """Base class for failures that end an upload request."""

    status_code = 500
    message = "internal error"

    def __init__(self, message=None, status_code=None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class StagingError(UploadError):
    """The temporary file could not be created or written."""

    message = "error writing uploaded file to disk"


class ClassificationError(UploadError):
    """The uploaded content is not a recognized file type."""

    status_code = 400
    message = "failed to infer file type"


class NamingError(UploadError):
    """Probing the directory for a free name failed."""

    message = "error generating filename for uploaded file"


class NameExhaustedError(NamingError):
    """Every prefix of the digest, the full digest included, is taken."""


class PublishError(UploadError):
    """The staged file could not be moved to its published name."""

    message = "error moving temporary file to FS_DEST_DIR"


class URLConstructionError(UploadError):
    message = "internal error constructing file URL"
