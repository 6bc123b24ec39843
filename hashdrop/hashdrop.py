"""Module for HashDrop class."""

import hashlib
import logging
import os
import tempfile
from collections import namedtuple
from contextlib import closing, contextmanager
from typing import Iterable, Iterator, Optional, Union
from urllib.parse import urljoin

from fs import errors
from fs.base import FS
from fs.error_tools import convert_os_errors
from fs.osfs import OSFS

from . import utils as u
from .classify import UNKNOWN, infer_extension
from .exceptions import (
    ClassificationError,
    NameExhaustedError,
    NamingError,
    PublishError,
    StagingError,
    URLConstructionError,
)


logger = logging.getLogger(__name__)

#: Shortest prefix of a digest ever used as a name.
MIN_LENGTH = 2


class HashDrop(object):
    """Content addressed upload store. Files are published under the shortest
    prefix of their content hash that isn't already taken in :attr:`root`.

    Attributes:
        root: Directory path, or an OS backed filesystem, used as both
            staging area and final store. It must already exist.
        base_url (str): URL that published names are resolved against to
            build retrieval links.
        min_length (int, optional): Shortest digest prefix to try. Defaults
            to ``2``, which is also the lowest value accepted.
        algorithm (str): Hash algorithm to use when computing file hash.
            Algorithm should be available in ``hashlib`` module. Defaults to
            ``'sha256'``.
        fmode (int, optional): File mode permission to set on uploaded files.
            Defaults to ``0o644`` so a static file server can read them.
    """

    def __init__(self,
                 root: Union[FS, str],
                 base_url: str,
                 min_length: int = MIN_LENGTH,
                 algorithm: str = "sha256",
                 fmode: Optional[int] = 0o644):
        if min_length < MIN_LENGTH:
            raise ValueError(
                "min_length must be at least {0}, got {1}".format(
                    MIN_LENGTH, min_length))

        if algorithm not in hashlib.algorithms_available:
            raise ValueError("Unknown hash algorithm: {0}".format(algorithm))

        self.fs = OSFS(root) if isinstance(root, str) else root
        self.root = self.fs.getsyspath("/")
        self.base_url = base_url
        self.min_length = min_length
        self.algorithm = algorithm
        self.fmode = fmode

    def stage(self) -> "StagedFile":
        """Create a uniquely named temporary file inside :attr:`root` and
        return it as a :class:`StagedFile`. The caller must pass it to
        :meth:`discard` once done with it, published or not.
        """
        try:
            tmp = tempfile.NamedTemporaryFile(dir=self.root,
                                              prefix=u.STAGING_PREFIX,
                                              delete=False)
        except OSError as exc:
            raise StagingError("error writing temporary file to disk") from exc

        staged = StagedFile(tmp)

        if self.fmode is not None:
            try:
                os.chmod(tmp.name, self.fmode)
            except OSError as exc:
                self.discard(staged)
                raise StagingError(
                    "error writing temporary file to disk") from exc

        return staged

    def discard(self, staged: "StagedFile") -> None:
        """Close and remove a staged file, published or not. A file that's
        already gone is fine. Other failures are logged, not raised.
        """
        staged.close()

        try:
            self.fs.remove(staged.name)
        except errors.ResourceNotFound:
            pass
        except errors.FSError as exc:
            logger.warning("could not remove staged file %s: %s",
                           staged.name, exc)

    @contextmanager
    def staging(self) -> Iterator["StagedFile"]:
        """Context manager around :meth:`stage` and :meth:`discard`. The
        temporary file is removed on exit, whether or not it was published.
        """
        staged = self.stage()

        try:
            yield staged
        except OSError as exc:
            raise StagingError() from exc
        finally:
            self.discard(staged)

    def put(self, content) -> "HashAddress":
        """Store `content` and publish it under its shortest free name.

        Args:
            content: Bytes, a readable binary object or an iterable of byte
                chunks.

        Returns:
            The published file's hash address.
        """
        if isinstance(content, (bytes, bytearray)):
            content = [content]
        elif hasattr(content, "read"):
            content = u.Stream(content)

        with self.staging() as staged:
            try:
                for data in content:
                    staged.write(data)
            finally:
                if isinstance(content, u.Stream):
                    content.close()

            return self.commit(staged)

    def commit(self, staged: "StagedFile") -> "HashAddress":
        """Hash, classify and publish a fully written :class:`StagedFile`."""
        staged.close()

        try:
            with closing(u.Stream(staged.path)) as stream:
                digest = u.computehash(stream, self.algorithm)
        except OSError as exc:
            raise StagingError("error hashing file") from exc

        try:
            extension = infer_extension(staged.path)
        except OSError as exc:
            raise ClassificationError() from exc

        if extension == UNKNOWN:
            raise ClassificationError() from ValueError(
                "no known signature matched")

        name = self.claim(staged.path, digest, extension)

        return HashAddress(name, digest, extension, self.url_for(name),
                           self.root)

    def resolve(self,
                digest: str,
                extension: str,
                start: Optional[int] = None) -> str:
        """Return the shortest name built from a prefix of `digest` (at least
        `start` characters) that doesn't exist yet in :attr:`root`.

        Only a missing resource counts as free; any other failure to inspect
        the directory is raised as :class:`NamingError`.

        Raises:
            NameExhaustedError: If even the full digest is already taken.
        """
        start = self.min_length if start is None else start
        if start < MIN_LENGTH:
            raise ValueError(
                "start must be at least {0}, got {1}".format(MIN_LENGTH, start))

        for name in u.truncations(digest, extension, start):
            try:
                self.fs.getinfo(name)
            except errors.ResourceNotFound:
                return name
            except errors.FSError as exc:
                raise NamingError() from exc

        raise NameExhaustedError() from FileExistsError(digest)

    def claim(self, path: str, digest: str, extension: str) -> str:
        """Publish the file at `path` under the shortest free name derived from
        `digest` and return that name.

        Each candidate is claimed with a hard link, which fails instead of
        replacing an existing file, so concurrent uploads can never overwrite
        each other and the file appears under its name fully written.
        """
        for name in u.truncations(digest, extension, self.min_length):
            target = os.path.join(self.root, name)

            try:
                with convert_os_errors("link", name):
                    os.link(path, target)
            except errors.FileExists:
                continue
            except errors.FSError as exc:
                raise PublishError() from exc

            return name

        raise NameExhaustedError() from FileExistsError(digest)

    def url_for(self, name: str) -> str:
        """Return the retrieval URL of a published name."""
        try:
            return urljoin(self.base_url, "./" + name)
        except ValueError as exc:
            raise URLConstructionError() from exc

    def open(self, name: str, mode: str = "rb"):
        """Return an open file object for a published name.

        Raises:
            IOError: If the name isn't a published file.
        """
        if not self.exists(name):
            raise IOError("Could not locate file: {0}".format(name))

        return self.fs.open(name, mode)

    def files(self) -> Iterable[str]:
        """Return generator that yields published file names, skipping uploads
        still in progress.
        """
        for info in self.fs.scandir("/"):
            if info.is_file and not u.is_staging_name(info.name):
                yield info.name

    def count(self) -> int:
        """Return count of the number of published files."""
        return sum(1 for _ in self.files())

    def exists(self, name: str) -> bool:
        """Check whether a published file exists under `name`."""
        return not u.is_staging_name(name) and self.fs.isfile(name)

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def __iter__(self) -> Iterable[str]:
        return self.files()

    def __len__(self) -> int:
        return self.count()


class StagedFile(object):
    """Temporary file holding one upload until it's published."""

    def __init__(self, fileobj):
        self._obj = fileobj
        self.path = fileobj.name

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def write(self, data: bytes) -> int:
        try:
            return self._obj.write(data)
        except OSError as exc:
            raise StagingError() from exc

    def close(self) -> None:
        if not self._obj.closed:
            self._obj.close()

    @property
    def closed(self) -> bool:
        return self._obj.closed


class HashAddress(namedtuple("HashAddress",
                             ["name", "digest", "extension", "url", "root"])):
    """File address containing the published name, content hash, extension,
    retrieval URL and the store root it lives in.
    """

    @property
    def abspath(self) -> str:
        return os.path.join(self.root, self.name)
