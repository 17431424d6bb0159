# SPDX-License-Identifier: MIT
"""Schema source locations.

A schema input can live in one of three places:

- LocalFile: a plain file on disk.
- ArchiveEntry: an entry packaged inside a zip/jar archive, addressed
  as ``jar:file:/path/to/a.jar!/inner/path.xsd``.
- RemoteResource: anything else reachable through a URL.

Every variant answers the same question, "when were you last modified?",
either with a timestamp, with None when the location cannot tell, or by
raising when the location cannot be reached at all. Callers never need to
look at locator schemes themselves; source_from_locator() is the only
place that does.
"""

from __future__ import annotations

import email.utils
import io
import os
import urllib.parse
import urllib.request
import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from schemagen.core.errors import LocatorResolutionError
from schemagen.util.files import relativize

# Separator between the archive locator and the entry path.
ARCHIVE_SEPARATOR = "!"

ARCHIVE_SCHEMES = ("jar", "zip")


class SchemaSource(ABC):
    """Base class for schema source locations."""

    @property
    @abstractmethod
    def locator(self) -> str:
        """Full locator string (a URL) for this source."""
        ...

    @abstractmethod
    def last_modified(self, timeout: float | None = None) -> float | None:
        """Return the modification time in seconds since the epoch.

        Args:
            timeout: Optional timeout in seconds for blocking probes.

        Returns:
            The timestamp, or None if the location reports no
            modification time.

        Raises:
            OSError: If the location cannot be reached.
        """
        ...

    @abstractmethod
    def open(self, timeout: float | None = None) -> BinaryIO:
        """Open the source content as a binary stream."""
        ...

    @abstractmethod
    def file_name(self) -> str:
        """Return the base file name of this source.

        Raises:
            LocatorResolutionError: If no file name can be derived.
        """
        ...

    def to_argument(self, base_dir: Path | str | None = None) -> str:
        """Render this source as a generator command-line token."""
        return self.locator

    def __str__(self) -> str:
        return self.locator


@dataclass(frozen=True)
class LocalFile(SchemaSource):
    """A schema file on the local filesystem."""

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @property
    def locator(self) -> str:
        return Path(os.path.abspath(self.path)).as_uri()

    def last_modified(self, timeout: float | None = None) -> float | None:
        return os.stat(self.path).st_mtime

    def open(self, timeout: float | None = None) -> BinaryIO:
        return open(self.path, "rb")

    def file_name(self) -> str:
        return self.path.name

    def to_argument(self, base_dir: Path | str | None = None) -> str:
        # Shorten the argument where possible
        return relativize(self.path, base_dir)


@dataclass(frozen=True)
class ArchiveEntry(SchemaSource):
    """A schema packaged inside a zip or jar archive.

    The reported modification time is that of the archive file itself;
    connecting to the entry only confirms that it exists.
    """

    archive_path: Path
    inner_path: str
    scheme: str = "jar"

    def __post_init__(self) -> None:
        object.__setattr__(self, "archive_path", Path(self.archive_path))
        object.__setattr__(self, "inner_path", self.inner_path.lstrip("/"))

    @property
    def locator(self) -> str:
        archive_uri = Path(os.path.abspath(self.archive_path)).as_uri()
        return f"{self.scheme}:{archive_uri}{ARCHIVE_SEPARATOR}/{self.inner_path}"

    def _read_entry(self, read: bool) -> bytes:
        return _read_zip_entry(self.archive_path, self.inner_path, read=read)

    def last_modified(self, timeout: float | None = None) -> float | None:
        self._read_entry(read=False)
        return os.stat(self.archive_path).st_mtime

    def open(self, timeout: float | None = None) -> BinaryIO:
        return io.BytesIO(self._read_entry(read=True))

    def file_name(self) -> str:
        # jar:file:/path/to/aJar.jar!/some/path/xsd/aResource.xsd
        locator = self.locator
        index = locator.find(ARCHIVE_SEPARATOR)
        if index == -1:
            raise LocatorResolutionError(locator, f"lacks a '{ARCHIVE_SEPARATOR}'")
        name = PurePosixPath(locator[index + 1 :]).name
        if not name:
            raise LocatorResolutionError(locator, "entry path has no file name")
        return name


@dataclass(frozen=True)
class RemoteResource(SchemaSource):
    """A schema reachable through a URL, typically over HTTP(S).

    Modification time comes from the Last-Modified header of a HEAD
    request. The response is always closed after the probe.

    An archive locator whose archive is itself remote
    (``jar:https://host/a.jar!/b.xsd``) is kept verbatim. Its timestamp
    is that of the remote archive, and the entry is read from a
    downloaded copy.
    """

    uri: str

    @property
    def locator(self) -> str:
        return self.uri

    def _archive_parts(self) -> tuple[str, str] | None:
        """Split a remote archive locator into (archive URL, entry path)."""
        scheme, _, rest = self.uri.partition(":")
        if scheme.lower() not in ARCHIVE_SCHEMES:
            return None
        archive, sep, entry = rest.partition(ARCHIVE_SEPARATOR)
        if not sep:
            return None
        return archive, entry.lstrip("/")

    def last_modified(self, timeout: float | None = None) -> float | None:
        parts = self._archive_parts()
        url = parts[0] if parts else self.uri
        request = urllib.request.Request(url, method="HEAD")
        with urllib.request.urlopen(request, timeout=timeout) as response:
            header = response.headers.get("Last-Modified")
        if not header:
            return None
        try:
            return email.utils.parsedate_to_datetime(header).timestamp()
        except (TypeError, ValueError):
            return None

    def open(self, timeout: float | None = None) -> BinaryIO:
        parts = self._archive_parts()
        if parts is None:
            response: BinaryIO = urllib.request.urlopen(self.uri, timeout=timeout)
            return response

        archive_url, entry = parts
        with urllib.request.urlopen(archive_url, timeout=timeout) as response:
            data = response.read()
        return io.BytesIO(_read_zip_entry(io.BytesIO(data), entry, label=archive_url))

    def file_name(self) -> str:
        parts = self._archive_parts()
        if parts is not None:
            name = PurePosixPath(parts[1]).name
            if name:
                return name
        raise LocatorResolutionError(self.uri, "could not extract a file name")


@dataclass(frozen=True)
class BindingFile:
    """A local binding customization file (.xjb)."""

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    def last_modified(self) -> float:
        return os.stat(self.path).st_mtime


def source_from_locator(locator: str | Path) -> SchemaSource:
    """Parse a path or locator string into a SchemaSource.

    Args:
        locator: A filesystem path, a ``file:`` URL, an archive locator
            (``jar:file:/a.jar!/b.xsd``) or any other URL.

    Returns:
        The matching SchemaSource variant.

    Raises:
        LocatorResolutionError: If an archive locator is malformed.

    Examples:
        >>> source_from_locator("schemas/a.xsd")
        LocalFile(path=PosixPath('schemas/a.xsd'))
        >>> source_from_locator("https://example.com/a.xsd")
        RemoteResource(uri='https://example.com/a.xsd')
    """
    if isinstance(locator, Path):
        return LocalFile(locator)

    scheme = urllib.parse.urlsplit(locator).scheme.lower()

    # No scheme, or a Windows drive letter
    if len(scheme) <= 1:
        return LocalFile(Path(locator))

    if scheme == "file":
        return LocalFile(_path_from_file_url(locator))

    if scheme in ARCHIVE_SCHEMES:
        inner = locator[len(scheme) + 1 :]
        archive, sep, entry = inner.partition(ARCHIVE_SEPARATOR)
        if not sep:
            raise LocatorResolutionError(locator, f"lacks a '{ARCHIVE_SEPARATOR}'")
        if not entry.strip("/"):
            raise LocatorResolutionError(locator, "entry path is empty")
        archive_scheme = urllib.parse.urlsplit(archive).scheme.lower()
        if archive_scheme == "file":
            archive_path = _path_from_file_url(archive)
        elif len(archive_scheme) <= 1:
            archive_path = Path(archive)
        else:
            # Remote archive, keep the caller's locator as is
            return RemoteResource(locator)
        return ArchiveEntry(archive_path, entry, scheme=scheme)

    return RemoteResource(locator)


def _read_zip_entry(
    archive: Path | BinaryIO, inner_path: str, *, read: bool = True, label: str = ""
) -> bytes:
    """Read one entry from a zip archive, or just check that it exists."""
    label = label or str(archive)
    try:
        with zipfile.ZipFile(archive) as zf:
            info = zf.getinfo(inner_path)
            return zf.read(info) if read else b""
    except KeyError:
        raise FileNotFoundError(f"entry {inner_path} not found in {label}") from None
    except zipfile.BadZipFile as e:
        raise OSError(f"not a readable archive: {label}") from e


def _path_from_file_url(url: str) -> Path:
    parts = urllib.parse.urlsplit(url)
    return Path(urllib.request.url2pathname(parts.path))
