# Copyright (c) 2017 Civic Knowledge. This file is licensed under the terms of the
# MIT, included in this distribution as LICENSE

"""Read and extract the entries that Kls Urls reference in JAR files.

The functions take an ``opener``, a callable that opens the archive at a path and returns
a handle with ``entry(entry_name)``, ``entries()`` and ``close()``. The default is
:py:class:`ZipArchive`, since JAR files are Zip files. Every function opens the archive
for the duration of the call and closes it before returning or raising.
"""

import logging
import zlib
from contextlib import contextmanager
from urllib.parse import quote
from zipfile import BadZipFile, ZipFile

from klsurl.exceptions import (ArchiveError, ArchiveOpenError, ArchiveReadError,
                               EntryNotFoundError, InvalidEntryNameError)
from klsurl.util import copy_flo

logger = logging.getLogger('klsurl.archive.jar')

DEFAULT_ENCODING = 'utf-8'

# Exceptions that zipfile raises when an entry can't be read, such as for a corrupt
# member or an encrypted one.
READ_ERRORS = (OSError, BadZipFile, EOFError, zlib.error, RuntimeError)


class ZipEntry(object):
    """A member of a :py:class:`ZipArchive`"""

    def __init__(self, zf, info):
        self._zf = zf
        self._info = info

    @property
    def name(self):
        return self._info.filename

    @property
    def size(self):
        return self._info.file_size

    def open(self):
        """Return a binary file-like object for the entry"""
        return self._zf.open(self._info)

    def read_all(self):
        return self._zf.read(self._info)

    def __repr__(self):
        return "<{} {}>".format(self.__class__.__name__, self.name)


class ZipArchive(object):
    """Handle on a Zip or JAR file"""

    def __init__(self, path):
        self.path = path

        try:
            self._zf = ZipFile(str(path))
        except BadZipFile as e:
            raise ArchiveOpenError("Not a zip file: '{}'".format(path), archive_path=path) from e
        except OSError as e:
            raise ArchiveOpenError("Failed to open archive '{}': {}".format(path, e), archive_path=path) from e

    def entry(self, entry_name):
        """Return the :py:class:`ZipEntry` for a path in the archive, with or without a leading
        '/', or None if there is no such entry. """

        try:
            return ZipEntry(self._zf, self._zf.getinfo(entry_name.lstrip('/')))
        except KeyError:
            return None

    def entries(self):
        """Yield the entries for real files; directories and the metadata files that
        some archivers add are skipped."""

        from os.path import basename

        for info in self._zf.infolist():

            if info.is_dir():
                continue

            # Get rid of __MACOSX and .DS_whatever
            if info.filename.startswith('__MACOSX/') or basename(info.filename).startswith('.'):
                continue

            yield ZipEntry(self._zf, info)

    def close(self):
        self._zf.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return "<{} {}>".format(self.__class__.__name__, self.path)


@contextmanager
def open_archive(url, opener=ZipArchive):
    """Open the archive that a Kls Url references, and close it on exit, however the
    block exits. """

    path = url.archive_path

    try:
        archive = opener(path)
    except ArchiveError as e:
        if e.url is None:
            e.url = url
        raise
    except (OSError, BadZipFile) as e:
        raise ArchiveOpenError("Failed to open archive '{}' for url '{}': {}".format(path, url, e),
                               archive_path=path, url=url) from e

    logger.debug("Opened archive '{}'".format(path))

    try:
        yield archive
    finally:
        archive.close()
        logger.debug("Closed archive '{}'".format(path))


def get_entry(archive, url):
    """Return the entry in an open archive that ``url`` references. """

    if url.inner_path is None:
        raise EntryNotFoundError("Url '{}' does not reference an entry in an archive".format(url),
                                 archive_path=url.archive_path, url=url)

    entry = archive.entry(url.entry_name)

    if entry is None:
        raise EntryNotFoundError("Could not find entry '{}' in archive '{}'"
                                 .format(url.entry_name, url.archive_path),
                                 archive_path=url.archive_path, url=url)

    return entry


def read_contents(url, opener=ZipArchive, encoding=None):
    """Return the text of the archive entry that ``url`` references

    :param url: A :py:class:`klsurl.url.KlsUrl` with an inner path
    :param opener: Callable that opens an archive, given its path
    :param encoding: Text encoding of the entry. Defaults to ``DEFAULT_ENCODING``
    :return: The contents of the entry, as a string
    """

    encoding = encoding or DEFAULT_ENCODING

    with open_archive(url, opener) as archive:
        entry = get_entry(archive, url)

        try:
            data = entry.read_all()
        except READ_ERRORS as e:
            raise ArchiveReadError("Failed to read '{}' from archive '{}': {}"
                                   .format(entry.name, url.archive_path, e),
                                   archive_path=url.archive_path, url=url) from e

    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise ArchiveReadError("Entry '{}' in archive '{}' is not {} text: {}"
                               .format(url.inner_path, url.archive_path, encoding, e),
                               archive_path=url.archive_path, url=url) from e


def extract_to_temporary_file(url, temp_dir, opener=ZipArchive):
    """
    Copy the archive entry that ``url`` references to a new file in ``temp_dir``.

    The file is named after the entry, with the part of the entry's file name before the
    first '.' as a prefix and the entry's own extension as a suffix.

    :param url: A :py:class:`klsurl.url.KlsUrl` with an inner path
    :param temp_dir: An object with a ``create_temp_file(prefix, suffix)`` method, such as
        a :py:class:`klsurl.tempdir.TemporaryDirectory`
    :param opener: Callable that opens an archive, given its path
    :return: Path to the extracted file
    """

    with open_archive(url, opener) as archive:
        entry = get_entry(archive, url)

        name = entry.name.rsplit('/', 1)[-1].split('.')

        if len(name) < 2:
            raise InvalidEntryNameError("Entry name '{}' in archive '{}' has no extension"
                                        .format(entry.name, url.archive_path),
                                        archive_path=url.archive_path, url=url)

        tmp_file = temp_dir.create_temp_file(name[0], '.' + name[-1])

        try:
            with entry.open() as flo, open(str(tmp_file), 'wb') as f:
                copy_flo(flo, f)
        except READ_ERRORS as e:
            raise ArchiveReadError("Failed to extract '{}' from archive '{}' to '{}': {}"
                                   .format(entry.name, url.archive_path, tmp_file, e),
                                   archive_path=url.archive_path, url=url) from e

        logger.debug("Extracted '{}' to '{}'".format(url, tmp_file))

    return tmp_file


def list_entries(url, opener=ZipArchive):
    """Return Kls Urls for the files in the archive that ``url`` references. The urls keep
    the flags of ``url``"""

    base = url.archive_locator

    with open_archive(url, opener) as archive:
        return [url.clone(base_locator='{}!/{}'.format(base, quote(e.name, safe='/$')))
                for e in archive.entries()]
