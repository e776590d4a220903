# Copyright (c) 2017 Civic Knowledge. This file is licensed under the terms of the
# MIT, included in this distribution as LICENSE

"""Temporary directories for files extracted from archives. The directory is a PyFilesystem
:py:class:`fs.tempfs.TempFS`; whoever creates it owns its lifetime, and the files in it are
removed when it is closed, unless it was created with ``auto_clean=False``."""

import logging
import os
import secrets

logger = logging.getLogger('klsurl.tempdir')

DEFAULT_TEMP_NAME = 'klsurl'

# Environment variable for the parent directory of temporary directories
TEMP_DIR_ENV_VAR = 'KLSURL_TEMP_DIR'


def get_temp_name(temp_name=None):
    from klsurl.exceptions import KlsUrlError

    tn = temp_name or DEFAULT_TEMP_NAME

    if not tn:
        raise KlsUrlError("Must either set the default temp name or create directories with a name")

    return tn


def set_default_temp_name(temp_name):
    global DEFAULT_TEMP_NAME
    DEFAULT_TEMP_NAME = temp_name


class TemporaryDirectory(object):
    """A temporary directory that can create uniquely named files. """

    def __init__(self, temp_name=None, temp_dir=None, auto_clean=True):
        """
        :param temp_name: Identifier included in the directory name
        :param temp_dir: Parent directory. Defaults to the value of the ``KLSURL_TEMP_DIR``
            environment variable, or the system temp directory
        :param auto_clean: If True, delete the directory when it is closed.
        """
        from fs.tempfs import TempFS
        from fs.errors import CreateFailed

        temp_dir = temp_dir or os.getenv(TEMP_DIR_ENV_VAR, None)

        try:
            self._fs = TempFS(identifier=get_temp_name(temp_name), temp_dir=temp_dir,
                              auto_clean=auto_clean)
        except CreateFailed as e:
            raise CreateFailed("Failed to create temporary directory in '{}': {} ".format(temp_dir, e))

        self._path = self._fs.getsyspath('/')

        logger.debug("Created temporary directory '{}'".format(self.path))

    @property
    def fs(self):
        return self._fs

    @property
    def path(self):
        """The directory, as a :py:class:`pathlib.Path`"""
        from pathlib import Path
        return Path(self._path)

    def create_temp_file(self, prefix, suffix):
        """Create a new empty file with a name that starts with ``prefix`` and ends with
        ``suffix``, and return its path"""
        from pathlib import Path

        while True:
            name = '{}{}{}'.format(prefix, secrets.token_hex(8), suffix)
            if self._fs.create(name):
                break

        return Path(self._fs.getsyspath(name))

    def close(self):
        logger.debug("Closing temporary directory '{}'".format(self.path))
        self._fs.close()

    @property
    def closed(self):
        return self._fs.isclosed()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return "<{} {}>".format(self.__class__.__name__, self._path)
