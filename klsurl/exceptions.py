# -*- coding: utf-8 -*-

"""
Copyright (c) 2017 Civic Knowledge. This file is licensed under the terms of the
MIT License, included in this distribution as LICENSE
"""

class KlsUrlError(Exception):
    pass

class MalformedReferenceError(KlsUrlError, ValueError):
    """The identifier syntax itself is invalid"""
    pass

class ArchiveError(KlsUrlError):
    """Errors from locating or reading an entry in an archive"""

    def __init__(self, message, archive_path=None, url=None):
        super().__init__(message)
        self.archive_path = archive_path
        self.url = url

class ArchiveOpenError(ArchiveError):
    pass

class EntryNotFoundError(ArchiveError):
    pass

class InvalidEntryNameError(ArchiveError):
    """The entry name has no extension to split on"""
    pass

class ArchiveReadError(ArchiveError, IOError):
    pass
