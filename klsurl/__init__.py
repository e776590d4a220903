# -*- coding: utf-8 -*-

from .url import (KlsUrl, QueryParams, QUERY_PARAMS, Applicable, NotApplicable,
                  NOT_APPLICABLE, to_kls_url, parse_kls_url)
from .archive import read_contents, extract_to_temporary_file, list_entries, ZipArchive
from .tempdir import TemporaryDirectory, set_default_temp_name
from .exceptions import (KlsUrlError, MalformedReferenceError, ArchiveError, ArchiveOpenError,
                         EntryNotFoundError, InvalidEntryNameError, ArchiveReadError)


from importlib.metadata import version, PackageNotFoundError
try:
    __version__ = version(__name__)
except PackageNotFoundError:
    # package is not installed
    pass
