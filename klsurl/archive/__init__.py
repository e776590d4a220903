# Copyright (c) 2017 Civic Knowledge. This file is licensed under the terms of the
# MIT, included in this distribution as LICENSE

"""
Archive access for Kls Urls. The functions here open the JAR file that a Url references,
find the entry for the Url's inner path, and read it as text or extract it to a temporary
file."""


from .jar import (ZipArchive, ZipEntry, open_archive, read_contents,
                  extract_to_temporary_file, list_entries)

__all__ = ["ZipArchive", "ZipEntry", "open_archive", "read_contents",
           "extract_to_temporary_file", "list_entries"]
