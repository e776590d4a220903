# Copyright (c) 2017 Civic Knowledge. This file is licensed under the terms of the
# MIT, included in this distribution as LICENSE

""" """

import re

# Characters that can never appear unescaped in a URI
_ILLEGAL_URI_CHARS = re.compile(r'[\s\x00-\x1f\x7f"<>\\^`{|}]')
_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')
_SCHEME = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')


def path2url(path):
    "Convert a pathname to a file URL"

    import pathlib

    return pathlib.Path(path).absolute().as_uri()


def parse_file_to_uri(url):
    """If this is a filesystem path object, return it as a file URI, otherwise, return
    the string form of the identifier"""
    import pathlib

    if isinstance(url, pathlib.PurePath):
        if url.is_absolute():
            return url.as_uri()
        else:
            return path2url(url)

    return str(url)


def split_scheme(url):
    """Split an identifier into a (scheme, scheme_specific_part) tuple. The scheme is None if
    the identifier does not have one."""

    scheme, sep, rest = url.partition(':')

    if not sep or not _SCHEME.match(scheme):
        return None, url

    return scheme, rest


def check_uri_syntax(url):
    """Return a description of the first syntax problem in ``url``, or None if the
    identifier is well formed enough to address an archive entry."""

    if not url:
        return 'identifier is empty'

    m = _ILLEGAL_URI_CHARS.search(url)
    if m:
        return 'illegal character {!r} at index {}'.format(m.group(0), m.start())

    m = _BAD_ESCAPE.search(url)
    if m:
        return 'malformed escape at index {}'.format(m.start())

    scheme, sep, rest = url.partition(':')

    if sep and not scheme:
        return 'expected scheme name at index 0'

    if sep and _SCHEME.match(scheme) and not rest.split('#', 1)[0]:
        return 'expected scheme-specific part at index {}'.format(len(scheme) + 1)

    return None


def partition_around_last(s, sep):
    """Split ``s`` around the last occurrence of ``sep``, keeping the separator on the left side.
    If ``sep`` does not occur, the left side is empty"""

    i = s.rfind(sep)

    return s[:i + len(sep)], s[i + len(sep):]


def unmangle_windows_path(path):
    """Remove the leading slash from a URI path that holds a Windows drive letter"""
    if re.match("/[a-zA-Z]:", path):
        return path.lstrip('/')
    else:
        return path


def file_ext(v):
    """Return the extension of a file name, without the leading '.', or None if
    the name has no '.' in it. """

    parts = v.split('.')

    if len(parts) > 1:
        return parts[-1]
    else:
        return None


def copy_flo(input_, output, buffer_size=64 * 1024):
    """ Copy a file-like-object to another file-like object"""

    while True:
        buf = input_.read(buffer_size)
        if not buf:
            break
        output.write(buf)
