# Copyright (c) 2017 Civic Knowledge. This file is licensed under the terms of the
# MIT, included in this distribution as LICENSE

"""
Kls Urls identify a class or source file inside a JAR archive, or a plain file, with a
single URI that has a ``kls`` scheme. The URI is structured as:

    kls:file:///path/to/jarFile.jar!/path/to/jvmClass.class?source=true

The part between ``kls:`` and the ``?`` is the base locator, a nested URI with an optional
inner path after the first ``!``. The query holds flags, of which only the names in
:py:data:`QUERY_PARAMS` are kept.

Other file extensions for classes, such as ``.kt`` and ``.java``, are supported too, in which
case the file can be used directly, without decompiling.
"""

import logging
from collections import OrderedDict, namedtuple
from urllib.parse import unquote, urlparse

from .exceptions import MalformedReferenceError
from .util import (check_uri_syntax, file_ext, parse_file_to_uri, partition_around_last,
                   path2url, split_scheme, unmangle_windows_path)

logger = logging.getLogger('klsurl.url')

SCHEME = 'kls'
FILE_SCHEME = 'file'
COMPILED_EXTENSION = 'class'


def parse_bool(v):
    """Parse a flag value as a boolean. Anything but 'true' ( in any case ) is False """
    return str(v).lower() == 'true'


def format_bool(v):
    return 'true' if v else 'false'


# Recognized query parameters, in the order they are written, with
# a (parser, formatter, default) for each
QUERY_PARAMS = OrderedDict([
    ('source', (parse_bool, format_bool, False)),
])

QueryParams = namedtuple('QueryParams', list(QUERY_PARAMS.keys()))
QueryParams.__new__.__defaults__ = (None,) * len(QUERY_PARAMS)
QueryParams.__doc__ = """Flags of a Kls Url. A value of None means the flag is not set."""


def parse_query(query):
    """Parse a query string into a :py:class:`QueryParams`. Tokens that are not a single
    ``key=value`` pair, and keys that are not in :py:data:`QUERY_PARAMS`, are dropped."""

    values = {}

    for token in query.split('&'):
        parts = token.split('=')

        if len(parts) != 2:
            continue

        name, value = parts

        try:
            parser = QUERY_PARAMS[name][0]
        except KeyError:
            continue

        try:
            values[name] = parser(value)
        except ValueError:
            continue

    return QueryParams(**values)


def unparse_query(query):
    """Return the query string for a :py:class:`QueryParams`, with a leading '?', or
    an empty string if no flags are set. """

    parts = []
    for name, (_, formatter, _) in QUERY_PARAMS.items():
        v = getattr(query, name)
        if v is not None:
            parts.append('{}={}'.format(name, formatter(v)))

    return '?' + '&'.join(parts) if parts else ''


class NotApplicable(object):
    """Result of :py:func:`to_kls_url` for identifiers that don't address an archive entry"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return '<NotApplicable>'


NOT_APPLICABLE = NotApplicable()


class Applicable(namedtuple('Applicable', ['url'])):
    """Result of :py:func:`to_kls_url` holding the :py:class:`KlsUrl` for the identifier"""

    __slots__ = ()


def to_kls_url(u):
    """
    Convert a generic identifier to a Kls Url.

    :param u: A URI string, a :py:class:`pathlib.PurePath` or a :py:class:`KlsUrl`
    :return: ``Applicable(url)`` for ``kls:`` and ``file:`` identifiers, ``NOT_APPLICABLE``
        for everything else.
    """

    if isinstance(u, KlsUrl):
        return Applicable(u)

    u_str = parse_file_to_uri(u)

    problem = check_uri_syntax(u_str)
    if problem:
        raise MalformedReferenceError("Malformed identifier '{}': {}".format(u_str, problem))

    scheme, ssp = split_scheme(u_str)

    if scheme == SCHEME:
        return Applicable(KlsUrl(SCHEME + ':' + ssp.split('#', 1)[0]))
    elif scheme == FILE_SCHEME:
        return Applicable(KlsUrl(SCHEME + ':' + u_str))
    else:
        logger.debug("Not an archive entry identifier: '{}'".format(u_str))
        return NOT_APPLICABLE


def parse_kls_url(u_str):
    """Parse a ``kls:`` string and return a :py:class:`KlsUrl`. """

    if isinstance(u_str, KlsUrl):
        return u_str

    return KlsUrl(u_str)


class KlsUrl(object):
    """Reference to a file, or to an entry in a JAR archive.

    After construction, a KlsUrl has properties for the parts of the reference:

    - ``base_locator``. The nested URI, without the ``kls:`` scheme or the query
    - ``query``. The :py:class:`QueryParams` flags
    - ``archive_path``. The filesystem path of the archive, the text before the first ``!``
    - ``inner_path``. The path of the entry in the archive, or None
    - ``file_name`` and ``file_extension``, of the last path segment.

    KlsUrls are immutable; the ``with_*`` methods return modified copies.
    """

    __slots__ = ('_base_locator', '_query')

    def __init__(self, url=None, query=None, base_locator=None):
        """Create a new KlsUrl

        :param url: A ``kls:`` URI string
        :param query: :py:class:`QueryParams` to use instead of the ones parsed from ``url``
        :param base_locator: Nested URI to use instead of parsing ``url``

        """

        if base_locator is not None:
            if '?' in base_locator:
                raise MalformedReferenceError("Base locator can't have a query: '{}'".format(base_locator))
            parsed_base, parsed_query = base_locator, QueryParams()

        else:
            if url is None:
                raise MalformedReferenceError("Must specify either a url or a base_locator")
            parsed_base, parsed_query = self._parse(str(url))

        object.__setattr__(self, '_base_locator', parsed_base)
        object.__setattr__(self, '_query', query if query is not None else parsed_query)

    @staticmethod
    def _parse(url):

        problem = check_uri_syntax(url)
        if problem:
            raise MalformedReferenceError("Malformed identifier '{}': {}".format(url, problem))

        scheme, ssp = split_scheme(url)

        if scheme != SCHEME:
            raise MalformedReferenceError("Expected a '{}:' identifier, got '{}'".format(SCHEME, url))

        ssp = ssp.split('#', 1)[0]

        base, _, query = ssp.partition('?')

        return base, parse_query(query)

    def __setattr__(self, name, value):
        raise AttributeError("KlsUrl is immutable; can't set '{}'".format(name))

    def __delattr__(self, name):
        raise AttributeError("KlsUrl is immutable; can't delete '{}'".format(name))

    #
    # Property accessors
    #

    @property
    def base_locator(self):
        return self._base_locator

    @property
    def query(self):
        return self._query

    @property
    def file_name(self):
        return self._base_locator.rsplit('/', 1)[-1]

    @property
    def file_extension(self):
        return file_ext(self.file_name)

    @property
    def archive_locator(self):
        """The nested URI of the archive, the text of the base locator before the first '!' """
        return self._base_locator.split('!', 1)[0]

    @property
    def archive_path(self):
        """The filesystem path of the archive, or of the file, if there is no inner path. """

        loc = self.archive_locator
        scheme, rest = split_scheme(loc)

        if scheme == FILE_SCHEME:
            return unmangle_windows_path(unquote(urlparse(loc).path))
        elif scheme:
            return unquote(rest)
        else:
            return unquote(loc)

    @property
    def archive_fspath(self):
        """The archive path in a form suitable for use in a filesystem"""
        from pathlib import Path
        return Path(self.archive_path)

    @property
    def inner_path(self):
        """Path of the entry in the archive, or None if the url does not have a '!' """

        parts = self._base_locator.split('!')

        if len(parts) < 2:
            return None

        return parts[1]

    @property
    def entry_name(self):
        """The inner path as an entry name in a zip file: percent-decoded, with no leading '/' """

        if self.inner_path is None:
            return None

        return unquote(self.inner_path).lstrip('/')

    @property
    def source(self):
        return self.get_flag('source')

    @property
    def is_compiled(self):
        return self.file_extension == COMPILED_EXTENSION

    def get_flag(self, name):
        """Return the value of a flag, or its default if it is not set"""

        try:
            default = QUERY_PARAMS[name][2]
        except KeyError:
            raise ValueError("Unknown query parameter '{}'".format(name))

        v = getattr(self._query, name)

        return default if v is None else v

    #
    # Transforms
    #

    def clone(self, **kwargs):
        """
        Return a clone of this Url, possibly with the ``base_locator`` or ``query`` replaced.

        :param kwargs: ``base_locator`` or ``query``
        :return: A new KlsUrl
        """

        base_locator = kwargs.pop('base_locator', self._base_locator)
        query = kwargs.pop('query', self._query)

        if kwargs:
            raise AttributeError("Can't set attribute(s) {} on '{}' ".format(sorted(kwargs), self))

        return type(self)(base_locator=base_locator, query=query)

    def with_archive_path(self, new_path):
        """Return a copy that references the same inner path in the archive at ``new_path``"""

        inner = self.inner_path

        return self.clone(base_locator=path2url(new_path) + ('!' + inner if inner is not None else ''))

    def with_file_extension(self, new_extension):
        """Return a copy with the extension of the last path segment replaced. """

        parent, file_name = partition_around_last(self._base_locator, '/')

        new_name = '{}.{}'.format(file_name.split('.')[0], new_extension.lstrip('.'))

        return self.clone(base_locator=parent + new_name)

    def with_flag(self, name, value):
        """Return a copy with the flag ``name`` set to ``value``. String values are
        parsed with the flag's parser"""

        try:
            parser = QUERY_PARAMS[name][0]
        except KeyError:
            raise ValueError("Unknown query parameter '{}'".format(name))

        if isinstance(value, str):
            value = parser(value)
        elif value is not None:
            value = type(QUERY_PARAMS[name][2])(value)

        return self.clone(query=self._query._replace(**{name: value}))

    def with_source(self, source):
        return self.with_flag('source', source)

    def without_flags(self):
        return self.clone(query=QueryParams())

    #
    # Other support methods
    #

    def to_uri(self):
        return '{}:{}{}'.format(SCHEME, self._base_locator, unparse_query(self._query))

    def __str__(self):
        return self.to_uri()

    def __repr__(self):
        return "<{} {}>".format(self.__class__.__name__, str(self))

    def __eq__(self, other):
        if not isinstance(other, KlsUrl):
            return NotImplemented

        return (self._base_locator, self._query) == (other._base_locator, other._query)

    def __hash__(self):
        return hash((self._base_locator, self._query))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (type(self), (None, self._query, self._base_locator))
