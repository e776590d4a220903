# Copyright (c) 2017 Civic Knowledge. This file is licensed under the terms of the
# MIT, included in this distribution as LICENSE

"""
CLI program for inspecting Kls Urls and the archive entries they reference
"""

import sys


def info_table(u):
    """Return (name, value) rows for the derived properties of a Kls Url"""
    return [
        ('Url', str(u)),
        ('Base Locator', u.base_locator),
        ('Archive Path', u.archive_path),
        ('Inner Path', u.inner_path),
        ('File Name', u.file_name),
        ('Extension', u.file_extension),
        ('Compiled', u.is_compiled),
        ('Source', u.source),
    ]


def klsurl(argv=None):
    import argparse
    import logging
    from tabulate import tabulate
    from klsurl.url import to_kls_url, NOT_APPLICABLE
    from klsurl.archive import read_contents, extract_to_temporary_file, list_entries
    from klsurl.tempdir import TemporaryDirectory
    from klsurl.exceptions import KlsUrlError

    parser = argparse.ArgumentParser(
        prog='klsurl',
        description='Inspect Kls Urls and read the archive entries they reference',
       )

    parser.add_argument('-d', '--debug', action='store_true', help="Log debugging messages")

    parser.add_argument('-D', '--dir', help="Parent directory of the directory that --extract writes to. "
                                            "Defaults to the system temp directory")

    g = parser.add_mutually_exclusive_group(required=True)

    g.add_argument('-i', '--info', metavar='URI', help="Information about a Url")

    g.add_argument('-l', '--list', metavar='URI', help="List the entries in the archive a Url references")

    g.add_argument('-c', '--cat', metavar='URI', help="Print the text of the archive entry")

    g.add_argument('-x', '--extract', metavar='URI',
                   help="Extract the archive entry to a file and print the file's path")

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    u_str = args.info or args.list or args.cat or args.extract

    try:
        r = to_kls_url(u_str)

        if r is NOT_APPLICABLE:
            print("'{}' does not reference a file or an archive entry".format(u_str), file=sys.stderr)
            return 1

        u = r.url

        if args.info:
            print(tabulate(info_table(u)))

        elif args.list:
            print(tabulate([(str(e),) for e in list_entries(u)], ['Url']))

        elif args.cat:
            sys.stdout.write(read_contents(u))

        elif args.extract:
            with TemporaryDirectory(temp_dir=args.dir, auto_clean=False) as td:
                print(extract_to_temporary_file(u, td))

    except KlsUrlError as e:
        print("ERROR: {}".format(e), file=sys.stderr)
        return 1

    return 0


def main():
    sys.exit(klsurl())


if __name__ == "__main__":
    # execute only if run as a script
    main()
