
from collections import OrderedDict

KT_SOURCE = 'package com.example\n\nclass Foo(val greeting: String = "Grüße")\n'

JAVA_SOURCE = 'package com.example;\r\n\r\npublic class Bar {}\r\n'

SPACED_SOURCE = 'package com.example\n\nfun greet() = "hi"\n'

CLASS_BYTES = b'\xca\xfe\xba\xbe\x00\x00\x00\x34\x00\x0a'

# Entry name to contents. Names ending in '/' are directory entries
JAR_ENTRIES = OrderedDict([
    ('META-INF/', b''),
    ('META-INF/MANIFEST.MF', b'Manifest-Version: 1.0\r\n\r\n'),
    ('com/', b''),
    ('com/example/', b''),
    ('com/example/Foo.class', CLASS_BYTES),
    ('com/example/Foo.kt', KT_SOURCE.encode('utf-8')),
    ('com/example/Bar.java', JAVA_SOURCE.encode('utf-8')),
    ('com/example/README', b'No extension\n'),
    ('com/example/data.tar.gz', b'\x1f\x8b\x08\x00'),
    ('com/example/latin1.txt', 'café'.encode('latin-1')),
    ('com/example/my file.kt', SPACED_SOURCE.encode('utf-8')),
    ('__MACOSX/com/example/._Foo.kt', b'\x00\x05\x16\x07'),
    ('com/example/.DS_Store', b'\x00\x00\x00\x01'),
])

# Entries that Kls Urls should list, skipping directories and archiver metadata
REAL_FILES = [
    'META-INF/MANIFEST.MF',
    'com/example/Foo.class',
    'com/example/Foo.kt',
    'com/example/Bar.java',
    'com/example/README',
    'com/example/data.tar.gz',
    'com/example/latin1.txt',
    'com/example/my file.kt',
]


def make_jar(directory, name='lib.jar', entries=None):
    """Write a JAR file into ``directory`` and return its path, as a string"""
    from os.path import join
    from zipfile import ZipFile, ZIP_DEFLATED

    path = join(str(directory), name)

    with ZipFile(path, 'w', ZIP_DEFLATED) as zf:
        for entry_name, data in (entries or JAR_ENTRIES).items():
            zf.writestr(entry_name, data)

    return path


def jar_url(jar_path, inner_path=None, query=''):
    """Return a kls: url string for an entry in the JAR at ``jar_path``"""
    from pathlib import Path

    u = 'kls:' + Path(jar_path).as_uri()

    if inner_path is not None:
        u += '!' + inner_path

    return u + query
