#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os

from setuptools import find_packages, setup

with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as f:
    readme = f.read()

classifiers = [
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: MIT License',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Topic :: Software Development :: Libraries :: Python Modules',
]


setup(
    name='klsurl',
    version="0.1.0",
    description='Single-string references to classes and source files inside JAR archives',
    long_description=readme,
    packages=find_packages(exclude=['*.test', '*.test.*']),
    python_requires='>=3.8',
    install_requires=[
        'fs >= 2',
        'setuptools < 81', # fs imports pkg_resources
        'tabulate',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'klsurl=klsurl.cli:main',
        ],
    },

    author="Eric Busboom",
    author_email='eric@civicknowledge.com',
    license='MIT',
    classifiers=classifiers
)
