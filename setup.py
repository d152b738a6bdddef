#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import io
import os

from setuptools import setup, find_packages

# Package meta-data.
REQUIRES_PYTHON = '>=3.7.0'

# What packages are required for this module to be executed?
REQUIRED = ['dbus-next']

# What packages are optional?
EXTRAS = {
    'test': ['pytest', 'pytest-asyncio'],
}

here = os.path.abspath(os.path.dirname(__file__))

about = {}
with open(os.path.join(here, 'busprobe', '__version__.py')) as f:
    exec(f.read(), about)

with io.open(os.path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = '\n' + f.read()

setup(
    name=about['__title__'],
    version=about['__version__'],
    description=about['__description__'],
    long_description=long_description,
    long_description_content_type='text/markdown',
    author=about['__author__'],
    python_requires=REQUIRES_PYTHON,
    packages=find_packages(exclude=['test', '*.test', '*.test.*', 'test.*']),
    install_requires=REQUIRED,
    extras_require=EXTRAS,
    entry_points={
        'console_scripts': [
            'busprobe-list-names=busprobe.cli:list_names_main',
            'busprobe-position=busprobe.cli:position_main',
            'busprobe-status=busprobe.cli:status_main',
        ],
    },
    include_package_data=True,
    license='MIT',
    classifiers=[
        # Full list: https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Topic :: Desktop Environment',
        'Topic :: Multimedia :: Sound/Audio :: Players',
        'Framework :: AsyncIO',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
    ])
