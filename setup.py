#!/usr/bin/env python
"""
<Program Name>
  setup.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  setup.py script to install the gpg-finder library and the gpg-find command
  line tool.

"""
import io
import os
import re

from setuptools import setup, find_packages


base_dir = os.path.dirname(os.path.abspath(__file__))

def get_version(filename="gpg_finder/__init__.py"):
  """
  Gather version number from specified file.

  This is done through regex processing, so the file is not imported or
  otherwise executed.

  No format verification of the resulting version number is done.
  """
  with io.open(os.path.join(base_dir, filename), encoding="utf-8") as initfile:
    for line in initfile.readlines():
      m = re.match("__version__ *= *['\"](.*)['\"]", line)
      if m:
        return m.group(1)

with io.open(os.path.join(base_dir, "README.md"), encoding="utf-8") as f:
  long_description = f.read()

setup(
  name="gpg-finder",
  description=("Find the installed gpg and gpgv executables and tell whether"
    " they are GnuPG 1.x or 2.x"),
  long_description_content_type="text/markdown",
  long_description=long_description,
  license="Apache-2.0",
  keywords="gnupg gpg gpgv openpgp signing",
  classifiers = [
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: Apache Software License',
    'Natural Language :: English',
    'Operating System :: POSIX',
    'Operating System :: POSIX :: Linux',
    'Operating System :: MacOS :: MacOS X',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: Implementation :: CPython',
    'Topic :: Security',
    'Topic :: Software Development'
  ],
  python_requires=">=3.8, <4",
  packages=find_packages(exclude=["*.tests", "*.tests.*", "tests.*", "tests"]),
  install_requires=["securesystemslib>=0.18.0"],
  extras_require={
    "test": ["pytest"],
  },
  entry_points={
    "console_scripts": ["gpg-find = gpg_finder.gpg_find:main"]
  },
  version=get_version(),
)
