#!/usr/bin/env python

# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  common.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Common code for gpg-finder unittests, import like so:
  `import tests.common`

  Tests importing this module, should be run from the project root, e.g.:
  `python -m unittest tests.test_finder`
  or using the aggregator script (preferred way):
  `python tests/runtests.py`.

"""
import inspect
import os
import shutil
import stat
import sys
import tempfile
import unittest
from unittest.mock import patch

GPG1_BANNER = "gpg (GnuPG) 1.4.23"
GPG2_BANNER = "gpg (GnuPG) 2.2.27"
GPGV1_BANNER = "gpgv (GnuPG) 1.4.23"
GPGV2_BANNER = "gpgv (GnuPG) 2.2.27"

# Fake executable, prints a version banner on '--version' and otherwise logs
# its arguments to $FAKE_GPG_LOG and exits with $FAKE_GPG_EXIT. Only shell
# builtins are used, so that the script also works with a PATH that contains
# nothing but the fake executables.
FAKE_EXECUTABLE = """#!/bin/sh
if [ "$1" = "--version" ]; then
  {version_output}
  exit {version_exit}
fi
while read -r line; do :; done
if [ -n "$FAKE_GPG_LOG" ]; then
  echo "$@" > "$FAKE_GPG_LOG"
fi
printf "{output}"
exit ${{FAKE_GPG_EXIT:-0}}
"""


class TmpDirMixin:
    """Mixin with classmethods to create and change into a temporary directory,
    and to change back to the original CWD and remove the temporary directory.

    """

    @classmethod
    def set_up_test_dir(cls):
        """Back up CWD, and create and change into temporary directory."""
        cls.original_cwd = os.getcwd()
        cls.test_dir = os.path.realpath(tempfile.mkdtemp())
        os.chdir(cls.test_dir)

    @classmethod
    def tear_down_test_dir(cls):
        """Change back to original CWD and remove temporary directory."""
        os.chdir(cls.original_cwd)
        shutil.rmtree(cls.test_dir)


@unittest.skipIf(sys.platform == "win32", "fake executables need /bin/sh")
class FakeGPGTestCase(unittest.TestCase):
    """TestCase subclass that creates directories with fake gpg executables
    and patches PATH to search only those directories.

    Directories are created below a temporary directory, which is removed
    after each test, e.g.:

    ```
    bins = self.make_bin_dir("gpg2-and-1", gpg=GPG2_BANNER, gpg1=GPG1_BANNER)
    with self.search_path(bins):
        ...
    ```
    """

    def setUp(self):
        self.bins_root = os.path.realpath(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.bins_root)

    def make_fake_executable(
        self, path, version_output, version_exit=0, output="", to_stderr=False
    ):
        """Write fake executable to path that prints version_output on
        '--version' and output otherwise."""
        if version_output is None:
            version_line = ":"
        elif to_stderr:
            version_line = f"echo '{version_output}' >&2"
        else:
            version_line = f"echo '{version_output}'"

        with open(path, "w") as f:
            f.write(
                FAKE_EXECUTABLE.format(
                    version_output=version_line,
                    version_exit=version_exit,
                    output=output,
                )
            )
        os.chmod(path, stat.S_IRWXU)

    def make_bin_dir(self, name, **executables):
        """Create directory with fake executables, where each keyword maps an
        executable name to the version banner it prints."""
        path = os.path.join(self.bins_root, name)
        os.makedirs(path)
        for executable, banner in executables.items():
            self.make_fake_executable(os.path.join(path, executable), banner)
        return path

    def search_path(self, *directories):
        """Return context manager that patches PATH with the passed
        directories."""
        return patch.dict(os.environ, {"PATH": os.pathsep.join(directories)})


class CliTestCase(unittest.TestCase):
    """TestCase subclass providing a test helper that patches sys.argv with
    passed arguments and asserts a SystemExit with a return code equal
    to the passed status argument.

    Subclasses of CliTestCase require a class variable that stores the main
    function of the cli tool to test as staticmethod, e.g.:

    ```
    import tests.common
    from gpg_finder.gpg_find import main as gpg_find_main

    class TestGPGFindTool(tests.common.CliTestCase):
        cli_main_func = staticmethod(gpg_find_main)
        ...

    ```
    """

    cli_main_func = None

    def __init__(self, *args, **kwargs):
        """Constructor that checks for the presence of a callable cli_main_func
        class variable. And stores the filename of the module containing that
        function, to be used as first argument when patching sys.argv in
        self.assert_cli_sys_exit.
        """
        if not callable(self.cli_main_func):
            raise Exception(
                "Subclasses of `CliTestCase` need to assign the main"
                " function of the cli tool to test using `staticmethod()`:"
                f" {self.__class__.__name__}"
            )

        file_path = inspect.getmodule(self.cli_main_func).__file__
        self.file_name = os.path.basename(file_path)

        super().__init__(*args, **kwargs)

    def assert_cli_sys_exit(self, cli_args, status):
        """Test helper to mock command line call and assert return value.
        The passed args does not need to contain the command line tool's name.
        This is assessed from  `self.cli_main_func`
        """
        with patch.object(
            sys, "argv", [self.file_name] + cli_args
        ), self.assertRaises(SystemExit) as raise_ctx:
            self.cli_main_func()  # pylint: disable=not-callable

        self.assertEqual(raise_ctx.exception.code, status)
