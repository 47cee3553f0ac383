# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  formats.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Helpers to validate API inputs.

"""
from securesystemslib.exceptions import FormatError


def _err(arg, expected):
    return FormatError(f"expected {expected}, got '{arg} ({type(arg)})'")


def _check_str(arg):
    if not isinstance(arg, str):
        raise _err(arg, "str")


def _check_non_empty_str(arg):
    _check_str(arg)
    if not arg:
        raise _err(arg, "non-empty str")


def _check_list(arg):
    if not isinstance(arg, list):
        raise _err(arg, "list")


def _check_str_list(arg):
    _check_list(arg)
    for e in arg:
        _check_str(e)


def check_command(arg):
    """Check that the passed command is a non-empty list of strings."""
    _check_str_list(arg)
    if not arg:
        raise _err(arg, "non-empty list")


def check_candidate_names(arg):
    """Check that the passed executable names are a non-empty list of
    non-empty strings."""
    _check_list(arg)
    if not arg:
        raise _err(arg, "non-empty list")
    for e in arg:
        _check_non_empty_str(e)


def check_marker(arg):
    """Check that the passed version marker is a non-empty string."""
    _check_non_empty_str(arg)


def check_timeout(arg):
    """Check that the passed timeout is None or a positive number."""
    if arg is None:
        return
    if isinstance(arg, bool) or not isinstance(arg, (int, float)) or arg <= 0:
        raise _err(arg, "None or positive number")
