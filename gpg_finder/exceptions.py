# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by gpg_finder.

Following the practice from securesystemslib the names chosen for exception
classes end in 'Error'.

"""
from securesystemslib.exceptions import Error


class GPGNotFoundError(Error):
    """Indicates that no candidate executable reported the expected version.

    The message is meant to be shown to the user as is, e.g. "Make sure gnupg
    is installed".
    """


class CommandError(Error):
    """Indicates that a resolved gpg executable exited with non-zero return
    value."""


class SignatureVerificationError(Error):
    """Indicates that gpgv rejected a signature."""
