# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  finder.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Locate the gpg and gpgv executables installed on the host and tell which
  GnuPG generation (1.x or 2.x) they belong to.

  A finder probes candidate executable names in `$PATH` with `--version` and
  accepts the first one whose output contains the version marker it is
  configured for, e.g. "(GnuPG) 1.". Finders can be chained, so that one
  generation is preferred and another is used as fallback:

  ```
  from gpg_finder.finder import gpg_default_finder

  gpg, version = gpg_default_finder().find_gpg()
  ```

  Nothing is cached, every call probes the search path anew.

"""
import enum
import logging
from abc import ABCMeta, abstractmethod

from gpg_finder import formats, process
from gpg_finder.exceptions import GPGNotFoundError

# Inherits from gpg_finder base logger (c.f. gpg_finder.log)
log = logging.getLogger(__name__)

VERSION_ARG = "--version"

GPG1_VERSION_MARKER = "(GnuPG) 1."
GPG2_VERSION_MARKER = "(GnuPG) 2."

GPG1_NOT_FOUND_MESSAGE = (
    "Couldn't find a suitable gpg executable. Make sure gnupg1 is available"
    " as either gpg(v) or gpg(v)1 in $PATH"
)
GPG2_NOT_FOUND_MESSAGE = (
    "Couldn't find a suitable gpg executable. Make sure gnupg2 is available"
    " as either gpg(v) or gpg(v)2 in $PATH"
)
DEFAULT_NOT_FOUND_MESSAGE = (
    "Couldn't find a suitable gpg executable. Make sure gnupg is installed"
)


class GPGVersion(enum.IntEnum):
    """Major GnuPG generation of a resolved executable."""

    GPG1 = 1
    GPG2 = 2


def cli_version_check(cmd, marker, timeout=None, skip_version_check=False):
    """
    <Purpose>
      Run `<cmd> --version` and test whether the combined standard output and
      standard error contain the passed marker as literal substring.

      The exit code of the command is not inspected. A command that cannot be
      found or started counts as mismatch, so does a command that exceeds the
      passed timeout.

    <Arguments>
      cmd:
              Name (or path) of the executable to probe.

      marker:
              Substring expected in the version output, e.g. "(GnuPG) 1.".

      timeout: (optional)
              Seconds to wait for the probe. If not passed, see
              gpg_finder.settings.SUBPROCESS_TIMEOUT.

      skip_version_check: (optional)
              Accept any output, as long as the command can be started.

    <Returns>
      True if the marker was found (or the check skipped), False otherwise.

    """
    try:
        proc = process.run(
            [cmd, VERSION_ARG],
            check=False,
            timeout=timeout,
            stdin=process.DEVNULL,
            stdout=process.PIPE,
            stderr=process.STDOUT,
            universal_newlines=True,
            errors="replace",
        )

    except OSError as e:
        log.debug(f"Cannot run '{cmd} {VERSION_ARG}': {e}")
        return False

    except process.TimeoutExpired:
        log.debug(f"'{cmd} {VERSION_ARG}' timed out after {timeout}s")
        return False

    if skip_version_check:
        log.debug(f"Accepting '{cmd}' without version check")
        return True

    if marker in proc.stdout:
        log.debug(f"'{cmd} {VERSION_ARG}' reports '{marker}'")
        return True

    log.debug(f"'{cmd} {VERSION_ARG}' does not report '{marker}'")
    return False


class GPGFinder(metaclass=ABCMeta):
    """Finder interface.

    Implementations return a tuple of executable name and GPGVersion, or raise
    GPGNotFoundError.

    """

    @abstractmethod
    def find_gpg(self):
        """Return executable suitable for signing and its GPGVersion."""
        raise NotImplementedError

    @abstractmethod
    def find_gpgv(self):
        """Return executable suitable for signature verification and its
        GPGVersion."""
        raise NotImplementedError


class PathGPGFinder(GPGFinder):
    """Finder for a single GnuPG generation.

    Candidate names are probed in the passed order and the first one that
    reports `expected_version_substring` wins, i.e. a generic "gpg" that is
    already the expected generation is preferred over a qualified "gpg1".

    The returned version is always the one the finder was created with, it is
    not parsed from the version output.

    """

    def __init__(
        self,
        gpg_names,
        gpgv_names,
        expected_version_substring,
        version,
        error_message,
        skip_version_check=False,
        timeout=None,
    ):
        formats.check_candidate_names(gpg_names)
        formats.check_candidate_names(gpgv_names)
        formats.check_marker(expected_version_substring)
        formats.check_timeout(timeout)

        self.gpg_names = list(gpg_names)
        self.gpgv_names = list(gpgv_names)
        self.expected_version_substring = expected_version_substring
        self.version = GPGVersion(version)
        self.error_message = error_message
        self.skip_version_check = skip_version_check
        self.timeout = timeout

    def __repr__(self):
        return (
            f"{type(self).__name__}(gpg_names={self.gpg_names!r}, "
            f"gpgv_names={self.gpgv_names!r}, "
            f"version={self.version.value})"
        )

    def _find(self, names):
        for cmd in names:
            if cli_version_check(
                cmd,
                self.expected_version_substring,
                timeout=self.timeout,
                skip_version_check=self.skip_version_check,
            ):
                log.info(f"Found '{cmd}' (GnuPG {self.version.value}.x)")
                return cmd, self.version

        raise GPGNotFoundError(self.error_message)

    def find_gpg(self):
        return self._find(self.gpg_names)

    def find_gpgv(self):
        return self._find(self.gpgv_names)


class IteratingGPGFinder(GPGFinder):
    """Finder that asks the passed finders in order and returns the first
    result. If all of them fail, only its own error message is raised."""

    def __init__(self, finders, error_message):
        if not isinstance(finders, list) or not all(
            isinstance(f, GPGFinder) for f in finders
        ):
            raise ValueError("'finders' must be list of GPGFinder")

        self.finders = list(finders)
        self.error_message = error_message

    def __repr__(self):
        return f"{type(self).__name__}(finders={self.finders!r})"

    def _find(self, method_name):
        for finder in self.finders:
            try:
                return getattr(finder, method_name)()

            except GPGNotFoundError as e:
                log.debug(f"{finder!r}: {e}")

        raise GPGNotFoundError(self.error_message)

    def find_gpg(self):
        return self._find("find_gpg")

    def find_gpgv(self):
        return self._find("find_gpgv")


def gpg1_finder(skip_version_check=False, timeout=None):
    """Return finder for GnuPG 1.x as "gpg"/"gpg1" and "gpgv"/"gpgv1"."""
    return PathGPGFinder(
        gpg_names=["gpg", "gpg1"],
        gpgv_names=["gpgv", "gpgv1"],
        expected_version_substring=GPG1_VERSION_MARKER,
        version=GPGVersion.GPG1,
        error_message=GPG1_NOT_FOUND_MESSAGE,
        skip_version_check=skip_version_check,
        timeout=timeout,
    )


def gpg2_finder(skip_version_check=False, timeout=None):
    """Return finder for GnuPG 2.x as "gpg"/"gpg2" and "gpgv"/"gpgv2"."""
    return PathGPGFinder(
        gpg_names=["gpg", "gpg2"],
        gpgv_names=["gpgv", "gpgv2"],
        expected_version_substring=GPG2_VERSION_MARKER,
        version=GPGVersion.GPG2,
        error_message=GPG2_NOT_FOUND_MESSAGE,
        skip_version_check=skip_version_check,
        timeout=timeout,
    )


def gpg_default_finder(skip_version_check=False, timeout=None):
    """Return finder that prefers GnuPG 1.x and falls back to GnuPG 2.x."""
    return IteratingGPGFinder(
        [
            gpg1_finder(skip_version_check=skip_version_check, timeout=timeout),
            gpg2_finder(skip_version_check=skip_version_check, timeout=timeout),
        ],
        DEFAULT_NOT_FOUND_MESSAGE,
    )


FINDER_FOR_NAME = {
    "default": gpg_default_finder,
    "gpg1": gpg1_finder,
    "gpg2": gpg2_finder,
}


def get_finder(name, **kwargs):
    """Return a new finder for the passed name (see FINDER_FOR_NAME). Keyword
    arguments are passed on to the finder constructor."""
    try:
        constructor = FINDER_FOR_NAME[name]

    except KeyError:
        raise ValueError(
            f"Finder '{name}' not supported, must be one of "
            f"{sorted(FINDER_FOR_NAME)}"
        ) from None

    return constructor(**kwargs)
