# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  process.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provide a common interface for Python's subprocess module to:

  - gpg_finder namespace subprocess constants (DEVNULL, PIPE, STDOUT) and
  - provide a custom `subprocess.run` wrapper

"""
import logging
import shlex
import subprocess

import gpg_finder.settings
from gpg_finder import formats

DEVNULL = subprocess.DEVNULL
PIPE = subprocess.PIPE
STDOUT = subprocess.STDOUT
TimeoutExpired = subprocess.TimeoutExpired

# Inherits from gpg_finder base logger (c.f. gpg_finder.log)
log = logging.getLogger(__name__)


def run(cmd, check=True, timeout=None, **kwargs):
    """
    <Purpose>
      Provide wrapper for `subprocess.run` where:

      * `timeout` falls back to gpg_finder.settings.SUBPROCESS_TIMEOUT, read
        at call time,
      * `check` is `True` by default,
      * there is only one positional argument, i.e. `cmd` that can be either
        a str (will be split with shlex) or a list of str and
      * instead of raising a ValueError if both `input` and `stdin` are
        passed, `stdin` is ignored.

    <Arguments>
      cmd:
              The command and its arguments. (list of str, or str)

      check: (default True)
              If true, and the process exits with a non-zero exit code, a
              subprocess.CalledProcessError is raised.

      timeout: (optional)
              Seconds after which the child process is killed and
              subprocess.TimeoutExpired is raised.

      **kwargs:
              See subprocess.run for available kwargs.

    <Exceptions>
      securesystemslib.exceptions.FormatError:
              If the `cmd` is a list and not a non-empty list of str.

      OSError:
              If the given command is not present or non-executable.

      subprocess.TimeoutExpired:
              If the process does not terminate after timeout seconds.

    <Side Effects>
      The side effects of executing the given command in this environment.

    <Returns>
      A subprocess.CompletedProcess instance.

    """
    # Make list of command passed as string for convenience
    if isinstance(cmd, str):
        cmd = shlex.split(cmd)
    else:
        formats.check_command(cmd)

    if timeout is None:
        timeout = gpg_finder.settings.SUBPROCESS_TIMEOUT

    # NOTE: The CPython implementation would raise a ValueError here, we just
    # don't pass on `stdin` if the user passes `input` and `stdin`
    if kwargs.get("input") is not None and "stdin" in kwargs:
        log.debug(
            "stdin and input arguments may not both be used. "
            "Ignoring passed stdin: " + str(kwargs["stdin"])
        )
        del kwargs["stdin"]

    return subprocess.run(cmd, check=check, timeout=timeout, **kwargs)
