# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  settings.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  A central place to define default settings that can be used throughout the
  package.

  Defaults can be changed,
   - here (hardcoded),
   - programmatically, e.g.
     ```
     import gpg_finder.settings
     gpg_finder.settings.SUBPROCESS_TIMEOUT = 5
     ```
  - or, when using the `gpg-find` command line tool, with environment
    variables or RCfiles, see the `gpg_finder.user_settings` module

"""
# The debug setting is used to set the gpg_finder base logger to logging.DEBUG
DEBUG = False

# Timeout in seconds for gpg invocations, including `--version` probes.
# None waits for the child process indefinitely.
SUBPROCESS_TIMEOUT = None

# Name of the finder used by the command line tool if none is passed, one of
# the keys in `gpg_finder.finder.FINDER_FOR_NAME`
GPG_FINDER = "default"
