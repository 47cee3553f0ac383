# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  common_args.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provides a collection of constants that can be used as `*args` or `**kwargs`
  to argparse.ArgumentParser.add_argument() for cli tools with common
  command line arguments.

  Example Usage:

  ```
  from gpg_finder.common_args import VERBOSE_ARGS, VERBOSE_KWARGS
  parser = argparse.ArgumentParser()
  parser.add_argument(*VERBOSE_ARGS, **VERBOSE_KWARGS)
  ```

"""
from gpg_finder.finder import FINDER_FOR_NAME

FINDER_ARGS = ["-f", "--finder"]
FINDER_KWARGS = {
    "dest": "finder",
    "type": str,
    "choices": sorted(FINDER_FOR_NAME),
    "help": (
        "which GnuPG generation to look for. 'gpg1' and 'gpg2' only accept"
        " the respective generation, 'default' prefers 'gpg1' and falls back"
        " to 'gpg2'. Defaults to the 'GPG_FINDER' setting."
    ),
}

SKIP_VERSION_CHECK_ARGS = ["--skip-version-check"]
SKIP_VERSION_CHECK_KWARGS = {
    "dest": "skip_version_check",
    "action": "store_true",
    "help": (
        "accept the first candidate executable that runs, without checking"
        " its '--version' output."
    ),
}

VERBOSE_ARGS = ["-v", "--verbose"]
VERBOSE_KWARGS = {
    "dest": "verbose",
    "action": "store_true",
    "help": "show more output",
}

QUIET_ARGS = ["-q", "--quiet"]
QUIET_KWARGS = {
    "dest": "quiet",
    "action": "store_true",
    "help": "suppress all output",
}
