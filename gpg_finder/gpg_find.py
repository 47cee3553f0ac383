#!/usr/bin/env python

# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  gpg_find.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provides a command line interface that reports which gpg and gpgv
  executables would be used for signing and verification.

"""
import argparse
import logging
import sys

import gpg_finder.settings
import gpg_finder.user_settings
from gpg_finder import __version__
from gpg_finder.common_args import (
    FINDER_ARGS,
    FINDER_KWARGS,
    QUIET_ARGS,
    QUIET_KWARGS,
    SKIP_VERSION_CHECK_ARGS,
    SKIP_VERSION_CHECK_KWARGS,
    VERBOSE_ARGS,
    VERBOSE_KWARGS,
)
from gpg_finder.exceptions import GPGNotFoundError
from gpg_finder.finder import get_finder

# Command line interfaces should use gpg_finder base logger (c.f.
# gpg_finder.log)
LOG = logging.getLogger("gpg_finder")

ROLE_SIGN = "sign"
ROLE_VERIFY = "verify"
ROLE_BOTH = "both"


def create_parser():
    """Create and return configured ArgumentParser instance."""
    parser = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
gpg-find looks for gpg (signing) and gpgv (verification) executables in the
search path, runs each candidate with '--version' and prints the first one that
belongs to the requested GnuPG generation.""",
    )

    parser.epilog = """EXAMPLE USAGE

Find GnuPG 1.x, falling back to GnuPG 2.x.

  gpg-find


Find the gpgv executable of GnuPG 2.x only.

  gpg-find --finder gpg2 --role verify

"""

    parser.add_argument(*FINDER_ARGS, **FINDER_KWARGS)

    parser.add_argument(
        "-r",
        "--role",
        dest="role",
        choices=[ROLE_SIGN, ROLE_VERIFY, ROLE_BOTH],
        default=ROLE_BOTH,
        help=(
            "executable to look for, 'sign' for gpg, 'verify' for gpgv or"
            " 'both'. Default is 'both'."
        ),
    )

    parser.add_argument(*SKIP_VERSION_CHECK_ARGS, **SKIP_VERSION_CHECK_KWARGS)

    verbosity_args = parser.add_mutually_exclusive_group(required=False)
    verbosity_args.add_argument(*VERBOSE_ARGS, **VERBOSE_KWARGS)
    verbosity_args.add_argument(*QUIET_ARGS, **QUIET_KWARGS)

    parser.add_argument(
        "--version",
        action="version",
        version=f"{parser.prog} {__version__}",
    )

    return parser


def main():
    """Parse arguments, resolve executables for the requested roles and print
    them."""
    parser = create_parser()
    args = parser.parse_args()

    LOG.setLevelVerboseOrQuiet(args.verbose, args.quiet)

    try:
        # Override defaults in settings.py with environment variables and
        # RCfiles
        gpg_finder.user_settings.set_settings()

        finder = get_finder(
            args.finder or gpg_finder.settings.GPG_FINDER,
            skip_version_check=args.skip_version_check,
            timeout=gpg_finder.settings.SUBPROCESS_TIMEOUT,
        )

        results = []
        if args.role in (ROLE_SIGN, ROLE_BOTH):
            results.append((ROLE_SIGN, finder.find_gpg()))

        if args.role in (ROLE_VERIFY, ROLE_BOTH):
            results.append((ROLE_VERIFY, finder.find_gpgv()))

    except GPGNotFoundError as e:
        LOG.error(f"(gpg-find) {e}")
        sys.exit(1)

    except Exception as e:  # pylint: disable=broad-except
        LOG.error(f"(gpg-find) {type(e).__name__}: {e}")
        sys.exit(2)

    for role, (executable, version) in results:
        print(f"{role}: {executable} (GnuPG {version.value}.x)")

    sys.exit(0)


if __name__ == "__main__":
    main()
