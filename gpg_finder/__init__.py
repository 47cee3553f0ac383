# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
Configure base logger for gpg_finder (see gpg_finder.log for details).

"""
import gpg_finder.log
from gpg_finder.finder import (
    DEFAULT_NOT_FOUND_MESSAGE,
    GPG1_NOT_FOUND_MESSAGE,
    GPG2_NOT_FOUND_MESSAGE,
    GPGFinder,
    GPGVersion,
    IteratingGPGFinder,
    PathGPGFinder,
    get_finder,
    gpg1_finder,
    gpg2_finder,
    gpg_default_finder,
)

# gpg-finder version
__version__ = "0.1.0"
