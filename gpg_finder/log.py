# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  log.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Configures "gpg_finder" base logger, which can be used for debugging and
  user feedback in the gpg-find command line interface and the library.

  Logging methods and levels are available through Python's logging module.

  If the log level is set to 'logging.DEBUG' log messages include
  additional information about the log statement. Moreover, calls to the
  `error` method will also output a stacktrace (if available).
  In all other log levels only the log message is shown without additional
  info.

  The default log level of the base logger is 'logging.WARNING', unless
  'gpg_finder.settings.DEBUG' is 'True', in that case the default log level is
  'logging.DEBUG'.

  The default handler of the base logger is a 'StreamHandler', which writes all
  log messages permitted by the used log level to 'sys.stderr'.


<Usage>
  This module is imported in '__init__.py' to configure the base logger.
  Command line interfaces fetch the base logger by name and customize the log
  level according to any passed command line arguments, e.g.:

  ```
  import logging
  LOG = logging.getLogger("gpg_finder")

  # parse args ...

  LOG.setLevelVerboseOrQuiet(args.verbose, args.quiet)
  ```

  Library modules create loggers, passing the module name, which will inherit
  the base logger's log level and format, e.g.:

  ```
  import logging
  LOG = logging.getLogger(__name__)

  LOG.debug("Probing 'gpg1 --version'")
  # gpg_finder.finder:60:DEBUG:Probing 'gpg1 --version'
  ```

"""
import logging
import sys

import gpg_finder.settings

# Different log message formats for different log levels
FORMAT_MESSAGE = "%(message)s"
FORMAT_DEBUG = "%(name)s:%(lineno)d:%(levelname)s:%(message)s"

# Cache default logger class, should be logging.Logger if not changed elsewhere
_LOGGER_CLASS = logging.getLoggerClass()


class GPGFinderLogger(_LOGGER_CLASS):
    """logger.Logging subclass, providing custom error method and
    convenience method for log levels."""

    QUIET = logging.CRITICAL + 1

    def error(self, msg, *args, **kwargs):
        """Show stacktrace depending on its availability and the logger's log
        level, i.e. only show stacktrace in DEBUG level."""
        show_stacktrace = self.level == logging.DEBUG and sys.exc_info() != (
            None,
            None,
            None,
        )
        kwargs.setdefault("exc_info", show_stacktrace)
        return super().error(msg, *args, **kwargs)

    # Allow non snake_case function name for consistency with logging library
    def setLevelVerboseOrQuiet(
        self, verbose, quiet
    ):  # pylint: disable=invalid-name
        """Convenience method to set the logger's verbosity level based on the
        passed booleans verbose and quiet (useful for cli tools)."""
        if verbose:
            self.setLevel(logging.INFO)

        elif quiet:
            self.setLevel(self.QUIET)


# Temporarily change logger default class to instantiate a gpg_finder base
# logger
logging.setLoggerClass(GPGFinderLogger)
LOGGER = logging.getLogger("gpg_finder")
logging.setLoggerClass(_LOGGER_CLASS)

# In DEBUG mode we log all log types and add additional information,
# otherwise we only log warning, error and critical and only the message.
if gpg_finder.settings.DEBUG:  # pragma: no cover
    LEVEL = logging.DEBUG
    FORMAT_STRING = FORMAT_DEBUG

else:
    LEVEL = logging.WARNING
    FORMAT_STRING = FORMAT_MESSAGE

# Add a StreamHandler with the chosen format to gpg_finder's base logger,
# which will write log messages to `sys.stderr`.
FORMATTER = logging.Formatter(FORMAT_STRING)
HANDLER = logging.StreamHandler()
HANDLER.setFormatter(FORMATTER)
LOGGER.addHandler(HANDLER)
LOGGER.setLevel(LEVEL)
