# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  user_settings.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Provides methods to parse environment variables (`get_env`) and RCfiles
  (`get_rc`) and to override default settings (`set_settings`) defined in the
  `gpg_finder.settings` module.

  Check out the respective docstrings to learn about the requirements for
  environment variables and RCfiles (includes examples).

"""
import configparser
import logging
import os

import gpg_finder.settings

# Inherits from gpg_finder base logger (c.f. gpg_finder.log)
LOG = logging.getLogger(__name__)


USER_PATH = os.path.expanduser("~")

# Prefix required by environment variables to be considered as gpg_finder
# settings
ENV_PREFIX = "GPG_FINDER_"

# List of considered rcfile paths in the order they get parsed and overridden,
# i.e. the same setting in `/etc/gpg_finder/config` and `.gpg_finderrc` (cwd)
# uses the latter
RC_PATHS = [
    os.path.join("/etc", "gpg_finder", "config"),
    os.path.join("/etc", "gpg_finderrc"),
    os.path.join(USER_PATH, ".config", "gpg_finder", "config"),
    os.path.join(USER_PATH, ".config", "gpg_finder"),
    os.path.join(USER_PATH, ".gpg_finder", "config"),
    os.path.join(USER_PATH, ".gpg_finderrc"),
    ".gpg_finderrc",
]

# Settings that may be overridden, mapped to a function that converts the
# parsed string value
GPG_FINDER_SETTINGS = {
    "GPG_FINDER": str,
    "SUBPROCESS_TIMEOUT": float,
}


def get_env():
    """
    <Purpose>
      Parse environment for variables with prefix `ENV_PREFIX` and return
      a dict of key-value pairs.

      The prefix `ENV_PREFIX` is stripped from the keys in the returned dict.

      Example:

      ```
      # Exporting variables in e.g. bash
      export GPG_FINDER_GPG_FINDER='gpg2'
      export GPG_FINDER_SUBPROCESS_TIMEOUT='10'
      ```

      produces

      ```
      {
        "GPG_FINDER": "gpg2",
        "SUBPROCESS_TIMEOUT": "10"
      }
      ```

    <Returns>
      A dictionary containing the parsed key-value pairs.

    """
    env_dict = {}

    for name, value in os.environ.items():
        if name.startswith(ENV_PREFIX) and len(name) > len(ENV_PREFIX):
            stripped_name = name[len(ENV_PREFIX) :]

            env_dict[stripped_name] = value

    return env_dict


def get_rc():
    """
    <Purpose>
      Reads RCfiles from the paths defined in `RC_PATHS` and returns
      a dictionary with all parsed key-value pairs.

      The RCfile format is as expected by Python's builtin `ConfigParser`.
      Section titles are ignored, but there has to be at least one section.

      The paths in `RC_PATHS` are ordered in reverse precedence, i.e. each
      file's settings override a previous file's settings.

      Example:

      ```
      # E.g. file `.gpg_finderrc` in current working directory
      [gpg-finder setting]
      GPG_FINDER = gpg1
      SUBPROCESS_TIMEOUT = 10
      ```

    <Side Effects>
      Reads files from disk.

    <Returns>
      A dictionary containing the parsed key-value pairs.

    """
    rc_dict = {}

    config = configparser.ConfigParser()
    # Reset `optionxform`'s default case conversion to enable case-sensitivity
    config.optionxform = str
    config.read(RC_PATHS)

    for section in config.sections():
        for name, value in config.items(section):
            rc_dict[name] = value

    return rc_dict


def set_settings():
    """
    <Purpose>
      Read gpg_finder related environment variables and RCfiles and override
      variables in `settings.py` with the retrieved values, if they are listed
      in `GPG_FINDER_SETTINGS`.

      Settings defined in RCfiles take precedence over settings defined in
      environment variables.

    <Exceptions>
      ValueError:
              If a value cannot be converted to the setting's type.

    <Side Effects>
      Reads environment variables and files from disk and modifies
      `gpg_finder.settings`.

    """
    user_settings = get_env()
    user_settings.update(get_rc())

    for setting, convert in GPG_FINDER_SETTINGS.items():
        user_setting = user_settings.get(setting)
        if user_setting:
            LOG.info(f"Setting (user): {setting}={user_setting}")
            setattr(gpg_finder.settings, setting, convert(user_setting))

        else:
            default_setting = getattr(gpg_finder.settings, setting)
            LOG.info(f"Setting (default): {setting}={default_setting}")
