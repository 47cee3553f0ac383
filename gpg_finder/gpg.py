# Copyright the gpg-finder contributors
# SPDX-License-Identifier: Apache-2.0

"""
<Program Name>
  gpg.py

<Copyright>
  See LICENSE for licensing information.

<Purpose>
  Signer and verifier that shell out to the gpg and gpgv executables
  resolved by a finder (see gpg_finder.finder).

  The executables are resolved once, when the signer or verifier is created,
  and are used for all subsequent operations.

"""
import logging
import os
import tempfile
from abc import ABCMeta, abstractmethod

from gpg_finder import process
from gpg_finder.exceptions import CommandError, SignatureVerificationError
from gpg_finder.finder import GPGVersion

# Inherits from gpg_finder base logger (c.f. gpg_finder.log)
log = logging.getLogger(__name__)

GPG_SIGN_ARGS = ["--detach-sign", "--digest-algo", "SHA256"]


class Verifier(metaclass=ABCMeta):
    """Detached signature verification interface.

    GPGVerifier shells out to gpgv, other implementations may verify
    in-process.

    """

    @abstractmethod
    def add_keyring(self, keyring):
        """Add keyring file with trusted public keys."""
        raise NotImplementedError

    @abstractmethod
    def verify_detached(self, content, signature):
        """Raise SignatureVerificationError if signature does not verify."""
        raise NotImplementedError


class GPGSigner:
    """Create detached signatures with the gpg executable found by the passed
    finder.

    <Exceptions>
      gpg_finder.exceptions.GPGNotFoundError:
              If the finder cannot find a gpg executable.

    """

    def __init__(self, finder, batch=False):
        self.gpg, self.version = finder.find_gpg()
        self.batch = batch
        self.keyid = None
        self.passphrase = None
        self.homedir = None
        self.armor = False

    def set_batch(self, batch):
        self.batch = batch

    def set_key(self, keyid):
        self.keyid = keyid

    def set_passphrase(self, passphrase):
        self.passphrase = passphrase

    def set_homedir(self, homedir):
        self.homedir = homedir

    def set_armor(self, armor):
        self.armor = armor

    def gpg_args(self):
        """Return common arguments for gpg invocations, depending on the
        signer's options and the gpg version."""
        args = []
        if self.homedir:
            args += ["--homedir", self.homedir.replace("\\", "/")]

        if self.batch:
            args += ["--no-tty", "--batch"]

            # gpg2 only reads passphrases from the command line in loopback
            # pinentry mode
            if self.passphrase is not None and self.version == GPGVersion.GPG2:
                args += ["--pinentry-mode", "loopback"]

        if self.passphrase is not None:
            args += ["--passphrase", self.passphrase]

        if self.keyid:
            args += ["--default-key", self.keyid]

        return args

    def sign_detached(self, content):
        """
        <Purpose>
          Create a detached signature over the passed content.

        <Arguments>
          content:
                  The content to be signed. (bytes)

        <Exceptions>
          gpg_finder.exceptions.CommandError:
                  If gpg exits with non-zero return value.

          OSError:
                  If gpg disappeared since it was resolved.

        <Returns>
          The signature as bytes (ASCII-armored if armor is set).

        """
        cmd = [self.gpg] + self.gpg_args() + GPG_SIGN_ARGS
        if self.armor:
            cmd.append("--armor")

        log.info(f"Signing with '{self.gpg}' (GnuPG {self.version.value}.x)")
        proc = process.run(
            cmd,
            check=False,
            input=content,
            stdout=process.PIPE,
            stderr=process.PIPE,
        )

        if proc.returncode != 0:
            raise CommandError(
                f"'{self.gpg}' exited with return value {proc.returncode}: "
                f"{proc.stderr.decode(errors='replace').strip()}"
            )

        return proc.stdout


class GPGVerifier(Verifier):
    """Verify detached signatures with the gpgv executable found by the
    passed finder.

    <Exceptions>
      gpg_finder.exceptions.GPGNotFoundError:
              If the finder cannot find a gpgv executable.

    """

    def __init__(self, finder):
        self.gpgv, self.version = finder.find_gpgv()
        self.keyrings = []

    def add_keyring(self, keyring):
        self.keyrings.append(keyring)

    def gpgv_args(self):
        args = []
        for keyring in self.keyrings:
            args += ["--keyring", keyring]

        return args

    def verify_detached(self, content, signature):
        """
        <Purpose>
          Verify the passed detached signature over the passed content against
          the keys in the added keyrings.

        <Arguments>
          content:
                  The signed content. (bytes)

          signature:
                  The detached signature, binary or ASCII-armored. (bytes)

        <Exceptions>
          gpg_finder.exceptions.SignatureVerificationError:
                  If gpgv exits with non-zero return value.

        <Side Effects>
          Writes content and signature to temporary files, which are removed
          afterwards.

        """
        sig_fd, sig_path = tempfile.mkstemp(suffix=".sig")
        data_fd, data_path = tempfile.mkstemp()
        try:
            with os.fdopen(sig_fd, "wb") as sig_file:
                sig_file.write(signature)
            with os.fdopen(data_fd, "wb") as data_file:
                data_file.write(content)

            cmd = [self.gpgv] + self.gpgv_args() + [sig_path, data_path]
            log.info(
                f"Verifying with '{self.gpgv}' "
                f"(GnuPG {self.version.value}.x)"
            )
            proc = process.run(
                cmd,
                check=False,
                stdin=process.DEVNULL,
                stdout=process.PIPE,
                stderr=process.STDOUT,
                universal_newlines=True,
                errors="replace",
            )

        finally:
            os.remove(sig_path)
            os.remove(data_path)

        if proc.returncode != 0:
            raise SignatureVerificationError(
                f"'{self.gpgv}' exited with return value {proc.returncode}: "
                f"{proc.stdout.strip()}"
            )
