#!/usr/bin/env python
#
# helper.py - Abstract provider of a non-Python helper program.
#
# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Locating and running the host programs ADP depends on.

ADP only ever looks for these programs; installing them is left to the
host (VMware, dpkg, iproute2, systemd).

**Classes**

.. autosummary::
  :nosignatures:

  HelperNotFoundError
  HelperError
  Helper

**Attributes**

.. autosummary::
  :nosignatures:

  helpers

**Functions**

.. autosummary::
  :nosignatures:

  check_call
  check_output
"""

import errno
import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)


class HelperNotFoundError(OSError):
    """A helper program cannot be located."""


class HelperError(EnvironmentError):
    """A helper program exited with non-zero return code."""


class HelperDict(dict):
    """Mapping of program name to :class:`Helper`, built on first lookup.

    Unlike :class:`collections.defaultdict`, the factory is passed the
    missing key.
    """

    def __init__(self, factory, *args, **kwargs):
        """Create an empty (or pre-populated) mapping.

        Args:
          factory (object): Callable taking a program name and returning
              the helper for it.

        For the other parameters, see :class:`dict`.
        """
        super(HelperDict, self).__init__(*args, **kwargs)
        self.factory = factory

    def __missing__(self, key):
        self[key] = self.factory(key)
        return self[key]


class Helper(object):
    """One external program, found lazily and run on demand.

    **Instance Properties**

    .. autosummary::
      name
      info_uri
      installed
      path

    **Instance Methods**

    .. autosummary::
      :nosignatures:

      call
      not_found_error
    """

    def __init__(self, name, info_uri=None):
        """Describe a helper program.

        Args:
          name (str): Executable name.
          info_uri (str): Where to read about obtaining the program.
        """
        self._name = name
        self._info_uri = info_uri
        self._path = None
        self._installed = None
        self.cached_output = {}
        """Captured output of earlier calls, keyed by argument tuple.

        Empty unless a subclass chooses to fill it in.
        """

    def __bool__(self):
        return self.installed

    @property
    def name(self):
        """Executable name of the helper program."""
        return self._name

    @property
    def info_uri(self):
        """URI for more information about this helper."""
        return self._info_uri

    def _find(self):
        """Search ``$PATH`` for the program.

        Returns:
          str: Path to the program, or ``None``.
        """
        return shutil.which(self.name)

    @property
    def path(self):
        """Location of the program, looked up on first use."""
        if not self._path:
            logger.spam("Looking for %s", self.name)
            self._path = self._find()
            if self._path:
                logger.debug("Found %s at %s", self.name, self._path)
                self._installed = True
            else:
                logger.debug("%s was not found", self.name)
        return self._path

    @property
    def installed(self):
        """Whether the program was found on this host."""
        if self._installed is None:
            self._installed = (self.path is not None)
        return self._installed

    def not_found_error(self):
        """Error raised by :meth:`call` when the program is missing.

        Returns:
          HelperNotFoundError: Error saying where to get the program.
        """
        msg = ("Unable to proceed without helper program '{0}'. "
               "Please install it and/or check your $PATH."
               .format(self.name))
        if self.info_uri:
            msg += "\nRefer to {0} for information".format(self.info_uri)
        return HelperNotFoundError(errno.ENOENT, msg)

    def call(self, args, capture_output=True, use_cached=True, **kwargs):
        """Run the program with ``args``.

        Args:
          args (tuple): Arguments, not including the program itself.
          capture_output (boolean): Capture and return the output with
            :func:`check_output`. If ``False``, the output goes straight to
            the terminal through :func:`check_call`.
          use_cached (boolean): When capturing, return the entry from
            :attr:`cached_output` for these ``args`` if there is one.

        For the other parameters, see :func:`check_call` and
        :func:`check_output`.

        Returns:
          str: Captured output, or ``None`` if not captured.

        Raises:
          HelperNotFoundError: if the helper is not installed.
        """
        if not self.path:
            raise self.not_found_error()
        # tuples can be cache keys
        args = tuple(args)
        call_args = [self.path] + list(args)
        if not capture_output:
            check_call(call_args, **kwargs)
            return None
        if use_cached and args in self.cached_output:
            logger.debug("Reusing earlier output of '%s'",
                         " ".join(call_args))
            return self.cached_output[args]
        return check_output(call_args, **kwargs)


helpers = HelperDict(Helper)   # pylint: disable=invalid-name
"""All known helpers by program name; modules register theirs on import."""


def _missing_program(exc, cmd):
    """Turn ENOENT from :mod:`subprocess` into :class:`HelperNotFoundError`.

    Any other :class:`OSError` is re-raised as-is.
    """
    if exc.errno != errno.ENOENT:
        raise exc
    return HelperNotFoundError(exc.errno,
                               "Unable to locate helper program '{0}'. "
                               "Please check your $PATH.".format(cmd))


def check_call(args, require_success=True, **kwargs):
    """Run a command with its output going to the terminal.

    Args:
      args (list): Command and its arguments.
      require_success (boolean): Raise :class:`HelperError` on a non-zero
          exit status. If ``False`` the failure is only logged.

    For the other parameters, see :func:`subprocess.check_call`.

    Raises:
      HelperNotFoundError: if the command does not exist.
      HelperError: if the command fails and ``require_success`` is set.
      OSError: if the command cannot be run for some other reason.

    Examples:
      ::

        >>> check_call(['true'])
        >>> try:
        ...     check_call(['false'])
        ... except HelperError as e:
        ...     print(e.errno)
        ...     print(e.strerror)
        1
        Helper program 'false' exited with error 1
        >>> check_call(['false'], require_success=False)
        >>> try:
        ...     check_call(['/non/exist'])
        ... except HelperNotFoundError as e:
        ...     print(e.errno)
        ...     print(e.strerror)
        2
        Unable to locate helper program '/non/exist'. Please check your $PATH.
    """
    cmd = args[0]
    # Output is not captured, so announce the command first
    logger.notice("Calling '%s'...", " ".join(args))
    try:
        subprocess.check_call(args, **kwargs)
    except OSError as exc:
        raise _missing_program(exc, cmd)
    except subprocess.CalledProcessError as exc:
        if require_success:
            raise HelperError(exc.returncode,
                              "Helper program '{0}' exited with error {1}"
                              .format(cmd, exc.returncode))
        logger.debug("%s exited with error %s, ignoring",
                     cmd, exc.returncode)
        return
    logger.notice("...done")


def check_output(args, require_success=True, **kwargs):
    r"""Run a command and return its combined stdout and stderr.

    Args:
      args (list): Command and its arguments.
      require_success (boolean): Raise :class:`HelperError` on a non-zero
          exit status. If ``False`` whatever output there was is returned.

    For the other parameters, see :func:`subprocess.check_output`.

    Returns:
      str: Output of the command, decoded as UTF-8.

    Raises:
      HelperNotFoundError: if the command does not exist.
      HelperError: if the command fails and ``require_success`` is set.
        The message includes the command line and its output.
      OSError: if the command cannot be run for some other reason.

    Examples:
      ::

        >>> output = check_output(['echo', 'Hello world!'])
        >>> assert output == "Hello world!\n"
        >>> try:
        ...     check_output(['false'])
        ... except HelperError as e:
        ...     print(e.errno)
        ...     print(e.strerror)
        1
        Helper program 'false' exited with error 1:
        > false
        <BLANKLINE>
        >>> output = check_output(['false'], require_success=False)
        >>> assert output == ''
        >>> try:
        ...     check_output(['/non/exist'])
        ... except HelperNotFoundError as e:
        ...     print(e.errno)
        ...     print(e.strerror)
        2
        Unable to locate helper program '/non/exist'. Please check your $PATH.
    """
    cmd = args[0]
    logger.debug("Running '%s'", " ".join(args))
    try:
        stdout = subprocess.check_output(args, stderr=subprocess.STDOUT,
                                         **kwargs)
    except OSError as exc:
        raise _missing_program(exc, cmd)
    except subprocess.CalledProcessError as exc:
        stdout = exc.output.decode('utf-8', 'replace')
        if require_success:
            raise HelperError(exc.returncode,
                              "Helper program '{0}' exited with error {1}:"
                              "\n> {2}\n{3}".format(cmd, exc.returncode,
                                                    " ".join(args),
                                                    stdout))
        return stdout
    stdout = stdout.decode('utf-8', 'replace')
    logger.spam("%s output:\n%s", cmd, stdout)
    return stdout


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
