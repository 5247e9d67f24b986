#!/usr/bin/env python
#
# command.py - Abstract interface for ADP command implementations.
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

"""Base classes shared by the ``adp`` subcommands.

**Classes**

.. autosummary::
  :nosignatures:

  Command
  ReadWriteCommand
"""

import os.path
import logging

from ADP.data_validation import InvalidInputError
from ADP.utilities import available_bytes_at_path, pretty_bytes
from ADP.vmx import VMXConfig

logger = logging.getLogger(__name__)

command_classes = []   # pylint: disable=invalid-name
"""Concrete command classes, each appended by its own module."""


def _nearest_directory(location):
    """Closest existing directory at or above ``location``."""
    dir_path = os.path.abspath(location)
    while dir_path and not os.path.isdir(dir_path):
        parent = os.path.dirname(dir_path)
        if parent == dir_path:
            break
        dir_path = parent
    return dir_path


class Command(object):
    """One ``adp`` subcommand.

    A command is configured by setting its attributes, then driven through
    :meth:`ready_to_run`, :meth:`run`, :meth:`finished` and :meth:`destroy`
    in that order.

    Attributes:
    :attr:`vm`,
    :attr:`ui`
    """

    def __init__(self, ui):
        """Create the command.

        Args:
          ui (UI): Where to send prompts and messages.
        """
        self.vm = None
        """Loaded VMX configuration (:class:`~ADP.vmx.VMXConfig`), if any."""
        self.ui = ui
        """User interface instance (:class:`~ADP.ui.UI` or subclass)."""
        # directory --> (largest size checked, bytes available)
        self._space_checks = {}

    def ready_to_run(self):
        """Report whether :meth:`run` can proceed.

        Returns:
          tuple: ``(True, ready_message)`` or ``(False, reason_why_not)``
        """
        return True, "Ready to go!"

    def run(self):
        """Carry out the command.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``
        """
        ready, reason = self.ready_to_run()
        if not ready:
            raise InvalidInputError(reason)

    def finished(self):
        """Hook called after a successful :meth:`run`. Does nothing here."""
        pass

    def destroy(self):
        """Drop the loaded VMX configuration."""
        self.vm = None

    def create_subparser(self):
        """Register this command's CLI subparser, if it has one."""
        pass

    def check_disk_space(self, required_size, location,
                         label="File", context=None,
                         force_check=False, die=False):
        """Make sure ``location`` has room for ``required_size`` bytes.

        When it does not, the user is asked whether to carry on anyway.
        The answer is remembered per directory; asking again for the same
        directory only checks (and prompts) again when a larger size is
        requested or ``force_check`` is set.

        Args:
          required_size (int): Bytes needed.
          location (str): Path that will be written to. It need not exist
            yet; its nearest existing parent directory is checked.
          label (str): What needs the space, for the prompt.
          context (str): Extra explanation appended to the prompt.
          force_check (bool): Check and prompt even if cached.
          die (bool): Exit rather than return ``False`` if the user
            declines.

        Returns:
          bool: ``True`` if there is room or the user chose to continue.

        Raises:
          SystemExit: if ``die`` is set and the user declines.
        """
        dir_path = _nearest_directory(location)

        if dir_path in self._space_checks and not force_check:
            checked, available = self._space_checks[dir_path]
            if required_size <= checked:
                return required_size <= available

        logger.verbose("Need %s of disk space in %s",
                       pretty_bytes(required_size), dir_path)
        available = available_bytes_at_path(dir_path)
        self._space_checks[dir_path] = (required_size, available)
        if required_size <= available:
            return True

        msg = ("{0} may require up to {1} of disk space,"
               " but only {2} is available at {3}."
               .format(label, pretty_bytes(required_size),
                       pretty_bytes(available), location))
        if context:
            msg += "\n({0})".format(context)
        msg += "\nOperation may fail. Continue anyway?"
        if die:
            self.ui.confirm_or_die(msg)
            return True
        return self.ui.confirm(msg)


class ReadWriteCommand(Command):
    """A command that edits a VMX file, in place or into a new file.

    Inherited attributes:
    :attr:`vm`,
    :attr:`ui`

    Attributes:
    :attr:`package`,
    :attr:`output`
    """

    package_required = True
    """Whether a :attr:`package` must be given before :meth:`run`."""

    def __init__(self, ui):
        """Create the command.

        Args:
          ui (UI): Where to send prompts and messages.
        """
        super(ReadWriteCommand, self).__init__(ui)
        self._package = None
        self._output = ""

    @property
    def package(self):
        """Path of the VMX file to edit.

        Assigning a path parses that file into :attr:`vm`; assigning
        ``None`` clears :attr:`vm`.

        Raises:
          InvalidInputError: if the file does not exist.
          VMXParseError: if the file cannot be parsed.
        """
        return self._package

    @package.setter
    def package(self, value):
        if value is not None and not os.path.exists(value):
            raise InvalidInputError("Specified VMX file {0} does not exist!"
                                    .format(value))
        self.vm = VMXConfig.from_file(value) if value is not None else None
        self._package = value

    @property
    def output(self):
        """Where :meth:`finished` writes the edited VMX file.

        Empty means "same as :attr:`package`". Naming a file that already
        exists asks the user (:meth:`~ADP.ui.UI.confirm_or_die`) before
        accepting it.

        Raises:
          InvalidInputError: if the path or its parent directory is
            unusable.
        """
        return self._output

    @output.setter
    def output(self, value):
        if value:
            value = os.path.abspath(value)
        if value == self._output:
            return
        if value and os.path.exists(value):
            if not os.path.isfile(value):
                raise InvalidInputError(
                    "Output location '{0}' exists but is not a normal file"
                    .format(value))
            self.ui.confirm_or_die("Overwrite existing file {0}?"
                                   .format(value))
        elif value:
            dirpath = os.path.dirname(value)
            if not os.path.exists(dirpath):
                raise InvalidInputError(
                    "Output parent path '{0}/' does not exist"
                    .format(dirpath))
            if not os.path.isdir(dirpath):
                raise InvalidInputError(
                    "Output parent path '{0}/' is not a directory"
                    .format(dirpath))
        self._output = value

    def ready_to_run(self):
        """Report whether :meth:`run` can proceed.

        Returns:
          tuple: ``(True, ready_message)`` or ``(False, reason_why_not)``
        """
        if self.package_required and self.package is None:
            return False, "VMX is a mandatory argument!"
        return super(ReadWriteCommand, self).ready_to_run()

    def run(self):
        """Carry out the command, defaulting :attr:`output` to the input.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``
        """
        super(ReadWriteCommand, self).run()
        if self.package and not self.output:
            self._output = os.path.abspath(self.package)

    def finished(self):
        """Save :attr:`vm` to :attr:`output`, if a VMX file was loaded."""
        if self.vm is not None:
            self.vm.write(self.output)
        super(ReadWriteCommand, self).finished()
