#!/usr/bin/env python
#
# ui.py - abstraction between CLI and other front ends
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

"""Abstract user interface superclass.

**Classes**

.. autosummary::
  :nosignatures:

  UI
"""

import logging
import sys

logger = logging.getLogger(__name__)


class UI(object):
    """Abstract user interface functionality.

    Can also be used in test code as a stub that autoconfirms everything.
    """

    def __init__(self, force=False):
        """Constructor.

        Args:
          force (bool): See :attr:`force`.
        """
        self.force = force
        """Whether to automatically select the default value in all cases.

        (As opposed to interactively prompting the user.)
        """
        self.default_confirm_response = True
        """Knob for API testing, sets the default response to confirm()."""
        self._terminal_width = 80

    @property
    def terminal_width(self):
        """Get the width of the terminal in columns."""
        return self._terminal_width

    def fill_usage(self,   # pylint: disable=no-self-use
                   subcommand, usage_list):
        """Pretty-print a list of usage strings.

        Args:
          subcommand (str): Subcommand name/keyword
          usage_list (list): List of usage strings for this subcommand.
        Returns:
          str: Concatenation of all usage strings, each appropriately wrapped
          to the :attr:`terminal_width` value.

        Examples:
          ::

            >>> print(UI().fill_usage("check", ["[-b BASELINE]"]))
            check [-b BASELINE]
        """
        return "\n".join(["{0} {1}".format(subcommand, usage)
                          for usage in usage_list])

    def confirm(self, prompt):
        """Prompt user to confirm the requested operation.

        Auto-accepts if :attr:`force` is set to ``True``.

        .. warning::
          This stub implementation does not actually interact with the user,
          but instead returns :attr:`default_confirm_response`. Subclasses
          should override this method.

        Args:
          prompt (str): Message to prompt the user with
        Returns:
          bool: ``True`` (user confirms acceptance) or ``False``
          (user declines)
        """
        if self.force:
            logger.warning("Automatically agreeing to '%s'", prompt)
            return True
        return self.default_confirm_response

    def confirm_or_die(self, prompt):
        """If the user doesn't agree, abort the program.

        A simple wrapper for :meth:`confirm` that calls :func:`sys.exit` if
        :meth:`confirm` returns ``False``.

        Args:
          prompt (str): Message to prompt the user with
        Raises:
          SystemExit: if user declines
        """
        if not self.confirm(prompt):
            sys.exit("Aborting.")

