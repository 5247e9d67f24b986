#!/usr/bin/env python
#
# check.py - Implements "adp check" command
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

"""Module for verifying a provisioned host against the compliance baseline.

**Classes**

.. autosummary::
  :nosignatures:

  ADPCheck
"""

import logging
import os.path

from ADP.compliance import (
    ComplianceError, load_baseline, run_checks, summarize,
)
from ADP.data_validation import InvalidInputError
from .command import command_classes, Command

logger = logging.getLogger(__name__)


class ADPCheck(Command):
    """Check packages, ports and services of this host against a baseline.

    Inherited attributes:
    :attr:`~Command.ui`

    Attributes:
    :attr:`baseline`,
    :attr:`results`
    """

    def __init__(self, ui):
        """Instantiate this command with the given UI.

        Args:
          ui (UI): User interface instance.
        """
        super(ADPCheck, self).__init__(ui)
        self._baseline = None
        self.results = []
        """:class:`~ADP.compliance.CheckResult` list from the last run."""

    @property
    def baseline(self):
        """JSON baseline file to check against (default: built-in baseline).

        Raises:
          InvalidInputError: if the file does not exist.
        """
        return self._baseline

    @baseline.setter
    def baseline(self, value):
        if value is not None and not os.path.isfile(value):
            raise InvalidInputError("Specified baseline {0} does not exist!"
                                    .format(value))
        self._baseline = value

    def run(self):
        """Do the actual work of this command.

        Raises:
          InvalidInputError: if the baseline is invalid.
          ComplianceError: if any check fails.
          HelperNotFoundError: if a program needed for a check is missing.
        """
        super(ADPCheck, self).run()

        checks = load_baseline(self.baseline)
        self.results = run_checks(checks)
        for result in self.results:
            print(result)

        failed, total = summarize(self.results)
        if failed:
            raise ComplianceError(1, "{0} of {1} compliance checks failed"
                                  .format(failed, total))
        logger.notice("All %d compliance checks passed", total)

    def create_subparser(self):
        """Create 'check' CLI subparser."""
        parser = self.ui.add_subparser(
            'check',
            aliases=['verify'],
            help="""Verify this host against the compliance baseline""",
            usage=self.ui.fill_usage("check", ["[-b BASELINE]"]),
            description="""
Verify that the packages, listening ports and services that a provisioning
server relies on are present on this host. Each assertion is reported as
PASS or FAIL; the command fails if any assertion fails.""")

        parser.add_argument('-b', '--baseline',
                            help="""JSON baseline file to check against """
                            """(default: the built-in baseline)""")
        parser.set_defaults(instance=self)


command_classes.append(ADPCheck)
