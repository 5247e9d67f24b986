#!/usr/bin/env python
#
# checker.py - Evaluate compliance checks against the local host
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

"""Evaluation of compliance checks against the running host.

Package state is queried with ``dpkg``, listening ports with ``ss`` and
service state with ``systemctl``.

**Classes**

.. autosummary::
  :nosignatures:

  CheckResult
  ComplianceError

**Functions**

.. autosummary::
  :nosignatures:

  run_checks
  summarize
"""

import logging
from collections import namedtuple

from ADP.helpers import helpers

logger = logging.getLogger(__name__)


class ComplianceError(EnvironmentError):
    """One or more compliance checks did not pass."""


class CheckResult(namedtuple('CheckResult',
                             ['check', 'assertion', 'passed'])):
    """Outcome of one assertion of one :class:`ComplianceCheck`."""

    __slots__ = ()

    def __str__(self):
        return "[{0}] {1} {2} {3}".format(
            "PASS" if self.passed else "FAIL",
            self.check.kind, self.check.target, self.assertion)


class _Probe(object):
    """Answer compliance questions, querying each helper as needed."""

    def __init__(self, helper_lookup):
        self.helpers = helper_lookup
        self._listening_ports = None

    def package_installed(self, package):
        return self.helpers['dpkg'].package_installed(package)

    def port_listening(self, port):
        # One socket listing serves every port check in a run
        if self._listening_ports is None:
            self._listening_ports = self.helpers['ss'].listening_ports()
        return port in self._listening_ports

    def service_enabled(self, service):
        return self.helpers['systemctl'].is_enabled(service)

    def service_installed(self, service):
        return self.helpers['systemctl'].is_installed(service)

    def service_running(self, service):
        return self.helpers['systemctl'].is_running(service)

    def evaluate(self, check, assertion):
        """Dispatch to the method for ``check.kind`` and ``assertion``."""
        method = getattr(self, "{0}_{1}".format(check.kind, assertion))
        return bool(method(check.target))


def run_checks(checks, helper_lookup=None):
    """Evaluate every assertion of every check.

    Args:
      checks (list): :class:`~ADP.compliance.baseline.ComplianceCheck`
        objects, as from :func:`~ADP.compliance.baseline.load_baseline`.
      helper_lookup (dict): Mapping of helper name to :class:`Helper`.
        Defaults to :data:`ADP.helpers.helpers`.

    Returns:
      list: :class:`CheckResult` objects, one per assertion, in order.

    Raises:
      HelperNotFoundError: if a program needed to answer a check is missing.
    """
    probe = _Probe(helpers if helper_lookup is None else helper_lookup)
    results = []
    for check in checks:
        if check.control is not None:
            logger.verbose("Control %s (impact %s): %s", check.control.id,
                           check.control.impact, check.control.title)
        for assertion in check.assertions:
            result = CheckResult(check, assertion,
                                 probe.evaluate(check, assertion))
            if result.passed:
                logger.verbose("%s", result)
            else:
                logger.info("%s", result)
            results.append(result)
    return results


def summarize(results):
    """Summarize a list of results.

    Args:
      results (list): :class:`CheckResult` objects.

    Returns:
      tuple: ``(failed, total)`` counts.

    Examples:
      ::

        >>> summarize([])
        (0, 0)
    """
    failed = len([result for result in results if not result.passed])
    return failed, len(results)
