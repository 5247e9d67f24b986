#!/usr/bin/env python
#
# baseline.py - Compliance baseline for the provisioning server
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

"""Loading of the compliance baseline that a provisioned host must meet.

The baseline is a JSON document listing checks; each check names a
``kind`` of resource (``package``, ``port`` or ``service``), a ``target``
(package name, port number or service name), and the ``assertions`` that
must hold for it. A check may also carry ``control`` metadata grouping it
under a numbered, weighted control.

**Classes**

.. autosummary::
  :nosignatures:

  ComplianceCheck
  Control

**Functions**

.. autosummary::
  :nosignatures:

  load_baseline
"""

import json
import logging
from collections import namedtuple
from importlib import resources

from ADP.data_validation import (
    InvalidInputError, ValueUnsupportedError, validate_int,
)

logger = logging.getLogger(__name__)

ASSERTIONS = {
    'package': ('installed',),
    'port': ('listening',),
    'service': ('enabled', 'installed', 'running'),
}
"""Assertions that may be made about each kind of resource."""

DEFAULT_BASELINE = "baseline.json"
"""Name of the baseline shipped with this package."""

Control = namedtuple('Control', ['id', 'impact', 'title', 'desc'])


class ComplianceCheck(namedtuple('ComplianceCheck', [
        'kind', 'target', 'assertions', 'control'])):
    """A set of assertions about a single package, port or service.

    Examples:
      ::

        >>> ComplianceCheck('port', '80', ['listening'])
        ComplianceCheck(kind='port', target=80, assertions=('listening',), \
control=None)
        >>> try:
        ...     ComplianceCheck('package', 'apache2', ['running'])
        ... except ValueUnsupportedError as e:
        ...     print(e)
        Unsupported value 'running' for package assertion - expected \
('installed',)
    """

    __slots__ = ()

    def __new__(cls, kind, target, assertions, control=None):
        """Validate and build a check.

        Args:
          kind (str): ``package``, ``port`` or ``service``.
          target (object): Package name, port number, or service name.
          assertions (list): Assertions to make, see :data:`ASSERTIONS`.
          control (Control): Optional control this check belongs to.

        Raises:
          InvalidInputError: if the kind, target or assertions are invalid.
        """
        if kind not in ASSERTIONS:
            raise ValueUnsupportedError("check kind", kind,
                                        sorted(ASSERTIONS))
        if kind == 'port':
            target = validate_int(target, minimum=1, maximum=65535,
                                  label="port")
        elif not target or not str(target).strip():
            raise InvalidInputError("A {0} check requires a target name"
                                    .format(kind))
        else:
            target = str(target).strip()
        if not assertions:
            raise InvalidInputError("No assertions given for {0} {1}"
                                    .format(kind, target))
        for assertion in assertions:
            if assertion not in ASSERTIONS[kind]:
                raise ValueUnsupportedError("{0} assertion".format(kind),
                                            assertion, ASSERTIONS[kind])
        return super(ComplianceCheck, cls).__new__(
            cls, kind, target, tuple(assertions), control)

    def __str__(self):
        return "{0} {1}".format(self.kind, self.target)


def _control_from_dict(data):
    """Build a :class:`Control` from its JSON representation."""
    if data is None:
        return None
    try:
        return Control(id=str(data['id']),
                       impact=float(data.get('impact', 0.0)),
                       title=data.get('title', ""),
                       desc=data.get('desc', ""))
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInputError("Invalid control {0!r}: {1}"
                                .format(data, exc))


def parse_baseline(text, source="<string>"):
    """Parse a JSON compliance baseline.

    Args:
      text (str): JSON document.
      source (str): Label used in log and error messages.

    Returns:
      list: :class:`ComplianceCheck` objects, in document order.

    Raises:
      InvalidInputError: if the document is not a valid baseline.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise InvalidInputError("{0} is not valid JSON: {1}"
                                .format(source, exc))
    if not isinstance(data, dict) or not isinstance(data.get('checks'), list):
        raise InvalidInputError("{0} has no list of 'checks'".format(source))
    checks = []
    for entry in data['checks']:
        try:
            kind = entry['kind']
            target = entry['target']
            assertions = entry['assertions']
        except (KeyError, TypeError):
            raise InvalidInputError(
                "{0}: each check needs 'kind', 'target' and 'assertions', "
                "but got {1!r}".format(source, entry))
        checks.append(ComplianceCheck(kind, target, assertions,
                                      _control_from_dict(entry.get('control'))))
    logger.debug("Loaded %d compliance checks from %s", len(checks), source)
    return checks


def load_baseline(path=None):
    """Load a compliance baseline from a file.

    Args:
      path (str): JSON file to load. Defaults to the baseline shipped
        with this package.

    Returns:
      list: :class:`ComplianceCheck` objects, in file order.

    Raises:
      InvalidInputError: if the file is not a valid baseline.
      IOError: if the file cannot be read.

    Examples:
      ::

        >>> [str(check) for check in load_baseline()][:3]
        ['package tftpd-hpa', 'package apache2', 'port 80']
    """
    if path is None:
        text = (resources.files("ADP.compliance")
                .joinpath(DEFAULT_BASELINE).read_text())
        return parse_baseline(text, source=DEFAULT_BASELINE)
    logger.verbose("Loading compliance baseline from %s", path)
    with open(path) as fileobj:
        text = fileobj.read()
    return parse_baseline(text, source=path)
