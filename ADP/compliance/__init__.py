# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Compliance baseline for a host built with the additional disk.

API
---

.. autosummary::
  :nosignatures:

  CheckResult
  ComplianceCheck
  ComplianceError
  load_baseline
  run_checks

Compliance modules
------------------

.. autosummary::
  :toctree:

  ADP.compliance.baseline
  ADP.compliance.checker
"""

# flake8: noqa: F401

from .baseline import ComplianceCheck, Control, load_baseline
from .checker import CheckResult, ComplianceError, run_checks, summarize

__all__ = (
    'CheckResult',
    'ComplianceCheck',
    'ComplianceError',
    'load_baseline',
    'run_checks',
)
