# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""
Provides a common interface for interacting with various non-Python programs.

API
---

.. autosummary::
  :nosignatures:

  Helper
  helpers

Exceptions
----------

.. autosummary::

  ~ADP.helpers.helper.HelperError
  ~ADP.helpers.helper.HelperNotFoundError

Helper modules
--------------

.. autosummary::
  :toctree:

  ADP.helpers.helper
  ADP.helpers.dpkg
  ADP.helpers.ss
  ADP.helpers.systemctl
  ADP.helpers.vdiskmanager
"""

from .helper import (
    Helper, helpers,
    HelperError, HelperNotFoundError,
)

# flake8: noqa: F401

from .dpkg import Dpkg
from .ss import SS
from .systemctl import Systemctl
from .vdiskmanager import VDiskManager

# pylint:disable=no-member


# Populate helpers dictionary
for cls in Helper.__subclasses__():
    ins = cls()
    helpers[ins.name] = ins


__all__ = (
    'Helper',
    'HelperError',
    'HelperNotFoundError',
    'helpers',
)
