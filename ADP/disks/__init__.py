# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Package describing the additional disk and handling its VMDK file.

API
---

.. autosummary::
  :nosignatures:

  DiskSpec
  VMDK

Disk modules
------------

.. autosummary::
  :toctree:

  ADP.disks.spec
  ADP.disks.vmdk
"""

# flake8: noqa: F401

from .spec import DiskSpec, DISK_TYPES, controller_slot
from .vmdk import VMDK

__all__ = (
    'DiskSpec',
    'VMDK',
)
