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
Package implementing the Additional Disk Provisioner.

ADP makes sure a persistent data disk exists on the host and is attached
to a development VM's secondary SCSI slot, and checks a provisioned host
against its compliance baseline.

Utility modules
---------------
.. autosummary::
  :toctree:

  ADP.data_validation
  ADP.provisioner
  ADP.utilities
  ADP.vmx

Sub-packages
------------
.. autosummary::
  :toctree:

  ADP.commands
  ADP.compliance
  ADP.disks
  ADP.helpers
  ADP.ui

.. note::
  The hierarchy of permissible imports between sub-packages is as follows::

      ADP.ui
         |
         +---> ADP.commands
         |        |
         |        +---> ADP.provisioner ---> ADP.vmx
         |        |        |
         |        |        +---> ADP.disks
         |        |                 |
         |        +---> ADP.compliance
         |                          |
         +--------------------------+---> ADP.helpers

  None of the other sub-packages may ``import ADP.ui``.
"""

import logging

# VerboseLogger adds a log level 'verbose' between 'info' and 'debug'.
# This lets us be a bit more fine-grained in our logging verbosity.
from verboselogs import VerboseLogger

logging.setLoggerClass(VerboseLogger)
logging.captureWarnings(True)

__version__ = "1.0.0"

__version_long__ = (
    """Additional Disk Provisioner (ADP), version """ + __version__ +
    """\nCopyright (C) 2026 the ADP project developers."""
)
