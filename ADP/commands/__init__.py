# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Package implementing the various ADP subcommands.

API
---

.. autosummary::
  :nosignatures:

  Command
  ReadWriteCommand

Command modules
---------------

.. autosummary::
  :toctree:

  ADP.commands.attach_disk
  ADP.commands.check
"""

from .command import command_classes, Command, ReadWriteCommand

# flake8: noqa: F401
from .attach_disk import ADPAttachDisk
from .check import ADPCheck

__all__ = (
    'command_classes',
    'Command',
    'ReadWriteCommand',
)
