# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""User interface classes for ADP.

API
---

.. autosummary::
  :nosignatures:

  UI

UI modules
----------

.. autosummary::
  :toctree:

  ADP.ui.cli
  ADP.ui.ui
"""

from .ui import UI

__all__ = ('UI',)
