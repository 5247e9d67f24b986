#!/usr/bin/env python
#
# systemctl.py - Helper for 'systemctl'
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

"""Give ADP access to ``systemctl`` for querying systemd service state.

https://www.freedesktop.org/wiki/Software/systemd/
"""

import logging
import re

from .helper import Helper

logger = logging.getLogger(__name__)


class Systemctl(Helper):
    """Helper provider for ``systemctl`` from systemd."""

    ENABLED_STATES = ('enabled', 'enabled-runtime', 'static',
                      'alias', 'indirect', 'generated')
    """``systemctl is-enabled`` answers that count as enabled."""

    def __init__(self):
        """Initializer."""
        super(Systemctl, self).__init__(
            "systemctl",
            info_uri="https://www.freedesktop.org/wiki/Software/systemd/")

    def _query(self, *args):
        """Run a read-only systemctl query and return its first output line.

        Args:
          *args: Arguments to pass to systemctl.

        Returns:
          str: First line of output, stripped (may be empty).
        """
        output = self.call(list(args), require_success=False,
                           use_cached=False)
        lines = output.strip().splitlines()
        return lines[0].strip() if lines else ""

    def is_enabled(self, service):
        """Check whether the service is enabled to start at boot."""
        state = self._query('is-enabled', service)
        logger.debug("Service %s is-enabled: '%s'", service, state)
        return state in self.ENABLED_STATES

    def is_running(self, service):
        """Check whether the service is currently active."""
        state = self._query('is-active', service)
        logger.debug("Service %s is-active: '%s'", service, state)
        return state == 'active'

    def is_installed(self, service):
        """Check whether systemd knows a unit file for the service.

        Args:
          service (str): Service name, with or without ``.service``.

        Returns:
          bool: False if systemd reports the unit as "not-found".
        """
        state = self._query('show', '--property=LoadState', service)
        match = re.match(r"LoadState=(\S*)", state)
        load_state = match.group(1) if match else ""
        logger.debug("Service %s LoadState: '%s'", service, load_state)
        return load_state not in ("", "not-found")
