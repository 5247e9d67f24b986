#!/usr/bin/env python
#
# ss.py - Helper for 'ss'
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

"""Give ADP access to ``ss`` for discovering listening sockets.

https://wiki.linuxfoundation.org/networking/iproute2
"""

import logging

from .helper import Helper

logger = logging.getLogger(__name__)


class SS(Helper):
    """Helper provider for ``ss`` from iproute2."""

    def __init__(self):
        """Initializer."""
        super(SS, self).__init__(
            "ss",
            info_uri="https://wiki.linuxfoundation.org/networking/iproute2")

    def listening_ports(self):
        """Get the set of local ports with a listening TCP or bound UDP socket.

        Returns:
          set: Port numbers (int).
        """
        output = self.call(['-l', '-n', '-t', '-u'], use_cached=False)
        return self.parse_ports(output)

    @staticmethod
    def parse_ports(output):
        """Extract local port numbers from ``ss -lntu`` output.

        Args:
          output (str): Output of ``ss``, with or without its header line.

        Returns:
          set: Port numbers (int).

        Examples:
          ::

            >>> sorted(SS.parse_ports(
            ... "Netid State  Recv-Q Send-Q Local Address:Port Peer Address:Port\\n"
            ... "udp   UNCONN 0      0            0.0.0.0:68        0.0.0.0:*\\n"
            ... "tcp   LISTEN 0      511                *:80              *:*\\n"
            ... "tcp   LISTEN 0      128             [::]:22           [::]:*\\n"))
            [22, 68, 80]
        """    # noqa: E501
        ports = set()
        for line in output.splitlines():
            fields = line.split()
            if len(fields) < 5 or fields[0] == "Netid":
                continue
            port = fields[4].rsplit(":", 1)[-1]
            if port.isdigit():
                ports.add(int(port))
        logger.spam("Listening ports: %s", sorted(ports))
        return ports

    def is_listening(self, port):
        """Check whether anything is listening on the given local port.

        Args:
          port (int): Port number.

        Returns:
          bool: Whether a listening socket was found.
        """
        return int(port) in self.listening_ports()
