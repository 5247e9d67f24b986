#!/usr/bin/env python
#
# utilities.py - General-purpose utility functions for ADP.
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

"""General-purpose utility functions for ADP.

**Functions**

.. autosummary::
  :nosignatures:

  available_bytes_at_path
  capacity_to_bytes
  pretty_bytes
"""

import logging
import os

from ADP.data_validation import disk_capacity

logger = logging.getLogger(__name__)

_UNIT_SHIFT = {
    'KB': 1,
    'MB': 2,
    'GB': 3,
}


def available_bytes_at_path(path):
    """Get the available disk space in a given directory.

    Args:
      path (str): Directory path to check.

    Returns:
      int: Available space, in bytes

    Raises:
      OSError: if the specified path does not exist or is not readable.
    """
    statvfs = os.statvfs(path)
    # available = free blocks times block size
    available = statvfs.f_bavail * statvfs.f_frsize
    logger.debug("There appears to be %s available at %s",
                 pretty_bytes(available), path)
    return available


def capacity_to_bytes(capacity):
    """Convert a ``vmware-vdiskmanager`` capacity string to a byte count.

    The disk manager treats its units as powers of 1024.

    Args:
      capacity (str): Capacity string such as ``"20GB"``.
    Returns:
      int: Number of bytes.
    Raises:
      InvalidInputError: if the capacity string is malformed.
    Examples:
      ::

        >>> capacity_to_bytes("20GB")
        21474836480
        >>> capacity_to_bytes("512kb")
        524288
    """
    capacity = disk_capacity(capacity)
    value, unit = int(capacity[:-2]), capacity[-2:]
    return value << (10 * _UNIT_SHIFT[unit])


def pretty_bytes(byte_value, base_shift=0):
    """Pretty-print the given bytes value.

    Args:
      byte_value (float): Value
      base_shift (int): Base value of byte_value
            (0 = bytes, 1 = KiB, 2 = MiB, etc.)

    Returns:
      str: Pretty-printed byte string such as "1.00 GiB"

    Examples:
      ::

        >>> pretty_bytes(512)
        '512 B'
        >>> pretty_bytes(512, 2)
        '512 MiB'
        >>> pretty_bytes(21474836480)
        '20 GiB'
        >>> pretty_bytes(65547)
        '64.01 KiB'
        >>> pretty_bytes(100, -1)
        Traceback (most recent call last):
            ...
        ValueError: base_shift must not be negative
    """
    if base_shift < 0:
        raise ValueError("base_shift must not be negative")
    tags = ["B", "KiB", "MiB", "GiB", "TiB"]
    byte_value = float(byte_value)
    shift = base_shift
    while byte_value >= 1024.0 and shift < len(tags) - 1:
        byte_value /= 1024.0
        shift += 1
    while byte_value < 1.0 and shift > 0:
        byte_value *= 1024.0
        shift -= 1
    # Fractions of a byte should be considered a rounding error:
    if shift == 0:
        byte_value = round(byte_value)
    return "{0:.4g} {1}".format(byte_value, tags[shift])


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
