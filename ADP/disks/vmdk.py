# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Handling of VMDK files."""

import logging
import os
import re

from ADP.helpers import helpers, HelperError
from ADP.helpers.vdiskmanager import VDiskManager

logger = logging.getLogger(__name__)

SECTOR_SIZE = 512


class VMDK(object):
    """VMDK disk image file representation."""

    disk_format = "vmdk"

    def __init__(self, path):
        """Create a representation of an existing disk.

        Args:
          path (str): Path to existing file.
        """
        if not path:
            raise ValueError("Path must be set to a valid value, but got {0}"
                             .format(path))
        if not os.path.exists(path):
            raise HelperError(2, "No such file or directory: '{0}'"
                              .format(path))
        self._path = path
        self._header = None
        self._disk_subformat = None
        self._capacity = None

    @property
    def path(self):
        """System path to this disk file."""
        return self._path

    @property
    def header(self):
        """Text portion of the VMDK descriptor at the start of the file."""
        if self._header is None:
            with open(self.path, 'rb') as fileobj:
                # The header contains a mix of binary and ASCII, so ignore
                # any errors in decoding binary data to strings
                self._header = fileobj.read(2048).decode('ascii', 'ignore')
        return self._header

    @property
    def disk_subformat(self):
        """Disk subformat, such as 'monolithicSparse'."""
        if self._disk_subformat is None:
            match = re.search('createType="(.*)"', self.header)
            if not match:
                raise RuntimeError(
                    "Could not find VMDK 'createType' in the "
                    "file header:\n{0}".format(self.header))
            self._disk_subformat = match.group(1)
            logger.debug("VMDK sub-format for %s is '%s'",
                         self.path, self._disk_subformat)
        return self._disk_subformat

    @property
    def capacity(self):
        """Capacity of this disk image, in bytes.

        Summed over the extent lines of the descriptor, e.g.
        ``RW 4192256 SPARSE "var-lib-mysql-s001.vmdk"``.
        """
        if self._capacity is None:
            sectors = [int(s) for s in
                       re.findall(r"^\s*RW\s+(\d+)\s", self.header,
                                  re.MULTILINE)]
            if not sectors:
                raise RuntimeError(
                    "Did not find any extent description in the "
                    "file header:\n{0}".format(self.header))
            self._capacity = sum(sectors) * SECTOR_SIZE
            logger.debug("Disk %s capacity is %s bytes", self.path,
                         self._capacity)
        return self._capacity

    @classmethod
    def create_file(cls, path, capacity, adapter_type, disk_type,
                    helper=None, require_success=True):
        """Create a new VMDK file using ``vmware-vdiskmanager``.

        Args:
          path (str): Location to create the disk file.
          capacity (str): Disk capacity such as ``"20GB"``.
          adapter_type (str): Adapter such as ``"lsilogic"``.
          disk_type (int): ``vmware-vdiskmanager -t`` code.
          helper (Helper): Program to run. Defaults to the registered
            ``vmware-vdiskmanager`` helper.
          require_success (bool): If ``False``, a non-zero exit from the
            helper is logged instead of raised.

        Raises:
          ValueError: if path is not a valid string
          RuntimeError: if a file already exists at path.
          HelperError: if the helper fails and ``require_success``.
        """
        if not path:
            raise ValueError("Path must be set to a valid value, but got {0}"
                             .format(path))
        if os.path.exists(path):
            raise RuntimeError("File already exists at {0}".format(path))
        if helper is None:
            helper = helpers['vmware-vdiskmanager']
        logger.info("Creating %s VMDK %s (%s, type %s)",
                    capacity, path, adapter_type, disk_type)
        helper.call(VDiskManager.create_args(path, capacity,
                                             adapter_type, disk_type),
                    capture_output=False,
                    require_success=require_success)
        if not os.path.exists(path):
            logger.warning("%s did not create %s", helper.name, path)
