#!/usr/bin/env python
#
# provisioner.py - Ensure the additional disk exists and is attached
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

"""Provisioning of a persistent additional disk for a development VM.

The disk image lives on the host, outside of the VM's own directory, so
that its contents (typically ``/var/lib/mysql``) survive the VM being
destroyed and rebuilt. Provisioning is idempotent: the directory and the
disk image are each created at most once, while the VM's attachment
settings are (re)applied on every run.

**Classes**

.. autosummary::
  :nosignatures:

  DiskProvisioner
"""

import logging
import os
import os.path

from ADP.disks import VMDK
from ADP.helpers import helpers

logger = logging.getLogger(__name__)


class DiskProvisioner(object):
    """Create the additional disk on the host and attach it to a VM.

    Args:
      home (str): Base directory under which the disk directory lives,
        normally the invoking user's home directory. May be empty.
      runner (Helper): Program used to create disk images. Defaults to the
        registered ``vmware-vdiskmanager`` helper.
      check_exit_status (bool): If ``False``, a failing disk creation is
        logged and provisioning carries on regardless.

    Examples:
      ::

        >>> from ADP.disks import DiskSpec
        >>> DiskProvisioner("/home/alice").disk_path(DiskSpec())
        '/home/alice/vagrant-additional-disk/var-lib-mysql.vmdk'
    """

    def __init__(self, home, runner=None, check_exit_status=True):
        """Create a provisioner rooted at the given home directory."""
        self.home = home or ""
        self._runner = runner
        self.check_exit_status = check_exit_status

    @property
    def runner(self):
        """Helper used to create disk images."""
        if self._runner is None:
            self._runner = helpers['vmware-vdiskmanager']
        return self._runner

    def host_directory(self, spec):
        """Directory on the host that holds the disk described by ``spec``."""
        return spec.host_directory(self.home)

    def disk_path(self, spec):
        """Path on the host of the disk described by ``spec``."""
        return spec.disk_path(self.home)

    def ensure_directory(self, spec):
        """Create the disk directory if it does not already exist.

        Only the last path component is created; a missing parent is an
        error rather than something to paper over.

        Args:
          spec (DiskSpec): Disk description.

        Returns:
          str: The directory path.

        Raises:
          RuntimeError: if the path exists but is not a directory.
          OSError: if the directory cannot be created.
        """
        directory = self.host_directory(spec)
        if os.path.isdir(directory):
            logger.debug("Directory %s already exists", directory)
            return directory
        elif os.path.exists(directory):
            raise RuntimeError("Path {0} exists but is not a directory!"
                               .format(directory))
        logger.info("Creating directory %s", directory)
        os.mkdir(directory)
        return directory

    def ensure_disk(self, spec):
        """Create the disk image if it does not already exist.

        Args:
          spec (DiskSpec): Disk description.

        Returns:
          str: Path of the disk image.

        Raises:
          HelperError: if disk creation fails and :attr:`check_exit_status`.
          HelperNotFoundError: if the disk manager cannot be located.
        """
        self.ensure_directory(spec)
        file_to_disk = self.disk_path(spec)
        if os.path.exists(file_to_disk):
            logger.verbose("Disk %s already exists, leaving it as-is",
                           file_to_disk)
            return file_to_disk
        VMDK.create_file(file_to_disk,
                         capacity=spec.capacity,
                         adapter_type=spec.adapter_type,
                         disk_type=spec.disk_type,
                         helper=self.runner,
                         require_success=self.check_exit_status)
        return file_to_disk

    def ensure_disk_attached(self, vm_config, spec):
        """Make sure the disk exists and ``vm_config`` attaches it.

        The attachment settings are applied every time, whether or not the
        disk image was created by this call.

        Args:
          vm_config (VMXConfig): VM hardware configuration to update in place.
          spec (DiskSpec): Disk description.
        """
        file_to_disk = self.ensure_disk(spec)
        vm_config.set_device_filename(spec.slot, file_to_disk)
        vm_config.set_device_present(spec.slot, True)
        vm_config.set_device_redo(spec.slot, "")
        logger.info("Disk %s is attached at %s", file_to_disk, spec.slot)
