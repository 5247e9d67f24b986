#!/usr/bin/env python
#
# attach_disk.py - Implements "adp attach-disk" command
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

"""Module for creating the additional disk and attaching it to a VM.

**Classes**

.. autosummary::
  :nosignatures:

  ADPAttachDisk
"""

import logging
import os
import os.path

from ADP.data_validation import SCSI_SUBTYPES
from ADP.disks import DiskSpec, DISK_TYPES
from ADP.helpers.vdiskmanager import VDiskManager
from ADP.provisioner import DiskProvisioner
from ADP.utilities import capacity_to_bytes
from ADP.vmx import VMXConfig
from .command import command_classes, ReadWriteCommand

logger = logging.getLogger(__name__)


class ADPAttachDisk(ReadWriteCommand):
    """Create the persistent additional disk and attach it to a VM.

    Inherited attributes:
    :attr:`~Command.ui`,
    :attr:`~ReadWriteCommand.package`,
    :attr:`~ReadWriteCommand.output`

    Attributes:
    :attr:`home`,
    :attr:`directory_name`,
    :attr:`file_name`,
    :attr:`size`,
    :attr:`adapter`,
    :attr:`disk_type`,
    :attr:`controller_slot`,
    :attr:`vdiskmanager`
    """

    package_required = False

    def __init__(self, ui):
        """Instantiate this command with the given UI.

        Args:
          ui (UI): User interface instance.
        """
        super(ADPAttachDisk, self).__init__(ui)
        self.home = None
        """Base directory for the disk directory (default: ``$HOME``)."""
        self.directory_name = DiskSpec.DEFAULT_DIRECTORY_NAME
        """Name of the directory, under :attr:`home`, holding the disk."""
        self.file_name = DiskSpec.DEFAULT_FILE_NAME
        """Name of the disk image file."""
        self.size = DiskSpec.DEFAULT_CAPACITY
        """Disk capacity such as ``20GB``."""
        self.adapter = DiskSpec.DEFAULT_ADAPTER_TYPE
        """Disk adapter type."""
        self.disk_type = DiskSpec.DEFAULT_DISK_TYPE
        """``vmware-vdiskmanager`` disk type code."""
        self.controller_slot = DiskSpec.DEFAULT_SLOT
        """VMX device slot to attach the disk at."""
        self.vdiskmanager = None
        """Explicit path to ``vmware-vdiskmanager``, if any."""
        self.check_exit_status = True
        """Whether a failing ``vmware-vdiskmanager`` aborts the command."""
        self._provisioner = None

    @property
    def spec(self):
        """:class:`~ADP.disks.DiskSpec` built from the current attributes.

        Raises:
          InvalidInputError: if any attribute is invalid.
        """
        return DiskSpec(directory_name=self.directory_name,
                        file_name=self.file_name,
                        capacity=self.size,
                        adapter_type=self.adapter,
                        disk_type=self.disk_type,
                        slot=self.controller_slot)

    @property
    def provisioner(self):
        """:class:`~ADP.provisioner.DiskProvisioner` for this invocation."""
        if self._provisioner is None:
            home = self.home
            if home is None:
                home = os.environ.get('HOME', '')
            runner = None
            if self.vdiskmanager:
                runner = VDiskManager(path=self.vdiskmanager)
            self._provisioner = DiskProvisioner(
                home, runner=runner,
                check_exit_status=self.check_exit_status)
        return self._provisioner

    def ready_to_run(self):
        """Check whether the module is ready to :meth:`run`.

        Returns:
          tuple: ``(True, ready_message)`` or ``(False, reason_why_not)``
        """
        if self.output and self.package is None:
            return False, "--output requires a VMX file to edit"
        spec = self.spec
        disk_path = self.provisioner.disk_path(spec)
        if spec.disk_subformat.endswith("Sparse"):
            context = "A sparse disk grows on demand up to its full size"
        else:
            context = "A flat disk is allocated in full up front"
        if (not os.path.exists(disk_path) and
                not self.check_disk_space(
                    capacity_to_bytes(spec.capacity), disk_path,
                    label="Disk image {0}".format(spec.file_name),
                    context=context)):
            return (False,
                    "Insufficient disk space available for {0}.\nYou may "
                    "wish to choose a different location using --home."
                    .format(disk_path))
        return super(ADPAttachDisk, self).ready_to_run()

    def run(self):
        """Do the actual work of this command.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``
          HelperError: if the disk image could not be created.
          HelperNotFoundError: if ``vmware-vdiskmanager`` is missing.
        """
        super(ADPAttachDisk, self).run()

        spec = self.spec
        disk_path = self.provisioner.disk_path(spec)
        if self.vm is None:
            # Nothing to edit; show what a VMX file needs instead
            preview = VMXConfig()
            self.provisioner.ensure_disk_attached(preview, spec)
            logger.notice("Add the following to the VM's .vmx file:\n%s",
                          preview.to_string().rstrip())
            return

        existing = self.vm.device_filename(spec.slot)
        if existing and existing != disk_path:
            self.ui.confirm_or_die(
                "{0} is already attached at {1} and will be replaced by {2}."
                " Continue?".format(existing, spec.slot, disk_path))
        self.provisioner.ensure_disk_attached(self.vm, spec)

    def destroy(self):
        """Forget the VMX file and the provisioner built for this run."""
        self._provisioner = None
        super(ADPAttachDisk, self).destroy()

    def create_subparser(self):
        """Create 'attach-disk' CLI subparser."""
        parser = self.ui.add_subparser(
            'attach-disk',
            aliases=['add-drive'],
            add_help=False,
            usage=self.ui.fill_usage("attach-disk", [
                "[VMX] [-o OUTPUT] [--home HOME] [-d DIRECTORY_NAME] \
[-n FILE_NAME] [-s SIZE] [-a ADAPTER] [-t {0,1,2,3}] [-c CONTROLLER_SLOT] \
[--vdiskmanager PATH]",
            ]),
            help="""Create the additional disk if needed and attach it
to a VMware VM""",
            description="""
Create a persistent virtual disk in a directory under your home directory
(unless it already exists), then attach it to the given VMX file. The disk
lives outside the VM's own directory so its contents survive the VM being
destroyed and rebuilt. If no VMX file is given, the disk is created and the
settings needed to attach it are displayed.""")

        group = parser.add_argument_group("general options")

        group.add_argument('-h', '--help', action='help',
                           help="""Show this help message and exit""")
        group.add_argument('-o', '--output',
                           help="""Name/path of new VMX file to create """
                           """instead of updating the existing VMX""")

        group = parser.add_argument_group("disk-related options")

        group.add_argument('--home',
                           help="""Directory under which the disk directory """
                           """is created (default: $HOME)""")
        group.add_argument('-d', '--directory-name',
                           help="""Name of the directory holding the disk """
                           """(default: "{0}")"""
                           .format(DiskSpec.DEFAULT_DIRECTORY_NAME))
        group.add_argument('-n', '--file-name',
                           help="""Disk image file name (default: "{0}")"""
                           .format(DiskSpec.DEFAULT_FILE_NAME))
        group.add_argument('-s', '--size',
                           help="""Disk capacity, such as "20GB" (default: """
                           """{0})""".format(DiskSpec.DEFAULT_CAPACITY))
        group.add_argument('-a', '--adapter',
                           help="""Disk adapter type, one of {0} (default: """
                           """{1})""".format(", ".join(SCSI_SUBTYPES),
                                             DiskSpec.DEFAULT_ADAPTER_TYPE))
        group.add_argument('-t', '--type', dest='disk_type', type=int,
                           choices=sorted(DISK_TYPES),
                           help="""vmware-vdiskmanager disk type (default: """
                           """{0}, "{1}")""".format(
                               DiskSpec.DEFAULT_DISK_TYPE,
                               DISK_TYPES[DiskSpec.DEFAULT_DISK_TYPE]))
        group.add_argument('--vdiskmanager', metavar='PATH',
                           help="""Path to vmware-vdiskmanager (default: """
                           """$VDISKMANAGER, the VMware install location, """
                           """or $PATH)""")
        group.add_argument('--ignore-exit-status', dest='check_exit_status',
                           action='store_const', const=False,
                           help="""Attach the disk even if """
                           """vmware-vdiskmanager reports a failure""")

        group = parser.add_argument_group("controller-related options")

        group.add_argument('-c', '--controller-slot',
                           help="""VMX device slot for the disk (default: """
                           """{0})""".format(DiskSpec.DEFAULT_SLOT))

        parser.add_argument('PACKAGE', nargs='?', metavar='VMX',
                            help="""VMware .vmx file to edit""")
        parser.set_defaults(instance=self)


command_classes.append(ADPAttachDisk)
