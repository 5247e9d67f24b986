#!/usr/bin/env python
#
# vdiskmanager.py - Helper for 'vmware-vdiskmanager'
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

"""Give ADP access to ``vmware-vdiskmanager`` for creating VMDK files.

https://docs.vmware.com/en/VMware-Fusion/
"""

import logging
import os
import os.path
import platform

from .helper import Helper, HelperNotFoundError

logger = logging.getLogger(__name__)

INSTALL_PATHS = {
    'Darwin': [
        '/Applications/VMware Fusion.app/Contents/Library/vmware-vdiskmanager',
    ],
    'Linux': [
        '/usr/bin/vmware-vdiskmanager',
        '/usr/local/bin/vmware-vdiskmanager',
    ],
    'Windows': [
        'C:\\Program Files (x86)\\VMware\\VMware Workstation\\'
        'vmware-vdiskmanager.exe',
        'C:\\Program Files\\VMware\\VMware Workstation\\'
        'vmware-vdiskmanager.exe',
    ],
}
"""Places where VMware products install the disk manager, by platform."""


class VDiskManager(Helper):
    """Helper provider for ``vmware-vdiskmanager`` from VMware.

    The disk manager ships inside VMware Fusion / Workstation rather than
    on ``$PATH``, so in addition to ``$PATH`` we look in the product's
    fixed install location. Setting ``$VDISKMANAGER`` overrides both.
    """

    ENV_VAR = 'VDISKMANAGER'

    def __init__(self, path=None):
        """Initializer.

        Args:
          path (str): Explicit location of the disk manager, taking
            precedence over $VDISKMANAGER and the install locations.
        """
        super(VDiskManager, self).__init__(
            "vmware-vdiskmanager",
            info_uri="https://docs.vmware.com/en/VMware-Fusion/")
        self.override_path = path

    def _find(self):
        """Locate the disk manager.

        Returns:
          str: Path to the disk manager, or ``None``.

        Raises:
          HelperNotFoundError: if the explicit path or ``$VDISKMANAGER``
            names a missing file.
        """
        if self.override_path:
            source, override = "Path", self.override_path
        else:
            source, override = "$" + self.ENV_VAR, os.environ.get(self.ENV_VAR)
        if override:
            if not os.path.isfile(override):
                raise HelperNotFoundError(
                    2, "{0} is set to '{1}', but no such file exists"
                    .format(source, override))
            logger.debug("Using %s override %s", source, override)
            return override
        for candidate in INSTALL_PATHS.get(platform.system(), []):
            if os.path.isfile(candidate):
                return candidate
        return super(VDiskManager, self)._find()

    def not_found_error(self):
        """Return a more detailed error message for the disk manager.

        VMware distributes the disk manager only as part of its desktop
        hypervisors, so there is nothing ADP can install.

        Returns:
          HelperNotFoundError: Error describing how to obtain the helper.
        """
        return HelperNotFoundError(
            2,
            "Unable to locate vmware-vdiskmanager. It is installed as part "
            "of VMware Fusion or VMware Workstation; set ${0} to its path "
            "if it is installed somewhere unusual. See {1}"
            .format(self.ENV_VAR, self.info_uri))

    @staticmethod
    def create_args(path, capacity, adapter_type, disk_type):
        """Build the argument list that creates a new virtual disk.

        Args:
          path (str): Disk file to create.
          capacity (str): Capacity string such as ``"20GB"``.
          adapter_type (str): Adapter such as ``"lsilogic"``.
          disk_type (int): Disk type code passed to ``-t``.

        Returns:
          list: Arguments for :meth:`call`.

        Examples:
          ::

            >>> VDiskManager.create_args("/x.vmdk", "20GB", "lsilogic", 1)
            ['-c', '-s', '20GB', '-a', 'lsilogic', '-t', '1', '/x.vmdk']
        """
        return ['-c',
                '-s', capacity,
                '-a', adapter_type,
                '-t', str(disk_type),
                path]
