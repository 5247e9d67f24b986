# October 2026
# Copyright (c) 2026 the ADP project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Additional Disk Provisioner (ADP) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of ADP, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Description of the additional disk to provision.

**Classes**

.. autosummary::
  :nosignatures:

  DiskSpec

**Functions**

.. autosummary::
  :nosignatures:

  controller_slot
"""

import logging
import re
from collections import namedtuple

from ADP.data_validation import (
    InvalidInputError, ValueUnsupportedError,
    canonicalize_scsi_subtype, disk_capacity, no_whitespace,
    validate_controller_address, validate_int,
)

logger = logging.getLogger(__name__)

DISK_TYPES = {
    0: "monolithicSparse",
    1: "twoGbMaxExtentSparse",
    2: "monolithicFlat",
    3: "twoGbMaxExtentFlat",
}
"""``vmware-vdiskmanager -t`` codes and the VMDK createType each produces."""


def controller_slot(string):
    """Parser helper function for a VMX device slot such as ``scsi0:1``.

    Args:
      string (str): Slot string.
    Returns:
      tuple: ``(controller, address)``, e.g. ``('scsi', '0:1')``
    Raises:
      InvalidInputError: if the slot is malformed or out of range.
    Examples:
      ::

        >>> controller_slot("scsi0:1")
        ('scsi', '0:1')
        >>> controller_slot(" IDE1:0 ")
        ('ide', '1:0')
        >>> try:
        ...     controller_slot("scsi0")
        ... except InvalidInputError as e:
        ...     print(e)
        'scsi0' is not a valid controller slot (expected e.g. 'scsi0:1')
    """
    match = re.match(r"^([a-z]+)(\d+:\d+)$", string.strip().lower())
    if not match:
        raise InvalidInputError(
            "'{0}' is not a valid controller slot (expected e.g. 'scsi0:1')"
            .format(string.strip()))
    controller, address = match.groups()
    validate_controller_address(controller, address)
    return controller, address


_DiskSpecBase = namedtuple('_DiskSpecBase', [
    'directory_name',
    'file_name',
    'capacity',
    'adapter_type',
    'disk_type',
    'controller',
    'address',
])


class DiskSpec(_DiskSpecBase):
    """Immutable description of a single additional disk.

    All values default to the persistent MySQL data disk: a 20 GB
    lsilogic disk named ``var-lib-mysql.vmdk``, kept in
    ``~/vagrant-additional-disk`` and attached at ``scsi0:1``.

    Examples:
      ::

        >>> spec = DiskSpec()
        >>> spec.slot
        'scsi0:1'
        >>> spec.disk_path("/home/alice")
        '/home/alice/vagrant-additional-disk/var-lib-mysql.vmdk'
        >>> spec.host_directory("")
        '/vagrant-additional-disk'
    """

    __slots__ = ()

    DEFAULT_DIRECTORY_NAME = "vagrant-additional-disk"
    DEFAULT_FILE_NAME = "var-lib-mysql.vmdk"
    DEFAULT_CAPACITY = "20GB"
    DEFAULT_ADAPTER_TYPE = "lsilogic"
    DEFAULT_DISK_TYPE = 1
    DEFAULT_SLOT = "scsi0:1"

    def __new__(cls,
                directory_name=DEFAULT_DIRECTORY_NAME,
                file_name=DEFAULT_FILE_NAME,
                capacity=DEFAULT_CAPACITY,
                adapter_type=DEFAULT_ADAPTER_TYPE,
                disk_type=DEFAULT_DISK_TYPE,
                slot=DEFAULT_SLOT):
        """Validate the given values and build the spec.

        Args:
          directory_name (str): Name of the directory, under the home
            directory, that holds the disk file.
          file_name (str): Disk file name.
          capacity (str): Disk capacity such as ``"20GB"``.
          adapter_type (str): SCSI adapter type.
          disk_type (int): ``vmware-vdiskmanager -t`` code, see
            :data:`DISK_TYPES`.
          slot (str): VMX controller slot such as ``"scsi0:1"``.

        Raises:
          InvalidInputError: if any value is invalid.
        """
        directory_name = no_whitespace(directory_name).strip("/")
        file_name = no_whitespace(file_name)
        for label, value in (("directory name", directory_name),
                             ("file name", file_name)):
            if not value or "/" in value:
                raise InvalidInputError(
                    "{0} must be a single path component, but got '{1}'"
                    .format(label.capitalize(), value))
        disk_type = validate_int(disk_type, label="disk type")
        if disk_type not in DISK_TYPES:
            raise ValueUnsupportedError("disk type", disk_type,
                                        sorted(DISK_TYPES))
        controller, address = controller_slot(slot)
        return super(DiskSpec, cls).__new__(
            cls,
            directory_name=directory_name,
            file_name=file_name,
            capacity=disk_capacity(capacity),
            adapter_type=canonicalize_scsi_subtype(adapter_type),
            disk_type=disk_type,
            controller=controller,
            address=address)

    @property
    def slot(self):
        """VMX device slot prefix, such as ``scsi0:1``."""
        return "{0}{1}".format(self.controller, self.address)

    @property
    def disk_subformat(self):
        """VMDK createType that :attr:`disk_type` produces."""
        return DISK_TYPES[self.disk_type]

    def host_directory(self, home):
        """Directory on the host that holds the disk file.

        Args:
          home (str): The invoking user's home directory (may be empty).

        Returns:
          str: ``home`` joined with :attr:`directory_name`. Trailing
          slashes on ``home`` are dropped first, so a home of ``/`` or an
          empty home both give ``/vagrant-additional-disk`` (by default)
          rather than ``//vagrant-additional-disk``.

        Examples:
          ::

            >>> DiskSpec().host_directory("/")
            '/vagrant-additional-disk'
            >>> DiskSpec().host_directory("")
            '/vagrant-additional-disk'
        """
        return "{0}/{1}".format((home or "").rstrip("/"), self.directory_name)

    def disk_path(self, home):
        """Full path of the disk file on the host.

        Args:
          home (str): The invoking user's home directory (may be empty).

        Returns:
          str: :meth:`host_directory` joined with :attr:`file_name`.
        """
        return "{0}/{1}".format(self.host_directory(home), self.file_name)
