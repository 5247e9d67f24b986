#!/usr/bin/env python
#
# data_validation.py - Helper libraries to validate data sanity
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

"""Various helpers for data sanity checks.

**Exceptions**

.. autosummary::
  :nosignatures:

  InvalidInputError
  ValueUnsupportedError
  ValueTooLowError
  ValueTooHighError

**Functions**

.. autosummary::
  :nosignatures:

  canonicalize_scsi_subtype
  device_address
  disk_capacity
  no_whitespace
  validate_controller_address
  validate_int
"""

import re

CAPACITY_UNITS = ('KB', 'MB', 'GB')
"""Capacity units understood by ``vmware-vdiskmanager -s``."""

SCSI_SUBTYPES = ('lsilogic', 'buslogic', 'pvscsi')
"""Adapter types understood by ``vmware-vdiskmanager -a``."""


def device_address(string):
    r"""Parser helper function for device address arguments.

    Validate string is an appropriately formed device address such as '1:0'.

    Args:
      string (str): String to validate
    Raises:
      InvalidInputError: if string is not a well-formatted device address
    Returns:
      str: Validated string (with leading/trailing whitespace stripped)
    Examples:
      ::

        >>> device_address("  1:0\n")
        '1:0'
        >>> try:
        ...     device_address("1:0:1")
        ... except InvalidInputError as e:
        ...     print(e)
        '1:0:1' is not a valid device address
    """
    string = string.strip()
    if not re.match(r"\d+:\d+$", string):
        raise InvalidInputError("'{0}' is not a valid device address"
                                .format(string))
    return string


def validate_controller_address(controller, address):
    """Check validity of the given address string for the given controller.

    Args:
      controller (str): ``'ide'`` or ``'scsi'``
      address (str): A string like '0:0' or '2:10'

    Raises:
      InvalidInputError: if the address/controller combo is invalid.

    Examples:
      ::

        >>> validate_controller_address("scsi", "0:1")
        >>> try:
        ...     validate_controller_address("ide", "1:3")
        ... except InvalidInputError as e:
        ...     print(e)
        IDE disk address must be between 0:0 and 1:1
        >>> try:
        ...     validate_controller_address("scsi", "4:0")
        ... except InvalidInputError as e:
        ...     print(e)
        SCSI disk address must be between 0:0 and 3:15
        >>> try:
        ...     validate_controller_address("floppy", "0:0")
        ... except InvalidInputError as e:
        ...     print(e)
        Unsupported value 'floppy' for controller type - expected ['ide', 'scsi']
    """    # noqa: E501
    ctrl_addr, disk_addr = [int(x) for x in device_address(address).split(":")]
    if controller == "scsi":
        if ctrl_addr > 3 or disk_addr > 15:
            raise InvalidInputError(
                "SCSI disk address must be between 0:0 and 3:15")
    elif controller == "ide":
        if ctrl_addr > 1 or disk_addr > 1:
            raise InvalidInputError(
                "IDE disk address must be between 0:0 and 1:1")
    else:
        raise ValueUnsupportedError("controller type", controller,
                                    ['ide', 'scsi'])


def canonicalize_scsi_subtype(subtype):
    """Normalize a SCSI adapter type to the form ``vmware-vdiskmanager`` uses.

    Args:
      subtype (str): User-provided adapter type string.
    Returns:
      str: Canonical adapter type
    Raises:
      ValueUnsupportedError: if the adapter type is not recognized.
    Examples:
      ::

        >>> canonicalize_scsi_subtype("LSILogic")
        'lsilogic'
        >>> canonicalize_scsi_subtype("VirtualSCSI")
        'pvscsi'
        >>> try:    # doctest: +ELLIPSIS
        ...     canonicalize_scsi_subtype("virtio")
        ... except ValueUnsupportedError as e:
        ...     print(e)
        Unsupported value 'virtio' for SCSI adapter type - expected ...
    """
    value = subtype.strip().lower()
    if value in ('virtualscsi', 'paravirtual'):
        value = 'pvscsi'
    if value not in SCSI_SUBTYPES:
        raise ValueUnsupportedError("SCSI adapter type", subtype,
                                    list(SCSI_SUBTYPES))
    return value


def disk_capacity(string):
    """Parser helper function for disk capacity arguments such as ``20GB``.

    Args:
      string (str): String to validate
    Returns:
      str: Normalized capacity string (upper-case unit, no whitespace)
    Raises:
      InvalidInputError: if the string is not a positive integer plus unit.
    Examples:
      ::

        >>> disk_capacity("20GB")
        '20GB'
        >>> disk_capacity(" 512 mb ")
        '512MB'
        >>> try:
        ...     disk_capacity("20")
        ... except InvalidInputError as e:
        ...     print(e)
        '20' is not a valid disk capacity (expected e.g. '20GB')
        >>> try:
        ...     disk_capacity("0GB")
        ... except ValueTooLowError as e:
        ...     print(e)
        Value '0' for disk capacity is too low - must be at least 1
    """
    match = re.match(r"^\s*(\d+)\s*([a-zA-Z]+)\s*$", string)
    if not match or match.group(2).upper() not in CAPACITY_UNITS:
        raise InvalidInputError(
            "'{0}' is not a valid disk capacity (expected e.g. '20GB')"
            .format(string.strip()))
    value = validate_int(match.group(1), minimum=1, label="disk capacity")
    return "{0}{1}".format(value, match.group(2).upper())


def no_whitespace(string):
    r"""Parser helper function for arguments not allowed to contain whitespace.

    Args:
      string (str): String to validate
    Returns:
      str: Validated string
    Raises:
      InvalidInputError: if string contains internal whitespace
    Examples:
      ::

        >>> no_whitespace("var-lib-mysql.vmdk\n")
        'var-lib-mysql.vmdk'
        >>> try:
        ...     no_whitespace("my disk.vmdk")
        ... except InvalidInputError as e:
        ...     print(e)
        'my disk.vmdk' contains invalid whitespace
    """
    string = string.strip()
    if len(string.split()) > 1:
        raise InvalidInputError("'{0}' contains invalid whitespace"
                                .format(string))
    return string


def validate_int(string,
                 minimum=None, maximum=None,
                 label=None):
    """Parser helper function for validating integer arguments in a range.

    Args:
      string (str): String to convert to an integer and validate
      minimum (int): Minimum valid value (optional)
      maximum (int): Maximum valid value (optional)
      label (str): Label to include in any errors raised

    Returns:
      int: Validated integer value

    Raises:
      ValueUnsupportedError: if :attr:`string` can't be converted to int
      ValueTooLowError: if value is less than :attr:`minimum`
      ValueTooHighError: if value is more than :attr:`maximum`

    Examples:
      ::

        >>> validate_int('1')
        1
        >>> try:
        ...     validate_int('foo', label='x')
        ... except ValueUnsupportedError as e:
        ...     print(e)
        Unsupported value 'foo' for x - expected integer
        >>> try:
        ...     validate_int('100', label='x', maximum=10)
        ... except ValueTooHighError as e:
        ...     print(e)
        Value '100' for x is too high - must be at most 10
    """
    if label is None:
        label = "input"
    try:
        value = int(string)
    except ValueError:
        raise ValueUnsupportedError(label, string, "integer")
    if minimum is not None and value < minimum:
        raise ValueTooLowError(label, value, minimum)
    if maximum is not None and value > maximum:
        raise ValueTooHighError(label, value, maximum)
    return value


# Some handy exception and error types we can throw
class InvalidInputError(ValueError):
    """Miscellaneous error during validation of user input."""

    pass


class ValueUnsupportedError(InvalidInputError):
    """An unsupported value was provided.

    Args:
      value_type (str): descriptive string
      actual_value (str): invalid value that was provided
      expected_value (object): expected/valid value(s) (item or list)
    """

    def __init__(self, value_type, actual_value, expected_value):
        """Create an instance of this class."""
        self.value_type = value_type
        self.actual_value = actual_value
        self.expected_value = expected_value
        super(ValueUnsupportedError, self).__init__(str(self))

    def __str__(self):
        """Human-readable string representation."""
        return ("Unsupported value '{0}' for {1} - expected {2}"
                .format(self.actual_value, self.value_type,
                        self.expected_value))


class ValueTooLowError(ValueUnsupportedError):
    """A numerical input was less than the lowest supported value.

    Args:
      value_type (str): descriptive string
      actual_value (int): invalid value that was provided
      expected_value (int): minimum supported value
    """

    def __str__(self):
        """Human-readable string representation."""
        return ("Value '{0}' for {1} is too low - must be at least {2}"
                .format(self.actual_value, self.value_type,
                        self.expected_value))


class ValueTooHighError(ValueUnsupportedError):
    """A numerical input was higher than the highest supported value.

    Args:
      value_type (str): descriptive string
      actual_value (int): invalid value that was provided
      expected_value (int): maximum supported value
    """

    def __str__(self):
        """Human-readable string representation."""
        return ("Value '{0}' for {1} is too high - must be at most {2}"
                .format(self.actual_value, self.value_type,
                        self.expected_value))


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
