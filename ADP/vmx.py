#!/usr/bin/env python
#
# vmx.py - Reading, editing, and writing VMware .vmx configuration
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

"""VMware VM hardware configuration (``.vmx``) as a mutable property bag.

A ``.vmx`` file is a flat list of ``key = "value"`` lines. Keys are
case-insensitive; this module preserves the spelling, order, comments and
blank lines of a loaded file and only rewrites the entries that change.

**Classes**

.. autosummary::
  :nosignatures:

  VMXConfig
  VMXParseError
"""

import logging
import re
from collections.abc import MutableMapping

from ADP.data_validation import InvalidInputError

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r'^\s*([^=\s]+)\s*=\s*(?:"(.*)"|(\S*))\s*$')
_SLOT_RE = re.compile(r'^(ide|scsi|sata|nvme)\d+:\d+$')
_ESCAPE_RE = re.compile(r'[|"\x00-\x1f\x7f]')


class VMXParseError(InvalidInputError):
    """A line of a .vmx file could not be understood."""


def _decode(value):
    """Expand VMware's ``|XX`` hex escapes.

    Args:
      value (str): Raw value from the file.
    Returns:
      str: Decoded value.
    Examples:
      ::

        >>> _decode('say |22hi|22 |7C ok')
        'say "hi" | ok'
    """
    return re.sub(r"\|([0-9A-Fa-f]{2})",
                  lambda m: chr(int(m.group(1), 16)), value)


def _encode(value):
    """Escape the characters that cannot appear raw in a quoted value.

    That is the pipe, the double quote and any control character.

    Args:
      value (str): Value to write.
    Returns:
      str: Encoded value.
    Examples:
      ::

        >>> _encode('say "hi" | ok')
        'say |22hi|22 |7C ok'
        >>> _encode('line one\\nline two')
        'line one|0Aline two'
    """
    return _ESCAPE_RE.sub(lambda m: "|{0:02X}".format(ord(m.group(0))),
                          value)


def _check_slot(slot):
    """Make sure ``slot`` looks like ``scsi0:1``.

    Args:
      slot (str): Device slot.
    Returns:
      str: Lower-cased slot.
    Raises:
      InvalidInputError: if the slot is malformed.
    """
    slot = slot.strip().lower()
    if not _SLOT_RE.match(slot):
        raise InvalidInputError("'{0}' is not a valid VMX device slot"
                                .format(slot))
    return slot


class VMXConfig(MutableMapping):
    """Ordered, case-insensitive mapping of VMX keys to string values.

    Examples:
      ::

        >>> vmx = VMXConfig()
        >>> vmx.attach_disk("scsi0:1", "/data/var-lib-mysql.vmdk")
        >>> print(vmx.to_string(), end="")
        scsi0:1.filename = "/data/var-lib-mysql.vmdk"
        scsi0:1.present = "TRUE"
        scsi0:1.redo = ""
        >>> vmx["SCSI0:1.Present"]
        'TRUE'
    """

    def __init__(self, path=None):
        """Create an empty configuration.

        Args:
          path (str): File this configuration is associated with, if any.
        """
        self.path = path
        """Default location for :meth:`write`."""
        self._lines = []
        # lower-case key --> [key as spelled, value]
        self._entries = {}
        # lower-case key --> line as read, while its value is unchanged
        self._raw = {}

    @classmethod
    def from_file(cls, path):
        """Load a .vmx file.

        Args:
          path (str): Path to read.

        Returns:
          VMXConfig: Parsed configuration.

        Raises:
          VMXParseError: if any line is malformed.
          IOError: if the file cannot be read.
        """
        logger.verbose("Loading VMX configuration from %s", path)
        with open(path, encoding='utf-8') as fileobj:
            text = fileobj.read()
        vmx = cls.from_string(text, source=path)
        vmx.path = path
        return vmx

    @classmethod
    def from_string(cls, text, source="<string>"):
        """Parse .vmx text.

        Args:
          text (str): File contents.
          source (str): Label used in error messages.

        Returns:
          VMXConfig: Parsed configuration.

        Raises:
          VMXParseError: if any line is malformed.
        """
        vmx = cls()
        for lineno, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                vmx._lines.append((None, line))
                continue
            match = _LINE_RE.match(line)
            if not match:
                raise VMXParseError("{0}, line {1}: unable to parse '{2}'"
                                    .format(source, lineno, stripped))
            key = match.group(1)
            value = match.group(2)
            if value is None:
                value = match.group(3)
            if key.lower() in vmx._entries:
                logger.warning("%s, line %d: duplicate key '%s', the last "
                               "value wins", source, lineno, key)
                vmx._entries[key.lower()][1] = _decode(value)
                vmx._raw.pop(key.lower(), None)
                continue
            vmx._entries[key.lower()] = [key, _decode(value)]
            vmx._raw[key.lower()] = line
            vmx._lines.append((key.lower(), None))
        logger.debug("Parsed %d VMX entries from %s", len(vmx), source)
        return vmx

    def __getitem__(self, key):
        return self._entries[key.lower()][1]

    def __setitem__(self, key, value):
        if not isinstance(value, str):
            raise TypeError("VMX values must be strings, not {0!r}"
                            .format(value))
        lower = key.lower()
        if lower in self._entries:
            if self._entries[lower][1] != value:
                logger.debug("Changing VMX %s from '%s' to '%s'",
                             key, self._entries[lower][1], value)
                self._raw.pop(lower, None)
            self._entries[lower][1] = value
        else:
            logger.debug("Adding VMX %s = '%s'", key, value)
            self._entries[lower] = [key, value]
            self._lines.append((lower, None))

    def __delitem__(self, key):
        lower = key.lower()
        del self._entries[lower]
        self._raw.pop(lower, None)
        self._lines = [line for line in self._lines if line[0] != lower]

    def __iter__(self):
        for lower, _ in self._lines:
            if lower is not None:
                yield self._entries[lower][0]

    def __len__(self):
        return len(self._entries)

    def set_device_filename(self, slot, path):
        """Point the device in ``slot`` at the given backing file."""
        self["{0}.filename".format(_check_slot(slot))] = path

    def set_device_present(self, slot, present=True):
        """Mark the device in ``slot`` as present (or absent)."""
        self["{0}.present".format(_check_slot(slot))] = (
            "TRUE" if present else "FALSE")

    def set_device_redo(self, slot, redo=""):
        """Set the redo-log override for ``slot``; empty disables it."""
        self["{0}.redo".format(_check_slot(slot))] = redo

    def device_filename(self, slot):
        """Backing file currently configured for ``slot``, or ``None``."""
        return self.get("{0}.filename".format(_check_slot(slot)))

    def attach_disk(self, slot, path):
        """Attach the disk file at ``path`` to ``slot``.

        Sets the filename, a present flag of ``TRUE`` and an empty
        redo-log override.

        Args:
          slot (str): Device slot such as ``scsi0:1``.
          path (str): Disk file path on the host.
        """
        self.set_device_filename(slot, path)
        self.set_device_present(slot, True)
        self.set_device_redo(slot, "")
        logger.verbose("Attached %s at %s", path, slot)

    def to_string(self):
        """Render this configuration in .vmx syntax.

        Returns:
          str: File contents, newline-terminated.
        """
        output = []
        for lower, raw in self._lines:
            if lower is None:
                output.append(raw)
            elif lower in self._raw:
                output.append(self._raw[lower])
            else:
                key, value = self._entries[lower]
                output.append('{0} = "{1}"'.format(key, _encode(value)))
        return "\n".join(output) + "\n" if output else ""

    def write(self, path=None):
        """Write this configuration to disk.

        Args:
          path (str): Destination. Defaults to :attr:`path`.

        Raises:
          ValueError: if no destination is known.
        """
        if path is None:
            path = self.path
        if not path:
            raise ValueError("No path given to write VMX configuration to")
        logger.verbose("Writing VMX configuration to %s", path)
        with open(path, 'w', encoding='utf-8') as fileobj:
            fileobj.write(self.to_string())


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
