#!/usr/bin/env python
#
# test_command.py - Unit test cases for generic Command classes
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

"""Test cases for ADP.commands.Command class and generic subclasses."""

import os.path

import mock

from ADP.commands.tests.command_testcase import CommandTestCase
from ADP.commands import Command, ReadWriteCommand
from ADP.data_validation import InvalidInputError
from ADP.vmx import VMXParseError

# pylint: disable=missing-param-doc,missing-type-doc,protected-access


class TestCommand(CommandTestCase):
    """Test cases for Command base class."""

    command_class = Command

    def test_ready_and_run(self):
        """The base class is always ready and does nothing."""
        self.assertEqual((True, "Ready to go!"), self.command.ready_to_run())
        self.command.run()
        self.command.finished()
        self.assertIsNone(self.command.vm)

    def test_check_disk_space_sufficient(self):
        """Positive test for check_disk_space API."""
        self.assertTrue(self.command.check_disk_space(1, self.temp_dir))
        self.assertTrue(self.command.check_disk_space(
            1, self.temp_dir,
            label="Hello", context="Contextual detail", die=True))

    @mock.patch("ADP.commands.command.available_bytes_at_path", return_value=0)
    def test_check_disk_space_insufficient(self, mock_available):
        """Negative test for check_disk_space API."""
        # If user declines, return False or die
        self.command.ui.default_confirm_response = False

        self.assertFalse(self.command.check_disk_space(100, self.temp_dir))
        mock_available.assert_called_once()

        mock_available.reset_mock()
        self.command._space_checks.clear()
        self.assertRaises(SystemExit, self.command.check_disk_space,
                          100, self.temp_dir, die=True)
        mock_available.assert_called_once()

        mock_available.reset_mock()
        self.command._space_checks.clear()

        # If user accepts, return True anyways
        self.command.ui.default_confirm_response = True

        self.assertTrue(self.command.check_disk_space(100, self.temp_dir))
        mock_available.assert_called_once()

    @mock.patch("ADP.commands.command.available_bytes_at_path")
    def test_check_disk_space_caching(self, mock_available):
        """Confirm disk space checks are invoked and cached appropriately."""
        mock_available.return_value = 50000
        disk = os.path.join(self.temp_dir, "missing", "new.vmdk")

        # A not-yet-existing location is checked at its nearest ancestor
        self.assertTrue(self.command.check_disk_space(100, disk))
        mock_available.assert_called_once_with(self.temp_dir)
        mock_available.reset_mock()

        # Same directory, same or lower size - no re-check
        self.assertTrue(self.command.check_disk_space(50, self.temp_dir))
        self.assertTrue(self.command.check_disk_space(100, disk))
        mock_available.assert_not_called()

        # Increased size - re-check
        self.assertTrue(self.command.check_disk_space(200, disk))
        mock_available.assert_called_once_with(self.temp_dir)
        mock_available.reset_mock()

        # Explicitly forcing re-check
        self.assertTrue(self.command.check_disk_space(100, disk,
                                                      force_check=True))
        mock_available.assert_called_once_with(self.temp_dir)


class TestReadWriteCommand(CommandTestCase):
    """Test cases for ReadWriteCommand class."""

    command_class = ReadWriteCommand

    def test_set_package_nonexistent(self):
        """Package setter raises InvalidInputError for nonexistent file."""
        with self.assertRaises(InvalidInputError):
            self.command.package = "/foo/bar/baz.vmx"

    def test_set_package_loads_vm(self):
        """Setting the package parses the VMX file."""
        self.command.package = self.write_vmx()
        self.assertEqual("lsilogic", self.command.vm['scsi0.virtualDev'])
        self.command.package = None
        self.assertIsNone(self.command.vm)

    def test_set_package_unparseable(self):
        """A malformed VMX file is reported as invalid input."""
        with self.assertRaises(VMXParseError):
            self.command.package = self.write_vmx(contents="what is this\n")

    def test_readiness(self):
        """A VMX file is mandatory."""
        ready, reason = self.command.ready_to_run()
        self.assertFalse(ready)
        self.assertEqual("VMX is a mandatory argument!", reason)
        self.assertRaises(InvalidInputError, self.command.run)

        self.command.package = self.write_vmx()
        ready, reason = self.command.ready_to_run()
        self.assertTrue(ready)

    def test_set_output_invalid(self):
        """Check various failure cases for output setter."""
        # Nonexistent output location, or a directory in place of a file
        with self.assertRaises(InvalidInputError):
            self.command.output = "/foo/bar/baz.vmx"
        with self.assertRaises(InvalidInputError):
            self.command.output = self.temp_dir
        # Parent path is a file
        with self.assertRaises(InvalidInputError):
            self.command.output = os.path.join(self.write_vmx(), "foo.vmx")

    def test_set_output_existing(self):
        """Overwriting an existing file asks for confirmation."""
        existing = self.write_vmx("existing.vmx")
        self.command.ui.default_confirm_response = False
        with self.assertRaises(SystemExit):
            self.command.output = existing
        self.assertEqual("", self.command.output)

        self.command.ui.default_confirm_response = True
        self.command.output = existing
        self.assertEqual(existing, self.command.output)

    def test_run_in_place(self):
        """Without an output, the VMX file is rewritten in place."""
        vmx_path = self.write_vmx()
        self.command.package = vmx_path
        self.command.vm['guestOS'] = "ubuntu-64"
        self.command.run()
        self.assertEqual(os.path.abspath(vmx_path), self.command.output)
        self.command.finished()
        with open(vmx_path) as fileobj:
            contents = fileobj.read()
        self.assertEqual(self.SAMPLE_VMX + 'guestOS = "ubuntu-64"\n',
                         contents)

    def test_run_to_output(self):
        """With an output, the original VMX file is left alone."""
        vmx_path = self.write_vmx()
        output = os.path.join(self.temp_dir, "new.vmx")
        self.command.package = vmx_path
        self.command.output = output
        self.command.vm['guestOS'] = "ubuntu-64"
        self.command.run()
        self.command.finished()
        with open(vmx_path) as fileobj:
            self.assertEqual(self.SAMPLE_VMX, fileobj.read())
        with open(output) as fileobj:
            self.assertIn('guestOS = "ubuntu-64"', fileobj.read())
