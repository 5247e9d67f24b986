#!/usr/bin/env python
#
# test_vmx.py - Unit test cases for VMX configuration handling
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

"""Unit test cases for the ADP.vmx module."""

import os.path

from ADP.data_validation import InvalidInputError
from ADP.tests import ADPTestCase
from ADP.vmx import VMXConfig, VMXParseError

# pylint: disable=missing-type-doc,missing-param-doc


class TestVMXConfig(ADPTestCase):
    """Test cases for the VMXConfig class."""

    def test_parse(self):
        """Load a typical VMX file."""
        vmx = VMXConfig.from_file(self.write_vmx())
        self.assertEqual(8, len(vmx))
        self.assertEqual("UTF-8", vmx['.encoding'])
        self.assertEqual("lsilogic", vmx['SCSI0.VIRTUALDEV'])
        self.assertEqual("disk-000001.vmdk", vmx.device_filename("scsi0:0"))
        self.assertEqual('dev "box"', vmx['displayName'])
        self.assertIsNone(vmx.device_filename("scsi0:1"))
        self.assertTrue(vmx.path.endswith("dev.vmx"))

    def test_unquoted_value(self):
        """Bare values are accepted as well as quoted ones."""
        vmx = VMXConfig.from_string("memsize = 2048\nnumvcpus=2\n")
        self.assertEqual("2048", vmx['memsize'])
        self.assertEqual("2", vmx['numvcpus'])

    def test_round_trip_untouched(self):
        """Writing an unmodified file reproduces it exactly."""
        path = self.write_vmx()
        vmx = VMXConfig.from_file(path)
        vmx.write()
        with open(path) as fileobj:
            self.assertEqual(self.SAMPLE_VMX, fileobj.read())

    def test_attach_disk_round_trip(self):
        """Attaching a disk keeps untouched lines and appends new keys."""
        path = self.write_vmx()
        vmx = VMXConfig.from_file(path)
        vmx.attach_disk("scsi0:1", "/home/alice/disk dir/var-lib-mysql.vmdk")
        output = os.path.join(self.temp_dir, "out.vmx")
        vmx.write(output)
        with open(output) as fileobj:
            contents = fileobj.read()
        self.assertEqual(
            self.SAMPLE_VMX +
            'scsi0:1.filename = "/home/alice/disk dir/var-lib-mysql.vmdk"\n'
            'scsi0:1.present = "TRUE"\n'
            'scsi0:1.redo = ""\n',
            contents)
        reloaded = VMXConfig.from_file(output)
        self.assertEqual(dict(vmx), dict(reloaded))

    def test_update_in_place(self):
        """Existing keys keep their position and spelling."""
        vmx = VMXConfig.from_string('a = "1"\nScsi0:1.Present = "FALSE"\n'
                                    'b = "2"\n')
        vmx.set_device_present("scsi0:1")
        self.assertEqual('a = "1"\nScsi0:1.Present = "TRUE"\nb = "2"\n',
                         vmx.to_string())
        vmx.set_device_present("SCSI0:1", False)
        self.assertEqual("FALSE", vmx['scsi0:1.present'])

    def test_delete(self):
        """Deleting a key removes its line."""
        vmx = VMXConfig.from_string('a = "1"\n# note\nb = "2"\n')
        del vmx['A']
        self.assertNotIn('a', vmx)
        self.assertEqual('# note\nb = "2"\n', vmx.to_string())
        with self.assertRaises(KeyError):
            del vmx['a']

    def test_escapes(self):
        """Quotes and pipes in values are escaped on output."""
        vmx = VMXConfig()
        vmx['annotation'] = 'say "hi" | bye'
        self.assertEqual('annotation = "say |22hi|22 |7C bye"\n',
                         vmx.to_string())

    def test_empty(self):
        """An empty configuration renders as an empty string."""
        self.assertEqual("", VMXConfig().to_string())

    def test_duplicate_key(self):
        """The last of several duplicate keys wins."""
        vmx = VMXConfig.from_string('a = "1"\nA = "2"\n')
        self.assertEqual("2", vmx['a'])
        self.assertEqual(1, len(vmx))
        self.assertLogged(levelname='WARNING', msg="duplicate key")

    def test_malformed_line(self):
        """A line that is not key = value is rejected."""
        with self.assertRaises(VMXParseError) as catcher:
            VMXConfig.from_string('a = "1"\nthis is not valid\n',
                                  source="bad.vmx")
        self.assertIsInstance(catcher.exception, InvalidInputError)
        self.assertIn("bad.vmx, line 2", str(catcher.exception))

    def test_value_must_be_string(self):
        """Non-string values are rejected."""
        vmx = VMXConfig()
        with self.assertRaises(TypeError):
            vmx['memsize'] = 2048

    def test_invalid_slot(self):
        """Device setters reject malformed slots."""
        vmx = VMXConfig()
        self.assertRaises(InvalidInputError, vmx.set_device_filename,
                          "scsi0", "/x.vmdk")
        self.assertRaises(InvalidInputError, vmx.set_device_redo,
                          "floppy0:0")
        self.assertEqual(0, len(vmx))

    def test_write_without_path(self):
        """Writing needs a destination."""
        self.assertRaises(ValueError, VMXConfig().write)

    def test_escaped_newline_round_trip(self):
        """An escaped newline survives a load, write and reload."""
        path = self.write_vmx(contents='annotation = "first|0Asecond"\n'
                                       'memsize = 2048\n')
        vmx = VMXConfig.from_file(path)
        self.assertEqual("first\nsecond", vmx['annotation'])
        vmx['memsize'] = "4096"
        output = os.path.join(self.temp_dir, "out.vmx")
        vmx.write(output)
        with open(output) as fileobj:
            self.assertEqual('annotation = "first|0Asecond"\n'
                             'memsize = "4096"\n', fileobj.read())
        reloaded = VMXConfig.from_file(output)
        self.assertEqual("first\nsecond", reloaded['annotation'])
        self.assertEqual(2, len(reloaded))

    def test_control_characters_escaped(self):
        """Values set with control characters stay on a single line."""
        vmx = VMXConfig()
        vmx['annotation'] = "one\ntwo\r\tthree"
        self.assertEqual('annotation = "one|0Atwo|0D|09three"\n',
                         vmx.to_string())
        reloaded = VMXConfig.from_string(vmx.to_string())
        self.assertEqual("one\ntwo\r\tthree", reloaded['annotation'])

    def test_unchanged_lines_kept_verbatim(self):
        """Lines whose value is not changed are written back as read."""
        vmx = VMXConfig.from_string('memsize = 2048\nnumvcpus="1"\n')
        vmx['memsize'] = "2048"
        vmx['numvcpus'] = "2"
        self.assertEqual('memsize = 2048\nnumvcpus = "2"\n', vmx.to_string())

    def test_non_ascii_value(self):
        """Files are read and written as UTF-8."""
        path = self.write_vmx(contents='.encoding = "UTF-8"\n'
                                       'displayName = "Café dev"\n')
        vmx = VMXConfig.from_file(path)
        self.assertEqual("Café dev", vmx['displayName'])
        vmx['annotation'] = "über"
        vmx.write()
        with open(path, 'rb') as fileobj:
            contents = fileobj.read().decode('utf-8')
        self.assertEqual('.encoding = "UTF-8"\n'
                         'displayName = "Café dev"\n'
                         'annotation = "über"\n', contents)
