#!/usr/bin/env python
#
# test_check.py - test cases for ADPCheck class
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

"""Unit test cases for ADP.commands.check module."""

import io
import json
import os.path

import mock

from ADP.commands.check import ADPCheck
from ADP.commands.tests.command_testcase import CommandTestCase
from ADP.compliance import ComplianceError
from ADP.compliance.tests.test_compliance import HEALTHY, fake_helpers
from ADP.data_validation import InvalidInputError

# pylint: disable=missing-param-doc,missing-type-doc


class TestADPCheck(CommandTestCase):
    """Test cases for the ADPCheck command."""

    command_class = ADPCheck

    ALL_PASS = """
[PASS] package tftpd-hpa installed
[PASS] package apache2 installed
[PASS] port 80 listening
[PASS] port 68 listening
[PASS] port 69 listening
[PASS] port 19123 listening
[PASS] service mcp2-dhcp-server enabled
[PASS] service mcp2-dhcp-server installed
[PASS] service cloud-config-server enabled
[PASS] service cloud-config-server installed
[PASS] service cloud-config-server running
"""

    def use_host(self, **state):
        """Make the compliance checks see a host in the given state."""
        patcher = mock.patch('ADP.compliance.checker.helpers',
                             fake_helpers(**state))
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_compliant_host(self):
        """Every check passes on a correctly provisioned host."""
        self.use_host(**HEALTHY)
        self.check_adp_output(self.ALL_PASS)
        self.assertLogged(levelname='NOTICE',
                          msg="All %d compliance checks passed",
                          args=(11, ))
        self.assertEqual(11, len(self.command.results))

    def test_noncompliant_host(self):
        """Failing checks are all reported and the command fails."""
        state = dict(HEALTHY)
        state['ports'] = (22, 68, 80, 19123)
        state['running'] = ()
        self.use_host(**state)
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            with self.assertRaises(ComplianceError) as catcher:
                self.command.run()
        self.assertEqual(1, catcher.exception.errno)
        self.assertEqual("2 of 11 compliance checks failed",
                         catcher.exception.strerror)
        output = stdout.getvalue().splitlines()
        self.assertEqual(11, len(output))
        self.assertIn("[FAIL] port 69 listening", output)
        self.assertIn("[FAIL] service cloud-config-server running", output)
        self.assertIn("[PASS] port 68 listening", output)

    def test_custom_baseline(self):
        """Check against a baseline file instead of the built-in one."""
        self.use_host(**HEALTHY)
        path = os.path.join(self.temp_dir, "baseline.json")
        with open(path, 'w') as fileobj:
            json.dump({"checks": [
                {"kind": "port", "target": 22, "assertions": ["listening"]},
                {"kind": "package", "target": "nginx",
                 "assertions": ["installed"]},
            ]}, fileobj)
        self.command.baseline = path
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            self.assertRaises(ComplianceError, self.command.run)
        self.assertEqual("[PASS] port 22 listening\n"
                         "[FAIL] package nginx installed\n",
                         stdout.getvalue())

    def test_baseline_missing(self):
        """A baseline that does not exist is rejected."""
        with self.assertRaises(InvalidInputError):
            self.command.baseline = os.path.join(self.temp_dir, "nope.json")
        self.assertIsNone(self.command.baseline)

    def test_baseline_invalid(self):
        """A baseline that cannot be understood is rejected."""
        path = os.path.join(self.temp_dir, "baseline.json")
        with open(path, 'w') as fileobj:
            fileobj.write('{"checks": [{"kind": "disk"}]}')
        self.command.baseline = path
        self.assertRaises(InvalidInputError, self.command.run)
