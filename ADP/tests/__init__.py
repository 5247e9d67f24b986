#!/usr/bin/env python
#
# __init__.py - Test case wrapper for the Additional Disk Provisioner
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

"""Generic unit test case implementation for ADP."""

import logging
import os.path
import re
import shutil
import tempfile
import time
import unittest
from logging import NullHandler
from logging.handlers import BufferingHandler

from ADP.helpers import helpers

logger = logging.getLogger(__name__)


logging.getLogger('ADP').addHandler(NullHandler())


class UTLoggingHandler(BufferingHandler):
    """Captures log messages to a buffer so we can inspect them for testing."""

    def __init__(self, testcase):
        """Create a logging handler for the given test case.

        Args:
          testcase (unittest.TestCase): Owner of this logging handler.
        """
        BufferingHandler.__init__(self, capacity=0)
        self.setLevel(logging.DEBUG)
        self.testcase = testcase

    def emit(self, record):
        """Add the given log record to our internal buffer.

        Args:
          record (LogRecord): Record to store.
        """
        self.buffer.append(record.__dict__)

    def shouldFlush(self, record):  # noqa: N802
        """Return False - we only flush manually.

        Args:
          record (LogRecord): Record to ignore.
        Returns:
          bool: always False
        """
        return False

    def logs(self, **kwargs):
        """Look for log entries matching the given dict.

        Args:
          kwargs (dict): logging arguments to match against.
        Returns:
          list: List of record(s) that matched.
        """
        matches = []
        for record in self.buffer:
            found_match = True
            for (key, value) in kwargs.items():
                if key == 'msg':
                    # Regexp match
                    if not re.search(value, str(record.get(key))):
                        found_match = False
                        break
                elif key == 'args':
                    for (exp, act) in zip(value, record.get(key)):
                        if not re.search(str(exp), str(act)):
                            found_match = False
                            break
                elif not value == record.get(key):
                    found_match = False
                    break
            if found_match:
                matches.append(record)
        return matches

    def assertLogged(self, info='', **kwargs):  # noqa: N802
        """Fail unless the given log messages were each seen exactly once.

        Args:
          info (str): Optional string to prepend to any failure messages.
          kwargs (dict): logging arguments to match against.

        Raises:
          AssertionError: if an expected log message was not seen
          AssertionError: if an expected log message was seen more than once
        """
        matches = self.logs(**kwargs)
        if not matches:
            self.testcase.fail(
                info + "Expected logs matching {0} but none were logged!"
                .format(kwargs))
        if len(matches) > 1:
            self.testcase.fail(
                info + "Message {0} was logged {1} times instead of once!"
                .format(kwargs, len(matches)))
        for match in matches:
            self.buffer.remove(match)

    def assertNoLogsOver(self, max_level, info=''):  # noqa: N802
        """Fail if any logs are logged higher than the given level.

        Args:
          max_level (int): Highest logging level to permit.
          info (str): Optional string to prepend to any failure messages.
        Raises:
          AssertionError: if any messages higher than max_level were seen
        """
        for level in (logging.CRITICAL, logging.ERROR, logging.WARNING,
                      logging.INFO, logging.VERBOSE, logging.DEBUG):
            if level <= max_level:
                return
            matches = self.logs(levelno=level)
            if matches:
                self.testcase.fail(
                    "{info}Found {len} unexpected {lvl} message(s):\n\n{msgs}"
                    .format(info=info,
                            len=len(matches),
                            lvl=logging.getLevelName(level),
                            msgs="\n\n".join([r['msg'] % r['args']
                                              for r in matches])))


class ADPTestCase(unittest.TestCase):
    """Subclass of unittest.TestCase adding some additional behaviors.

    For the parameters, see :class:`unittest.TestCase`.
    """

    # Standard WARNING logger messages we may expect at various points:
    AUTO_CONFIRM = {
        'levelname': 'WARNING',
        'msg': "Automatically agreeing to '%s'",
    }

    SAMPLE_VMX = """\
.encoding = "UTF-8"
config.version = "8"
virtualHW.version = "16"
# Primary disk
scsi0.present = "TRUE"
scsi0.virtualDev = "lsilogic"
scsi0:0.fileName = "disk-000001.vmdk"
scsi0:0.present = "TRUE"
displayName = "dev |22box|22"
"""

    def __init__(self, method_name='runTest'):
        """Add logging handler to generic UT initialization.

        For the parameters, see :class:`unittest.TestCase`.
        """
        super(ADPTestCase, self).__init__(method_name)
        self.logging_handler = UTLoggingHandler(self)

    def setUp(self):
        """Test case setup function called automatically prior to each test."""
        # keep log messages from interfering with our tests
        logging.getLogger('ADP').setLevel(logging.DEBUG)
        self.logging_handler.setLevel(logging.NOTSET)
        self.logging_handler.flush()
        logging.getLogger('ADP').addHandler(self.logging_handler)

        self.start_time = time.time()
        self.temp_dir = tempfile.mkdtemp(prefix="adp_ut")
        logger.debug("Created temp dir %s", self.temp_dir)

    def tearDown(self):
        """Test case cleanup function called automatically after each test."""
        # Fail if any WARNING/ERROR/CRITICAL logs were generated
        self.logging_handler.assertNoLogsOver(logging.INFO)

        logging.getLogger('ADP').removeHandler(self.logging_handler)

        if os.path.exists(self.temp_dir):
            logger.debug("Deleting temp dir %s", self.temp_dir)
            shutil.rmtree(self.temp_dir)
        self.temp_dir = None

        # Clear output caches for helper commands:
        for helper in helpers.values():
            helper.cached_output.clear()

        delta_t = time.time() - self.start_time
        if delta_t > 5.0:
            print("\nWARNING: Test {0} took {1:.3f} seconds to execute. "
                  "Consider refactoring it to be more efficient."
                  .format(self.id(), delta_t))

    def write_vmx(self, name="dev.vmx", contents=None):
        """Write a sample VMX file into :attr:`temp_dir`.

        Args:
          name (str): File name.
          contents (str): File contents (default: :attr:`SAMPLE_VMX`).
        Returns:
          str: Path to the new file.
        """
        path = os.path.join(self.temp_dir, name)
        with open(path, 'w', encoding='utf-8') as fileobj:
            fileobj.write(self.SAMPLE_VMX if contents is None else contents)
        return path

    def assertLogged(self, info='', **kwargs):  # noqa: N802
        """Fail unless the given logs were generated.

        For the parameters, see :meth:`UTLoggingHandler.assertLogged`.
        """
        self.logging_handler.assertLogged(info=info, **kwargs)

    def assertNoLogsOver(self, max_level, info=''):  # noqa: N802
        """Fail if any logs were logged higher than the given level.

        For the parameters, see :meth:`UTLoggingHandler.assertNoLogsOver`.
        """
        self.logging_handler.assertNoLogsOver(max_level, info=info)
