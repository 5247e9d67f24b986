#!/usr/bin/env python
#
# dpkg.py - Helper for 'dpkg'
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

"""Give ADP access to ``dpkg`` for querying installed Debian packages."""

import logging
import re

from .helper import Helper

logger = logging.getLogger(__name__)


class Dpkg(Helper):
    """Helper provider for ``dpkg``, the Debian package manager backend."""

    def __init__(self):
        """Initializer."""
        super(Dpkg, self).__init__("dpkg",
                                   info_uri="https://wiki.debian.org/dpkg")

    def package_installed(self, package):
        """Check whether the given package is fully installed.

        Args:
          package (str): Debian package name, such as ``apache2``.

        Returns:
          bool: True if dpkg reports the package as "install ok installed".
        """
        output = self.call(['-s', package], require_success=False)
        installed = bool(re.search(r"^Status: install ok installed",
                                   output, re.MULTILINE))
        logger.debug("Package %s is %sinstalled",
                     package, "" if installed else "not ")
        return installed
