#!/usr/bin/env python
#
# setup.py - installer script for ADP package
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

"""ADP - the Additional Disk Provisioner."""

import os.path
import re

from setuptools import setup

HERE = os.path.dirname(os.path.abspath(__file__))

README_FILE = os.path.join(HERE, 'README.rst')


def read_version():
    """Get the version string from ADP/__init__.py without importing it.

    Importing the package would require its dependencies to already be
    installed.
    """
    with open(os.path.join(HERE, 'ADP', '__init__.py')) as fileobj:
        match = re.search(r'^__version__ = "([^"]+)"', fileobj.read(),
                          re.MULTILINE)
    return match.group(1)


install_requires = [
    'colorlog>=2.5.0',
    'verboselogs>=1.6',
]

extras_require = {
    'tab-completion': ['argcomplete>=1.3.0'],
    'test': ['mock', 'pytest'],
}

with open(README_FILE) as readme:
    long_description = readme.read()

setup(
    # Package description
    name='adp',
    version=read_version(),
    author='the ADP project developers',
    description='Additional Disk Provisioner',
    long_description=long_description,
    license='MIT',

    # Requirements
    python_requires='>=3.9',
    install_requires=install_requires,
    extras_require=extras_require,

    # Package contents
    packages=[
        'ADP',
        'ADP.commands',
        'ADP.commands.tests',
        'ADP.compliance',
        'ADP.compliance.tests',
        'ADP.disks',
        'ADP.disks.tests',
        'ADP.helpers',
        'ADP.helpers.tests',
        'ADP.tests',
        'ADP.ui',
        'ADP.ui.tests',
    ],
    package_data={
        'ADP.compliance': ['baseline.json'],
    },
    entry_points={
        'console_scripts': [
            'adp = ADP.ui.cli:main',
        ],
    },
    include_package_data=True,

    # PyPI search categories
    classifiers=[
        # Project status
        'Development Status :: 4 - Beta',
        # Target audience
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'Topic :: System :: Emulators',
        'Topic :: System :: Installation/Setup',
        'Topic :: System :: Systems Administration',
        # Licensing
        'License :: OSI Approved :: MIT License',
        # Environment
        'Environment :: Console',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: POSIX :: Linux',
        # Supported versions
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    keywords='virtualization vmware vmx vmdk vagrant compliance',
)
