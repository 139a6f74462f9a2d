#!/usr/bin/env python

# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="shuru",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="composition core for code-table input methods",
    long_description="Turns keystrokes into a spelling, ranked candidates from a code table, and committed text.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Text Processing :: Linguistic",
    ],
    keywords=[
        "input method",
        "ime",
    ],
    python_requires=">=3.10",
    install_requires=[
        "attrs",
        "cattrs",
        "msgspec",
        "sqlalchemy>=1.4.18",
        "trio>=0.20.0",
        "trio-util",
    ],
    tests_require=["pytest>=6.2.4", "pytest-trio"],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio"],
    },
    entry_points={
        "console_scripts": [
            "shuru-deploy=shuru.scripts:deploy_cli",
            "shuru-repl=shuru.scripts:repl_cli",
            "shuru-search=shuru.scripts:search_cli",
        ],
    },
)
