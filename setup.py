# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of simplecov-diff 1.2+main, a coverage difference
# reporter for SimpleCov resultsets.
#
# _____________________________________________________________________________
#
# Copyright (c) 2023-2026 the simplecov-diff authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

"""
Script to generate the installer for simplecov-diff.
"""

import os
import time

from runpy import run_path
from setuptools import setup, find_packages


version = run_path("./src/simplecov_diff/version.py")["__version__"]
if version.endswith("+main"):
    # Add a default if environment is not set
    os.environ["TIMESTAMP"] = os.environ.get("TIMESTAMP", str(int(time.time())))
    # ...and use this timestamp.
    version = version.replace("+main", f".dev{os.environ['TIMESTAMP']}+main")
# read the contents of your README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="simplecov-diff",
    version=version,
    description="Post the coverage difference of two SimpleCov resultsets to a pull request.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    platforms=["any"],
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["simplecov_diff*"]),
    install_requires=[
        "jinja2",
        "colorlog",
        "requests",
        "tomli >= 1.1.0 ; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
        "dev": [
            "nox",
            "pytest",
            "ruff",
        ],
    },
    package_data={
        "simplecov_diff": [
            "formats/markdown/default/*.j2",
        ],
    },
    entry_points={
        "console_scripts": [
            "simplecov-diff=simplecov_diff.__main__:main",
        ],
    },
)
