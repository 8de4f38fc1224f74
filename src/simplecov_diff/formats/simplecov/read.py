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

import json
import logging

from ...coverage import Coverage
from ...exceptions import MissingInputError, ParseError

LOGGER = logging.getLogger("simplecov_diff")


#
#  Get coverage from a SimpleCov .resultset.json file
#
def read_report(filename: str) -> Coverage:
    """Read the resultset and build the coverage of all files in it."""
    LOGGER.debug(f"Processing resultset file: {filename}")

    try:
        with open(filename, encoding="UTF-8") as json_file:
            simplecov_json_data = json.load(json_file)
    except FileNotFoundError:
        raise MissingInputError(f"{filename} does not exist!") from None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"{filename}: not a valid JSON document: {e}") from None

    coverage = Coverage.from_resultset(simplecov_json_data, data_source=filename)
    LOGGER.debug(f"Found {len(coverage)} files in {filename}")
    return coverage
