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

"""Coverage difference between two SimpleCov resultsets."""
