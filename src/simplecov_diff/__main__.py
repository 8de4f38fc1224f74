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

import logging
import os
import sys

from argparse import ArgumentError, ArgumentParser, Namespace
from typing import Any, Optional

from .configuration import (
    CONFIG_SECTION,
    argument_parser_setup,
    config_entries_from_dict,
    config_entries_from_environment,
    merge_options_and_set_defaults,
    missing_required_options,
    parse_config_into_dict,
)
from .diff import get_coverage_diff
from .exceptions import PublicationError, SimplecovDiffError
from .github import (
    DEFAULT_API_URL,
    GitHubContext,
    publish_report,
    resolve_commit_sha,
)
from .logging import (
    configure_logging,
    update_logging,
)
from .options import Options
from .version import __version__

# formats
from . import formats as simplecov_diff_formats

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

LOGGER = logging.getLogger("simplecov_diff")


EXIT_SUCCESS = 0
EXIT_CMDLINE_ERROR = 1
EXIT_PUBLISH_ERROR = 32
EXIT_READ_ERROR = 64
EXIT_WRITE_ERROR = 128


def create_argument_parser() -> ArgumentParser:
    """Create the argument parser."""

    parser = ArgumentParser(add_help=False, exit_on_error=False)
    parser.prog = "simplecov-diff"
    parser.usage = "simplecov-diff [options]"
    parser.description = (
        "Compare the line and branch coverage of two SimpleCov resultsets "
        "and post the difference to the pull request."
    )

    options = parser.add_argument_group("Options")
    options.add_argument(
        "-h", "--help", help="Show this help message, then exit.", action="help"
    )
    options.add_argument(
        "--version",
        help="Print the version number, then exit.",
        action="store_true",
        dest="version",
        default=False,
    )

    argument_parser_setup(parser, options)

    return parser


COPYRIGHT = (
    "Copyright (c) 2023-2026 the simplecov-diff authors\n"
    "This software is distributed under the 3-clause BSD License.\n"
)


def find_config_name(filename: str) -> Optional[str]:
    """Find the configuration to use."""
    if os.path.isfile(filename):
        return filename

    return None


def load_config(partial_options: Namespace) -> dict[str, Any]:
    """Load a config file if configured or found by default names"""
    filename = getattr(partial_options, "config", None)
    if filename is None:
        filename = find_config_name(f"{CONFIG_SECTION}.toml")

    if filename is not None:
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        return parse_config_into_dict(config_entries_from_dict(data, filename))

    if filename := find_config_name("pyproject.toml"):
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        if (section := data.get("tool", {}).get(CONFIG_SECTION)) is not None:
            return parse_config_into_dict(config_entries_from_dict(section, filename))

    return {}


def set_defaults_from_environment(options: Options) -> None:
    """Fill the options which default to a value of the workflow environment."""
    if options.root is None:
        options.root = os.path.abspath(os.environ.get("GITHUB_WORKSPACE") or os.getcwd())
    if options.token is None:
        options.token = os.environ.get("GITHUB_TOKEN") or None
    if options.github_api_url is None:
        options.github_api_url = os.environ.get("GITHUB_API_URL") or DEFAULT_API_URL


def main(args: Optional[list[str]] = None) -> int:  # pylint: disable=too-many-return-statements
    """The main entry point of simplecov-diff."""
    configure_logging()
    try:
        parser = create_argument_parser()
        cli_options = parser.parse_args(args=args)
    except SystemExit as e:
        return EXIT_SUCCESS if e.code == 0 else EXIT_CMDLINE_ERROR
    except ArgumentError as e:
        sys.stderr.write(f"simplecov-diff: error: {e}\n")
        return EXIT_CMDLINE_ERROR

    if cli_options.version:
        sys.stdout.write(f"simplecov-diff {__version__}\n\n{COPYRIGHT}")
        return EXIT_SUCCESS

    # load the config
    try:
        cfg_options = load_config(cli_options)
        input_options = parse_config_into_dict(
            config_entries_from_environment(os.environ)
        )
    except (OSError, ValueError) as e:
        LOGGER.error(f"Error while loading the configuration: {e}")
        return EXIT_CMDLINE_ERROR
    options = merge_options_and_set_defaults(
        [cfg_options, input_options, cli_options.__dict__]
    )
    set_defaults_from_environment(options)

    # Reconfigure the logging.
    update_logging(options)

    if missing := missing_required_options(options):
        for option in missing:
            LOGGER.error(f"missing required option {'/'.join(option.flags)}.")
        return EXIT_CMDLINE_ERROR

    try:
        base, head = simplecov_diff_formats.read_reports(options)
    except SimplecovDiffError as e:
        LOGGER.error(str(e))
        return EXIT_READ_ERROR

    diff = get_coverage_diff(base, head)
    LOGGER.info(f"Coverage difference computed for {len(diff)} files.")

    context = GitHubContext.from_environment(os.environ)
    commit_sha = resolve_commit_sha(context)
    report = simplecov_diff_formats.render_report(diff, commit_sha, options)

    try:
        simplecov_diff_formats.write_report(report, options)
    except OSError as e:
        LOGGER.error(f"Error occurred while writing the report: {e}")
        return EXIT_WRITE_ERROR

    try:
        publish_report(report, context, options.token, options.github_api_url)
    except PublicationError as e:
        LOGGER.error(str(e))
        return EXIT_PUBLISH_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
