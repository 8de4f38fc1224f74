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

from __future__ import annotations
from argparse import ArgumentParser, ArgumentTypeError, SUPPRESS
from dataclasses import dataclass
import logging
import os
from typing import Any, Callable, Iterable, Mapping, Optional

from . import formats
from .options import (
    ConfigOption,
    Options,
    absolute_path,
    non_empty_string,
    output_path,
)

LOGGER = logging.getLogger("simplecov_diff")

CONFIG_SECTION = "simplecov-diff"
ACTION_INPUT_PREFIX = "INPUT_"


def argument_parser_setup(parser: ArgumentParser, default_group: Any) -> None:
    r"""Add all options and groups to the given argparse parser."""

    # setup option groups
    groups = {}
    for group_def in CONFIG_OPTION_GROUPS:
        group = parser.add_argument_group(
            group_def["name"],
            description=group_def["description"],
        )
        groups[group_def["key"]] = group

    # create each option value
    for opt in CONFIG_OPTIONS:
        if not opt.flags:
            continue
        group = default_group if opt.group is None else groups[opt.group]

        kwargs: dict[str, Any] = {
            "action": opt.action,
            "const": opt.const,
            "default": SUPPRESS,  # default will be assigned manually
            "dest": opt.name,
            "help": opt.help,
            "metavar": opt.metavar,
        }
        if opt.type is not None:
            kwargs["type"] = opt.type
        if opt.action == "store_const":
            del kwargs["metavar"]

        group.add_argument(*opt.flags, **kwargs)


@dataclass
class ConfigEntry:
    """A "key = value" config entry from a file or from the environment."""

    key: str
    """The key of the entry."""

    value: Any
    """The un-parsed value, a string or a TOML scalar."""

    filename: Optional[str] = None
    """Path of the config file, for error messages."""

    def __str__(self) -> str:
        r"""
        Display the config entry.

        >>> print(ConfigEntry("the-key", "value", filename="simplecov-diff.toml"))
        simplecov-diff.toml: the-key = value
        """
        filename = self.filename or "<environment>"
        value = "# empty" if self.value == "" else self.value
        return f"{filename}: {self.key} = {value}"

    @property
    def basedir(self) -> str:
        """Directory used to resolve relative paths of this entry."""
        if self.filename is None:
            return os.getcwd()
        return os.path.dirname(os.path.abspath(self.filename))

    @property
    def value_as_bool(self) -> bool:
        r"""
        The value converted to a boolean.

        >>> ConfigEntry("k", "yes").value_as_bool
        True

        >>> ConfigEntry("k", "false").value_as_bool
        False

        >>> ConfigEntry("k", "foo").value_as_bool
        Traceback (most recent call last):
        ValueError: <environment>: k: boolean option must be "yes", "no", "true" or "false"
        """
        if isinstance(self.value, bool):
            return self.value
        value = str(self.value).lower()
        if value in ("yes", "true"):
            return True
        if value in ("no", "false"):
            return False
        raise self.error('boolean option must be "yes", "no", "true" or "false"')

    def error(self, pattern: str, *args: Any, **kwargs: Any) -> ValueError:
        r"""
        Format but NOT RAISE a ValueError.

        >>> entry = ConfigEntry('root', '', filename='simplecov-diff.toml')
        >>> raise entry.error("expected a path but got {value!r}")
        Traceback (most recent call last):
        ValueError: simplecov-diff.toml: root: expected a path but got ''
        """
        filename = self.filename or "<environment>"
        kwargs.update(key=self.key, value=self.value)
        message = pattern.format(*args, **kwargs)
        return ValueError(": ".join([filename, self.key, message]))


def config_entries_from_dict(
    config: Mapping[str, Any],
    filename: str,
) -> Iterable[ConfigEntry]:
    r"""
    Generate config entries from a dictionary, e.g. a TOML table.

    Yields: ConfigEntry

    >>> cfg = {
    ...     'base-resultset-path': 'base/.resultset.json',
    ...     'verbose': True,
    ... }
    >>> for entry in config_entries_from_dict(cfg, 'simplecov-diff.toml'):
    ...     print(entry)
    simplecov-diff.toml: base-resultset-path = base/.resultset.json
    simplecov-diff.toml: verbose = True
    """

    for key, value in config.items():
        yield ConfigEntry(key, value, filename=filename)


def config_entries_from_environment(
    environ: Mapping[str, str],
    all_options: Optional[Iterable[ConfigOption]] = None,
) -> Iterable[ConfigEntry]:
    r"""
    Generate config entries from the inputs of a GitHub action.

    The runner exports each input ``name`` as ``INPUT_NAME``
    (upper case, hyphens are kept). Empty inputs are not set.

    >>> environ = {
    ...     'INPUT_HEAD-RESULTSET-PATH': ' coverage/.resultset.json ',
    ...     'INPUT_TOKEN': '',
    ... }
    >>> for entry in config_entries_from_environment(environ):
    ...     print(entry)
    <environment>: head-resultset-path = coverage/.resultset.json
    """
    if all_options is None:
        all_options = CONFIG_OPTIONS

    for option in all_options:
        for config_key in option.config_keys or []:
            value = environ.get(f"{ACTION_INPUT_PREFIX}{config_key.upper()}", "")
            value = value.strip()
            if value:
                yield ConfigEntry(config_key, value, filename=None)


def parse_config_into_dict(
    config_entry_source: Iterable[ConfigEntry],
    all_options: Optional[Iterable[ConfigOption]] = None,
) -> dict[str, Any]:
    """Convert the config entries to a namespace dictionary."""
    cfg_dict: dict[str, Any] = {}

    if all_options is None:
        all_options = CONFIG_OPTIONS

    options_lookup = {}
    for option in all_options:
        if option.config_keys is not None:
            for config_key in option.config_keys:
                options_lookup[config_key] = option

    for cfg_entry in config_entry_source:
        try:
            option = options_lookup[cfg_entry.key]
        except KeyError:
            raise cfg_entry.error("unknown config option") from None

        cfg_dict[option.name] = _get_value_from_config_entry(cfg_entry, option)

    return cfg_dict


def _get_value_from_config_entry(
    cfg_entry: ConfigEntry,
    option: ConfigOption,
) -> Any:
    # special case: store_const expects a boolean
    if option.action == "store_const":
        return option.const if cfg_entry.value_as_bool else option.default

    value: Any = cfg_entry.value
    if not isinstance(value, str):
        raise cfg_entry.error("expected a string but got {value!r}")

    if option.type is not None:
        converter = _get_converter_function(option.type, basedir=cfg_entry.basedir)
        try:
            value = converter(value)
        except (ValueError, ArgumentTypeError) as err:
            raise cfg_entry.error(str(err)) from None

    return value


def _get_converter_function(
    option_type: Callable[[str], Any],
    *,
    basedir: str,
) -> Callable[[str], Any]:
    """
    Obtain a converter function that corresponds to `option.type`.

    Paths in a config file are relative to the directory of that file.
    """

    if option_type is absolute_path:
        return lambda value: absolute_path(value, basedir)

    if option_type is output_path:
        return lambda value: output_path(value, basedir)

    return option_type


def merge_options_and_set_defaults(
    partial_namespaces: list[dict[str, Any]],
    all_options: Optional[list[ConfigOption]] = None,
) -> Options:
    """Merge the namespaces, later namespaces take precedence."""
    if not partial_namespaces:
        raise AssertionError("At least one namespace required")

    if all_options is None:
        all_options = CONFIG_OPTIONS

    target: dict[str, Any] = {}
    for namespace in partial_namespaces:
        for option in all_options:
            if option.name in namespace:
                target[option.name] = namespace[option.name]

    # if no value was provided, set the default.
    for option in all_options:
        target.setdefault(option.name, option.default)

    return Options(**target)


def missing_required_options(
    options: Options,
    all_options: Optional[list[ConfigOption]] = None,
) -> list[ConfigOption]:
    """Get the required options which weren't set by any source."""
    if all_options is None:
        all_options = CONFIG_OPTIONS

    return [
        option
        for option in all_options
        if option.required and options.get(option.name) in (None, "")
    ]


CONFIG_OPTION_GROUPS = [
    {
        "key": "input_options",
        "name": "Input Options",
        "description": (
            "The two SimpleCov resultsets to compare. "
            "Relative paths are resolved against the current directory "
            "or if defined in a configuration file to the directory of the file."
        ),
    },
    {
        "key": "output_options",
        "name": "Output Options",
        "description": "The report is rendered as a Markdown table.",
    },
    {
        "key": "github_options",
        "name": "GitHub Options",
        "description": (
            "When running in a pull request workflow the report is "
            "posted as a comment, otherwise it is printed to the log."
        ),
    },
]


# Style guide for option descriptions:
# - Prefer complete sentences.
# - Phrase first sentence as a command:
#   “Print report”, not “Prints report”.

CONFIG_OPTIONS = [
    ConfigOption(
        "verbose",
        ["-v", "--verbose"],
        help="Print progress messages.",
        action="store_true",
    ),
    ConfigOption(
        "no_color",
        ["--no-color"],
        help=(
            "Turn off colored logging."
            " Is also set if environment variable NO_COLOR is present."
            " Ignored if --force-color is used."
        ),
        action="store_true",
    ),
    ConfigOption(
        "force_color",
        ["--force-color"],
        help=(
            "Force colored logging, this is the default for a terminal."
            " Is also set if environment variable FORCE_COLOR is present."
            " Has precedence over --no-color."
        ),
        action="store_true",
    ),
    ConfigOption(
        "config",
        ["--config"],
        config=False,
        help=(
            "Load that TOML configuration file. "
            "Defaults to simplecov-diff.toml or the [tool.simplecov-diff] "
            "table of pyproject.toml in the current directory."
        ),
        metavar="CONFIG",
    ),
    ConfigOption(
        "base_resultset_path",
        ["-b", "--base-resultset-path"],
        group="input_options",
        help="Read the coverage before the change from this .resultset.json file.",
        metavar="PATH",
        required=True,
        type=absolute_path,
    ),
    ConfigOption(
        "head_resultset_path",
        ["-H", "--head-resultset-path"],
        group="input_options",
        help="Read the coverage after the change from this .resultset.json file.",
        metavar="PATH",
        required=True,
        type=absolute_path,
    ),
    ConfigOption(
        "root",
        ["-r", "--root"],
        group="output_options",
        help=(
            "The workspace directory, this prefix is removed from the file names "
            "in the report. Defaults to the environment variable GITHUB_WORKSPACE "
            "or the current directory."
        ),
        metavar="ROOT",
        type=absolute_path,
    ),
    ConfigOption(
        "token",
        ["--token"],
        group="github_options",
        help=(
            "Authenticate the comment request with this token. "
            "Defaults to the environment variable GITHUB_TOKEN."
        ),
        metavar="TOKEN",
        required=True,
        type=non_empty_string,
    ),
    ConfigOption(
        "github_api_url",
        ["--github-api-url"],
        group="github_options",
        help=(
            "Use this GitHub REST API endpoint. Defaults to the environment "
            "variable GITHUB_API_URL or https://api.github.com."
        ),
        metavar="URL",
        type=non_empty_string,
    ),
    *formats.get_options(),
]
