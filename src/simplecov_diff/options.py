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
from argparse import ArgumentTypeError
import logging
import os
from typing import Any, Callable, Optional, Union

LOGGER = logging.getLogger("simplecov_diff")


def non_empty_string(value: str) -> str:
    r"""
    Check that the value isn't empty.

    >>> non_empty_string("abc")
    'abc'
    >>> non_empty_string("")
    Traceback (most recent call last):
      ...
    argparse.ArgumentTypeError: Should not be set to an empty string.
    """
    if not value:
        raise ArgumentTypeError("Should not be set to an empty string.") from None
    return value


def absolute_path(value: str, basedir: Optional[str] = None) -> str:
    r"""
    Make a absolute path if value is a relative path.
    """
    value = non_empty_string(value)

    if basedir is None:
        basedir = os.getcwd()

    if not os.path.isabs(value):
        value = os.path.join(basedir, value)
    return os.path.normpath(value)


def output_path(value: str, basedir: Optional[str] = None) -> str:
    r"""
    Make a absolute path of an output file, ``-`` stands for stdout.

    >>> output_path("-")
    '-'
    """
    if value == "-":
        return value
    if value.endswith(("/", os.sep)):
        return os.path.join(absolute_path(value, basedir), "")
    return absolute_path(value, basedir)


class Options:
    """Wrapper for holding the configuration."""

    def __init__(self, **kwargs: Any) -> None:
        self.__dict__.update(kwargs)

    def get(self, name: str) -> Any:
        """Function to get an option by name."""
        return self.__dict__.get(name)


class ConfigOption:
    # pylint: disable=too-many-instance-attributes
    # pylint: disable=too-few-public-methods
    # pylint: disable=redefined-builtin
    r"""
    Represents a single setting for a simplecov-diff runtime parameter.

    The same option can be given on the command line, in a configuration
    file or as input of a GitHub action. The converter keyword argument is
    expected to return a valid conversion of a string value or throw an
    error.

    Arguments:
        name (str):
            Destination (options object field),
            must be valid Python identifier.
        flags (list of str, optional):
            Any command line flags.

    Keyword Arguments:
        action (str, optional):
            What to do when the option is parsed:
            - store (default): store the option argument
            - store_const: store the const value
            - store_true: shortcut for store_const
        config (str or bool, optional):
            Configuration file key, also used as name of the action input.
            If absent, the first ``--flag`` is used without the leading dashes.
            If explicitly set to False,
            the option cannot be set from a config file.
        const (any, optional):
            Assigned by the "store_const" action.
        default (any, optional):
            Default value if the option is not found, defaults to None.
        group (str, optional):
            Name of the option group in CONFIG_OPTION_GROUPS.
        help (str):
            Help message.
            Any named curly-brace placeholders
            are filled in from the option attributes via ``str.format()``.
        metavar (str, optional):
            Name of the value in help messages, defaults to the name.
        required (bool, optional):
            Whether the option must be set by any source, defaults to False.
            Checked after all sources are merged.
        type (function, optional):
            Check and convert the option value, may throw exceptions.

    Constraint: an option must either have a flag or a config key.
    """

    def __init__(
        self,
        name: str,
        flags: Optional[list[str]] = None,
        *,
        help: str,
        action: str = "store",
        const: Any = None,
        config: Union[str, bool] = True,
        default: Any = None,
        group: Optional[str] = None,
        metavar: Optional[str] = None,
        required: bool = False,
        type: Optional[Callable[[str], Any]] = None,
    ) -> None:
        if flags is None:
            flags = []

        config_keys = _derive_configuration_key(config, flags=flags)
        del config

        if not (flags or config_keys):
            raise AssertionError("Option must be named or a config argument.")

        if not help:
            raise AssertionError("help required")
        if flags and config_keys:
            help += f" Config key(s): {', '.join(config_keys)}."

        # store_true is mapped to store_const
        # so that config values can use the same logic.
        if action == "store_true":
            if const is not None:
                raise AssertionError("action=store_true and const conflict")
            if default is not None:
                raise AssertionError("action=store_true and default conflict")
            action = "store_const"
            const = True
            default = False

        if action not in ("store", "store_const"):
            raise AssertionError(f"Unknown action {action!r}")

        self.name = name
        self.flags = flags

        self.action = action
        self.config_keys = config_keys
        self.const = const
        self.default = default
        self.group = group
        self.help = ""  # assigned later
        self.metavar = metavar
        self.required = required
        self.type = type

        # format the help
        self.help = help.format(**self.__dict__)

    def __repr__(self) -> str:
        r"""String representation of instance.

        >>> ConfigOption('foo', ['-f', '--foo'], help="foo text.")  # doctest: +ELLIPSIS
        ConfigOption('foo', [-f, --foo], ..., help='foo text. Config key(s): foo.', ...)
        """
        name = self.name
        flags = ", ".join(self.flags)
        kwargs = ", ".join(
            f"{k}={v!r}"
            for k, v in sorted(self.__dict__.items())
            if k not in ("name", "flags")
        )

        return f"ConfigOption({name!r}, [{flags}], {kwargs})"


def _derive_configuration_key(
    config: Union[str, bool],
    *,
    flags: list[str],
) -> Optional[list[str]]:
    if config is True:
        config_keys = []
        for flag in flags:
            if flag.startswith("--"):
                config_keys.append(flag.lstrip("-"))
        if not config_keys:
            raise AssertionError(f"Could not autogenerate config key from {flags!r}.")
        return config_keys
    if config is False:
        return None
    if isinstance(config, str):
        return [config]

    raise AssertionError(
        f"Sanity check failed, unexpected config entry type {config!r}"
    )
