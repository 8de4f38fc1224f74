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

import os
from pathlib import Path
import re
from runpy import run_path
import shutil

import nox


DEFAULT_TEST_DIRECTORIES = ["src", "tests"]
DEFAULT_LINT_ARGUMENTS = [
    "noxfile.py",
    "setup.py",
] + DEFAULT_TEST_DIRECTORIES

CI_RUN = "GITHUB_ACTION" in os.environ

nox.options.sessions = ["qa"]


def get_simplecov_diff_version() -> str:
    """Get the current simplecov-diff version without the date."""
    return re.sub(
        r"\.d\d+$",
        "",
        run_path(str(Path(__file__).parent / "src" / "simplecov_diff" / "version.py"))[
            "__version__"
        ],
    )


@nox.session(python=False)
def qa(session: nox.Session) -> None:
    """Run the linters and the tests."""
    for session_id in ["lint", "tests"]:
        session.log(f"Notify session {session_id}")
        session.notify(session_id, [])


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Run the linters."""
    session.notify("ruff_check")
    session.notify("ruff_format")


@nox.session
def ruff_check(session: nox.Session) -> None:
    """Run ruff check command."""
    session.install("ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = DEFAULT_LINT_ARGUMENTS
    session.run("ruff", "check", *args)


@nox.session
def ruff_format(session: nox.Session) -> None:
    """Run ruff format command."""
    session.install("ruff")
    if session.posargs:
        args = session.posargs
    else:
        args = ["--diff", *DEFAULT_LINT_ARGUMENTS]
    session.run("ruff", "format", *args)


@nox.session
def tests(session: nox.Session) -> None:
    """Run the unit tests and the doctests."""
    use_coverage = os.environ.get("USE_COVERAGE") == "true"
    session.install("-e", ".[test]")
    if use_coverage:
        session.install("coverage", "pytest-cov")

    args = ["-m", "pytest", "--doctest-modules"]
    if use_coverage:
        args += ["--cov=src", "--cov-branch"]
    args += session.posargs
    if "--" not in args:
        args += ["--"] + DEFAULT_TEST_DIRECTORIES

    # Delay the session failure,
    # even if command fail we want to get the coverage report.
    try:
        session.run("python", *args)
    finally:
        if use_coverage:
            session.run("coverage", "xml")
            if not CI_RUN:
                session.run("coverage", "html")


@nox.session
def build_distribution(session: nox.Session) -> None:
    """Build a wheel."""
    session.install("build")
    # Remove old dist if present
    dist_dir = Path("dist")
    if dist_dir.exists():
        shutil.rmtree(dist_dir)
    session.run("python", "-m", "build")
    session.notify(("check_distribution"))


@nox.session
def check_distribution(session: nox.Session) -> None:
    """Check the wheel and do a smoke test, should not be used directly."""
    session.install("wheel", "twine")
    with session.chdir("dist"):
        session.run("twine", "check", "*", external=True)
        session.install(str(list(Path().glob("*.whl"))[0]))
    session.log(f"Installed simplecov-diff {get_simplecov_diff_version()}")
    session.run("python", "-m", "simplecov_diff", "--help", external=True)
    session.run("simplecov-diff", "--version", external=True)
