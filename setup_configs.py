#!/usr/bin/env python3
"""
setup-configs: install the shared pre-commit configuration into a repository.

Downloads the shared lint settings (.config/), the pre-commit configuration
for the selected project type and, for Ansible projects, an ansible.cfg
scaffold into the current working directory.

Usage:
    setup-configs ansible
    setup-configs terraform --overwrite prompt
    setup-configs --configs-only
"""

import argparse
import logging
import sys
from typing import List, Optional

from shared_hooks.app_state import AppState
from shared_hooks.config_utils import (
    SUPPORTED_SET_PARAMS,
    load_configuration,
    update_runtime_override,
)
from shared_hooks.data_models import ProjectType
from shared_hooks.setup_runner import run_setup

__version__ = "1.0.0"

# Keep httpx request logging out of the status output
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

PROJECT_TYPE_CHOICES = [p.value for p in ProjectType]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="setup-configs",
        description="Install the shared pre-commit configuration files into the current repository.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        'project_type', metavar='PROJECT_TYPE', nargs='?',
        help=f"Project type: {', '.join(PROJECT_TYPE_CHOICES)}.\n"
             "Required unless --configs-only is given."
    )
    parser.add_argument(
        '--configs-only', action='store_true',
        help='Only fetch the shared .config/ files (the Ansible set when no PROJECT_TYPE is given);\n'
             'do not write .pre-commit-config.yaml or ansible.cfg.'
    )
    parser.add_argument(
        '--overwrite', choices=SUPPORTED_SET_PARAMS["overwrite"]["allowed_values"],
        help=SUPPORTED_SET_PARAMS["overwrite"]["description"]
    )
    parser.add_argument('--base-url', metavar='URL', help=SUPPORTED_SET_PARAMS["base_url"]["description"])
    parser.add_argument('--debug', action='store_true', help='Print extra diagnostic output.')
    return parser


def _usage_error(parser: argparse.ArgumentParser, app_state: AppState, message: str) -> int:
    parser.print_usage(sys.stderr)
    app_state.err_console.print(f"[red]Error: {message}[/red]")
    return 1


def run(argv: Optional[List[str]] = None, app_state: Optional[AppState] = None) -> int:
    """Parses arguments, applies configuration and runs the setup. Returns the exit code."""
    app_state = app_state or AppState()
    parser = build_parser()
    args = parser.parse_args(argv)

    project_type = None
    if args.project_type is None:
        if not args.configs_only:
            return _usage_error(parser, app_state,
                                f"PROJECT_TYPE is required (one of: {', '.join(PROJECT_TYPE_CHOICES)}).")
    else:
        try:
            project_type = ProjectType(args.project_type.lower())
        except ValueError:
            return _usage_error(parser, app_state,
                                f"Invalid PROJECT_TYPE '{args.project_type}'. Choose one of: {', '.join(PROJECT_TYPE_CHOICES)}.")

    load_configuration(app_state.console)

    if args.debug:
        app_state.DEBUG = True
    if args.overwrite:
        update_runtime_override("overwrite", args.overwrite, app_state.RUNTIME_OVERRIDES, app_state.err_console)
    if args.base_url and not update_runtime_override("base_url", args.base_url, app_state.RUNTIME_OVERRIDES,
                                                     app_state.err_console):
        return 1

    return run_setup(app_state, project_type, configs_only=args.configs_only)


def main():
    try:
        exit_code = run()
    except KeyboardInterrupt:
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
