"""Command-line interface for findinfile.

Examples
--------
Search one directory::

    $ findinfile -s TODO -d ./src

Search several directories, case-insensitively, only Python and text files::

    $ findinfile -s todo -d ./src,./tests -e py,txt -i

Include binary files and show per-file diagnostics::

    $ findinfile -s needle -d . --no-exclude-binary -v

Machine-readable output::

    $ findinfile -s TODO -d . --format json

Configuration files
-------------------
Defaults for the optional flags can be placed in ``.findinfile.toml``,
``.findinfile.yaml``, ``.findinfile.json`` or a ``[tool.findinfile]`` table in
``pyproject.toml``; point at a specific file with ``--config`` or the
``FINDINFILE_CONFIG`` environment variable. Command-line flags win.

"""

import argparse
import logging
import os
from typing import Any, Mapping, Optional

from findinfile.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from findinfile.cli.config import load_config_with_priority
from findinfile.cli.output import build_result_sink, should_show_status
from findinfile.cli.progress import StatusProgress
from findinfile.cli.validation import collect_argument_problems, report_validation_problems
from findinfile.constants import CONFIG_ENV_VAR, DEFAULT_OUTPUT_FORMAT, OUTPUT_FORMATS
from findinfile.exceptions import FindInFileError
from findinfile.logging_utils import configure_logging, resolve_log_level
from findinfile.options import build_search_options, options_from_mapping
from findinfile.search import present, walk

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser", "apply_config_defaults"]

# Flags that a config file may provide when absent from the command line
CONFIGURABLE_FLAGS = (
    "extensions",
    "ignore_case",
    "exclude_binary",
    "full_path",
    "verbose",
    "jobs",
    "encoding",
    "detect_encoding",
    "output_format",
)

_BOOLEAN_FLAGS = frozenset({"ignore_case", "exclude_binary", "full_path", "verbose", "detect_encoding"})

# CLI destinations forwarded to SearchOptions as keyword flags
_OPTION_FLAGS = ("ignore_case", "exclude_binary", "full_path", "verbose", "jobs", "encoding", "detect_encoding")


def _config_value_problem(key: str, value: Any) -> Optional[str]:
    """Describe what is wrong with a config value, or return None when it is usable."""
    if key in _BOOLEAN_FLAGS:
        return None if isinstance(value, bool) else "must be true or false"
    if key == "jobs":
        return None if isinstance(value, int) and not isinstance(value, bool) else "must be an integer"
    if key == "encoding":
        return None if isinstance(value, str) else "must be a string"
    if key == "extensions":
        if isinstance(value, str):
            return None
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            return None
        return "must be a string or a list of strings"
    if key == "output_format":
        return None if value in OUTPUT_FORMATS else f"must be one of {', '.join(OUTPUT_FORMATS)}"
    return None


def apply_config_defaults(parsed_args: argparse.Namespace, config: Mapping[str, Any]) -> argparse.Namespace:
    """Fill unset flags on ``parsed_args`` from ``config``.

    List values for ``extensions`` are joined so they go through the same
    normalization as the command-line string. Unknown keys are ignored.

    Raises
    ------
    argparse.ArgumentTypeError
        If a config value has the wrong type for its flag

    """
    for key in CONFIGURABLE_FLAGS:
        if getattr(parsed_args, key, None) is not None or key not in config:
            continue
        value = config[key]
        problem = _config_value_problem(key, value)
        if problem is not None:
            raise argparse.ArgumentTypeError(f"Config value for '{key}' {problem}, got {value!r}")
        if key == "extensions" and isinstance(value, (list, tuple)):
            value = ",".join(value)
        setattr(parsed_args, key, value)
    return parsed_args


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    level = resolve_log_level(parsed_args.log_level, verbose=bool(parsed_args.verbose), trace=parsed_args.trace)
    configure_logging(level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _collect_option_flags(parsed_args: argparse.Namespace) -> dict[str, Any]:
    flags = {name: getattr(parsed_args, name) for name in _OPTION_FLAGS if getattr(parsed_args, name, None) is not None}
    return options_from_mapping(flags)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the findinfile command line.

    Parameters
    ----------
    argv : list[str], optional
        Arguments without the program name; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code: 0 on success (with or without matches), 3 for
        invalid configuration, 1 for unexpected failures

    """
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    config_error: Optional[argparse.ArgumentTypeError] = None
    try:
        config = load_config_with_priority(explicit_path=parsed_args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR))
        apply_config_defaults(parsed_args, config)
    except argparse.ArgumentTypeError as exc:
        config_error = exc

    _setup_logging(parsed_args)

    if config_error is not None:
        logger.error("Error loading configuration: %s", config_error)
        return EXIT_VALIDATION_ERROR

    if report_validation_problems(collect_argument_problems(parsed_args), logger=logger):
        return EXIT_VALIDATION_ERROR

    try:
        options = build_search_options(
            parsed_args.search_string,
            parsed_args.directory,
            parsed_args.extensions,
            **_collect_option_flags(parsed_args),
        )
    except FindInFileError as exc:
        logger.error("%s", exc.message)
        return get_exit_code_for_exception(exc)

    output_format = parsed_args.output_format or DEFAULT_OUTPUT_FORMAT
    try:
        sink = build_result_sink(output_format)
        sink.write_header(options)
        with StatusProgress(enabled=should_show_status(output_format)) as progress:
            report = walk(options, progress_callback=progress.callback)
        present(report, options, sink)
    except Exception as exc:
        logger.error("Error during search: %s", exc, exc_info=parsed_args.trace)
        return get_exit_code_for_exception(exc)

    return EXIT_SUCCESS
