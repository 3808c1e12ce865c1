"""Main module entrypoint for action and local runtime execution.

This module loads settings, runs one sync and export pipeline and reports
results the way the GitHub Actions runner expects them.
"""

import argparse
import logging
import os
from typing import Sequence

from hava_pipeline.bootstrap import bootstrap_create_pipeline_driver
from hava_pipeline.config import SettingsLoadError, config_load_settings


def main(argv: Sequence[str] | None = None) -> None:
    """Run the sync and export pipeline with validated startup configuration.

    Args:
        argv: Optional argument list, defaults to `sys.argv[1:]`.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with status 1 when configuration or any stage fails.
    """

    argument_parser = argparse.ArgumentParser(description="Hava source sync and diagram export")
    argument_parser.add_argument("--source-id", dest="source_id", type=str, help="Source id to synchronise")
    argument_parser.add_argument("--environment-id", dest="environment_id", type=str, help="Environment id to export")
    argument_parser.add_argument(
        "--view-type",
        dest="view_type",
        type=str,
        help="View type to export: `infrastructure`, `security` or `container`",
    )
    argument_parser.add_argument("--image-path", dest="image_path", type=str, help="Output PNG path")
    argument_parser.add_argument(
        "--skip-export",
        dest="skip_export",
        action="store_const",
        const=True,
        default=None,
        help="Only run the source sync",
    )
    argument_parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, parsed_arguments.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = config_load_settings(
            source_id=parsed_arguments.source_id,
            environment_id=parsed_arguments.environment_id,
            view_type=parsed_arguments.view_type,
            image_path=parsed_arguments.image_path,
            skip_export=parsed_arguments.skip_export,
        )
    except SettingsLoadError as error:
        main_report_failure(str(error))
        raise SystemExit(1) from error

    pipeline_driver = bootstrap_create_pipeline_driver(
        settings=settings,
        output_reporter=lambda image_path: main_report_output("path", image_path),
    )
    pipeline_result = pipeline_driver.job_run(settings.settings_build_pipeline_input())
    if not pipeline_result.success:
        main_report_failure(pipeline_result.message)
        raise SystemExit(1)


def main_report_output(name: str, value: str) -> None:
    """Publish one action output.

    Appends `name=value` to the file named by `GITHUB_OUTPUT` when running
    inside a workflow, otherwise prints it to stdout.

    Args:
        name: Output name.
        value: Output value.

    Returns:
        None: Writes output as side effect.

    Raises:
        OSError: Raised when the output file cannot be appended.
    """

    output_file = os.environ.get("GITHUB_OUTPUT", "").strip()
    if output_file:
        with open(output_file, "a", encoding="utf-8") as output_handle:
            output_handle.write(f"{name}={value}\n")
        return
    print(f"{name}={value}")


def main_report_failure(message: str) -> None:
    """Print a workflow error annotation for the terminal failure message.

    Args:
        message: Failure message, may span multiple lines.

    Returns:
        None: Prints annotation to stdout as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    escaped_message = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::error::{escaped_message}")


if __name__ == "__main__":
    main()
