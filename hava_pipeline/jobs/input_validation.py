"""Input validation rules for pipeline parameters."""

from __future__ import annotations

import logging
import re
from typing import Final

from hava_pipeline.domain import VIEW_TYPE_MAP, HavaErrorCode, HavaResult, PipelineInput


logger = logging.getLogger(__name__)

_UUID_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_IMAGE_PATH_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.?[/A-Za-z0-9]+\.png")


def job_validate_uuid(value: str) -> bool:
    """Return whether a value is a hyphenated UUID string."""

    return _UUID_PATTERN.fullmatch(value or "") is not None


def job_validate_view_type(view_type: str) -> HavaResult:
    """Case-sensitive validation of supported view types.

    Args:
        view_type: Logical view type name.

    Returns:
        HavaResult: Success when `view_type` is an exact `VIEW_TYPE_MAP` key,
        otherwise a failure listing supported values.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if view_type not in VIEW_TYPE_MAP:
        return HavaResult.result_failed(
            f"View type '{view_type}' not known, supported values are: {','.join(VIEW_TYPE_MAP.keys())}",
            HavaErrorCode.VALIDATION_ERROR,
        )
    return HavaResult.result_ok()


def job_validate_image_path(image_path: str) -> HavaResult:
    """Validate output image path against the restricted path grammar.

    Accepted paths are one `.png` file name, optionally prefixed by a single
    `.` and folders made of letters, digits and `/`. Parent-folder segments
    and any other characters are rejected.

    Args:
        image_path: Candidate output path.

    Returns:
        HavaResult: Success for accepted paths, otherwise a failure diagnostic.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if _IMAGE_PATH_PATTERN.fullmatch(image_path or "") is None:
        return HavaResult.result_failed(
            f"Invalid path '{image_path}', please limit the path to alphanumeric characters "
            "and forward slash for folders, ending in .png",
            HavaErrorCode.VALIDATION_ERROR,
        )
    return HavaResult.result_ok()


def job_validate_pipeline_input(pipeline_input: PipelineInput) -> HavaResult:
    """Validate all pipeline inputs and aggregate every violated rule.

    Environment id, view type and image path are only checked when export
    is not skipped.

    Args:
        pipeline_input: Parameters for one pipeline run.

    Returns:
        HavaResult: Success, or one failure whose message joins all violations
        with newlines.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    logger.info("Validating user input")
    errors: list[str] = []

    if not job_validate_uuid(pipeline_input.source_id):
        errors.append(f"Source Id '{pipeline_input.source_id}' is not well formed, should be a UUID")

    if not pipeline_input.hava_token.strip():
        errors.append("Hava token is not set")
    elif not (pipeline_input.hava_token.isascii() and pipeline_input.hava_token.isprintable()):
        errors.append("Hava token contains characters that are not allowed in an HTTP header")

    if not pipeline_input.skip_export:
        if not pipeline_input.environment_id:
            errors.append("Environment Id is required when skip_export is false")
        elif not job_validate_uuid(pipeline_input.environment_id):
            errors.append(f"Environment Id '{pipeline_input.environment_id}' is not well formed, should be a UUID")

        if not pipeline_input.view_type:
            errors.append("View type is required when skip_export is false")
        else:
            view_type_result = job_validate_view_type(pipeline_input.view_type)
            if not view_type_result.success:
                errors.append(view_type_result.message)

        image_path_result = job_validate_image_path(pipeline_input.image_path)
        if not image_path_result.success:
            errors.append(image_path_result.message)

    if errors:
        for error in errors:
            logger.error(error)
        return HavaResult.result_failed("\n".join(errors), HavaErrorCode.VALIDATION_ERROR)

    logger.info("Input validation complete")
    return HavaResult.result_ok()
