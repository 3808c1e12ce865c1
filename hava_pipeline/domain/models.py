"""Typed domain models shared across runtime layers.

This module provides the immutable data contracts passed between the job
waiter, view resolver, orchestrators and pipeline driver.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, Mapping

from .error_codes import HavaErrorCode


VIEW_TYPE_MAP: Final[Mapping[str, str]] = MappingProxyType(
    {
        "infrastructure": "Views::Infrastructure",
        "security": "Views::Security",
        "container": "Views::Container",
    }
)


@dataclass(frozen=True)
class HavaResult:
    """Uniform outcome returned by every fallible pipeline operation.

    Attributes:
        success: Whether the operation completed successfully.
        message: Success payload (view id, download location) or failure diagnostic.
        error_code: Failure classification, `None` on success.
    """

    success: bool
    message: str = ""
    error_code: HavaErrorCode | None = None

    def __post_init__(self) -> None:
        if self.success and self.error_code is not None:
            raise ValueError("successful result must not carry an error_code")
        if not self.success and not self.message.strip():
            raise ValueError("failed result must carry a non-empty message")

    @classmethod
    def result_ok(cls, message: str = "") -> HavaResult:
        """Build a successful result.

        Args:
            message: Optional success payload.

        Returns:
            HavaResult: Successful result instance.

        Raises:
            RuntimeError: This constructor does not raise runtime errors.
        """

        return cls(success=True, message=message)

    @classmethod
    def result_failed(
        cls,
        message: str,
        error_code: HavaErrorCode = HavaErrorCode.UNEXPECTED_STATUS_ERROR,
    ) -> HavaResult:
        """Build a failed result.

        Args:
            message: Human-readable failure diagnostic.
            error_code: Failure classification.

        Returns:
            HavaResult: Failed result instance.

        Raises:
            ValueError: Raised when message is blank.
        """

        return cls(success=False, message=message, error_code=error_code)


@dataclass(frozen=True)
class View:
    """Diagram view of an environment as reported by the vendor API.

    Attributes:
        view_id: Vendor view identifier.
        view_type: Vendor-internal type tag, for example `Views::Infrastructure`.
        image_url: Last rendered image URL, empty when not rendered yet.
    """

    view_id: str
    view_type: str
    image_url: str = ""

    @classmethod
    def view_from_payload(cls, payload: Mapping[str, Any]) -> View:
        """Build a view from one entry of an environment `views` list.

        Args:
            payload: Decoded JSON object for one view.

        Returns:
            View: Parsed view contract.

        Raises:
            ValueError: Raised when the view id is missing.
        """

        view_id = str(payload.get("id") or "").strip()
        if not view_id:
            raise ValueError("view payload missing id")
        return cls(
            view_id=view_id,
            view_type=str(payload.get("type") or ""),
            image_url=str(payload.get("image_url") or ""),
        )


@dataclass(frozen=True)
class PipelineInput:
    """Parameter bundle for one sync and export pipeline run.

    Attributes:
        source_id: Source to synchronise, UUID-shaped.
        hava_token: API token used for bearer authentication.
        environment_id: Environment holding the view to export.
        view_type: Logical view type, one of `VIEW_TYPE_MAP` keys.
        image_path: Output path for the exported PNG.
        skip_export: When true only the sync stage runs.
    """

    source_id: str
    hava_token: str
    environment_id: str = ""
    view_type: str = ""
    image_path: str = ""
    skip_export: bool = False

    def __repr__(self) -> str:
        return (
            f"PipelineInput(source_id={self.source_id!r}, environment_id={self.environment_id!r}, "
            f"view_type={self.view_type!r}, image_path={self.image_path!r}, skip_export={self.skip_export!r})"
        )
