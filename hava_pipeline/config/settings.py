"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hava_pipeline.domain import PipelineInput


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for action inputs and Hava API tuning.

    Action inputs are read the way the GitHub Actions runner exposes them,
    for example `source_id` reads from `INPUT_SOURCE_ID`, with a
    `HAVA_`-prefixed fallback for local runs. Input values are only
    coerced here; their rules are checked together by pipeline validation.
    Tuning fields map directly to their uppercase names.

    Attributes:
        source_id: Source to synchronise.
        environment_id: Environment holding the view to export.
        view_type: Logical view type to export.
        hava_token: Hava API token.
        image_path: Output path for the exported PNG.
        skip_export: When true only the sync stage runs.
        hava_api_base_url: Base URL of the Hava API.
        hava_job_timeout_seconds: Wall-clock budget for one job wait.
        hava_job_poll_interval_seconds: Delay between job status checks.
        hava_request_timeout_seconds: Per-request HTTP timeout.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    source_id: str = Field(default="", validation_alias=AliasChoices("INPUT_SOURCE_ID", "HAVA_SOURCE_ID", "source_id"))
    environment_id: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_ENVIRONMENT_ID", "HAVA_ENVIRONMENT_ID", "environment_id"),
    )
    view_type: str = Field(
        default="infrastructure",
        validation_alias=AliasChoices("INPUT_VIEW_TYPE", "HAVA_VIEW_TYPE", "view_type"),
    )
    hava_token: str = Field(default="", validation_alias=AliasChoices("INPUT_HAVA_TOKEN", "HAVA_TOKEN", "hava_token"))
    image_path: str = Field(
        default="hava.png",
        validation_alias=AliasChoices("INPUT_IMAGE_PATH", "HAVA_IMAGE_PATH", "image_path"),
    )
    skip_export: bool = Field(
        default=False,
        validation_alias=AliasChoices("INPUT_SKIP_EXPORT", "HAVA_SKIP_EXPORT", "skip_export"),
    )
    hava_api_base_url: str = Field(default="https://api.hava.io", min_length=1)
    hava_job_timeout_seconds: float = Field(default=360.0, gt=0)
    hava_job_poll_interval_seconds: float = Field(default=1.0, gt=0)
    hava_request_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("source_id", "environment_id", "view_type", "hava_token", "image_path", mode="before")
    @classmethod
    def _strip_input_string(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("skip_export", mode="before")
    @classmethod
    def _blank_skip_export_is_false(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return False
        return value

    @field_validator("hava_api_base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        stripped_value = value.strip().rstrip("/")
        if not stripped_value.startswith(("http://", "https://")):
            raise ValueError("hava_api_base_url must be an http(s) URL")
        return stripped_value

    def settings_build_pipeline_input(self) -> PipelineInput:
        """Build pipeline parameters from loaded action inputs.

        Returns:
            PipelineInput: Unvalidated parameter bundle.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return PipelineInput(
            source_id=self.source_id,
            hava_token=self.hava_token,
            environment_id=self.environment_id,
            view_type=self.view_type,
            image_path=self.image_path,
            skip_export=self.skip_export,
        )


def config_load_settings(**overrides: object) -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Args:
        overrides: Explicit field values, for example from CLI flags, taking
            precedence over environment values.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    explicit_values = {name: value for name, value in overrides.items() if value is not None}
    try:
        return AppSettings(**explicit_values)
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
