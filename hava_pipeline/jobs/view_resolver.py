"""Lookup of environment views by logical view type."""

from __future__ import annotations

import logging

from hava_pipeline.adapters import HavaAdapterError, HavaApiPort
from hava_pipeline.domain import VIEW_TYPE_MAP, HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode, HavaResult, View

from .interfaces import ViewResolverPort


logger = logging.getLogger(__name__)


class HavaViewResolver(ViewResolverPort):
    """Resolve the first view of one type within an environment."""

    def view_resolve_id(self, environment_id: str, view_type: str, api_client: HavaApiPort) -> HavaResult:
        """Fetch the environment and return the id of its first matching view.

        Args:
            environment_id: Environment identifier.
            view_type: Logical view type key, mapped through `VIEW_TYPE_MAP`.
            api_client: Authenticated API client.

        Returns:
            HavaResult: Success carrying the view id, or failure diagnostic.

        Raises:
            RuntimeError: This method reports failures through the result.
        """

        try:
            response = api_client.adapter_environment_get(environment_id)
        except HavaAdapterError as error:
            return HavaResult.result_failed(
                f"Request for environment '{environment_id}' failed: {error}",
                HavaErrorCode.TRANSPORT_ERROR,
            )

        if response.status_code == 401:
            return HavaResult.result_failed(HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode.AUTH_ERROR)
        if response.status_code == 404:
            return HavaResult.result_failed(
                f"Export request to environment with ID '{environment_id}' failed because "
                "an environment with that ID was not found",
                HavaErrorCode.NOT_FOUND_ERROR,
            )
        if response.status_code != 200:
            return HavaResult.result_failed(
                f"Unknown error code returned when requesting environment details: '{response.status_code}'",
                HavaErrorCode.UNEXPECTED_STATUS_ERROR,
            )

        try:
            matching_views = self._view_parse_matching_views(response.response_json(), VIEW_TYPE_MAP.get(view_type))
        except ValueError as error:
            return HavaResult.result_failed(
                f"Environment '{environment_id}' details could not be parsed: {error}",
                HavaErrorCode.UNEXPECTED_STATUS_ERROR,
            )

        if not matching_views:
            return HavaResult.result_failed(
                f"No views matching type '{view_type}' on environment with id '{environment_id}'",
                HavaErrorCode.NOT_FOUND_ERROR,
            )
        if len(matching_views) > 1:
            logger.warning("Multiple views of type '%s' found, selecting the first one!", view_type)

        return HavaResult.result_ok(matching_views[0].view_id)

    def _view_parse_matching_views(self, environment_payload: object, expected_type: str | None) -> list[View]:
        """Parse the views of one type tag from an environment payload.

        Entries with another type tag are skipped unparsed.

        Args:
            environment_payload: Decoded environment JSON document.
            expected_type: Vendor type tag to match, `None` matches nothing.

        Returns:
            list[View]: Matching views in API order.

        Raises:
            ValueError: Raised when the payload shape is not an environment document
                or a matching view has no id.
        """

        if not isinstance(environment_payload, dict):
            raise ValueError("environment payload is not an object")
        raw_views = environment_payload.get("views") or []
        if not isinstance(raw_views, list):
            raise ValueError("environment views is not a list")
        return [
            View.view_from_payload(raw_view)
            for raw_view in raw_views
            if isinstance(raw_view, dict) and expected_type is not None and raw_view.get("type") == expected_type
        ]
