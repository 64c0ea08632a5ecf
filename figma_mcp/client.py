"""
Figma REST API client.

A :class:`FigmaClient` is bound to one tenant's credentials for the lifetime
of one inbound request. It holds no other state: never cache an instance or
share it between requests.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .config import FIGMA_API_BASE_URL, REQUEST_TIMEOUT
from .credentials import TOKEN_HEADER, TenantCredentials
from .errors import (
    AuthenticationError,
    FigmaApiError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60

# ─── Helpers ─────────────────────────────────────────────────────────────────


def _query_value(value: Any) -> str:
    if value is True:
        return "true"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _build_params(**options: Any) -> Dict[str, str]:
    """Build query parameters from keyword options.

    Unset options (``None``) and ``False`` flags are left out so that only
    what the caller asked for reaches Figma.
    """
    return {
        key: _query_value(value)
        for key, value in options.items()
        if value is not None and value is not False
    }


def _compact(body: Dict[str, Any]) -> Dict[str, Any]:
    """Drop ``None`` fields from a request body."""
    return {key: value for key, value in body.items() if value is not None}


def _parse_retry_after(value: Optional[str]) -> int:
    if not value:
        return DEFAULT_RETRY_AFTER
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return DEFAULT_RETRY_AFTER


def _error_message(response: httpx.Response) -> str:
    """Best-effort message from an error body: ``message``, ``err``, then ``error``."""
    default = f"API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return default
    if not isinstance(body, dict):
        return default
    for key in ("message", "err", "error"):
        value = body.get(key)
        if value and isinstance(value, str):
            return value
    return default


# ─── Client ──────────────────────────────────────────────────────────────────


class FigmaClient:
    """Typed access to the Figma REST API for a single tenant."""

    def __init__(
        self,
        credentials: TenantCredentials,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        self._transport = transport
        self.base_url = credentials.base_url or FIGMA_API_BASE_URL

    def _get_headers(self) -> Dict[str, str]:
        """Return authentication headers for the Figma API."""
        if not self._credentials.access_token:
            raise AuthenticationError(
                f"No credentials provided. Include {TOKEN_HEADER} header with your "
                "Figma personal access token."
            )
        return {
            TOKEN_HEADER: self._credentials.access_token,
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """Issue one call against the Figma API and classify the response."""
        headers = self._get_headers()
        try:
            async with httpx.AsyncClient(
                timeout=REQUEST_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{endpoint}",
                    headers=headers,
                    params=params or None,
                    json=json,
                )
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request to {endpoint} timed out. Try again.") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach the Figma API: {e}") from e

        logger.debug("%s %s -> %s", method, endpoint, response.status_code)
        return self._handle_response(response, endpoint)

    @staticmethod
    def _handle_response(response: httpx.Response, endpoint: str) -> Any:
        status = response.status_code

        if status == 429:
            retry_after = _parse_retry_after(response.headers.get("Retry-After"))
            raise RateLimitError("Rate limit exceeded", retry_after)
        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check your Figma personal access token."
            )
        if status == 403:
            raise ForbiddenError(
                "Access forbidden. You may not have permission to access this resource."
            )
        if status == 404:
            raise NotFoundError("Resource", endpoint)
        if not response.is_success:
            raise FigmaApiError(_error_message(response), status_code=status)

        if status == 204:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise FigmaApiError(
                f"Invalid JSON in response from {endpoint}", status_code=status
            ) from e

    # ─── Connection ──────────────────────────────────────────────────────────

    async def test_connection(self) -> Dict[str, Any]:
        """Check the token by fetching the current user. Never raises."""
        try:
            user = await self.get_me()
        except Exception as e:
            # Includes non-API failures, e.g. a token httpx cannot encode as a header.
            return {"connected": False, "message": str(e) or type(e).__name__}
        return {
            "connected": True,
            "message": "Successfully connected to Figma API",
            "user": user,
        }

    # ─── Files ───────────────────────────────────────────────────────────────

    async def get_file(
        self,
        file_key: str,
        *,
        version: Optional[str] = None,
        ids: Optional[Sequence[str]] = None,
        depth: Optional[int] = None,
        geometry: Optional[str] = None,
        plugin_data: Optional[str] = None,
        branch_data: bool = False,
    ) -> Dict[str, Any]:
        params = _build_params(
            version=version,
            ids=ids,
            depth=depth,
            geometry=geometry,
            plugin_data=plugin_data,
            branch_data=branch_data,
        )
        return await self._request("GET", f"/v1/files/{file_key}", params=params)

    async def get_file_nodes(
        self,
        file_key: str,
        ids: Sequence[str],
        *,
        version: Optional[str] = None,
        depth: Optional[int] = None,
        geometry: Optional[str] = None,
        plugin_data: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _build_params(
            ids=ids,
            version=version,
            depth=depth,
            geometry=geometry,
            plugin_data=plugin_data,
        )
        return await self._request("GET", f"/v1/files/{file_key}/nodes", params=params)

    async def get_file_meta(self, file_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/files/{file_key}/meta")

    async def get_images(
        self,
        file_key: str,
        ids: Sequence[str],
        *,
        scale: Optional[float] = None,
        format: Optional[str] = None,
        svg_include_id: bool = False,
        svg_include_node_id: bool = False,
        svg_simplify_stroke: bool = False,
        contents_only: bool = False,
        use_absolute_bounds: bool = False,
        version: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Render nodes to images. Returned URLs expire after 14 days."""
        params = _build_params(
            ids=ids,
            scale=scale,
            format=format,
            svg_include_id=svg_include_id,
            svg_include_node_id=svg_include_node_id,
            svg_simplify_stroke=svg_simplify_stroke,
            contents_only=contents_only,
            use_absolute_bounds=use_absolute_bounds,
            version=version,
        )
        return await self._request("GET", f"/v1/images/{file_key}", params=params)

    async def get_image_fills(self, file_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/files/{file_key}/images")

    # ─── Versions ────────────────────────────────────────────────────────────

    async def get_file_versions(
        self,
        file_key: str,
        *,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _build_params(page_size=page_size, cursor=cursor)
        return await self._request("GET", f"/v1/files/{file_key}/versions", params=params)

    # ─── Comments ────────────────────────────────────────────────────────────

    async def get_comments(self, file_key: str, *, as_md: bool = False) -> Dict[str, Any]:
        params = _build_params(as_md=as_md)
        return await self._request("GET", f"/v1/files/{file_key}/comments", params=params)

    async def post_comment(
        self,
        file_key: str,
        message: str,
        *,
        comment_id: Optional[str] = None,
        client_meta: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Post a new comment, or a reply when ``comment_id`` is given."""
        body = _compact(
            {"message": message, "comment_id": comment_id, "client_meta": client_meta}
        )
        return await self._request("POST", f"/v1/files/{file_key}/comments", json=body)

    async def delete_comment(self, file_key: str, comment_id: str) -> None:
        await self._request("DELETE", f"/v1/files/{file_key}/comments/{comment_id}")

    async def get_comment_reactions(
        self, file_key: str, comment_id: str, *, cursor: Optional[str] = None
    ) -> Dict[str, Any]:
        params = _build_params(cursor=cursor)
        return await self._request(
            "GET", f"/v1/files/{file_key}/comments/{comment_id}/reactions", params=params
        )

    async def post_comment_reaction(self, file_key: str, comment_id: str, emoji: str) -> None:
        await self._request(
            "POST",
            f"/v1/files/{file_key}/comments/{comment_id}/reactions",
            json={"emoji": emoji},
        )

    async def delete_comment_reaction(self, file_key: str, comment_id: str, emoji: str) -> None:
        await self._request(
            "DELETE",
            f"/v1/files/{file_key}/comments/{comment_id}/reactions",
            params={"emoji": emoji},
        )

    # ─── Users ───────────────────────────────────────────────────────────────

    async def get_me(self) -> Dict[str, Any]:
        return await self._request("GET", "/v1/me")

    # ─── Teams & Projects ────────────────────────────────────────────────────

    async def get_team_projects(self, team_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/teams/{team_id}/projects")

    async def get_project_files(
        self, project_id: str, *, branch_data: bool = False
    ) -> Dict[str, Any]:
        params = _build_params(branch_data=branch_data)
        return await self._request("GET", f"/v1/projects/{project_id}/files", params=params)

    # ─── Components ──────────────────────────────────────────────────────────

    async def get_team_components(
        self,
        team_id: str,
        *,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _build_params(page_size=page_size, cursor=cursor)
        return await self._request("GET", f"/v1/teams/{team_id}/components", params=params)

    async def get_file_components(self, file_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/files/{file_key}/components")

    async def get_component(self, component_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/components/{component_key}")

    # ─── Component Sets ──────────────────────────────────────────────────────

    async def get_team_component_sets(
        self,
        team_id: str,
        *,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _build_params(page_size=page_size, cursor=cursor)
        return await self._request(
            "GET", f"/v1/teams/{team_id}/component_sets", params=params
        )

    async def get_file_component_sets(self, file_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/files/{file_key}/component_sets")

    async def get_component_set(self, component_set_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/component_sets/{component_set_key}")

    # ─── Styles ──────────────────────────────────────────────────────────────

    async def get_team_styles(
        self,
        team_id: str,
        *,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _build_params(page_size=page_size, cursor=cursor)
        return await self._request("GET", f"/v1/teams/{team_id}/styles", params=params)

    async def get_file_styles(self, file_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/files/{file_key}/styles")

    async def get_style(self, style_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/styles/{style_key}")

    # ─── Webhooks ────────────────────────────────────────────────────────────

    async def get_webhooks(self, *, team_id: Optional[str] = None) -> Dict[str, Any]:
        params = _build_params(team_id=team_id)
        return await self._request("GET", "/v2/webhooks", params=params)

    async def create_webhook(
        self,
        *,
        event_type: str,
        team_id: str,
        endpoint: str,
        passcode: str,
        status: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = _compact(
            {
                "event_type": event_type,
                "team_id": team_id,
                "endpoint": endpoint,
                "passcode": passcode,
                "status": status,
                "description": description,
            }
        )
        return await self._request("POST", "/v2/webhooks", json=body)

    async def get_webhook(self, webhook_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v2/webhooks/{webhook_id}")

    async def update_webhook(
        self,
        webhook_id: str,
        *,
        event_type: Optional[str] = None,
        endpoint: Optional[str] = None,
        passcode: Optional[str] = None,
        status: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = _compact(
            {
                "event_type": event_type,
                "endpoint": endpoint,
                "passcode": passcode,
                "status": status,
                "description": description,
            }
        )
        return await self._request("PUT", f"/v2/webhooks/{webhook_id}", json=body)

    async def delete_webhook(self, webhook_id: str) -> None:
        await self._request("DELETE", f"/v2/webhooks/{webhook_id}")

    async def get_webhook_requests(self, webhook_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v2/webhooks/{webhook_id}/requests")

    # ─── Variables ───────────────────────────────────────────────────────────

    async def get_local_variables(self, file_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/files/{file_key}/variables/local")

    async def get_published_variables(self, file_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/v1/files/{file_key}/variables/published")

    async def post_variables(
        self,
        file_key: str,
        *,
        variable_collections: Optional[List[Dict[str, Any]]] = None,
        variable_modes: Optional[List[Dict[str, Any]]] = None,
        variables: Optional[List[Dict[str, Any]]] = None,
        variable_mode_values: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """Bulk create, update or delete variables, collections and modes."""
        body = _compact(
            {
                "variableCollections": variable_collections,
                "variableModes": variable_modes,
                "variables": variables,
                "variableModeValues": variable_mode_values,
            }
        )
        return await self._request("POST", f"/v1/files/{file_key}/variables", json=body)

    # ─── Dev Resources ───────────────────────────────────────────────────────

    async def get_dev_resources(
        self, file_key: str, *, node_ids: Optional[Sequence[str]] = None
    ) -> Dict[str, Any]:
        params = _build_params(node_ids=node_ids)
        return await self._request(
            "GET", f"/v1/files/{file_key}/dev_resources", params=params
        )

    async def create_dev_resources(self, resources: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request(
            "POST", "/v1/dev_resources", json={"dev_resources": resources}
        )

    async def update_dev_resources(self, resources: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request(
            "PUT", "/v1/dev_resources", json={"dev_resources": resources}
        )

    async def delete_dev_resource(self, file_key: str, dev_resource_id: str) -> None:
        await self._request(
            "DELETE", f"/v1/files/{file_key}/dev_resources/{dev_resource_id}"
        )

    # ─── Activity Logs & Payments ────────────────────────────────────────────

    async def get_activity_logs(
        self,
        *,
        event_type: Optional[str] = None,
        limit: Optional[int] = None,
        order: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = _build_params(event_type=event_type, limit=limit, order=order)
        return await self._request("GET", "/v1/activity_logs", params=params)

    async def get_payments(self, *, user_ids: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        params = _build_params(user_ids=user_ids)
        return await self._request("GET", "/v1/payments", params=params)

    # ─── Library Analytics ───────────────────────────────────────────────────

    async def _library_analytics(
        self, file_key: str, resource: str, **options: Any
    ) -> Dict[str, Any]:
        return await self._request(
            "GET",
            f"/v1/analytics/libraries/{file_key}/{resource}",
            params=_build_params(**options),
        )

    async def get_component_actions(
        self,
        file_key: str,
        *,
        cursor: Optional[str] = None,
        group_by: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._library_analytics(
            file_key,
            "component/actions",
            cursor=cursor,
            group_by=group_by,
            start_date=start_date,
            end_date=end_date,
        )

    async def get_component_usages(
        self, file_key: str, *, cursor: Optional[str] = None, group_by: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._library_analytics(
            file_key, "component/usages", cursor=cursor, group_by=group_by
        )

    async def get_style_actions(
        self,
        file_key: str,
        *,
        cursor: Optional[str] = None,
        group_by: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._library_analytics(
            file_key,
            "style/actions",
            cursor=cursor,
            group_by=group_by,
            start_date=start_date,
            end_date=end_date,
        )

    async def get_style_usages(
        self, file_key: str, *, cursor: Optional[str] = None, group_by: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._library_analytics(
            file_key, "style/usages", cursor=cursor, group_by=group_by
        )
