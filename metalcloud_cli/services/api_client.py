"""
MetalCloud API Client

Thin requests-based client for the infrastructure endpoints of the
MetalCloud v2 REST API.
"""

from typing import Any, Dict, List, Optional

import requests

from metalcloud_cli.constants import API_PREFIX, DEFAULT_REQUEST_TIMEOUT
from metalcloud_cli.exceptions import ConfigurationError, TransportError
from metalcloud_cli.models.config import CLIConfig
from metalcloud_cli.models.infrastructure import ResourceStatus, ShutdownPolicy


class MetalCloudClient:
    """
    MetalCloud API client.

    Every network failure and every non-2xx response is raised as
    TransportError. Nothing is retried here.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        verify_ssl: bool = True,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = endpoint.rstrip("/") + API_PREFIX
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify_ssl
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    @classmethod
    def from_config(cls, config: CLIConfig) -> "MetalCloudClient":
        """
        Build a client from the resolved CLI configuration.

        Raises:
            ConfigurationError: If endpoint or API key are missing
        """
        if not config.endpoint:
            raise ConfigurationError(
                "MetalCloud endpoint is not configured",
                context="Set METALCLOUD_ENDPOINT, 'endpoint' in the config file, or pass --endpoint",
            )
        if not config.api_key:
            raise ConfigurationError(
                "MetalCloud API key is not configured",
                context="Set METALCLOUD_API_KEY, 'api_key' in the config file, or pass --api-key",
            )
        return cls(
            config.endpoint,
            config.api_key,
            verify_ssl=config.verify_ssl,
            timeout=config.request_timeout,
        )

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(
                f"Cannot reach MetalCloud API at {self.base_url}: {e}",
                context=f"{method} {path}",
            )

        if not response.ok:
            raise TransportError(
                f"MetalCloud API error {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
                context=f"{method} {path}",
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            raise TransportError(
                "MetalCloud API returned an invalid JSON response",
                status_code=response.status_code,
                context=f"{method} {path}",
            )

    def list_infrastructures(
        self,
        search: Optional[str] = None,
        service_status_filters: Optional[List[str]] = None,
        owner_id: Optional[str] = None,
        sort_by: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        List infrastructures.

        Args:
            search: Free-text search (id or label)
            service_status_filters: e.g. ["$not:$eq:ordered"]
            owner_id: Only infrastructures owned by this user id
            sort_by: e.g. ["id:ASC"]

        Returns:
            List of infrastructure payloads
        """
        params: Dict[str, Any] = {}
        if search:
            params["search"] = search
        if service_status_filters:
            params["filter.serviceStatus"] = service_status_filters
        if owner_id:
            params["filter.userIdOwner"] = [f"$eq:{owner_id}"]
        if sort_by:
            params["sortBy"] = sort_by

        result = self._request("GET", "/infrastructures", params=params)
        if isinstance(result, dict):
            return result.get("data", [])
        return result or []

    def get_infrastructure(self, infrastructure_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/infrastructures/{infrastructure_id}")

    def create_infrastructure(self, site_id: int, label: str) -> Dict[str, Any]:
        body = {"siteId": site_id, "label": label, "meta": {}}
        return self._request("POST", "/infrastructures", json_body=body)

    def update_infrastructure_config(
        self, infrastructure_id: int, changes: Dict[str, Any], revision: Optional[int]
    ) -> Dict[str, Any]:
        """Update configuration, guarded by the configuration revision."""
        headers = {}
        if revision is not None:
            headers["If-Match"] = str(revision)
        return self._request(
            "PATCH",
            f"/infrastructures/{infrastructure_id}/config",
            json_body=changes,
            headers=headers,
        )

    def delete_infrastructure(self, infrastructure_id: int) -> None:
        self._request("DELETE", f"/infrastructures/{infrastructure_id}")

    def deploy_infrastructure(
        self,
        infrastructure_id: int,
        shutdown_policy: ShutdownPolicy,
        allow_data_loss: bool,
    ) -> None:
        """Start a deploy. Returns once the API accepted the request."""
        body = {
            "allowDataLoss": allow_data_loss,
            "shutdownOptions": shutdown_policy.to_api(),
        }
        self._request(
            "POST",
            f"/infrastructures/{infrastructure_id}/actions/deploy",
            json_body=body,
        )

    def revert_infrastructure(self, infrastructure_id: int) -> None:
        self._request("POST", f"/infrastructures/{infrastructure_id}/actions/revert")

    def get_deploy_status(self, infrastructure_id: int) -> ResourceStatus:
        """Fetch the current deploy status of an infrastructure."""
        data = self.get_infrastructure(infrastructure_id) or {}
        config = data.get("config") or {}
        return ResourceStatus(
            deploy_status=config.get("deployStatus") or "",
            message=config.get("deployStatusMessage"),
        )


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "unknown error"

    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        if message:
            return str(message)
    return response.reason or "unknown error"
