"""
Infrastructure Service

Infrastructure queries and CRUD operations on top of the API client.
"""

import json
from typing import Any, Dict, List, Optional

from metalcloud_cli.constants import SERVICE_STATUS_DELETED, SERVICE_STATUS_ORDERED
from metalcloud_cli.core.confirmation import ConfirmationGuard, delete_message
from metalcloud_cli.exceptions import InfrastructureNotFoundError, ValidationError
from metalcloud_cli.models.infrastructure import Infrastructure


class InfrastructureService:
    """
    Infrastructure management service.

    Responsibilities:
    - id-or-label resolution
    - list/get/create/update/delete
    """

    def __init__(self, client, logger=None):
        self.client = client
        self.logger = logger

    def resolve(self, infrastructure_id_or_label: str) -> Infrastructure:
        """
        Find an infrastructure by exact label or exact numeric id.

        Args:
            infrastructure_id_or_label: Id or label as typed by the operator

        Returns:
            Infrastructure

        Raises:
            ValidationError: If the identifier is empty
            InfrastructureNotFoundError: If nothing matches exactly
        """
        key = str(infrastructure_id_or_label or "").strip()
        if not key:
            raise ValidationError("Infrastructure id or label is required")

        candidates = self.client.list_infrastructures(search=key)
        for data in candidates:
            if data.get("label") == key or str(data.get("id")) == key:
                return Infrastructure.from_api(data)

        raise InfrastructureNotFoundError(key)

    def list(
        self,
        show_all: bool = False,
        show_ordered: bool = False,
        show_deleted: bool = False,
        owner_id: Optional[str] = None,
    ) -> List[Infrastructure]:
        """
        List infrastructures.

        Ordered and deleted infrastructures are hidden unless asked for.
        Unless `show_all` is set, only the owner's infrastructures are listed.
        """
        status_filters = []
        if not show_ordered:
            status_filters.append(f"$not:$eq:{SERVICE_STATUS_ORDERED}")
        if not show_deleted:
            status_filters.append(f"$not:$eq:{SERVICE_STATUS_DELETED}")

        data = self.client.list_infrastructures(
            service_status_filters=status_filters,
            owner_id=None if show_all else owner_id,
            sort_by=["id:ASC"],
        )
        return [Infrastructure.from_api(item) for item in data]

    def get(self, infrastructure_id_or_label: str) -> Infrastructure:
        return self.resolve(infrastructure_id_or_label)

    def create(self, site_id: str, label: str) -> Infrastructure:
        """
        Create an infrastructure.

        Raises:
            ValidationError: If site id is not numeric or label is empty
        """
        try:
            site_id_number = int(float(site_id))
        except (TypeError, ValueError):
            raise ValidationError(f"invalid site ID: '{site_id}'")

        if not label:
            raise ValidationError("Infrastructure label is required")

        if self.logger:
            self.logger.log(f"Creating infrastructure '{label}' in site {site_id_number}")

        return Infrastructure.from_api(
            self.client.create_infrastructure(site_id_number, label)
        )

    def update(
        self,
        infrastructure_id_or_label: str,
        label: Optional[str] = None,
        custom_variables: Optional[str] = None,
    ) -> Infrastructure:
        """
        Update label and/or custom variables.

        The current label is kept when no new one is given.

        Raises:
            ValidationError: If custom variables are not a JSON object
        """
        changes: Dict[str, Any] = {}
        if custom_variables:
            changes["customVariables"] = parse_custom_variables(custom_variables)

        infrastructure = self.resolve(infrastructure_id_or_label)
        changes["label"] = label or infrastructure.label

        if self.logger:
            self.logger.log(
                f"Updating infrastructure {infrastructure.id} at revision {infrastructure.revision}"
            )

        return Infrastructure.from_api(
            self.client.update_infrastructure_config(
                infrastructure.id, changes, infrastructure.revision
            )
        )

    def delete(self, infrastructure_id_or_label: str, guard: ConfirmationGuard) -> str:
        """
        Delete an infrastructure after confirmation.

        Raises:
            NotConfirmedError: If the operator did not confirm
        """
        infrastructure = self.resolve(infrastructure_id_or_label)
        guard.require(delete_message(infrastructure.label, infrastructure.id))

        if self.logger:
            self.logger.log(f"Deleting infrastructure {infrastructure.id}")

        self.client.delete_infrastructure(infrastructure.id)
        return ""


def parse_custom_variables(raw: str) -> Dict[str, Any]:
    """
    Parse --custom-variables.

    Raises:
        ValidationError: If the value is not a JSON object
    """
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError("Invalid custom variables JSON", context=str(e))

    if not isinstance(value, dict):
        raise ValidationError("Custom variables must be a JSON object")

    return value
