"""
Shared fixtures for MetalCloud CLI tests.
"""

from unittest.mock import MagicMock

import pytest

from metalcloud_cli.models import CLIConfig, ResourceStatus


class FakeClock:
    """Clock whose time only moves when sleep() is called."""

    def __init__(self):
        self.current = 0.0
        self.sleeps = []

    def now(self):
        return self.current

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.current += seconds


def infrastructure_payload(
    infrastructure_id=1000,
    label="prod-cluster",
    service_status="active",
    deploy_status="finished",
    revision=7,
):
    return {
        "id": infrastructure_id,
        "label": label,
        "siteId": 1,
        "serviceStatus": service_status,
        "userIdOwner": 42,
        "createdTimestamp": "2024-05-01T10:00:00Z",
        "updatedTimestamp": "2024-05-02T11:30:00Z",
        "config": {
            "revision": revision,
            "deployStatus": deploy_status,
            "deployStatusMessage": None,
        },
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client():
    """API client mock that knows one infrastructure (1000, prod-cluster)."""
    mock = MagicMock()
    mock.list_infrastructures.return_value = [infrastructure_payload()]
    mock.get_infrastructure.return_value = infrastructure_payload()
    mock.get_deploy_status.return_value = ResourceStatus("finished")
    return mock


@pytest.fixture
def config(tmp_path):
    return CLIConfig(
        endpoint="https://api.metalcloud.test",
        api_key="42:secret",
        output_format="text",
        log_dir=tmp_path / "logs",
        interactive=False,
    )
