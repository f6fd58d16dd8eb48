"""
Tests for output rendering.
"""

import csv
import io
import json

import pytest
import yaml
from rich.text import Text

from metalcloud_cli.exceptions import ValidationError
from metalcloud_cli.formatter import (
    INFRASTRUCTURE_FIELDS,
    FieldSpec,
    format_datetime,
    format_status,
    render,
)
from metalcloud_cli.models import Infrastructure

from .conftest import infrastructure_payload


@pytest.fixture
def records():
    return [
        Infrastructure.from_api(infrastructure_payload()).to_dict(),
        Infrastructure.from_api(
            infrastructure_payload(infrastructure_id=1001, label="[staging]", deploy_status="ongoing")
        ).to_dict(),
    ]


class TestRender:
    def test_json(self, records):
        assert json.loads(render(records, INFRASTRUCTURE_FIELDS, "json")) == records

    def test_yaml(self, records):
        assert yaml.safe_load(render(records, INFRASTRUCTURE_FIELDS, "yaml")) == records

    def test_csv_uses_visible_fields_and_plain_text(self, records):
        rows = list(csv.reader(io.StringIO(render(records, INFRASTRUCTURE_FIELDS, "csv"))))

        assert rows[0] == ["#", "Label", "Status", "Deploy", "Owner", "Site", "Created", "Updated"]
        assert rows[1][:4] == ["1000", "prod-cluster", "active", "finished"]
        assert rows[2][1] == "[staging]"

    def test_markdown(self, records):
        lines = render(records, INFRASTRUCTURE_FIELDS, "md").splitlines()

        assert lines[0].startswith("| # | Label |")
        assert lines[1].startswith("| --- |")
        assert "| 1001 | [staging] |" in lines[3]

    def test_text_table(self, records):
        output = render(records, INFRASTRUCTURE_FIELDS, "text", title="Infrastructures")

        assert "Infrastructures" in output
        assert "prod-cluster" in output
        assert "[staging]" in output
        assert "Revision" not in output
        assert "2024-05-01 10:00:00" in output

    def test_single_record(self, records):
        output = render(records[0], INFRASTRUCTURE_FIELDS, "csv")

        assert len(output.strip().splitlines()) == 2

    def test_unknown_format(self, records):
        with pytest.raises(ValidationError):
            render(records, INFRASTRUCTURE_FIELDS, "xml")


class TestFieldSpec:
    def test_transformer(self):
        field = FieldSpec("size", "Size", lambda v: f"{v} GB")

        assert field.header == "Size"
        assert field.render({"size": 40}) == "40 GB"

    def test_missing_value(self):
        assert FieldSpec("label").render({}) == ""

    def test_unparsable_datetime_is_kept(self):
        assert format_datetime("yesterday") == "yesterday"

    @pytest.mark.parametrize("value", ["[/x]", "active[beta]", "failed[/red]"])
    def test_status_markup_in_value_is_escaped(self, value):
        assert Text.from_markup(format_status(value)).plain == value

    def test_bracketed_status_in_table(self):
        record = Infrastructure.from_api(
            infrastructure_payload(service_status="[/x]", deploy_status="ongoing[1]")
        ).to_dict()

        output = render(record, INFRASTRUCTURE_FIELDS, "text")

        assert "[/x]" in output
        assert "ongoing[1]" in output
