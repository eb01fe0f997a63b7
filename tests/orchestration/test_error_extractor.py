"""Tests for failure extraction."""

import pytest

from core.domain.value_objects import ActionResult
from orchestration.error_extractor import extract_failure, find_affected_resource
from tests.mocks.terraform_samples import DROPLET_CODE, DROPLET_ERROR, DROPLET_OUTPUT


def test_extracts_message_output_and_resource():
    result = ActionResult(
        succeeded=False, output=DROPLET_OUTPUT, error_message=DROPLET_ERROR, code=DROPLET_CODE
    )

    failure = extract_failure(result)

    assert failure.message == DROPLET_ERROR.strip()
    assert failure.raw_output == DROPLET_OUTPUT
    assert failure.affected_resource == "with digitalocean_droplet.web,"


def test_plain_error_lines_without_gutter():
    text = "Error: Invalid reference\n\n  on main.tf line 3:\nmore"

    assert find_affected_resource(text) == "on main.tf line 3:"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "something went wrong",
        "Error: no descriptor here",
        "Error: one line\n",
        "Error: blank descriptor\n│\n│   \n",
    ],
)
def test_no_resource_when_descriptor_missing(text):
    assert find_affected_resource(text) is None


def test_only_first_marker_is_used():
    text = "Error: first\n\nresource.one\nError: second\n\nresource.two"

    assert find_affected_resource(text) == "resource.one"


def test_empty_error_gets_placeholder_message():
    failure = extract_failure(ActionResult(succeeded=False, output="", error_message=""))

    assert failure.message
    assert failure.raw_output == ""
    assert failure.affected_resource is None
