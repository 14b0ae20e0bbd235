"""Tests for the schema validator."""

from __future__ import annotations

import json

import pytest

from portfolio_feed.application.decoder import decode
from portfolio_feed.application.sanitizer import sanitize
from portfolio_feed.application.validator import coerce_record, validate
from portfolio_feed.domain.entities import RepositoryRecord
from portfolio_feed.domain.errors import InvalidLastUpdated, NotAnObject, ProjectsNotArray, SchemaError


# =============================================================================
# Top-level shape
# =============================================================================


@pytest.mark.parametrize("value", [None, [], [{"projects": []}], "text", 3])
def test_non_object_is_rejected(value) -> None:
    with pytest.raises(NotAnObject):
        validate(value)


@pytest.mark.parametrize("value", [{"foo": 1}, {"projects": None}, {"projects": {}}, {"projects": "[]"}])
def test_projects_must_be_an_array(value) -> None:
    with pytest.raises(ProjectsNotArray):
        validate(value)


def test_last_updated_must_be_a_string() -> None:
    with pytest.raises(InvalidLastUpdated) as exc_info:
        validate({"projects": [], "lastUpdated": 20250101})
    assert isinstance(exc_info.value, SchemaError)


@pytest.mark.parametrize("value", [{"projects": []}, {"projects": [], "lastUpdated": None}])
def test_missing_last_updated_defaults_to_empty(value) -> None:
    assert validate(value).last_updated == ""


# =============================================================================
# Record coercion
# =============================================================================


def test_full_record_is_mapped_to_domain_fields(valid_body: str) -> None:
    collection = validate(json.loads(valid_body))

    assert collection.last_updated == "2025-01-01"
    assert collection.records == (
        RepositoryRecord(
            id=1,
            name="x",
            full_name="u/x",
            description="d",
            url="h",
            primary_language="Go",
            star_count=3,
            fork_count=1,
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-06-01T00:00:00Z",
            topics=(),
        ),
    )


def test_absent_and_null_fields_get_defaults() -> None:
    record = coerce_record({"id": 7, "description": None, "language": None})

    assert record.id == 7
    assert record.name == ""
    assert record.description == ""
    assert record.primary_language == ""
    assert record.star_count == 0
    assert record.fork_count == 0
    assert record.topics == ()


def test_counts_are_never_negative() -> None:
    record = coerce_record({"stargazers_count": -4, "forks_count": "12"})
    assert record.star_count == 0
    assert record.fork_count == 12


def test_non_object_entry_becomes_default_record() -> None:
    collection = validate({"projects": ["oops", {"name": "ok"}]})
    assert [r.name for r in collection.records] == ["", "ok"]


def test_topics_keep_order_and_drop_non_strings() -> None:
    record = coerce_record({"topics": ["tax", 3, "education", None]})
    assert record.topics == ("tax", "education")


def test_records_keep_received_order() -> None:
    value = {"projects": [{"id": 3}, {"id": 1}, {"id": 2}]}
    assert [r.id for r in validate(value).records] == [3, 1, 2]


# =============================================================================
# Whole-chain round trip
# =============================================================================


@pytest.mark.parametrize("count", [0, 1, 5])
def test_well_formed_payload_round_trips(count: int) -> None:
    payload = {
        "projects": [{"id": i, "name": f"repo-{i}", "topics": ["a"]} for i in range(count)],
        "lastUpdated": "2025-03-04T05:06:07Z",
    }
    collection = validate(decode(sanitize(json.dumps(payload))))

    assert len(collection.records) == count
    assert collection.last_updated == "2025-03-04T05:06:07Z"


@pytest.mark.parametrize("raw", ["²", "½", "1.5", "", "  "])
def test_non_decimal_count_strings_fall_back_to_zero(raw: str) -> None:
    collection = validate({"projects": [{"stargazers_count": raw, "forks_count": raw}]})
    assert collection.records[0].star_count == 0
    assert collection.records[0].fork_count == 0
