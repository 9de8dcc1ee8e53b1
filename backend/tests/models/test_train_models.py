"""Tests for train and response models."""

import pytest
from pydantic import ValidationError

from railops.models.trains import Recommendation, TrainRecord, normalize_train_fields
from railops.services.seed_data import SEED_TRAINS


@pytest.fixture
def record() -> TrainRecord:
    return TrainRecord.model_validate(SEED_TRAINS[1])


def test_payload_uses_dashboard_field_names(record):
    payload = record.to_payload()

    assert payload["delay"] == 12
    assert payload["nextStop"] == "Allahabad"
    assert payload["statusColor"] == "warning"
    assert "platform" not in payload


def test_delay_accepts_alternate_spellings():
    base = dict(SEED_TRAINS[0])
    base.pop("delay")

    assert TrainRecord.model_validate({**base, "delayMinutes": 7}).delay_minutes == 7
    assert TrainRecord.model_validate({**base, "delay_minutes": 8}).delay_minutes == 8


def test_records_are_frozen(record):
    with pytest.raises(ValidationError):
        record.speed = 0


@pytest.mark.parametrize(
    "field,value",
    [("delay", -1), ("speed", -5), ("passengers", -1), ("statusColor", "blue"), ("platform", 0)],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        TrainRecord.model_validate({**SEED_TRAINS[0], field: value})


def test_overlay_keeps_omitted_fields_and_id(record):
    updated = record.overlay({"id": "other", "next_stop": "Mughalsarai", "delayMinutes": 3})

    assert updated.id == record.id
    assert updated.next_stop == "Mughalsarai"
    assert updated.delay_minutes == 3
    assert updated.name == record.name


def test_route_endpoints(record):
    assert record.route_endpoints() == ("New Delhi", "Patna")


def test_normalize_train_fields_leaves_unknown_keys():
    assert normalize_train_fields({"status_color": "success", "extra": 1}) == {
        "statusColor": "success",
        "extra": 1,
    }


def test_recommendation_defaults():
    recommendation = Recommendation.model_validate({"title": "t", "description": "d"})

    assert recommendation.id is None
    assert recommendation.type == "routing"
    with pytest.raises(ValidationError):
        Recommendation.model_validate({"title": "t", "description": "d", "confidence": 150})
