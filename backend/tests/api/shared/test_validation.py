"""Unit tests for request parameter validation."""

import pytest

from railops.api.shared.validation import (
    parse_positive_int,
    require_text,
    require_train_id,
    validate_route_stations,
    validate_speed_action,
)
from railops.services.errors import InvalidRequestError


class TestRequireText:
    def test_strips_value(self):
        assert require_text("  New Delhi ", "hub") == "New Delhi"

    @pytest.mark.parametrize("value", [None, "", "   ", 5, ["hub"]])
    def test_rejects_missing(self, value):
        with pytest.raises(InvalidRequestError, match="hub is required"):
            require_text(value, "hub")

    def test_train_id_accepts_numbers(self):
        assert require_train_id(12055) == "12055"
        assert require_train_id("12055") == "12055"
        with pytest.raises(InvalidRequestError):
            require_train_id(True)


class TestParsePositiveInt:
    def test_default_when_absent(self):
        assert parse_positive_int(None, 3) == 3

    @pytest.mark.parametrize("value,expected", [(2, 2), ("2", 2), (" 7 ", 7)])
    def test_accepts_ints_and_digit_strings(self, value, expected):
        assert parse_positive_int(value, 1) == expected

    @pytest.mark.parametrize("value", [0, -1, "0", "abc", "2.5", 2.5, True, [], ""])
    def test_rejects_everything_else(self, value):
        with pytest.raises(InvalidRequestError, match="positive integers"):
            parse_positive_int(value, 1)


class TestRouteAndAction:
    def test_route_stations(self):
        assert validate_route_stations([" New Delhi", "Patna "]) == ["New Delhi", "Patna"]

    @pytest.mark.parametrize("value", [None, [], "New Delhi → Patna", ["A", 3], ["A", " "]])
    def test_route_stations_rejected(self, value):
        with pytest.raises(InvalidRequestError):
            validate_route_stations(value)

    def test_speed_action_is_case_insensitive(self):
        assert validate_speed_action("HOLD") == "hold"
        assert validate_speed_action("resume") == "resume"

    @pytest.mark.parametrize("value", [None, "stop", 1])
    def test_speed_action_rejected(self, value):
        with pytest.raises(InvalidRequestError):
            validate_speed_action(value)
