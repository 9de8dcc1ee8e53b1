"""Unit tests for response cache key generation."""

from railops.api.shared.cache_keys import (
    alerts_cache_key,
    analytics_cache_key,
    routes_cache_key,
    trains_cache_key,
)
from railops.api.shared.validation import validate_pagination


def test_equivalent_pagination_params_share_a_key():
    from_strings = validate_pagination("2", "3", 3)
    from_ints = validate_pagination(2, 3, 3)

    assert trains_cache_key("Delhi", *from_strings) == trains_cache_key(
        "Delhi", *from_ints
    )


def test_defaults_share_a_key_with_explicit_values():
    assert trains_cache_key("Delhi", *validate_pagination(None, None, 3)) == (
        trains_cache_key("Delhi", 1, 3)
    )


def test_hub_whitespace_is_ignored_but_case_is_kept():
    assert trains_cache_key(" Delhi ", 1, 3) == trains_cache_key("Delhi", 1, 3)
    assert trains_cache_key("delhi", 1, 3) != trains_cache_key("Delhi", 1, 3)


def test_endpoint_kinds_never_collide():
    keys = {
        trains_cache_key("Delhi", 1, 4),
        alerts_cache_key("Delhi", 1, 4),
        analytics_cache_key("Delhi"),
        routes_cache_key("12055", "Delhi"),
    }

    assert len(keys) == 4


def test_route_key_includes_train_and_hub():
    assert routes_cache_key("12055", "Delhi") == "railops:routes:12055:Delhi"
    assert routes_cache_key("12055", "Delhi") != routes_cache_key("12309", "Delhi")


def test_separator_in_segments_does_not_collide():
    assert routes_cache_key("a:b", "c") != routes_cache_key("a", "b:c")
    assert trains_cache_key("Delhi:1", 2, 3) != trains_cache_key("Delhi", 1, 2)
    assert routes_cache_key("a%3Ab", "c") != routes_cache_key("a:b", "c")


def test_hub_with_spaces_stays_readable():
    assert analytics_cache_key("New Delhi") == "railops:analytics:New Delhi"
