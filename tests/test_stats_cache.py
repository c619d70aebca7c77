"""StatsCache tests: envelope round-trip, age-based expiry, version and decode failures."""

import json

import pytest

from standings_dashboard.cache import CACHE_VERSION, MS_PER_DAY, StatsCache


@pytest.mark.parametrize(
    "payload",
    [
        {"records": [{"division": {"id": 201}, "teamRecords": []}]},
        [{"year": 2020, "snapshot": {"records": []}}],
        "plain string",
        42,
        [],
    ],
)
def test_save_then_load_round_trip(stats_cache, payload):
    stats_cache.save(payload, "standings", expiry_days=1)
    assert stats_cache.load("standings", expiry_days=1) == payload


def test_large_payload_round_trips_through_secondary_tier(stats_cache, store):
    payload = [{"year": year, "note": "x" * 200} for year in range(2000, 2025)]
    stats_cache.save(payload, "mlb_standings_2000_2024", expiry_days=30)

    assert store.primary.get("mlb_standings_2000_2024") is None
    assert store.secondary.get("mlb_standings_2000_2024") is not None
    assert stats_cache.load("mlb_standings_2000_2024", expiry_days=30) == payload


def test_envelope_shape(stats_cache, store, clock):
    stats_cache.save({"wins": 90}, "standings", expiry_days=1)
    entry = json.loads(store.get("standings"))
    assert entry == {"data": {"wins": 90}, "timestamp": clock(), "version": CACHE_VERSION}


def test_expires_after_expiry_days(stats_cache, clock):
    stats_cache.save({"wins": 90}, "standings", expiry_days=2)

    clock.advance(2 * MS_PER_DAY)
    assert stats_cache.load("standings", expiry_days=2) == {"wins": 90}

    clock.advance(1)
    assert stats_cache.load("standings", expiry_days=2) is None


def test_load_uses_callers_expiry(stats_cache, clock):
    # The embedded timestamp bounds age even when the store would still serve it
    stats_cache.save({"wins": 90}, "standings", expiry_days=30)
    clock.advance(MS_PER_DAY + 1)
    assert stats_cache.load("standings", expiry_days=1) is None
    assert stats_cache.load("standings", expiry_days=30) == {"wins": 90}


def test_missing_key_is_absent(stats_cache):
    assert stats_cache.load("nothing", expiry_days=1) is None


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps({"data": 1}),
        json.dumps({"data": 1, "timestamp": "yesterday", "version": CACHE_VERSION}),
        json.dumps([1, 2, 3]),
    ],
)
def test_malformed_entries_are_absent(stats_cache, store, raw):
    store.set("standings", raw, expiry_days=1)
    assert stats_cache.load("standings", expiry_days=1) is None


def test_version_mismatch_is_absent(store, clock):
    StatsCache(store, clock=clock, version="0.9").save({"wins": 90}, "standings", expiry_days=1)
    assert StatsCache(store, clock=clock).load("standings", expiry_days=1) is None


def test_unserialisable_payload_is_not_saved(stats_cache, store):
    stats_cache.save({"when": object()}, "standings", expiry_days=1)
    assert store.get("standings") is None


def test_invalidate(stats_cache):
    stats_cache.save({"wins": 90}, "standings", expiry_days=1)
    stats_cache.invalidate("standings")
    assert stats_cache.load("standings", expiry_days=1) is None


def test_larger_payload_replaces_earlier_one(stats_cache):
    stats_cache.save({"v": "old"}, "standings", expiry_days=1)
    payload = {"v": "new", "pad": "x" * 5000}
    stats_cache.save(payload, "standings", expiry_days=1)
    assert stats_cache.load("standings", expiry_days=1) == payload


def test_old_version_replaced_by_larger_payload(store, clock):
    StatsCache(store, clock=clock, version="0.9").save({"wins": 90}, "standings", expiry_days=1)
    cache = StatsCache(store, clock=clock)
    payload = {"wins": 91, "pad": "x" * 5000}
    cache.save(payload, "standings", expiry_days=1)
    assert cache.load("standings", expiry_days=1) == payload
