# -*- coding: utf-8 -*-
"""Location: ./tests/unit/chatgate/plugins/plugins/post_limiter/test_store.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for the post limiter stores.
"""

# Standard
from concurrent.futures import ThreadPoolExecutor
import threading

# First-Party
from plugins.post_limiter.header import ChannelConfig
from plugins.post_limiter.store import ChannelConfigCache, LastPostStore


def test_first_post_is_allowed():
    store = LastPostStore()
    decision = store.check_and_record(("u1",), now=50.0, interval=30.0)
    assert decision.allowed
    assert decision.remaining == 0.0
    assert decision.last_post is None


def test_rejection_reports_remaining_time_and_keeps_timestamp():
    store = LastPostStore()
    store.check_and_record(("u1",), now=0.0, interval=30.0)
    decision = store.check_and_record(("u1",), now=10.0, interval=30.0)
    assert not decision.allowed
    assert decision.remaining == 20.0
    assert decision.last_post == 0.0
    assert store.get(("u1",)) == 0.0


def test_exact_interval_is_allowed():
    store = LastPostStore()
    store.check_and_record(("u1",), now=0.0, interval=30.0)
    assert store.check_and_record(("u1",), now=30.0, interval=30.0).allowed


def test_timestamps_do_not_move_backwards():
    store = LastPostStore()
    store.check_and_record(("u1",), now=100.0, interval=-1.0)
    store.check_and_record(("u1",), now=90.0, interval=-20.0)
    assert store.get(("u1",)) == 100.0


def test_concurrent_posts_from_one_user_accept_exactly_one():
    store = LastPostStore()
    workers = 32
    barrier = threading.Barrier(workers)

    def post() -> bool:
        barrier.wait()
        return store.check_and_record(("c1", "u1"), now=1000.0, interval=30.0).allowed

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda _: post(), range(workers)))

    assert results.count(True) == 1
    assert len(store) == 1


def test_concurrent_posts_from_many_users_are_all_accepted():
    store = LastPostStore()

    def post(i: int) -> bool:
        return store.check_and_record(("c1", f"u{i}"), now=1000.0, interval=30.0).allowed

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(post, range(200)))

    assert all(results)
    assert len(store) == 200


def test_last_post_store_lru_eviction():
    store = LastPostStore(max_entries=2)
    store.check_and_record(("a",), now=0.0, interval=1.0)
    store.check_and_record(("b",), now=0.0, interval=1.0)
    # refresh "a" so "b" becomes the oldest
    store.check_and_record(("a",), now=5.0, interval=1.0)
    store.check_and_record(("c",), now=5.0, interval=1.0)
    assert store.get(("b",)) is None
    assert store.get(("a",)) == 5.0
    assert store.get(("c",)) == 5.0


def test_config_cache_roundtrip_and_invalidate():
    cache = ChannelConfigCache()
    assert cache.get("c1") is None
    assert cache.invalidate("c1") is False
    cfg = ChannelConfig.from_post_limit("5s")
    assert cache.put("c1", cfg, cache.generation("c1"))
    assert cache.get("c1") == cfg
    assert cache.invalidate("c1") is True
    assert cache.get("c1") is None
    assert len(cache) == 0


def test_config_cache_drops_result_loaded_before_invalidation():
    cache = ChannelConfigCache()
    generation = cache.generation("c1")
    # header changes while the loader is fetching the old header
    cache.invalidate("c1")
    assert not cache.put("c1", ChannelConfig.from_post_limit("5s"), generation)
    assert cache.get("c1") is None
    assert cache.put("c1", ChannelConfig.from_post_limit("9s"), cache.generation("c1"))
    assert cache.get("c1").interval == 9.0


def test_config_cache_lru_eviction():
    cache = ChannelConfigCache(max_entries=2)
    for channel in ("c1", "c2"):
        cache.put(channel, ChannelConfig.from_post_limit("1s"), cache.generation(channel))
    cache.get("c1")
    cache.put("c3", ChannelConfig.from_post_limit("1s"), cache.generation("c3"))
    assert cache.get("c2") is None
    assert cache.get("c1") is not None
    assert cache.get("c3") is not None
