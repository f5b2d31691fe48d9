import threading

from models.domain import PolicyRecommendations, RecommendationMode, RecommendationsResult
from services.recommendation_cache import (
    RecommendationCache,
    get_recommendation_cache,
    make_cache_key,
    reset_recommendation_cache,
)


def _result(label: str) -> RecommendationsResult:
    return RecommendationsResult(
        candidates=[],
        ballot_measures=[],
        policy_recommendations=PolicyRecommendations(top_policies=[label], explanation=""),
    )


def test_key_ignores_order_and_duplicates():
    first = make_cache_key(["b", "a", "a"], "94110", RecommendationMode.CURRENT)
    second = make_cache_key(["a", "b"], "94110", "current")

    assert first == second == (("a", "b"), "94110", "current")


def test_key_distinguishes_location_and_mode():
    base = make_cache_key(["a"], "94110", RecommendationMode.CURRENT)

    assert base != make_cache_key(["a"], "10001", RecommendationMode.CURRENT)
    assert base != make_cache_key(["a"], "94110", RecommendationMode.DEMO)
    assert base != make_cache_key(["a", "b"], "94110", RecommendationMode.CURRENT)


def test_get_put_clear():
    cache = RecommendationCache()
    key = make_cache_key(["a"], "94110", "current")

    assert cache.get(key) is None
    cache.put(key, _result("a"))

    assert key in cache
    assert cache.get(key).policy_recommendations.top_policies == ["a"]
    assert cache.clear() == 1
    assert len(cache) == 0


def test_stored_result_is_isolated_from_callers():
    cache = RecommendationCache()
    key = make_cache_key(["a"], "94110", "current")
    original = _result("a")

    cache.put(key, original)
    original.policy_recommendations.top_policies.append("changed after put")
    hit = cache.get(key)
    hit.policy_recommendations.top_policies.clear()

    assert hit is not original
    assert cache.get(key).policy_recommendations.top_policies == ["a"]


def test_concurrent_puts_are_all_recorded():
    cache = RecommendationCache()

    def worker(offset: int):
        for i in range(100):
            cache.put(make_cache_key([f"p{offset}-{i}"], "94110", "current"), _result(str(i)))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 800


def test_process_singleton_can_be_reset():
    reset_recommendation_cache()
    first = get_recommendation_cache()

    assert get_recommendation_cache() is first

    reset_recommendation_cache()
    assert get_recommendation_cache() is not first
    reset_recommendation_cache()
