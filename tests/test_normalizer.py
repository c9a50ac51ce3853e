import pytest

from conftest import FakeAdapter
from newsfeed.models import ProviderResult
from newsfeed.normalizer import Normalizer


@pytest.fixture
def adapters():
    return [FakeAdapter("Alpha", "alpha.test"), FakeAdapter("Beta", "beta.test")]


def test_merges_in_provider_order_and_assigns_ids(adapters, sequential_ids):
    results = {
        "Alpha": ProviderResult("Alpha", items=[{"headline": "a1"}, {"headline": "a2"}]),
        "Beta": ProviderResult("Beta", items=[{"headline": "b1"}]),
    }
    articles = Normalizer(id_factory=sequential_ids).normalize(results, adapters)

    assert [(a.id, a.title, a.source) for a in articles] == [
        ("id-1", "a1", "Alpha"),
        ("id-2", "a2", "Alpha"),
        ("id-3", "b1", "Beta"),
    ]


def test_identical_items_get_distinct_ids(adapters):
    item = {"headline": "Same", "published": "2024-01-01T00:00:00Z"}
    results = {
        "Alpha": ProviderResult("Alpha", items=[item, item]),
        "Beta": ProviderResult("Beta", items=[item]),
    }
    articles = Normalizer().normalize(results, adapters)

    ids = [a.id for a in articles]
    assert len(ids) == 3
    assert all(ids)
    assert len(set(ids)) == 3


def test_failed_provider_contributes_nothing(adapters):
    results = {
        "Alpha": ProviderResult("Alpha", error="upstream status 500"),
        "Beta": ProviderResult("Beta", items=[{"headline": "b1"}]),
    }
    articles = Normalizer().normalize(results, adapters)

    assert [a.source for a in articles] == ["Beta"]


def test_non_mapping_item_drops_that_provider_only(adapters):
    results = {
        "Alpha": ProviderResult("Alpha", items=[{"headline": "a1"}, "garbage"]),
        "Beta": ProviderResult("Beta", items=[{"headline": "b1"}]),
    }
    articles = Normalizer().normalize(results, adapters)

    assert [a.title for a in articles] == ["b1"]


def test_result_for_unselected_provider_is_ignored(adapters):
    results = {"Gamma": ProviderResult("Gamma", items=[{"headline": "g1"}])}
    assert Normalizer().normalize(results, adapters) == []


def test_id_factory_that_repeats_itself_is_an_error(adapters):
    results = {"Alpha": ProviderResult("Alpha", items=[{}, {}])}
    with pytest.raises(ValueError):
        Normalizer(id_factory=lambda: "fixed").normalize(results, adapters)


def test_merge_follows_adapter_order_not_result_order(adapters):
    results = {
        "Beta": ProviderResult("Beta", items=[{"headline": "b1"}]),
        "Alpha": ProviderResult("Alpha", items=[{"headline": "a1"}]),
    }
    articles = Normalizer().normalize(results, adapters)

    assert [a.title for a in articles] == ["a1", "b1"]
