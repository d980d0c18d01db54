# tests/test_card_services.py
import asyncio

import pytest

from tarot_api.core.exceptions import NotFound
from tarot_api.services.card_services import CardCatalog
from tarot_api.services.database import card_database_services
from tarot_api.services.reading_services import ReadingOrchestrator


def run_with_catalog(session_factory, cache, scenario):
    async def runner():
        async with session_factory() as db:
            return await scenario(CardCatalog(db, cache))

    return asyncio.run(runner())


def test_list_cards_returns_deck_in_arcana_order(session_factory, cache):
    cards = run_with_catalog(session_factory, cache, lambda catalog: catalog.list_cards())

    assert [card.arcana_id for card in cards] == list(range(22))
    assert cards[0].name == "The Fool"
    assert cards[0].upright.love


def test_list_cards_hits_store_once(session_factory, cache, monkeypatch):
    calls = []
    original = card_database_services.list_cards

    async def counting_list_cards(db):
        calls.append(1)
        return await original(db)

    monkeypatch.setattr(card_database_services, "list_cards", counting_list_cards)

    async def scenario(catalog):
        first = await catalog.list_cards()
        second = await catalog.list_cards()
        return first, second

    first, second = run_with_catalog(session_factory, cache, scenario)

    assert first == second
    assert len(calls) == 1


def test_get_card_by_arcana_id(session_factory, cache, fake_redis):
    card = run_with_catalog(session_factory, cache, lambda catalog: catalog.get_card_by_arcana_id(2))

    assert card.name == "The High Priestess"
    assert "card:arcana:2" in fake_redis.store


def test_get_card_by_id_round_trips_through_cache(session_factory, cache):
    async def scenario(catalog):
        fool = await catalog.get_card_by_arcana_id(0)
        return fool, await catalog.get_card(fool.id)

    fool, same = run_with_catalog(session_factory, cache, scenario)

    assert same == fool


@pytest.mark.parametrize("lookup", ["get_card", "get_card_by_arcana_id"])
def test_missing_card_raises_not_found(session_factory, cache, fake_redis, lookup):
    with pytest.raises(NotFound):
        run_with_catalog(session_factory, cache, lambda catalog: getattr(catalog, lookup)(999))

    assert fake_redis.set_calls == 0


@pytest.mark.parametrize("query", ["a", " b ", "", None])
def test_short_search_skips_cache_and_store(session_factory, cache, fake_redis, monkeypatch, query):
    async def unexpected(*args, **kwargs):
        raise AssertionError("store should not be queried")

    monkeypatch.setattr(card_database_services, "search_cards", unexpected)

    result = run_with_catalog(session_factory, cache, lambda catalog: catalog.search_cards(query))

    assert result.short_query is True
    assert result.results == []
    assert result.count == 0
    assert fake_redis.get_calls == 0
    assert fake_redis.set_calls == 0


@pytest.mark.parametrize(
    "query, expected",
    [
        ("fool", "The Fool"),
        ("PRIESTESS", "The High Priestess"),
        ("innocence", "The Fool"),
        ("광대", "The Fool"),
        ("직감", "The High Priestess"),
    ],
)
def test_search_matches_names_descriptions_and_keywords(session_factory, cache, query, expected):
    result = run_with_catalog(session_factory, cache, lambda catalog: catalog.search_cards(query))

    assert expected in [card.name for card in result.results]
    assert result.count == len(result.results)
    assert result.short_query is False


def test_keyword_match_is_exact(session_factory, cache):
    # "new beginnings" is a keyword; a fragment of it that appears nowhere else must not match
    result = run_with_catalog(session_factory, cache, lambda catalog: catalog.search_cards("beginningsx"))

    assert result.results == []
    assert result.message == "The spirits found no matches for your query"


def test_search_is_cached_under_lowercase_key(session_factory, cache, fake_redis):
    run_with_catalog(session_factory, cache, lambda catalog: catalog.search_cards("Fool"))

    assert "search:fool" in fake_redis.store
    assert fake_redis.ttls["search:fool"] == 300


def test_card_stats_stay_stale_until_cache_expires(session_factory, cache, fake_redis, rng):
    async def stats():
        async with session_factory() as db:
            return await CardCatalog(db, cache).get_card_stats()

    async def scenario():
        before = await stats()
        async with session_factory() as db:
            await ReadingOrchestrator(db, cache, rng=rng).create_reading("SINGLE")
        still_cached = await stats()
        fake_redis.clear()
        refreshed = await stats()
        return before, still_cached, refreshed

    before, still_cached, refreshed = asyncio.run(scenario())

    assert before.total_cards == 22
    assert before.most_popular_card is None
    assert still_cached.most_popular_card is None
    assert refreshed.most_popular_card.times_drawn == 1
