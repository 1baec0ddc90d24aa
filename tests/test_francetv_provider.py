"""
FranceTVProvider tests against a mocked France.tv mobile API.
"""

import asyncio

import pytest

from app.utils.api_client import FetchError
from app.utils.cache import CACHE_TTL_SECONDS
from tests.upstream import CHANNEL_URL, PROGRAMS_URL, SEARCH_URL, TOKEN_URL, VIDEO_URL, make_item


def _listing(*collections):
    return {"collections": list(collections)}


def _collection(items, **extra):
    collection = {"items": items}
    collection.update(extra)
    return collection


class TestChannelContent:

    def test_flattens_and_dedupes_in_first_seen_order(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-2"), json=_listing(
            _collection([make_item("a"), make_item("b")]),
            _collection([make_item("a", title="Duplicate"), make_item("c")]),
        ))

        videos = asyncio.run(provider.get_channel_content("france-2"))

        assert [v.id for v in videos] == ["a", "b", "c"]
        assert videos[0].title == "Video a"
        assert requests_mock.last_request.qs == {"platform": ["apps"]}

    def test_drops_items_without_id(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-3"), json=_listing(
            _collection([{"title": "No id"}, make_item("x"), {"si_id": None}]),
            {"type": "banner"},
        ))

        videos = asyncio.run(provider.get_channel_content("france-3"))

        assert [v.id for v in videos] == ["x"]

    def test_missing_collections_gives_empty_list(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("slash"), json={})
        assert asyncio.run(provider.get_channel_content("slash")) == []

    def test_cached_within_ttl(self, provider, cache, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-2"), json=_listing(_collection([make_item("a")])))

        first = asyncio.run(provider.get_channel_content("france-2"))
        second = asyncio.run(provider.get_channel_content("france-2"))

        assert first == second
        assert requests_mock.call_count == 1
        assert cache.get("channel_france-2") == first

    def test_refetched_after_expiry(self, provider, clock, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-2"), json=_listing(_collection([make_item("a")])))

        asyncio.run(provider.get_channel_content("france-2"))
        clock.advance(CACHE_TTL_SECONDS + 1)
        asyncio.run(provider.get_channel_content("france-2"))
        asyncio.run(provider.get_channel_content("france-2"))

        assert requests_mock.call_count == 2

    def test_fetch_error_propagates_and_is_not_cached(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-2"), [
            {"status_code": 500},
            {"json": _listing(_collection([make_item("a")]))},
        ])

        with pytest.raises(FetchError):
            asyncio.run(provider.get_channel_content("france-2"))

        videos = asyncio.run(provider.get_channel_content("france-2"))
        assert [v.id for v in videos] == ["a"]
        assert requests_mock.call_count == 2

    def test_concurrent_requests_fetch_once(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-5"), json=_listing(_collection([make_item("a")])))

        async def scenario():
            return await asyncio.gather(*(provider.get_channel_content("france-5") for _ in range(3)))

        results = asyncio.run(scenario())

        assert all([v.id for v in r] == ["a"] for r in results)
        assert requests_mock.call_count == 1


class TestChannelPrograms:

    def test_normalizes_programs_without_dedupe(self, provider, requests_mock):
        requests_mock.get(PROGRAMS_URL.format("france-2"), json={"items": [
            {"program_path": "france-2/envoye-special", "label": "Envoyé spécial"},
            {"label": "No path"},
            {"program_path": "france-2/envoye-special", "label": "Envoyé spécial"},
        ]})

        programs = asyncio.run(provider.get_channel_programs("france-2"))

        assert [p.id for p in programs] == ["france-2/envoye-special", "france-2/envoye-special"]
        assert programs[0].title == "Envoyé spécial"

    def test_cached_under_programs_key(self, provider, cache, requests_mock):
        requests_mock.get(PROGRAMS_URL.format("france-3"), json={"items": []})

        asyncio.run(provider.get_channel_programs("france-3"))
        asyncio.run(provider.get_channel_programs("france-3"))

        assert requests_mock.call_count == 1
        assert cache.get("programs_france-3") == []


class TestSearch:

    def test_only_videos_collection_is_used(self, provider, requests_mock):
        requests_mock.get(SEARCH_URL, json=_listing(
            _collection([make_item("p1")], label="Programmes"),
            _collection([make_item("v1"), make_item("v2")], label="Vidéos"),
            _collection([make_item("x1")], label="Personnalités"),
        ))

        videos = asyncio.run(provider.search("papotin"))

        assert [v.id for v in videos] == ["v1", "v2"]
        assert requests_mock.last_request.qs == {"term": ["papotin"], "platform": ["apps"]}

    def test_query_is_url_encoded(self, provider, requests_mock):
        requests_mock.get(SEARCH_URL, json={})

        asyncio.run(provider.search("c dans l'air & co"))

        assert "term=c+dans+l%27air+%26+co" in requests_mock.last_request.url

    def test_cached_per_query(self, provider, cache, requests_mock):
        requests_mock.get(SEARCH_URL, json=_listing(_collection([make_item("v1")], label="Vidéos")))

        asyncio.run(provider.search("quotidien"))
        asyncio.run(provider.search("quotidien"))
        asyncio.run(provider.search("papotin"))

        assert requests_mock.call_count == 2
        assert cache.get("search_quotidien") is not None


class TestRugby:

    def test_keyword_filter(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("sport"), json=_listing(
            _collection([
                make_item("r1", title="Top 14 Final"),
                make_item("n1", title="Evening News"),
                make_item("r2", title="Résumé", description="Le CRUNCH France-Angleterre"),
                {"si_id": "r3", "label": "Six Nations : France - Irlande"},
                make_item("f1", title="Football", description="Ligue 1"),
            ]),
            _collection([make_item("r1", title="Top 14 Final")]),
        ))

        videos = asyncio.run(provider.get_rugby_content())

        assert [v.id for v in videos] == ["r1", "r2", "r3"]

    def test_filter_is_applied_before_normalization(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("sport"), json=_listing(_collection([
            {"title": "Rugby without id"},
        ])))

        assert asyncio.run(provider.get_rugby_content()) == []

    def test_cached_under_rugby_key(self, provider, cache, requests_mock):
        requests_mock.get(CHANNEL_URL.format("sport"), json={})

        asyncio.run(provider.get_rugby_content())
        asyncio.run(provider.get_rugby_content())

        assert requests_mock.call_count == 1
        assert cache.get("rugby") == []


class TestPopularShows:

    def test_concatenates_first_results_of_each_query(self, provider, requests_mock):
        def reply(request, context):
            term = request.qs["term"][0]
            items = [make_item(f"{term}-{i}") for i in range(12)] + [make_item("shared")]
            return _listing(_collection(items, label="Vidéos"))

        requests_mock.get(SEARCH_URL, json=reply)

        videos = asyncio.run(provider.get_popular_shows())

        assert len(videos) == 50
        assert videos[0].id == "papotin-0"
        assert videos[10].id == "quotidien-0"
        assert requests_mock.call_count == 5


class TestLiveStream:

    def test_resolves_live_broadcast(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-2"), json=_listing(
            _collection([make_item("replay")], type="playlist"),
            _collection([{"title": "JT 20h", "channel": {"si_id": "live-f2"}}], type="live"),
        ))
        requests_mock.get(VIDEO_URL.format("live-f2"), json={
            "video": {"url": "https://live/f2.m3u8", "drm": False, "format": "hls"},
            "meta": {"title": "France 2"},
        })

        stream = asyncio.run(provider.get_live_stream("france-2"))

        assert stream.video_id == "live-f2"
        assert stream.playback_url == "https://live/f2.m3u8"
        assert stream.delivery_format == "hls"

    def test_not_cached(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-2"), json=_listing(
            _collection([{"channel": {"si_id": "live-f2"}}], type="live"),
        ))
        requests_mock.get(VIDEO_URL.format("live-f2"), json={"video": {"url": "https://live/f2.m3u8"}})

        asyncio.run(provider.get_live_stream("france-2"))
        asyncio.run(provider.get_live_stream("france-2"))

        assert requests_mock.call_count == 4

    def test_no_live_collection(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("slash"), json=_listing(_collection([make_item("a")])))
        assert asyncio.run(provider.get_live_stream("slash")) is None

    def test_live_item_without_channel_id(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-4"), json=_listing(
            _collection([{"title": "Live", "channel": {}}], type="live"),
        ))
        assert asyncio.run(provider.get_live_stream("france-4")) is None

    def test_listing_failure_gives_none(self, provider, requests_mock):
        requests_mock.get(CHANNEL_URL.format("france-2"), status_code=502)
        assert asyncio.run(provider.get_live_stream("france-2")) is None


class TestVideoInfo:

    def test_never_cached(self, provider, cache, requests_mock):
        requests_mock.get(VIDEO_URL.format("abc"), json={"video": {"url": "https://cdn/abc.m3u8"}})

        asyncio.run(provider.get_video_info("abc"))
        asyncio.run(provider.get_video_info("abc"))

        assert requests_mock.call_count == 2
        assert len(cache) == 0

    def test_token_endpoint_is_used(self, provider, requests_mock):
        requests_mock.get(VIDEO_URL.format("abc"), json={
            "video": {"url": "https://cdn/abc.m3u8", "token": {"akamai": TOKEN_URL + "?format=json"}},
        })
        requests_mock.get(TOKEN_URL, json={"url": "https://cdn/abc.m3u8?hdnea=signed"})

        stream = asyncio.run(provider.get_video_info("abc"))

        assert stream.playback_url == "https://cdn/abc.m3u8?hdnea=signed"
