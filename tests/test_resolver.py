"""
Unit tests for metadata resolution: tiered lookup, caching and business rules.
"""
import pytest

from comicshelf.core.errors import InvalidArgumentError, UpstreamUnavailableError
from comicshelf.services.metadata.cache import MS_PER_DAY
from comicshelf.services.metadata.comicvine import ComicVineIssue
from comicshelf.services.metadata.resolver import (
    METADATA_NOT_FOUND,
    TITLE_NOT_FOUND,
    build_base_sku,
    group_creators,
    is_newstand,
    release_year_for,
    resolve_publisher_name,
)

from conftest import CACHE_COLLECTION, FIXED_NOW_MS, MAPPING_COLLECTION, make_issue, make_response


ASM_CODE = "04716"
ASM_TITLE = "Amazing Spider-Man (Legacy/2018)"


class TestResolveFlow:
    """Tests for the cache, mapping and provider tiers."""

    def test_fresh_lookup_builds_metadata(self, resolver, provider):
        """A provider hit should be turned into full details."""
        result = resolver.resolve(ASM_CODE, 1, "A")

        assert result.success
        details = result.metadata.details
        assert details.series_title == f"{ASM_TITLE} - Newstand"
        assert details.publisher_name == "Marvel Comics"
        assert details.release_date == "2018-07-11"
        assert details.release_year == 2018
        assert details.base_sku == "04716-2018-1-A"
        assert details.volume_id == "110196"
        assert details.issue_id == "6789"
        assert details.issue_number == "1"
        assert details.image_url == "https://comicvine.example/asm1.jpg"
        assert details.imageSource == "Comic Vine API"
        assert provider.calls == [(ASM_TITLE, 1, 1)]

    def test_rate_limit_sleep_precedes_external_call(self, resolver, sleeps):
        """Each Comic Vine request is preceded by the rate-limit delay."""
        resolver.resolve(ASM_CODE, 1, "A")
        assert sleeps == [0.3]

    def test_second_resolve_within_ttl_uses_cache(self, resolver, provider, sleeps):
        """A repeat lookup makes no external call and differs only in imageSource."""
        first = resolver.resolve(ASM_CODE, 1, "A")
        second = resolver.resolve(ASM_CODE, 1, "A")

        assert len(provider.calls) == 1
        assert len(sleeps) == 1
        assert second.metadata.details.imageSource == "Firestore Cache"

        first_details = first.metadata.details.model_dump(exclude={"imageSource"})
        second_details = second.metadata.details.model_dump(exclude={"imageSource"})
        assert first_details == second_details
        assert first.metadata.creators == second.metadata.creators

    def test_cache_key_ignores_variant_case(self, resolver, provider):
        """Lower and upper case variants share one cache entry."""
        resolver.resolve(ASM_CODE, 1, "b")
        resolver.resolve(ASM_CODE, 1, "B")

        assert len(provider.calls) == 1

    def test_expired_cache_triggers_fresh_call(self, resolver, provider, store):
        """An entry older than the TTL is refreshed from Comic Vine."""
        resolver.resolve(ASM_CODE, 1, "A")
        store.docs[f"{CACHE_COLLECTION}/{ASM_CODE}-1-A"]["cachedAt"] = FIXED_NOW_MS - 8 * MS_PER_DAY

        result = resolver.resolve(ASM_CODE, 1, "A")

        assert len(provider.calls) == 2
        assert result.metadata.details.imageSource == "Comic Vine API"
        assert store.docs[f"{CACHE_COLLECTION}/{ASM_CODE}-1-A"]["cachedAt"] == FIXED_NOW_MS

    def test_unknown_title_code_never_calls_provider(self, resolver, provider, sleeps):
        """Unmapped title codes fail without an external request."""
        result = resolver.resolve("99999", 1, "A")

        assert result.status == "error"
        assert result.message == TITLE_NOT_FOUND
        assert provider.calls == []
        assert sleeps == []

    def test_persisted_mapping_used_for_query(self, resolver, provider, store):
        """A stored mapping supplies the series name for the search."""
        store.docs[f"{MAPPING_COLLECTION}/99999"] = {"series_title": "Saga", "volume_id": "1", "source": "MANUAL"}

        result = resolver.resolve("99999", 3, "A")

        assert result.success
        assert provider.calls == [("Saga", 3, 1)]

    def test_zero_results_is_not_found(self, resolver, provider, store):
        """An empty result set is a not-found and is not cached."""
        provider.response = {"status_code": 1, "results": []}

        result = resolver.resolve(ASM_CODE, 1, "A")

        assert result.status == "error"
        assert result.message == METADATA_NOT_FOUND
        assert f"{CACHE_COLLECTION}/{ASM_CODE}-1-A" not in store.docs

    def test_error_status_code_is_not_found(self, resolver, provider):
        """A Comic Vine error status counts as not found."""
        provider.response = make_response(status_code=100)

        result = resolver.resolve(ASM_CODE, 1, "A")

        assert result.message == METADATA_NOT_FOUND

    def test_provider_failure_propagates(self, resolver, provider):
        """Outages are left for the retry wrapper to handle."""
        provider.error = UpstreamUnavailableError("timeout")

        with pytest.raises(UpstreamUnavailableError):
            resolver.resolve(ASM_CODE, 1, "A")

    def test_cache_read_failure_falls_through_and_still_writes(self, resolver, provider, store):
        """A failing cache read still resolves and writes the result."""
        store.fail_reads = True

        result = resolver.resolve(ASM_CODE, 1, "A")

        assert result.success
        assert len(provider.calls) == 1
        assert f"{CACHE_COLLECTION}/{ASM_CODE}-1-A" in store.docs

    def test_cache_write_failure_still_returns_data(self, resolver, store):
        """A failing cache write does not lose the result."""
        store.fail_writes = True

        result = resolver.resolve(ASM_CODE, 1, "A")

        assert result.success
        assert result.metadata.details.base_sku == "04716-2018-1-A"

    def test_first_discovery_persists_mapping(self, resolver, store):
        """A static-table hit is recorded as an API discovery."""
        resolver.resolve(ASM_CODE, 1, "A")

        mapping = store.docs[f"{MAPPING_COLLECTION}/{ASM_CODE}"]
        assert mapping["series_title"] == ASM_TITLE
        assert mapping["volume_id"] == "110196"
        assert mapping["source"] == "API_DISCOVERY"

    def test_existing_mapping_not_rewritten(self, resolver, store):
        """Curated mappings are never overwritten."""
        store.docs[f"{MAPPING_COLLECTION}/{ASM_CODE}"] = {"series_title": "Curated", "source": "MANUAL"}

        resolver.resolve(ASM_CODE, 1, "A")

        assert store.docs[f"{MAPPING_COLLECTION}/{ASM_CODE}"] == {"series_title": "Curated", "source": "MANUAL"}
        assert all(path != f"{MAPPING_COLLECTION}/{ASM_CODE}" for path, _, _ in store.writes)

    def test_resolve_payload(self, resolver):
        """The single-argument form reads camelCase keys."""
        result = resolver.resolve_payload({"titleCode": ASM_CODE, "issueNumber": 1, "coverVariant": "A"})
        assert result.success

    @pytest.mark.parametrize("title_code,issue_number,cover_variant", [
        ("", 1, "A"),
        (None, 1, "A"),
        (ASM_CODE, 0, "A"),
        (ASM_CODE, "1", "A"),
        (ASM_CODE, True, "A"),
        (ASM_CODE, 1, ""),
        (ASM_CODE, 1, None),
    ])
    def test_invalid_arguments_rejected(self, resolver, provider, title_code, issue_number, cover_variant):
        """Malformed identifiers raise before any lookup."""
        with pytest.raises(InvalidArgumentError):
            resolver.resolve(title_code, issue_number, cover_variant)
        assert provider.calls == []


class TestNewstandRule:
    """Tests for the newsstand title suffix."""

    @pytest.mark.parametrize("cover_date,variant,expect_suffix", [
        ("1981-12-01", "A", False),
        ("1982-01-01", "A", True),
        ("1982-01-01", "D0", False),
        ("2020-05-01", "B", True),
    ])
    def test_suffix_boundary(self, resolver, provider, cover_date, variant, expect_suffix):
        """Suffix applies from 1982 on, except for Direct Edition."""
        provider.response = make_response(make_issue(cover_date=cover_date))

        title = resolver.resolve(ASM_CODE, 1, variant).metadata.details.series_title

        assert title.endswith(" - Newstand") is expect_suffix

    def test_unknown_year_has_no_suffix(self):
        """No release year means no suffix."""
        assert is_newstand(None, "A") is False

    def test_lowercase_direct_edition_variant(self):
        """d0 counts as Direct Edition."""
        assert is_newstand(1990, "d0") is False


class TestBusinessRules:
    """Tests for release year, SKU, publisher and creator rules."""

    def test_release_year_prefers_cover_date(self):
        """cover_date wins over date_added."""
        issue = ComicVineIssue(cover_date="1985-03-01", date_added="2009-01-01 00:00:00")
        assert release_year_for(issue) == 1985

    def test_release_year_falls_back_to_date_added(self):
        """date_added is used when there is no cover date."""
        issue = ComicVineIssue(cover_date=None, date_added="2009-01-01 00:00:00")
        assert release_year_for(issue) == 2009

    def test_release_year_none_when_unparseable(self):
        """Dates without a leading year give None."""
        assert release_year_for(ComicVineIssue(cover_date="unknown")) is None

    def test_no_sku_without_year(self, resolver, provider):
        """Without a release year there is no SKU and no suffix."""
        provider.response = make_response(make_issue(cover_date=None, date_added=None))

        details = resolver.resolve(ASM_CODE, 1, "A").metadata.details

        assert details.release_year is None
        assert details.base_sku is None
        assert details.series_title == ASM_TITLE

    def test_sku_uses_provider_issue_number(self):
        """The SKU carries Comic Vine's issue number and an upper-cased variant."""
        assert build_base_sku("04716", 2018, "1.MU", "b") == "04716-2018-1.MU-B"

    def test_sku_variant_defaults_to_a(self):
        """An empty variant becomes A."""
        assert build_base_sku("04716", 2018, "1", "") == "04716-2018-1-A"

    def test_publisher_from_table(self):
        """Known publisher ids use the table's display name."""
        issue = ComicVineIssue(volume={"id": 1, "publisher": {"id": 10, "name": "DC"}})
        assert resolve_publisher_name(issue) == "DC Comics"

    def test_publisher_falls_back_to_provider_name(self):
        """Unknown ids fall back to Comic Vine's name."""
        issue = ComicVineIssue(volume={"id": 1, "publisher": {"id": 9999, "name": "Oni Press"}})
        assert resolve_publisher_name(issue) == "Oni Press"

    def test_publisher_unknown(self):
        """No publisher data at all gives Unknown Publisher."""
        assert resolve_publisher_name(ComicVineIssue()) == "Unknown Publisher"
        issue = ComicVineIssue(volume={"id": 1, "publisher": {"id": 9999}})
        assert resolve_publisher_name(issue) == "Unknown Publisher"

    def test_creators_grouped_and_unknown_roles_dropped(self):
        """Tracked roles are bucketed; letterers are dropped."""
        creators = group_creators(ComicVineIssue(**make_issue()))

        assert creators.writer == ["Nick Spencer"]
        assert creators.penciller == ["Ryan Ottley"]
        assert creators.inker == ["Cliff Rathburn"]
        assert creators.colorist == ["Laura Martin"]

    def test_combined_roles_are_split(self):
        """Comma-joined roles credit the person in each bucket."""
        issue = ComicVineIssue(person_credits=[{"role": "Penciler, Inker", "name": "John Byrne"}])

        creators = group_creators(issue)

        assert creators.penciller == ["John Byrne"]
        assert creators.inker == ["John Byrne"]

    def test_no_credits_gives_empty_lists(self):
        """Missing credits give empty role lists."""
        creators = group_creators(ComicVineIssue())
        assert creators.model_dump() == {"writer": [], "penciller": [], "inker": [], "colorist": []}
