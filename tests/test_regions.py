import pytest

from conftest import ROSTER_DATE, FakeSupabase, make_row
from nobetci.data.pharmacy_repository import PharmacyRepository, row_to_pharmacy
from nobetci.errors import RepositoryError
from nobetci.services.regions import CYPRUS, DEFAULT_CATALOG, CompositeRegion, RegionAggregator, RegionCatalog


def _cyprus_store(**kwargs) -> FakeSupabase:
    return FakeSupabase(
        [
            make_row("1", city="Lefkoşa", district="Merkez", name="Lefkoşa Eczanesi"),
            make_row("2", city="Lefkosa", district="Merkez ", name="Köşk Eczanesi"),
            make_row("3", city="Girne", district="Alsancak", name="Girne Eczanesi"),
            make_row("4", city="Gazimagusa", district="Merkez", name="Mağusa Eczanesi"),
            make_row("5", city="Istanbul", district="Kadıköy", name="Kadıköy Eczanesi"),
            make_row("6", city="Lefkosa", district="Merkez", name="Başkent Eczanesi"),
        ],
        **kwargs,
    )


def test_expand_plain_city_returns_itself():
    assert DEFAULT_CATALOG.expand(" Ankara ") == ["Ankara"]


@pytest.mark.parametrize("label", ["kibris", "Kibris", " KIBRIS ", "Kıbrıs"])
def test_expand_composite_region_returns_all_aliases(label):
    assert DEFAULT_CATALOG.expand(label) == list(CYPRUS.aliases)


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATALOG._regions["x"] = CYPRUS


def test_display_name():
    assert DEFAULT_CATALOG.display_name("kibris") == "Kıbrıs"
    assert DEFAULT_CATALOG.display_name(" Ankara ") == "Ankara"


def test_filter_cities_partitions_by_country():
    cities = ["Ankara", "Girne", "Istanbul", "Lefkoşa", "lefkosa"]

    assert DEFAULT_CATALOG.filter_cities(cities, "kibris") == ["Girne", "Lefkoşa", "lefkosa"]
    assert DEFAULT_CATALOG.filter_cities(cities, "turkiye") == ["Ankara", "Istanbul"]
    assert DEFAULT_CATALOG.filter_cities(cities, None) == cities
    assert DEFAULT_CATALOG.filter_cities(cities, "mars") == cities


def test_custom_catalog():
    catalog = RegionCatalog([CompositeRegion(key="Marmara", display_name="Marmara", aliases=("Istanbul", "Bursa"))])

    assert catalog.expand("marmara") == ["Istanbul", "Bursa"]
    assert catalog.expand("Kibris") == ["Kibris"]


def test_aggregated_districts_are_unioned_and_deduplicated():
    store = _cyprus_store()
    aggregator = RegionAggregator(PharmacyRepository(store))

    districts = aggregator.list_districts("kibris", ROSTER_DATE)

    assert districts == ["Alsancak", "Merkez"]
    queried = {query.filter_value("city") for query in store.queries}
    assert queried == set(CYPRUS.aliases)


def test_plain_city_is_a_single_query():
    store = _cyprus_store()
    aggregator = RegionAggregator(PharmacyRepository(store))

    assert aggregator.list_districts("Istanbul", ROSTER_DATE) == ["Kadıköy"]
    assert len(store.queries) == 1


def test_aggregated_pharmacies_are_merged_and_sorted_by_name():
    aggregator = RegionAggregator(PharmacyRepository(_cyprus_store()))

    pharmacies = aggregator.list_pharmacies("Kıbrıs", ROSTER_DATE, "Merkez")

    assert [p.name for p in pharmacies] == ["Başkent Eczanesi", "Lefkoşa Eczanesi", "Mağusa Eczanesi"]


def test_aggregated_city_listing_without_district():
    aggregator = RegionAggregator(PharmacyRepository(_cyprus_store()))

    pharmacies = aggregator.list_pharmacies("kibris", ROSTER_DATE)

    assert sorted(p.id for p in pharmacies) == ["1", "2", "3", "4", "6"]


def test_failing_alias_is_skipped_when_others_succeed():
    store = _cyprus_store(fail_when=lambda query: query.filter_value("city") == "Girne")
    aggregator = RegionAggregator(PharmacyRepository(store))

    assert aggregator.list_districts("kibris", ROSTER_DATE) == ["Merkez"]


def test_aggregate_fails_only_when_every_alias_fails():
    store = _cyprus_store(fail_when=lambda query: True)
    aggregator = RegionAggregator(PharmacyRepository(store), max_workers=3)

    with pytest.raises(RepositoryError) as excinfo:
        aggregator.list_districts("kibris", ROSTER_DATE)

    assert excinfo.value.resource == "districts"


def test_unexpected_alias_errors_are_wrapped_when_all_fail():
    class ExplodingRepository:
        def list_districts(self, city, date):
            raise RuntimeError("boom")

    aggregator = RegionAggregator(ExplodingRepository())

    with pytest.raises(RepositoryError):
        aggregator.list_districts("kibris", ROSTER_DATE)


def test_records_returned_by_several_aliases_appear_once():
    class OverlappingRepository:
        def list_pharmacies(self, city, date, district=None):
            return [row_to_pharmacy(make_row("same", city="Lefkoşa"))]

    aggregator = RegionAggregator(OverlappingRepository())

    assert [p.id for p in aggregator.list_pharmacies("kibris", ROSTER_DATE)] == ["same"]
