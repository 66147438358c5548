import pytest

from app.cities.matching import Candidate, find_candidates, normalize, rank_cities
from tests.conftest import CITIES


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  New   York\tCity ", "new york city"),
        ("Dallas/Fort Worth, TX", "dallas/fort worth, tx"),
        ("St. Louis (MO) - Area", "st. louis (mo) - area"),
        ("Coeur d'Alene!", "coeur dalene"),
        ("", ""),
        (None, ""),
        ("   ", ""),
    ],
)
def test_normalize(raw, expected):
    assert normalize(raw) == expected


def test_blank_query_returns_nothing():
    assert rank_cities(CITIES, "") == []
    assert rank_cities(CITIES, "   ") == []
    assert rank_cities(CITIES, "!!!") == []


def test_earlier_match_ranks_first():
    universe = ["New York City, NY (Metropolitan Area)", "York, PA"]
    assert rank_cities(universe, "york") == ["York, PA", "New York City, NY (Metropolitan Area)"]


def test_shorter_name_breaks_position_tie():
    universe = ["Newburgh/Poughkeepsie, NY", "Newark, NJ", "New Orleans, LA"]
    assert rank_cities(universe, "new") == ["Newark, NJ", "New Orleans, LA", "Newburgh/Poughkeepsie, NY"]


def test_alphabetical_breaks_full_tie():
    universe = ["Salem, OR", "Salem, MA"]
    assert rank_cities(universe, "salem") == ["Salem, MA", "Salem, OR"]


def test_matching_is_case_and_whitespace_insensitive():
    assert rank_cities(CITIES, "  SEATTLE  ") == ["Seattle, WA"]
    assert rank_cities(CITIES, "los   angeles") == ["Los Angeles, CA (Metropolitan Area)"]


def test_no_match():
    assert rank_cities(CITIES, "zurich") == []


def test_limit_caps_results():
    universe = [f"Springfield {i}" for i in range(20)]
    assert len(rank_cities(universe, "spring")) == 8
    assert len(rank_cities(universe, "spring", limit=3)) == 3
    assert rank_cities(universe, "spring", limit=0) == []


def test_every_result_contains_query():
    q = normalize("a")
    results = rank_cities(CITIES, "a", limit=50)
    assert results
    assert all(q in normalize(r) for r in results)


def test_rank_is_deterministic():
    assert rank_cities(CITIES, "an") == rank_cities(CITIES, "an")


def test_find_candidates_reports_match_metadata():
    [candidate] = find_candidates(["York, PA"], "PA")
    assert candidate == Candidate(place="York, PA", match_index=6, length=8)
