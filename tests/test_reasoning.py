import random

import pytest

from poi_oracle.core.config import Settings
from poi_oracle.services.gazetteer import CITY_COORDINATES
from poi_oracle.services.reasoning import (
    analyze_query,
    compute_accuracy,
    generate_ai_suggestions,
    generate_recommendation,
    identify_corrections_and_gaps,
    validate_with_ground_truth,
)

SIMULATE = Settings(_env_file=None, USE_LLM=False)
CHAI_QUERY = "Where should I open a chai stall near IT parks in Bangalore?"


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(20))
async def test_analysis_invariants(seed):
    result = await analyze_query(
        CHAI_QUERY, "market", SIMULATE, rng=random.Random(seed)
    )
    suggested = result.ai_reasoning.suggested_locations
    verified = result.ground_truth.verified_pois

    assert result.query == CHAI_QUERY
    assert len(suggested) == 5
    assert all(not p.verified and p.category == "ai_suggested" for p in suggested)
    assert len(verified) <= len(suggested)
    assert all(p.verified and p.category == "ground_truth_verified" for p in verified)

    accuracy = result.ground_truth.accuracy
    assert isinstance(accuracy, int) and 0 <= accuracy <= 70
    assert 0.72 <= result.ai_reasoning.confidence < 0.80

    lat, lng = CITY_COORDINATES["bangalore"]
    for p in suggested:
        assert 0.55 <= p.confidence < 0.80
        assert abs(p.lat - lat) <= 0.02 and abs(p.lng - lng) <= 0.02
    for p in verified:
        assert 0.82 <= p.confidence < 0.95
        assert abs(p.lat - lat) <= 0.0175 and abs(p.lng - lng) <= 0.0175

    assert result.visualization.center == (lat, lng)
    assert result.visualization.zoom == 13


@pytest.mark.asyncio
async def test_analysis_payload_uses_wire_names():
    result = await analyze_query("gym in Delhi", None, SIMULATE)
    payload = result.model_dump(by_alias=True)

    assert set(payload) == {
        "query",
        "aiReasoning",
        "groundTruth",
        "recommendation",
        "visualization",
    }
    assert "suggestedLocations" in payload["aiReasoning"]
    assert "verifiedPOIs" in payload["groundTruth"]
    assert payload["visualization"]["center"] == CITY_COORDINATES["delhi"]
    assert payload["aiReasoning"]["suggestedLocations"][0]["name"] == (
        "Prime Fitness Center Zone - High Traffic"
    )


@pytest.mark.parametrize(
    "query_type,first_name",
    [
        ("location", "Prime Chai Stall Zone - High Traffic"),
        ("market", "Underserved Market - Chai Stall"),
        ("competitor", "Low Competition Zone"),
        ("optimize", "Optimal Coverage Point"),
        (None, "Prime Chai Stall Zone - High Traffic"),
        ("bogus", "Prime Chai Stall Zone - High Traffic"),
    ],
)
def test_suggestion_names_follow_query_type(query_type, first_name):
    pois = generate_ai_suggestions("Bangalore", "Chai Stall", [], query_type)
    assert pois[0].name == first_name
    assert len({p.id for p in pois}) == 5


def test_suggestion_tags_depend_on_tech_context():
    tech = generate_ai_suggestions("Pune", "Cafe", ["Proximity to IT/Tech Parks"])
    plain = generate_ai_suggestions("Pune", "Cafe", ["Foot Traffic Potential"])
    assert tech[0].attributes.tags == ["AI Generated", "Tech Zone"]
    assert tech[0].attributes.hours == "7 AM - 10 PM"
    assert plain[0].attributes.tags == ["AI Generated", "Commercial Zone"]
    assert plain[0].attributes.hours == "9 AM - 9 PM"


def test_verified_names_fall_back_after_templates():
    suggestions = generate_ai_suggestions("Pune", "Cafe", []) * 2  # 10개
    verified = validate_with_ground_truth(suggestions, "Pune", "Cafe")
    assert len(verified) == 6
    assert verified[0].name == "Verified: Cafe - Prime Location"
    assert verified[3].name == "Ground Truth: Optimal Cafe Spot"
    assert verified[4].name == "Verified Location 5"


def test_no_suggestions_means_no_verified():
    assert validate_with_ground_truth([], "Pune", "Cafe") == []


def test_corrections_and_gaps_branches():
    corrections, gaps = identify_corrections_and_gaps(
        ["Proximity to IT/Tech Parks", "Residential Area Focus"], "Cafe", "Pune"
    )
    assert len(corrections) == 2
    assert "IT park peak times" in corrections[0]
    assert len(gaps) == 3
    assert gaps[2] == "Residential zones in Pune East show 40% higher demand than current supply"
    assert gaps[1] == "Found market gap: No Cafe within 1km of Pune Central Metro Station"

    corrections, gaps = identify_corrections_and_gaps(["Foot Traffic Potential"], "Cafe", "Pune")
    assert corrections[0].startswith("AI overestimated foot traffic")
    assert len(gaps) == 2


@pytest.mark.parametrize("seed", range(10))
def test_gap_count_in_range(seed):
    _, gaps = identify_corrections_and_gaps([], "Cafe", "Pune", random.Random(seed))
    count = int(gaps[0].split()[1])
    assert 2 <= count <= 4


@pytest.mark.parametrize(
    "verified,total,expected",
    [(3, 5, 60), (5, 5, 70), (4, 5, 70), (0, 0, 0), (0, 5, 0), (1, 3, 33)],
)
def test_accuracy_is_rounded_and_capped(verified, total, expected):
    assert compute_accuracy(verified, total) == expected


def test_recommendation_without_verified():
    text = generate_recommendation("Cafe", "Pune", [], ["a", "b"], ["c"])
    assert "ANALYSIS SUMMARY: Cafe in Pune" in text
    assert "Location: No optimal location identified" in text
    assert "Confidence: 0% (grounded in POI data)" in text
    assert "Verified Locations: 0" in text


def test_recommendation_names_top_verified():
    suggestions = generate_ai_suggestions("Pune", "Cafe", [])
    verified = validate_with_ground_truth(suggestions, "Pune", "Cafe")
    text = generate_recommendation("Cafe", "Pune", verified, [], [])
    assert f"Location: {verified[0].name}" in text
    assert f"Confidence: {round(verified[0].confidence * 100)}%" in text
