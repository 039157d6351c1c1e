"""
Tests for the viability assessment heuristics.
"""

from vtuos.population.demographics import (
    MAINTAIN_POLICIES,
    NO_CONCERNS,
    AgeDistribution,
    ProjectionPoint,
    SexDistribution,
    assess_viability,
)

BALANCED_SEX = SexDistribution(male=150, female=150, total=300, male_ratio=0.5)
HEALTHY_AGES = AgeDistribution(
    infants=20, children=60, adolescents=30, young_adults=60, adults=100,
    middle_aged=40, seniors=10, total=320,
)


def points(*populations, start_year=2103):
    return tuple(
        ProjectionPoint(year=start_year + i, population=p, births=0, deaths=0, net_change=0)
        for i, p in enumerate(populations)
    )


def test_healthy_population_uses_placeholders():
    result = assess_viability(320, 1.0, points(325, 330), HEALTHY_AGES, BALANCED_SEX)

    assert result.is_viable
    assert result.years_to_mvp == 0
    assert result.minimum_viable == 160
    assert result.concerns == (NO_CONCERNS,)
    assert result.recommendations == (MAINTAIN_POLICIES,)


def test_below_minimum_is_never_viable():
    result = assess_viability(150, 5.0, points(400, 500), HEALTHY_AGES, BALANCED_SEX)

    assert not result.is_viable
    assert result.years_to_mvp == 0


def test_first_crossing_sets_years_to_mvp():
    result = assess_viability(170, -1.0, points(165, 159, 150, 170), HEALTHY_AGES, BALANCED_SEX)

    assert not result.is_viable
    assert result.years_to_mvp == 2


def test_every_concern_fires_independently():
    ages = AgeDistribution(children=1, young_adults=5, adults=5, seniors=20, total=31)
    sex = SexDistribution(male=80, female=20, total=100, male_ratio=0.8)

    result = assess_viability(200, -0.5, points(), ages, sex)

    assert len(result.concerns) == 4
    assert "Negative population growth rate detected" in result.concerns
    assert any("Aging population" in c for c in result.concerns)
    assert "Declining youth population" in result.concerns
    assert "Imbalanced sex ratio may affect reproduction" in result.concerns


def test_sex_ratio_bounds_are_inclusive():
    for ratio in (0.4, 0.6):
        sex = SexDistribution(male=0, female=0, total=0, male_ratio=ratio)
        result = assess_viability(320, 1.0, points(), HEALTHY_AGES, sex)
        assert result.concerns == (NO_CONCERNS,)


def test_recommendations():
    ages = AgeDistribution(adults=10, seniors=6, children=10, total=26)

    result = assess_viability(250, 0.2, points(), ages, BALANCED_SEX)

    assert result.recommendations == (
        "Consider incentives for family formation",
        "Prepare for increased elder care needs",
        "Monitor genetic diversity and inbreeding coefficients",
    )


def test_elder_care_uses_half_of_adults():
    # 5 seniors vs 11 adults: 5 > 11 // 2 is false
    ages = AgeDistribution(adults=11, seniors=5, children=10, total=26)
    result = assess_viability(320, 1.0, points(), ages, BALANCED_SEX)
    assert "Prepare for increased elder care needs" not in result.recommendations

    ages = AgeDistribution(adults=11, seniors=6, children=10, total=27)
    result = assess_viability(320, 1.0, points(), ages, BALANCED_SEX)
    assert "Prepare for increased elder care needs" in result.recommendations
