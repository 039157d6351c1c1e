"""
VT-UOS Population Console - Demographics Engine
Age/sex distribution, workforce ratios and population projection

Age bands (inclusive upper bounds, first match wins):
- infants 0-2, children 3-12, adolescents 13-17, young adults 18-25,
  adults 26-45, middle-aged 46-65, seniors 66+

Projection model (deliberately simple, not an actuarial table):
- Births: females × childbearing fraction × annual birth rate
- Deaths: per-band mortality coefficients, at least 1/year above a population floor
- Births shrink proportionally once the population falls under the breeding-pool threshold

All results are immutable snapshots recomputed from the record source on demand.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from config.settings import Settings, get_settings
from vtuos.models.common import Pagination
from vtuos.models.resident import (
    Resident,
    ResidentList,
    ResidentStatus,
    Sex,
)
from vtuos.utils.logging import get_logger
from vtuos.utils.time import DateLike

logger = get_logger(__name__)

# (field name, inclusive upper age); seniors are the catch-all
AGE_BANDS: Tuple[Tuple[str, Optional[int]], ...] = (
    ("infants", 2),
    ("children", 12),
    ("adolescents", 17),
    ("young_adults", 25),
    ("adults", 45),
    ("middle_aged", 65),
    ("seniors", None),
)

NO_CONCERNS = "No immediate concerns"
MAINTAIN_POLICIES = "Maintain current population policies"


class ResidentSource(Protocol):
    """The paginated record store the engine reads from."""

    def list_active(self, page: Pagination) -> ResidentList: ...

    def count_by_status(self) -> Dict[ResidentStatus, int]: ...


@dataclass(frozen=True)
class DemographicParameters:
    """Domain constants for the projection and viability heuristics."""
    page_size: int = 100
    childbearing_fraction: float = 0.4
    annual_birth_rate: float = 0.08
    breeding_pool_threshold: int = 100
    mortality: Dict[str, float] = field(
        default_factory=lambda: {
            "infants": 0.01,
            "children": 0.001,
            "adolescents": 0.001,
            "young_adults": 0.002,
            "adults": 0.003,
            "middle_aged": 0.01,
            "seniors": 0.05,
        }
    )
    min_deaths_population: int = 50
    minimum_viable_population: int = 160
    family_incentive_growth_rate: float = 0.5
    sex_ratio_min: float = 0.4
    sex_ratio_max: float = 0.6
    genetic_monitoring_population: int = 300

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DemographicParameters":
        s = settings or get_settings()
        return cls(
            page_size=s.DEMOGRAPHICS_PAGE_SIZE,
            childbearing_fraction=s.CHILDBEARING_FRACTION,
            annual_birth_rate=s.ANNUAL_BIRTH_RATE,
            breeding_pool_threshold=s.BREEDING_POOL_THRESHOLD,
            mortality={
                "infants": s.MORTALITY_INFANT,
                "children": s.MORTALITY_CHILD,
                "adolescents": s.MORTALITY_ADOLESCENT,
                "young_adults": s.MORTALITY_YOUNG_ADULT,
                "adults": s.MORTALITY_ADULT,
                "middle_aged": s.MORTALITY_MIDDLE_AGED,
                "seniors": s.MORTALITY_SENIOR,
            },
            min_deaths_population=s.MIN_DEATHS_POPULATION,
            minimum_viable_population=s.MINIMUM_VIABLE_POPULATION,
            family_incentive_growth_rate=s.FAMILY_INCENTIVE_GROWTH_RATE,
            sex_ratio_min=s.SEX_RATIO_MIN,
            sex_ratio_max=s.SEX_RATIO_MAX,
            genetic_monitoring_population=s.GENETIC_MONITORING_POPULATION,
        )


@dataclass(frozen=True)
class PopulationStats:
    """Resident counts by status"""
    total: int = 0
    total_active: int = 0
    total_deceased: int = 0
    total_exiled: int = 0
    on_mission: int = 0
    quarantined: int = 0

    @classmethod
    def from_counts(cls, counts: Dict[ResidentStatus, int]) -> "PopulationStats":
        active = counts.get(ResidentStatus.ACTIVE, 0)
        deceased = counts.get(ResidentStatus.DECEASED, 0)
        exiled = counts.get(ResidentStatus.EXILED, 0)
        on_mission = counts.get(ResidentStatus.SURFACE_MISSION, 0)
        quarantined = counts.get(ResidentStatus.QUARANTINE, 0)
        return cls(
            total=active + deceased + exiled + on_mission + quarantined,
            total_active=active,
            total_deceased=deceased,
            total_exiled=exiled,
            on_mission=on_mission,
            quarantined=quarantined,
        )


@dataclass(frozen=True)
class AgeDistribution:
    infants: int = 0
    children: int = 0
    adolescents: int = 0
    young_adults: int = 0
    adults: int = 0
    middle_aged: int = 0
    seniors: int = 0
    total: int = 0
    median_age: float = 0.0
    average_age: float = 0.0

    def band_counts(self) -> Dict[str, int]:
        """Band name -> count, in band order."""
        return {name: getattr(self, name) for name, _ in AGE_BANDS}


@dataclass(frozen=True)
class SexDistribution:
    """Male/female counts; residents without a recorded sex are not counted."""
    male: int = 0
    female: int = 0
    total: int = 0
    male_ratio: float = 0.0


@dataclass(frozen=True)
class WorkforceStats:
    working_age: int = 0  # 16-65
    training_age: int = 0  # 16-17
    full_workforce: int = 0  # 18-65
    retirement_age: int = 0  # 66+
    dependents: int = 0
    dependency_ratio: float = 0.0  # dependents / workers


@dataclass(frozen=True)
class ProjectionPoint:
    year: int
    population: int
    births: int
    deaths: int
    net_change: int


@dataclass(frozen=True)
class ViabilityAssessment:
    is_viable: bool
    minimum_viable: int
    years_to_mvp: int  # 0 = never crosses within the horizon
    concerns: Tuple[str, ...]
    recommendations: Tuple[str, ...]


@dataclass(frozen=True)
class PopulationProjection:
    current_population: int
    growth_rate: float  # Annual percentage, base year only
    projections: Tuple[ProjectionPoint, ...]
    viability: ViabilityAssessment


@dataclass(frozen=True)
class DemographicsReport:
    """Everything the demographics screen and export need, from one scan."""
    as_of: date
    stats: PopulationStats
    age: AgeDistribution
    sex: SexDistribution
    workforce: WorkforceStats
    projection: PopulationProjection


# ----------------------------------------------------------------------------
# Pure computations
# ----------------------------------------------------------------------------


def classify_age(age: int) -> str:
    """Name of the age band an age falls into."""
    for name, upper in AGE_BANDS:
        if upper is None or age <= upper:
            return name
    return AGE_BANDS[-1][0]


def calculate_median(values: Sequence[int]) -> float:
    """Median of a list of ages; 0 for an empty list."""
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=float)))


def compute_age_distribution(residents: Iterable[Resident], as_of: DateLike) -> AgeDistribution:
    counts = {name: 0 for name, _ in AGE_BANDS}
    ages: List[int] = []

    for resident in residents:
        age = resident.age(as_of)
        ages.append(age)
        counts[classify_age(age)] += 1

    total = len(ages)
    if total == 0:
        return AgeDistribution(**counts)

    return AgeDistribution(
        **counts,
        total=total,
        median_age=calculate_median(sorted(ages)),
        average_age=float(np.mean(ages)),
    )


def compute_sex_distribution(residents: Iterable[Resident]) -> SexDistribution:
    male = female = 0
    for resident in residents:
        if resident.sex is Sex.MALE:
            male += 1
        elif resident.sex is Sex.FEMALE:
            female += 1

    total = male + female
    ratio = male / total if total > 0 else 0.0
    return SexDistribution(male=male, female=female, total=total, male_ratio=ratio)


def compute_workforce_stats(residents: Iterable[Resident], as_of: DateLike) -> WorkforceStats:
    training = full = retired = children = 0

    for resident in residents:
        age = resident.age(as_of)
        if 16 <= age <= 17:
            training += 1
        elif 18 <= age <= 65:
            full += 1
        elif age >= 66:
            retired += 1
        else:
            children += 1

    workers = training + full
    dependents = retired + children
    return WorkforceStats(
        working_age=workers,
        training_age=training,
        full_workforce=full,
        retirement_age=retired,
        dependents=dependents,
        dependency_ratio=dependents / workers if workers > 0 else 0.0,
    )


def estimate_annual_births(sex: SexDistribution, params: DemographicParameters) -> int:
    women_of_childbearing_age = sex.female * params.childbearing_fraction
    return int(women_of_childbearing_age * params.annual_birth_rate)


def estimate_annual_deaths(
    age: AgeDistribution, active_population: int, params: DemographicParameters
) -> int:
    expected = sum(
        count * params.mortality.get(band, 0.0) for band, count in age.band_counts().items()
    )
    deaths = int(expected)
    if deaths < 1 and active_population > params.min_deaths_population:
        deaths = 1
    return deaths


def simulate_years(
    current: int,
    annual_births: int,
    annual_deaths: int,
    start_year: int,
    years: int,
    params: DemographicParameters,
) -> Tuple[ProjectionPoint, ...]:
    """Year-by-year projection with constant rates and a shrinking breeding pool."""
    points = []
    population = current

    for offset in range(1, years + 1):
        births = annual_births
        if population < params.breeding_pool_threshold:
            births = int(births * population / params.breeding_pool_threshold)

        net_change = births - annual_deaths
        population = max(population + net_change, 0)

        points.append(
            ProjectionPoint(
                year=start_year + offset,
                population=population,
                births=births,
                deaths=annual_deaths,
                net_change=net_change,
            )
        )

    return tuple(points)


def assess_viability(
    current: int,
    growth_rate: float,
    projections: Sequence[ProjectionPoint],
    age: AgeDistribution,
    sex: SexDistribution,
    params: Optional[DemographicParameters] = None,
) -> ViabilityAssessment:
    """
    Score long-term viability against the minimum viable population.

    Every concern and recommendation check runs independently; a placeholder
    line is used when none fire so both lists are never empty.
    """
    params = params or DemographicParameters()
    mvp = params.minimum_viable_population

    is_viable = current >= mvp
    years_to_mvp = 0
    for index, point in enumerate(projections, start=1):
        if point.population < mvp:
            years_to_mvp = index
            is_viable = False
            break

    concerns = []
    if growth_rate < 0:
        concerns.append("Negative population growth rate detected")
    if age.seniors > age.young_adults + age.adults:
        concerns.append("Aging population: seniors outnumber working-age adults")
    if age.children + age.infants < age.seniors:
        concerns.append("Declining youth population")
    if sex.male_ratio > params.sex_ratio_max or sex.male_ratio < params.sex_ratio_min:
        concerns.append("Imbalanced sex ratio may affect reproduction")

    recommendations = []
    if growth_rate < params.family_incentive_growth_rate:
        recommendations.append("Consider incentives for family formation")
    if age.seniors > age.adults // 2:
        recommendations.append("Prepare for increased elder care needs")
    if current < params.genetic_monitoring_population:
        recommendations.append("Monitor genetic diversity and inbreeding coefficients")

    return ViabilityAssessment(
        is_viable=is_viable,
        minimum_viable=mvp,
        years_to_mvp=years_to_mvp,
        concerns=tuple(concerns) or (NO_CONCERNS,),
        recommendations=tuple(recommendations) or (MAINTAIN_POLICIES,),
    )


def build_projection(
    current: int,
    age: AgeDistribution,
    sex: SexDistribution,
    start_year: int,
    years: int,
    params: Optional[DemographicParameters] = None,
) -> PopulationProjection:
    params = params or DemographicParameters()

    births = estimate_annual_births(sex, params)
    deaths = estimate_annual_deaths(age, current, params)
    growth_rate = (births - deaths) / current * 100 if current > 0 else 0.0

    points = simulate_years(current, births, deaths, start_year, years, params)
    viability = assess_viability(current, growth_rate, points, age, sex, params)

    return PopulationProjection(
        current_population=current,
        growth_rate=growth_rate,
        projections=points,
        viability=viability,
    )


# ----------------------------------------------------------------------------
# Engine bound to a record source
# ----------------------------------------------------------------------------


class DemographicsEngine:
    """
    Runs the demographic computations against a paginated record source.

    Record-source errors propagate unchanged; nothing is cached between calls.
    """

    def __init__(self, source: ResidentSource, params: Optional[DemographicParameters] = None):
        self.source = source
        self.params = params or DemographicParameters.from_settings()

    def fetch_active_residents(self) -> List[Resident]:
        """Page through every active resident."""
        page = Pagination(page=1, page_size=self.params.page_size)
        residents: List[Resident] = []

        while True:
            result = self.source.list_active(page)
            residents.extend(result.residents)
            if page.page >= result.total_pages:
                break
            page = page.next_page()

        logger.debug(f"Scanned {len(residents)} active residents over {page.page} page(s)")
        return residents

    def population_stats(self) -> PopulationStats:
        return PopulationStats.from_counts(self.source.count_by_status())

    def age_distribution(self, as_of: DateLike) -> AgeDistribution:
        return compute_age_distribution(self.fetch_active_residents(), as_of)

    def sex_distribution(self) -> SexDistribution:
        return compute_sex_distribution(self.fetch_active_residents())

    def workforce_stats(self, as_of: DateLike) -> WorkforceStats:
        return compute_workforce_stats(self.fetch_active_residents(), as_of)

    def project_population(self, as_of: DateLike, years: int) -> PopulationProjection:
        stats = self.population_stats()
        age = self.age_distribution(as_of)
        sex = self.sex_distribution()

        projection = build_projection(stats.total_active, age, sex, as_of.year, years, self.params)
        self._log_projection(projection)
        return projection

    def report(self, as_of: DateLike, years: int) -> DemographicsReport:
        """All statistics from a single scan of the active population."""
        stats = self.population_stats()
        residents = self.fetch_active_residents()
        age = compute_age_distribution(residents, as_of)
        sex = compute_sex_distribution(residents)
        workforce = compute_workforce_stats(residents, as_of)

        projection = build_projection(stats.total_active, age, sex, as_of.year, years, self.params)
        self._log_projection(projection)

        return DemographicsReport(
            as_of=as_of.date() if isinstance(as_of, datetime) else as_of,
            stats=stats,
            age=age,
            sex=sex,
            workforce=workforce,
            projection=projection,
        )

    def _log_projection(self, projection: PopulationProjection) -> None:
        final = projection.projections[-1].population if projection.projections else projection.current_population
        logger.info(
            f"Projected population {projection.current_population} -> {final} "
            f"over {len(projection.projections)} years "
            f"(growth_rate={projection.growth_rate:.2f}%)"
        )
        if not projection.viability.is_viable:
            logger.warning(
                f"Population below minimum viable size {projection.viability.minimum_viable} "
                f"(years_to_mvp={projection.viability.years_to_mvp})"
            )
