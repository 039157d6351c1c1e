"""
Tests for the founding population generator.
"""

from collections import Counter
from datetime import datetime, timezone

import pytest

from vtuos.models.common import Pagination
from vtuos.models.household import HouseholdFilter, HouseholdType
from vtuos.models.resident import EntryType, ResidentFilter
from vtuos.seed.generator import SeedConfig, SeedGenerator
from vtuos.utils.errors import InvalidOperationError
from vtuos.utils.time import calculate_age

SEAL = datetime(2077, 10, 23, 9, 47, tzinfo=timezone.utc)


def _config(**overrides):
    values = dict(
        vault_number=76,
        seal_date=SEAL,
        target_population=60,
        family_households=10,
        single_households=5,
        random_seed=7,
    )
    values.update(overrides)
    return SeedConfig(**values)


def _all_residents(resident_repo):
    return resident_repo.list(ResidentFilter(), Pagination(page_size=100)).residents


def test_reaches_target_population(session_factory, resident_repo, household_repo):
    summary = SeedGenerator(_config(), session_factory).generate()

    households = household_repo.list(HouseholdFilter(), Pagination(page_size=100))
    # A family started with one slot left still gets both adults
    assert 60 <= summary.residents <= 61
    assert len(_all_residents(resident_repo)) == summary.residents
    assert households.total == summary.households
    assert households.households[0].designation == "H-0001"


def test_target_smaller_than_families_stops_early(session_factory, resident_repo):
    summary = SeedGenerator(_config(target_population=5), session_factory).generate()

    assert 5 <= summary.residents <= 6
    assert len(_all_residents(resident_repo)) == summary.residents


def test_same_seed_same_population(engine):
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool

    from config.database import build_engine, init_db

    def names_for(seed_engine):
        factory = sessionmaker(autoflush=False, bind=seed_engine)
        generator = SeedGenerator(_config(), factory)
        generator.generate()
        return [(r.registry_number, r.full_name, r.date_of_birth) for r in generator.residents]

    other = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=other)
    try:
        assert names_for(engine) == names_for(other)
    finally:
        other.dispose()


def test_refuses_populated_vault(session_factory):
    SeedGenerator(_config(target_population=3), session_factory).generate()

    with pytest.raises(InvalidOperationError, match="already has"):
        SeedGenerator(_config(), session_factory).generate()


def test_family_structure(session_factory, household_repo):
    generator = SeedGenerator(_config(target_population=200, single_households=0), session_factory)
    generator.generate()

    seal = SEAL.date()
    by_id = {r.id: r for r in generator.residents}
    members = Counter(r.household_id for r in generator.residents)

    for resident in generator.residents:
        age = calculate_age(resident.date_of_birth, seal)
        if resident.entry_type is EntryType.VAULT_BORN:
            father = by_id[resident.biological_parent_1_id]
            mother = by_id[resident.biological_parent_2_id]
            assert 0 <= age <= 17
            assert resident.household_id == father.household_id == mother.household_id
            assert resident.surname == father.surname
            assert resident.clearance_level == 1
        else:
            assert 18 <= age <= 64
            assert resident.biological_parent_1_id is None
            assert 1 <= resident.clearance_level <= 3
        assert resident.blood_type is not None

    for household in generator.households:
        if household.household_type is HouseholdType.FAMILY:
            assert 2 <= members[household.id] <= 6
        else:
            assert members[household.id] == 1
        assert household.head_of_household_id in by_id


def test_config_from_settings_ignores_unset_overrides():
    config = SeedConfig.from_settings(target_population=None, random_seed=99)

    assert config.random_seed == 99
    assert config.target_population == 500
    assert config.vault_number == 76
    assert config.seal_date == SEAL
