"""
Tests for the vtuos command line entry point.
"""

from datetime import date

import pytest

import vtuos.cli as cli
from config.database import init_db
from vtuos.facilities.service import CreateSystemInput, FacilityService
from vtuos.models.facility import SystemCategory


@pytest.fixture
def vault(monkeypatch, engine, session_factory):
    """Point the CLI at the in-memory record store."""
    monkeypatch.setattr(cli, "SessionLocal", session_factory)
    monkeypatch.setattr(cli, "init_db", lambda: init_db(bind=engine))
    return session_factory


def run(*argv):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--as-of", "2102-10-23", "--width", "100", *argv])
    return exc.value.code


def test_init_db(vault):
    assert run("init-db") == 0


def test_seed_then_census(vault, capsys):
    assert run("seed", "--population", "30", "--families", "3", "--singles", "2", "--seed", "1") == 0
    seeded = capsys.readouterr().out
    assert "Seeded vault 076:" in seeded

    assert run("census") == 0
    out = capsys.readouterr().out
    assert "=== POPULATION CENSUS ===" in out
    assert "Registry #" in out
    assert "V076-" in out
    assert "Page 1/2" in out


def test_census_second_page(vault, capsys):
    run("seed", "--population", "30", "--seed", "1")
    capsys.readouterr()

    assert run("census", "--page", "2") == 0

    assert "Page 2/2" in capsys.readouterr().out


def test_census_search_without_matches(vault, capsys):
    assert run("census", "--search", "Zzyzx") == 0

    out = capsys.readouterr().out
    assert "Search: Zzyzx" in out
    assert "No residents found." in out


def test_census_rejects_unknown_status(vault):
    assert run("census", "--status", "VACATIONING") == 2


def test_demographics(vault, capsys):
    run("seed", "--population", "40", "--seed", "3")
    capsys.readouterr()

    assert run("demographics", "--years", "3") == 0

    out = capsys.readouterr().out
    assert "=== DEMOGRAPHICS ===" in out
    assert "As of 2102-10-23" in out
    assert "POPULATION PROJECTION" in out
    assert "NOT VIABLE" in out


def test_export_latest_only(vault, capsys, tmp_path):
    run("seed", "--population", "20", "--seed", "5")
    capsys.readouterr()

    assert run("export", "--years", "2", "--output-dir", str(tmp_path), "--latest-only") == 0

    out = capsys.readouterr().out
    assert '"projection_years": 2' in out
    assert '"versioned_json": null' in out
    assert (tmp_path / "vault076_demographics_latest.json").exists()


def test_seeding_twice_fails(vault):
    assert run("seed", "--population", "10") == 0
    assert run("seed", "--population", "10") == 1


def test_failed_connection_exits_nonzero(vault, monkeypatch):
    monkeypatch.setattr(cli, "test_connection", lambda factory: False)

    assert run("init-db") == 1


def test_as_of_defaults_to_vault_clock():
    parser = cli.build_parser()
    args = parser.parse_args(["census"])

    assert args.as_of is None
    assert cli.vault_today().year >= 2077


def test_systems_listing_and_summary(vault, capsys):
    service = FacilityService(vault)
    for code, category in (("PWR-01", SystemCategory.POWER), ("WTR-01", SystemCategory.WATER)):
        service.create_system(
            CreateSystemInput(
                system_code=code,
                name=f"{category.value.title()} Plant",
                category=category,
                location_sector="A",
                location_level=1,
                install_date=date(2102, 1, 1),
            )
        )

    assert run("systems", "--category", "WATER") == 0

    out = capsys.readouterr().out
    assert "=== FACILITY SYSTEMS ===" in out
    assert "Category: WATER" in out
    assert "WTR-01" in out
    assert "PWR-01" not in out
    assert "2 systems | 2 operational" in out
    assert "2 overdue" in out


def test_systems_empty(vault, capsys):
    assert run("systems", "--overdue") == 0

    out = capsys.readouterr().out
    assert "No facility systems found." in out
    assert "0 systems" in out


def test_systems_rejects_unknown_category(vault):
    assert run("systems", "--category", "LAUNDRY") == 2
