"""
VT-UOS Population Console - Command Line Interface

Commands:
1. init-db       Create the record store schema and check connectivity
2. seed          Populate an empty vault with a deterministic founding population
3. census        Print one page of the resident census
4. demographics  Print the demographics report and population projection
5. export        Write the demographics report (JSON) and projection (CSV)
6. systems       List facility systems with a status summary

Usage:
    vtuos init-db
    vtuos seed --population 500 --seed 2077
    vtuos --width 80 census --search Smith --page 2
    vtuos --as-of 2102-10-23 demographics --years 25
    vtuos export --latest-only
    vtuos systems --category POWER --overdue
"""

import argparse
import json
import sys
from datetime import date
from typing import List, Optional

from rich.console import Console

from config.database import SessionLocal, init_db, test_connection
from config.settings import get_settings
from vtuos.export.report_export import run_report_export
from vtuos.facilities.service import FacilityService
from vtuos.models.common import Pagination
from vtuos.models.facility import SystemCategory
from vtuos.models.resident import ResidentStatus
from vtuos.population.service import PopulationService
from vtuos.seed.generator import SeedConfig, SeedGenerator
from vtuos.tui.layout import content_width
from vtuos.tui.views.census import CensusView
from vtuos.tui.views.demographics import DemographicsView
from vtuos.tui.views.facilities import SystemsView
from vtuos.utils.errors import VaultError
from vtuos.utils.logging import setup_logging
from vtuos.utils.time import VaultClock, parse_date, parse_iso8601

logger = setup_logging("vtuos")
settings = get_settings()

MIN_WIDTH = 40


def vault_today() -> date:
    """Current vault date from the simulated clock."""
    clock = VaultClock(parse_iso8601(settings.VAULT_START_DATE), settings.VAULT_TIME_SCALE)
    return clock.now().date()


def _render_width(console: Console, requested: Optional[int]) -> int:
    return content_width(requested or console.width, MIN_WIDTH, settings.MAX_CONTENT_WIDTH)


def _service() -> PopulationService:
    return PopulationService(SessionLocal)


def cmd_init_db(args, console: Console) -> None:
    logger.info("1. Initializing database schema...")
    init_db()
    logger.info("✓ Schema initialized")

    logger.info("2. Testing database connection...")
    if not test_connection(SessionLocal):
        raise VaultError("database connection failed, check DATABASE_URL")
    logger.info("✓ Database connection successful")


def cmd_seed(args, console: Console) -> None:
    config = SeedConfig.from_settings(
        target_population=args.population,
        family_households=args.families,
        single_households=args.singles,
        random_seed=args.seed,
    )
    summary = SeedGenerator(config, SessionLocal).generate()
    console.print(
        f"Seeded vault {config.vault_number:03d}: "
        f"{summary.residents} residents in {summary.households} households",
        highlight=False,
    )


def cmd_census(args, console: Console) -> None:
    view = CensusView(_service(), args.as_of)
    if args.search:
        view.set_search(args.search)
    if args.status:
        view.set_status_filter(ResidentStatus(args.status))
    view.page = Pagination(page=max(args.page, 1), page_size=view.page.page_size)

    view.load()
    console.print(view.render(_render_width(console, args.width)), soft_wrap=True)


def cmd_demographics(args, console: Console) -> None:
    report = _service().demographics_report(args.as_of, args.years)
    view = DemographicsView(report)
    console.print(view.render(_render_width(console, args.width)), soft_wrap=True)


def cmd_export(args, console: Console) -> None:
    result = run_report_export(
        _service().demographics,
        args.as_of,
        years=args.years,
        export_dir=args.output_dir,
        versioned=not args.latest_only,
    )
    console.print_json(json.dumps(result))


def cmd_systems(args, console: Console) -> None:
    service = FacilityService(SessionLocal)
    view = SystemsView(service, args.as_of)
    if args.category:
        view.set_category_filter(SystemCategory(args.category))
    if args.overdue:
        view.set_overdue_only(True)
    view.page = Pagination(page=max(args.page, 1), page_size=view.page.page_size)

    view.load()
    console.print(view.render(_render_width(console, args.width)), soft_wrap=True)

    stats = service.get_facility_stats(args.as_of)
    console.print(
        f"{stats.total_systems} systems | {stats.operational} operational | "
        f"{stats.degraded} degraded | {stats.in_maintenance} in maintenance | "
        f"{stats.offline} offline | {stats.failed} failed | "
        f"avg efficiency {stats.avg_efficiency:.1f}% | {stats.overdue_maintenance} overdue",
        highlight=False,
        soft_wrap=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vtuos",
        description=f"VT-UOS Population Console - {settings.VAULT_DESIGNATION}",
    )
    parser.add_argument(
        "--as-of",
        type=parse_date,
        default=None,
        help="Reference date for ages, YYYY-MM-DD (default: current vault date)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Render width in columns (default: terminal width)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("init-db", help="Create schema and test the connection")
    p.set_defaults(func=cmd_init_db)

    p = subparsers.add_parser("seed", help="Generate the founding population")
    p.add_argument("--population", type=int, help="Target population (default: DESIGNED_CAPACITY)")
    p.add_argument("--families", type=int, help="Family households (default: 100)")
    p.add_argument("--singles", type=int, help="Single households (default: 80)")
    p.add_argument("--seed", type=int, help="Random seed (default: 2077)")
    p.set_defaults(func=cmd_seed)

    p = subparsers.add_parser("census", help="Show the resident census")
    p.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    p.add_argument("--search", type=str, help="Match surname or given names")
    p.add_argument(
        "--status",
        type=str,
        choices=[s.value for s in ResidentStatus],
        help="Only residents with this status",
    )
    p.set_defaults(func=cmd_census)

    p = subparsers.add_parser("demographics", help="Show demographics and projection")
    p.add_argument(
        "--years",
        type=int,
        default=settings.PROJECTION_YEARS,
        help=f"Projection horizon (default: {settings.PROJECTION_YEARS})",
    )
    p.set_defaults(func=cmd_demographics)

    p = subparsers.add_parser("export", help="Export demographics report and projection")
    p.add_argument("--years", type=int, default=settings.PROJECTION_YEARS, help="Projection horizon")
    p.add_argument("--output-dir", type=str, help="Output directory (default: EXPORT_DIR)")
    p.add_argument("--latest-only", action="store_true", help="Only update 'latest' files")
    p.set_defaults(func=cmd_export)

    p = subparsers.add_parser("systems", help="Show facility systems")
    p.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    p.add_argument(
        "--category",
        type=str,
        choices=[c.value for c in SystemCategory],
        help="Only systems in this category",
    )
    p.add_argument("--overdue", action="store_true", help="Only systems overdue for maintenance")
    p.set_defaults(func=cmd_systems)

    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.as_of is None:
        args.as_of = vault_today()

    console = Console()

    logger.info("=" * 60)
    logger.info(f"VT-UOS Population Console - {args.command}")
    logger.info(f"Vault: {settings.VAULT_DESIGNATION} | As of: {args.as_of.isoformat()}")
    logger.info("=" * 60)

    try:
        args.func(args, console)
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)

    except VaultError as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)

    except Exception as e:
        logger.error(f"{args.command} failed with unhandled exception: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
