"""
VT-UOS Population Console - Demographics Export
Writes the demographics report for archival and offline analysis

Outputs:
- exports/vault{NNN}_demographics_latest.json (always current)
- exports/vault{NNN}_demographics_{YYYYMMDD}.json (versioned snapshots)
- exports/vault{NNN}_projection_latest.csv / _{YYYYMMDD}.csv (year-by-year projection)
"""

import hashlib
import json
import os
from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import Optional

import pandas as pd

from config.settings import get_settings
from vtuos.population.demographics import DemographicsEngine, DemographicsReport
from vtuos.utils.logging import get_logger
from vtuos.utils.time import DateLike

logger = get_logger(__name__)
settings = get_settings()

PROJECTION_COLUMNS = ["year", "population", "births", "deaths", "net_change"]


def report_to_dict(report: DemographicsReport, vault_number: int) -> dict:
    """Plain JSON-ready payload of a report."""
    payload = asdict(report)
    payload["as_of"] = report.as_of.isoformat()
    payload["age"]["bands"] = report.age.band_counts()
    payload["metadata"] = {
        "vault_number": vault_number,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "projection_years": len(report.projection.projections),
    }
    return payload


def projection_frame(report: DemographicsReport) -> pd.DataFrame:
    rows = [asdict(point) for point in report.projection.projections]
    return pd.DataFrame(rows, columns=PROJECTION_COLUMNS)


def export_json(payload: dict, output_path: str, indent: Optional[int] = None) -> str:
    logger.info(f"Exporting demographics report to {output_path}")
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=indent)

    file_size = os.path.getsize(output_path)
    logger.info(f"Exported report, file size: {file_size / 1024:.1f} KB")
    return output_path


def export_csv(df: pd.DataFrame, output_path: str) -> str:
    logger.info(f"Exporting projection to {output_path}")
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info(f"Exported {len(df)} projection rows")
    return output_path


def calculate_file_checksum(file_path: str) -> str:
    """SHA256 hex digest of a file."""
    sha256 = hashlib.sha256()

    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256.update(chunk)

    return sha256.hexdigest()


def run_report_export(
    engine: DemographicsEngine,
    as_of: DateLike,
    years: int = None,
    export_dir: str = None,
    vault_number: int = None,
    versioned: bool = True,
) -> dict:
    """
    Compute the demographics report and write it out.

    Args:
        engine: Demographics engine bound to the record store
        as_of: Reference date for ages
        years: Projection horizon (defaults to PROJECTION_YEARS)
        export_dir: Output directory (defaults to EXPORT_DIR)
        vault_number: Used in file names (defaults to VAULT_NUMBER)
        versioned: If True, write a dated snapshot in addition to 'latest'

    Returns:
        Dict with export metadata
    """
    years = settings.PROJECTION_YEARS if years is None else years
    export_dir = export_dir or settings.EXPORT_DIR
    vault_number = vault_number or settings.VAULT_NUMBER
    prefix = f"vault{vault_number:03d}"

    logger.info(f"Starting demographics export (years={years}, versioned={versioned})")

    try:
        report = engine.report(as_of, years)
        payload = report_to_dict(report, vault_number)
        df = projection_frame(report)

        latest_json = export_json(
            payload, os.path.join(export_dir, f"{prefix}_demographics_latest.json")
        )
        latest_csv = export_csv(df, os.path.join(export_dir, f"{prefix}_projection_latest.csv"))

        versioned_json = versioned_csv = None
        if versioned:
            version = date.today().strftime("%Y%m%d")
            versioned_json = export_json(
                payload,
                os.path.join(export_dir, f"{prefix}_demographics_{version}.json"),
                indent=2,
            )
            versioned_csv = export_csv(
                df, os.path.join(export_dir, f"{prefix}_projection_{version}.csv")
            )

        logger.info("Demographics export completed successfully")

        return {
            "as_of": report.as_of.isoformat(),
            "active_population": report.stats.total_active,
            "projection_years": len(df),
            "is_viable": report.projection.viability.is_viable,
            "latest_json": latest_json,
            "latest_csv": latest_csv,
            "versioned_json": versioned_json,
            "versioned_csv": versioned_csv,
            "checksum": calculate_file_checksum(latest_json),
        }

    except Exception as e:
        logger.error(f"Demographics export failed: {e}", exc_info=True)
        raise
