"""Run the complete catalog pipeline.

Usage:
    python -m src.catalog_pipeline.run_update [data_dir] [output_dir]

Examples:
    python -m src.catalog_pipeline.run_update
    python -m src.catalog_pipeline.run_update /path/to/csvs /path/to/output
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from src.catalog_pipeline.cleaning import CatalogCleaner
from src.catalog_pipeline.config import CATALOG_FILENAME, PROCESSED_DATA_DIR, RAW_DATA_DIR
from src.catalog_pipeline.ingestion import CatalogIngester
from src.catalog_pipeline.transformation import CatalogTransformer
from src.logging_config import setup_logging
from src.pricing_engine.salary_service import SalaryService

logger = logging.getLogger(__name__)


def run_pipeline(
    data_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    force_pricing: bool = False,
) -> Path:
    """Run the complete catalog pipeline.

    Args:
        data_dir: Directory containing the raw CSVs.
            Defaults to ``data/raw``.
        output_dir: Directory for JSON output (salaries go in a
            ``salaries`` subdirectory). Defaults to ``data/processed/``.
        force_pricing: Regenerate salaries even if the stored ones are current.

    Returns:
        Path to the generated catalog JSON file.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR

    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Starting catalog pipeline (data: %s)", data_dir)

    # 1. Ingest
    logger.info("Step 1/5: Ingesting CSV files...")
    raw = CatalogIngester(data_dir).read_all()
    logger.info(
        "Loaded: %d competitors, %d bouts, %d events",
        len(raw["competitors"]), len(raw["bouts"]), len(raw["events"]),
    )

    # 2. Clean
    logger.info("Step 2/5: Cleaning data...")
    cleaned = CatalogCleaner().clean_all(raw)

    # 3. Transform
    logger.info("Step 3/5: Building catalog records...")
    catalog = CatalogTransformer().transform(cleaned)

    # 4. Price
    logger.info("Step 4/5: Pricing event cards...")
    salary_service = SalaryService(storage_dir=output_dir / "salaries")
    priced_counts: Dict[str, int] = {}
    for event_id in sorted(catalog.events):
        priced = salary_service.generate_salaries(
            event_id,
            catalog.get_bouts_for_event(event_id),
            catalog.get_competitors_for_event(event_id),
            force=force_pricing,
        )
        priced_counts[event_id] = len(priced)

    # 5. Output JSON
    logger.info("Step 5/5: Generating JSON output...")
    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": str(data_dir),
            "total_competitors": len(catalog.competitors),
            "total_bouts": len(catalog.bouts),
            "total_events": len(catalog.events),
            "priced_competitors": priced_counts,
        },
        "catalog": catalog.to_dict(),
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / CATALOG_FILENAME

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2)

    logger.info("Pipeline complete! Output: %s", output_file)
    logger.info(
        "  Priced: %s",
        ", ".join(f"{k}={v}" for k, v in sorted(priced_counts.items())) or "none",
    )

    return output_file


if __name__ == "__main__":
    setup_logging()

    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_pipeline(data_dir, output_dir)
        print(f"Pipeline complete: {output}")
    except Exception:
        logger.exception("Pipeline failed")
        sys.exit(1)
