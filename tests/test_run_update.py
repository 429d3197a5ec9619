"""Tests for src.catalog_pipeline.run_update (full pipeline integration)."""

import json

import pytest

from src.catalog_pipeline.catalog_store import CatalogStore
from src.catalog_pipeline.run_update import run_pipeline
from src.pricing_engine.salary_service import SalaryService

_REQUIRED_METADATA_KEYS = {
    "version", "generated_at", "source",
    "total_competitors", "total_bouts", "total_events", "priced_competitors",
}


# ── Pipeline execution ────────────────────────────────────────────────


class TestRunPipeline:
    """End-to-end tests over the sample CSV exports."""

    @pytest.fixture
    def pipeline_output(self, csv_dir, tmp_path):
        output_dir = tmp_path / "processed"
        output_path = run_pipeline(data_dir=csv_dir, output_dir=output_dir)
        with open(output_path) as f:
            data = json.load(f)
        return data, output_path, output_dir

    def test_pipeline_produces_file(self, pipeline_output):
        _, output_path, _ = pipeline_output
        assert output_path.exists()
        assert output_path.name == "catalog.json"

    def test_metadata_structure(self, pipeline_output):
        data, _, _ = pipeline_output
        assert set(data["metadata"]) == _REQUIRED_METADATA_KEYS
        assert data["metadata"]["total_competitors"] == 5
        assert data["metadata"]["total_bouts"] == 3
        assert data["metadata"]["total_events"] == 1

    def test_priced_counts(self, pipeline_output):
        data, _, _ = pipeline_output
        # bout_3 names a competitor missing from the roster file
        assert data["metadata"]["priced_competitors"] == {"evt_300": 5}

    def test_catalog_round_trip(self, pipeline_output):
        _, output_path, _ = pipeline_output
        store = CatalogStore.from_json_file(output_path)
        event = store.get_event("evt_300")
        assert event.bout_ids == ("bout_1", "bout_2", "bout_3")
        assert event.start_time.tzinfo is not None
        assert store.get_competitor("fighter_champion_alex").is_champion

    def test_salaries_stored(self, pipeline_output):
        _, _, output_dir = pipeline_output
        service = SalaryService(storage_dir=output_dir / "salaries")
        salaries = service.get_salary_map("evt_300")
        assert len(salaries) == 5
        assert all(3500 <= s <= 12000 for s in salaries.values())
        assert salaries["fighter_champion_alex"] == max(salaries.values())


# ── Errors ────────────────────────────────────────────────────────────


class TestPipelineErrors:
    def test_missing_data_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_pipeline(data_dir=tmp_path / "nope", output_dir=tmp_path / "out")
