"""Integration tests for the analyzer orchestrator."""

import random
from collections import Counter

import orjson
import pytest

from curriculum_engine.core.exceptions import DataDirectoryNotFoundError
from curriculum_engine.core.threadpool import _process_context
from curriculum_engine.pipeline import CurriculumEngine
from curriculum_engine.schemas.findings import Modality
from curriculum_engine.schemas.lesson import Level
from curriculum_engine.services.validate import (
    DuplicateDetector,
    DuplicateDetectorConfig,
    StructuralValidator,
)


class ExplodingValidator(StructuralValidator):
    def validate(self, curriculum):
        raise RuntimeError("validator exploded")


@pytest.mark.integration
class TestCurriculumEngine:
    @pytest.mark.asyncio
    async def test_valid_week_end_to_end(self, engine, write_week, valid_week):
        write_week(5, valid_week)

        report = await engine.run([Level.PRIMARY], week=5)

        assert report.weeks_found == 1
        assert report.total_lessons == 25
        assert report.structural_violations == []
        assert report.distribution_issues == []
        assert report.duplicates == []
        assert report.cross_reference.unmatched == ()
        assert not report.has_blocking_errors
        assert report.is_publishable
        assert len(report.classifications) == 25

    @pytest.mark.asyncio
    async def test_read_aloud_lessons_classified_none(self, engine, write_week, valid_week):
        write_week(5, valid_week)

        report = await engine.run([Level.PRIMARY], week=5)

        none_count = sum(1 for c in report.classifications if c.modality is Modality.NONE)
        assert none_count == 3

    @pytest.mark.asyncio
    async def test_idempotent(self, engine, write_week, week_factory):
        records = week_factory(5)
        records[2]["quarter"] = 3
        records[10]["title"] = records[11]["title"]
        write_week(5, records)

        first = await engine.run([Level.PRIMARY])
        second = await engine.run([Level.PRIMARY])

        assert first.to_json() == second.to_json()

    @pytest.mark.asyncio
    async def test_file_order_does_not_matter(self, tmp_path, pool, week_factory):
        weeks = {w: week_factory(w) for w in (1, 2, 3)}
        reports = []
        for name, order in (("forward", [1, 2, 3]), ("reverse", [3, 2, 1])):
            root = tmp_path / name
            (root / "primary-lessons").mkdir(parents=True)
            (root / "materials.json").write_bytes(b"[]")
            for week in order:
                path = root / "primary-lessons" / f"week-{week:02d}.json"
                path.write_bytes(orjson.dumps(weeks[week]))
            reports.append(await CurriculumEngine(data_dir=root, pool=pool).run())

        assert reports[0].to_json() == reports[1].to_json()
        assert len(reports[0].exact_duplicates) == 25

    @pytest.mark.asyncio
    async def test_record_order_within_week_does_not_matter(self, tmp_path, pool, week_factory):
        records = week_factory(5)
        records[2]["quarter"] = 3
        records[7]["duration_minutes"] = 0
        records[10]["title"] = records[11]["title"]
        records[20]["subject_name"] = "science"
        records[4]["materials_needed"] = ["Pink tower cubes", "Old atlas"]
        shuffled = list(records)
        random.Random(1).shuffle(shuffled)
        inventory = [{"code": "SN001", "name": "Pink Tower"}]

        payloads = []
        for name, week in (("ordered", records), ("shuffled", shuffled)):
            root = tmp_path / name
            (root / "primary-lessons").mkdir(parents=True)
            (root / "materials.json").write_bytes(orjson.dumps(inventory))
            (root / "primary-lessons" / "week-05.json").write_bytes(orjson.dumps(week))
            report = await CurriculumEngine(data_dir=root, pool=pool).run()
            payloads.append(orjson.loads(report.to_json()))

        ordered, reordered = payloads
        for section in ("duplicates", "cross_reference", "distribution_issues"):
            assert ordered[section] == reordered[section]
        violations = [
            Counter((v["kind"], v["message"]) for v in p["structural_violations"]) for p in payloads
        ]
        assert violations[0] == violations[1]
        assert len(ordered["structural_violations"]) == 2
        assert ordered["duplicates"]
        assert ordered["distribution_issues"]

    @pytest.mark.asyncio
    async def test_zero_readable_files(self, engine, data_dir):
        (data_dir / "primary-lessons").mkdir()
        (data_dir / "primary-lessons" / "week-01.json").write_text("not json")

        report = await engine.run()

        assert report.weeks_found == 0
        assert report.total_lessons == 0
        assert len(report.parse_failures) == 1
        assert report.has_blocking_errors
        assert report.cross_reference is None

    @pytest.mark.asyncio
    async def test_empty_data_dir(self, engine):
        report = await engine.run()

        assert report.weeks_found == 0
        assert len(report.missing_weeks["primary"]) == 36
        assert not report.has_blocking_errors

    @pytest.mark.asyncio
    async def test_missing_data_dir_raises(self, tmp_path, pool):
        engine = CurriculumEngine(data_dir=tmp_path / "missing", pool=pool)

        with pytest.raises(DataDirectoryNotFoundError):
            await engine.run()

    @pytest.mark.asyncio
    async def test_crashing_analyzer_is_isolated(self, data_dir, pool, write_week, valid_week):
        write_week(5, valid_week)
        engine = CurriculumEngine(data_dir=data_dir, pool=pool, structural=ExplodingValidator())

        report = await engine.run()

        assert [f.analyzer for f in report.analyzer_failures] == ["structural"]
        assert "validator exploded" in report.analyzer_failures[0].message
        assert report.cross_reference is not None
        assert len(report.classifications) == 25
        assert not report.is_publishable

    @pytest.mark.asyncio
    async def test_classify_only(self, engine, write_week, valid_week):
        write_week(5, valid_week)

        results = await engine.classify()

        assert len(results) == 25
        assert results[0].key == "primary-lessons/week-05/lesson-01"


@pytest.mark.unit
class TestThreadPoolManager:
    @pytest.mark.asyncio
    async def test_run_in_thread_records_stats(self, pool):
        result = await pool.run_in_thread(sorted, [3, 1, 2])

        stats = pool.get_stats()
        assert result == [1, 2, 3]
        assert stats["thread_tasks_submitted"] == 1
        assert stats["thread_tasks_completed"] == 1

    @pytest.mark.asyncio
    async def test_pools_recreated_after_shutdown(self, pool):
        await pool.run_in_thread(len, "abc")
        pool.shutdown()

        assert await pool.run_in_thread(len, "abcd") == 4

    def test_shard_workers_do_not_fork(self):
        assert _process_context().get_start_method() in ("forkserver", "spawn")

    @pytest.mark.slow
    @pytest.mark.asyncio
    async def test_sharded_scan_in_process_pool(self, data_dir, pool, write_week, valid_week):
        valid_week[1]["title"] = "Pouring Water Between Pitcher"
        write_week(5, valid_week)
        serial = await CurriculumEngine(data_dir=data_dir, pool=pool).run(classify=False)
        sharded_engine = CurriculumEngine(
            data_dir=data_dir,
            pool=pool,
            duplicates=DuplicateDetector(DuplicateDetectorConfig(shards=2)),
        )

        sharded = await sharded_engine.run(classify=False)

        assert pool._cpu_executor is not None
        assert sharded.duplicates == serial.duplicates
        assert len(sharded.near_duplicates) == 1
