"""Tests for the command-line entry point."""

import orjson
import pytest

from curriculum_engine.cli import EXIT_BLOCKING, EXIT_NO_DATA, EXIT_OK, build_parser, main


@pytest.mark.integration
class TestExitCodes:
    def test_clean_week_exits_zero(self, data_dir, write_week, valid_week, capsys):
        write_week(5, valid_week)

        code = main(["--data-dir", str(data_dir), "--week", "5"])

        assert code == EXIT_OK
        assert "ALL CHECKS PASSED" in capsys.readouterr().out

    def test_blocking_errors_exit_one(self, data_dir, write_week, valid_week):
        write_week(5, valid_week[:24])

        assert main(["--data-dir", str(data_dir)]) == EXIT_BLOCKING

    def test_advisory_only_exits_zero(self, data_dir, write_week, valid_week):
        valid_week[0]["day_of_week"] = 2
        write_week(5, valid_week)

        assert main(["--data-dir", str(data_dir), "--week", "5"]) == EXIT_OK

    def test_missing_data_dir_exits_two(self, tmp_path, capsys):
        code = main(["--data-dir", str(tmp_path / "missing")])

        assert code == EXIT_NO_DATA
        assert "not found" in capsys.readouterr().err


@pytest.mark.integration
class TestOutputs:
    def test_json_report(self, data_dir, write_week, valid_week, tmp_path):
        write_week(5, valid_week)
        out = tmp_path / "report.json"

        main(["--data-dir", str(data_dir), "--json", str(out)])

        payload = orjson.loads(out.read_bytes())
        assert payload["summary"]["total_lessons"] == 25

    def test_classify_output(self, data_dir, write_week, valid_week, tmp_path):
        write_week(5, valid_week)
        out = tmp_path / "classifications.json"

        code = main(["classify", "--data-dir", str(data_dir), "--output", str(out)])

        payload = orjson.loads(out.read_bytes())
        assert code == EXIT_OK
        assert len(payload) == 25
        assert payload["primary-lessons/week-05/lesson-16"]["modality"] == "NONE"


@pytest.mark.unit
def test_week_argument_bounds():
    parser = build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["--week", "37"])
    assert parser.parse_args(["--level", "all"]).level == "all"
