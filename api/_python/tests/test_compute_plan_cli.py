"""
Tests for the compute_plan command-line script.
"""

import json

import pytest
from loguru import logger

from compute_plan import main
from helpers import build_plan
from zoneshift.serialization import plan_to_dict


@pytest.fixture(autouse=True)
def reset_logger():
    """main() installs a stderr handler bound to the captured stream."""
    yield
    logger.remove()


class TestComputePlanScript:
    def test_sample_plan_by_default(self, capsys):
        assert main([]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["meta"]["direction"] == "later"
        assert len(output["days"]) == 8

    def test_plan_file(self, tmp_path, capsys):
        plan_file = tmp_path / "plan.json"
        plan_file.write_text(json.dumps(plan_to_dict(build_plan())))
        assert main([str(plan_file)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["display_zone"] == "Asia/Tokyo"
        assert output["days"][-1]["wake_time_local"] == "07:00"

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "not found" in json.loads(capsys.readouterr().out)["error"]

    def test_invalid_json(self, tmp_path, capsys):
        plan_file = tmp_path / "plan.json"
        plan_file.write_text("{not json")
        assert main([str(plan_file)]) == 1
        assert "Invalid JSON" in json.loads(capsys.readouterr().out)["error"]

    def test_invalid_plan(self, tmp_path, capsys):
        data = plan_to_dict(build_plan())
        data["params"]["sleep_hours"] = 30
        plan_file = tmp_path / "plan.json"
        plan_file.write_text(json.dumps(data))
        assert main([str(plan_file)]) == 1
        output = json.loads(capsys.readouterr().out)
        assert output["error"] == "Invalid plan"
        assert "sleep_hours" in output["details"][0]

    def test_too_many_arguments(self, capsys):
        assert main(["a.json", "b.json"]) == 1
        assert "Usage" in json.loads(capsys.readouterr().out)["error"]

    def test_directory_instead_of_file(self, tmp_path, capsys):
        assert main([str(tmp_path)]) == 1
        assert "Plan computation failed" in json.loads(capsys.readouterr().out)["error"]

    def test_undecodable_file(self, tmp_path, capsys):
        plan_file = tmp_path / "plan.json"
        plan_file.write_bytes(b"\xff\xfe\xfa not text")
        assert main([str(plan_file)]) == 1
        assert "error" in json.loads(capsys.readouterr().out)
