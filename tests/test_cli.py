"""Tests for the command line front-end."""

import json
from pathlib import Path

import pytest

from roomroute.cli import main
from roomroute.config import Config

CAMPUS = str(Path(__file__).resolve().parent.parent / "examples" / "campus" / "campus.json")


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setenv("ROOMROUTE_NO_COLOR", "1")


def test_json_route_output(capsys):
    code = main([CAMPUS, "--target", "library", "--start", "1", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "safe"
    assert payload["optimalRoute"] == ["Lobby", "East Corridor", "Library"]
    assert payload["allRoutes"][0]["isOptimal"] is True


def test_text_report_for_blocked_route(capsys):
    code = main([CAMPUS, "--target", "Lab 2"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Route BLOCKED" in out
    assert "Lab 2 25/25" in out


def test_ratio_policy_flag(capsys):
    code = main([CAMPUS, "--target", "cafeteria", "--policy", "ratio", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "blocked"
    assert "Cafeteria" in payload["blockedRooms"]


def test_verbose_traces_stages(capsys):
    code = main([CAMPUS, "--target", "library", "--verbose"])

    out = capsys.readouterr().out
    assert code == 0
    assert "[Pathfinding] enumerating" in out
    assert "[Pathfinding] done" in out


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--target", "lab"], 3),
        (["--target", "annex"], 4),
        ([], 2),
        (["--target", "library", "--start", "99"], 3),
        (["--target", "library", "--max-depth", "0"], 2),
    ],
)
def test_failures_map_to_exit_codes(argv, expected, capsys):
    assert main([CAMPUS, *argv]) == expected
    assert "[x]" in capsys.readouterr().out


def test_missing_snapshot_fails(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json"), "--target", "lab"]) == 1


def test_inconsistent_config_is_rejected_before_routing(monkeypatch, capsys):
    monkeypatch.setattr(Config, "LENGTH_WEIGHT", 0.9)

    assert main([CAMPUS, "--target", "library", "--json"]) == 1

    out = capsys.readouterr().out
    assert "must sum to 1.0" in out
    assert "optimalRoute" not in out


def test_graph_mode(capsys):
    assert main([CAMPUS, "--graph"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"] == {"totalNodes": 9, "totalEdges": 10}
    assert payload["graphStructure"]["9"]["neighbors"] == []


def test_rooms_mode(capsys):
    assert main([CAMPUS, "--rooms"]) == 0

    out = capsys.readouterr().out
    assert "Lab 2" in out
    assert "25/25 (100.0%)" in out
    assert "red" in out


def test_health_mode(tmp_path, capsys):
    assert main([CAMPUS, "--health"]) == 0
    assert json.loads(capsys.readouterr().out)["status"] == "operational"

    assert main([str(tmp_path / "missing.json"), "--health"]) == 1
    assert json.loads(capsys.readouterr().out)["status"] == "degraded"
