import json
from pathlib import Path

from typer.testing import CliRunner

from kata_toolkit.cli import app


runner = CliRunner()


def test_cli_compass_table():
    r = runner.invoke(app, ["compass"])
    assert r.exit_code == 0, r.output
    assert "NbE" in r.stdout
    assert "348.75" in r.stdout


def test_cli_compass_json():
    r = runner.invoke(app, ["compass", "--format", "json"])
    assert r.exit_code == 0, r.output
    payload = json.loads(r.stdout)
    assert len(payload["result"]) == 32
    assert payload["result"][2] == {"abbreviation": "NNE", "azimuth": 22.5}


def test_cli_zigzag_text():
    r = runner.invoke(app, ["zigzag", "3"])
    assert r.exit_code == 0, r.output
    assert r.stdout.splitlines() == ["0 1 5", "2 4 6", "3 7 8"]


def test_cli_zigzag_json():
    r = runner.invoke(app, ["zigzag", "4", "--format", "json"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.stdout)["result"][3] == [9, 10, 14, 15]


def test_cli_zigzag_negative():
    r = runner.invoke(app, ["zigzag", "--", "-1"])
    assert r.exit_code == 2
    assert "E_ZIGZAG_NEGATIVE_SIZE" in r.output


def test_cli_dominoes_args():
    r = runner.invoke(app, ["dominoes", "0:1", "1:1", "--arrange"])
    assert r.exit_code == 0, r.output
    assert r.stdout.splitlines() == ["true", "0:1 1:1"]


def test_cli_dominoes_file_json():
    r = runner.invoke(app, ["dominoes", "--file", "examples/dominoes-no-row.json", "--format", "json"])
    assert r.exit_code == 0, r.output
    payload = json.loads(r.stdout)
    assert payload["result"] == {"can_make_row": False}


def test_cli_dominoes_file_arrange_json():
    r = runner.invoke(
        app, ["dominoes", "--file", "examples/dominoes.yaml", "--arrange", "--format", "json"]
    )
    assert r.exit_code == 0, r.output
    result = json.loads(r.stdout)["result"]
    assert result["can_make_row"] is True
    row = result["row"]
    assert len(row) == 6
    for (_, right), (left, _) in zip(row, row[1:]):
        assert right == left


def test_cli_dominoes_bad_tile():
    r = runner.invoke(app, ["dominoes", "0:1", "1-1"])
    assert r.exit_code == 2
    assert "E_DOMINO_INVALID_TILE" in r.output
    assert "tiles[1]" in r.output


def test_cli_dominoes_no_input():
    r = runner.invoke(app, ["dominoes"])
    assert r.exit_code == 2
    assert "E_DOMINO_NO_INPUT" in r.output


def test_cli_dominoes_missing_file():
    r = runner.invoke(app, ["dominoes", "--file", "examples/nope.yaml", "--format", "json"])
    assert r.exit_code == 1
    payload = json.loads(r.stdout)
    assert payload["errors"][0]["code"] == "E_FILE_NOT_FOUND"
    assert payload["errors"][0]["source"] == "load"


def test_cli_ranges_args():
    r = runner.invoke(app, ["ranges", "0", "1", "2", "5", "7", "8", "9"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "0-2,5,7-9"


def test_cli_ranges_file():
    r = runner.invoke(app, ["ranges", "--file", "examples/nums.json", "--format", "json"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.stdout)["result"] == "0-2,5,7-9"


def test_cli_ranges_expand():
    r = runner.invoke(app, ["ranges", "--expand", "0-2,5"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "0,1,2,5"


def test_cli_ranges_not_increasing():
    r = runner.invoke(app, ["ranges", "3", "2"])
    assert r.exit_code == 2
    assert "E_RANGES_NOT_INCREASING" in r.output


def test_cli_bad_config(tmp_path: Path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("log_format: xml\n", encoding="utf-8")
    r = runner.invoke(app, ["--config", str(cfg), "compass"])
    assert r.exit_code == 2
    assert "E_CONFIG_INVALID" in r.output


def test_cli_missing_config(tmp_path: Path):
    r = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "compass"])
    assert r.exit_code == 1
    assert "E_CONFIG_FILE_NOT_FOUND" in r.output


def test_cli_config_is_directory(tmp_path: Path):
    r = runner.invoke(app, ["--config", str(tmp_path), "compass"])
    assert r.exit_code == 1
    assert "E_CONFIG_FILE_READ" in r.output
    assert "Traceback" not in r.output


def test_cli_config_not_utf8(tmp_path: Path):
    cfg = tmp_path / "settings.yaml"
    cfg.write_bytes(b"\xff\xfe: 1\n")
    r = runner.invoke(app, ["--config", str(cfg), "compass"])
    assert r.exit_code == 2
    assert "E_CONFIG_INVALID" in r.output
    assert "UTF-8" in r.output


def test_cli_ranges_no_input():
    r = runner.invoke(app, ["ranges"])
    assert r.exit_code == 2
    assert "E_RANGES_NO_INPUT" in r.output


def test_cli_ranges_no_input_json():
    r = runner.invoke(app, ["ranges", "--format", "json"])
    assert r.exit_code == 2
    payload = json.loads(r.stdout)
    assert payload["ok"] is False
    assert payload["errors"][0]["code"] == "E_RANGES_NO_INPUT"
    assert payload["errors"][0]["path"] == "nums"
