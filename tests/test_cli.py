from __future__ import annotations

import json
from pathlib import Path

import pytest

from bin_packager.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    monkeypatch.delenv("BIN_PACKAGER_HEURISTIC", raising=False)
    monkeypatch.delenv("BIN_PACKAGER_LOG_LEVEL", raising=False)


def write_request(tmp_path: Path, request: dict) -> Path:
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request), encoding="utf-8")
    return path


REQUEST = {
    "bins": [
        {"id": "small", "length": 5, "height": 5, "breadth": 5, "max_weight": 100},
        {"id": "large", "length": 10, "height": 10, "breadth": 10, "max_weight": 100},
    ],
    "items": [
        {"id": "cube", "length": 8, "height": 8, "breadth": 8, "weight": 3},
        {"id": "rod", "length": 20, "height": 1, "breadth": 1},
    ],
}


def test_cli_writes_result_file(tmp_path: Path, capsys) -> None:
    input_path = write_request(tmp_path, REQUEST)
    output_path = tmp_path / "out" / "result.json"

    assert main(["--input", str(input_path), "--output", str(output_path)]) == 0

    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["heuristic"] == "first_fit"
    bins = {b["id"]: b for b in data["bins"]}
    assert bins["small"]["fitted_items"] == []
    assert bins["small"]["unfitted_items"] == ["cube", "rod"]
    assert bins["large"]["fitted_items"][0]["id"] == "cube"
    assert bins["large"]["fitted_items"][0]["position"] == [0.0, 0.0, 0.0]
    assert [i["id"] for i in data["unfitted_items"]] == ["rod"]

    out = capsys.readouterr().out
    assert "Unfitted" in out
    assert "rod" in out


def test_cli_heuristic_flag_overrides_request(tmp_path: Path) -> None:
    input_path = write_request(tmp_path, {**REQUEST, "heuristic": "first_fit"})
    output_path = tmp_path / "result.json"

    assert main([
        "--input", str(input_path),
        "--output", str(output_path),
        "--heuristic", "first_fit_decreasing",
    ]) == 0

    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["heuristic"] == "first_fit_decreasing"
    assert [b["id"] for b in data["bins"]] == ["large", "small"]


def test_cli_prints_json_without_output(tmp_path: Path, capsys) -> None:
    input_path = write_request(tmp_path, REQUEST)

    assert main(["--input", str(input_path)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert [i["id"] for i in data["unfitted_items"]] == ["rod"]


@pytest.mark.parametrize(
    "request_body",
    [
        {"bins": [], "items": [{"id": "a", "length": 1, "height": 1, "breadth": 1}] * 2},
        {"bins": [], "items": [{"id": "a", "length": -1, "height": 1, "breadth": 1}]},
        {"bins": [{"id": "b", "length": 1, "height": 1, "breadth": 1}]},
    ],
)
def test_cli_rejects_invalid_input(tmp_path: Path, request_body: dict) -> None:
    input_path = write_request(tmp_path, request_body)
    output_path = tmp_path / "result.json"

    assert main(["--input", str(input_path), "--output", str(output_path)]) == 2
    assert not output_path.exists()


def test_cli_missing_input_file(tmp_path: Path) -> None:
    assert main(["--input", str(tmp_path / "missing.json")]) == 2


def test_cli_rejects_unknown_log_level(tmp_path: Path) -> None:
    input_path = write_request(tmp_path, REQUEST)

    with pytest.raises(SystemExit) as exc:
        main(["--input", str(input_path), "--log-level", "chatty"])

    assert exc.value.code == 2


def test_cli_log_level_is_case_insensitive(tmp_path: Path) -> None:
    input_path = write_request(tmp_path, REQUEST)

    assert main(["--input", str(input_path), "--log-level", "debug"]) == 0


def test_cli_unwritable_output_returns_error(tmp_path: Path) -> None:
    input_path = write_request(tmp_path, REQUEST)
    not_a_dir = tmp_path / "plain.txt"
    not_a_dir.write_text("", encoding="utf-8")

    assert main(["--input", str(input_path), "--output", str(not_a_dir / "result.json")]) == 2
