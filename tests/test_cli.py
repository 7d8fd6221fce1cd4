from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from builders import element, gen2_block, ia5, record_array, u16, u32
from tachoparse.app.main import ProcessError, process
from tachoparse.scripts import tachoparse

CARD = element(0x050E, 0x00, u32(1700000000))
VU = gen2_block(0x7621, record_array(0x0A, [ia5("WDB9066331S123456", 17)]))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_process_card() -> None:
    doc = json.loads(process(CARD))
    assert doc["card_download_1"] == {"last_card_download": "2023-11-14T22:13:20+00:00"}


def test_process_fatal_diagnostic() -> None:
    with pytest.raises(ProcessError, match="could not parse vu data"):
        process(VU + u16(0x7699), vu=True)


def test_process_hard_failure() -> None:
    with pytest.raises(ProcessError, match="could not parse card"):
        process(CARD + b"\x05")


def test_single_file(runner: CliRunner, tmp_path) -> None:
    src = tmp_path / "driver.ddd"
    src.write_bytes(CARD)
    out = tmp_path / "driver.json"
    result = runner.invoke(tachoparse, ["--card", "--input", str(src), "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text())["card_download_1"]


def test_stdin_to_stdout(runner: CliRunner) -> None:
    result = runner.invoke(tachoparse, ["--vu", "--format"], input=VU)
    assert result.exit_code == 0, result.output
    doc = json.loads(result.stdout)
    assert doc["overview_2"]["vehicle_identification_number"] == ["WDB9066331S123456"]
    assert doc["generation"] == "gen2v1"
    assert "\n  " in result.stdout


def test_single_file_failure(runner: CliRunner, tmp_path) -> None:
    src = tmp_path / "broken.ddd"
    src.write_bytes(CARD[:7])
    result = runner.invoke(tachoparse, ["--card", "--input", str(src)])
    assert result.exit_code == 1


def test_batch(runner: CliRunner, tmp_path) -> None:
    good = tmp_path / "good.ddd"
    good.write_bytes(CARD)
    bad = tmp_path / "bad.ddd"
    bad.write_bytes(CARD[:7])
    listing = tmp_path / "files.txt"
    listing.write_text(f"{good}\n\n{bad}\n{tmp_path / 'missing.ddd'}\n")

    result = runner.invoke(tachoparse, ["--card", "--input-list", str(listing)])
    assert result.exit_code == 0, result.output
    assert json.loads((tmp_path / "good.ddd.json").read_text())["card_kind"] == "card"
    assert not (tmp_path / "bad.ddd.json").exists()


def test_batch_empty_list(runner: CliRunner, tmp_path) -> None:
    listing = tmp_path / "files.txt"
    listing.write_text("\n\n")
    result = runner.invoke(tachoparse, ["--card", "--input-list", str(listing)])
    assert result.exit_code == 1


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["--card", "--vu"],
        ["--card", "--input", "a.ddd", "--input-list", "files.txt"],
    ],
)
def test_usage_errors(runner: CliRunner, args: list[str]) -> None:
    result = runner.invoke(tachoparse, args)
    assert result.exit_code == 2


def test_verify_with_certificates(runner: CliRunner, tmp_path) -> None:
    dataset = tmp_path / "certificates.json"
    dataset.write_text(json.dumps({"version": "t", "gen1": [], "gen2": []}))
    src = tmp_path / "driver.ddd"
    src.write_bytes(CARD + element(0x050E, 0x01, b"\x00" * 128))
    out = tmp_path / "driver.json"
    result = runner.invoke(tachoparse, [
        "--card", "--verify", "--certificates", str(dataset),
        "--input", str(src), "--output", str(out),
    ])
    assert result.exit_code == 0, result.output
    doc = json.loads(out.read_text())
    assert doc["authentication"] == {"card_download_1": "key_not_found"}
