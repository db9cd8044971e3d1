import json

import pytest
from click.testing import CliRunner

from warden.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_check_reports_rogue(runner, scan_file, registry_file):
    result = runner.invoke(
        cli, ["check", "--scan", str(scan_file), "--input", str(registry_file)], obj={}
    )
    assert result.exit_code == 0, result.output
    assert "11:22:33:44:55:66" in result.output
    assert "EvilTwin" in result.output


def test_check_strict_exits_one_on_rogue(runner, scan_file, registry_file):
    result = runner.invoke(
        cli,
        ["check", "-s", str(scan_file), "-i", str(registry_file), "--strict"],
        obj={},
    )
    assert result.exit_code == 1


def test_check_strict_exits_zero_when_clean(runner, tmp_path, registry_file):
    scan = tmp_path / "scan.txt"
    scan.write_text("BSS aa:bb:cc:dd:ee:ff(on wlan0)\n\tSSID: HomeNet\n", encoding="utf-8")
    result = runner.invoke(
        cli, ["check", "-s", str(scan), "-i", str(registry_file), "--strict"], obj={}
    )
    assert result.exit_code == 0, result.output


def test_check_reads_stdin(runner, registry_file, scan_dump_text):
    result = runner.invoke(
        cli,
        ["--quiet", "check", "-s", "-", "-i", str(registry_file), "--strict"],
        input=scan_dump_text,
        obj={},
    )
    assert result.exit_code == 1


def test_check_writes_report(runner, scan_file, registry_file, tmp_path):
    out = tmp_path / "report.json"
    result = runner.invoke(
        cli,
        ["--quiet", "check", "-s", str(scan_file), "-i", str(registry_file), "-o", str(out)],
        obj={},
    )
    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8"))["summary"]["processed"] == 2


def test_check_missing_scan_dump_still_succeeds(runner, tmp_path):
    result = runner.invoke(
        cli, ["--quiet", "check", "-s", str(tmp_path / "missing.txt")], obj={}
    )
    assert result.exit_code == 0


def test_check_without_scan_is_usage_error(runner, tmp_path):
    config = tmp_path / "config.toml"
    config.write_text("[warden]\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(config), "check"], obj={})
    assert result.exit_code == 2


def test_missing_explicit_config_exits_one(runner, tmp_path, scan_file):
    result = runner.invoke(
        cli, ["--config", str(tmp_path / "nope.toml"), "check", "-s", str(scan_file)], obj={}
    )
    assert result.exit_code == 1
    assert "Configuration file not found" in result.output


def test_config_supplies_sources(runner, tmp_path, scan_file, registry_file):
    config = tmp_path / "config.toml"
    config.write_text(
        "[warden]\n"
        f"scan_file = {json.dumps(str(scan_file))}\n"
        f"registry_source = {json.dumps(str(registry_file))}\n"
        "strict = true\n",
        encoding="utf-8",
    )
    result = runner.invoke(cli, ["--quiet", "--config", str(config), "check"], obj={})
    assert result.exit_code == 1


def test_records_command(runner, scan_file):
    result = runner.invoke(cli, ["records", "-s", str(scan_file)], obj={})
    assert result.exit_code == 0, result.output
    assert "HomeNet" in result.output
    assert "EvilTwin" in result.output


def test_records_missing_file(runner, tmp_path):
    result = runner.invoke(cli, ["records", "-s", str(tmp_path / "missing.txt")], obj={})
    assert result.exit_code == 1


def test_registry_command(runner, registry_file):
    result = runner.invoke(cli, ["registry", "-i", str(registry_file)], obj={})
    assert result.exit_code == 0, result.output
    assert "aa:bb:cc:dd:ee:ff" in result.output
    assert "HomeNet" in result.output


def test_registry_missing_file(runner, tmp_path):
    result = runner.invoke(cli, ["registry", "-i", str(tmp_path / "missing.txt")], obj={})
    assert result.exit_code == 1


def test_registry_command_uses_registry_encoding(runner, tmp_path):
    registry = tmp_path / "latin1.txt"
    registry.write_bytes("aa:bb:cc:dd:ee:ff;Café\n".encode("latin-1"))
    config = tmp_path / "config.toml"
    config.write_text(
        '[warden]\nregistry_encoding = "latin-1"\nscan_encoding = "utf-8"\n',
        encoding="utf-8",
    )
    result = runner.invoke(
        cli, ["--config", str(config), "registry", "-i", str(registry)], obj={}
    )
    assert result.exit_code == 0, result.output
    assert "Café" in result.output
