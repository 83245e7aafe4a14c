import json

import pytest
from typer.testing import CliRunner

from irmc_cli.__main__ import app
from irmc_models.config import settings

runner = CliRunner()

VOLUME = {
    "@odata.id": "/redfish/v1/Systems/0/Storage/0/Volumes/1",
    "Name": "data",
    "CapacityBytes": 1_000_000_000_400,
    "RAIDType": "RAID1",
    "OptimumIOSizeBytes": 65536,
    "Oem": {"ts_fujitsu": {"ReadMode": "ReadAhead", "WriteMode": "WriteBack", "DriveCacheMode": "Enabled"}},
}


@pytest.fixture
def volume_file(tmp_path):
    path = tmp_path / "volume.json"
    path.write_text(json.dumps(VOLUME))
    return path


def write_desired(tmp_path, **fields):
    desired = {"storage_controller_serial_number": "SN1", "raid_type": "RAID1"}
    desired.update(fields)
    path = tmp_path / "desired.json"
    path.write_text(json.dumps(desired))
    return path


def test_capacity_compare_equal():
    result = runner.invoke(app, ["capacity-compare", "1000000000000", "1000000000400"])
    assert result.exit_code == 0
    assert "difference 400 bytes" in result.output


def test_capacity_compare_drift():
    result = runner.invoke(app, ["capacity-compare", "1000000000000", "1000600000000"])
    assert result.exit_code == 1
    assert "600000000" in result.output
    assert "500000000" in result.output


def test_capacity_compare_custom_tolerance():
    result = runner.invoke(
        app, ["capacity-compare", "1000000000000", "1000600000000", "--tolerance", "700000000"]
    )
    assert result.exit_code == 0


def test_capacity_compare_negative_tolerance():
    result = runner.invoke(app, ["capacity-compare", "1", "2", "--tolerance", "-5"])
    assert result.exit_code == 2


def test_volume_drift_none(tmp_path, volume_file):
    desired = write_desired(tmp_path, capacity_bytes=1_000_000_000_000, read_mode={"requested": "ReadAhead"})
    result = runner.invoke(app, ["volume-drift", str(desired), str(volume_file)])
    assert result.exit_code == 0
    assert '"drift": false' in result.output


def test_volume_drift_detected(tmp_path, volume_file):
    desired = write_desired(tmp_path, capacity_bytes=999_000_000_000, name="logs")
    result = runner.invoke(app, ["volume-drift", str(desired), str(volume_file)])
    assert result.exit_code == 1
    assert '"drift": true' in result.output
    assert '"field": "capacity_bytes"' in result.output
    assert '"field": "name"' in result.output


def test_volume_drift_invalid_desired(tmp_path, volume_file):
    desired = write_desired(tmp_path, raid_type="RAID7")
    result = runner.invoke(app, ["volume-drift", str(desired), str(volume_file)])
    assert result.exit_code == 2


def test_volume_drift_unreadable_payload(tmp_path):
    desired = write_desired(tmp_path)
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    result = runner.invoke(app, ["volume-drift", str(desired), str(broken)])
    assert result.exit_code == 2


def test_volume_drift_unmappable_payload(tmp_path):
    desired = write_desired(tmp_path)
    payload = tmp_path / "volume.json"
    payload.write_text(json.dumps({"Name": "no id"}))
    result = runner.invoke(app, ["volume-drift", str(desired), str(payload)])
    assert result.exit_code == 2


def test_resources():
    result = runner.invoke(app, ["resources"])
    assert result.exit_code == 0
    assert "irmc-redfish_storage_volume" in result.output.splitlines()

    result = runner.invoke(app, ["resources", "--data-sources"])
    assert "irmc-redfish_firmware_inventory" in result.output.splitlines()


def test_schema():
    result = runner.invoke(app, ["schema", "storage_volume"])
    assert result.exit_code == 0
    assert "capacity_bytes" in result.output


def test_schema_unknown():
    result = runner.invoke(app, ["schema", "toaster"])
    assert result.exit_code == 1


def test_capacity_compare_bad_tolerance_mode(monkeypatch):
    monkeypatch.setattr(settings, "tolerance_mode", "bogus")
    result = runner.invoke(app, ["capacity-compare", "1", "2"])
    assert result.exit_code == 2
    assert "bogus" in result.output


def test_volume_drift_bad_tolerance_mode(monkeypatch, tmp_path, volume_file):
    monkeypatch.setattr(settings, "tolerance_mode", "bogus")
    desired = write_desired(tmp_path, capacity_bytes=1_000_000_000_000)
    result = runner.invoke(app, ["volume-drift", str(desired), str(volume_file)])
    assert result.exit_code == 2
