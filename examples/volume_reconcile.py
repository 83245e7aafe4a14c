#!/usr/bin/env python3
"""
Storage volume reconciliation example.

This example walks through what a provider does after creating a volume:
- Build the creation payload from a plan
- Map the Volume resource the controller returns onto the record
- Merge plan and observed state
- Check the result for drift

Environment Variables:
    IRMC_CAPACITY_TOLERANCE_BYTES - Allowed capacity difference (default: 500000000)
    IRMC_TOLERANCE_MODE - absolute, relative or block (default: absolute)
"""

import json

from irmc_models.log import configure_logging
from irmc_models.models import StorageVolumeResourceModel
from irmc_models.reconcile import DriftDetector
from irmc_models.volume_state import merge_volume_state, read_volume_state, volume_create_payload


def main() -> None:
    configure_logging()

    plan = StorageVolumeResourceModel(
        storage_controller_serial_number="SN0123456",
        raid_type="RAID1",
        capacity_bytes=1_000_000_000_000,
        name="data",
        physical_drives=['["0", "1"]'],
        optimum_io_size_bytes=65536,
        read_mode={"requested": "ReadAhead"},
        write_mode={"requested": "WriteBack"},
    )
    print("POST body:", json.dumps(volume_create_payload(plan), indent=2))

    # What the controller reports once the creation task has finished
    created = {
        "@odata.id": "/redfish/v1/Systems/0/Storage/0/Volumes/1",
        "Name": "data",
        "CapacityBytes": 999_999_995_904,
        "RAIDType": "RAID1",
        "OptimumIOSizeBytes": 65536,
        "Oem": {"ts_fujitsu": {"ReadMode": "ReadAhead", "WriteMode": "WriteThrough"}},
    }
    observed = read_volume_state(created, plan.storage_controller_serial_number)
    state = merge_volume_state(plan, observed, created["@odata.id"])
    print("Stored state:", state.model_dump_json(indent=2, exclude={"server"}))

    report = DriftDetector().volume_drift(plan, state)
    print("Drift report:", json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
