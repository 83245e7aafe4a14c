import json
from pathlib import Path

import typer
from pydantic import ValidationError

from irmc_models.config import settings, tolerance_policy
from irmc_models.errors import StateMappingError
from irmc_models.log import configure_logging
from irmc_models.models import DATA_SOURCE_MODELS, RESOURCE_MODELS, StorageVolumeResourceModel, resource_schema
from irmc_models.quantity import AbsoluteTolerance, CapacityBytes, TolerancePolicy, semantic_equals
from irmc_models.reconcile import DriftDetector
from irmc_models.volume_state import read_volume_state

app = typer.Typer(add_completion=False, help="iRMC Redfish model tools")


@app.callback()
def main(log_json: bool = typer.Option(settings.log_json, "--log-json", help="Emit logs as JSON")):
    configure_logging(json=log_json)


def load_json(path: Path) -> dict:
    try:
        data: dict = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"Error: cannot read {path}: {e}", err=True)
        raise typer.Exit(code=2)
    return data


def configured_policy() -> TolerancePolicy:
    try:
        return tolerance_policy()
    except ValueError as e:
        typer.echo(f"Error: invalid tolerance configuration: {e}", err=True)
        raise typer.Exit(code=2)


@app.command()
def capacity_compare(
    desired: int,
    observed: int,
    tolerance: int = typer.Option(0, "--tolerance", help="Absolute tolerance in bytes, 0 uses the configured policy"),
):
    """Compare two capacities the way volume drift detection does"""
    if tolerance < 0:
        typer.echo("Error: --tolerance must not be negative", err=True)
        raise typer.Exit(code=2)
    policy = AbsoluteTolerance(tolerance) if tolerance else configured_policy()
    try:
        pair = CapacityBytes(desired), CapacityBytes(observed)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    result = semantic_equals(*pair, policy)
    if result:
        typer.echo(f"equal (difference {result.difference} bytes)")
        return
    for diag in result.diagnostics:
        typer.echo(f"{diag.summary}: {diag.detail}", err=True)
    raise typer.Exit(code=1)


@app.command()
def volume_drift(desired_file: Path, volume_file: Path):
    """Report drift between a desired volume record and a Redfish Volume payload"""
    try:
        desired = StorageVolumeResourceModel.model_validate(load_json(desired_file))
    except ValidationError as e:
        typer.echo(f"Error: invalid volume configuration: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        observed = read_volume_state(
            load_json(volume_file), desired.storage_controller_serial_number or "", desired
        )
    except StateMappingError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    report = DriftDetector(configured_policy()).volume_drift(desired, observed)
    typer.echo(json.dumps(report.to_dict(), indent=2))
    if report.has_drift:
        raise typer.Exit(code=1)


@app.command()
def resources(data_sources: bool = typer.Option(False, "--data-sources")):
    """List known resource (or data source) type names"""
    registry = DATA_SOURCE_MODELS if data_sources else RESOURCE_MODELS
    for name in sorted(registry):
        typer.echo(name)


@app.command()
def schema(resource: str, data_source: bool = typer.Option(False, "--data-source")):
    """Print the JSON schema of a resource"""
    try:
        body = resource_schema(resource, data_source=data_source)
    except KeyError as e:
        typer.echo(f"Error: {e.args[0]}", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(body, indent=2))


if __name__ == "__main__":
    app()
