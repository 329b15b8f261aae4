import typer
from dotenv import load_dotenv
import logging
import os
import json
import yaml
from typing import Optional

from app_spec import ConfigDecodeError, get_example_configs, validate_config
from app_spec.exceptions import ConfigFileError
from app_spec.loader import load_config_file

load_dotenv()

app = typer.Typer(name="appspec", help="Application config validator CLI")

EXIT_INVALID = 1
EXIT_UNREADABLE = 2

LOG_LEVEL = os.getenv("APPSPEC_LOG_LEVEL", "WARNING")

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.WARNING),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

def _load_or_exit(config: str):
    try:
        return load_config_file(config)
    except (ConfigFileError, ConfigDecodeError) as e:
        typer.echo(f" Error: {e}", err=True)
        raise typer.Exit(EXIT_UNREADABLE)

@app.command()
def validate(
    config: str,
    output_json: bool = typer.Option(False, "--json", help="Print the verdict as JSON")
):
    """Validate an app config from a YAML/JSON file."""
    app_config = _load_or_exit(config)
    report = validate_config(app_config)

    if output_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    elif report.ok:
        typer.echo(f" {config} is valid (build: {app_config.build.strategy})")
    else:
        typer.echo(f" {config} has {len(report)} violation(s):", err=True)
        for line in report.lines():
            typer.echo(f"   {line}", err=True)

    if not report.ok:
        raise typer.Exit(EXIT_INVALID)

@app.command()
def stages(config: str):
    """Show the deployment stages of an app config."""
    app_config = _load_or_exit(config)
    if not app_config.stages:
        typer.echo(" No stages declared, using the default stage")

    for stage in app_config.resolved_stages():
        policy = stage.policy
        if policy is None:
            typer.echo(f"   {stage.name}: (no policy)")
        elif policy.branch is not None:
            typer.echo(f"   {stage.name}: {policy.type} -> {policy.branch.name}")
        else:
            typer.echo(f"   {stage.name}: {policy.type}")

@app.command()
def example(name: Optional[str] = typer.Argument(None)):
    """Print an example app config as YAML. Lists examples when no name is given."""
    examples = get_example_configs()
    if name is None:
        for example_name in sorted(examples):
            typer.echo(example_name)
        return

    if name not in examples:
        typer.echo(f" Example '{name}' not found. Available: {', '.join(sorted(examples))}", err=True)
        raise typer.Exit(1)

    typer.echo(yaml.safe_dump(examples[name], default_flow_style=False, sort_keys=False))

if __name__ == "__main__":
    app()
