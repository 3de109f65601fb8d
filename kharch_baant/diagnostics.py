"""
Environment diagnostics command.

Prints the configuration report for an operator before deploying:

    kharch-check-env
    kharch-check-env --environment production --env-file .env.production

Exits 0 when the configuration is valid and 1 otherwise.
"""

import json
from typing import Optional

import click

from kharch_baant.config import CRITICAL_KEY, SettingsLoadError, config_load_settings
from kharch_baant.models.config import GateDecision
from kharch_baant.orchestrator import create_bootstrap_components


def _mark(value: Optional[str]) -> str:
    return "✅ Set" if value and value.strip() else "❌ Missing"


@click.command("check-env")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Dotenv file to merge into the environment.",
)
@click.option(
    "--environment",
    type=click.Choice(["development", "production"]),
    default=None,
    help="Override APP_ENVIRONMENT for this check.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
def check_env(env_file: Optional[str], environment: Optional[str], as_json: bool) -> None:
    """Validate the environment and print missing keys and warnings."""
    try:
        settings = config_load_settings()
    except SettingsLoadError as error:
        raise click.ClickException(str(error)) from error

    overrides = {}
    if env_file is not None:
        overrides["env_file"] = env_file
    if environment is not None:
        overrides["app_environment"] = environment
    if overrides:
        settings = settings.model_copy(update=overrides)

    components = create_bootstrap_components(settings=settings)
    report = components.validator.validate()
    decision = components.gate.decide()

    if as_json:
        payload = report.model_dump()
        payload["gate"] = decision.value
        payload["execution_mode"] = settings.execution_mode.value
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo("🔍 Environment Validation")
        click.echo("=" * 37)
        click.echo(f"Execution mode: {settings.execution_mode.value}")
        click.echo("")
        click.echo(components.validator.get_user_friendly_summary(report))
        click.echo("")
        click.echo("📊 Environment Details:")
        for key, value in report.snapshot.items():
            click.echo(f"- {key}: {_mark(value)}")
        click.echo("")
        if decision is GateDecision.PASSED:
            click.echo("🚀 App gate: passed")
        else:
            click.echo(f"🚫 App gate: blocked ({CRITICAL_KEY} is not set)")

    if not report.is_valid:
        click.get_current_context().exit(1)


def main() -> None:
    check_env()


if __name__ == "__main__":
    main()
