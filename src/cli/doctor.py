"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.recommender_api import RecommenderClient
from core.config import get_user_env_file, load_settings, write_user_env_vars
from core.domain.auth_mode import AuthMode
from core.errors import ConfigurationError, RecommenderError
from core.logging_setup import configure_logging

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(client: RecommenderClient) -> tuple[bool, str]:
    try:
        models = client.list_models()
    except RecommenderError as exc:
        return False, str(exc)
    return True, f"{len(models)} models available"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    table = Table(title="Recommender CLI Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        table.add_row("Config", "FAIL", str(exc))
        _console.print(table)
        _console.print("\n[yellow]Hint:[/yellow] run `mock-gcloud doctor setup` or export BASE_URL.")
        raise typer.Exit(code=1)

    configure_logging(level=settings.log_level)
    table.add_row("BASE_URL", "OK", settings.base_url)
    table.add_row("Auth mode", "OK", settings.resolved_auth_mode.label())
    if settings.resolved_auth_mode is AuthMode.ADC:
        table.add_row("PROJECT_ID", "OK", settings.project_id or "")

    try:
        client = RecommenderClient(settings)
    except ConfigurationError as exc:
        table.add_row("Credentials", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1)

    with client:
        try:
            client.credentials.auth_headers()
            table.add_row("Credentials", "OK", "Ready")
        except RecommenderError as exc:
            table.add_row("Credentials", "FAIL", str(exc))

        # Connectivity (best-effort)
        ok_api, detail_api = _check_api(client)
        table.add_row("API reachability", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)
    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    base_url = typer.prompt("Recommender API base URL").strip()
    if not base_url:
        raise typer.BadParameter("base URL is required")

    mode = typer.prompt(
        "Auth mode (adc/api_key)",
        default=AuthMode.ADC.value,
        show_default=True,
    ).strip().lower()

    values: dict[str, str | None] = {"BASE_URL": base_url, "AUTH_MODE": mode}
    if mode == AuthMode.API_KEY.value:
        values["API_KEY"] = typer.prompt("API key", hide_input=True).strip()
    elif mode == AuthMode.ADC.value:
        values["PROJECT_ID"] = typer.prompt("Project ID").strip()
    else:
        raise typer.BadParameter(f"unknown auth mode: {mode}")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
