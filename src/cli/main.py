"""CLI principal (Typer).

Reproduce el árbol de `gcloud container ai recommender ...`:

    mock-gcloud container ai recommender models list
    mock-gcloud container ai recommender model-servers list --model M
    mock-gcloud container ai recommender manifests create --model M ...

Cada comando carga la configuración, construye un `RecommenderClient`, hace
una única petición e imprime el resultado. Cualquier error termina con exit
code 1.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Iterator, NoReturn, Optional

import typer
from rich.console import Console

from adapters.recommender_api import RecommenderClient
from cli import doctor
from cli.ui_components import (
    OutputFormat,
    build_accelerators_table,
    build_manifest_panels,
    build_models_and_servers_table,
    build_names_table,
    emit,
    format_accelerator_range,
    format_manifest_bundle,
    format_models_and_servers,
    format_names,
)
from core.config import AppSettings, load_settings
from core.errors import ConfigurationError, RecommenderError
from core.logging_setup import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    help="A mock gcloud CLI for interacting with the AI Recommender API",
)
container_app = typer.Typer(no_args_is_help=True, help="Manage container resources")
ai_app = typer.Typer(no_args_is_help=True, help="Manage AI resources")
recommender_app = typer.Typer(no_args_is_help=True, help="Manage AI recommender resources")

models_app = typer.Typer(no_args_is_help=True, help="Manage models")
model_servers_app = typer.Typer(no_args_is_help=True, help="Manage model servers")
model_server_versions_app = typer.Typer(no_args_is_help=True, help="Manage model server versions")
accelerators_app = typer.Typer(no_args_is_help=True, help="Manage accelerators")
manifests_app = typer.Typer(no_args_is_help=True, help="Manage manifests")
models_and_servers_app = typer.Typer(no_args_is_help=True, help="Manage models and servers")

recommender_app.add_typer(models_app, name="models")
recommender_app.add_typer(model_servers_app, name="model-servers")
recommender_app.add_typer(model_server_versions_app, name="model-server-versions")
recommender_app.add_typer(accelerators_app, name="accelerators")
recommender_app.add_typer(manifests_app, name="manifests")
recommender_app.add_typer(models_and_servers_app, name="modelsAndServers")
ai_app.add_typer(recommender_app, name="recommender")
container_app.add_typer(ai_app, name="ai")
app.add_typer(container_app, name="container")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


class Verbosity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class CliState:
    verbosity: Optional[Verbosity] = None


ModelOption = Annotated[str, typer.Option("--model", help="Model name")]
ModelServerOption = Annotated[str, typer.Option("--model-server", help="Model server name")]
ModelServerVersionOption = Annotated[
    str, typer.Option("--model-server-version", help="Model server version")
]
AcceleratorTypeOption = Annotated[str, typer.Option("--accelerator-type", help="Accelerator type")]
TargetNtpotOption = Annotated[
    int,
    typer.Option(
        "--target-ntpot-milliseconds",
        help="Target NTPOT milliseconds (0 = let the service choose)",
    ),
]
FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", case_sensitive=False, help="Output format: text, table or json"),
]


def build_recommender_client(settings: AppSettings) -> RecommenderClient:
    return RecommenderClient(settings)


def _fail(message: str) -> NoReturn:
    _err_console.print(message, markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)


def _open_client(ctx: typer.Context) -> RecommenderClient:
    state = ctx.ensure_object(CliState)
    settings = load_settings()
    level = state.verbosity.value if state.verbosity else settings.log_level
    configure_logging(level=level)
    return build_recommender_client(settings)


@contextmanager
def _recommender(ctx: typer.Context, action: str) -> Iterator[RecommenderClient]:
    """Abre el cliente y traduce cualquier `RecommenderError` a exit code 1."""

    try:
        client = _open_client(ctx)
    except ConfigurationError as exc:
        _fail(f"Configuration error: {exc}")

    try:
        with client:
            yield client
    except RecommenderError as exc:
        _fail(f"Error {action}: {exc}")


@app.callback()
def main(
    ctx: typer.Context,
    verbosity: Annotated[
        Optional[Verbosity],
        typer.Option("--verbosity", case_sensitive=False, help="Log level (overrides LOG_LEVEL)"),
    ] = None,
) -> None:
    """A mock gcloud CLI for interacting with the AI Recommender API."""

    ctx.obj = CliState(verbosity=verbosity)


@models_app.command("list")
def list_models(ctx: typer.Context, output_format: FormatOption = OutputFormat.TEXT) -> None:
    """List models."""

    with _recommender(ctx, "listing models") as client:
        models = client.list_models()
    emit(
        _console,
        output_format,
        models,
        text=lambda: format_names(models),
        table=lambda: build_names_table("Models", models),
    )


@model_servers_app.command("list")
def list_model_servers(
    ctx: typer.Context,
    model: ModelOption,
    output_format: FormatOption = OutputFormat.TEXT,
) -> None:
    """List model servers."""

    with _recommender(ctx, "listing model servers") as client:
        servers = client.list_model_servers(model)
    emit(
        _console,
        output_format,
        servers,
        text=lambda: format_names(servers),
        table=lambda: build_names_table("Model Servers", servers),
    )


@model_server_versions_app.command("list")
def list_model_server_versions(
    ctx: typer.Context,
    model: ModelOption,
    model_server: ModelServerOption,
    output_format: FormatOption = OutputFormat.TEXT,
) -> None:
    """List model server versions."""

    with _recommender(ctx, "listing model server versions") as client:
        versions = client.list_model_server_versions(model, model_server)
    emit(
        _console,
        output_format,
        versions,
        text=lambda: format_names(versions),
        table=lambda: build_names_table("Model Server Versions", versions),
    )


@accelerators_app.command("list")
def list_accelerators(
    ctx: typer.Context,
    model: ModelOption,
    model_server: ModelServerOption,
    output_format: FormatOption = OutputFormat.TEXT,
) -> None:
    """List accelerators."""

    with _recommender(ctx, "listing accelerators") as client:
        accelerators = client.list_accelerators(model, model_server)
    emit(
        _console,
        output_format,
        accelerators,
        text=lambda: format_accelerator_range(accelerators),
        table=lambda: build_accelerators_table(accelerators),
    )


@manifests_app.command("create")
def create_manifest(
    ctx: typer.Context,
    model: ModelOption,
    model_server: ModelServerOption,
    model_server_version: ModelServerVersionOption,
    accelerator_type: AcceleratorTypeOption,
    target_ntpot_milliseconds: TargetNtpotOption = 0,
    output_format: FormatOption = OutputFormat.TEXT,
) -> None:
    """Create a manifest."""

    with _recommender(ctx, "creating manifest") as client:
        bundle = client.create_manifest(
            model,
            model_server,
            model_server_version,
            accelerator_type,
            target_ntpot_milliseconds,
        )
    emit(
        _console,
        output_format,
        bundle,
        text=lambda: format_manifest_bundle(bundle),
        table=lambda: build_manifest_panels(bundle),
    )


@models_and_servers_app.command("list")
def list_models_and_servers(ctx: typer.Context, output_format: FormatOption = OutputFormat.TEXT) -> None:
    """List models and servers."""

    with _recommender(ctx, "listing models and servers") as client:
        pairs = client.list_models_and_servers()
    emit(
        _console,
        output_format,
        pairs,
        text=lambda: format_models_and_servers(pairs),
        table=lambda: build_models_and_servers_table(pairs),
    )


def run() -> None:
    """Entry point del script `mock-gcloud`."""

    app(prog_name="mock-gcloud")


if __name__ == "__main__":
    run()
