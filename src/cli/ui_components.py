"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Cada respuesta se puede mostrar como líneas de texto (formato clásico),
  tabla Rich o JSON, sin que los comandos conozcan los detalles.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Callable, Iterable, Sequence

from pydantic import BaseModel
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from core.domain.models import (
    AcceleratorRange,
    ManifestBundle,
    Model,
    ModelAndServerPair,
    ModelServer,
    ModelServerVersion,
)


class OutputFormat(str, Enum):
    TEXT = "text"
    TABLE = "table"
    JSON = "json"


def format_names(items: Iterable[Model | ModelServer | ModelServerVersion]) -> list[str]:
    """`Name: <name>` por elemento (models, model servers, versions)."""

    return [f"Name: {item.name}" for item in items]


def format_accelerator_range(accelerators: AcceleratorRange) -> list[str]:
    lines = [
        f"Min Tpot Milliseconds: {accelerators.min_tpot_milliseconds}",
        f"Max Tpot Milliseconds: {accelerators.max_tpot_milliseconds}",
        f"Min Throughput Tokens Per Second: {accelerators.min_throughput_tokens_per_second}",
        f"Max Throughput Tokens Per Second: {accelerators.max_throughput_tokens_per_second}",
        f"Min Ntpot Milliseconds: {accelerators.min_ntpot_milliseconds}",
        f"Max Ntpot Milliseconds: {accelerators.max_ntpot_milliseconds}",
    ]
    for option in accelerators.accelerator_options:
        info = option.model_and_model_server_info
        stats = option.performance_stats
        lines.append(f"  Accelerator Type: {option.accelerator_type}")
        lines.append(f"    Model Name: {info.model_name}")
        lines.append(f"    Model Server Name: {info.model_server_name}")
        lines.append(f"    Model Server Version: {info.model_server_version}")
        if option.machine_type:
            lines.append(f"    Machine Type: {option.machine_type}")
        if option.tpu_topology:
            lines.append(f"    Tpu Topology: {option.tpu_topology}")
        lines.append(f"    Accelerator Count: {option.resources_used.accelerator_count}")
        lines.append(f"    Tpot Milliseconds: {stats.tpot_milliseconds}")
        lines.append(f"    Queries Per Second: {stats.queries_per_second}")
        lines.append(f"    Output Tokens Per Second: {stats.output_tokens_per_second}")
        lines.append(f"    Ntpot Milliseconds: {stats.ntpot_milliseconds}")
    return lines


def format_manifest_bundle(bundle: ManifestBundle) -> list[str]:
    lines: list[str] = []
    for manifest in bundle.k8s_manifests:
        lines.append(f"K8s Manifest Kind: {manifest.kind}")
        lines.append(f"K8s Manifest API Version: {manifest.api_version}")
        lines.append(f"K8s Manifest Content: \n{manifest.content}")
    for comment in bundle.comments:
        lines.append(f"Comment: {comment}")
    return lines


def format_models_and_servers(pairs: Iterable[ModelAndServerPair]) -> list[str]:
    return [
        f"Model Name: {pair.model_name}, Model Server Name: {pair.model_server_name}, "
        f"Create Time: {pair.create_time}, Update Time: {pair.update_time}"
        for pair in pairs
    ]


def build_names_table(title: str, items: Iterable[Model | ModelServer | ModelServerVersion]) -> Table:
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    for item in items:
        table.add_row(item.name)
    return table


def build_accelerators_table(accelerators: AcceleratorRange) -> Table:
    """Tabla de opciones de acelerador; los rangos van en el caption."""

    table = Table(
        title="Accelerators",
        caption=(
            f"TPOT {accelerators.min_tpot_milliseconds}-{accelerators.max_tpot_milliseconds} ms • "
            f"NTPOT {accelerators.min_ntpot_milliseconds}-{accelerators.max_ntpot_milliseconds} ms • "
            f"Throughput {accelerators.min_throughput_tokens_per_second}-"
            f"{accelerators.max_throughput_tokens_per_second} tok/s"
        ),
    )
    table.add_column("Accelerator", style="cyan", no_wrap=True)
    table.add_column("Count", justify="right")
    table.add_column("Machine / Topology", style="magenta")
    table.add_column("Model Server", style="white")
    table.add_column("TPOT ms", justify="right")
    table.add_column("NTPOT ms", justify="right")
    table.add_column("QPS", justify="right")
    table.add_column("Out tok/s", justify="right")

    for option in accelerators.accelerator_options:
        info = option.model_and_model_server_info
        stats = option.performance_stats
        placement = " / ".join(p for p in (option.machine_type, option.tpu_topology) if p)
        table.add_row(
            option.accelerator_type,
            str(option.resources_used.accelerator_count),
            placement or "-",
            f"{info.model_server_name} {info.model_server_version}".strip(),
            str(stats.tpot_milliseconds),
            str(stats.ntpot_milliseconds),
            str(stats.queries_per_second),
            str(stats.output_tokens_per_second),
        )
    return table


def build_manifest_panels(bundle: ManifestBundle) -> list[RenderableType]:
    panels: list[RenderableType] = []
    for manifest in bundle.k8s_manifests:
        panels.append(
            Panel(
                Syntax(manifest.content, "yaml", word_wrap=True),
                title=f"{manifest.kind} ({manifest.api_version})",
                border_style="cyan",
            )
        )
    if bundle.comments:
        panels.append(Panel("\n".join(bundle.comments), title="Comments", border_style="yellow"))
    return panels


def build_models_and_servers_table(pairs: Iterable[ModelAndServerPair]) -> Table:
    table = Table(title="Models and Servers")
    table.add_column("Model", style="cyan")
    table.add_column("Model Server", style="white")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")
    for pair in pairs:
        table.add_row(pair.model_name, pair.model_server_name, pair.create_time, pair.update_time)
    return table


def to_json(data: BaseModel | Sequence[BaseModel]) -> str:
    """JSON estable (camelCase, claves ordenadas) de uno o varios registros."""

    payload: Any
    if isinstance(data, BaseModel):
        payload = data.model_dump(mode="json", by_alias=True)
    else:
        payload = [item.model_dump(mode="json", by_alias=True) for item in data]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def emit(
    console: Console,
    output_format: OutputFormat,
    data: BaseModel | Sequence[BaseModel],
    *,
    text: Callable[[], list[str]],
    table: Callable[[], RenderableType | list[RenderableType]],
) -> None:
    """Imprime `data` en el formato pedido.

    El formato texto se escribe tal cual en `console.file`: Rich expandiría
    tabs y descartaría los retornos de carro, y el contenido de un manifest es dato.
    """

    if output_format is OutputFormat.JSON:
        console.print(to_json(data), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return
    if output_format is OutputFormat.TABLE:
        rendered = table()
        for renderable in rendered if isinstance(rendered, list) else [rendered]:
            console.print(renderable)
        return
    for line in text():
        console.file.write(line + "\n")
    console.file.flush()
