"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Cada endpoint se valida directamente contra su esquema, sin árbol JSON
  genérico intermedio.
- Los alias camelCase reflejan el JSON del servicio; en Python usamos
  snake_case.

Nota:
- El servicio omite los valores cero (estilo proto3 JSON), por eso los campos
  ausentes (o `null`) toman "", 0 o lista vacía. Un tipo incorrecto sí es un
  error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class _Record(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
        protected_namespaces=(),
    )

    @model_validator(mode="before")
    @classmethod
    def _null_as_absent(cls, data: Any) -> Any:
        # `null` equivale a un campo ausente: toma su valor cero.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Model(_Record):
    """Modelo servible (p.ej. 'google/gemma-2-9b-it')."""

    name: str = Field(..., description="Nombre del modelo.")


class ModelServer(_Record):
    """Servidor de modelos (p.ej. 'vllm', 'tgi')."""

    name: str = Field(..., description="Nombre del servidor de modelos.")


class ModelServerVersion(_Record):
    name: str = Field(..., description="Versión del servidor de modelos.")


class ModelAndModelServerInfo(_Record):
    model_name: str = Field(default="", alias="modelName")
    model_server_name: str = Field(default="", alias="modelServerName")
    model_server_version: str = Field(default="", alias="modelServerVersion")


class ResourcesUsed(_Record):
    accelerator_count: int = Field(default=0, alias="acceleratorCount")


class PerformanceStats(_Record):
    tpot_milliseconds: int = Field(
        default=0,
        alias="tpotMilliseconds",
        description="Time per output token (ms).",
    )
    queries_per_second: int = Field(default=0, alias="queriesPerSecond")
    output_tokens_per_second: int = Field(default=0, alias="outputTokensPerSecond")
    ntpot_milliseconds: int = Field(
        default=0,
        alias="ntpotMilliseconds",
        description="Normalized time per output token (ms).",
    )


class AcceleratorOption(_Record):
    """Una combinación acelerador + modelo + servidor con sus métricas."""

    accelerator_type: str = Field(default="", alias="acceleratorType")
    model_and_model_server_info: ModelAndModelServerInfo = Field(
        default_factory=ModelAndModelServerInfo,
        alias="modelAndModelServerInfo",
    )
    machine_type: str | None = Field(default=None, alias="machineType")
    tpu_topology: str | None = Field(default=None, alias="tpuTopology")
    resources_used: ResourcesUsed = Field(default_factory=ResourcesUsed, alias="resourcesUsed")
    performance_stats: PerformanceStats = Field(
        default_factory=PerformanceStats,
        alias="performanceStats",
    )


class AcceleratorRange(_Record):
    """Respuesta de `/v1alpha1/accelerators`: rangos agregados + opciones.

    Por qué un único modelo:
    - Los límites (min/max) describen el conjunto de `accelerator_options`;
      separarlos perdería el contexto al imprimir.
    """

    min_tpot_milliseconds: int = Field(default=0, alias="minTpotMilliseconds")
    max_tpot_milliseconds: int = Field(default=0, alias="maxTpotMilliseconds")
    min_throughput_tokens_per_second: int = Field(default=0, alias="minThroughputTokensPerSecond")
    max_throughput_tokens_per_second: int = Field(default=0, alias="maxThroughputTokensPerSecond")
    min_ntpot_milliseconds: int = Field(default=0, alias="minNtpotMilliseconds")
    max_ntpot_milliseconds: int = Field(default=0, alias="maxNtpotMilliseconds")
    accelerator_options: list[AcceleratorOption] = Field(
        default_factory=list,
        alias="acceleratorOptions",
    )


class K8sManifest(_Record):
    kind: str = Field(default="", description="Kind de Kubernetes (Deployment, Service...).")
    api_version: str = Field(default="", alias="apiVersion")
    content: str = Field(default="", description="Manifest YAML completo.")


class ManifestBundle(_Record):
    """Respuesta de `/v1alpha1/optimizedManifest`."""

    k8s_manifests: list[K8sManifest] = Field(default_factory=list, alias="k8sManifests")
    comments: list[str] = Field(default_factory=list)


class ModelAndServerPair(_Record):
    model_name: str = Field(default="", alias="modelName")
    model_server_name: str = Field(default="", alias="modelServerName")
    create_time: str = Field(default="", alias="createTime")
    update_time: str = Field(default="", alias="updateTime")


# Envelopes de los endpoints de listado: un único array de strings.


class ListModelsResponse(_Record):
    model_names: list[str] = Field(default_factory=list, alias="modelNames")


class ListModelServersResponse(_Record):
    model_server_names: list[str] = Field(default_factory=list, alias="modelServerNames")


class ListModelServerVersionsResponse(_Record):
    model_server_versions: list[str] = Field(default_factory=list, alias="modelServerVersions")
