"""Tests for the domain records."""

import pytest
from pydantic import ValidationError

from core.domain.models import (
    AcceleratorOption,
    AcceleratorRange,
    K8sManifest,
    ListModelsResponse,
    ManifestBundle,
    Model,
    ModelAndServerPair,
)


def test_records_are_immutable():
    model = Model(name="llama")

    with pytest.raises(ValidationError):
        model.name = "other"


def test_aliases_and_snake_case_names_both_populate():
    by_alias = ModelAndServerPair.model_validate({"modelName": "llama", "modelServerName": "vllm"})
    by_name = ModelAndServerPair(model_name="llama", model_server_name="vllm")

    assert by_alias == by_name
    assert by_alias.create_time == ""


def test_absent_fields_take_zero_values():
    option = AcceleratorOption.model_validate({"acceleratorType": "nvidia-l4"})

    assert option.machine_type is None
    assert option.tpu_topology is None
    assert option.resources_used.accelerator_count == 0
    assert option.performance_stats.ntpot_milliseconds == 0
    assert option.model_and_model_server_info.model_name == ""


def test_null_values_take_zero_values():
    assert ListModelsResponse.model_validate({"modelNames": None}).model_names == []

    accelerators = AcceleratorRange.model_validate(
        {"minTpotMilliseconds": None, "acceleratorOptions": None}
    )
    assert accelerators.min_tpot_milliseconds == 0
    assert accelerators.accelerator_options == []

    bundle = ManifestBundle.model_validate({"k8sManifests": None, "comments": None})
    assert bundle.k8s_manifests == []
    assert bundle.comments == []


def test_unknown_fields_are_ignored():
    manifest = K8sManifest.model_validate(
        {"kind": "Service", "apiVersion": "v1", "content": "kind: Service", "extra": True}
    )

    assert manifest.kind == "Service"
    assert not hasattr(manifest, "extra")


def test_dump_uses_wire_names():
    bundle = ManifestBundle(
        k8s_manifests=[K8sManifest(kind="Deployment", api_version="apps/v1", content="...")],
        comments=["ok"],
    )

    dumped = bundle.model_dump(mode="json", by_alias=True)

    assert dumped == {
        "k8sManifests": [{"kind": "Deployment", "apiVersion": "apps/v1", "content": "..."}],
        "comments": ["ok"],
    }
