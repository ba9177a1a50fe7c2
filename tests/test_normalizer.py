# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import logging

import pytest

from ecsdeploy.errors import MalformedInputError
from ecsdeploy.taskdef.normalizer import (
    clean_empty_keys, is_empty_value, maintain_valid_objects, normalize, remove_ignored_attributes
)

DESCRIBED_TASK_DEF = {
    "family": "web",
    "taskDefinitionArn": "arn:aws:ecs:us-east-1:123456789012:task-definition/web:3",
    "revision": 3,
    "status": "ACTIVE",
    "compatibilities": ["EC2", "FARGATE"],
    "requiresAttributes": [{"name": "com.amazonaws.ecs.capability.logging-driver.awslogs"}],
    "registeredAt": "2024-01-01T00:00:00Z",
    "registeredBy": "arn:aws:iam::123456789012:user/ci",
    "containerDefinitions": [
        {
            "name": "web",
            "image": "nginx:latest",
            "cpu": 0,
            "essential": True,
            "environment": [{"name": "STAGE", "value": "prod"}],
            "mountPoints": [],
            "volumesFrom": []
        }
    ],
    "volumes": [],
    "placementConstraints": [],
    "networkMode": "awsvpc"
}


class TestEmptyValues:

    def test_scalars(self):
        assert is_empty_value(None)
        assert is_empty_value("")
        assert not is_empty_value(0)
        assert not is_empty_value(False)
        assert not is_empty_value("x")

    def test_nested_containers(self):
        assert is_empty_value([])
        assert is_empty_value([None, "", {}, [[]]])
        assert is_empty_value({"a": {"b": [None]}})
        assert not is_empty_value({"a": {"b": [None, 1]}})

    def test_prunes_empty_keys_and_elements(self):
        doc = {
            "family": "web",
            "taskRoleArn": "",
            "cpu": None,
            "volumes": [],
            "tags": [{}, {"key": "team", "value": "core"}, None],
            "proxyConfiguration": {"type": "", "properties": []}
        }
        assert clean_empty_keys(doc) == {
            "family": "web",
            "tags": [{"key": "team", "value": "core"}]
        }

    def test_prunes_inside_kept_list_elements(self):
        doc = {"containerDefinitions": [{"name": "web", "command": [], "links": None}]}
        assert clean_empty_keys(doc) == {"containerDefinitions": [{"name": "web"}]}

    def test_keeps_non_empty_leaves(self):
        doc = {"a": {"b": {"c": [0, False, "v"]}}}
        assert clean_empty_keys(doc) == doc

    @pytest.mark.parametrize("doc", [
        DESCRIBED_TASK_DEF,
        {"a": [[], [None, {"b": ""}], [{"c": 1, "d": []}]]},
        {"x": {"y": {"z": None}}, "k": "v"},
    ])
    def test_pruning_is_idempotent(self, doc):
        once = clean_empty_keys(doc)
        assert clean_empty_keys(once) == once


class TestIgnoredAttributes:

    def test_removes_and_warns_per_field(self, caplog):
        caplog.set_level(logging.WARNING)
        task_def = remove_ignored_attributes(dict(DESCRIBED_TASK_DEF))
        for attribute in ["taskDefinitionArn", "revision", "status", "compatibilities",
                          "requiresAttributes", "registeredAt", "registeredBy"]:
            assert attribute not in task_def
            assert "Ignoring property '%s'" % attribute in caplog.text
        assert "deregisteredAt" not in caplog.text
        assert task_def["family"] == "web"


class TestBackfill:

    def test_environment_value_backfilled(self):
        task_def = normalize({"containerDefinitions": [{"environment": [{"name": "X"}]}]})
        assert task_def == {"containerDefinitions": [{"environment": [{"name": "X", "value": ""}]}]}

    def test_empty_environment_value_survives_normalization(self):
        task_def = normalize({"containerDefinitions": [{"name": "web", "environment": [{"name": "X", "value": ""}]}]})
        assert task_def["containerDefinitions"][0]["environment"] == [{"name": "X", "value": ""}]

    def test_appmesh_properties_backfilled(self):
        task_def = normalize({
            "family": "mesh",
            "proxyConfiguration": {
                "type": "APPMESH",
                "containerName": "envoy",
                "properties": [{"name": "IgnoredUID", "value": ""}, {"value": "15000"}]
            }
        })
        assert task_def["proxyConfiguration"]["properties"] == [
            {"name": "IgnoredUID", "value": ""},
            {"value": "15000", "name": ""}
        ]

    def test_other_proxy_types_untouched(self):
        task_def = maintain_valid_objects({
            "proxyConfiguration": {"type": "OTHER", "properties": [{"name": "IgnoredUID"}]}
        })
        assert task_def["proxyConfiguration"]["properties"] == [{"name": "IgnoredUID"}]

    def test_appmesh_without_properties_untouched(self):
        task_def = maintain_valid_objects({"proxyConfiguration": {"type": "APPMESH"}})
        assert task_def == {"proxyConfiguration": {"type": "APPMESH"}}


class TestNormalize:

    def test_described_task_definition_becomes_submittable(self):
        task_def = normalize(DESCRIBED_TASK_DEF)
        assert task_def == {
            "family": "web",
            "containerDefinitions": [
                {
                    "name": "web",
                    "image": "nginx:latest",
                    "cpu": 0,
                    "essential": True,
                    "environment": [{"name": "STAGE", "value": "prod"}]
                }
            ],
            "networkMode": "awsvpc"
        }

    def test_does_not_mutate_input(self):
        raw = {"family": "web", "revision": 2, "volumes": []}
        normalize(raw)
        assert raw == {"family": "web", "revision": 2, "volumes": []}

    @pytest.mark.parametrize("raw", [None, [], "family: web", {"family": ""}])
    def test_rejects_documents_without_fields(self, raw):
        with pytest.raises(MalformedInputError):
            normalize(raw)
