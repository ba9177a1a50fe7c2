# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
from unittest.mock import MagicMock

import pytest

from ecsdeploy.options import make_options

TASK_DEF_ARN = "arn:aws:ecs:us-east-1:123456789012:task-definition/web:7"


@pytest.fixture
def ecs_client():
    client = MagicMock()
    client.meta.region_name = "us-east-1"
    client.register_task_definition.return_value = {"taskDefinition": {"taskDefinitionArn": TASK_DEF_ARN}}
    client.describe_services.return_value = {
        "services": [{"serviceName": "web", "status": "ACTIVE"}],
        "failures": []
    }
    return client


@pytest.fixture
def codedeploy_client():
    client = MagicMock()
    client.meta.region_name = "us-east-1"
    client.get_deployment_group.return_value = {
        "deploymentGroupInfo": {
            "blueGreenDeploymentConfiguration": {
                "deploymentReadyOption": {"waitTimeInMinutes": 10},
                "terminateBlueInstancesOnDeploymentSuccess": {"terminationWaitTimeInMinutes": 5}
            }
        }
    }
    client.create_deployment.return_value = {"deploymentId": "d-ABCDEF123"}
    client.get_deployment.return_value = {"deploymentInfo": {"status": "Succeeded"}}
    return client


@pytest.fixture
def no_sleep():
    return lambda seconds: None


@pytest.fixture
def options_factory(tmp_path):
    def factory(**kwargs):
        kwargs.setdefault("workspace", str(tmp_path))
        return make_options(kwargs.pop("task_definition", "task-definition.json"), **kwargs)
    return factory
