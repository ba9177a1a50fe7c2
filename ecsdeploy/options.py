# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import os
from collections import namedtuple
from .waiter import clamp_wait_minutes

DEFAULT_CLUSTER = "default"
DEFAULT_WAIT_MINUTES = 30
DEFAULT_LAUNCH_TYPE = "FARGATE"
DEFAULT_STARTED_BY = "GitHub-Actions"

# built once by the CLI and handed to every step, never mutated
DeployOptions = namedtuple("DeployOptions", [
    "task_definition",
    "service",
    "cluster",
    "region",
    "wait_for_service_stability",
    "wait_for_minutes",
    "force_new_deployment",
    "codedeploy_appspec",
    "codedeploy_application",
    "codedeploy_deployment_group",
    "codedeploy_deployment_description",
    "run_task",
    "run_task_container_overrides",
    "run_task_subnets",
    "run_task_security_groups",
    "run_task_launch_type",
    "run_task_started_by",
    "run_task_use_arn",
    "wait_for_task_stopped",
    "workspace",
    "output_file",
])

def make_options(task_definition, **kwargs):
    options = {
        "service": None,
        "cluster": DEFAULT_CLUSTER,
        "region": None,
        "wait_for_service_stability": False,
        "wait_for_minutes": DEFAULT_WAIT_MINUTES,
        "force_new_deployment": False,
        "codedeploy_appspec": None,
        "codedeploy_application": None,
        "codedeploy_deployment_group": None,
        "codedeploy_deployment_description": None,
        "run_task": False,
        "run_task_container_overrides": [],
        "run_task_subnets": [],
        "run_task_security_groups": [],
        "run_task_launch_type": DEFAULT_LAUNCH_TYPE,
        "run_task_started_by": DEFAULT_STARTED_BY,
        "run_task_use_arn": False,
        "wait_for_task_stopped": False,
        "workspace": None,
        "output_file": None,
    }
    for k, v in kwargs.items():
        if k not in options:
            raise TypeError("Unknown deploy option %s"%(k))
        if v is not None:
            options[k] = v
    if not options["cluster"]:
        options["cluster"] = DEFAULT_CLUSTER
    if not options["workspace"]:
        options["workspace"] = os.getcwd()
    # 0 or a negative value means "not given", as with an empty input
    minutes = options["wait_for_minutes"]
    if minutes is None or minutes <= 0:
        minutes = DEFAULT_WAIT_MINUTES
    options["wait_for_minutes"] = clamp_wait_minutes(minutes)
    options["run_task_container_overrides"] = list(options["run_task_container_overrides"])
    options["run_task_subnets"] = tuple(options["run_task_subnets"])
    options["run_task_security_groups"] = tuple(options["run_task_security_groups"])
    return DeployOptions(task_definition=task_definition, **options)
