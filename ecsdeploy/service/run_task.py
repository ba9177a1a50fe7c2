# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import json
import time
from collections import namedtuple
from ..errors import LaunchError, MalformedInputError, TaskExecutionError
from ..waiter import poll_until, tasks_stopped, wait_policy, clamp_wait_minutes
import logging

logger = logging.getLogger(__name__)

# containers is empty unless the run was waited for
TaskRunResult = namedtuple("TaskRunResult", ["task_arns", "containers"])

def parse_container_overrides(text):
    if text is None or len(text.strip()) <= 0:
        return []
    try:
        overrides = json.loads(text)
    except ValueError as error:
        raise MalformedInputError("run-task-container-overrides is not valid JSON: %s"%(error)) from error
    if not isinstance(overrides, list):
        raise MalformedInputError("run-task-container-overrides must be a JSON array")
    return overrides

# RunTask treats {} and {"awsvpcConfiguration": {}} differently,
# only nest the awsvpc block when there is something to put in it
def build_network_configuration(subnets, security_groups):
    awsvpc_config = {}
    if len(subnets) > 0:
        awsvpc_config["subnets"] = list(subnets)
    if len(security_groups) > 0:
        awsvpc_config["securityGroups"] = list(security_groups)
    if len(awsvpc_config) <= 0:
        return {}
    return {"awsvpcConfiguration": awsvpc_config}

def task_console_url(client, cluster_name):
    region = client.meta.region_name
    return "https://console.aws.amazon.com/ecs/home?region=%s#/clusters/%s/tasks"%(region, cluster_name)

def start_task(client, cluster_name, task_def_arn, container_overrides, subnets, security_groups, launch_type, started_by):
    if len(container_overrides) > 0:
        logger.info("Running task with settings: %s"%(json.dumps(container_overrides[0])))
    response = client.run_task(
        startedBy=started_by,
        cluster=cluster_name,
        taskDefinition=task_def_arn,
        overrides={"containerOverrides": container_overrides},
        launchType=launch_type,
        networkConfiguration=build_network_configuration(subnets, security_groups)
    )
    logger.debug("Run task response %s"%(json.dumps(response, default=str)))

    task_arns = [task.get("taskArn") for task in response.get("tasks", [])]
    failures = response.get("failures", [])
    if len(failures) > 0:
        reasons = ["%s is %s"%(f.get("arn"), f.get("reason")) for f in failures]
        raise LaunchError("; ".join(reasons), task_arns=task_arns, failures=failures)

    logger.info("Task running: %s"%(task_console_url(client, cluster_name)))
    logger.info("Task ARN: %s"%(",".join(task_arns)))
    return TaskRunResult(task_arns=task_arns, containers=[])

def wait_for_tasks_stopped(client, cluster_name, task_arns, wait_minutes, sleep=time.sleep):
    wait_minutes = clamp_wait_minutes(wait_minutes)
    logger.info("Waiting for tasks to stop. Will wait for %d minutes"%(wait_minutes))
    poll_until(tasks_stopped(client, cluster_name, task_arns), wait_policy(wait_minutes),
               "tasks %s to stop"%(",".join(task_arns)), sleep=sleep)
    logger.info("SUCCESS - task %s completed"%(",".join(task_arns)))

# every container of every task has to exit with 0,
# a container that never started has no exit code and counts as failed
def check_exit_codes(client, cluster_name, task_arns):
    response = client.describe_tasks(cluster=cluster_name, tasks=task_arns)
    containers = []
    for task in response.get("tasks", []):
        for container in task.get("containers", []):
            containers.append({
                "taskArn": task.get("taskArn"),
                "name": container.get("name"),
                "exitCode": container.get("exitCode"),
                "reason": container.get("reason")
            })
    failures = [c for c in containers if c["exitCode"] != 0]
    if len(failures) > 0:
        reasons = [c["reason"] for c in failures]
        raise TaskExecutionError("Run task failed: %s"%(json.dumps(reasons)), failures=failures)
    return containers

def wait_for_task_run(client, cluster_name, result, wait_minutes, sleep=time.sleep):
    wait_for_tasks_stopped(client, cluster_name, result.task_arns, wait_minutes, sleep=sleep)
    containers = check_exit_codes(client, cluster_name, result.task_arns)
    return result._replace(containers=containers)

# on_launched gets the launched task ARNs before any launch failure is raised
# and before the wait starts
def run_task(client, cluster_name, task_def_arn, container_overrides, subnets, security_groups,
             launch_type, started_by, should_wait, wait_minutes, sleep=time.sleep, on_launched=None):
    try:
        result = start_task(client, cluster_name, task_def_arn, container_overrides,
                            subnets, security_groups, launch_type, started_by)
    except LaunchError as error:
        if on_launched is not None:
            on_launched(error.task_arns)
        raise
    if on_launched is not None:
        on_launched(result.task_arns)
    if not should_wait:
        logger.debug("Not waiting for the task to stop")
        return result
    return wait_for_task_run(client, cluster_name, result, wait_minutes, sleep=sleep)
