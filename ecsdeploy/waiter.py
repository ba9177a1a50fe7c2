# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import math
import time
from collections import namedtuple
from .errors import WaitFailureError, WaitTimeoutError
import logging

logger = logging.getLogger(__name__)

MAX_WAIT_MINUTES = 360  # 6 hours
WAIT_DEFAULT_DELAY_SEC = 15

WaitPolicy = namedtuple("WaitPolicy", ["delay", "max_attempts"])

def clamp_wait_minutes(minutes):
    if minutes > MAX_WAIT_MINUTES:
        return MAX_WAIT_MINUTES
    return minutes

def wait_policy(minutes):
    minutes = clamp_wait_minutes(minutes)
    max_attempts = math.ceil(minutes * 60 / WAIT_DEFAULT_DELAY_SEC)
    return WaitPolicy(delay=WAIT_DEFAULT_DELAY_SEC, max_attempts=max(1, max_attempts))

def poll_until(check, policy, description, sleep=time.sleep):
    """Call check() until it returns True, at most policy.max_attempts times.

    check may raise WaitFailureError when the polled resource reached a state
    it will never leave. API errors are not caught here and end the wait.
    """
    for attempt in range(1, policy.max_attempts + 1):
        if check():
            logger.debug("%s after %d attempt(s)"%(description, attempt))
            return attempt
        if attempt < policy.max_attempts:
            sleep(policy.delay)
    raise WaitTimeoutError("Timed out waiting for %s after %d attempts (%d seconds apart)"%(
        description, policy.max_attempts, policy.delay))

# ECS waiter "servicesStable"
def services_stable(client, cluster_name, services):
    def check():
        response = client.describe_services(cluster=cluster_name, services=services)
        for failure in response.get("failures", []):
            if failure.get("reason") == "MISSING":
                raise WaitFailureError("Service %s is MISSING"%(failure.get("arn")))
        described = response.get("services", [])
        for svc in described:
            status = svc.get("status")
            if status in ("DRAINING", "INACTIVE"):
                raise WaitFailureError("Service %s is %s"%(svc.get("serviceName"), status))
        if len(described) <= 0: return False
        for svc in described:
            if len(svc.get("deployments", [])) != 1: return False
            if svc.get("runningCount") != svc.get("desiredCount"): return False
        return True
    return check

# ECS waiter "tasksStopped"
def tasks_stopped(client, cluster_name, task_arns):
    def check():
        response = client.describe_tasks(cluster=cluster_name, tasks=task_arns)
        tasks = response.get("tasks", [])
        if len(tasks) <= 0: return False
        return all(task.get("lastStatus") == "STOPPED" for task in tasks)
    return check

# CodeDeploy waiter "DeploymentSuccessful"
def deployment_successful(client, deployment_id):
    def check():
        response = client.get_deployment(deploymentId=deployment_id)
        info = response.get("deploymentInfo", {})
        status = info.get("status")
        if status in ("Failed", "Stopped"):
            error_info = info.get("errorInformation", {})
            message = "Deployment %s is %s"%(deployment_id, status)
            if error_info.get("message"):
                message += ": %s"%(error_info.get("message"))
            raise WaitFailureError(message)
        return status == "Succeeded"
    return check
