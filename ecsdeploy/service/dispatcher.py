# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import time
from collections import namedtuple
from .ecs_update import update_ecs_service
from ..codedeploy.deployment import create_codedeploy_deployment
from ..errors import ServiceLookupError, ServiceNotActiveError, UnsupportedControllerError
from ..utils import dict_check
import logging

logger = logging.getLogger(__name__)

ECS_CONTROLLER = "ECS"
CODE_DEPLOY_CONTROLLER = "CODE_DEPLOY"

# deployment_id is only set for CODE_DEPLOY rollouts
DeploymentOutcome = namedtuple("DeploymentOutcome", ["strategy", "deployment_id"])

def describe_service(client, cluster_name, service):
    response = client.describe_services(cluster=cluster_name, services=[service])
    failures = response.get("failures", [])
    if len(failures) > 0:
        failure = failures[0]
        raise ServiceLookupError("%s is %s"%(failure.get("arn"), failure.get("reason")))
    services = response.get("services", [])
    if len(services) <= 0:
        raise ServiceLookupError("Service %s not found in cluster %s"%(service, cluster_name))
    return services[0]

def select_strategy(service_descriptor):
    status = service_descriptor.get("status")
    if status != "ACTIVE":
        raise ServiceNotActiveError(status)
    controller = service_descriptor.get("deploymentController")
    controller_type = controller.get("type") if dict_check(controller) else None
    if not controller_type or controller_type == ECS_CONTROLLER:
        return ECS_CONTROLLER
    if controller_type == CODE_DEPLOY_CONTROLLER:
        return CODE_DEPLOY_CONTROLLER
    raise UnsupportedControllerError(controller_type)

def dispatch(ecs_client, codedeploy_client, options, task_def_arn, sleep=time.sleep):
    descriptor = describe_service(ecs_client, options.cluster, options.service)
    strategy = select_strategy(descriptor)
    logger.debug("Service %s uses the %s deployment controller"%(options.service, strategy))
    if strategy == ECS_CONTROLLER:
        update_ecs_service(ecs_client, options.cluster, options.service, task_def_arn,
                           options.wait_for_service_stability, options.wait_for_minutes,
                           options.force_new_deployment, sleep=sleep)
        return DeploymentOutcome(strategy=strategy, deployment_id=None)
    deployment_id = create_codedeploy_deployment(codedeploy_client, options, task_def_arn, sleep=sleep)
    return DeploymentOutcome(strategy=strategy, deployment_id=deployment_id)
