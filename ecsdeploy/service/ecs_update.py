# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import time
import botocore.exceptions
from ..errors import DeploymentSubmissionError
from ..waiter import poll_until, services_stable, wait_policy, clamp_wait_minutes
import logging

logger = logging.getLogger(__name__)

def console_hostname(region_name):
    if region_name is not None and region_name.startswith("cn"):
        return "console.amazonaws.cn"
    return "console.aws.amazon.com"

# Deploy to a service that uses the 'ECS' deployment controller
def update_ecs_service(client, cluster_name, service, task_def_arn, wait_for_service, wait_minutes,
                       force_new_deployment, sleep=time.sleep):
    logger.debug("Updating the service")
    try:
        client.update_service(
            cluster=cluster_name,
            service=service,
            taskDefinition=task_def_arn,
            forceNewDeployment=force_new_deployment
        )
    except botocore.exceptions.ClientError as error:
        raise DeploymentSubmissionError("Failed to update service %s: %s"%(service, error)) from error

    region = client.meta.region_name
    logger.info("Deployment started. Watch this deployment's progress in the Amazon ECS console: "
                "https://%s/ecs/home?region=%s#/clusters/%s/services/%s/events"%(
                    console_hostname(region), region, cluster_name, service))

    if not wait_for_service:
        logger.debug("Not waiting for the service to become stable")
        return
    wait_minutes = clamp_wait_minutes(wait_minutes)
    logger.info("Waiting for the service to become stable. Will wait for %d minutes"%(wait_minutes))
    poll_until(services_stable(client, cluster_name, [service]), wait_policy(wait_minutes),
               "service %s to become stable"%(service), sleep=sleep)
    logger.info("Service %s is stable"%(service))
