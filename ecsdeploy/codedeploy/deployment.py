# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import time
import botocore.exceptions
from .appspec import load_appspec, patch_task_definition, serialize_appspec, appspec_sha256, truncate_description
from ..errors import DeploymentSubmissionError
from ..utils import resolve_path
from ..waiter import poll_until, deployment_successful, wait_policy, clamp_wait_minutes
import logging

logger = logging.getLogger(__name__)

DEFAULT_APPSPEC_FILE = "appspec.yaml"

def resolve_names(cluster_name, service, application=None, deployment_group=None):
    if not application:
        application = "AppECS-%s-%s"%(cluster_name, service)
    if not deployment_group:
        deployment_group = "DgpECS-%s-%s"%(cluster_name, service)
    return application, deployment_group

def get_deployment_group(client, application, deployment_group):
    try:
        response = client.get_deployment_group(
            applicationName=application,
            deploymentGroupName=deployment_group
        )
    except botocore.exceptions.ClientError as error:
        raise DeploymentSubmissionError("Unable to get CodeDeploy deployment group %s of application %s: %s"%(
            deployment_group, application, error)) from error
    return response.get("deploymentGroupInfo", {})

# blue/green groups can hold traffic and keep the old tasks around,
# both windows are part of how long a deployment may legitimately take
def blue_green_wait_minutes(group_info, requested_minutes):
    bg_config = group_info.get("blueGreenDeploymentConfiguration", {})
    ready_wait = bg_config.get("deploymentReadyOption", {}).get("waitTimeInMinutes", 0)
    termination_wait = bg_config.get("terminateBlueInstancesOnDeploymentSuccess", {}).get("terminationWaitTimeInMinutes", 0)
    return clamp_wait_minutes(ready_wait + termination_wait + requested_minutes)

def build_deployment_request(application, deployment_group, content, description=None):
    request = {
        "applicationName": application,
        "deploymentGroupName": deployment_group,
        "revision": {
            "revisionType": "AppSpecContent",
            "appSpecContent": {
                "content": content,
                "sha256": appspec_sha256(content)
            }
        }
    }
    # leave description out entirely when not given
    if description:
        request["description"] = truncate_description(description)
    return request

# Deploy to a service that uses the 'CODE_DEPLOY' deployment controller
def create_codedeploy_deployment(client, options, task_def_arn, sleep=time.sleep):
    cluster_name = options.cluster
    service = options.service
    application, deployment_group = resolve_names(cluster_name, service,
                                                  options.codedeploy_application,
                                                  options.codedeploy_deployment_group)
    group_info = get_deployment_group(client, application, deployment_group)

    logger.debug("Updating AppSpec file with new task definition ARN")
    appspec_path = resolve_path(options.codedeploy_appspec or DEFAULT_APPSPEC_FILE, options.workspace)
    appspec = patch_task_definition(load_appspec(appspec_path), task_def_arn)
    content = serialize_appspec(appspec)

    logger.debug("Starting CodeDeploy deployment")
    request = build_deployment_request(application, deployment_group, content,
                                       options.codedeploy_deployment_description)
    try:
        response = client.create_deployment(**request)
    except botocore.exceptions.ClientError as error:
        raise DeploymentSubmissionError("Failed to create CodeDeploy deployment for %s/%s: %s"%(
            application, deployment_group, error)) from error
    deployment_id = response["deploymentId"]
    logger.info("Deployment started. Watch this deployment's progress in the AWS CodeDeploy console: "
                "https://console.aws.amazon.com/codesuite/codedeploy/deployments/%s?region=%s"%(
                    deployment_id, client.meta.region_name))

    if not options.wait_for_service_stability:
        logger.debug("Not waiting for the deployment to complete")
        return deployment_id
    total_wait = blue_green_wait_minutes(group_info, options.wait_for_minutes)
    logger.info("Waiting for the deployment to complete. Will wait for %d minutes"%(total_wait))
    poll_until(deployment_successful(client, deployment_id), wait_policy(total_wait),
               "deployment %s to succeed"%(deployment_id), sleep=sleep)
    logger.info("Deployment %s succeeded"%(deployment_id))
    return deployment_id
