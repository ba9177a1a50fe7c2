# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import click
import boto3
import botocore.exceptions
from botocore.config import Config

from .errors import DeployError
from .options import make_options, DEFAULT_CLUSTER, DEFAULT_WAIT_MINUTES, DEFAULT_LAUNCH_TYPE, DEFAULT_STARTED_BY
from .outputs import OutputWriter
from .pipeline import deploy
from .service.run_task import parse_container_overrides
from .utils import split_list

import logging
import logging.config
LOGGING_CONFIG = { 
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': { 
        'standard': { 
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        },
    },
    'handlers': { 
        'default': { 
            'level': 'INFO',
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stdout',  # Default is stderr
        },
    },
    'loggers': { 
        '': {  # root logger
            'handlers': ['default'],
            'level': 'INFO',
            'propagate': False
        }
    } 
}
logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger()

ENVVAR_PREFIX = "ECS_DEPLOY"
USER_AGENT = "amazon-ecs-deploy-task-definition"

def aws_client(service_name, region_name):
    if region_name is not None and len(region_name) > 0:
        return boto3.client(service_name, config=Config(region_name=region_name, user_agent_extra=USER_AGENT))
    return boto3.client(service_name, config=Config(user_agent_extra=USER_AGENT))

def set_log_level(log_level):
    logger.setLevel(getattr(logging, log_level.upper()))
    for handler in logger.handlers:
        handler.setLevel(getattr(logging, log_level.upper()))


# Click cli entry point function
@click.command()
@click.option("--task-definition", required=True, type=str, help="Path to the ECS task definition file to register, or an existing ARN with --run-task-use-arn")
@click.option("--service", default="", type=str, help="ECS service to deploy to. Only registers the task definition if no service is given")
@click.option("--cluster", default=DEFAULT_CLUSTER, type=str, help="Cluster of the ECS service")
@click.option("--region", default="", type=str, help="AWS region, defaults to the boto3 configuration")
@click.option("--wait-for-service-stability", is_flag=True, help="Wait for the service (or CodeDeploy deployment) to become stable")
@click.option("--wait-for-minutes", default=DEFAULT_WAIT_MINUTES, type=int, help="How long to wait, in minutes (max 360). CodeDeploy group wait times are added to this value")
@click.option("--force-new-deployment", is_flag=True, help="Force a new deployment of the service")
@click.option("--codedeploy-appspec", default="appspec.yaml", type=str, help="Path to the CodeDeploy AppSpec file")
@click.option("--codedeploy-application", default="", type=str, help="CodeDeploy application, defaults to AppECS-{cluster}-{service}")
@click.option("--codedeploy-deployment-group", default="", type=str, help="CodeDeploy deployment group, defaults to DgpECS-{cluster}-{service}")
@click.option("--codedeploy-deployment-description", default="", type=str, help="Description of the CodeDeploy deployment, truncated to 512 characters")
@click.option("--run-task", is_flag=True, help="Run the task outside of a service before the service is updated")
@click.option("--run-task-container-overrides", default="[]", type=str, help="JSON array of container overrides for the ad-hoc task")
@click.option("--run-task-security-groups", default="", type=str, help="Comma separated security group IDs for the ad-hoc task")
@click.option("--run-task-subnets", default="", type=str, help="Comma separated subnet IDs for the ad-hoc task")
@click.option("--run-task-launch-type", default=DEFAULT_LAUNCH_TYPE, type=click.Choice(["FARGATE","EC2"], case_sensitive=False), help="Launch type of the ad-hoc task")
@click.option("--run-task-started-by", default=DEFAULT_STARTED_BY, type=str, help="startedBy tag of the ad-hoc task")
@click.option("--run-task-use-arn", is_flag=True, help="Use the existing ARN passed in --task-definition instead of registering a file")
@click.option("--wait-for-task-stopped", is_flag=True, help="Wait for the ad-hoc task to stop and check its exit codes")
@click.option("--workspace", default="", envvar="GITHUB_WORKSPACE", type=str, help="Base directory for relative file paths, defaults to the current directory")
@click.option("--output-file", default="", envvar="GITHUB_OUTPUT", type=str, help="File to append name=value outputs to")
@click.option("-l", "--log-level", default="INFO", type=click.Choice(["DEBUG","INFO","WARNING","ERROR","CRITICAL"], case_sensitive=False), help="Select log level")
def deploy_task_definition(task_definition, service, cluster, region, wait_for_service_stability, wait_for_minutes,
                           force_new_deployment, codedeploy_appspec, codedeploy_application, codedeploy_deployment_group,
                           codedeploy_deployment_description, run_task, run_task_container_overrides,
                           run_task_security_groups, run_task_subnets, run_task_launch_type, run_task_started_by,
                           run_task_use_arn, wait_for_task_stopped, workspace, output_file, log_level):
    set_log_level(log_level)
    try:
        options = make_options(
            task_definition,
            service=service,
            cluster=cluster,
            region=region,
            wait_for_service_stability=wait_for_service_stability,
            wait_for_minutes=wait_for_minutes,
            force_new_deployment=force_new_deployment,
            codedeploy_appspec=codedeploy_appspec,
            codedeploy_application=codedeploy_application,
            codedeploy_deployment_group=codedeploy_deployment_group,
            codedeploy_deployment_description=codedeploy_deployment_description,
            run_task=run_task,
            run_task_container_overrides=parse_container_overrides(run_task_container_overrides),
            run_task_subnets=split_list(run_task_subnets),
            run_task_security_groups=split_list(run_task_security_groups),
            run_task_launch_type=run_task_launch_type.upper(),
            run_task_started_by=run_task_started_by,
            run_task_use_arn=run_task_use_arn,
            wait_for_task_stopped=wait_for_task_stopped,
            workspace=workspace,
            output_file=output_file
        )
        ecs_client = aws_client("ecs", options.region)
        codedeploy_client = aws_client("codedeploy", options.region)
        deploy(options, ecs_client, codedeploy_client, OutputWriter(options.output_file))
    except (DeployError, botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as error:
        logger.debug("Deployment failed", exc_info=True)
        raise click.ClickException(str(error))

def main():
    deploy_task_definition(auto_envvar_prefix=ENVVAR_PREFIX)
