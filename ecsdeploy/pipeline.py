# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import time
from . import outputs
from .service.dispatcher import dispatch
from .service.run_task import run_task
from .taskdef.registrar import resolve_task_definition
import logging

logger = logging.getLogger(__name__)

def run_ad_hoc_task(ecs_client, options, task_def_arn, output_writer, sleep=time.sleep):
    logger.debug("Running ad-hoc task...")
    def publish_task_arns(task_arns):
        output_writer.set_output(outputs.RUN_TASK_ARN, task_arns)
    return run_task(ecs_client, options.cluster, task_def_arn,
                    options.run_task_container_overrides,
                    options.run_task_subnets, options.run_task_security_groups,
                    options.run_task_launch_type, options.run_task_started_by,
                    options.wait_for_task_stopped, options.wait_for_minutes,
                    sleep=sleep, on_launched=publish_task_arns)

# register -> run task -> deploy, the first failure stops the rest
# while outputs already written stay in place
def deploy(options, ecs_client, codedeploy_client, output_writer, sleep=time.sleep):
    task_def_arn = resolve_task_definition(ecs_client, options)
    output_writer.set_output(outputs.TASK_DEFINITION_ARN, task_def_arn)

    logger.debug("shouldRunTask: %s"%(options.run_task))
    if options.run_task:
        run_ad_hoc_task(ecs_client, options, task_def_arn, output_writer, sleep=sleep)

    if not options.service:
        logger.debug("Service was not specified, no service updated")
        return None
    outcome = dispatch(ecs_client, codedeploy_client, options, task_def_arn, sleep=sleep)
    if outcome.deployment_id is not None:
        output_writer.set_output(outputs.CODEDEPLOY_DEPLOYMENT_ID, outcome.deployment_id)
    return outcome
