# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import json
import botocore.exceptions
from .normalizer import normalize
from ..errors import RegistrationError
from ..utils import read_document, resolve_path
import logging

logger = logging.getLogger(__name__)

def register_task_definition(client, task_def):
    try:
        response = client.register_task_definition(**task_def)
    except (botocore.exceptions.ClientError, botocore.exceptions.ParamValidationError) as error:
        message = "Failed to register task definition in ECS: %s"%(error)
        logger.error(message)
        logger.debug("Task definition contents:")
        logger.debug(json.dumps(task_def, indent=4, default=str))
        raise RegistrationError(message) from error
    task_def_arn = response["taskDefinition"]["taskDefinitionArn"]
    logger.info("Registered task definition %s"%(task_def_arn))
    return task_def_arn

# the task definition option is either a file to register
# or, with run_task_use_arn, an ARN registered elsewhere
def resolve_task_definition(client, options):
    if options.run_task_use_arn:
        logger.debug("Using pre-existing task definition: %s"%(options.task_definition))
        return options.task_definition
    logger.debug("Registering the task definition")
    task_def_path = resolve_path(options.task_definition, options.workspace)
    task_def = normalize(read_document(task_def_path))
    return register_task_definition(client, task_def)
