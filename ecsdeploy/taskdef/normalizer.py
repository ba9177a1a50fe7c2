# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import copy
from ..errors import MalformedInputError
import logging

logger = logging.getLogger(__name__)

# Attributes that are returned by DescribeTaskDefinition,
# but are not valid RegisterTaskDefinition inputs
IGNORED_TASK_DEFINITION_ATTRIBUTES = [
    "compatibilities",
    "taskDefinitionArn",
    "requiresAttributes",
    "revision",
    "status",
    "registeredAt",
    "deregisteredAt",
    "registeredBy"
]

def is_empty_value(value):
    if value is None or (isinstance(value, str) and value == ""):
        return True
    if isinstance(value, list):
        for element in value:
            if not is_empty_value(element):
                return False
        return True
    if isinstance(value, dict):
        for child in value.values():
            if not is_empty_value(child):
                return False
        return True
    return False

# prunes every level, including inside the elements of a kept list
def clean_empty_keys(value):
    if isinstance(value, dict):
        cleaned = {}
        for k, v in value.items():
            if is_empty_value(v): continue
            cleaned[k] = clean_empty_keys(v)
        return cleaned
    if isinstance(value, list):
        return [clean_empty_keys(e) for e in value if not is_empty_value(e)]
    return value

def remove_ignored_attributes(task_def):
    for attribute in IGNORED_TASK_DEFINITION_ATTRIBUTES:
        if attribute not in task_def: continue
        logger.warning("Ignoring property '%s' in the task definition file. "
                       "This property is returned by the Amazon ECS DescribeTaskDefinition API and may be shown in the ECS console, "
                       "but it is not a valid field when registering a new task definition. "
                       "This field can be safely removed from your task definition file."%(attribute))
        del task_def[attribute]
    return task_def

def has_appmesh_properties(task_def):
    proxy = task_def.get("proxyConfiguration")
    if not isinstance(proxy, dict): return False
    if proxy.get("type") != "APPMESH": return False
    properties = proxy.get("properties")
    return isinstance(properties, list) and len(properties) > 0

# RegisterTaskDefinition rejects name/value pairs with a missing half,
# so put back the empty strings clean_empty_keys took out
def maintain_valid_objects(task_def):
    if has_appmesh_properties(task_def):
        for prop in task_def["proxyConfiguration"]["properties"]:
            if "value" not in prop:
                prop["value"] = ""
            if "name" not in prop:
                prop["name"] = ""

    for container in task_def.get("containerDefinitions", []):
        if not isinstance(container, dict): continue
        for env in container.get("environment", []):
            if isinstance(env, dict) and "value" not in env:
                env["value"] = ""
    return task_def

def normalize(raw_task_def):
    if not isinstance(raw_task_def, dict):
        raise MalformedInputError("Task definition file must contain a mapping of task definition fields")
    task_def = clean_empty_keys(copy.deepcopy(raw_task_def))
    if len(task_def) <= 0:
        raise MalformedInputError("Task definition file has no non-empty fields")
    return maintain_valid_objects(remove_ignored_attributes(task_def))
