# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import hashlib
import json
from ..errors import MalformedInputError, MalformedSpecError
from ..utils import find_key, find_value, read_document

MAX_DESCRIPTION_LENGTH = 512
TRUNCATION_MARKER = "…"

def load_appspec(path):
    appspec = read_document(path)
    if not isinstance(appspec, dict):
        raise MalformedInputError("AppSpec file %s must contain a mapping"%(path))
    return appspec

# resources:
#   - <name>:
#       properties:
#         taskDefinition: <arn>
# rewritten in place for every resource, key casing is kept as authored
def patch_task_definition(appspec, task_def_arn):
    resources = find_value(appspec, "resources")
    if not isinstance(resources, list):
        raise MalformedSpecError("resources")
    for resource in resources:
        if not isinstance(resource, dict):
            raise MalformedSpecError("properties")
        for name in list(resource.keys()):
            properties = find_value(resource[name], "properties")
            task_def_key = find_key(properties, "taskDefinition")
            properties[task_def_key] = task_def_arn
    return appspec

def serialize_appspec(appspec):
    return json.dumps(appspec, separators=(",", ":"), ensure_ascii=False, default=str)

def appspec_sha256(content):
    return hashlib.sha256(content.encode("utf-8")).hexdigest()

# CodeDeploy deployment descriptions have a max length of 512 characters
def truncate_description(description):
    if len(description) <= MAX_DESCRIPTION_LENGTH:
        return description
    return description[:MAX_DESCRIPTION_LENGTH - 1] + TRUNCATION_MARKER
