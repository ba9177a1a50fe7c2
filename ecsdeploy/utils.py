# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import os
import re
import yaml
from .errors import MalformedInputError, MalformedSpecError
import logging

logger = logging.getLogger(__name__)

# simple util functions
def dict_check(dict):
    if dict is None or len(dict)==0: return False
    return True

# absolute paths are used as is, relative ones are taken
# from the workspace the pipeline checked out
def resolve_path(path, workspace):
    if os.path.isabs(path):
        return path
    return os.path.join(workspace, path)

BOOL_TAG = "tag:yaml.org,2002:bool"
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"

# YAML 1.2 scalars: yes/no/on/off and dates stay strings as authored,
# only true/false are booleans
class DocumentLoader(yaml.SafeLoader):
    pass

DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (BOOL_TAG, TIMESTAMP_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DocumentLoader.add_implicit_resolver(BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF"))

# reads a YAML (or JSON, YAML is a superset) document from path
def read_document(path):
    logger.debug("Reading document from %s"%(path))
    try:
        with open(path, 'r', encoding='utf-8') as input_stream:
            return yaml.load(input_stream, Loader=DocumentLoader)
    except OSError as error:
        raise MalformedInputError("Unable to read %s: %s"%(path, error)) from error
    except yaml.YAMLError as error:
        raise MalformedInputError("Unable to parse %s: %s"%(path, error)) from error

# externally authored documents (AppSpec) do not agree on key casing,
# walk the explicit key list and match ignoring case
def find_key(mapping, key_name):
    if not isinstance(mapping, dict):
        raise MalformedSpecError(key_name)
    key_to_match = key_name.lower()
    for key in list(mapping.keys()):
        if isinstance(key, str) and key.lower() == key_to_match:
            return key
    raise MalformedSpecError(key_name)

def find_value(mapping, key_name):
    return mapping[find_key(mapping, key_name)]

def split_list(value):
    if value is None: return []
    return [item.strip() for item in value.split(",") if len(item.strip()) > 0]
