# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0
import json
import logging

logger = logging.getLogger(__name__)

TASK_DEFINITION_ARN = "task-definition-arn"
RUN_TASK_ARN = "run-task-arn"
CODEDEPLOY_DEPLOYMENT_ID = "codedeploy-deployment-id"

class OutputWriter(object):
    """Publishes named step outputs.

    Every output is logged. When a path is given (GITHUB_OUTPUT in a GitHub
    Actions job) a name=value line is appended to it as well.
    """

    def __init__(self, path=None):
        self.path = path
        self.values = {}

    def set_output(self, name, value):
        if isinstance(value, (list, tuple)):
            value = json.dumps(list(value))
        self.values[name] = value
        logger.info("%s: %s"%(name, value))
        if not self.path:
            return
        with open(self.path, 'a', encoding='utf-8') as output_stream:
            output_stream.write("%s=%s\n"%(name, value))
