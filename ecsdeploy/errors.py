# // Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# // SPDX-License-Identifier: Apache-2.0

# every failure is terminal for the invocation, nothing here is retried
class DeployError(Exception):
    pass

class MalformedInputError(DeployError):
    pass

class MalformedSpecError(MalformedInputError):
    def __init__(self, property_name):
        self.property_name = property_name
        super().__init__("AppSpec file must include property '%s'"%(property_name))

class RegistrationError(DeployError):
    pass

class ServiceLookupError(DeployError):
    pass

class ServiceNotActiveError(DeployError):
    def __init__(self, status):
        self.status = status
        super().__init__("Service is %s"%(status))

class UnsupportedControllerError(DeployError):
    def __init__(self, controller_type):
        self.controller_type = controller_type
        super().__init__("Unsupported deployment controller: %s"%(controller_type))

class LaunchError(DeployError):
    def __init__(self, message, task_arns=None, failures=None):
        self.task_arns = task_arns or []
        self.failures = failures or []
        super().__init__(message)

class TaskExecutionError(DeployError):
    def __init__(self, message, failures=None):
        self.failures = failures or []
        super().__init__(message)

class WaitError(DeployError):
    pass

class WaitTimeoutError(WaitError):
    pass

class WaitFailureError(WaitError):
    pass

class DeploymentSubmissionError(DeployError):
    pass
