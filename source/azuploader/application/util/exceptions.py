"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""


class ConfigurationError(Exception):
    def __init__(self, variable_name: str) -> None:
        self.variable_name = variable_name
        self.message = f"No value provided for the required {variable_name} variable. Unable to proceed."
        super().__init__(self.message)


class TransferFailure(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class SourceReadError(TransferFailure):
    def __init__(self, bucket: str, key: str) -> None:
        self.bucket = bucket
        self.key = key
        super().__init__(f"Failed to read object {bucket}/{key} from S3.")


class DestinationWriteError(TransferFailure):
    def __init__(self, container: str, key: str, operation: str) -> None:
        self.container = container
        self.key = key
        self.operation = operation
        super().__init__(
            f"Failed to {operation} for blob {container}/{key} in Azure storage."
        )


class TransferCancelled(TransferFailure):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Transfer of {key} was cancelled before completion.")


class AccessViolation(Exception):
    def __init__(self) -> None:
        self.message = "Object stream was read after it was closed."
        super().__init__(self.message)
