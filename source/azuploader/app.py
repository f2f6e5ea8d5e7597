"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import aws_cdk as cdk

from azuploader.infrastructure.stack import UploaderStack


def main() -> None:
    app = cdk.App()
    UploaderStack(app, "azuploader")
    app.synth()
