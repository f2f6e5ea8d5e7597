"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""


class OutputKeys:
    SOURCE_BUCKET_NAME = "SourceBucketName"
    UPLOADER_LAMBDA_ARN = "UploaderLambdaArn"
    UPLOADER_LAMBDA_NAME = "UploaderLambdaName"
