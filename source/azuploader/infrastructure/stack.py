"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from aws_cdk import (
    BundlingOptions,
    CfnOutput,
    CfnParameter,
    Duration,
    RemovalPolicy,
    Stack,
)
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_notifications as s3n
from constructs import Construct

from azuploader.application.config.variables import VariableNames, Variables
from azuploader.infrastructure.nag_suppressor import nag_suppressor
from azuploader.infrastructure.output_keys import OutputKeys

UPLOADER_RUNTIME = lambda_.Runtime.PYTHON_3_12

# Enough headroom for one part of the maximum size plus the read buffers
UPLOADER_MEMORY_SIZE_MB = 1024


class UploaderStack(Stack):
    outputs: dict[str, CfnOutput]

    def __init__(self, scope: Construct, construct_id: str) -> None:
        super().__init__(scope, construct_id)

        self.outputs = {}

        storage_account = CfnParameter(
            self,
            VariableNames.STORAGE_ACCOUNT,
            type="String",
            min_length=1,
            description="Name of the Azure storage account receiving the uploads.",
        )
        azure_access_key = CfnParameter(
            self,
            VariableNames.AZURE_ACCESS_KEY,
            type="String",
            min_length=1,
            no_echo=True,
            description="Shared access key of the Azure storage account.",
        )
        output_container = CfnParameter(
            self,
            VariableNames.OUTPUT_CONTAINER,
            type="String",
            min_length=1,
            description="Azure container the objects are uploaded to. Created if absent.",
        )
        file_part_size = CfnParameter(
            self,
            VariableNames.FILE_PART_SIZE,
            type="Number",
            default=Variables.DEFAULT_FILE_PART_SIZE_MB,
            min_value=Variables.MINIMUM_FILE_PART_SIZE_MB,
            max_value=Variables.MAXIMUM_FILE_PART_SIZE_MB,
            description="Size in MB of each block uploaded to Azure.",
        )
        flatten_file_paths = CfnParameter(
            self,
            VariableNames.FLATTEN_FILE_PATHS,
            type="String",
            default="false",
            allowed_values=["true", "false"],
            description="Drop the first folder of the S3 key when naming the blob.",
        )
        output_folder_path = CfnParameter(
            self,
            VariableNames.OUTPUT_FOLDER_PATH,
            type="String",
            default="",
            description="Folder inside the container the blobs are written to.",
        )

        source_bucket = s3.Bucket(
            self,
            "SourceBucket",
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            encryption=s3.BucketEncryption.S3_MANAGED,
            enforce_ssl=True,
            versioned=True,
            removal_policy=RemovalPolicy.RETAIN,
        )

        self.outputs[OutputKeys.SOURCE_BUCKET_NAME] = CfnOutput(
            self,
            OutputKeys.SOURCE_BUCKET_NAME,
            value=source_bucket.bucket_name,
        )

        nag_suppressor(source_bucket, ["AwsSolutions-S1"])

        # The Lambda runtime only provides boto3, the rest is installed into a layer
        dependencies_layer = lambda_.LayerVersion(
            self,
            "DependenciesLayer",
            code=lambda_.Code.from_asset(
                "layers/dependencies",
                bundling=BundlingOptions(
                    image=UPLOADER_RUNTIME.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install --no-cache-dir -r requirements.txt -t /asset-output/python",
                    ],
                ),
            ),
            compatible_runtimes=[UPLOADER_RUNTIME],
            license="Apache-2.0",
            description="Azure Storage SDK and Powertools for the uploader Lambda",
        )

        uploader_lambda = lambda_.Function(
            self,
            "Uploader",
            handler="azuploader.application.handlers.upload_handler",
            code=lambda_.Code.from_asset("source"),
            runtime=UPLOADER_RUNTIME,
            layers=[dependencies_layer],
            memory_size=UPLOADER_MEMORY_SIZE_MB,
            timeout=Duration.minutes(15),
            description="Lambda to stream objects created in the source bucket into Azure Blob Storage.",
            environment={
                VariableNames.STORAGE_ACCOUNT: storage_account.value_as_string,
                VariableNames.AZURE_ACCESS_KEY: azure_access_key.value_as_string,
                VariableNames.OUTPUT_CONTAINER: output_container.value_as_string,
                VariableNames.FILE_PART_SIZE: file_part_size.value_as_string,
                VariableNames.FLATTEN_FILE_PATHS: flatten_file_paths.value_as_string,
                VariableNames.OUTPUT_FOLDER_PATH: output_folder_path.value_as_string,
            },
        )

        source_bucket.grant_read(uploader_lambda)
        source_bucket.add_event_notification(
            s3.EventType.OBJECT_CREATED, s3n.LambdaDestination(uploader_lambda)
        )

        self.outputs[OutputKeys.UPLOADER_LAMBDA_ARN] = CfnOutput(
            self,
            OutputKeys.UPLOADER_LAMBDA_ARN,
            value=uploader_lambda.function_arn,
        )
        self.outputs[OutputKeys.UPLOADER_LAMBDA_NAME] = CfnOutput(
            self,
            OutputKeys.UPLOADER_LAMBDA_NAME,
            value=uploader_lambda.function_name,
        )

        nag_suppressor(uploader_lambda, ["AwsSolutions-L1"])
        assert uploader_lambda.role is not None
        nag_suppressor(
            uploader_lambda.role,
            ["AwsSolutions-IAM4"],
            ["service-role/AWSLambdaBasicExecutionRole"],
        )
        nag_suppressor(
            uploader_lambda.role.node.find_child("DefaultPolicy").node.find_child(
                "Resource"
            ),
            ["AwsSolutions-IAM5"],
        )

        # The bucket notification custom resource is a singleton created by CDK
        for child in self.node.children:
            if child.node.id.startswith("BucketNotificationsHandler"):
                nag_suppressor(
                    child,
                    ["AwsSolutions-IAM4", "AwsSolutions-IAM5", "AwsSolutions-L1"],
                    custom_reason="The bucket notification handler and its role are managed by CDK.",
                    apply_to_children=True,
                )
