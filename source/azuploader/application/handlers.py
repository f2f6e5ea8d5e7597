"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import boto3
import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from aws_lambda_powertools.utilities.data_classes import S3Event

from azuploader.application.config.variables import Variables
from azuploader.application.model.transfer import TransferRequest
from azuploader.application.s3_azure_transfer.download import S3Download
from azuploader.application.s3_azure_transfer.facilitator import (
    S3ToAzureFacilitator,
)
from azuploader.application.s3_azure_transfer.upload import create_container_client
from azuploader.application.util.logger import RequestLogger

if TYPE_CHECKING:
    from aws_lambda_powertools.utilities.typing import LambdaContext
    from mypy_boto3_s3.client import S3Client
else:
    LambdaContext = object
    S3Client = object

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def upload_handler(event: Dict[str, Any], context: LambdaContext) -> Optional[str]:
    request_logger = RequestLogger(logger, getattr(context, "aws_request_id", "-"))

    # Only the first record of a batched notification is transferred
    if not event.get("Records"):
        request_logger.info("S3 event contained no records. Nothing to upload.")
        return None

    s3_event = S3Event(event)
    bucket_name = s3_event.bucket_name
    object_key = s3_event.object_key

    try:
        request_logger.info(
            f"S3 event received. Uploading object to Azure: {bucket_name}/{object_key}"
        )
        variables = Variables()
        variables.validate()
        request = TransferRequest.from_variables(bucket_name, object_key, variables)

        s3_client: S3Client = boto3.client("s3")
        content_type = S3Download.content_type(s3_client, bucket_name, object_key)

        container_client = create_container_client(
            variables.storage_account,
            variables.azure_access_key,
            request.destination_container,
        )
        S3ToAzureFacilitator.from_request(
            request, s3_client, container_client, logger=request_logger
        ).transfer()
        return content_type
    except Exception:
        request_logger.exception(
            f"Error uploading object {object_key} in bucket {bucket_name} to Azure"
        )
        raise
