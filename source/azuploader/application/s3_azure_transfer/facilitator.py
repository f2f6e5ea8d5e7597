"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import logging
import threading
from base64 import b64encode
from typing import TYPE_CHECKING, Optional

from azuploader.application.hashing.block_hash import BlockHash
from azuploader.application.model.transfer import TransferRequest
from azuploader.application.s3_azure_transfer.download import S3Download
from azuploader.application.s3_azure_transfer.upload import AzureUpload
from azuploader.application.util.exceptions import TransferCancelled
from azuploader.application.util.logger import TransferLogger

if TYPE_CHECKING:
    from azure.storage.blob import ContainerClient
    from mypy_boto3_s3.client import S3Client
else:
    ContainerClient = object
    S3Client = object


class S3ToAzureFacilitator:
    def __init__(
        self,
        download: S3Download,
        upload: AzureUpload,
        part_size: int,
        cancel_event: Optional[threading.Event] = None,
        logger: Optional[TransferLogger] = None,
    ) -> None:
        if part_size <= 0:
            raise ValueError("Part size must be a positive number of bytes.")
        self.download = download
        self.upload = upload
        self.part_size = part_size
        self.cancel_event = cancel_event
        self.logger: TransferLogger = logger or logging.getLogger()

    @classmethod
    def from_request(
        cls,
        request: TransferRequest,
        s3_client: S3Client,
        container_client: ContainerClient,
        cancel_event: Optional[threading.Event] = None,
        logger: Optional[TransferLogger] = None,
    ) -> "S3ToAzureFacilitator":
        download = S3Download(s3_client, request.source_bucket, request.source_key)
        upload = AzureUpload(container_client, request.destination_key)
        return cls(download, upload, request.part_size, cancel_event, logger)

    def transfer(self) -> str:
        """
        Streams the S3 object into an Azure block blob one part at a time.

        Each part is read, hashed and staged before the next part is read, so
        only one part is held in memory. The block list is committed once the
        source stream is exhausted, including when the object is empty.

        :return: The name of the committed blob.

        :raises SourceReadError: If reading the object from S3 fails.
        :raises DestinationWriteError: If staging or committing a block fails.
            Blocks staged before the failure are left uncommitted.
        :raises TransferCancelled: If the cancel event is set between parts.
        """
        with self.download:
            self.logger.info("Object response stream obtained")
            self.upload.ensure_container()
            self.logger.info(
                f"Upload initiated. Output object: {self.upload.container_name}/{self.upload.key}"
            )

            part_number = 1
            while True:
                if self.cancel_event is not None and self.cancel_event.is_set():
                    raise TransferCancelled(self.upload.key)

                chunk = self.download.read_up_to(self.part_size)
                if not chunk:
                    break
                self.logger.info(f"Part {part_number} read")

                block_id = self.block_id(part_number)
                checksum = BlockHash.encode(BlockHash.hash(chunk))
                self.upload.stage_block(block_id, chunk, checksum)
                self.logger.info(f"Part {part_number} uploaded")

                part_number += 1
                del chunk

        self.logger.info("Completing upload")
        self.upload.finalize()
        self.logger.info("Upload completed")
        return self.upload.key

    @staticmethod
    def block_id(part_number: int) -> str:
        return b64encode(f"BlockId{part_number:07d}".encode("ascii")).decode("ascii")
