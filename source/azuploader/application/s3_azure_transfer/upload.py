"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import logging
from typing import List

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import (
    BlobBlock,
    BlobClient,
    BlobServiceClient,
    ContainerClient,
)

from azuploader.application.util.exceptions import DestinationWriteError

logger = logging.getLogger()


class BlobState:
    ABSENT = "Absent"
    STAGING = "Staging"
    COMMITTED = "Committed"


def create_container_client(
    storage_account: str, access_key: str, container: str
) -> ContainerClient:
    service_client = BlobServiceClient(
        account_url=f"https://{storage_account}.blob.core.windows.net",
        credential={"account_name": storage_account, "account_key": access_key},
    )
    return service_client.get_container_client(container)


class AzureUpload:
    """
    Stages blocks of a single block blob and commits them as one object.

    Staged blocks are not visible until finalize() commits the ordered block
    list. Once committed the upload is terminal and further calls fail.
    """

    def __init__(self, container_client: ContainerClient, key: str) -> None:
        self.container_client = container_client
        self.container_name: str = container_client.container_name
        self.key = key
        self.blob_client: BlobClient = container_client.get_blob_client(key)
        self.block_ids: List[str] = []
        self.state = BlobState.ABSENT

    def ensure_container(self) -> None:
        try:
            self.container_client.create_container()
            logger.info(f"Created container {self.container_name}")
        except ResourceExistsError:
            logger.debug(f"Container {self.container_name} already exists")
        except AzureError as e:
            raise DestinationWriteError(
                self.container_name, self.key, "create container"
            ) from e

    def stage_block(self, block_id: str, chunk: bytes, checksum: str) -> None:
        if self.state == BlobState.COMMITTED:
            raise DestinationWriteError(
                self.container_name, self.key, "stage block after commit"
            )
        try:
            # Content-MD5 makes the service reject a block whose body does not match
            self.blob_client.stage_block(
                block_id,
                chunk,
                length=len(chunk),
                headers={"Content-MD5": checksum},
            )
        except AzureError as e:
            raise DestinationWriteError(
                self.container_name, self.key, f"stage block {block_id}"
            ) from e
        self.block_ids.append(block_id)
        self.state = BlobState.STAGING

    def finalize(self) -> None:
        if self.state == BlobState.COMMITTED:
            raise DestinationWriteError(
                self.container_name, self.key, "commit an already committed block list"
            )
        try:
            self.blob_client.commit_block_list(
                [BlobBlock(block_id=block_id) for block_id in self.block_ids]
            )
        except AzureError as e:
            raise DestinationWriteError(
                self.container_name, self.key, "commit block list"
            ) from e
        self.state = BlobState.COMMITTED
