"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import os
import typing

import boto3
import pytest

import aws_cdk as core
import aws_cdk.assertions as assertions
import cdk_nag

from azure.core.exceptions import (
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from azure.storage.blob import BlobBlock
from moto import mock_aws

from azuploader.infrastructure.stack import UploaderStack


if typing.TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
else:
    S3Client = object


class FakeBlobClient:
    """In-memory stand-in for an Azure block blob."""

    def __init__(self, fail_on_stage: typing.Optional[int] = None) -> None:
        self.staged: typing.Dict[str, bytes] = {}
        self.staged_checksums: typing.Dict[str, str] = {}
        self.stage_calls: typing.List[str] = []
        self.committed_ids: typing.Optional[typing.List[str]] = None
        self.content: typing.Optional[bytes] = None
        self.commit_calls = 0
        self.fail_on_stage = fail_on_stage
        self.fail_on_commit = False

    def stage_block(
        self,
        block_id: str,
        data: bytes,
        length: typing.Optional[int] = None,
        **kwargs: typing.Any,
    ) -> None:
        self.stage_calls.append(block_id)
        if self.fail_on_stage == len(self.stage_calls):
            raise HttpResponseError(message="Stage block failed")
        self.staged[block_id] = bytes(data)
        self.staged_checksums[block_id] = kwargs["headers"]["Content-MD5"]

    def commit_block_list(
        self, block_list: typing.List[BlobBlock], **kwargs: typing.Any
    ) -> None:
        self.commit_calls += 1
        if self.fail_on_commit:
            raise HttpResponseError(message="Commit block list failed")
        block_ids = [block.id for block in block_list]
        for block_id in block_ids:
            if block_id not in self.staged:
                raise ResourceNotFoundError(message=f"Block {block_id} not staged")
        self.committed_ids = block_ids
        self.content = b"".join(self.staged[block_id] for block_id in block_ids)


class FakeContainerClient:
    def __init__(self, container_name: str = "test-container") -> None:
        self.container_name = container_name
        self.exists = False
        self.blobs: typing.Dict[str, FakeBlobClient] = {}
        self.fail_on_stage: typing.Optional[int] = None

    def create_container(self) -> None:
        if self.exists:
            raise ResourceExistsError(message="The specified container already exists.")
        self.exists = True

    def get_blob_client(self, blob: str) -> FakeBlobClient:
        if blob not in self.blobs:
            self.blobs[blob] = FakeBlobClient(self.fail_on_stage)
        return self.blobs[blob]


@pytest.fixture
def container_client() -> FakeContainerClient:
    return FakeContainerClient()


@pytest.fixture(scope="module")
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto"""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
    os.environ["AWS_REGION"] = "us-east-1"


@pytest.fixture
def s3_client(aws_credentials: None) -> typing.Iterator[S3Client]:
    with mock_aws():
        connection: S3Client = boto3.client("s3", region_name="us-east-1")
        connection.create_bucket(Bucket="test-bucket")
        yield connection


@pytest.fixture
def stack() -> UploaderStack:
    # Layer bundling needs Docker, the template is checked without it
    app = core.App(context={"aws:cdk:bundling-stacks": []})
    stack = UploaderStack(app, "azuploader")
    core.Aspects.of(stack).add(
        cdk_nag.AwsSolutionsChecks(log_ignores=True, verbose=True)
    )
    return stack


@pytest.fixture
def template(stack: UploaderStack) -> assertions.Template:
    return assertions.Template.from_stack(stack)
