"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import typing
from types import TracebackType

from botocore.exceptions import BotoCoreError, ClientError

from azuploader.application.util.exceptions import AccessViolation, SourceReadError

if typing.TYPE_CHECKING:
    from mypy_boto3_s3.client import S3Client
    from mypy_boto3_s3.type_defs import GetObjectOutputTypeDef
else:
    S3Client = object
    GetObjectOutputTypeDef = object

READ_BUFFER_SIZE = 81920


class S3Download:
    def __init__(self, s3_client: S3Client, bucket_name: str, key: str) -> None:
        self.bucket_name = bucket_name
        self.key = key
        try:
            self.response: GetObjectOutputTypeDef = s3_client.get_object(
                Bucket=bucket_name, Key=key
            )
        except (ClientError, BotoCoreError) as e:
            raise SourceReadError(bucket_name, key) from e
        self.closed = False

    def read_up_to(self, size: int) -> bytes:
        """
        Read from the object stream until size bytes are accumulated or the
        stream is exhausted. A single read on the underlying body may return
        fewer bytes than requested without being at end-of-stream, so reads
        are repeated until one comes back empty.

        :return: Between 0 and size bytes. An empty result means end-of-stream.
        :raises SourceReadError: If reading from S3 fails.
        """
        if self.closed:
            raise AccessViolation()
        chunks: list[bytes] = []
        remaining = size
        try:
            while remaining > 0:
                data = self.response["Body"].read(min(remaining, READ_BUFFER_SIZE))
                if not data:
                    break
                chunks.append(data)
                remaining -= len(data)
        except (ClientError, BotoCoreError) as e:
            raise SourceReadError(self.bucket_name, self.key) from e
        return b"".join(chunks)

    def close(self) -> None:
        if not self.closed:
            self.response["Body"].close()
            self.closed = True

    def __enter__(self) -> "S3Download":
        return self

    def __exit__(
        self,
        exc_type: typing.Optional[typing.Type[BaseException]],
        exc_value: typing.Optional[BaseException],
        traceback: typing.Optional[TracebackType],
    ) -> None:
        self.close()

    @staticmethod
    def content_type(
        s3_client: S3Client, bucket_name: str, key: str
    ) -> typing.Optional[str]:
        try:
            response = s3_client.head_object(Bucket=bucket_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise SourceReadError(bucket_name, key) from e
        return response.get("ContentType")
