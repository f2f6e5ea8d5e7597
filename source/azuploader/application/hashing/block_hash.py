"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import hashlib
from base64 import b64encode


class BlockHash:
    DIGEST_SIZE = 16

    @classmethod
    def hash(cls, chunk: bytes) -> bytes:
        return hashlib.md5(chunk, usedforsecurity=False).digest()

    @classmethod
    def encode(cls, digest: bytes) -> str:
        return b64encode(digest[: cls.DIGEST_SIZE]).decode("ascii")
