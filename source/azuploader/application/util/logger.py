"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import logging
from typing import Any, MutableMapping, Tuple, Union


class RequestLogger(logging.LoggerAdapter):  # type: ignore[type-arg]
    """
    Prefixes every message with the id of the Lambda request being served,
    so that interleaved log streams can be attributed to one invocation.
    """

    def __init__(self, logger: logging.Logger, request_id: str) -> None:
        super().__init__(logger, {"request_id": request_id})

    @property
    def request_id(self) -> str:
        assert self.extra is not None
        return str(self.extra["request_id"])

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.request_id} - {msg}", kwargs


TransferLogger = Union[logging.Logger, RequestLogger]
