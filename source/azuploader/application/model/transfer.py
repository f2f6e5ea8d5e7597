"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from typing import NamedTuple

from azuploader.application.config.variables import Variables
from azuploader.application.mapping.key_mapper import map_key


class TransferRequest(NamedTuple):
    source_bucket: str
    source_key: str
    destination_container: str
    destination_key: str
    part_size: int

    @classmethod
    def from_variables(
        cls, source_bucket: str, source_key: str, variables: Variables
    ) -> "TransferRequest":
        return cls(
            source_bucket=source_bucket,
            source_key=source_key,
            destination_container=variables.output_container,
            destination_key=map_key(
                source_key,
                variables.flatten_file_paths,
                variables.output_folder_path,
            ),
            part_size=variables.file_part_size,
        )
