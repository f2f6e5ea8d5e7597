"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import os
from typing import Dict, Mapping, Optional

from azuploader.application.mapping.key_mapper import normalize_folder
from azuploader.application.util.exceptions import ConfigurationError

MB = 2**20


class VariableNames:
    FILE_PART_SIZE = "FilePartSizeMB"
    FLATTEN_FILE_PATHS = "FlattenFilePaths"
    OUTPUT_FOLDER_PATH = "OutputFolderPath"
    AZURE_ACCESS_KEY = "AzureAccessKey"
    STORAGE_ACCOUNT = "StorageAccount"
    OUTPUT_CONTAINER = "OutputContainer"


class Variables:
    DEFAULT_FILE_PART_SIZE_MB = 100
    MINIMUM_FILE_PART_SIZE_MB = 5
    MAXIMUM_FILE_PART_SIZE_MB = 100

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.environ: Dict[str, str] = dict(os.environ if environ is None else environ)

    @property
    def file_part_size(self) -> int:
        value = self._get(VariableNames.FILE_PART_SIZE)
        if value is None:
            return self.DEFAULT_FILE_PART_SIZE_MB * MB
        try:
            size_mb = int(value)
        except ValueError:
            return self.DEFAULT_FILE_PART_SIZE_MB * MB
        size_mb = min(
            max(size_mb, self.MINIMUM_FILE_PART_SIZE_MB), self.MAXIMUM_FILE_PART_SIZE_MB
        )
        return size_mb * MB

    @property
    def flatten_file_paths(self) -> bool:
        value = self._get(VariableNames.FLATTEN_FILE_PATHS)
        return value is not None and value.strip().lower() == "true"

    @property
    def output_folder_path(self) -> str:
        return normalize_folder(self._get(VariableNames.OUTPUT_FOLDER_PATH))

    @property
    def azure_access_key(self) -> str:
        return self._require(VariableNames.AZURE_ACCESS_KEY)

    @property
    def storage_account(self) -> str:
        return self._require(VariableNames.STORAGE_ACCOUNT)

    @property
    def output_container(self) -> str:
        return self._require(VariableNames.OUTPUT_CONTAINER)

    def validate(self) -> None:
        for name in (
            VariableNames.STORAGE_ACCOUNT,
            VariableNames.AZURE_ACCESS_KEY,
            VariableNames.OUTPUT_CONTAINER,
        ):
            self._require(name)

    def _require(self, name: str) -> str:
        value = self._get(name)
        if value is None:
            raise ConfigurationError(name)
        return value

    def _get(self, name: str) -> Optional[str]:
        # Absent and blank values are both treated as unset
        value = self.environ.get(name)
        if value is None or not value.strip():
            return None
        return value
