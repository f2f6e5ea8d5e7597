"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from typing import Optional


def map_key(source_key: str, flatten: bool, output_folder: str) -> str:
    """
    Derive the destination blob name for an S3 object key.

    When flatten is set, everything up to and including the first '/' is
    dropped. The output folder must already be normalized (see
    normalize_folder) and is prepended verbatim.
    """
    destination_key = source_key
    if flatten:
        destination_key = destination_key[destination_key.find("/") + 1 :]
    return output_folder + destination_key


def normalize_folder(folder: Optional[str]) -> str:
    if folder is None or not folder.strip():
        return ""
    normalized = folder.replace("\\", "/").strip("/")
    if not normalized:
        return ""
    return normalized + "/"
