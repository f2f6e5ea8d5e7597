"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from typing import Any, Dict, List, Optional
from cdk_nag import NagSuppressions

ID_REASON_MAP: Dict[str, Dict[str, str]] = {
    "AwsSolutions-S1": {
        "reason": "Source Bucket has server access logs disabled and will be addressed later."
    },
    "AwsSolutions-IAM4": {
        "reason": "CDK grants AWS managed policy for Lambda basic execution by default. Replacing it with a customer managed policy will be addressed later.",
        "applies_to": "Policy::arn:<AWS::Partition>:iam::aws:policy/{}",
    },
    "AwsSolutions-IAM5": {
        "reason": "Read access to the source bucket is granted on every object in the bucket, since any object may trigger an upload.",
    },
    "AwsSolutions-L1": {
        "reason": "The runtime is pinned to the Python version the application is tested against.",
    },
}


def nag_suppressor(
    nag_obj: Any,
    nag_id_list: List[str],
    applies_to: Optional[List[str]] = None,
    custom_reason: Optional[str] = None,
    apply_to_children: bool = False,
) -> None:
    suppressions = []
    for nag_id in nag_id_list:
        reason = custom_reason or ID_REASON_MAP[nag_id]["reason"]
        suppression: Dict[str, Any] = {"id": nag_id, "reason": reason}
        add_applies_to(suppression, nag_id, applies_to)
        suppressions.append(suppression)
    NagSuppressions.add_resource_suppressions(
        nag_obj, suppressions, apply_to_children=apply_to_children
    )


def add_applies_to(
    suppression: Dict[str, Any], nag_id: str, applies_to: Optional[List[str]]
) -> None:
    template = ID_REASON_MAP[nag_id].get("applies_to")
    if template and applies_to:
        suppression["appliesTo"] = [template.format(item) for item in applies_to]
