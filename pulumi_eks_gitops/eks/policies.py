"""IAM policy documents for pod identity roles."""

from __future__ import annotations

from .config import POD_IDENTITY_SERVICE_PRINCIPAL


def build_pod_identity_trust_policy() -> dict:
    """Trust policy that lets only the EKS pod identity service assume the role."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Action": ["sts:AssumeRole", "sts:TagSession"],
                "Principal": {"Service": POD_IDENTITY_SERVICE_PRINCIPAL},
            }
        ],
    }


def build_ecr_access_policy() -> dict:
    """Full ECR access, used by the Argo CD image updater to read registries."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Action": ["ecr:*"],
                "Resource": ["*"],
            }
        ],
    }
