"""
Pulumi program for an EKS cluster managed through Argo CD.

This script sets up:
1. A VPC with one public subnet per availability zone.
2. An EKS cluster with the pod identity agent and an admin access entry.
3. Argo CD, its image updater (with ECR access via pod identity) and the
   initial Argo CD objects.
4. The Pulumi access token secret in the Argo CD namespace.
"""

import os

import pulumi

from pulumi_eks_gitops.config import load_project_config
from pulumi_eks_gitops.platform import GitOpsPlatform

# ------------------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------------------
pulumi_config = pulumi.Config()
config = load_project_config(pulumi_config)
access_token = pulumi_config.get_secret("pulumi-pat")

deployment_name = f"{pulumi.get_project()}-{pulumi.get_stack()}"
initial_objects = os.path.join(os.path.dirname(__file__), "argocd-initial-objects.yaml")

# ------------------------------------------------------------------------------
# Platform
# ------------------------------------------------------------------------------
platform = GitOpsPlatform(
    deployment_name,
    project_config=config,
    initial_objects=initial_objects,
    access_token=access_token,
    tags={"Project": deployment_name, "ManagedBy": "Pulumi"},
)

pulumi.export("vpc_id", platform.vpc.vpc_id)
pulumi.export("cluster_name", platform.cluster.cluster_name)
pulumi.export("argocd_namespace", platform.argocd.namespace)
pulumi.export("kubeconfig", platform.kubeconfig)
