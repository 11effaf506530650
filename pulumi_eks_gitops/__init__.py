"""Pulumi components for an EKS cluster running Argo CD."""
