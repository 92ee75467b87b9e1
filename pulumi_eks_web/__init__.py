"""Pulumi components for an EKS cluster serving the py-go web workloads."""
