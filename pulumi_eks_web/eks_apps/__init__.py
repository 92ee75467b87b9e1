"""EKS applications."""

from .web_apps import (
    WebApps,
    build_backend_service_spec,
    build_deployment_spec,
    build_ingress_spec,
    build_load_balancer_service_spec,
    load_balancer_hostname,
)

__all__ = [
    "WebApps",
    "build_backend_service_spec",
    "build_deployment_spec",
    "build_ingress_spec",
    "build_load_balancer_service_spec",
    "load_balancer_hostname",
]
