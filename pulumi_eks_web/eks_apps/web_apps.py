"""Python and Go web workloads behind a load balancer and an ALB ingress."""

from __future__ import annotations

import pulumi
import pulumi_kubernetes as k8s

from ..config import AppConfig
from ..eks.cluster import EKSCluster

APP_GROUP_LABEL = "app.kubernetes.io/part-of"
PENDING_HOSTNAME = "pending"

LOAD_BALANCER_ANNOTATIONS = {
    "service.beta.kubernetes.io/aws-load-balancer-type": "alb",
}
INGRESS_ANNOTATIONS = {
    "kubernetes.io/ingress.class": "alb",
    "alb.ingress.kubernetes.io/scheme": "internet-facing",
}


def build_pod_labels(app: AppConfig, app_group: str) -> dict[str, str]:
    return {"app": app.label, APP_GROUP_LABEL: app_group}


def build_deployment_spec(app: AppConfig, app_group: str) -> dict:
    """Build the Deployment spec running a single container for `app`."""
    labels = build_pod_labels(app, app_group)
    return {
        "selector": {"matchLabels": labels},
        "replicas": app.replicas,
        "template": {
            "metadata": {"labels": labels},
            "spec": {
                "containers": [
                    {
                        "name": app.container_name,
                        "image": app.image,
                        "ports": [{"containerPort": app.container_port}],
                    }
                ],
            },
        },
    }


def build_backend_service_spec(app: AppConfig, app_group: str) -> dict:
    """Build the ClusterIP Service spec the ingress forwards `app.path` to."""
    return {
        "type": "ClusterIP",
        "selector": build_pod_labels(app, app_group),
        "ports": [
            {
                "name": app.label,
                "port": app.container_port,
                "targetPort": app.container_port,
            }
        ],
    }


def build_load_balancer_service_spec(apps: list[AppConfig], app_group: str) -> dict:
    """Build the LoadBalancer Service spec exposing every app on its own port."""
    return {
        "type": "LoadBalancer",
        "selector": {APP_GROUP_LABEL: app_group},
        "ports": [
            {
                "name": app.label,
                "port": app.service_port,
                "targetPort": app.container_port,
            }
            for app in apps
        ],
    }


def build_ingress_spec(apps: list[AppConfig]) -> dict:
    """Build a single-rule ingress spec with one prefix path per app."""
    return {
        "rules": [
            {
                "http": {
                    "paths": [
                        {
                            "path": app.path,
                            "pathType": "Prefix",
                            "backend": {
                                "service": {
                                    "name": app.backend_service_name,
                                    "port": {"number": app.container_port},
                                }
                            },
                        }
                        for app in apps
                    ]
                }
            }
        ]
    }


def load_balancer_hostname(status: k8s.core.v1.outputs.ServiceStatus | None) -> str:
    """Return the first load balancer ingress hostname, or "pending" until one is assigned."""
    if status is None or status.load_balancer is None:
        return PENDING_HOSTNAME
    ingress = status.load_balancer.ingress or []
    if not ingress or not ingress[0].hostname:
        return PENDING_HOSTNAME
    return ingress[0].hostname


class WebApps(pulumi.ComponentResource):
    """Deploys the web apps onto an EKS cluster.

    - One Deployment and one ClusterIP backend Service per app
    - A shared LoadBalancer Service selecting every app in the group
    - An ALB Ingress routing each app's path prefix to its backend Service
    """

    deployments: dict[str, k8s.apps.v1.Deployment]
    backend_services: dict[str, k8s.core.v1.Service]
    load_balancer: k8s.core.v1.Service
    ingress: k8s.networking.v1.Ingress
    lb_url: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        apps: list[AppConfig],
        app_group: str,
        k8s_provider: k8s.Provider,
        opts: pulumi.ResourceOptions | None = None,
    ):
        if not apps:
            raise ValueError("At least one app is required")

        super().__init__("pulumi-eks-web:eks_apps:WebApps", name, None, opts)

        resource_opts = pulumi.ResourceOptions(parent=self, provider=k8s_provider)

        self.deployments = {}
        self.backend_services = {}
        for app in apps:
            self.deployments[app.name] = k8s.apps.v1.Deployment(
                app.name,
                spec=build_deployment_spec(app, app_group),
                opts=resource_opts,
            )
            self.backend_services[app.name] = k8s.core.v1.Service(
                app.backend_service_name,
                metadata={"name": app.backend_service_name},
                spec=build_backend_service_spec(app, app_group),
                opts=resource_opts,
            )

        self.load_balancer = k8s.core.v1.Service(
            f"{name}-lb",
            metadata={"annotations": LOAD_BALANCER_ANNOTATIONS},
            spec=build_load_balancer_service_spec(apps, app_group),
            opts=resource_opts,
        )

        self.ingress = k8s.networking.v1.Ingress(
            f"{name}-ingress",
            metadata={"annotations": INGRESS_ANNOTATIONS},
            spec=build_ingress_spec(apps),
            opts=resource_opts.merge(
                pulumi.ResourceOptions(
                    depends_on=list(self.backend_services.values())
                )
            ),
        )

        self.lb_url = self.load_balancer.status.apply(load_balancer_hostname)

        self.register_outputs({"lb_url": self.lb_url})

    @classmethod
    def from_cluster(
        cls,
        name: str,
        cluster: EKSCluster,
        apps: list[AppConfig],
        app_group: str,
        parent: pulumi.Resource | None = None,
    ) -> "WebApps":
        """Create WebApps on an EKSCluster using its Kubernetes provider."""
        return cls(
            name,
            apps=apps,
            app_group=app_group,
            k8s_provider=cluster.k8s_provider,
            opts=pulumi.ResourceOptions(parent=parent, depends_on=[cluster]),
        )
