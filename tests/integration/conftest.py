from __future__ import annotations

import os
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path

import boto3
import pulumi
import pulumi.automation as auto
import pulumi_aws as aws
import pytest
from testcontainers.localstack import LocalStackContainer

AWS_REGION = "us-east-1"
AWS_ACCESS_KEY_ID = "test"
AWS_SECRET_ACCESS_KEY = "test"
PULUMI_PROJECT_NAME = "pulumi-eks-web-integration-tests"

# Provider settings that keep the AWS provider from reaching real AWS
_LOCALSTACK_STACK_CONFIG = {
    "aws:region": AWS_REGION,
    "aws:accessKey": AWS_ACCESS_KEY_ID,
    "aws:secretKey": AWS_SECRET_ACCESS_KEY,
    "aws:skipCredentialsValidation": "true",
    "aws:skipMetadataApiCheck": "true",
    "aws:skipRequestingAccountId": "true",
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    integration_dir = Path(__file__).parent
    for item in items:
        if integration_dir in Path(item.fspath).parents:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session", autouse=True)
def localstack_container() -> LocalStackContainer:
    with LocalStackContainer("localstack/localstack:latest").with_services(
        "ec2", "iam", "sts"
    ) as localstack:
        yield localstack


@pytest.fixture(scope="session", autouse=True)
def localstack_endpoint(localstack_container: LocalStackContainer) -> str:
    return localstack_container.get_url()


def _boto3_client(service: str, endpoint_url: str):
    return boto3.client(
        service,
        endpoint_url=endpoint_url,
        region_name=AWS_REGION,
        aws_access_key_id=AWS_ACCESS_KEY_ID,
        aws_secret_access_key=AWS_SECRET_ACCESS_KEY,
    )


@pytest.fixture(scope="session")
def ec2_client(localstack_endpoint: str):
    return _boto3_client("ec2", localstack_endpoint)


@pytest.fixture(scope="session")
def iam_client(localstack_endpoint: str):
    return _boto3_client("iam", localstack_endpoint)


@pytest.fixture(scope="session", autouse=True)
def localstack_env(localstack_endpoint: str) -> dict[str, str]:
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("AWS_ACCESS_KEY_ID", AWS_ACCESS_KEY_ID)
        mp.setenv("AWS_SECRET_ACCESS_KEY", AWS_SECRET_ACCESS_KEY)
        mp.setenv("AWS_REGION", AWS_REGION)
        mp.setenv("AWS_DEFAULT_REGION", AWS_REGION)
        mp.setenv("AWS_ENDPOINT_URL", localstack_endpoint)
        mp.setenv("PULUMI_CONFIG_PASSPHRASE", "localstack")
        mp.setenv("PULUMI_SKIP_UPDATE_CHECK", "true")
        yield


@contextmanager
def pulumi_stack_factory():
    """Yield a factory for throwaway stacks backed by a local file backend.

    Every created stack is destroyed and removed on exit.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        tmp_path = Path(temp_dir)
        backend_dir = tmp_path / "pulumi-backend"
        backend_dir.mkdir(parents=True, exist_ok=True)
        pulumi_home = tmp_path / "pulumi-home"
        pulumi_home.mkdir(parents=True, exist_ok=True)

        created_stacks: list[auto.Stack] = []

        def _create_stack(
            program,
            config_overrides: dict[str, str] | None = None,
        ) -> auto.Stack:
            env_vars = {
                **os.environ.copy(),
                "PULUMI_BACKEND_URL": f"file://{backend_dir}",
                "PULUMI_HOME": str(pulumi_home),
            }
            stack = auto.create_or_select_stack(
                stack_name=f"test-{uuid.uuid4().hex[:8]}",
                project_name=PULUMI_PROJECT_NAME,
                program=program,
                opts=auto.LocalWorkspaceOptions(env_vars=env_vars),
            )
            for key, value in {
                **_LOCALSTACK_STACK_CONFIG,
                **(config_overrides or {}),
            }.items():
                stack.set_config(key, auto.ConfigValue(value=value))

            created_stacks.append(stack)
            return stack

        try:
            yield _create_stack
        finally:
            for stack in created_stacks:
                try:
                    stack.destroy(on_output=None)
                finally:
                    stack.workspace.remove_stack(stack.name)


def localstack_provider(name: str = "localstack") -> aws.Provider:
    """AWS provider pointed at LocalStack through the stack's aws: config."""
    config = pulumi.Config("aws")
    return aws.Provider(
        name,
        region=config.require("region"),
        access_key=config.require("accessKey"),
        secret_key=config.require("secretKey"),
        skip_credentials_validation=True,
        skip_metadata_api_check=True,
        skip_requesting_account_id=True,
    )
