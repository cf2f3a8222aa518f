"""Builders for the management API requests that make up a batch."""
from typing import Any, Dict, List, Optional, Sequence, Union

from ..config import Config
from .models import ApiRequest, Batch, BatchOperation, HostComponentState

INSTALL_COMPONENTS_CONTEXT = "Install Components"
START_COMPONENTS_CONTEXT = "Start Components"
INSTALL_CONTEXT = "Install {0}"
START_CONTEXT = "Start {0}"
STOP_CONTEXT = "Stop {0}"
REFRESH_QUEUES_CONTEXT = "Refresh YARN Capacity Scheduler"
REFRESH_QUEUES_COMMAND = "REFRESHQUEUES"
REFRESH_CONFIG_TAG = "capacity-scheduler"


def _as_list(components: Union[str, Sequence[str]]) -> List[str]:
    return [components] if isinstance(components, str) else list(components)


def _command_body(context, command, config_tag, service_name, component_name, hosts) -> Dict[str, Any]:
    return {
        "RequestInfo": {
            "context": context,
            "command": command,
            "parameters/forceRefreshConfigTags": config_tag
        },
        "Requests/resource_filters": [
            {
                "service_name": service_name,
                "component_name": component_name,
                "hosts": ','.join(hosts)
            }
        ]
    }


class RequestBuilder:
    """Builds batch operations for one cluster."""

    def __init__(self, cluster_name: Optional[str] = None, api_prefix: str = '/api/v1'):
        self.cluster_name = cluster_name or Config.CLUSTER_NAME
        self.api_prefix = api_prefix.rstrip('/')

    @property
    def cluster_uri(self) -> str:
        return f"{self.api_prefix}/clusters/{self.cluster_name}"

    def create_component(self, service_name: str, component_name: str) -> BatchOperation:
        """Register a component type on its service."""
        return BatchOperation(
            method='POST',
            uri=f"{self.cluster_uri}/services/{service_name}/components/{component_name}",
        )

    def create_host_components(self, host_name: str, components: Union[str, Sequence[str]]) -> BatchOperation:
        """Create one or more host components on a host."""
        return BatchOperation(
            method='POST',
            uri=f"{self.cluster_uri}/hosts",
            body={
                "RequestInfo": {
                    "query": f"Hosts/host_name.in({host_name})"
                },
                "Body": {
                    "host_components": [
                        {"HostRoles": {"component_name": name}} for name in _as_list(components)
                    ]
                }
            },
        )

    def update_host_components(
        self,
        host_name: str,
        components: Union[str, Sequence[str]],
        desired_state: HostComponentState,
        context: str,
    ) -> BatchOperation:
        """Move one or more host components on a host to ``desired_state``."""
        query = f"HostRoles/component_name.in({','.join(_as_list(components))})"
        return BatchOperation(
            method='PUT',
            uri=f"{self.cluster_uri}/hosts/{host_name}/host_components",
            body={
                "RequestInfo": {
                    "context": context,
                    "operation_level": {
                        "level": "HOST",
                        "cluster_name": self.cluster_name,
                        "host_names": host_name
                    },
                    "query": query
                },
                "Body": {
                    "HostRoles": {
                        "state": desired_state.value
                    }
                }
            },
        )

    def install_host_components(self, host_name, components, context: Optional[str] = None) -> BatchOperation:
        return self.update_host_components(
            host_name, components, HostComponentState.INSTALLED, context or INSTALL_COMPONENTS_CONTEXT
        )

    def start_host_components(self, host_name, components, context: Optional[str] = None) -> BatchOperation:
        return self.update_host_components(
            host_name, components, HostComponentState.STARTED, context or START_COMPONENTS_CONTEXT
        )

    def delete_host_component(self, host_name: str, component_name: str) -> BatchOperation:
        return BatchOperation(
            method='DELETE',
            uri=f"{self.cluster_uri}/hosts/{host_name}/host_components/{component_name}",
        )

    def refresh_queues(self, service_name: str, component_name: str, hosts: Sequence[str]) -> BatchOperation:
        """Ask the scheduler daemons to reload their queue configuration."""
        return BatchOperation(
            method='POST',
            uri=f"{self.cluster_uri}/requests",
            body=_command_body(
                REFRESH_QUEUES_CONTEXT, REFRESH_QUEUES_COMMAND, REFRESH_CONFIG_TAG,
                service_name, component_name, hosts,
            ),
        )

    def command_request(
        self,
        name: str,
        command: str,
        context: str,
        service_name: str,
        component_name: str,
        hosts: Sequence[str],
        config_tag: str,
    ) -> ApiRequest:
        """Standalone custom command request, sent outside any batch."""
        return ApiRequest(
            method='POST',
            path=f"/clusters/{self.cluster_name}/requests",
            name=name,
            body=_command_body(context, command, config_tag, service_name, component_name, hosts),
        )

    def request_schedule(
        self,
        batch: Batch,
        interval_seconds: Optional[int] = None,
        tolerate_size: Optional[int] = None,
    ) -> ApiRequest:
        """Wrap a batch in a request schedule submission."""
        if interval_seconds is None:
            interval_seconds = Config.BATCH_INTERVAL_SECONDS
        if tolerate_size is None:
            tolerate_size = Config.BATCH_TOLERATE_SIZE
        body: List[Dict[str, Any]] = [
            {
                "RequestSchedule": {
                    "batch": [
                        {
                            "requests": [op.to_dict() for op in batch.operations]
                        },
                        {
                            "batch_settings": {
                                "batch_separation_in_seconds": interval_seconds,
                                "task_failure_tolerance": tolerate_size
                            }
                        }
                    ]
                }
            }
        ]
        return ApiRequest(
            method='POST',
            path=f"/clusters/{self.cluster_name}/request_schedules",
            name='common.batch.request_schedules',
            body=body,
        )


def set_order_ids(operations: List[BatchOperation]) -> List[BatchOperation]:
    """Number operations 1..N in the order they will execute."""
    for index, operation in enumerate(operations, start=1):
        operation.order_id = index
    return operations
