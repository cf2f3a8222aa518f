"""Cluster state readers: where components are installed right now."""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import requests
import yaml
from pydantic import BaseModel, Field, ValidationError

from ..config import Config
from .models import ChangeSetError, UnknownServiceError

logger = logging.getLogger(__name__)


class ClusterState(ABC):
    """Read-only view of the live cluster inventory."""

    @abstractmethod
    def is_installed(self, component_name: str, host_name: str) -> bool:
        ...

    @abstractmethod
    def hosts_running(self, service_name: str, component_name: str) -> List[str]:
        ...

    @abstractmethod
    def registered_component_types(self, service_name: str) -> Set[str]:
        ...


class HostComponentModel(BaseModel):
    component_name: str
    host_name: str


class ServiceModel(BaseModel):
    components: List[str] = Field(default_factory=list)
    host_components: List[HostComponentModel] = Field(default_factory=list)


class ClusterStateModel(BaseModel):
    """Schema of a cluster state snapshot document."""
    services: Dict[str, ServiceModel] = Field(default_factory=dict)


class StaticClusterState(ClusterState):
    """Cluster state from a snapshot document."""

    def __init__(self, model: ClusterStateModel):
        self._model = model

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StaticClusterState':
        try:
            return cls(ClusterStateModel(**(data or {})))
        except ValidationError as e:
            raise ChangeSetError(f"Invalid cluster state: {e}") from e

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'StaticClusterState':
        """Load a cluster state snapshot from a YAML file."""
        path = Path(path).expanduser()
        if not path.exists():
            raise ChangeSetError(f"Cluster state file not found: {path}")
        with open(path, 'r') as f:
            return cls.from_dict(yaml.safe_load(f) or {})

    def _service(self, service_name: str) -> ServiceModel:
        try:
            return self._model.services[service_name]
        except KeyError:
            raise UnknownServiceError(f"Service {service_name} is not installed in the cluster") from None

    def is_installed(self, component_name: str, host_name: str) -> bool:
        return any(
            hc.component_name == component_name and hc.host_name == host_name
            for service in self._model.services.values()
            for hc in service.host_components
        )

    def hosts_running(self, service_name: str, component_name: str) -> List[str]:
        return [
            hc.host_name
            for hc in self._service(service_name).host_components
            if hc.component_name == component_name
        ]

    def registered_component_types(self, service_name: str) -> Set[str]:
        service = self._service(service_name)
        # Any component with a host component is registered even if not listed explicitly
        return set(service.components) | {hc.component_name for hc in service.host_components}


class AmbariClusterState(ClusterState):
    """Cluster state read from the management REST API on every call."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        cluster_name: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[int] = None,
    ):
        self.api_url = (api_url or Config.API_URL).rstrip('/')
        self.cluster_name = cluster_name or Config.CLUSTER_NAME
        self.timeout = timeout or Config.API_TIMEOUT
        self.session = session or requests.Session()
        if session is None:
            self.session.auth = (Config.API_USER, Config.API_PASSWORD)
            self.session.headers.update({'X-Requested-By': Config.REQUESTED_BY})

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self.api_url}/clusters/{self.cluster_name}{path}"
        logger.debug(f"GET {url} {params or ''}")
        response = self.session.get(url, params=params, timeout=self.timeout)
        if response.status_code == 404:
            return {}
        response.raise_for_status()
        return response.json()

    def _host_components(self, component_name: str, service_name: Optional[str] = None) -> List[str]:
        params = {
            'HostRoles/component_name': component_name,
            'fields': 'HostRoles/host_name,HostRoles/service_name',
        }
        items = self._get('/host_components', params).get('items', [])
        return [
            item['HostRoles']['host_name']
            for item in items
            if service_name is None or item['HostRoles'].get('service_name', service_name) == service_name
        ]

    def is_installed(self, component_name: str, host_name: str) -> bool:
        return host_name in self._host_components(component_name)

    def hosts_running(self, service_name: str, component_name: str) -> List[str]:
        return self._host_components(component_name, service_name)

    def registered_component_types(self, service_name: str) -> Set[str]:
        data = self._get(
            f"/services/{service_name}",
            {'fields': 'components/ServiceComponentInfo/component_name'},
        )
        if not data:
            raise UnknownServiceError(f"Service {service_name} is not installed in the cluster")
        return {
            item['ServiceComponentInfo']['component_name']
            for item in data.get('components', [])
        }
