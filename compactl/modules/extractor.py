"""Find the component actions declared by a set of configuration properties.

Actions that are already satisfied by the cluster are filtered out here, so
re-running the same change set never produces requests for work that is done.
"""
import logging
from typing import Iterable, List

from .catalog import DependencyCatalog
from .cluster_state import ClusterState
from .models import ComponentAction, ComponentActionSpec, ConfigEntry, ResolvedComponentAction

logger = logging.getLogger(__name__)


def extract_config_actions(configs: Iterable[ConfigEntry]) -> List[ConfigEntry]:
    """Return the configuration entries that carry a component action."""
    return [config for config in configs if config.config_action is not None]


def _specs(configs: Iterable[ConfigEntry], action: ComponentAction) -> List[ComponentActionSpec]:
    return [
        config.config_action for config in extract_config_actions(configs)
        if config.config_action.action == action
    ]


def get_components_to_delete(
    configs: Iterable[ConfigEntry],
    cluster_state: ClusterState,
) -> List[ComponentActionSpec]:
    """Delete actions whose component is still installed on the target host."""
    to_delete = []
    seen = set()
    for spec in _specs(configs, ComponentAction.DELETE):
        key = (spec.component_name, spec.host_name)
        if key in seen:
            continue
        seen.add(key)
        if cluster_state.is_installed(spec.component_name, spec.host_name):
            to_delete.append(spec)
        else:
            logger.debug(f"{spec.component_name} is already absent from {spec.host_name}, skipping delete")
    return to_delete


def get_components_to_add(
    configs: Iterable[ConfigEntry],
    catalog: DependencyCatalog,
    cluster_state: ClusterState,
) -> List[ResolvedComponentAction]:
    """Add actions whose component is not yet present on the host for its owning service."""
    to_add = []
    for spec in _specs(configs, ComponentAction.ADD):
        service_name = catalog.owner_service(spec.component_name)
        # The same host may run components of other services, so only look at the owner
        if spec.host_name in cluster_state.hosts_running(service_name, spec.component_name):
            logger.debug(f"{spec.component_name} is already present on {spec.host_name}, skipping add")
            continue
        to_add.append(ResolvedComponentAction(
            component_name=spec.component_name,
            host_name=spec.host_name,
            is_client=catalog.is_client(spec.component_name),
        ))
    return to_add


def is_component_actions_present(
    configs: Iterable[ConfigEntry],
    catalog: DependencyCatalog,
    cluster_state: ClusterState,
) -> bool:
    """Tell whether saving these configs would add or delete any component."""
    configs = list(configs)
    return bool(
        get_components_to_delete(configs, cluster_state)
        or get_components_to_add(configs, catalog, cluster_state)
    )
