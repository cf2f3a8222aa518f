"""Compile component additions and deletions into ordered request batches."""
import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from ..utils.strings import format_list
from .catalog import DependencyCatalog
from .cluster_state import ClusterState
from .models import (
    Batch, BatchKind, BatchOperation, ComponentActionSpec, ConfigEntry, RefreshState,
    ResolvedComponentAction,
)
from .refresh import RefreshCoordinator
from .requests_builder import INSTALL_CONTEXT, START_CONTEXT, STOP_CONTEXT, RequestBuilder, set_order_ids

logger = logging.getLogger(__name__)


def _unique(names: Iterable[str]) -> List[str]:
    return list(OrderedDict.fromkeys(names))


class BatchCompiler:
    """Turns resolved component actions into batches of operations."""

    def __init__(
        self,
        builder: RequestBuilder,
        catalog: DependencyCatalog,
        cluster_state: ClusterState,
        refresh: RefreshCoordinator,
    ):
        self.builder = builder
        self.catalog = catalog
        self.cluster_state = cluster_state
        self.refresh = refresh

    def compile_delete_batch(
        self,
        components_to_delete: List[ComponentActionSpec],
        configs: List[ConfigEntry],
        state: RefreshState,
    ) -> Optional[Batch]:
        """One shared batch: optional refresh, then stop and delete for each target."""
        if not components_to_delete:
            return None
        if len(components_to_delete) > 1:
            logger.info(f"Deleting {len(components_to_delete)} components in one batch")

        operations: List[BatchOperation] = []
        self.refresh.queue_refresh(operations, configs, state)
        for component in components_to_delete:
            display_name = self.catalog.display_name(component.component_name)
            operations.append(self.builder.install_host_components(
                component.host_name, component.component_name, STOP_CONTEXT.format(display_name)
            ))
            operations.append(self.builder.delete_host_component(
                component.host_name, component.component_name
            ))
            logger.info(f"🗑️ Deleting {component.component_name} from {component.host_name}")

        return Batch(kind=BatchKind.DELETE, operations=set_order_ids(operations))

    def compile_add_batches(
        self,
        components_to_add: List[ResolvedComponentAction],
        configs: List[ConfigEntry],
        state: RefreshState,
    ) -> List[Batch]:
        """One batch per host, in the order hosts first appear."""
        by_host: Dict[str, List[ResolvedComponentAction]] = OrderedDict()
        for component in components_to_add:
            by_host.setdefault(component.host_name, []).append(component)

        return [
            self.compile_host_batch(host_name, components, configs, state)
            for host_name, components in by_host.items()
        ]

    def compile_host_batch(
        self,
        host_name: str,
        components: List[ResolvedComponentAction],
        configs: List[ConfigEntry],
        state: RefreshState,
    ) -> Batch:
        host_components = _unique(c.component_name for c in components)
        master_components = _unique(c.component_name for c in components if not c.is_client)
        display = format_list([self.catalog.display_name(name) for name in master_components])

        operations: List[BatchOperation] = self.create_component_operations(host_components)
        operations.append(self.builder.create_host_components(host_name, host_components))
        operations.append(self.builder.install_host_components(
            host_name, host_components, INSTALL_CONTEXT.format(display) if display else None
        ))
        self.refresh.queue_refresh(operations, configs, state)
        # Clients have nothing to start
        if master_components:
            operations.append(self.builder.start_host_components(
                host_name, master_components, START_CONTEXT.format(display)
            ))

        logger.info(f"➕ Adding {', '.join(host_components)} on {host_name}")
        return Batch(kind=BatchKind.ADD, host_name=host_name, operations=set_order_ids(operations))

    def create_component_operations(self, component_names: List[str]) -> List[BatchOperation]:
        """Register component types that their owning service does not know about yet."""
        operations = []
        for component_name in component_names:
            service_name = self.catalog.owner_service(component_name)
            if component_name not in self.cluster_state.registered_component_types(service_name):
                operations.append(self.builder.create_component(service_name, component_name))
        return operations
