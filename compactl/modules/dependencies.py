"""Resolve host-scoped dependencies of components being added.

Resolution is a single pass over the requested components: a dependency of a
dependency is only picked up when it is also a direct dependency of one of the
requested components. Catalogs that need chained dependencies must declare
every level on the component itself.
"""
import logging
from typing import Iterable, List, Optional, Set, Tuple

from .catalog import DependencyCatalog
from .cluster_state import ClusterState
from .models import ComponentActionSpec, DependencyScope, ResolvedComponentAction

logger = logging.getLogger(__name__)


def get_dependent_components(
    components_to_add: List[ResolvedComponentAction],
    catalog: DependencyCatalog,
    cluster_state: ClusterState,
    excluded: Optional[Iterable[ComponentActionSpec]] = None,
) -> List[ResolvedComponentAction]:
    """Return the host-scoped dependencies that must be added alongside ``components_to_add``.

    A candidate is skipped when it is already installed, already requested,
    already resolved earlier in the pass, or explicitly being deleted.
    """
    seen: Set[Tuple[str, str]] = {(c.component_name, c.host_name) for c in components_to_add}
    blocked: Set[Tuple[str, str]] = {(s.component_name, s.host_name) for s in (excluded or [])}
    dependent_components: List[ResolvedComponentAction] = []

    for component in components_to_add:
        for rule in catalog.dependencies_of(component.component_name):
            if rule.scope != DependencyScope.HOST:
                continue
            key = (rule.component_name, component.host_name)
            if key in seen:
                continue
            if key in blocked:
                logger.warning(
                    f"{rule.component_name} on {component.host_name} is required by "
                    f"{component.component_name} but is being deleted, not re-adding it"
                )
                continue
            if cluster_state.is_installed(rule.component_name, component.host_name):
                continue
            seen.add(key)
            dependent_components.append(ResolvedComponentAction(
                component_name=rule.component_name,
                host_name=component.host_name,
                is_client=catalog.is_client(rule.component_name),
            ))
            logger.debug(f"Adding dependency {rule.component_name} on {component.host_name}")

    return dependent_components


def resolve_components_to_add(
    components_to_add: List[ResolvedComponentAction],
    catalog: DependencyCatalog,
    cluster_state: ClusterState,
    excluded: Optional[Iterable[ComponentActionSpec]] = None,
) -> List[ResolvedComponentAction]:
    """Requested components followed by their resolved dependencies."""
    return list(components_to_add) + get_dependent_components(
        components_to_add, catalog, cluster_state, excluded
    )
