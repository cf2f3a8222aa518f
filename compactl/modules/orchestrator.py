"""Entry point: run the component actions implied by a set of saved configs."""
import asyncio
import logging
from typing import List, Optional

from .batches import BatchCompiler
from .catalog import DependencyCatalog
from .cluster_state import ClusterState
from .confirmation import Alert, ConfirmationGate, Prompt
from .dependencies import resolve_components_to_add
from .extractor import (
    extract_config_actions, get_components_to_add, get_components_to_delete, is_component_actions_present,
)
from .models import ComponentAction, ConfigActionsResult, ConfigEntry, RefreshState
from .refresh import RefreshCoordinator
from .requests_builder import RequestBuilder
from .submission import DryRunSubmitter, Submitter

logger = logging.getLogger(__name__)


class ComponentActionsByConfigs:
    """Adds and deletes host components as inferred from saved configuration values.

    Every call to ``do_config_actions`` starts with a fresh ``RefreshState``.
    Concurrent calls on the same instance are not supported.
    """

    def __init__(
        self,
        catalog: DependencyCatalog,
        cluster_state: ClusterState,
        submitter: Optional[Submitter] = None,
        builder: Optional[RequestBuilder] = None,
    ):
        self.catalog = catalog
        self.cluster_state = cluster_state
        self.submitter = submitter or DryRunSubmitter()
        self.builder = builder or RequestBuilder()
        self.refresh = RefreshCoordinator(self.builder, cluster_state)
        self.compiler = BatchCompiler(self.builder, catalog, cluster_state, self.refresh)
        self.gate = ConfirmationGate(self.builder, catalog, cluster_state, self.submitter)

    def compile(self, configs: List[ConfigEntry], state: RefreshState) -> ConfigActionsResult:
        """Decide which batches to send, without sending anything."""
        configs = list(configs)
        actions = extract_config_actions(configs)
        result = ConfigActionsResult(refresh_state=state)
        if not actions:
            logger.debug("No component actions declared by the changed configs")

        components_to_delete = get_components_to_delete(actions, self.cluster_state)
        result.delete_batch = self.compiler.compile_delete_batch(components_to_delete, configs, state)

        components_to_add = get_components_to_add(actions, self.catalog, self.cluster_state)
        if components_to_add:
            # Dependencies never re-add a component the user asked to delete
            delete_specs = [
                c.config_action for c in actions if c.config_action.action == ComponentAction.DELETE
            ]
            all_components_to_add = resolve_components_to_add(
                components_to_add, self.catalog, self.cluster_state, excluded=delete_specs
            )
            result.add_batches = self.compiler.compile_add_batches(all_components_to_add, configs, state)
        return result

    def plan(self, configs: List[ConfigEntry]) -> ConfigActionsResult:
        """Compile batches and list the confirmations that would be asked for."""
        state = RefreshState()
        result = self.compile(configs, state)
        result.pending_confirmations = self.gate.pending(configs, state)
        return result

    async def do_config_actions(
        self,
        configs: List[ConfigEntry],
        prompt: Optional[Prompt] = None,
        alert: Optional[Alert] = None,
    ) -> ConfigActionsResult:
        """Compile, submit and run the confirmation gate for one save of configs."""
        state = RefreshState()
        configs = list(configs)
        result = self.compile(configs, state)

        # Batches are independent; none waits for another to finish
        submissions = [
            asyncio.ensure_future(self.submitter.submit(self.builder.request_schedule(batch)))
            for batch in result.batches
        ]
        result.confirmations = await self.gate.run(configs, state, prompt, alert)
        result.submissions = list(await asyncio.gather(*submissions))
        logger.info(
            f"Submitted {len(result.batches)} batch(es), "
            f"{len(result.confirmations)} confirmation(s) offered"
        )
        return result

    def is_component_actions_present(self, configs: List[ConfigEntry]) -> bool:
        return is_component_actions_present(configs, self.catalog, self.cluster_state)
