"""Confirmation gate for refreshes that must not be triggered silently."""
import logging
from typing import Callable, Iterable, List, Optional

import requests

from ..config import Config
from .catalog import DependencyCatalog
from .cluster_state import ClusterState
from .models import ConfigEntry, ConfirmationOutcome, ConfirmRule, RefreshState, SubmissionResult
from .refresh import changed_configs
from .requests_builder import RequestBuilder
from .submission import Submitter

logger = logging.getLogger(__name__)

Prompt = Callable[[ConfirmRule], bool]
Alert = Callable[[str, str], None]


class ConfirmationGate:
    """Offers a standalone refresh when scheduler configs changed but no batch refreshed them."""

    def __init__(
        self,
        builder: RequestBuilder,
        catalog: DependencyCatalog,
        cluster_state: ClusterState,
        submitter: Submitter,
        filename: Optional[str] = None,
    ):
        self.builder = builder
        self.catalog = catalog
        self.cluster_state = cluster_state
        self.submitter = submitter
        self.filename = filename or Config.SCHEDULER_FILENAME

    def pending(self, configs: Iterable[ConfigEntry], state: RefreshState) -> List[ConfirmRule]:
        """Rules that would ask the user for confirmation right now."""
        if state.refresh_already_queued:
            return []
        configs = list(configs)
        return [
            rule for rule in self.catalog.confirm_rules()
            if rule.action_type == 'showPopup'
            and rule.file_name == self.filename
            and changed_configs(configs, rule.file_name)
        ]

    async def run(
        self,
        configs: Iterable[ConfigEntry],
        state: RefreshState,
        prompt: Optional[Prompt] = None,
        alert: Optional[Alert] = None,
    ) -> List[ConfirmationOutcome]:
        outcomes = []
        for rule in self.pending(configs, state):
            outcome = ConfirmationOutcome(rule=rule)
            outcome.accepted = bool(prompt(rule)) if prompt else False
            if outcome.accepted:
                try:
                    outcome.result = await self.submit(rule)
                except requests.RequestException as e:
                    outcome.result = SubmissionResult(error=str(e))
                if not outcome.result.ok:
                    outcome.error_message = self.error_message(rule, outcome.result)
                    logger.error(f"❌ {outcome.error_message}")
                    if alert:
                        alert(rule.error_message, outcome.error_message)
            else:
                logger.info(f"Skipped {rule.command or rule.request_name} for {rule.file_name}")
            outcomes.append(outcome)
        return outcomes

    async def submit(self, rule: ConfirmRule) -> SubmissionResult:
        # Hosts are looked up now, not when the batches were compiled
        hosts = self.cluster_state.hosts_running(rule.service_name, rule.component_name)
        request = self.builder.command_request(
            name=rule.request_name,
            command=rule.command,
            context=rule.context,
            service_name=rule.service_name,
            component_name=rule.component_name,
            hosts=hosts,
            config_tag=rule.config_name,
        )
        return await self.submitter.submit(request)

    @staticmethod
    def error_message(rule: ConfirmRule, result: SubmissionResult) -> str:
        return rule.error_message + (result.message() or result.error or '')
