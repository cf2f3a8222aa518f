"""Inline scheduler queue refresh for config-driven batches."""
import logging
from typing import Iterable, List, Optional

from ..config import Config
from .cluster_state import ClusterState
from .models import BatchOperation, ConfigEntry, RefreshState
from .requests_builder import RequestBuilder

logger = logging.getLogger(__name__)


def changed_configs(configs: Iterable[ConfigEntry], filename: str) -> List[ConfigEntry]:
    """Entries of ``filename`` whose value differs from the value before editing."""
    return [config for config in configs if config.filename == filename and config.is_changed]


class RefreshCoordinator:
    """Adds a queue refresh to the first batch assembled while scheduler configs changed.

    The refresh fires at most once per invocation; ``RefreshState`` carries
    that across the delete batch and every per-host add batch.
    """

    def __init__(
        self,
        builder: RequestBuilder,
        cluster_state: ClusterState,
        filename: Optional[str] = None,
        service_name: Optional[str] = None,
        component_name: Optional[str] = None,
    ):
        self.builder = builder
        self.cluster_state = cluster_state
        self.filename = filename or Config.SCHEDULER_FILENAME
        self.service_name = service_name or Config.REFRESH_SERVICE
        self.component_name = component_name or Config.REFRESH_COMPONENT

    def is_eligible(self, configs: Iterable[ConfigEntry]) -> bool:
        return bool(changed_configs(configs, self.filename))

    def queue_refresh(
        self,
        operations: List[BatchOperation],
        configs: Iterable[ConfigEntry],
        state: RefreshState,
    ) -> bool:
        """Append the refresh operation to ``operations`` if it is due. Returns True when appended."""
        if state.refresh_already_queued or not self.is_eligible(configs):
            return False
        hosts = self.cluster_state.hosts_running(self.service_name, self.component_name)
        operations.append(self.builder.refresh_queues(self.service_name, self.component_name, hosts))
        state.refresh_already_queued = True
        logger.info(f"🔄 Queued {self.component_name} queue refresh on {', '.join(hosts) or 'no hosts'}")
        return True
