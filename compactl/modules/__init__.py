"""
Component actions driven by configuration changes.

Saving a configuration can imply that a component must be added to or
removed from a host. This package works out which host components that
means, pulls in their host-scoped dependencies and compiles the management
API requests into ordered batches.

Key Features:
- Idempotent add/delete decisions against live cluster state
- Host-scoped dependency resolution
- Per-host request schedule batches with dense order ids
- Scheduler queue refresh folded into the batches, at most once per save
- Confirmation gate for standalone refreshes
"""

from .models import (
    Batch,
    BatchOperation,
    ChangeSetError,
    CompactlError,
    ComponentAction,
    ComponentActionSpec,
    ConfigActionsResult,
    ConfigEntry,
    ConfirmRule,
    RefreshState,
    ResolvedComponentAction,
    UnknownComponentError,
    UnknownServiceError,
)
from .catalog import DependencyCatalog, StackCatalog
from .cluster_state import AmbariClusterState, ClusterState, StaticClusterState
from .loader import load_change_set, parse_change_set
from .orchestrator import ComponentActionsByConfigs
from .submission import DryRunSubmitter, HttpSubmitter, Submitter

__all__ = [
    # Data model
    'Batch',
    'BatchOperation',
    'ComponentAction',
    'ComponentActionSpec',
    'ConfigActionsResult',
    'ConfigEntry',
    'ConfirmRule',
    'RefreshState',
    'ResolvedComponentAction',

    # Errors
    'CompactlError',
    'ChangeSetError',
    'UnknownComponentError',
    'UnknownServiceError',

    # Collaborators
    'DependencyCatalog',
    'StackCatalog',
    'ClusterState',
    'StaticClusterState',
    'AmbariClusterState',
    'Submitter',
    'DryRunSubmitter',
    'HttpSubmitter',

    # Entry points
    'ComponentActionsByConfigs',
    'load_change_set',
    'parse_change_set',
]
