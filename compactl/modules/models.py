"""Data models for config-driven component actions."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ComponentAction(str, Enum):
    """What a configuration property asks to happen to a component."""
    ADD = 'add'
    DELETE = 'delete'


class HostComponentState(str, Enum):
    """Desired states a host component can be moved to."""
    INSTALLED = 'INSTALLED'
    STARTED = 'STARTED'


class DependencyScope(str, Enum):
    HOST = 'host'
    CLUSTER = 'cluster'


class BatchKind(str, Enum):
    ADD = 'add'
    DELETE = 'delete'


class CompactlError(Exception):
    """Base exception for compactl errors."""
    pass


class UnknownComponentError(CompactlError, LookupError):
    """Raised when the catalog has no metadata for a component."""
    pass


class UnknownServiceError(CompactlError, LookupError):
    """Raised when the cluster state has no record of a service."""
    pass


class ChangeSetError(CompactlError, ValueError):
    """Raised when a change set, catalog or state document is invalid."""
    pass


@dataclass(frozen=True)
class ComponentActionSpec:
    """Component action declared on a configuration property."""
    component_name: str
    host_name: str
    action: ComponentAction


@dataclass
class ConfigEntry:
    """One configuration property as edited by the user."""
    filename: str
    name: str = ''
    value: Optional[str] = None
    initial_value: Optional[str] = None
    config_action: Optional[ComponentActionSpec] = None

    @property
    def is_changed(self) -> bool:
        return self.value != self.initial_value


@dataclass(frozen=True)
class ResolvedComponentAction:
    """A component that will be added to or deleted from a host."""
    component_name: str
    host_name: str
    is_client: bool = False


@dataclass(frozen=True)
class DependencyRule:
    """Dependency declared by the stack catalog for a component."""
    component_name: str
    scope: DependencyScope = DependencyScope.HOST


@dataclass
class BatchOperation:
    """A single request inside a request schedule batch."""
    method: str
    uri: str
    body: Optional[Dict[str, Any]] = None
    order_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Render the operation the way the request schedule API expects it."""
        data: Dict[str, Any] = {
            'order_id': self.order_id,
            'type': self.method,
            'uri': self.uri,
        }
        if self.body is not None:
            data['RequestBodyInfo'] = self.body
        return data


@dataclass
class Batch:
    """Operations submitted together and executed in ``order_id`` order."""
    kind: BatchKind
    operations: List[BatchOperation] = field(default_factory=list)
    host_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'host_name': self.host_name,
            'requests': [op.to_dict() for op in self.operations],
        }


@dataclass
class RefreshState:
    """Tracks whether the scheduler refresh has been queued during one invocation."""
    refresh_already_queued: bool = False


@dataclass(frozen=True)
class ConfirmRule:
    """Catalog rule asking the user to confirm a standalone refresh for changed configs."""
    file_name: str
    service_name: str
    component_name: str
    config_name: str
    body: str = ''
    button_label: str = 'Confirm'
    request_name: str = ''
    command: str = ''
    context: str = ''
    error_message: str = ''
    action_type: str = 'showPopup'


@dataclass
class ApiRequest:
    """A request handed to the submission layer."""
    method: str
    path: str
    body: Optional[Any] = None
    name: str = ''


@dataclass
class SubmissionResult:
    """Outcome of a request handed to the submission layer."""
    status_code: Optional[int] = None
    text: str = ''
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code is not None and 200 <= self.status_code < 300

    def message(self) -> str:
        """Best-effort extraction of the ``message`` field from the response body."""
        if not self.text:
            return ''
        try:
            payload = json.loads(self.text)
        except ValueError:
            return ''
        if isinstance(payload, dict):
            return str(payload.get('message') or '')
        return ''


@dataclass
class ConfirmationOutcome:
    """What happened for one confirm rule during the confirmation gate."""
    rule: ConfirmRule
    accepted: bool = False
    result: Optional[SubmissionResult] = None
    error_message: Optional[str] = None


@dataclass
class ConfigActionsResult:
    """Everything decided and submitted during one invocation."""
    delete_batch: Optional[Batch] = None
    add_batches: List[Batch] = field(default_factory=list)
    submissions: List[SubmissionResult] = field(default_factory=list)
    refresh_state: RefreshState = field(default_factory=RefreshState)
    confirmations: List[ConfirmationOutcome] = field(default_factory=list)
    pending_confirmations: List[ConfirmRule] = field(default_factory=list)

    @property
    def batches(self) -> List[Batch]:
        batches = [self.delete_batch] if self.delete_batch else []
        return batches + list(self.add_batches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'batches': [batch.to_dict() for batch in self.batches],
            'refresh_queued': self.refresh_state.refresh_already_queued,
            'pending_confirmations': [
                {'file_name': rule.file_name, 'command': rule.command, 'label': rule.button_label}
                for rule in self.pending_confirmations
            ],
        }
