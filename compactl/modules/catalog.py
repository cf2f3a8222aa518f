"""Stack catalog: static component metadata and dependency declarations."""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from .models import (
    ChangeSetError, ConfirmRule, DependencyRule, DependencyScope, UnknownComponentError,
)

logger = logging.getLogger(__name__)


class DependencyCatalog(ABC):
    """Read-only view of the stack's component metadata."""

    @abstractmethod
    def dependencies_of(self, component_name: str) -> List[DependencyRule]:
        ...

    @abstractmethod
    def is_client(self, component_name: str) -> bool:
        ...

    @abstractmethod
    def owner_service(self, component_name: str) -> str:
        ...

    @abstractmethod
    def display_name(self, component_name: str) -> str:
        ...

    def confirm_rules(self) -> List[ConfirmRule]:
        return []


class DependencyModel(BaseModel):
    component_name: str
    scope: DependencyScope = DependencyScope.HOST


class ComponentModel(BaseModel):
    service: str
    display_name: Optional[str] = None
    is_client: bool = False
    dependencies: List[DependencyModel] = Field(default_factory=list)


class ConfirmRuleModel(BaseModel):
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


class CatalogModel(BaseModel):
    """Schema of a catalog document."""
    components: Dict[str, ComponentModel] = Field(default_factory=dict)
    confirm_rules: List[ConfirmRuleModel] = Field(default_factory=list)


class StackCatalog(DependencyCatalog):
    """Catalog backed by an in-memory document, usually loaded from YAML."""

    def __init__(self, model: CatalogModel):
        self._model = model

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StackCatalog':
        try:
            return cls(CatalogModel(**(data or {})))
        except ValidationError as e:
            raise ChangeSetError(f"Invalid catalog: {e}") from e

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'StackCatalog':
        """Load a catalog from a YAML file."""
        path = Path(path).expanduser()
        if not path.exists():
            raise ChangeSetError(f"Catalog file not found: {path}")
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        logger.debug(f"Loaded catalog from {path} with {len(data.get('components', {}))} components")
        return cls.from_dict(data)

    def _component(self, component_name: str) -> ComponentModel:
        try:
            return self._model.components[component_name]
        except KeyError:
            raise UnknownComponentError(f"No catalog entry for component {component_name}") from None

    def dependencies_of(self, component_name: str) -> List[DependencyRule]:
        return [
            DependencyRule(component_name=dep.component_name, scope=dep.scope)
            for dep in self._component(component_name).dependencies
        ]

    def is_client(self, component_name: str) -> bool:
        return self._component(component_name).is_client

    def owner_service(self, component_name: str) -> str:
        return self._component(component_name).service

    def display_name(self, component_name: str) -> str:
        return self._component(component_name).display_name or component_name

    def confirm_rules(self) -> List[ConfirmRule]:
        return [ConfirmRule(**rule.model_dump()) for rule in self._model.confirm_rules]
