"""Load change sets describing the configs a user is about to save."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from jsonschema import ValidationError, validate

from .models import ChangeSetError, ComponentAction, ComponentActionSpec, ConfigEntry

logger = logging.getLogger(__name__)

SCALAR = {"type": ["string", "number", "boolean", "null"]}

CHANGESET_SCHEMA = {
    "type": "object",
    "properties": {
        "configs": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "filename": {"type": "string"},
                    "name": {"type": "string"},
                    "value": SCALAR,
                    "initial_value": SCALAR,
                    "config_action": {
                        "type": "object",
                        "properties": {
                            "component_name": {"type": "string"},
                            "host_name": {"type": "string"},
                            "action": {"enum": [a.value for a in ComponentAction]}
                        },
                        "required": ["component_name", "host_name", "action"]
                    }
                },
                "required": ["filename"]
            }
        }
    },
    "required": ["configs"],
    "additionalProperties": False
}


def _as_str(value: Any):
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def parse_change_set(data: Dict[str, Any]) -> List[ConfigEntry]:
    """Validate a change set document and turn it into config entries."""
    try:
        validate(instance=data, schema=CHANGESET_SCHEMA)
    except ValidationError as ve:
        raise ChangeSetError(f"Invalid change set: {ve.message}") from ve

    entries = []
    for item in data["configs"]:
        action = item.get("config_action")
        entries.append(ConfigEntry(
            filename=item["filename"],
            name=item.get("name", ""),
            value=_as_str(item.get("value")),
            initial_value=_as_str(item.get("initial_value")),
            config_action=ComponentActionSpec(
                component_name=action["component_name"],
                host_name=action["host_name"],
                action=ComponentAction(action["action"]),
            ) if action else None,
        ))
    return entries


def load_change_set(path: Union[str, Path]) -> List[ConfigEntry]:
    """Load a change set from a YAML file."""
    path = Path(path).expanduser()
    if not path.exists():
        raise ChangeSetError(f"Change set file not found: {path}")
    with open(path) as f:
        data = yaml.safe_load(f)
    entries = parse_change_set(data or {})
    logger.debug(f"Loaded {len(entries)} config entries from {path}")
    return entries
