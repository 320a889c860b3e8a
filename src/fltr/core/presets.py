"""Configuration files: filter presets and bootstrap event sets.

A filter preset is a YAML mapping with optional ``keywords``,
``severities`` and ``hosts`` lists; omitted keys keep their defaults.
A bootstrap file is a YAML (or JSON) list of events restored by
``EventStore.reset()``.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from fltr.core.errors import ConfigFileError
from fltr.models.event import ActiveFilters, Event


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigFileError(str(path), [f"Cannot read file: {e}"])

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigFileError(str(path), [f"YAML parse error: {e}"])


def _validation_messages(error: PydanticValidationError) -> list[str]:
    return [
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


def load_preset(path: Path) -> ActiveFilters:
    """Load and validate a filter preset file.

    Args:
        path: Path to a YAML preset

    Returns:
        ActiveFilters built from the preset

    Raises:
        ConfigFileError: If the file is unreadable, not YAML or fails validation
    """
    return parse_preset(_read_yaml(path), source=str(path))


def parse_preset(data: Any, source: str = "<preset>") -> ActiveFilters:
    """Validate already-loaded preset data into ActiveFilters."""
    if data is None:
        return ActiveFilters()
    if not isinstance(data, dict):
        raise ConfigFileError(source, ["Preset must be a mapping"])

    try:
        parsed = ActiveFilters.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigFileError(source, _validation_messages(e))

    # Lists act as sets.
    filters = ActiveFilters(
        keywords=list(dict.fromkeys(parsed.keywords)),
        severities=list(dict.fromkeys(parsed.severities)),
    )
    for host in parsed.hosts:
        filters.add_host(host)
    return filters


def load_bootstrap(path: Path) -> list[Event]:
    """Load the sample events a store restores on reset.

    Raises:
        ConfigFileError: If the file is not a list of valid events
    """
    data = _read_yaml(path)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigFileError(str(path), ["Bootstrap file must be a list of events"])

    try:
        events = [Event.model_validate(item) for item in data]
    except PydanticValidationError as e:
        raise ConfigFileError(str(path), _validation_messages(e))

    ids = [event.id for event in events]
    if len(set(ids)) != len(ids):
        raise ConfigFileError(str(path), ["Event ids must be unique"])
    return events
