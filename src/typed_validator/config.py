"""Validator options.

Options can be given in code or loaded from a YAML or JSON file:

```yaml
root_type: CreatePost
custom_messages:
  title: You must enter a title
  author.id: Author id is required
```
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError

_KNOWN_KEYS = ("custom_messages", "root_type")


@dataclass
class ValidatorConfig:
    """Options for a TypedValidator.

    Attributes:
        custom_messages: Message overrides keyed by field name (dotted for
            nested fields); returned verbatim instead of default messages
        root_type: Declared type to validate against; defaults to the first
            ``input`` type in the schema
    """

    custom_messages: Dict[str, str] = field(default_factory=dict)
    root_type: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.custom_messages, Mapping):
            raise ConfigurationError(
                "custom_messages must be a mapping of field name to message",
                context={"custom_messages": type(self.custom_messages).__name__},
            )
        for key, message in self.custom_messages.items():
            if not isinstance(key, str) or not isinstance(message, str):
                raise ConfigurationError(
                    f"Invalid custom message entry: {key!r}: {message!r}",
                    context={"key": key},
                )
        self.custom_messages = dict(self.custom_messages)

        if self.root_type is not None and not isinstance(self.root_type, str):
            raise ConfigurationError(
                f"root_type must be a string, got {type(self.root_type).__name__}",
                context={"root_type": self.root_type},
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidatorConfig":
        """Create a config from a dictionary.

        Raises:
            ConfigurationError: If data has unknown keys or invalid values
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Invalid options type: {type(data).__name__}")

        unknown = sorted(set(data) - set(_KNOWN_KEYS))
        if unknown:
            raise ConfigurationError(
                f"Unknown validator options: {unknown}",
                context={"unknown_keys": unknown, "known_keys": list(_KNOWN_KEYS)},
            )
        return cls(
            custom_messages=data.get("custom_messages") or {},
            root_type=data.get("root_type"),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ValidatorConfig":
        """Load a config from a YAML or JSON file.

        Raises:
            ConfigurationError: If the file is missing, has an unsupported
                suffix, or holds invalid options
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}", context={"path": str(path)}
            )

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported file format: {suffix}", context={"path": str(path)}
                )

        return cls.from_dict(data or {})

    @classmethod
    def coerce(cls, options: Union["ValidatorConfig", Mapping[str, Any], None]) -> "ValidatorConfig":
        """Accept a config, a mapping of options, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.from_dict(options)

    def with_messages(self, custom_messages: Mapping[str, str] | None) -> "ValidatorConfig":
        """Return a copy with ``custom_messages`` merged over the configured ones."""
        if not custom_messages:
            return self
        return ValidatorConfig(
            custom_messages={**self.custom_messages, **custom_messages},
            root_type=self.root_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "custom_messages": dict(self.custom_messages),
            "root_type": self.root_type,
        }
