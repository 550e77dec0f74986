"""Service catalogue loaded from service.yaml."""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml


@dataclass
class OperationConfig:
    """How to call one upstream operation and read its rows."""

    name: str
    endpoint: str = ""
    url: str = ""
    params: list[str] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)
    strip: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "OperationConfig":
        return cls(
            name=name,
            endpoint=data.get("endpoint", ""),
            url=data.get("url", ""),
            params=data.get("params", []),
            fields=data.get("fields", {}),
            strip=data.get("strip", []),
        )

    def build_url(self, base_url: str, values: dict[str, Any]) -> str:
        """Build the request URL, interpolating values verbatim.

        Args:
            base_url: Service base URL, used unless the operation has its own url.
            values: Query values keyed by upstream parameter name.

        Returns:
            The full URL, with a query string only when the operation takes
            parameters.
        """
        url = self.url or f"{base_url.rstrip('/')}/{self.endpoint}"
        if not self.params:
            return url

        query = "&".join(f"{name}={values[name]}" for name in self.params)
        return f"{url}?{query}"


@dataclass
class ServiceConfig:
    """Configuration loaded from service.yaml."""

    id: str
    name: str
    website: str
    base_url: str
    operations: dict[str, OperationConfig]

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ServiceConfig":
        """Load the service configuration from a YAML file."""
        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls(
            id=data["id"],
            name=data["name"],
            website=data.get("website", ""),
            base_url=data["base_url"],
            operations={
                name: OperationConfig.from_dict(name, op)
                for name, op in data.get("operations", {}).items()
            },
        )

    def operation(self, name: str) -> OperationConfig:
        """Get an operation by name."""
        try:
            return self.operations[name]
        except KeyError:
            raise KeyError(f"{self.id} has no operation {name!r}") from None


@lru_cache(maxsize=None)
def load_service_config(yaml_path: Path) -> ServiceConfig:
    """Load a service file once and reuse it for every client."""
    return ServiceConfig.from_yaml(yaml_path)
