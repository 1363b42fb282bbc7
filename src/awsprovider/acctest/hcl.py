"""
HCL configuration decoding for acceptance tests.

python-hcl2 returns every top-level block kind as a list of single-entry
dicts. They are flattened here into ConfigBlock records addressed the way
the host runtime addresses them (``aws_vpc.test``, ``data.aws_region.current``).
"""

from dataclasses import dataclass, field
from typing import Any

import hcl2
from lark.exceptions import LarkError

from awsprovider.exceptions import HCLParseError
from awsprovider.helpers.logger import get_logger

logger = get_logger(__name__)

RESOURCE_MODE = "managed"
DATA_MODE = "data"


@dataclass
class ConfigBlock:
    mode: str
    type: str
    name: str
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def address(self) -> str:
        if self.mode == DATA_MODE:
            return f"data.{self.type}.{self.name}"
        return f"{self.type}.{self.name}"

    @property
    def provider_name(self) -> str:
        """Type prefix naming the owning provider: ``aws`` for ``aws_vpc``."""
        return self.type.split("_", 1)[0]


@dataclass
class Config:
    resources: list[ConfigBlock] = field(default_factory=list)
    data_sources: list[ConfigBlock] = field(default_factory=list)
    providers: dict[str, dict[str, Any]] = field(default_factory=dict)

    def blocks(self) -> list[ConfigBlock]:
        return self.data_sources + self.resources


def normalize(value: Any) -> Any:
    """Strip literal quotes kept by the parser and drop its ``__*__`` metadata keys."""
    if isinstance(value, dict):
        return {
            normalize_key(k): normalize(v)
            for k, v in value.items()
            if not (isinstance(k, str) and k.startswith("__") and k.endswith("__"))
        }
    if isinstance(value, list):
        return [normalize(v) for v in value]
    if isinstance(value, str):
        return normalize_key(value)
    return value


def normalize_key(value: Any) -> Any:
    if isinstance(value, str) and len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _typed_blocks(mode: str, entries: list[dict[str, Any]]) -> list[ConfigBlock]:
    blocks = []
    for entry in entries:
        for type_name, named in entry.items():
            for name, body in named.items():
                blocks.append(ConfigBlock(mode, normalize_key(type_name), normalize_key(name), normalize(body or {})))
    return blocks


def parse_config(text: str) -> Config:
    """Decode HCL text into resource, data source and provider blocks."""
    try:
        parsed = hcl2.loads(text)
    except (LarkError, ValueError) as e:
        raise HCLParseError(f"error parsing configuration: {e}") from e

    config = Config(
        resources=_typed_blocks(RESOURCE_MODE, parsed.get("resource", [])),
        data_sources=_typed_blocks(DATA_MODE, parsed.get("data", [])),
    )
    for entry in parsed.get("provider", []):
        for name, body in entry.items():
            config.providers[normalize_key(name)] = normalize(body or {})

    logger.debug(
        "Parsed configuration: %d resources, %d data sources",
        len(config.resources),
        len(config.data_sources),
    )
    return config
