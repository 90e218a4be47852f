"""YAML loading that keeps numeric-looking scalars as written.

Charts routinely leave versions unquoted (``version: 1.10``). The safe
loaders would read that as the float ``1.1``; Helm reads it into a string
field and keeps ``"1.10"``, so int and float resolution is switched off.
"""

from __future__ import annotations

from typing import Any

import yaml

# Prefer the C-accelerated parser when available (~10x faster).
_BaseLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)

_NUMERIC_TAGS = {"tag:yaml.org,2002:int", "tag:yaml.org,2002:float"}


class TextLoader(_BaseLoader):  # type: ignore[misc, valid-type]
    """Safe loader that leaves int and float scalars as strings."""


TextLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in _BaseLoader.yaml_implicit_resolvers.items()
}


def load_text_yaml(stream: str | bytes) -> Any:
    return yaml.load(stream, Loader=TextLoader)
