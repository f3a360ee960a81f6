from __future__ import annotations
import json
import os
from typing import Any


def load_json(file: str | os.PathLike[str]) -> Any:
    with open(file, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_yaml(file: str | os.PathLike[str]) -> Any:
    import yaml
    with open(file, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


LOADERS = {
    '.json': load_json,
    '.yaml': load_yaml,
    '.yml': load_yaml,
}
