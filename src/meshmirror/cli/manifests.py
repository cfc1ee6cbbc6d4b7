"""Loading Kubernetes manifests from YAML or JSON files."""

from pathlib import Path

import yaml

from meshmirror.exceptions import ConfigurationError


def load_manifests(path: str | Path) -> list[dict]:
    """
    Load every object of a manifest file.

    Multi-document YAML, ``kind: List`` objects (``items``) and plain JSON
    are all accepted.
    """
    try:
        with open(path) as f:
            documents = [doc for doc in yaml.safe_load_all(f) if doc]
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid manifest file {path}: {e}") from e

    objects = []
    for doc in documents:
        if not isinstance(doc, dict):
            raise ConfigurationError(f"Unexpected document in {path}: {doc!r}")
        if "items" in doc:
            objects.extend(doc["items"] or [])
        else:
            objects.append(doc)
    return objects


def load_single_manifest(path: str | Path) -> dict:
    objects = load_manifests(path)
    if len(objects) != 1:
        raise ConfigurationError(f"Expected exactly one object in {path}, got {len(objects)}")
    return objects[0]
