"""YAML loading functions for catalog data."""

from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ...errors import CatalogError
from .store import CatalogSpec, CatalogStore

DEFAULT_CATALOG_RESOURCE = "default_catalog.yaml"


def _load_yaml(text: Any, source: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CatalogError(f"Catalog file {source} is not valid YAML: {e}") from e


def _spec_from_data(data: Any, source: str) -> CatalogSpec:
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog file {source} must contain a mapping")
    try:
        return CatalogSpec.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog file {source}: {e}") from e


def load_catalog_from_yaml(path: Path) -> CatalogStore:
    """Load a catalog from a YAML file or a directory of per-seller YAML files.

    A single file holds a ``sellers`` list and an optional ``synonyms`` mapping.
    In a directory, every ``*.yaml``/``*.yml`` file describes one seller, and an
    optional ``synonyms.yaml`` holds the synonym mapping.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogError: If the contents are not a valid catalog.

    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")

    if path.is_file():
        with open(path, encoding="utf-8") as f:
            data = _load_yaml(f, str(path))
        return CatalogStore.from_spec(_spec_from_data(data, str(path)))

    yaml_files = list(path.glob("*.yaml")) + list(path.glob("*.yml"))
    if not yaml_files:
        raise CatalogError(f"No YAML files found in catalog directory: {path}")

    sellers: list[Any] = []
    synonyms: dict[str, str] = {}
    for yaml_file in sorted(yaml_files):
        with open(yaml_file, encoding="utf-8") as f:
            data = _load_yaml(f, str(yaml_file))
        if yaml_file.stem == "synonyms":
            if data is not None and not isinstance(data, dict):
                raise CatalogError(f"Synonym file {yaml_file} must contain a mapping")
            synonyms.update(data or {})
        else:
            sellers.append(data)

    spec = _spec_from_data({"sellers": sellers, "synonyms": synonyms}, str(path))
    return CatalogStore.from_spec(spec)


def load_default_catalog() -> CatalogStore:
    """Load the demo catalog bundled with the package."""
    text = (
        resources.files(__package__)
        .joinpath(DEFAULT_CATALOG_RESOURCE)
        .read_text(encoding="utf-8")
    )
    return CatalogStore.from_spec(
        _spec_from_data(
            _load_yaml(text, DEFAULT_CATALOG_RESOURCE), DEFAULT_CATALOG_RESOURCE
        )
    )


def load_catalog(path: Path | None = None) -> CatalogStore:
    """Load ``path`` when given, otherwise the bundled demo catalog."""
    if path is None:
        return load_default_catalog()
    return load_catalog_from_yaml(path)
