"""
Versioned, immutable reference-catalog snapshot.

One snapshot holds every reference dataset an evaluation reads: pulley
library models, pulley catalog items, cleat catalog entries and cleat
centers factors. Snapshots are frozen. A catalog refresh builds a new
snapshot via replace() and the caller swaps the reference; nothing is ever
mutated in place while an evaluation is reading it.

load_reference_catalog() reads the JSON dataset bundled with the package
(or the file at settings.REFERENCE_CATALOG_PATH).
"""

import json
import logging
import os
from typing import Optional, Tuple

from pydantic import BaseModel, ValidationError

from ..canonical import hash_canonical
from ..config import settings
from ..errors import CatalogShapeError
from ..schemas import PulleyModel, PulleyCatalogItem, CleatCatalogEntry, CleatCenterFactor
from .pulleys import enforce_internal_bearing_rules

logger = logging.getLogger(__name__)

_BUNDLED_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "reference_catalog.json")


class CatalogSnapshot(BaseModel):
    version: str = "unversioned"
    pulley_models: Tuple[PulleyModel, ...] = ()
    pulley_catalog: Tuple[PulleyCatalogItem, ...] = ()
    cleat_catalog: Tuple[CleatCatalogEntry, ...] = ()
    cleat_center_factors: Tuple[CleatCenterFactor, ...] = ()

    class Config:
        frozen = True

    # --- Lookups (active entries only) ---

    def get_pulley_model(self, model_key: str) -> Optional[PulleyModel]:
        for model in self.pulley_models:
            if model.model_key == model_key and model.is_active:
                return model
        return None

    def active_pulley_models(self) -> Tuple[PulleyModel, ...]:
        return tuple(m for m in self.pulley_models if m.is_active)

    def get_pulley_item(self, catalog_key: str) -> Optional[PulleyCatalogItem]:
        for item in self.pulley_catalog:
            if item.catalog_key == catalog_key and item.is_active:
                return item
        return None

    def active_pulley_items(self) -> Tuple[PulleyCatalogItem, ...]:
        return tuple(p for p in self.pulley_catalog if p.is_active)

    def active_cleat_entries(self) -> Tuple[CleatCatalogEntry, ...]:
        return tuple(
            sorted((c for c in self.cleat_catalog if c.is_active), key=lambda c: c.sort_order)
        )

    def active_center_factors(self) -> Tuple[CleatCenterFactor, ...]:
        return tuple(f for f in self.cleat_center_factors if f.is_active)

    def content_hash(self) -> str:
        """Canonical hash of the snapshot contents (version excluded)."""
        data = self.model_dump(mode="json", exclude={"version"})
        return hash_canonical(data)

    def replace(self, version: str = None, **datasets) -> "CatalogSnapshot":
        """
        New snapshot with some datasets swapped out. The receiver is untouched.
        Without an explicit version, the new one is derived from the content hash.
        """
        unknown = set(datasets) - {"pulley_models", "pulley_catalog", "cleat_catalog", "cleat_center_factors"}
        if unknown:
            raise CatalogShapeError(f"Unknown catalog datasets: {sorted(unknown)}")
        data = {
            "pulley_models": self.pulley_models,
            "pulley_catalog": self.pulley_catalog,
            "cleat_catalog": self.cleat_catalog,
            "cleat_center_factors": self.cleat_center_factors,
        }
        data.update({k: tuple(v) for k, v in datasets.items()})
        data["pulley_catalog"] = tuple(enforce_internal_bearing_rules(p) for p in data["pulley_catalog"])
        snapshot = CatalogSnapshot(version="pending", **data)
        return snapshot.model_copy(update={"version": version or snapshot.content_hash()[:12]})


def snapshot_from_dict(data: dict) -> CatalogSnapshot:
    """Build a snapshot from a plain dict. Malformed shapes raise CatalogShapeError."""
    if not isinstance(data, dict):
        raise CatalogShapeError(f"Reference catalog must be an object, got {type(data).__name__}")
    try:
        snapshot = CatalogSnapshot(
            version=str(data.get("version", "unversioned")),
            pulley_models=tuple(PulleyModel(**m) for m in data.get("pulley_models", [])),
            pulley_catalog=tuple(
                enforce_internal_bearing_rules(PulleyCatalogItem(**p))
                for p in data.get("pulley_catalog", [])
            ),
            cleat_catalog=tuple(CleatCatalogEntry(**c) for c in data.get("cleat_catalog", [])),
            cleat_center_factors=tuple(
                CleatCenterFactor(**f) for f in data.get("cleat_center_factors", [])
            ),
        )
    except (ValidationError, TypeError) as e:
        raise CatalogShapeError(f"Malformed reference catalog: {e}") from e
    return snapshot


def load_reference_catalog(path: str = None) -> CatalogSnapshot:
    """Read a reference catalog JSON file into a snapshot."""
    path = path or settings.REFERENCE_CATALOG_PATH or _BUNDLED_PATH
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogShapeError(f"Reference catalog {path} is not valid JSON: {e}") from e
    snapshot = snapshot_from_dict(data)
    logger.info(
        "Loaded reference catalog %s: %d pulley models, %d pulleys, %d cleat entries",
        snapshot.version, len(snapshot.pulley_models), len(snapshot.pulley_catalog),
        len(snapshot.cleat_catalog),
    )
    return snapshot
