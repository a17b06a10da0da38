"""
Reference catalog: immutable snapshots, pulley catalog rules, hub connections.
"""

from .snapshot import CatalogSnapshot, snapshot_from_dict, load_reference_catalog

__all__ = ["CatalogSnapshot", "snapshot_from_dict", "load_reference_catalog"]
