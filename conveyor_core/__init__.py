"""
Conveyor design core.

Deterministic rule evaluation, engineering calculators and golden-recipe
drift checks over immutable configuration and catalog snapshots.
No persistence, no network. Callers own all I/O.
"""

__version__ = "0.1.0"
