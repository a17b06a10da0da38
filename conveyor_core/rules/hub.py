"""Group 7: hub connection and bushing advisories."""

from typing import List

from ..catalog.hub_connections import (
    DEFAULT_BUSHING_SYSTEM, DEFAULT_DRIVE_HUB_CONNECTION, DEFAULT_TAIL_HUB_CONNECTION,
    get_bushing_system_option, get_hub_connection_option, is_not_ideal_for_drive,
)
from ..models import BushingSystem, HubConnectionType
from ..schemas import Configuration, Issue
from .issues import make_issue


def _uses_taper_lock(hub_type, bushing) -> bool:
    if hub_type != HubConnectionType.WELD_ON_HUB_COMPRESSION_BUSHINGS:
        return False
    return (bushing or DEFAULT_BUSHING_SYSTEM) == BushingSystem.TAPER_LOCK


def apply_hub_connection_rules(config: Configuration) -> List[Issue]:
    issues = []
    drive_hub = config.drive_hub_connection_type or DEFAULT_DRIVE_HUB_CONNECTION
    tail_hub = config.tail_hub_connection_type or DEFAULT_TAIL_HUB_CONNECTION

    if is_not_ideal_for_drive(drive_hub):
        label = get_hub_connection_option(drive_hub).label
        issues.append(make_issue(
            "hub_not_ideal_for_drive",
            f"{label} is not ideal for drive pulleys. Consider a hub that transmits torque.",
        ))

    taper_lock_warning = get_bushing_system_option(BushingSystem.TAPER_LOCK).warning
    if _uses_taper_lock(drive_hub, config.drive_bushing_system):
        issues.append(make_issue("hub_drive_taper_lock", f"Drive pulley: {taper_lock_warning}"))
    if _uses_taper_lock(tail_hub, config.tail_bushing_system):
        issues.append(make_issue("hub_tail_taper_lock", f"Tail pulley: {taper_lock_warning}"))
    return issues
