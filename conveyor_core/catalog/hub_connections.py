"""
Hub connection types and compression bushing systems (PCI selection guide, pp. 12-14).
"""

from typing import List, Optional

from pydantic import BaseModel

from ..models import BushingSystem, HubConnectionType, PulleyPosition


class HubConnectionOption(BaseModel):
    key: HubConnectionType
    label: str
    best_for: str
    requires_bushing_system: bool = False
    not_ideal_for_drive: bool = False

    class Config:
        frozen = True


class BushingSystemOption(BaseModel):
    key: BushingSystem
    label: str
    description: str
    hidden: bool = False
    warning: Optional[str] = None

    class Config:
        frozen = True


HUB_CONNECTION_OPTIONS = (
    HubConnectionOption(
        key=HubConnectionType.FIXED_STUB_SHAFTS,
        label="Fixed Stub Shafts",
        best_for="Small pulleys requiring max fatigue life",
    ),
    HubConnectionOption(
        key=HubConnectionType.REMOVABLE_STUB_SHAFTS,
        label="Removable Stub Shafts",
        best_for="Small pulleys with serviceability needs",
    ),
    HubConnectionOption(
        key=HubConnectionType.KEYED_HUB_SET_SCREW,
        label="Keyed Hub with Set Screw",
        best_for="Light duty, budget-conscious applications",
    ),
    HubConnectionOption(
        key=HubConnectionType.ER_INTERNAL_BEARINGS,
        label="ER Style Internal Bearings",
        best_for="Tight spaces with minimal room for external bearings",
        not_ideal_for_drive=True,
    ),
    HubConnectionOption(
        key=HubConnectionType.WELD_ON_HUB_COMPRESSION_BUSHINGS,
        label="Weld-On Hubs & Compression Bushings",
        best_for="General purpose with good serviceability",
        requires_bushing_system=True,
    ),
    HubConnectionOption(
        key=HubConnectionType.KEYLESS_LOCKING_DEVICES,
        label="Keyless Locking Devices",
        best_for="Zero pre-stress and max alignment precision",
    ),
    HubConnectionOption(
        key=HubConnectionType.FLAT_END_DISK_INTEGRAL_HUB,
        label="Flat End Disk with Integral Hub",
        best_for="Eliminating weld stress concentrations",
    ),
    HubConnectionOption(
        key=HubConnectionType.CONTOURED_END_DISK_INTEGRAL_HUB,
        label="Contoured End Disk with Integral Hub",
        best_for="Optimized stress distribution",
    ),
    HubConnectionOption(
        key=HubConnectionType.DEAD_SHAFT_ASSEMBLY,
        label="Dead Shaft Assembly",
        best_for="Max shaft capacity without end disk fatigue risk",
        not_ideal_for_drive=True,
    ),
)

BUSHING_SYSTEM_OPTIONS = (
    BushingSystemOption(
        key=BushingSystem.XT,
        label="XT",
        description="Preferred for two-hub pulleys. Uses 4+ evenly spaced bolts for better alignment.",
    ),
    BushingSystemOption(
        key=BushingSystem.QD,
        label="QD",
        description="Quick Disconnect style. Common general-purpose option.",
    ),
    BushingSystemOption(
        key=BushingSystem.TAPER_LOCK,
        label="Taper-Lock",
        description="Traditional taper bushing. Simple installation.",
        warning=(
            "PCI: Not recommended for two-hub pulleys. Some sizes use only 2 bolts "
            "at ~170 degrees which can introduce shaft bending and higher runout. "
            "Prefer XT for improved alignment."
        ),
    ),
    BushingSystemOption(
        key=BushingSystem.HE,
        label="HE (Obsolete)",
        description="Legacy bushing system. Not recommended for new designs.",
        hidden=True,
    ),
)

_HUB_BY_KEY = {opt.key: opt for opt in HUB_CONNECTION_OPTIONS}
_BUSHING_BY_KEY = {opt.key: opt for opt in BUSHING_SYSTEM_OPTIONS}

DEFAULT_DRIVE_HUB_CONNECTION = HubConnectionType.KEYED_HUB_SET_SCREW
DEFAULT_TAIL_HUB_CONNECTION = HubConnectionType.ER_INTERNAL_BEARINGS
DEFAULT_BUSHING_SYSTEM = BushingSystem.XT


def get_hub_connection_option(key) -> Optional[HubConnectionOption]:
    try:
        return _HUB_BY_KEY.get(HubConnectionType(key))
    except ValueError:
        return None


def get_bushing_system_option(key) -> Optional[BushingSystemOption]:
    try:
        return _BUSHING_BY_KEY.get(BushingSystem(key))
    except ValueError:
        return None


def visible_bushing_systems() -> List[BushingSystemOption]:
    return [opt for opt in BUSHING_SYSTEM_OPTIONS if not opt.hidden]


def requires_bushing_system(hub_type) -> bool:
    option = get_hub_connection_option(hub_type)
    return option.requires_bushing_system if option else False


def is_not_ideal_for_drive(hub_type) -> bool:
    option = get_hub_connection_option(hub_type)
    return option.not_ideal_for_drive if option else False


def default_hub_connection(position: PulleyPosition) -> HubConnectionType:
    if position == PulleyPosition.DRIVE:
        return DEFAULT_DRIVE_HUB_CONNECTION
    return DEFAULT_TAIL_HUB_CONNECTION
