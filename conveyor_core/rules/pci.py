"""
Group 6: PCI tube stress and shell wall rules.

Reads the drive/tail PCI and wall validation results from the calculator
context. Stress over the limit is an error only when PCI enforcement is on;
otherwise the calculator already tagged the result WARN.
"""

from typing import List

from ..calculators.base import CalcContext
from ..models import PciStatus, WallValidationStatus
from ..schemas import Configuration, Issue
from .issues import make_issue

_RULES = {
    "drive": {
        "fail": "pci_drive_stress_fail",
        "warn": "pci_drive_stress_warn",
        "upgrade": "pci_drive_wall_upgrade",
        "engineering": "pci_drive_wall_engineering_required",
    },
    "tail": {
        "fail": "pci_tail_stress_fail",
        "warn": "pci_tail_stress_warn",
        "upgrade": "pci_tail_wall_upgrade",
        "engineering": "pci_tail_wall_engineering_required",
    },
}


def _stress_message(label: str, result) -> str:
    return (f"{label} pulley tube stress ({result.stress_psi:.0f} psi) exceeds the PCI limit "
            f"({result.stress_limit_psi:.0f} psi). Increase wall thickness or reduce hub centers.")


def apply_pci_rules(config: Configuration, ctx: CalcContext) -> List[Issue]:
    issues = []
    estimated_hub_centers = False
    estimated_status = False

    for position in ("drive", "tail"):
        rules = _RULES[position]
        label = position.capitalize()

        pci = ctx.get(f"{position}_pci")
        if pci is not None:
            if pci.status == PciStatus.ERROR:
                issues.append(make_issue(
                    "pci_tube_geometry_error",
                    f"{label} pulley: {pci.error_message}",
                    field=f"{position}_tube_wall_in",
                ))
            elif pci.status == PciStatus.FAIL:
                issues.append(make_issue(rules["fail"], _stress_message(label, pci)))
            elif pci.status == PciStatus.WARN:
                issues.append(make_issue(rules["warn"], _stress_message(label, pci)))

            if pci.status not in (PciStatus.INCOMPLETE, PciStatus.ERROR) and pci.hub_centers_estimated:
                estimated_hub_centers = True
            if pci.status == PciStatus.ESTIMATED:
                estimated_status = True

        wall = ctx.get(f"{position}_wall_validation")
        if wall is not None:
            if wall.status == WallValidationStatus.RECOMMEND_UPGRADE:
                issues.append(make_issue(rules["upgrade"], f"{label} pulley: {wall.message}"))
            elif wall.status == WallValidationStatus.FAIL_ENGINEERING_REQUIRED:
                issues.append(make_issue(rules["engineering"], f"{label} pulley: {wall.message}"))

    if estimated_hub_centers:
        issues.append(make_issue("pci_hub_centers_estimated"))
    if estimated_status:
        issues.append(make_issue("pci_status_estimated"))
    return issues
