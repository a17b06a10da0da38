# Cleat weight constants, parametric T-profile: a flat base strip plus the upright.

# Densities (lb/in³)
DENSITIES = {
    "PVC_HOT_WELDED": 0.045,
    "PU": 0.042,
    "RUBBER": 0.043,
}

DEFAULT_CLEAT_MATERIAL = "PVC_HOT_WELDED"

# Profile geometry (inches)
CLEAT_THICKNESS_IN = 0.25
CLEAT_BASE_WIDTH_IN = 1.5


def cleat_width(belt_width_in: float, edge_offset_in: float) -> float:
    """Cleats stop short of both belt edges by the edge offset."""
    return max(belt_width_in - 2 * edge_offset_in, 0.0)


def cleat_weight_each(height_in: float, width_in: float, material: str = DEFAULT_CLEAT_MATERIAL) -> float:
    """
    W = thickness × (base + height) × width × density

    3" tall × 42" wide PVC: 0.25 × 4.5 × 42 × 0.045 = 2.12625 lb
    """
    density = DENSITIES.get(material, DENSITIES[DEFAULT_CLEAT_MATERIAL])
    return CLEAT_THICKNESS_IN * (CLEAT_BASE_WIDTH_IN + height_in) * width_in * density


def cleat_weight_per_foot(weight_each_lb: float, pitch_in: float) -> float:
    """Added belt weight per foot of belt: one cleat every pitch inches."""
    if pitch_in <= 0:
        return 0.0
    return weight_each_lb * 12.0 / pitch_in
