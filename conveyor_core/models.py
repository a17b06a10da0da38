import enum


# --- Issues / evaluation ---

class Severity(str, enum.Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class EvaluationMode(str, enum.Enum):
    DRAFT = "draft"      # live editing
    COMMIT = "commit"    # saving / finalizing


# --- Geometry ---

class GeometryMode(str, enum.Enum):
    L_ANGLE = "L_ANGLE"   # axis length + angle
    H_ANGLE = "H_ANGLE"   # horizontal run + angle
    H_TOB = "H_TOB"       # horizontal run + both TOB heights


class SupportType(str, enum.Enum):
    EXTERNAL = "external"
    LEGS = "legs"
    CASTERS = "casters"


class ReferenceEnd(str, enum.Enum):
    TAIL = "tail"
    DRIVE = "drive"


# --- Speed / drive ---

class SpeedMode(str, enum.Enum):
    BELT_SPEED = "belt_speed"
    DRIVE_RPM = "drive_rpm"


class GearmotorMountingStyle(str, enum.Enum):
    SHAFT_MOUNTED = "shaft_mounted"
    BOTTOM_MOUNT = "bottom_mount"   # chain driven, sprockets required


class ShaftDiameterMode(str, enum.Enum):
    CALCULATED = "calculated"
    MANUAL = "manual"


# --- Material / application ---

class MaterialForm(str, enum.Enum):
    PARTS = "parts"
    BULK = "bulk"


class Orientation(str, enum.Enum):
    LENGTHWISE = "lengthwise"
    CROSSWISE = "crosswise"


class BulkInputMethod(str, enum.Enum):
    WEIGHT_FLOW = "weight_flow"
    VOLUME_FLOW = "volume_flow"


class DensitySource(str, enum.Enum):
    KNOWN = "known"
    ASSUMED_CLASS = "assumed_class"


class FeedBehavior(str, enum.Enum):
    CONTINUOUS = "continuous"
    SURGE = "surge"


class PartTemperatureClass(str, enum.Enum):
    AMBIENT = "ambient"
    WARM = "warm"
    HOT = "hot"
    RED_HOT = "red_hot"


class FluidType(str, enum.Enum):
    NONE = "none"
    MINIMAL = "minimal"
    CONSIDERABLE = "considerable"


class SideLoadingDirection(str, enum.Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class SideLoadingSeverity(str, enum.Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class EndGuards(str, enum.Enum):
    NONE = "none"
    HEAD_END = "head_end"
    TAIL_END = "tail_end"
    BOTH_ENDS = "both_ends"


class LacingStyle(str, enum.Enum):
    ENDLESS = "endless"
    CLIPPER_LACING = "clipper_lacing"
    HINGED_LACING = "hinged_lacing"


class ProductKey(str, enum.Enum):
    SLIDERBED = "sliderbed"
    BELT_CONVEYOR = "belt_conveyor"


# --- Belt / pulleys ---

class TrackingMode(str, enum.Enum):
    FLAT = "flat"
    CROWNED = "crowned"
    V_GUIDED = "v_guided"


class BeltFamily(str, enum.Enum):
    PVC = "pvc"
    PU = "pu"
    FLEECE = "fleece"
    RUBBER = "rubber"


class PulleyPosition(str, enum.Enum):
    DRIVE = "drive"
    TAIL = "tail"


class PulleyStation(str, enum.Enum):
    HEAD_DRIVE = "head_drive"
    TAIL = "tail"
    SNUB = "snub"
    BEND = "bend"
    TAKEUP = "takeup"


class ShaftArrangement(str, enum.Enum):
    THROUGH_SHAFT_EXTERNAL_BEARINGS = "THROUGH_SHAFT_EXTERNAL_BEARINGS"
    STUB_SHAFT_EXTERNAL_BEARINGS = "STUB_SHAFT_EXTERNAL_BEARINGS"
    INTERNAL_BEARINGS = "INTERNAL_BEARINGS"


class PulleyConstruction(str, enum.Enum):
    DRUM = "DRUM"
    WING = "WING"
    SPIRAL = "SPIRAL"
    MAGNETIC = "MAGNETIC"


class WallValidationStatus(str, enum.Enum):
    NOT_VALIDATED = "NOT_VALIDATED"
    PASS = "PASS"
    RECOMMEND_UPGRADE = "RECOMMEND_UPGRADE"
    FAIL_ENGINEERING_REQUIRED = "FAIL_ENGINEERING_REQUIRED"


class PciStatus(str, enum.Enum):
    PASS = "pass"
    ESTIMATED = "estimated"     # hub centers defaulted to belt width
    WARN = "warn"
    FAIL = "fail"               # only when PCI enforcement is on
    INCOMPLETE = "incomplete"   # tube geometry not supplied
    ERROR = "error"             # impossible tube geometry


class HubConnectionType(str, enum.Enum):
    FIXED_STUB_SHAFTS = "FIXED_STUB_SHAFTS"
    REMOVABLE_STUB_SHAFTS = "REMOVABLE_STUB_SHAFTS"
    KEYED_HUB_SET_SCREW = "KEYED_HUB_SET_SCREW"
    ER_INTERNAL_BEARINGS = "ER_INTERNAL_BEARINGS"
    WELD_ON_HUB_COMPRESSION_BUSHINGS = "WELD_ON_HUB_COMPRESSION_BUSHINGS"
    KEYLESS_LOCKING_DEVICES = "KEYLESS_LOCKING_DEVICES"
    FLAT_END_DISK_INTEGRAL_HUB = "FLAT_END_DISK_INTEGRAL_HUB"
    CONTOURED_END_DISK_INTEGRAL_HUB = "CONTOURED_END_DISK_INTEGRAL_HUB"
    DEAD_SHAFT_ASSEMBLY = "DEAD_SHAFT_ASSEMBLY"


class BushingSystem(str, enum.Enum):
    QD = "QD"
    XT = "XT"
    TAPER_LOCK = "TAPER_LOCK"
    HE = "HE"


# --- Cleats ---

class CleatPattern(str, enum.Enum):
    STRAIGHT_CROSS = "STRAIGHT_CROSS"
    CURVED_90 = "CURVED_90"
    CURVED_120 = "CURVED_120"
    CURVED_150 = "CURVED_150"


class CleatStyle(str, enum.Enum):
    SOLID = "SOLID"
    DRILL_SIPED_1IN = "DRILL_SIPED_1IN"


class CleatSpacingMode(str, enum.Enum):
    DIVIDE_EVENLY = "divide_evenly"
    USE_NOMINAL = "use_nominal"


class CleatRemainderMode(str, enum.Enum):
    SPREAD_EVENLY = "spread_evenly"
    ONE_ODD_GAP = "one_odd_gap"


class OddGapSize(str, enum.Enum):
    SMALLER = "smaller"
    LARGER = "larger"


class OddGapLocation(str, enum.Enum):
    HEAD = "head"
    TAIL = "tail"
    CENTER = "center"


# --- Frame / supports ---

class FrameHeightMode(str, enum.Enum):
    STANDARD = "standard"
    LOW_PROFILE = "low_profile"
    CUSTOM = "custom"


class FrameConstructionType(str, enum.Enum):
    SHEET_METAL = "sheet_metal"
    STRUCTURAL_CHANNEL = "structural_channel"


class ReturnFrameStyle(str, enum.Enum):
    STANDARD = "standard"
    LOW_PROFILE = "low_profile"


class ReturnSnubMode(str, enum.Enum):
    AUTO = "auto"
    YES = "yes"
    NO = "no"
