from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Tube stress / wall validation
    STRESS_SAFETY_FACTOR: float = 1.25
    DEFAULT_BELT_TENSION_LB: float = 500.0
    FLAT_STRESS_LIMIT_PSI: float = 10000.0
    VGROOVE_STRESS_LIMIT_PSI: float = 3400.0

    # Cleats
    CLEAT_ROUNDING_INCREMENT_IN: float = 0.5

    # Geometry
    ANGLE_MISMATCH_TOLERANCE_DEG: float = 0.5

    # PCI checks: False = warn only, True = stress over limit is an error
    ENFORCE_PCI_CHECKS: bool = False

    # Recipes: "any" passes a field inside either abs or rel tolerance,
    # "all" requires every specified bound
    TOLERANCE_COMBINE: str = "any"
    RECIPE_MAX_WORKERS: Optional[int] = None  # None = os.cpu_count()
    CI_BLOCKING_TIERS: List[str] = ["smoke"]

    # Reference data: None loads the JSON bundled with the package
    REFERENCE_CATALOG_PATH: Optional[str] = None

    class Config:
        env_file = ".env"
        env_prefix = "CONVEYOR_"
        extra = "ignore"


settings = Settings()
