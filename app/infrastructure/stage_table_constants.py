"""
Stage table endpoint constants and bundled reference data.

This module contains the remote stage table endpoint paths and the default
apple phenology table used when no external source is configured.
"""


# Stage Table API Endpoints
class StageTableEndpoints:
    """Remote stage table endpoint paths."""

    # Base paths
    PHENOLOGY_BASE = "/phenology"

    # Stage endpoints
    STAGES = f"{PHENOLOGY_BASE}/stages/"
    STAGES_BY_CROP = f"{PHENOLOGY_BASE}/stages/?crop={{crop}}"

    @classmethod
    def get_stages(cls, crop: str = None) -> str:
        """
        Get stages endpoint with optional crop filter.

        Args:
            crop: Optional crop name to filter by

        Returns:
            Endpoint path with query parameter if provided
        """
        if crop:
            return cls.STAGES_BY_CROP.format(crop=crop)
        return cls.STAGES


# Apple (Malus domestica) BBCH stages with heat unit thresholds, base 5°C.
# Field names match the JSON accepted by the file and remote sources.
DEFAULT_APPLE_STAGES = [
    {"stage_code": 0, "stage_name": "Dormancy", "heat_threshold": 0,
     "description": "Winter dormancy, buds closed and covered by scales"},
    {"stage_code": 1, "stage_name": "Bud swelling", "heat_threshold": 50,
     "description": "Beginning of bud swelling"},
    {"stage_code": 7, "stage_name": "Green tip", "heat_threshold": 100,
     "description": "Green leaf tips visible"},
    {"stage_code": 10, "stage_name": "Mouse ear", "heat_threshold": 140,
     "description": "First leaves separating"},
    {"stage_code": 56, "stage_name": "Tight cluster", "heat_threshold": 180,
     "description": "Flower pedicels elongating, sepals closed"},
    {"stage_code": 57, "stage_name": "Pink bud", "heat_threshold": 220,
     "description": "Petals visible, flowers still closed"},
    {"stage_code": 60, "stage_name": "First flowers", "heat_threshold": 250,
     "description": "First flowers open"},
    {"stage_code": 65, "stage_name": "Full bloom", "heat_threshold": 300,
     "description": "At least 50% of flowers open"},
    {"stage_code": 69, "stage_name": "Petal fall", "heat_threshold": 360,
     "description": "End of flowering, all petals fallen"},
    {"stage_code": 71, "stage_name": "Fruit set", "heat_threshold": 420,
     "description": "Fruit diameter up to 10 mm"},
    {"stage_code": 74, "stage_name": "Fruit growth", "heat_threshold": 650,
     "description": "Fruit diameter up to 40 mm, fruit erect"},
    {"stage_code": 81, "stage_name": "Beginning of ripening", "heat_threshold": 1100,
     "description": "Beginning of fruit colouring"},
    {"stage_code": 87, "stage_name": "Harvest maturity", "heat_threshold": 1400,
     "description": "Fruit ripe for picking"},
    {"stage_code": 93, "stage_name": "Leaf fall", "heat_threshold": 1800,
     "description": "Beginning of leaf fall"},
]


# Stage Table Client Constants
class StageTableConstants:
    """General stage table client constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Response envelope key used by paginated services
    RESULTS_KEY = "results"
