"""
hueharvest Configuration
Manages environment variables and defaults for palette extraction.
"""
import os


class Config:
    """Configuration class for hueharvest."""

    # Palette defaults
    DEFAULT_QUALITY: int = int(os.environ.get("HUEHARVEST_DEFAULT_QUALITY", "10"))
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("HUEHARVEST_DEFAULT_COLOR_COUNT", "10"))
    DOMINANT_PALETTE_SIZE: int = 5
    MIN_COLOR_COUNT: int = 2
    MAX_COLOR_COUNT: int = 256

    # Sampling and quantization
    ALPHA_THRESHOLD: int = 125  # pixels with alpha <= threshold are background
    SIGBITS: int = 5

    # Image acquisition
    FETCH_TIMEOUT_S: float = float(os.environ.get("HUEHARVEST_FETCH_TIMEOUT_S", "10"))
    MAX_FILE_MB: int = int(os.environ.get("HUEHARVEST_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("HUEHARVEST_MAX_EDGE", "0"))  # 0 keeps full size
    SUPPORTED_URL_SCHEMES = ("http://", "https://")

    # Logging
    LOG_LEVEL: str = os.environ.get("HUEHARVEST_LOG_LEVEL", "INFO")

    # Output formats
    COLOR_TYPES = ("hex", "array")
    COLOR_TYPE_ALIASES = {"triple": "array", "rgb": "array"}

    @classmethod
    def validate_color_type(cls, color_type: str) -> bool:
        """Validate color_type parameter."""
        return color_type in cls.COLOR_TYPES or color_type in cls.COLOR_TYPE_ALIASES

    @classmethod
    def max_file_bytes(cls) -> int:
        return cls.MAX_FILE_MB * 1024 * 1024


# Global config instance
config = Config()
