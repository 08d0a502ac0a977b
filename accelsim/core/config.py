"""
Configuration management system for accelsim.

This module provides Pydantic models for type-safe configuration with validation
and environment variable integration.
"""

from typing import Optional, Tuple
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class LogLevel(str, Enum):
    """Log levels for the application."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class GestureThresholds(BaseModel):
    """
    Fixed thresholds of the modelled accelerometer driver.

    All tolerances are in milli-g, damping values in ticks. They do not depend
    on the configured sample range.
    """
    tilt_tolerance: int = 200
    freefall_tolerance: int = 400
    shake_tolerance: int = 400
    shock_3g_tolerance: int = 3072
    shock_6g_tolerance: int = 6144
    shock_8g_tolerance: int = 8192
    gesture_damping: int = 5
    shake_damping: int = 10
    shake_count_threshold: int = 4

    @field_validator("gesture_damping", "shake_damping", "shake_count_threshold")
    @classmethod
    def validate_positive(cls, v):
        """Damping windows and counts must be at least one tick."""
        if v < 1:
            raise ValueError("Damping and count thresholds must be >= 1")
        return v

class BaseConfig(BaseSettings):
    """
    Base configuration class with common settings for all components.

    All other configuration classes should inherit from this class.
    """
    model_config = SettingsConfigDict(env_file=".env", env_prefix="ACCELSIM_", extra="ignore")

    debug: bool = False
    log_level: LogLevel = LogLevel.INFO

class EventConfig(BaseConfig):
    """Configuration for the event system."""
    model_config = SettingsConfigDict(env_prefix="ACCELSIM_EVENT_")

    max_trace_events: int = 1000
    tracing_enabled: bool = True

class ServiceConfig(BaseConfig):
    """Configuration for service management."""
    model_config = SettingsConfigDict(env_prefix="ACCELSIM_SERVICE_")

    service_startup_timeout: float = 10.0  # seconds
    service_shutdown_timeout: float = 5.0  # seconds

class AccelerometerConfig(BaseConfig):
    """Configuration for the simulated accelerometer."""
    model_config = SettingsConfigDict(env_prefix="ACCELSIM_ACCELEROMETER_")

    sample_range: int = 2  # g
    # Seconds between ticks of the service read loop
    update_interval: float = 0.02
    thresholds: GestureThresholds = Field(default_factory=GestureThresholds)

    @field_validator("sample_range")
    @classmethod
    def validate_sample_range(cls, v):
        """Validate the sample range is one the driver accepts."""
        if not 1 <= v <= 8:
            raise ValueError("Sample range must be between 1 and 8 g")
        return v

    @field_validator("update_interval")
    @classmethod
    def validate_update_interval(cls, v):
        if v <= 0:
            raise ValueError("Update interval must be positive")
        return v

class SimulatorConfig(BaseConfig):
    """Configuration for the noisy sample source."""
    model_config = SettingsConfigDict(env_prefix="ACCELSIM_SIMULATOR_")

    base_sample: Tuple[int, int, int] = (0, 0, -1023)  # milli-g, lying flat
    noise_std: float = 30.0  # milli-g
    shake_probability: float = 0.0  # chance per tick of starting a shake burst
    shake_amplitude: int = 1500  # milli-g
    seed: Optional[int] = None
    max_ticks: Optional[int] = None

    @field_validator("noise_std")
    @classmethod
    def validate_noise(cls, v):
        if v < 0:
            raise ValueError("Noise standard deviation must be >= 0")
        return v

    @field_validator("shake_probability")
    @classmethod
    def validate_probability(cls, v):
        """Validate probability is within range."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("Shake probability must be between 0.0 and 1.0")
        return v

class ApplicationConfig(BaseConfig):
    """
    Main application configuration that combines all component configurations.

    This is the top-level configuration class that should be used by the application.
    """
    model_config = SettingsConfigDict(env_file=".env", env_prefix="ACCELSIM_",
                                      env_nested_delimiter="__", extra="ignore")

    event: EventConfig = Field(default_factory=EventConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    accelerometer: AccelerometerConfig = Field(default_factory=AccelerometerConfig)
    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)

def get_config() -> ApplicationConfig:
    """
    Get the application configuration.

    Returns:
        The validated ApplicationConfig instance
    """
    return ApplicationConfig()
