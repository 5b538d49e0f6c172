"""Configuration for the metrics registry and its logging"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple
from pydantic import Field, validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Registry configuration read from environment variables"""

    # Registry settings
    registry_prefix: str = Field(default="", description="Prefix for every metric name in the root registry")
    const_labels_str: str = Field(
        default="",
        description="Static labels for the root registry (name=value, comma-separated)"
    )
    histogram_buckets_str: str = Field(
        default="0.005,0.01,0.025,0.05,0.1,0.25,0.5,1,2.5,5,10",
        description="Default histogram bucket upper bounds (comma-separated)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Log file, console only when unset")

    class Config:
        env_prefix = ""
        case_sensitive = False

    @validator('log_level')
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @validator('const_labels_str')
    def validate_const_labels(cls, v):
        for label in v.split(','):
            if label.strip() and '=' not in label:
                raise ValueError(f"Label '{label.strip()}' must be in name=value form")
        return v

    @validator('histogram_buckets_str')
    def validate_histogram_buckets(cls, v):
        try:
            buckets = [float(item) for item in v.split(',') if item.strip()]
        except ValueError:
            raise ValueError(f"Histogram buckets must be numbers: {v}")
        if not buckets:
            raise ValueError("At least one histogram bucket is required")
        if any(upper <= lower for lower, upper in zip(buckets, buckets[1:])):
            raise ValueError(f"Histogram buckets must be strictly increasing: {v}")
        return v

    @validator('log_file')
    def ensure_log_directory(cls, v):
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def const_labels(self) -> List[Tuple[str, str]]:
        """Get constant labels as ordered (name, value) pairs"""
        labels = []
        for label in self.const_labels_str.split(','):
            if '=' in label:
                name, value = label.split('=', 1)
                labels.append((name.strip(), value.strip()))
        return labels

    @property
    def histogram_buckets(self) -> List[float]:
        """Get default histogram buckets as a list"""
        return [float(item) for item in self.histogram_buckets_str.split(',') if item.strip()]
