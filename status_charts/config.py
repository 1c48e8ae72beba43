"""
Configuration management for StatusCharts package.

This module provides configuration options for status panel generation
including figure sizing, DPI, output directories, axis scaling policy and
per-layer style overrides.
"""

import json
import yaml
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict

from .constants import LOG_FLOOR
from .exceptions import ConfigurationError


@dataclass
class Config:
    """Configuration for status panel generation.
    
    Attributes:
        default_dpi: Resolution for output images (dots per inch).
        figure_width: Width of the summary panel figure in inches.
        figure_height: Height of the summary panel figure in inches.
        timeline_height: Height in inches of a standalone timeline chart.
        output_dir: Directory for saving generated panels.
        axis_padding: Fraction of each axis range added on both sides to form
            the plot region (zone bands and reference labels span it).
        log_floor: Smallest value drawn on log-scale charts; zero and negative
            values are clamped to it before taking log10.
        year_granularity: Years are rounded outward to multiples of this value
            when deriving default x ranges.
        cycle_length: Spacing in years between dominant cycle years.
        background_color: Figure background color (any Matplotlib color spec).
        metric_style: Per-layer overrides merged onto the metric chart defaults.
        timeline_style: Per-layer overrides merged onto the timeline defaults.
    """
    
    default_dpi: int = 150
    figure_width: float = 14.0
    figure_height: float = 16.0
    timeline_height: float = 4.0
    output_dir: Path = field(default_factory=lambda: Path("./output"))
    axis_padding: float = 0.04
    log_floor: float = LOG_FLOOR
    year_granularity: int = 5
    cycle_length: int = 4
    background_color: str = "white"
    metric_style: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    timeline_style: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    
    def __post_init__(self):
        """Convert string paths to Path objects if necessary."""
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)
    
    @classmethod
    def load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a YAML or JSON file.
        
        Args:
            path: Path to configuration file (.yaml, .yml, or .json).
            
        Returns:
            Config instance with loaded settings.
            
        Raises:
            ConfigurationError: If the file format or contents are not supported.
            FileNotFoundError: If file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        
        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif path.suffix == '.json':
                data = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json"
                )
        
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")
        
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        
        if 'output_dir' in data:
            data['output_dir'] = Path(data['output_dir'])
        
        return cls(**data)
    
    def save_to_file(self, path: Path) -> None:
        """Save configuration to a YAML or JSON file.
        
        Args:
            path: Path where configuration should be saved.
            
        Raises:
            ConfigurationError: If file format is not supported.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        
        data = asdict(self)
        data['output_dir'] = str(data['output_dir'])
        
        with open(path, 'w') as f:
            if path.suffix in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            elif path.suffix == '.json':
                json.dump(data, f, indent=2)
            else:
                raise ConfigurationError(
                    f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json"
                )
    
    def validate(self) -> bool:
        """Validate configuration parameters.
        
        Returns:
            True if configuration is valid.
            
        Raises:
            ConfigurationError: If any configuration parameter is invalid.
        """
        if self.default_dpi <= 0:
            raise ConfigurationError("default_dpi must be positive")
        
        if self.figure_width <= 0 or self.figure_height <= 0 or self.timeline_height <= 0:
            raise ConfigurationError("Figure dimensions must be positive")
        
        if not (0.0 <= float(self.axis_padding) < 0.5):
            raise ConfigurationError("axis_padding must be in the range [0.0, 0.5)")
        
        if self.log_floor <= 0:
            raise ConfigurationError("log_floor must be positive")
        
        if not isinstance(self.year_granularity, int) or self.year_granularity < 1:
            raise ConfigurationError("year_granularity must be an integer >= 1")
        
        if not isinstance(self.cycle_length, int) or self.cycle_length < 1:
            raise ConfigurationError("cycle_length must be an integer >= 1")
        
        if not isinstance(self.background_color, str) or not self.background_color:
            raise ConfigurationError("background_color must be a non-empty string")
        
        for name in ("metric_style", "timeline_style"):
            overrides = getattr(self, name)
            if not isinstance(overrides, dict) or not all(
                isinstance(v, dict) for v in overrides.values()
            ):
                raise ConfigurationError(f"{name} must map layer names to option mappings")
        
        return True
    
    def ensure_directories(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """
    Get a Config instance with default settings.
    
    Returns:
        Config instance initialized with default values.
    """
    return Config()
