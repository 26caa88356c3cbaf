"""Engine configuration: day-count, sweep grid and solver settings.

Defaults reproduce the calculator's fixed constants. Values can be overridden
from a dictionary or a YAML file.
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from .utils.error_handling import ConfigurationError


class EngineConfig:
    """Numeric settings shared by the pricer, curve generator and solver."""

    def __init__(
        self,
        day_count: float = 365.25,
        min_year_fraction: float = 0.001,
        theta_days_per_year: float = 365.0,
        sweep_width: float = 0.5,
        sweep_steps: int = 200,
        min_sweep_spot: float = 1.0,
        initial_vol: float = 0.30,
        tolerance: float = 1e-4,
        max_iterations: int = 100,
        min_vol: float = 0.001,
        max_vol: float = 5.0,
    ):
        """Initialize engine configuration.

        Args:
            day_count: Days per year for the year-fraction (actual/365.25)
            min_year_fraction: Floor applied to the year-fraction
            theta_days_per_year: Divisor turning annual theta into daily theta
            sweep_width: Half-width of the spot sweep as a fraction of spot (0.5 = ±50%)
            sweep_steps: Number of equal steps in the sweep (points = steps + 1)
            min_sweep_spot: Lowest spot the sweep may start from
            initial_vol: Newton-Raphson starting volatility (decimal)
            tolerance: Absolute price tolerance for convergence
            max_iterations: Solver iteration budget
            min_vol: Lower clamp for volatility iterates (decimal)
            max_vol: Upper clamp for volatility iterates (decimal)

        Raises:
            ConfigurationError: If settings are inconsistent
        """
        self.day_count = day_count
        self.min_year_fraction = min_year_fraction
        self.theta_days_per_year = theta_days_per_year
        self.sweep_width = sweep_width
        self.sweep_steps = sweep_steps
        self.min_sweep_spot = min_sweep_spot
        self.initial_vol = initial_vol
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.min_vol = min_vol
        self.max_vol = max_vol

        self._validate()

    def _validate(self):
        if self.day_count <= 0:
            raise ConfigurationError(f"day_count must be positive, got {self.day_count}")
        if self.min_year_fraction <= 0:
            raise ConfigurationError(
                f"min_year_fraction must be positive, got {self.min_year_fraction}"
            )
        if self.theta_days_per_year <= 0:
            raise ConfigurationError(
                f"theta_days_per_year must be positive, got {self.theta_days_per_year}"
            )
        if not 0 < self.sweep_width < 1:
            raise ConfigurationError(f"sweep_width must be in (0, 1), got {self.sweep_width}")
        if int(self.sweep_steps) != self.sweep_steps or self.sweep_steps < 1:
            raise ConfigurationError(f"sweep_steps must be a positive integer, got {self.sweep_steps}")
        if self.min_sweep_spot <= 0:
            raise ConfigurationError(f"min_sweep_spot must be positive, got {self.min_sweep_spot}")
        if self.tolerance <= 0:
            raise ConfigurationError(f"tolerance must be positive, got {self.tolerance}")
        if int(self.max_iterations) != self.max_iterations or self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be a positive integer, got {self.max_iterations}"
            )
        if not 0 < self.min_vol < self.max_vol:
            raise ConfigurationError(
                f"Volatility bounds must satisfy 0 < min_vol < max_vol, "
                f"got [{self.min_vol}, {self.max_vol}]"
            )
        if not self.min_vol <= self.initial_vol <= self.max_vol:
            raise ConfigurationError(
                f"initial_vol {self.initial_vol} outside [{self.min_vol}, {self.max_vol}]"
            )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "EngineConfig":
        """Create EngineConfig from dictionary (e.g., from YAML).

        Args:
            config: Dictionary with optional ``time``, ``curve`` and ``solver`` sections

        Returns:
            EngineConfig instance
        """
        time_cfg = config.get('time', {}) or {}
        curve_cfg = config.get('curve', {}) or {}
        solver_cfg = config.get('solver', {}) or {}

        return cls(
            day_count=time_cfg.get('day_count', 365.25),
            min_year_fraction=time_cfg.get('min_year_fraction', 0.001),
            theta_days_per_year=time_cfg.get('theta_days_per_year', 365.0),
            sweep_width=curve_cfg.get('sweep_width', 0.5),
            sweep_steps=curve_cfg.get('sweep_steps', 200),
            min_sweep_spot=curve_cfg.get('min_sweep_spot', 1.0),
            initial_vol=solver_cfg.get('initial_vol', 0.30),
            tolerance=solver_cfg.get('tolerance', 1e-4),
            max_iterations=solver_cfg.get('max_iterations', 100),
            min_vol=solver_cfg.get('min_vol', 0.001),
            max_vol=solver_cfg.get('max_vol', 5.0),
        )

    def __repr__(self) -> str:
        return (
            f"EngineConfig(day_count={self.day_count}, steps={self.sweep_steps}, "
            f"width={self.sweep_width}, vol=[{self.min_vol}, {self.max_vol}], "
            f"tol={self.tolerance}, max_iter={self.max_iterations})"
        )


DEFAULT_CONFIG = EngineConfig()


def load_config(path: str | Path) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        EngineConfig instance (defaults for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not a mapping or values are invalid
    """
    with open(path) as f:
        params = yaml.safe_load(f)

    if params is None:
        return EngineConfig()
    if not isinstance(params, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    return EngineConfig.from_dict(params)
