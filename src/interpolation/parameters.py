"""
Curve Parameters

Shape parameters of the daily temperature curve.

Design Principles:
- Config-driven (config/interpolation.yaml), with named profiles
  overriding the defaults (e.g. a "cloudy" profile with z = 1.0)
- Falls back to the published defaults when no config file is present
- Validation of the parameter domains happens in DayTemperatureModel,
  so hand-built parameters are checked exactly like loaded ones
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


# Defaults from Eccel (2010) / Interpol.T
DEFAULT_PARAMETERS = {
    'c': 0.39,              # Fraction of the daily range lost between Tx and sunset
    'z': 0.5,               # Night cooling exponent: clear sky 0.5, overcast 1.0
    'max_lag_hours': 4.0,   # Daily maximum occurs this long before sunset
    'min_lag_hours': 1.0,   # Daily minimum occurs this long before sunrise
    'scale_factor': 0.1,    # NCDC stores TMIN/TMAX in tenths of a degree
}

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / 'config' / 'interpolation.yaml'


class CurveParameters:
    """
    Parameters for the four-segment daily temperature curve.

    Attributes:
        c: Sunset temperature offset, as a fraction of the daily range
        z: Cloudiness exponent of the night cooling power law, in (0, 1]
        max_lag_hours: Hours between the daily maximum and sunset
        min_lag_hours: Hours between the daily minimum and sunrise
        scale_factor: Multiplier converting raw record values to °C
    """

    def __init__(
        self,
        c: float = DEFAULT_PARAMETERS['c'],
        z: float = DEFAULT_PARAMETERS['z'],
        max_lag_hours: float = DEFAULT_PARAMETERS['max_lag_hours'],
        min_lag_hours: float = DEFAULT_PARAMETERS['min_lag_hours'],
        scale_factor: float = DEFAULT_PARAMETERS['scale_factor']
    ):
        self.c = c
        self.z = z
        self.max_lag_hours = max_lag_hours
        self.min_lag_hours = min_lag_hours
        self.scale_factor = scale_factor

    @classmethod
    def from_yaml(cls, config_path: Path, profile: Optional[str] = None) -> 'CurveParameters':
        """
        Load parameters from a YAML file.

        Args:
            config_path: Path to interpolation.yaml
            profile: Optional profile name whose values override the defaults

        Returns:
            CurveParameters instance

        Raises:
            KeyError: If the requested profile is not defined
        """
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        params = DEFAULT_PARAMETERS.copy()
        params.update(config.get('default') or {})

        if profile:
            profiles = config.get('profiles') or {}
            if profile not in profiles:
                raise KeyError(
                    f"Unknown profile '{profile}'. "
                    f"Must be one of: {sorted(profiles)}"
                )
            params.update(profiles[profile])

        return cls(
            c=float(params['c']),
            z=float(params['z']),
            max_lag_hours=float(params['max_lag_hours']),
            min_lag_hours=float(params['min_lag_hours']),
            scale_factor=float(params['scale_factor'])
        )

    def as_model_kwargs(self) -> dict:
        """Keyword arguments accepted by DayTemperatureModel."""
        return {
            'c': self.c,
            'z': self.z,
            'max_lag_hours': self.max_lag_hours,
            'min_lag_hours': self.min_lag_hours,
        }

    def __eq__(self, other):
        if not isinstance(other, CurveParameters):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return (
            f"CurveParameters(c={self.c}, z={self.z}, "
            f"max_lag_hours={self.max_lag_hours}, min_lag_hours={self.min_lag_hours}, "
            f"scale_factor={self.scale_factor})"
        )


def load_default_parameters(profile: Optional[str] = None) -> CurveParameters:
    """
    Load the default curve parameters.

    Args:
        profile: Optional profile name from config/interpolation.yaml

    Returns:
        CurveParameters from the config file, or the hard-coded defaults
        if the file is not found
    """
    if not DEFAULT_CONFIG_PATH.exists():
        if profile:
            logger.warning(
                f"Config file {DEFAULT_CONFIG_PATH} not found; "
                f"ignoring profile '{profile}'"
            )
        return CurveParameters()

    return CurveParameters.from_yaml(DEFAULT_CONFIG_PATH, profile=profile)
