"""
Configuration management for the CO2 ensemble forecaster.
"""
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional
from pathlib import Path


@dataclass
class ModelConfig:
    """Base model configuration."""
    training_years: int = 30
    polynomial_degree: int = 2
    smoothing_alpha: float = 0.3
    smoothing_trend_window: int = 5
    moving_average_window: int = 10


# Models scored by a fixed baseline instead of fit quality
BASELINE_MODELS = ('exponential', 'moving_average')


@dataclass
class EnsembleConfig:
    """Ensemble weighting configuration."""
    policy: str = "baseline"  # "baseline" or "equal"
    # Fixed scores for the models that are not scored on fit quality
    baseline_scores: Dict[str, float] = field(default_factory=lambda: {
        "exponential": 0.8,
        "moving_average": 0.7
    })
    holdout_years: int = 0  # 0 = score in-sample
    fallback_to_linear: bool = False


@dataclass
class ConfidenceConfig:
    """Thresholds for per-point confidence labels."""
    high_max_step: int = 3
    high_max_variance: float = 0.05
    medium_max_step: int = 7
    medium_max_variance: float = 0.10


@dataclass
class GrowthConfig:
    """Growth-rate diagnostics configuration."""
    recent_window: int = 5
    trend_threshold: float = 0.01  # +-1% per year


# Option names accepted by forecast() and Config.from_options()
MODEL_OPTIONS = (
    'training_years', 'polynomial_degree', 'smoothing_alpha',
    'smoothing_trend_window', 'moving_average_window'
)


@dataclass
class Config:
    """Main configuration container."""
    model: ModelConfig = field(default_factory=ModelConfig)
    ensemble: EnsembleConfig = field(default_factory=EnsembleConfig)
    confidence: ConfidenceConfig = field(default_factory=ConfidenceConfig)
    growth: GrowthConfig = field(default_factory=GrowthConfig)
    horizon: int = 10
    validate_series: bool = True
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: str):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str) -> 'Config':
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        return cls(
            model=ModelConfig(**data.get('model', {})),
            ensemble=EnsembleConfig(**data.get('ensemble', {})),
            confidence=ConfidenceConfig(**data.get('confidence', {})),
            growth=GrowthConfig(**data.get('growth', {})),
            horizon=data.get('horizon', 10),
            validate_series=data.get('validate_series', True),
            log_level=data.get('log_level', 'INFO')
        )

    @classmethod
    def from_options(cls, base: Optional['Config'] = None, **options) -> 'Config':
        """
        Build a config from flat keyword options.

        Args:
            base: Config to start from (default config if None)
            **options: horizon or any ModelConfig field

        Returns:
            New Config; ``base`` is not modified
        """
        data = (base or cls()).to_dict()
        for key, value in options.items():
            if value is None:
                continue
            if key == 'horizon':
                data['horizon'] = value
            elif key in MODEL_OPTIONS:
                data['model'][key] = value
            else:
                raise ValueError(f"Unknown forecast option: {key}")
        return cls.from_dict(data)

    def validate(self) -> 'Config':
        """Check parameter ranges, raising ValueError on the first problem."""
        m = self.model
        if m.training_years < 1:
            raise ValueError(f"training_years must be >= 1, got {m.training_years}")
        if not 1 <= m.polynomial_degree <= 3:
            raise ValueError(f"polynomial_degree must be in [1, 3], got {m.polynomial_degree}")
        if not 0.0 < m.smoothing_alpha < 1.0:
            raise ValueError(f"smoothing_alpha must be in (0, 1), got {m.smoothing_alpha}")
        if m.smoothing_trend_window < 2:
            raise ValueError(f"smoothing_trend_window must be >= 2, got {m.smoothing_trend_window}")
        if m.moving_average_window < 2:
            raise ValueError(f"moving_average_window must be >= 2, got {m.moving_average_window}")
        if self.horizon < 1:
            raise ValueError(f"horizon must be >= 1, got {self.horizon}")
        if self.ensemble.policy not in ('baseline', 'equal'):
            raise ValueError(f"Unknown weighting policy: {self.ensemble.policy}")
        if self.ensemble.holdout_years < 0:
            raise ValueError(f"holdout_years must be >= 0, got {self.ensemble.holdout_years}")
        if any(score < 0 for score in self.ensemble.baseline_scores.values()):
            raise ValueError("baseline_scores must be non-negative")
        missing = [name for name in BASELINE_MODELS if name not in self.ensemble.baseline_scores]
        if self.ensemble.policy == 'baseline' and missing:
            raise ValueError(f"baseline_scores missing: {', '.join(missing)}")
        c = self.confidence
        if c.high_max_step > c.medium_max_step:
            raise ValueError("high_max_step must not exceed medium_max_step")
        if self.growth.recent_window < 1:
            raise ValueError(f"recent_window must be >= 1, got {self.growth.recent_window}")
        return self
