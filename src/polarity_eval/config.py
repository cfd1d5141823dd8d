"""
Configurable parameters for the polarity evaluation run.
This allows tuning thresholds and text filters without code changes.
"""
import os
import json
from pathlib import Path
from typing import Any, Dict, List
from dataclasses import dataclass, asdict, field


PROJECT_ROOT = Path(__file__).resolve().parents[2]
OUTPUT_DIR = PROJECT_ROOT / "output"

FILTER_NAMES = ("lowercase", "normalize", "replace")
SCORER_NAMES = ("vader", "textblob")


@dataclass
class DatasetConfig:
    """Configuration for reading the labelled dataset."""
    delimiter: str = ","
    encoding: str = "utf-8"

    # Unparseable labels raise instead of defaulting to 0
    strict_labels: bool = False


@dataclass
class SanitizerConfig:
    """Ordered text filters applied before scoring."""
    filters: List[str] = field(default_factory=list)

    # Strip every punctuation occurrence instead of only the first one
    replace_all: bool = False


@dataclass
class ClassifierConfig:
    """Decision thresholds mapping a compound score to a binary label."""
    pos_threshold: float = 0.05
    neg_threshold: float = -0.05

    # Label assigned inside the neutral band
    neutral_label: int = 0

    def validate(self) -> None:
        if self.neg_threshold > self.pos_threshold:
            raise ValueError(
                f"neg_threshold ({self.neg_threshold}) must not exceed pos_threshold ({self.pos_threshold})"
            )
        if self.neutral_label not in (0, 1):
            raise ValueError(f"neutral_label must be 0 or 1, got {self.neutral_label!r}")


@dataclass
class EvaluationConfig:
    """Main evaluation configuration."""
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    sanitizer: SanitizerConfig = field(default_factory=SanitizerConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)

    scorer: str = "vader"

    # Performance settings
    max_workers: int = 1
    show_progress: bool = False

    def validate(self) -> 'EvaluationConfig':
        self.classifier.validate()
        if self.scorer not in SCORER_NAMES:
            raise ValueError(f"Unknown scorer: '{self.scorer}'. Available: {', '.join(SCORER_NAMES)}.")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EvaluationConfig':
        """Build a configuration from a (possibly partial) nested dictionary."""
        data = dict(data)
        return cls(
            dataset=DatasetConfig(**data.pop("dataset", {})),
            sanitizer=SanitizerConfig(**data.pop("sanitizer", {})),
            classifier=ClassifierConfig(**data.pop("classifier", {})),
            **data,
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> 'EvaluationConfig':
        """Load configuration from JSON file."""
        if not os.path.exists(config_path):
            # Return default config if file doesn't exist
            return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            config_dict = json.load(f)

        return cls.from_dict(config_dict)

    def save_to_file(self, config_path: str):
        """Save configuration to JSON file."""
        directory = os.path.dirname(config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)


# Presets
DEFAULT_CONFIG = EvaluationConfig()

CLEAN_TEXT_CONFIG = EvaluationConfig(
    sanitizer=SanitizerConfig(filters=["lowercase", "normalize", "replace"]),
)

STRICT_CONFIG = EvaluationConfig(
    dataset=DatasetConfig(strict_labels=True),
    sanitizer=SanitizerConfig(filters=["lowercase", "normalize", "replace"], replace_all=True),
)

PRESETS = {
    "default": DEFAULT_CONFIG,
    "clean": CLEAN_TEXT_CONFIG,
    "strict": STRICT_CONFIG,
}


def get_preset(name: str) -> EvaluationConfig:
    """Return a fresh copy of a named preset."""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset: '{name}'. Available: {', '.join(PRESETS)}.")
    return EvaluationConfig.from_dict(PRESETS[name].to_dict())


def get_config(config_path: str = None) -> EvaluationConfig:
    """Get configuration from file or return default."""
    if config_path:
        return EvaluationConfig.load_from_file(config_path)
    return get_preset("default")


def update_config(config: EvaluationConfig, updates: Dict[str, Any]) -> EvaluationConfig:
    """Update configuration with new values."""
    for key, value in updates.items():
        if value is None or not hasattr(config, key):
            continue
        if isinstance(value, dict) and hasattr(getattr(config, key), '__dict__'):
            # Update nested configuration
            nested_config = getattr(config, key)
            for nested_key, nested_value in value.items():
                if nested_value is not None and hasattr(nested_config, nested_key):
                    setattr(nested_config, nested_key, nested_value)
        else:
            setattr(config, key, value)

    return config
