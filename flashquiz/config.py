from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from .utils.io import YAML_SUFFIXES, read_json, read_yaml, write_json
from .utils.validation import ConfigSchema, ValidationError, validate_config


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: str = "logs"
    filename: str = "flashquiz.log"

    def file_path(self) -> Path:
        return Path(self.log_dir) / self.filename


@dataclass
class DeterminismConfig:
    seed: Optional[int] = None  # None: a fresh random order every run
    python_hash_seed: int = 0


@dataclass
class QuizConfig:
    quiz_dir: str = "quizzes"
    shuffle: bool = False
    repeat: int = 1
    shuffle_max_attempts: int = 50


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_int(value: Any) -> bool:
    # bool is an int subclass; `repeat: true` is a typo, not a count
    return isinstance(value, int) and not isinstance(value, bool)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _section_schema(cls, checks: Dict[str, Tuple[Callable[[Any], bool], str]]) -> ConfigSchema:
    section = cls.__name__[: -len("Config")].lower()
    return ConfigSchema(section=section, keys=[f.name for f in fields(cls)], checks=checks)


_SCHEMAS = {
    "logging": (LoggingConfig, _section_schema(LoggingConfig, {
        "level": (lambda v: isinstance(v, str) and v.upper() in LOG_LEVELS, f"one of {', '.join(LOG_LEVELS)}"),
        "log_dir": (_is_text, "a non-empty string"),
        "filename": (_is_text, "a non-empty string"),
    })),
    "determinism": (DeterminismConfig, _section_schema(DeterminismConfig, {
        "seed": (lambda v: v is None or _is_int(v), "an integer or null"),
        "python_hash_seed": (lambda v: _is_int(v) and v >= 0, "a non-negative integer"),
    })),
    "quiz": (QuizConfig, _section_schema(QuizConfig, {
        "quiz_dir": (_is_text, "a non-empty string"),
        "shuffle": (lambda v: isinstance(v, bool), "true or false"),
        "repeat": (lambda v: _is_int(v) and v >= 1, "an integer >= 1"),
        "shuffle_max_attempts": (lambda v: _is_int(v) and v >= 1, "an integer >= 1"),
    })),
}


def _build_section(name: str, payload: Dict[str, Any]):
    cls, schema = _SCHEMAS[name]
    section = payload.get(name)
    if section is None:
        return cls()
    validate_config(section, schema)
    return cls(**{k: v for k, v in section.items() if k in schema.keys})


@dataclass
class AppConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    determinism: DeterminismConfig = field(default_factory=DeterminismConfig)
    quiz: QuizConfig = field(default_factory=QuizConfig)

    @staticmethod
    def from_dict(payload: Dict[str, Any]) -> "AppConfig":
        if not isinstance(payload, dict):
            raise ValidationError(
                f"Config must be a mapping of sections (logging, determinism, quiz), got {type(payload).__name__}"
            )
        return AppConfig(
            logging=_build_section("logging", payload),
            determinism=_build_section("determinism", payload),
            quiz=_build_section("quiz", payload),
        )

    @staticmethod
    def from_json(path: str | Path) -> "AppConfig":
        return AppConfig.from_dict(read_json(path) or {})

    @staticmethod
    def from_yaml(path: str | Path) -> "AppConfig":
        return AppConfig.from_dict(read_yaml(path) or {})

    @staticmethod
    def from_file(path: str | Path) -> "AppConfig":
        if Path(path).suffix in YAML_SUFFIXES:
            return AppConfig.from_yaml(path)
        return AppConfig.from_json(path)

    def to_json(self, path: str | Path) -> None:
        write_json(path, asdict(self))


# Provide safe defaults via a factory function for top-level config
def default_app_config() -> AppConfig:
    return AppConfig()
