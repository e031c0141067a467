"""Schema validation utilities for quiz files and configurations."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from .io import read_document

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Base exception for validation errors."""
    pass


class SchemaValidationError(ValidationError):
    """Raised when data doesn't match expected schema."""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()
        return "\n".join([super().__str__(), *(f"  - {e}" for e in self.errors)])


@dataclass
class FieldSpec:
    """Specification for a record field."""
    name: str
    type: Union[type, tuple]
    required: bool = True
    nullable: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    choices: Optional[List[Any]] = None
    validator: Optional[Callable[[Any], bool]] = None


@dataclass
class RecordSchema:
    """Schema definition for one kind of record."""
    name: str
    fields: List[FieldSpec]
    allow_extra_fields: bool = True


QUIZ_SCHEMA = RecordSchema(
    name="quiz",
    fields=[
        FieldSpec(name="title", type=str, required=True, min_length=1),
        FieldSpec(name="sections", type=list, required=True, min_length=1),
    ],
)

SECTION_SCHEMA = RecordSchema(
    name="section",
    fields=[
        FieldSpec(name="name", type=str, required=True, min_length=1),
        FieldSpec(name="questions", type=list, required=True),
    ],
)

QUESTION_SCHEMA = RecordSchema(
    name="question",
    fields=[
        FieldSpec(name="type", type=str, required=False, choices=["plain", "mc"]),
        FieldSpec(name="q", type=str, required=True, min_length=1),
        FieldSpec(name="a", type=(str, int, float), required=True),
        FieldSpec(
            name="choices",
            type=list,
            required=False,
            min_length=1,
            validator=lambda xs: all(isinstance(x, (str, int, float)) for x in xs),
        ),
    ],
)


class SchemaValidator:
    """Validator for a record schema."""

    def __init__(self, schema: RecordSchema):
        self.schema = schema

    def validate_record(self, record: Any) -> List[str]:
        """Validate a single record against the schema.

        Args:
            record: Record to validate

        Returns:
            List of validation errors (empty if valid)
        """
        if not isinstance(record, dict):
            return [f"expected a mapping for {self.schema.name}, got {type(record).__name__}"]

        errors = []
        for field_spec in self.schema.fields:
            if field_spec.name not in record:
                if field_spec.required:
                    errors.append(f"Missing required field: {field_spec.name}")
                continue

            value = record[field_spec.name]
            if value is None:
                if not field_spec.nullable:
                    errors.append(f"Field {field_spec.name} cannot be null")
                continue

            expected_types = field_spec.type if isinstance(field_spec.type, tuple) else (field_spec.type,)
            # bool is an int subclass but never a valid answer or text
            if isinstance(value, bool) or not isinstance(value, expected_types):
                errors.append(
                    f"Field {field_spec.name} has wrong type: expected "
                    f"{' or '.join(t.__name__ for t in expected_types)}, got {type(value).__name__}"
                )
                continue

            if isinstance(value, (str, list)):
                unit = "chars" if isinstance(value, str) else "items"
                if field_spec.min_length and len(value) < field_spec.min_length:
                    errors.append(f"Field {field_spec.name} too short: minimum {field_spec.min_length} {unit}")
                if field_spec.max_length and len(value) > field_spec.max_length:
                    errors.append(f"Field {field_spec.name} too long: maximum {field_spec.max_length} {unit}")
            if isinstance(value, str) and field_spec.pattern and not re.match(field_spec.pattern, value):
                errors.append(f"Field {field_spec.name} doesn't match pattern: {field_spec.pattern}")

            if field_spec.choices and value not in field_spec.choices:
                errors.append(
                    f"Field {field_spec.name} has invalid value: must be one of {field_spec.choices}"
                )

            if field_spec.validator:
                try:
                    if not field_spec.validator(value):
                        errors.append(f"Field {field_spec.name} failed custom validation")
                except Exception as e:
                    errors.append(f"Field {field_spec.name} validation error: {e}")

        if not self.schema.allow_extra_fields:
            expected_fields = {f.name for f in self.schema.fields}
            extra_fields = set(record.keys()) - expected_fields
            if extra_fields:
                errors.append(f"Unexpected fields: {', '.join(sorted(extra_fields))}")

        return errors


def quiz_document_errors(doc: Any) -> List[str]:
    """Collect structural errors of a quiz document, prefixed with their location."""
    errors = list(SchemaValidator(QUIZ_SCHEMA).validate_record(doc))
    if errors:
        return errors

    section_validator = SchemaValidator(SECTION_SCHEMA)
    question_validator = SchemaValidator(QUESTION_SCHEMA)
    for i, section in enumerate(doc["sections"]):
        where = f"sections[{i}]"
        section_errors = section_validator.validate_record(section)
        if section_errors:
            errors.extend(f"{where}: {e}" for e in section_errors)
            continue
        for j, question in enumerate(section["questions"]):
            q_where = f"{where}.questions[{j}]"
            q_errors = question_validator.validate_record(question)
            if not q_errors and question.get("type") == "mc" and not question.get("choices"):
                q_errors.append("Multiple choice question needs choices")
            errors.extend(f"{q_where}: {e}" for e in q_errors)
    return errors


def validate_quiz_document(doc: Any, source: str = "<document>") -> None:
    """Validate a parsed quiz document.

    Raises:
        SchemaValidationError: If validation fails
    """
    errors = quiz_document_errors(doc)
    if errors:
        raise SchemaValidationError(
            f"Quiz validation failed for {source} with {len(errors)} errors",
            errors=errors,
        )


def validate_quiz_file(filepath: Union[str, Path]) -> Dict[str, Any]:
    """Validate a quiz file and return its parsed document.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SchemaValidationError: If the file can't be parsed or validation fails
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Quiz file not found: {filepath}")

    try:
        doc = read_document(filepath)
    except yaml.YAMLError as e:
        raise SchemaValidationError(f"Invalid YAML in {filepath}: {e}")
    except ValueError as e:
        # JSONDecodeError is a ValueError
        raise SchemaValidationError(f"Could not parse {filepath}: {e}")

    validate_quiz_document(doc, str(filepath))
    logger.info("Quiz file validation passed: %s", filepath)
    return doc


@dataclass
class ConfigSchema:
    """Known keys of one app config section and the checks on their values.

    ``checks`` maps a key to ``(predicate, expectation)``; the expectation is
    the human-readable text used when the predicate fails.
    """
    section: str
    keys: List[str] = field(default_factory=list)
    checks: Dict[str, Tuple[Callable[[Any], bool], str]] = field(default_factory=dict)


def validate_config(values: Any, schema: ConfigSchema) -> None:
    """Check one config section before it is turned into a dataclass.

    Unknown keys are logged and ignored.

    Raises:
        ValidationError: If the section is not a mapping or a value fails its check
    """
    if not isinstance(values, dict):
        raise ValidationError(
            f"Config section '{schema.section}' must be a mapping, got {type(values).__name__}"
        )

    unknown = sorted(set(values) - set(schema.keys))
    if unknown:
        logger.warning("Ignoring unknown keys in config section '%s': %s", schema.section, ", ".join(map(str, unknown)))

    errors = [
        f"{schema.section}.{key} must be {expectation}, got {values[key]!r}"
        for key, (check, expectation) in schema.checks.items()
        if key in values and not check(values[key])
    ]
    if errors:
        logger.error("Rejected config section '%s': %s", schema.section, "; ".join(errors))
        raise ValidationError("; ".join(errors))
