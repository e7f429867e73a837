"""Load rule documents from JSON files, strings, or mappings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Union

from pydantic import ValidationError

from ..errors import ConfigError
from ..extraction.rule import Rule
from ..schemas import RuleDocument

logger = logging.getLogger(__name__)


def load_rule_document(path: Union[str, Path]) -> RuleDocument:
    """
    Read and validate a JSON rule document.

    Raises:
        ConfigError: If the file cannot be read or is not a valid document
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read user extraction rule file {file_path}: {e}") from e

    logger.debug("Loaded user extraction rule file %s", file_path)
    return parse_rule_document(text, source=str(file_path))


def parse_rule_document(
    data: Union[str, bytes, Mapping[str, Any]],
    source: str = "<string>",
) -> RuleDocument:
    """Validate a rule document given as JSON text or an already-decoded mapping."""
    try:
        if isinstance(data, (str, bytes)):
            return RuleDocument.model_validate_json(data)
        return RuleDocument.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid user extraction rules in {source}: {e}") from e


def build_rules(document: RuleDocument) -> List[Rule]:
    """Compile every rule of a document, in document order."""
    rules = []
    for index, definition in enumerate(document.rules):
        try:
            rules.append(Rule.from_definition(definition))
        except ConfigError as e:
            raise ConfigError(f"Rule {index}: {e}") from e
    return rules


def load_rules(path: Union[str, Path]) -> List[Rule]:
    return build_rules(load_rule_document(path))


def parse_rules(data: Union[str, bytes, Mapping[str, Any]]) -> List[Rule]:
    return build_rules(parse_rule_document(data))
