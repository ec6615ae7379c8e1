# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML configuration for the tokenizer.

Example ``.neotoken.yaml``::

    sections:
      paragraphs: [callout]
      list: [todo]
    legend: [class, comment, decorator, string, listBullet]
"""

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from neotoken.legend import Legend
from neotoken.parser.lexer import TokenKind
from neotoken.parser.sections import SECTION_KEYWORDS, BodyPolicy
from neotoken.utils.logger import get_logger

logger = get_logger(__name__)

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".neotoken.yaml"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""


class SectionExtensions(BaseModel):
    """Additional section keywords, grouped by body policy."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    paragraphs: list[str] = Field(default_factory=list)
    code: list[str] = Field(default_factory=list)
    lists: list[str] = Field(alias="list", default_factory=list)
    attributes: list[str] = Field(default_factory=list)

    @field_validator("paragraphs", "code", "lists", "attributes")
    @classmethod
    def check_keywords(cls, keywords: list[str]) -> list[str]:
        for keyword in keywords:
            if not keyword or any(ch.isspace() for ch in keyword):
                raise ValueError(f"section keyword {keyword!r} must be non-empty and contain no whitespace")
        return keywords

    def by_policy(self) -> dict[BodyPolicy, list[str]]:
        return {
            BodyPolicy.PARAGRAPHS: self.paragraphs,
            BodyPolicy.CODE: self.code,
            BodyPolicy.LIST: self.lists,
            BodyPolicy.ATTRIBUTES: self.attributes,
        }


class TokenizerConfig(BaseModel):
    """Top-level configuration model.

    Attributes:
        sections: Keywords added to the built-in section table.
        legend: Token kinds in legend order; None selects the default legend.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    sections: SectionExtensions = Field(default_factory=SectionExtensions)
    legend: list[TokenKind] | None = None

    @model_validator(mode="after")
    def check_consistency(self) -> "TokenizerConfig":
        _merge_keywords(self.sections)
        if self.legend is not None:
            Legend(self.legend)
        return self

    def keyword_table(self) -> Mapping[str, BodyPolicy]:
        """Return the built-in keyword table extended with the configured keywords."""
        return MappingProxyType(_merge_keywords(self.sections))

    def build_legend(self) -> Legend:
        if self.legend is None:
            return Legend()
        return Legend(self.legend)


def load_config(path: Path) -> TokenizerConfig:
    """Load and validate a tokenizer configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the YAML file.

    Returns:
        A validated TokenizerConfig.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does not
            match the schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: config must be a YAML mapping")

    try:
        config = TokenizerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc

    logger.info("Loaded tokenizer config from %s", path)
    return config


# ################
# Implementation
# ################


def _merge_keywords(extensions: SectionExtensions) -> dict[str, BodyPolicy]:
    """Merge configured keywords into the built-in table.

    Raises:
        ValueError: If a keyword is assigned to two different body policies.
    """
    table = dict(SECTION_KEYWORDS)
    for policy, keywords in extensions.by_policy().items():
        for keyword in keywords:
            existing = table.get(keyword)
            if existing is not None and existing is not policy:
                raise ValueError(
                    f"section keyword {keyword!r} is already a {existing.value} section, "
                    f"cannot also be a {policy.value} section"
                )
            table[keyword] = policy
    return table
