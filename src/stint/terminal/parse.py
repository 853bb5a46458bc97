# SPDX-License-Identifier: MIT

import re
from typing import Optional

import typer

from stint.repository.configuration import LOG_LEVELS

_TAG_SPLIT_P = re.compile(r"\s*,\s*")


def parse_tags(tag_params: Optional[list[str]]) -> list[str]:
    """
    Flatten repeated --tags options, each of which may hold a comma
    separated list, into one ordered list of tags.

    Empty pieces (from "a,,b" or a trailing comma) are dropped. Duplicates
    are kept.
    """
    if tag_params is None:
        return []

    tags: list[str] = []
    for tag_param in tag_params:
        tags.extend(tag for tag in _TAG_SPLIT_P.split(tag_param.strip()) if tag != "")
    return tags


def parse_optional_text(text: Optional[str]) -> Optional[str]:
    """Treat a blank positional argument the same as an omitted one."""
    if text is None:
        return None
    stripped = text.strip()
    if stripped == "":
        return None
    return stripped


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    if log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"Log level must be one of {', '.join(LOG_LEVELS)}")
    return log_level.upper()
