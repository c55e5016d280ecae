"""Stylesheet access for <style> elements.

Rule parsing is delegated to cssutils; only style rules (optionally nested in
@media blocks) are reported, as ordered property maps.
"""

import dataclasses
import logging
from typing import Any, Iterator

import cssutils

logger = logging.getLogger(__name__)

cssutils.log.setLevel(logging.ERROR)


@dataclasses.dataclass
class StyleRule:
    """A CSS style rule with its declarations in source order."""

    selector: str
    declarations: dict[str, str] = dataclasses.field(default_factory=dict)


def _iter_style_rules(rules: Any) -> Iterator[Any]:
    for rule in rules:
        if rule.type == rule.STYLE_RULE:
            yield rule
        elif rule.type == rule.MEDIA_RULE:
            yield from _iter_style_rules(rule.cssRules)


def parse_stylesheet(text: str | None) -> list[StyleRule]:
    """Parse the text content of a <style> element into style rules.

    Malformed declarations are skipped by the parser; empty or missing text
    yields no rules.
    """
    if not text or not text.strip():
        return []
    sheet = cssutils.parseString(text, validate=False)
    rules = []
    for rule in _iter_style_rules(sheet.cssRules):
        declarations = {prop.name: prop.value for prop in rule.style.getProperties()}
        rules.append(StyleRule(selector=rule.selectorText, declarations=declarations))
    logger.debug(f"Parsed {len(rules)} style rules")
    return rules
