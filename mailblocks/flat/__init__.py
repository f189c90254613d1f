"""Flat template engine public API."""

from __future__ import annotations

from .campaign import CampaignRecord, build_campaign_data, coupon_text, sample_data
from .conditionals import evaluate_conditionals
from .engine import DEFAULT_TEMPLATE_PATH, FlatTemplateEngine, load_template
from .markers import (
    FlatSection,
    FlatTemplateDocument,
    MarkerKind,
    classify_marker,
    inject_section_attributes,
    parse_sections,
    reorder_sections,
)
from .products_block import render_products_block
from .settings import TemplateSettings, parse_template_settings
from .styles import (
    TemplateStyle,
    TemplateStyleLibrary,
    get_default_settings,
    get_slugs,
    get_template_settings,
    get_templates,
)
from .tokens import TOKENS, apply_settings, render_tokens, substitute_tokens

__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "TOKENS",
    "CampaignRecord",
    "FlatSection",
    "FlatTemplateDocument",
    "FlatTemplateEngine",
    "MarkerKind",
    "TemplateSettings",
    "TemplateStyle",
    "TemplateStyleLibrary",
    "apply_settings",
    "build_campaign_data",
    "classify_marker",
    "coupon_text",
    "evaluate_conditionals",
    "get_default_settings",
    "get_slugs",
    "get_template_settings",
    "get_templates",
    "inject_section_attributes",
    "load_template",
    "parse_sections",
    "parse_template_settings",
    "reorder_sections",
    "render_products_block",
    "render_tokens",
    "sample_data",
    "substitute_tokens",
]
