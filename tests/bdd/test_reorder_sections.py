"""Behaviour tests for flat template section reordering using pytest-bdd.

These scenarios render the bundled flat template through
``FlatTemplateEngine.render_preview`` with a stored ``section_order`` and
check the order of the section markers in the output. They cover moving
sections, repeating a section through a ``-dupN`` id and dropping ids that no
longer match any marker.

Prerequisites
-------------
- Test dependencies installed with ``uv pip install -e '.[test]'``.

Usage
-----
Run ``pytest tests/bdd/test_reorder_sections.py -v`` or filter with
``pytest -k reorder`` to execute only these scenarios.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from mailblocks.flat import (
    FlatTemplateEngine,
    TemplateSettings,
    load_template,
    parse_sections,
)

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "reorder_sections.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


def _split(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Parameters
    ----------
    None
        This fixture does not accept parameters.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between ``given``, ``when``,
        and ``then`` steps.
    """
    return {}


@given("the bundled flat template")
def given_bundled_template(scenario_state: ScenarioState) -> None:
    """Load the flat template shipped with the package.

    Parameters
    ----------
    scenario_state : ScenarioState
        Mutable dictionary receiving the template text as ``template``.

    Returns
    -------
    None
        Stores the template for the render step.
    """
    scenario_state["template"] = load_template()


@given(parsers.parse('a section order of "{order}"'))
def given_section_order(scenario_state: ScenarioState, order: str) -> None:
    """Record the editor's section order as template settings.

    Parameters
    ----------
    scenario_state : ScenarioState
        Mutable dictionary receiving ``settings``.
    order : str
        Comma-separated section ids taken from the scenario text.

    Returns
    -------
    None
        Stores a ``TemplateSettings`` carrying the order.
    """
    scenario_state["settings"] = TemplateSettings(section_order=_split(order))


@when("I render the template with sample data")
def when_render_preview(scenario_state: ScenarioState) -> None:
    """Render a preview of the template with the recorded settings.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary providing ``template`` and ``settings``.

    Returns
    -------
    None
        Stores the rendered HTML as ``html``.
    """
    engine = FlatTemplateEngine(store_name="Acme", store_url="https://acme.test")
    template = typ.cast("str", scenario_state["template"])
    settings = typ.cast("TemplateSettings", scenario_state["settings"])
    scenario_state["html"] = engine.render_preview(template, settings)


@then(parsers.parse('the rendered section kinds are "{kinds}"'))
def then_section_kinds(scenario_state: ScenarioState, kinds: str) -> None:
    """Verify the markers in the output follow the requested order.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary holding the rendered ``html``.
    kinds : str
        Comma-separated marker kinds expected in document order.

    Returns
    -------
    None
        Raises AssertionError if the sections are missing or out of order.
    """
    html = typ.cast("str", scenario_state["html"])
    document = parse_sections(html)
    assert [section.kind.value for section in document.sections] == _split(kinds)
    assert html.startswith("<!DOCTYPE html>")
