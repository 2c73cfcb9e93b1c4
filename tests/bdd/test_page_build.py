"""Behaviour tests for the ``build`` command against the fixture site."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from site_contracts import cli

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "page_build.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("the fixture site configuration")
def given_site_config(
    site_root: Path,
    monkeypatch: pytest.MonkeyPatch,
    scenario_state: dict[str, object],
) -> None:
    monkeypatch.chdir(site_root)
    scenario_state["root"] = site_root
    scenario_state["config"] = site_root / "site.yaml"


@when(parsers.parse('I build the "{key}" page'))
def when_build_page(scenario_state: dict[str, object], key: str) -> None:
    cli.build(page=key, config=scenario_state["config"])


@when("I build every page")
def when_build_all(scenario_state: dict[str, object]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.build(config=scenario_state["config"])
    scenario_state["exit_code"] = excinfo.value.code


@then(parsers.parse('index.html and styles.css are written for "{key}"'))
def then_bundle_written(scenario_state: dict[str, object], key: str) -> None:
    out_dir: Path = scenario_state["root"] / "public" / key
    assert (out_dir / "index.html").is_file()
    assert (out_dir / "styles.css").is_file()


@then(parsers.parse('the hero slot renders a level one heading wrapped in "{wrap}"'))
def then_hero_heading(scenario_state: dict[str, object], wrap: str) -> None:
    html = (scenario_state["root"] / "public" / "home" / "index.html").read_text(
        encoding="utf-8"
    )
    soup = BeautifulSoup(html, "html.parser")
    wrapper = soup.select_one("[data-slot=hero] > div")
    assert wrapper is not None, "hero slot missing from output"
    assert wrap in wrapper["class"]
    assert wrapper.select_one("h1") is not None


@then(parsers.parse("the build exits with status {code:d}"))
def then_exit_status(scenario_state: dict[str, object], code: int) -> None:
    assert scenario_state["exit_code"] == code


@then(parsers.parse('nothing is written for "{key}"'))
def then_nothing_written(scenario_state: dict[str, object], key: str) -> None:
    assert not (scenario_state["root"] / "public" / key).exists()
