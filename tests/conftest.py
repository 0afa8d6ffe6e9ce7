"""Shared fixtures for missing_steps tests."""

from pathlib import Path

import pytest

from missing_steps.config import ReporterConfig
from missing_steps.models import ScenarioBlock, SpecDocument, StepRecord


CART_FEATURE = """\
Feature: Shopping cart

  Background:
    Given a logged in user

  Scenario: Add items
    Given I have <count> <item>s
    And the cart is empty
    When I add <count> items
    Then the cart shows <count> items
    And a receipt is printed

  Scenario: Continue across blocks
    And the total is recalculated
    But no discount applies
    * nothing else happens
"""

BROKEN_FEATURE = """\
Feature: Broken

  Scenario: Starts with a continuation
    And nothing came before
    Then something
"""

GERMAN_FEATURE = """\
# language: de
Funktionalität: Warenkorb

  Szenario: Hinzufügen
    Angenommen ich habe <anzahl> Artikel
    Und der Korb ist leer
"""


def make_document(*blocks):
    """Build a SpecDocument from lists of (keyword, text, line) tuples."""
    return SpecDocument(
        path="inline.feature",
        blocks=[
            ScenarioBlock(
                name=f"block {i}",
                steps=[StepRecord(keyword=k, text=t, line=n) for k, t, n in steps],
            )
            for i, steps in enumerate(blocks)
        ],
    )


@pytest.fixture
def features_dir(tmp_path: Path) -> Path:
    (tmp_path / "cart.feature").write_text(CART_FEATURE, encoding="utf-8")
    (tmp_path / "broken.feature").write_text(BROKEN_FEATURE, encoding="utf-8")
    (tmp_path / "german.feature").write_text(GERMAN_FEATURE, encoding="utf-8")
    (tmp_path / "invalid.feature").write_text("this is not gherkin\n", encoding="utf-8")
    (tmp_path / "latin1.feature").write_bytes(b"Feature: Caf\xe9\n\n  Scenario: Order\n    Given a caf\xe9 au lait\n")
    return tmp_path


@pytest.fixture
def config(features_dir: Path) -> ReporterConfig:
    return ReporterConfig(base_dir=features_dir)


@pytest.fixture
def document():
    return make_document
