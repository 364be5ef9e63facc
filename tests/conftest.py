"""Shared fixtures for the classifier tests."""

import pytest

from taxonomy_classifier import Taxonomy


@pytest.fixture
def taxonomy():
    """Two-module taxonomy with one unusable category."""
    return Taxonomy.from_mapping({
        "Uncertainty": {
            "Epistemic": "epistemic, risk",
            "Aleatory": "variability, stochastic",
            "Ambiguity": "ambiguity, ambiguous",
            "Undefined": "   ",
        },
        "Stakeholders": [
            {"category": "Government", "keywords": "government, policy maker"},
            {"category": "Community", "keywords": "community, residents"},
        ],
    })
