"""
Keyword Taxonomy Classifier
===========================

Classifies academic articles against a taxonomy of keyword-defined
categories and reports match counts, within-module shares and match
density across a corpus.

Usage:
    from taxonomy_classifier import KeywordClassifier, load_taxonomy

    classifier = KeywordClassifier(load_taxonomy("taxonomy.xlsx"))
    run = classifier.classify_corpus(paths)
    rows = aggregate(run.classifications)
"""

from .aggregate import aggregate
from .classifier import KeywordClassifier, classify, summarize, top_categories
from .config import Config
from .errors import ClassifierError, LoadError, UnsupportedFormatError
from .taxonomy import CategoryDefinition, Taxonomy, load_taxonomy

__version__ = "1.0.0"
__all__ = [
    "KeywordClassifier",
    "Config",
    "Taxonomy",
    "CategoryDefinition",
    "load_taxonomy",
    "classify",
    "top_categories",
    "summarize",
    "aggregate",
    "ClassifierError",
    "LoadError",
    "UnsupportedFormatError",
]
