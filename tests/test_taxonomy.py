"""Tests for taxonomy parsing and loading."""

import json
import logging

import pandas as pd
import pytest

from taxonomy_classifier import LoadError, Taxonomy, UnsupportedFormatError, load_taxonomy
from taxonomy_classifier.taxonomy import CategoryDefinition, parse_keywords


class TestParseKeywords:

    def test_split_and_trim(self):
        assert parse_keywords(" Risk , hazard,, Policy Maker ") == ("risk", "hazard", "policy maker")

    def test_missing_values(self):
        assert parse_keywords(None) == ()
        assert parse_keywords(float("nan")) == ()
        assert parse_keywords("   ") == ()
        assert parse_keywords(" , ,") == ()

    def test_single_term(self):
        assert parse_keywords("uncertainty") == ("uncertainty",)


class TestCategoryDefinition:

    def test_from_row(self):
        definition = CategoryDefinition.from_row(" Epistemic ", "epistemic, risk")
        assert definition == CategoryDefinition("Epistemic", ("epistemic", "risk"))

    def test_from_row_without_keywords(self):
        assert CategoryDefinition.from_row("Epistemic", "") is None
        assert CategoryDefinition.from_row("Epistemic", None) is None

    def test_from_row_without_label(self):
        assert CategoryDefinition.from_row(None, "risk") is None


class TestTaxonomy:

    def test_from_mapping_keeps_order(self, taxonomy):
        assert list(taxonomy) == ["Uncertainty", "Stakeholders"]
        assert [c.name for c in taxonomy["Uncertainty"]] == ["Epistemic", "Aleatory", "Ambiguity"]
        assert taxonomy.category_count == 5

    def test_module_without_categories_dropped(self):
        taxonomy = Taxonomy.from_mapping({"Empty": {"Nothing": ""}, "Roles": {"Farmer": "farmer"}})
        assert list(taxonomy) == ["Roles"]

    def test_from_frames_skips_module_without_keywords_column(self):
        frames = {
            "Roles": pd.DataFrame({"Category": ["Farmer"], "Keywords ": ["farmer, grower"]}),
            "Notes": pd.DataFrame({"category": ["Misc"], "comment": ["n/a"]}),
        }
        taxonomy = Taxonomy.from_frames(frames)

        assert list(taxonomy) == ["Roles"]
        assert taxonomy["Roles"][0].keywords == ("farmer", "grower")

    def test_warns_about_unmatchable_keywords(self, caplog):
        with caplog.at_level(logging.WARNING, logger="taxonomy_classifier.taxonomy"):
            taxonomy = Taxonomy.from_mapping({
                "Hazards": {"Flooding": "risk of flooding, decision-making, flood"},
            })

        assert taxonomy["Hazards"][0].keywords == ("risk of flooding", "decision-making", "flood")
        warned = " ".join(r.getMessage() for r in caplog.records)
        assert "'risk of flooding'" in warned
        assert "'decision-making'" in warned
        assert "'flood'" not in warned

    def test_custom_column_names(self):
        frames = {"Roles": pd.DataFrame({"Label": ["Farmer"], "Terms": ["farmer"]})}
        taxonomy = Taxonomy.from_frames(frames, category_column="label", keywords_column="terms")
        assert taxonomy["Roles"][0].name == "Farmer"


class TestLoadTaxonomy:

    def test_load_excel(self, tmp_path):
        path = tmp_path / "taxonomy.xlsx"
        with pd.ExcelWriter(path) as writer:
            pd.DataFrame({
                "category": ["Epistemic", "Aleatory", "Blank"],
                "keywords": ["epistemic, risk", "stochastic", None],
            }).to_excel(writer, sheet_name="Uncertainty", index=False)
            pd.DataFrame({
                "category": ["Government"],
                "notes": ["no keywords here"],
            }).to_excel(writer, sheet_name="Broken", index=False)

        taxonomy = load_taxonomy(path)

        assert list(taxonomy) == ["Uncertainty"]
        assert [c.name for c in taxonomy["Uncertainty"]] == ["Epistemic", "Aleatory"]

    def test_load_csv(self, tmp_path):
        path = tmp_path / "taxonomy.csv"
        path.write_text(
            "Module,Category,Keywords\n"
            "Stakeholders,Government,\"government, policy maker\"\n"
            "Uncertainty,Epistemic,epistemic\n"
            "Stakeholders,Community,community\n"
            "Stakeholders,Blank,\n",
            encoding="utf-8",
        )

        taxonomy = load_taxonomy(path)

        assert list(taxonomy) == ["Stakeholders", "Uncertainty"]
        assert [c.name for c in taxonomy["Stakeholders"]] == ["Government", "Community"]
        assert taxonomy["Stakeholders"][0].keywords == ("government", "policy maker")

    def test_load_csv_without_module_column(self, tmp_path):
        path = tmp_path / "taxonomy.csv"
        path.write_text("category,keywords\nEpistemic,risk\n", encoding="utf-8")

        with pytest.raises(LoadError):
            load_taxonomy(path)

    def test_load_json(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps({
            "Uncertainty": [{"category": "Epistemic", "keywords": "epistemic, risk"}],
            "Stakeholders": {"Government": "government"},
        }), encoding="utf-8")

        taxonomy = load_taxonomy(path)

        assert taxonomy["Uncertainty"][0].keywords == ("epistemic", "risk")
        assert taxonomy["Stakeholders"][0].name == "Government"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(LoadError):
            load_taxonomy(path)

    @pytest.mark.parametrize("data", [
        [{"category": "Epistemic", "keywords": "risk"}],
        {"Roles": ["farmer"]},
        {"Roles": "farmer"},
    ])
    def test_json_wrong_shape(self, tmp_path, data):
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(LoadError):
            load_taxonomy(path)

    def test_legacy_excel_unsupported(self, tmp_path):
        path = tmp_path / "taxonomy.xls"
        path.write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1")

        with pytest.raises(UnsupportedFormatError):
            load_taxonomy(path)

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "taxonomy.yaml"
        path.write_text("a: b", encoding="utf-8")

        with pytest.raises(UnsupportedFormatError):
            load_taxonomy(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as excinfo:
            load_taxonomy(tmp_path / "missing.xlsx")
        assert not isinstance(excinfo.value, UnsupportedFormatError)
