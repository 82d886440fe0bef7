"""Unit tests for the YAML tree loader."""

from pathlib import Path

import pytest

from vitae.contexts.intake.exceptions import InvalidYAMLStructureError
from vitae.contexts.intake.yaml_loader import load_tree, load_yaml_tree, tree_from_dict

FIXTURES_PATH = Path(__file__).resolve().parent.parent / "fixtures"


@pytest.mark.unit
def test_levels_follow_nesting():
    tree = tree_from_dict(
        {"sections": [{"title": "A", "children": [{"title": "B", "children": [{"title": "C"}]}]}]}
    )
    a = tree.roots[0]
    assert (a.level, a.children[0].level, a.children[0].children[0].level) == (1, 2, 3)


@pytest.mark.unit
def test_tags_properties_and_text():
    tree = tree_from_dict(
        {
            "sections": [
                {
                    "title": "Job",
                    "tags": ["cventry"],
                    "properties": {"FROM": "<2019-03-05>", "TO": None},
                    "text": "Did things.\n",
                }
            ]
        }
    )
    node = tree.roots[0]
    assert node.tags == frozenset({"cventry"})
    assert node.properties == {"FROM": "<2019-03-05>", "TO": ""}
    assert node.inline_text == "Did things."


@pytest.mark.unit
def test_missing_sections_raises():
    with pytest.raises(InvalidYAMLStructureError):
        tree_from_dict({"metadata": {"author": "Jane"}})


@pytest.mark.unit
def test_section_without_title_raises():
    with pytest.raises(InvalidYAMLStructureError):
        tree_from_dict({"sections": [{"text": "orphan"}]})


@pytest.mark.unit
def test_load_fixture():
    tree = load_yaml_tree(FIXTURES_PATH / "sample_cv.yaml")

    assert tree.metadata.author == "Jane Doe"
    assert tree.metadata.mobile == "6912345678"
    assert tree.metadata.latex_header == ["\\usepackage[english,greek]{babel}"]
    assert tree.roots[0].children[0].children[0].get_property("FROM") == "<2019-03-05>"


@pytest.mark.unit
def test_load_tree_dispatches_on_suffix():
    assert load_tree(FIXTURES_PATH / "sample_cv.org").metadata.first_name == "Jane"
    assert load_tree(FIXTURES_PATH / "sample_cv.yaml").metadata.author == "Jane Doe"


@pytest.mark.unit
def test_malformed_yaml_raises(tmp_path):
    source = tmp_path / "broken.yaml"
    source.write_text("sections: [\n", encoding="utf-8")

    with pytest.raises(InvalidYAMLStructureError, match="Could not parse"):
        load_yaml_tree(source)


@pytest.mark.unit
def test_dollar_braces_stay_literal(tmp_path):
    source = tmp_path / "cv.yaml"
    source.write_text(
        "sections:\n  - title: Projects\n    text: 'cost ${price}'\n", encoding="utf-8"
    )

    tree = load_yaml_tree(source)

    assert tree.roots[0].inline_text == "cost ${price}"
