"""Unit tests for role classification and sibling boundaries."""

import pytest

from vitae.contexts.intake.document_tree import Node
from vitae.contexts.templating.roles import Role, SiblingBoundaryTracker, classify


def make_node(level, title="Section", tags=(), properties=None, children=None):
    return Node(
        level=level,
        title=title,
        tags=frozenset(tags),
        properties=properties or {},
        children=children or [],
    )


class TestClassify:
    """Tests for classify precedence."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "tags, expected",
        [
            (["summary"], Role.SUMMARY),
            (["cvsummary"], Role.SUMMARY),
            (["cventry"], Role.ENTRY),
            (["entry"], Role.ENTRY),
            (["skills"], Role.SKILLS),
            (["CVSKILLS"], Role.SKILLS),
        ],
    )
    def test_explicit_tags(self, tags, expected):
        assert classify(make_node(2, tags=tags)) == expected

    @pytest.mark.unit
    def test_role_property(self):
        node = make_node(3, properties={"cv_role": "Entry"})
        assert classify(node) == Role.ENTRY

    @pytest.mark.unit
    def test_summary_beats_entry(self):
        assert classify(make_node(1, tags=["cventry", "summary"])) == Role.SUMMARY

    @pytest.mark.unit
    @pytest.mark.parametrize("level", [1, 2, 3, 5])
    @pytest.mark.parametrize(
        "parent_role", [None, Role.GROUP, Role.GENERIC, Role.SKILLS, Role.ENTRY]
    )
    def test_explicit_tag_is_independent_of_position(self, level, parent_role):
        assert classify(make_node(level, tags=["cventry"]), parent_role) == Role.ENTRY

    @pytest.mark.unit
    def test_skills_children_become_subsections(self):
        assert classify(make_node(2), Role.SKILLS) == Role.SKILLS_SUBSECTION
        assert classify(make_node(3), Role.SKILLS_SUBSECTION) == Role.SKILLS_SUBSECTION

    @pytest.mark.unit
    def test_tagged_skills_node_is_not_reclassified(self):
        assert classify(make_node(2, tags=["skills"]), Role.SKILLS) == Role.SKILLS

    @pytest.mark.unit
    def test_structural_fallbacks(self):
        assert classify(make_node(1)) == Role.GROUP
        assert classify(make_node(2), Role.GROUP) == Role.GENERIC
        assert classify(make_node(3), Role.GENERIC) == Role.PASSTHROUGH

    @pytest.mark.unit
    def test_classification_does_not_mutate(self):
        node = make_node(2, tags=["skills"], properties={"CV_ROLE": "skills"})
        before = (node.tags, dict(node.properties), list(node.children))
        classify(node, Role.GROUP)
        assert (node.tags, node.properties, node.children) == before


class TestSiblingBoundaryTracker:
    """Tests for last top-level sibling detection."""

    @pytest.mark.unit
    def test_only_final_top_level_section_is_last(self):
        child = make_node(2)
        roots = [make_node(1, "A", children=[child]), make_node(1, "B"), make_node(1, "C")]
        tracker = SiblingBoundaryTracker(roots)

        assert [tracker.is_last_top_level_sibling(node) for node in roots] == [False, False, True]
        assert tracker.is_last_top_level_sibling(child) is False

    @pytest.mark.unit
    def test_deeper_node_of_last_section_is_not_last(self):
        child = make_node(2)
        roots = [make_node(1, "A"), make_node(1, "B", children=[child])]
        tracker = SiblingBoundaryTracker(roots)

        assert tracker.is_last_top_level_sibling(child) is False
        assert tracker.is_last_top_level_sibling(roots[1]) is True

    @pytest.mark.unit
    def test_empty_document(self):
        tracker = SiblingBoundaryTracker([])
        assert tracker.is_last_top_level_sibling(make_node(1)) is False

    @pytest.mark.unit
    def test_equal_nodes_are_told_apart(self):
        roots = [make_node(1, "Same"), make_node(1, "Same")]
        tracker = SiblingBoundaryTracker(roots)
        assert tracker.is_last_top_level_sibling(roots[0]) is False
        assert tracker.is_last_top_level_sibling(roots[1]) is True
