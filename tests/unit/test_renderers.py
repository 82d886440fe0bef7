"""Unit tests for the per-role renderers."""

import pytest

from vitae.contexts.intake.document_tree import Node
from vitae.contexts.templating.dates import DateContext
from vitae.contexts.templating.locale import Locale
from vitae.contexts.templating.renderers import RenderContext, RoleRenderers
from vitae.contexts.templating.roles import Role
from vitae.contexts.templating.schema import SchemaTemplate


@pytest.fixture(scope="module")
def renderers():
    return RoleRenderers(SchemaTemplate())


def make_node(level, title="Section", properties=None):
    return Node(level=level, title=title, properties=properties or {})


class TestSummary:
    """Tests for the summary renderer."""

    @pytest.mark.unit
    def test_single_paragraph_has_no_intro_columns(self, renderers):
        result = renderers.render_summary(make_node(1, "Profile"), "Only one.", RenderContext())

        assert "\\cvsummarycolumns" not in result
        assert result == (
            "\\cvsection{Profile}\n"
            "\\begin{cvsummary}\n"
            "Only one.\n"
            "\\end{cvsummary}\n"
            "\n"
            "\\cvseparator"
        )

    @pytest.mark.unit
    def test_first_two_groups_form_the_intro(self, renderers):
        content = "First.\n\nSecond.\n\nThird.\n\nFourth."
        result = renderers.render_summary(make_node(1, "Profile"), content, RenderContext())

        assert "\\cvsummarycolumns{First.}{Second.}" in result
        assert result.index("Third.") < result.index("Fourth.") < result.index("\\end{cvsummary}")

    @pytest.mark.unit
    def test_separator_even_when_last(self, renderers):
        context = RenderContext(is_last_top_level_sibling=True)
        result = renderers.render_summary(make_node(1), "x", context)
        assert result.endswith("\\cvseparator")


class TestEntry:
    """Tests for the entry renderer."""

    @pytest.mark.unit
    def test_default_context(self, renderers):
        node = make_node(3, "Engineer", {"FROM": "<2019-03-05>", "TO": "<2021-07-01>"})
        result = renderers.render_entry(node, "Built things.", RenderContext())

        assert result == "\\cventry{Engineer}{Mar '19 -- Jul '21}{%\nBuilt things.}"

    @pytest.mark.unit
    def test_greek_open_range(self, renderers):
        node = make_node(3, "Μηχανικός", {"from": "<2019-03-05>"})
        result = renderers.render_entry(node, "", RenderContext(locale=Locale.EL))

        assert "{Μαρ '19 -- σήμερα}" in result

    @pytest.mark.unit
    def test_education_prefixes_employer(self, renderers):
        node = make_node(3, "MSc", {"FROM": "2014-10-01", "TO": "2016-06-30", "EMPLOYER": "Uni & Co"})
        context = RenderContext(date_context=DateContext.EDUCATION)
        result = renderers.render_entry(node, "Thesis.", context)

        assert "{2014 -- 2016}" in result
        assert "\\textit{Uni \\& Co}\\\\\nThesis." in result

    @pytest.mark.unit
    def test_employer_ignored_outside_education(self, renderers):
        node = make_node(3, "Engineer", {"EMPLOYER": "Acme"})
        result = renderers.render_entry(node, "Body.", RenderContext())

        assert "Acme" not in result
        assert result == "\\cventry{Engineer}{}{%\nBody.}"


class TestSkills:
    """Tests for skills and skills subsections."""

    @pytest.mark.unit
    def test_subsection_is_inline(self, renderers):
        result = renderers.render_skills(make_node(2, "Languages"), "Python, Go\n", RenderContext())
        assert result == "\\cvskill{Languages}{Python, Go}"

    @pytest.mark.unit
    def test_inline_children_widen_separator(self, renderers):
        content = "\\cvskill{Languages}{Python}"
        result = renderers.render_skills(make_node(1, "Skills"), content, RenderContext())
        assert result.endswith("\\cvskillsgap\n\\cvseparator")

    @pytest.mark.unit
    def test_plain_children_use_plain_separator(self, renderers):
        result = renderers.render_skills(make_node(1, "Skills"), "Python", RenderContext())
        assert result.endswith("Python\n\n\\cvseparator")
        assert "\\cvskillsgap" not in result

    @pytest.mark.unit
    def test_last_skills_section_has_no_separator(self, renderers):
        context = RenderContext(is_last_top_level_sibling=True)
        result = renderers.render_skills(make_node(1, "Skills"), "\\cvskill{A}{B}", context)
        assert "\\cvseparator" not in result
        assert "\\cvskillsgap" not in result


class TestGroupAndGeneric:
    """Tests for structural roles."""

    @pytest.mark.unit
    def test_group(self, renderers):
        result = renderers.render_group(make_node(1, "Experience"), "Body", RenderContext())
        assert result == "\\cvsection{Experience}\n\nBody\n\n\\cvseparator"

    @pytest.mark.unit
    def test_last_group(self, renderers):
        context = RenderContext(is_last_top_level_sibling=True)
        result = renderers.render_group(make_node(1, "Experience"), "Body", context)
        assert result == "\\cvsection{Experience}\n\nBody"

    @pytest.mark.unit
    def test_generic_with_url_and_location(self, renderers):
        node = make_node(2, "Acme", {"URL": "https://acme.example/#jobs", "LOCATION": "Athens"})
        result = renderers.render_generic(node, "Entries", RenderContext())

        assert result == (
            "\\cvsubsection{\\href{https://acme.example/\\#jobs}{Acme}}{Athens}\n\nEntries"
        )
        assert "\\cvseparator" not in result

    @pytest.mark.unit
    def test_generic_plain(self, renderers):
        result = renderers.render_generic(make_node(2, "Acme"), "", RenderContext())
        assert result == "\\cvsubsection{Acme}{}"


class TestDispatch:
    """Tests for role dispatch and pass-through."""

    @pytest.mark.unit
    def test_passthrough(self, renderers):
        result = renderers.render(Role.PASSTHROUGH, make_node(3, "*Talks*"), "Text", RenderContext())
        assert result == "\\subsubsection*{\\textbf{Talks}}\n\nText"

    @pytest.mark.unit
    def test_title_markup_is_converted(self, renderers):
        result = renderers.render(Role.GROUP, make_node(1, "*Core* work"), "", RenderContext())
        assert result.startswith("\\cvsection{\\textbf{Core} work}")

    @pytest.mark.unit
    @pytest.mark.parametrize("role", list(Role))
    def test_every_role_renders(self, renderers, role):
        assert renderers.render(role, make_node(2, "Title"), "Body", RenderContext())

    @pytest.mark.unit
    def test_in_entry(self):
        assert RenderContext().in_entry(Role.ENTRY)
        assert RenderContext(ancestor_roles=(Role.GROUP, Role.ENTRY)).in_entry(Role.PASSTHROUGH)
        assert not RenderContext(ancestor_roles=(Role.GROUP,)).in_entry(Role.GENERIC)
