"""
Document Tree Data Structures

Defines the section tree handed to the templating context: nodes with tags,
properties and inline text, plus document-level header metadata.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

# Keyword aliases accepted for each metadata field (compared case-insensitively)
METADATA_ALIASES = {
    "first_name": ["first_name", "firstname", "given_name"],
    "last_name": ["last_name", "lastname", "family_name", "surname"],
    "author": ["author", "name"],
    "headline": ["headline", "title", "job_title", "jobtitle"],
    "birthdate": ["birthdate", "birthday", "date_of_birth"],
    "email": ["email", "mail"],
    "phone": ["phone", "telephone"],
    "mobile": ["mobile", "cellphone"],
    "homepage": ["homepage", "website", "web"],
    "github": ["github"],
    "linkedin": ["linkedin"],
    "street": ["street", "address"],
    "city": ["city"],
    "state": ["state", "region"],
    "country": ["country"],
}


@dataclass
class Node:
    """
    One section of the input outline.

    Attributes:
        level: Depth of the heading (1 for top-level sections)
        title: Heading text (inline markup, converted on render)
        tags: Unordered set of tags attached to the heading
        properties: Raw property values keyed by name, as supplied by the source
        children: Child sections in document order
        inline_text: Body text directly under the heading, excluding children
    """

    level: int
    title: str
    tags: FrozenSet[str] = frozenset()
    properties: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    inline_text: str = ""

    def get_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Look up a property by name regardless of the case the source used."""
        wanted = name.lower()
        for key, value in self.properties.items():
            if key.lower() == wanted:
                return value
        return default

    def has_tag(self, *names: str) -> bool:
        """True if any of names is among the node's tags (case-insensitive)."""
        lowered = {tag.lower() for tag in self.tags}
        return any(name.lower() in lowered for name in names)


@dataclass
class DocumentMetadata:
    """
    Header fields of the CV, independent of the section tree.

    All values are plain strings; absent fields are empty.
    latex_header holds raw preamble lines supplied by the author.
    """

    first_name: str = ""
    last_name: str = ""
    author: str = ""
    headline: str = ""
    birthdate: str = ""
    email: str = ""
    phone: str = ""
    mobile: str = ""
    homepage: str = ""
    github: str = ""
    linkedin: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    latex_header: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DocumentMetadata":
        """
        Build metadata from a loosely keyed mapping (org keywords, YAML keys).

        Keys are matched case-insensitively against METADATA_ALIASES; unknown
        keys are ignored. latex_header accepts a string or a list of strings.
        """
        lowered = {str(key).lower(): value for key, value in values.items()}
        kwargs: Dict[str, Any] = {}

        for field_name, aliases in METADATA_ALIASES.items():
            for alias in aliases:
                value = lowered.get(alias)
                if value is not None and str(value).strip():
                    kwargs[field_name] = str(value).strip()
                    break

        header = lowered.get("latex_header")
        if isinstance(header, str):
            kwargs["latex_header"] = [header]
        elif header:
            kwargs["latex_header"] = [str(line) for line in header]

        return cls(**kwargs)


@dataclass
class DocumentTree:
    """
    A complete input document: top-level sections plus header metadata.

    Attributes:
        roots: Level-1 sections in document order
        metadata: Header fields
    """

    roots: List[Node] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    def walk(self):
        """Yield every node in document (pre-)order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
