"""
Traversal helpers over the stories of a python-docx document.
"""

from typing import Iterator, List

from docx.document import Document as DocumentObject
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

W14_NAMESPACE = "http://schemas.microsoft.com/office/word/2010/wordml"


def w14(tag: str) -> str:
    """Clark-notation name for a w14 (Word 2010) element or attribute."""
    return f"{{{W14_NAMESPACE}}}{tag}"


def _header_footer_parts(document: DocumentObject, kind: str) -> List:
    parts = []
    seen = set()
    for section in document.sections:
        for attr in (kind, f"first_page_{kind}", f"even_page_{kind}"):
            story = getattr(section, attr)
            # linked stories have no definition of their own
            if story.is_linked_to_previous:
                continue
            if story.part in seen:
                continue
            seen.add(story.part)
            parts.append(story)
    return parts


def iter_footers(document: DocumentObject) -> List:
    return _header_footer_parts(document, "footer")


def iter_headers(document: DocumentObject) -> List:
    return _header_footer_parts(document, "header")


def _iter_table_paragraphs(table: Table) -> Iterator[Paragraph]:
    seen = set()
    for row in table.rows:
        for cell in row.cells:
            # merged cells are returned once per grid column
            if cell._tc in seen:
                continue
            seen.add(cell._tc)
            yield from _iter_container_paragraphs(cell)


def _iter_container_paragraphs(container) -> Iterator[Paragraph]:
    yield from container.paragraphs
    for table in container.tables:
        yield from _iter_table_paragraphs(table)


def iter_paragraphs(document: DocumentObject) -> Iterator[Paragraph]:
    """
    Yield every paragraph of the document.

    Footers come first, then headers, then the body. Table cells (including
    nested tables) are visited after the top-level paragraphs of their story.
    """
    for footer in iter_footers(document):
        yield from _iter_container_paragraphs(footer)
    for header in iter_headers(document):
        yield from _iter_container_paragraphs(header)
    yield from _iter_container_paragraphs(document)


def iter_story_elements(document: DocumentObject) -> Iterator:
    """Yield the root XML element of the body and of every header/footer."""
    yield document.element.body
    for story in iter_headers(document) + iter_footers(document):
        yield story._element


def iter_elements(document: DocumentObject, tag: str) -> Iterator:
    """Yield all descendants with the given ``prefix:name`` tag in every story."""
    clark = qn(tag) if not tag.startswith("{") else tag
    for root in iter_story_elements(document):
        yield from root.iter(clark)
