"""
Builders for small DOCX documents used across the tests.
"""

import json
import os
from xml.sax.saxutils import escape

import fitz  # PyMuPDF
from docx import Document
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls


def _attr(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def add_simple_field(paragraph, instr: str, result: str = "«field»", bold: bool = False):
    """Append a ``w:fldSimple`` field to a paragraph."""
    rpr = "<w:rPr><w:b/></w:rPr>" if bold else ""
    paragraph._p.append(parse_xml(
        f'<w:fldSimple {nsdecls("w")} w:instr="{_attr(instr)}">'
        f'<w:r>{rpr}<w:t>{escape(result)}</w:t></w:r>'
        f'</w:fldSimple>'
    ))


def add_complex_field(paragraph, instr: str, result: str = "«field»", italic: bool = False):
    """Append a begin / instrText / separate / result / end field to a paragraph."""
    rpr = "<w:rPr><w:i/></w:rPr>" if italic else ""
    for xml in (
        '<w:r {ns}><w:fldChar w:fldCharType="begin"/></w:r>',
        '<w:r {ns}><w:instrText xml:space="preserve">' + escape(instr) + '</w:instrText></w:r>',
        '<w:r {ns}><w:fldChar w:fldCharType="separate"/></w:r>',
        '<w:r {ns}>' + rpr + '<w:t>' + escape(result) + '</w:t></w:r>',
        '<w:r {ns}><w:fldChar w:fldCharType="end"/></w:r>',
    ):
        paragraph._p.append(parse_xml(xml.replace("{ns}", nsdecls("w"))))


def add_legacy_checkbox(paragraph, name: str, checked=None):
    """Append a FORMCHECKBOX field; ``checked`` None leaves out ``w:checked``."""
    state = "" if checked is None else f'<w:checked w:val="{1 if checked else 0}"/>'
    name_xml = f'<w:name w:val="{_attr(name)}"/>' if name else ""
    for xml in (
        '<w:r {ns}><w:fldChar w:fldCharType="begin"><w:ffData>' + name_xml +
        '<w:enabled/><w:calcOnExit w:val="0"/>'
        '<w:checkBox><w:sizeAuto/><w:default w:val="0"/>' + state + '</w:checkBox>'
        '</w:ffData></w:fldChar></w:r>',
        '<w:r {ns}><w:instrText xml:space="preserve"> FORMCHECKBOX </w:instrText></w:r>',
        '<w:r {ns}><w:fldChar w:fldCharType="end"/></w:r>',
    ):
        paragraph._p.append(parse_xml(xml.replace("{ns}", nsdecls("w"))))


def add_content_checkbox(paragraph, tag: str = "", alias: str = "", checked: bool = False,
                         with_states: bool = True):
    """Append a Word 2010 checkbox content control to a paragraph."""
    props = ""
    if alias:
        props += f'<w:alias w:val="{_attr(alias)}"/>'
    if tag:
        props += f'<w:tag w:val="{_attr(tag)}"/>'
    states = ('<w14:checkedState w14:val="2612" w14:font="MS Gothic"/>'
              '<w14:uncheckedState w14:val="2610" w14:font="MS Gothic"/>') if with_states else ""
    glyph = "☒" if checked else "☐"
    paragraph._p.append(parse_xml(
        f'<w:sdt {nsdecls("w", "w14")}><w:sdtPr>{props}'
        f'<w14:checkbox><w14:checked w14:val="{1 if checked else 0}"/>{states}</w14:checkbox>'
        f'</w:sdtPr><w:sdtContent><w:r><w:t>{glyph}</w:t></w:r></w:sdtContent></w:sdt>'
    ))


def add_split_text(paragraph, *pieces):
    """Add one run per piece of text."""
    return [paragraph.add_run(piece) for piece in pieces]


def write_mapping(path: str, mapping) -> str:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(mapping, f)
    return path


def write_pdf(path: str, pages: int = 1) -> str:
    """Write a small PDF with the given number of pages."""
    pdf = fitz.open()
    for number in range(pages):
        page = pdf.new_page()
        page.insert_text((72, 72), f"Page {number + 1}")
    pdf.save(path)
    pdf.close()
    return path


def build_template(path: str) -> str:
    """A letter template with a merge field, a checkbox and a barcode placeholder."""
    document = Document()
    greeting = document.add_paragraph("Dear ")
    add_simple_field(greeting, " MERGEFIELD Name ")
    checkbox = document.add_paragraph("Subscribed: ")
    add_legacy_checkbox(checkbox, "Subscribed")
    code = document.add_paragraph()
    add_split_text(code, "{bar", "code1}")
    document.save(path)
    return path


def temp_files_in(directory: str, keep=()):
    """Files in a directory other than the ones listed in ``keep``."""
    return sorted(name for name in os.listdir(directory) if name not in keep)
