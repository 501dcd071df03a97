"""
Mail merge of MERGEFIELD fields and filling of checkbox form fields.

python-docx has no field model, so fields are handled on the underlying
WordprocessingML elements:

- simple fields: ``<w:fldSimple w:instr="MERGEFIELD Name">``
- complex fields: runs holding ``w:fldChar`` begin / ``w:instrText`` /
  separate / result runs / end
- legacy checkboxes: ``w:fldChar/w:ffData`` with a ``w:checkBox`` child
- content-control checkboxes: ``w:sdt`` with ``w14:checkbox`` in its properties
"""

import copy
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from docx.document import Document as DocumentObject
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from ..core.config import Config
from ..utils.logging_config import get_docx_logger
from .docx_utils import iter_elements, w14
from .mapping_loader import Mapping

FIELD_TOKEN_REGEX = re.compile(r'"([^"]*)"|(\\\*|\\[A-Za-z])|(\S+)')

FORM_FIELD_CHECKBOX = "checkbox"
FORM_FIELD_TEXT = "text"
FORM_FIELD_DROPDOWN = "dropdown"
FORM_FIELD_CONTENT_CHECKBOX = "content-checkbox"


@dataclass
class MergeFieldInstruction:
    """A parsed ``MERGEFIELD`` instruction."""

    name: str
    text_before: str = ""
    text_after: str = ""
    formats: List[str] = field(default_factory=list)

    def render(self, value: str) -> str:
        """Apply format switches and the before/after texts to a value."""
        for fmt in self.formats:
            value = apply_format(value, fmt)
        if not value:
            return value
        return f"{self.text_before}{value}{self.text_after}"


def apply_format(value: str, fmt: str) -> str:
    """Apply a ``\\*`` general format switch."""
    fmt = fmt.lower()
    if fmt == "upper":
        return value.upper()
    if fmt == "lower":
        return value.lower()
    if fmt == "caps":
        return " ".join(word[:1].upper() + word[1:].lower() for word in value.split(" "))
    if fmt == "firstcap":
        return value[:1].upper() + value[1:]
    # MERGEFORMAT, CHARFORMAT and unknown switches do not change the text
    return value


def parse_merge_instruction(instr: str) -> Optional[MergeFieldInstruction]:
    """
    Parse a field instruction.

    Returns:
        MergeFieldInstruction for MERGEFIELD instructions, None otherwise
    """
    tokens = []
    for match in FIELD_TOKEN_REGEX.finditer(instr or ""):
        quoted, switch, bare = match.groups()
        if switch is not None:
            tokens.append(("switch", switch))
        else:
            tokens.append(("text", quoted if quoted is not None else bare))

    if len(tokens) < 2 or tokens[0][0] != "text" or tokens[0][1].upper() != "MERGEFIELD":
        return None
    if tokens[1][0] != "text":
        return None

    instruction = MergeFieldInstruction(name=tokens[1][1])
    index = 2
    while index < len(tokens):
        kind, token = tokens[index]
        argument = tokens[index + 1][1] if index + 1 < len(tokens) and tokens[index + 1][0] == "text" else None
        if kind == "switch" and argument is not None:
            if token == "\\b":
                instruction.text_before = argument
            elif token == "\\f":
                instruction.text_after = argument
            elif token == "\\*":
                instruction.formats.append(argument)
            index += 2
            continue
        index += 1

    return instruction


def _new_run(value: str, rPr=None):
    run = OxmlElement("w:r")
    if rPr is not None:
        run.insert(0, copy.deepcopy(rPr))
    run.text = value
    return run


def _fld_char_type(run) -> Optional[str]:
    fld_char = run.find(qn("w:fldChar"))
    if fld_char is None:
        return None
    return fld_char.get(qn("w:fldCharType"))


@dataclass
class _ComplexField:
    runs: List = field(default_factory=list)
    instr: str = ""
    result_runs: List = field(default_factory=list)


def _complex_fields(paragraph) -> List[_ComplexField]:
    """Collect top-level complex fields of a paragraph, in document order."""
    fields = []
    current = None
    depth = 0
    in_result = False

    for run in list(paragraph.iter(qn("w:r"))):
        kind = _fld_char_type(run)
        if current is None:
            if kind == "begin":
                current = _ComplexField(runs=[run])
                depth = 1
                in_result = False
            continue

        current.runs.append(run)
        if kind == "begin":
            depth += 1
        elif kind == "end":
            depth -= 1
            if depth == 0:
                fields.append(current)
                current = None
        elif kind == "separate" and depth == 1:
            in_result = True
        elif depth == 1:
            if in_result:
                current.result_runs.append(run)
            else:
                current.instr += "".join(t.text or "" for t in run.iter(qn("w:instrText")))

    return fields


class FieldFiller:
    """Fills merge fields and checkbox form fields from a mapping."""

    def __init__(self):
        self.logger = get_docx_logger()

    # ---- mail merge ----
    def list_merge_fields(self, document: DocumentObject) -> List[str]:
        """Names of all MERGEFIELD fields in the document, in order."""
        names = []
        for simple in iter_elements(document, "w:fldSimple"):
            instruction = parse_merge_instruction(simple.get(qn("w:instr")))
            if instruction:
                names.append(instruction.name)
        for paragraph in iter_elements(document, "w:p"):
            for complex_field in _complex_fields(paragraph):
                instruction = parse_merge_instruction(complex_field.instr)
                if instruction:
                    names.append(instruction.name)
        return names

    def merge_fields(self, document: DocumentObject, mapping: Mapping) -> int:
        """
        Replace MERGEFIELD fields whose name is in the mapping with plain text.

        Fields with no mapping entry are left as they are.

        Returns:
            Number of fields replaced
        """
        merged = 0

        for simple in list(iter_elements(document, "w:fldSimple")):
            instruction = parse_merge_instruction(simple.get(qn("w:instr")))
            if instruction is None or instruction.name not in mapping:
                continue
            first_run = simple.find(qn("w:r"))
            rPr = first_run.find(qn("w:rPr")) if first_run is not None else None
            simple.addprevious(_new_run(instruction.render(mapping[instruction.name]), rPr))
            simple.getparent().remove(simple)
            self.logger.debug("   • MERGEFIELD %s (simple) merged", instruction.name)
            merged += 1

        for paragraph in list(iter_elements(document, "w:p")):
            for complex_field in _complex_fields(paragraph):
                instruction = parse_merge_instruction(complex_field.instr)
                if instruction is None or instruction.name not in mapping:
                    continue
                style_run = complex_field.result_runs[0] if complex_field.result_runs else complex_field.runs[0]
                rPr = style_run.find(qn("w:rPr"))
                begin = complex_field.runs[0]
                begin.addprevious(_new_run(instruction.render(mapping[instruction.name]), rPr))
                for run in complex_field.runs:
                    run.getparent().remove(run)
                self.logger.debug("   • MERGEFIELD %s merged", instruction.name)
                merged += 1

        self.logger.info("   ✅ Merged %d field(s)", merged)
        return merged

    # ---- form fields ----
    def list_form_fields(self, document: DocumentObject) -> List[Tuple[str, str]]:
        """(name, type) of every legacy form field and content-control checkbox."""
        fields = []
        for ff_data in iter_elements(document, "w:ffData"):
            name_el = ff_data.find(qn("w:name"))
            name = name_el.get(qn("w:val"), "") if name_el is not None else ""
            if ff_data.find(qn("w:checkBox")) is not None:
                kind = FORM_FIELD_CHECKBOX
            elif ff_data.find(qn("w:ddList")) is not None:
                kind = FORM_FIELD_DROPDOWN
            else:
                kind = FORM_FIELD_TEXT
            fields.append((name, kind))
        for sdt, name in self._content_checkboxes(document):
            fields.append((name, FORM_FIELD_CONTENT_CHECKBOX))
        return fields

    def _content_checkboxes(self, document: DocumentObject):
        for sdt in iter_elements(document, "w:sdt"):
            sdt_pr = sdt.find(qn("w:sdtPr"))
            if sdt_pr is None or sdt_pr.find(w14("checkbox")) is None:
                continue
            name = ""
            for tag in ("w:tag", "w:alias"):
                el = sdt_pr.find(qn(tag))
                if el is not None and el.get(qn("w:val")):
                    name = el.get(qn("w:val"))
                    break
            yield sdt, name

    @staticmethod
    def set_legacy_checked(check_box, checked: bool) -> None:
        """Set the state of a ``w:checkBox`` element."""
        checked_el = check_box.find(qn("w:checked"))
        if checked_el is None:
            checked_el = OxmlElement("w:checked")
            check_box.append(checked_el)
        checked_el.set(qn("w:val"), "1" if checked else "0")

    @staticmethod
    def set_content_checked(sdt, checked: bool) -> None:
        """Set the state and displayed glyph of a content-control checkbox."""
        checkbox = sdt.find(qn("w:sdtPr")).find(w14("checkbox"))
        checked_el = checkbox.find(w14("checked"))
        if checked_el is None:
            checked_el = checkbox.makeelement(w14("checked"), {})
            checkbox.insert(0, checked_el)
        checked_el.set(w14("val"), "1" if checked else "0")

        state = checkbox.find(w14("checkedState" if checked else "uncheckedState"))
        if state is not None and state.get(w14("val")):
            glyph = chr(int(state.get(w14("val")), 16))
        else:
            glyph = Config.CHECKBOX_CHECKED_GLYPH if checked else Config.CHECKBOX_UNCHECKED_GLYPH

        content = sdt.find(qn("w:sdtContent"))
        if content is None:
            return
        text_el = next(content.iter(qn("w:t")), None)
        if text_el is not None:
            text_el.text = glyph

    def fill_checkboxes(self, document: DocumentObject, mapping: Mapping) -> int:
        """
        Check every checkbox whose name maps to "true"; uncheck the others.

        Returns:
            Number of checkboxes visited
        """
        count = 0
        for ff_data in list(iter_elements(document, "w:ffData")):
            check_box = ff_data.find(qn("w:checkBox"))
            if check_box is None:
                continue
            name_el = ff_data.find(qn("w:name"))
            name = name_el.get(qn("w:val"), "") if name_el is not None else ""
            checked = bool(name) and mapping.is_true(name)
            self.set_legacy_checked(check_box, checked)
            self.logger.debug("   • Checkbox '%s' -> %s", name, "checked" if checked else "unchecked")
            count += 1

        for sdt, name in list(self._content_checkboxes(document)):
            checked = bool(name) and mapping.is_true(name)
            self.set_content_checked(sdt, checked)
            self.logger.debug("   • Checkbox control '%s' -> %s", name, "checked" if checked else "unchecked")
            count += 1

        self.logger.info("   ✅ Set %d checkbox(es)", count)
        return count

    def fill(self, document: DocumentObject, mapping: Mapping) -> None:
        """Run mail merge and checkbox filling, logging the fields found."""
        self.logger.debug("   Merge fields: %s", self.list_merge_fields(document))
        for name, kind in self.list_form_fields(document):
            self.logger.debug("   Form field %s[%s]", name, kind)
        self.merge_fields(document, mapping)
        self.fill_checkboxes(document, mapping)
