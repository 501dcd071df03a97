"""
Detection of ``{name}`` placeholders spread across document runs.

Word splits text into runs whenever formatting, spell checking or editing
history changes, so a single placeholder such as ``{barcode1}`` may be stored
as ``{bar`` + ``code`` + ``1}``. The scanner walks the characters of a
paragraph once and records which runs every placeholder touches.
"""

from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple, TypeVar

from ..core.config import Config

RunT = TypeVar("RunT")


class ScanState(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def scan_spans(chars: Iterable[Tuple[int, str]], open_tag: str = Config.PLACEHOLDER_OPEN,
               close_tag: str = Config.PLACEHOLDER_CLOSE) -> Dict[str, List[int]]:
    """
    Find placeholders in a stream of (run_index, character) pairs.

    Args:
        chars: Characters in document order, each tagged with its run index
        open_tag: Opening delimiter
        close_tag: Closing delimiter

    Returns:
        Lower-cased placeholder name (delimiters stripped) mapped to the
        ordered, distinct run indexes that spell it. A name seen twice keeps
        its last occurrence; a tag still open at the end is dropped.
    """
    spans: Dict[str, List[int]] = {}
    state = ScanState.OUTSIDE
    buffer: List[str] = []
    runs: List[int] = []

    for run_index, char in chars:
        if state is ScanState.OUTSIDE:
            if char == open_tag:
                state = ScanState.INSIDE
                buffer = []
                runs = [run_index]
            continue

        if not runs or runs[-1] != run_index:
            runs.append(run_index)

        if char == close_tag:
            spans["".join(buffer).lower()] = runs
            state = ScanState.OUTSIDE
            buffer = []
            runs = []
        else:
            # a second open tag is kept as part of the name
            buffer.append(char)

    return spans


def run_characters(runs: Sequence) -> Iterable[Tuple[int, str]]:
    """Yield (run_index, character) pairs for objects exposing ``.text``."""
    for index, run in enumerate(runs):
        for char in run.text or "":
            yield index, char


def extract_placeholders(runs: Sequence[RunT], open_tag: str = Config.PLACEHOLDER_OPEN,
                         close_tag: str = Config.PLACEHOLDER_CLOSE) -> Dict[str, List[RunT]]:
    """Group runs by the placeholder they spell (see ``scan_spans``)."""
    spans = scan_spans(run_characters(runs), open_tag, close_tag)
    return {name: [runs[i] for i in indexes] for name, indexes in spans.items()}


def _has_prefix(name: str, prefix: str) -> bool:
    return name.strip().lower().startswith(prefix)


def is_barcode(name: str) -> bool:
    """True if the name starts with ``barcode`` (case and surrounding space ignored)."""
    return _has_prefix(name, Config.BARCODE_PREFIX)


def is_qrcode(name: str) -> bool:
    """True if the name starts with ``qrcode`` (case and surrounding space ignored)."""
    return _has_prefix(name, Config.QRCODE_PREFIX)
