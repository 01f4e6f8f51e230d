"""Lightweight syntax checks for Markdown and HTML sources.

These checks back the editor's validation hints. They never modify the
input and never raise for string input.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from markdown_it import MarkdownIt

from richtext_engine.content_converter.classifier import VOID_ELEMENTS
from richtext_engine.errors import require_text

logger = logging.getLogger(__name__)

_GFM_TABLE_ROW = re.compile(r'^\s*\|.*\|\s*$')
_TASK_LIST_ITEM = re.compile(r'^\s*[-*+]\s+\[([xX ])\]\s+(.+)$')
_FENCE = re.compile(r'^\s{0,3}(`{3,}|~{3,})')
_OPEN_TAG = re.compile(r'<([A-Za-z][A-Za-z0-9-]*)\b[^>]*?(/?)>')
_CLOSE_TAG = re.compile(r'</([A-Za-z][A-Za-z0-9-]*)\s*>')
_UNQUOTED_ATTRIBUTE = re.compile(r'<[A-Za-z][^<>]*\s[\w-]+=[^"\'\s>]+(?=[\s/>])')


@dataclass
class SyntaxIssue:
    """A problem found in a source document.

    Attributes:
        kind: 'parsing' or 'validation'
        message: Human-readable description
        line: 1-based line number when known
    """
    kind: str
    message: str
    line: Optional[int] = None


@dataclass
class SyntaxReport:
    """Outcome of a syntax check."""
    issues: List[SyntaxIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues


@dataclass
class TaskListItem:
    checked: bool
    text: str


def is_gfm_table_row(line: str) -> bool:
    """Check whether a line looks like a GFM pipe-table row."""
    return bool(_GFM_TABLE_ROW.match(line))


def is_task_list_item(line: str) -> bool:
    """Check whether a line is a task-list item (``- [ ] text``)."""
    return bool(_TASK_LIST_ITEM.match(line))


def parse_task_list_item(line: str) -> Optional[TaskListItem]:
    """Parse a task-list line into its checked state and text.

    Returns:
        TaskListItem, or None if the line is not a task-list item
    """
    match = _TASK_LIST_ITEM.match(line)
    if not match:
        return None
    return TaskListItem(checked=match.group(1).lower() == 'x', text=match.group(2))


def validate_markdown(markdown: str) -> SyntaxReport:
    """Check that Markdown parses and its code fences are closed.

    Args:
        markdown: Markdown source

    Returns:
        SyntaxReport listing parse failures and unclosed fences
    """
    require_text(markdown, 'markdown')
    report = SyntaxReport()

    try:
        MarkdownIt('commonmark').enable(['table', 'strikethrough']).parse(markdown)
    except Exception as e:
        logger.warning(f"Markdown parse check failed: {e}")
        report.issues.append(SyntaxIssue('parsing', str(e) or 'Unknown parsing error'))

    open_fence = None
    open_line = 0
    for number, line in enumerate(markdown.splitlines(), start=1):
        match = _FENCE.match(line)
        if not match:
            continue
        marker = match.group(1)
        if open_fence is None:
            open_fence, open_line = marker, number
        elif marker[0] == open_fence[0] and len(marker) >= len(open_fence) and not line.strip()[len(marker):].strip():
            open_fence = None
    if open_fence is not None:
        report.issues.append(
            SyntaxIssue('parsing', f"Unclosed code fence '{open_fence}'", line=open_line)
        )
    return report


def validate_html(html: str) -> SyntaxReport:
    """Check HTML for mismatched tags and unquoted attribute values.

    Args:
        html: HTML source

    Returns:
        SyntaxReport with any problems found
    """
    require_text(html, 'html')
    report = SyntaxReport()

    expected_closing = 0
    for match in _OPEN_TAG.finditer(html):
        name = match.group(1).lower()
        if name not in VOID_ELEMENTS and match.group(2) != '/':
            expected_closing += 1
    closing = len(_CLOSE_TAG.findall(html))

    if expected_closing != closing:
        report.issues.append(SyntaxIssue(
            'validation',
            f"Mismatched HTML tags detected ({expected_closing} opened, {closing} closed)",
        ))
    if _UNQUOTED_ATTRIBUTE.search(html):
        report.issues.append(SyntaxIssue('validation', "Malformed attributes detected (missing quotes)"))
    return report
