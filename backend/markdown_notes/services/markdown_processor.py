"""
Markdown Notes Backend - Markdown Processor
=============================================

What:  Renders markdown to HTML and checks whether markdown parses.
How:   Wraps a markdown-it-py parser. Rendering is a pure function of the
       input; validation runs a full parse into the token stream and turns
       any parser exception into an invalid ValidationResult.
Who:   NoteService (get_note_as_html, lint_markdown).

CommonMark has no syntax errors in the usual sense: every string is a valid
document. `validate` therefore only catches parser-level failures and is not
a linter.
"""

import logging
from typing import Optional

from markdown_it import MarkdownIt

from markdown_notes.config import settings
from markdown_notes.schemas.note import ValidationResult

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "Markdown is empty, considered valid."
VALID_MESSAGE = "Markdown syntax appears valid."
INVALID_MESSAGE = "Invalid Markdown syntax."


def empty_result() -> ValidationResult:
    """The verdict for missing or empty markdown."""
    return ValidationResult(is_valid=True, message=EMPTY_MESSAGE)


def build_parser(preset: Optional[str] = None, html: Optional[bool] = None) -> MarkdownIt:
    """Creates a markdown-it parser from settings (or explicit overrides)."""
    preset = preset or settings.markdown_preset
    html = settings.markdown_html if html is None else html
    return MarkdownIt(preset, {"html": html})


class MarkdownProcessor:
    """
    Markdown rendering and syntax validation.

    Args:
        parser: markdown-it instance to use; built from settings when omitted
    """

    def __init__(self, parser: Optional[MarkdownIt] = None):
        self.parser = parser if parser is not None else build_parser()

    def render(self, markdown_text: Optional[str]) -> str:
        """
        Render markdown to HTML.

        Returns "" for None or "". Malformed markdown degrades to literal
        text per CommonMark rules instead of raising.
        """
        if not markdown_text:
            return ""
        return self.parser.render(markdown_text)

    def validate(self, markdown_text: Optional[str]) -> ValidationResult:
        """
        Attempt a full parse and report whether it succeeded.

        Returns:
            ValidationResult: valid for empty input or a successful parse;
            invalid with the parser's error text otherwise.
        """
        if not markdown_text:
            return empty_result()

        try:
            tokens = self.parser.parse(markdown_text)
        except Exception as e:
            # Any parser failure is a verdict, not a server error
            logger.info("Markdown failed to parse: %s", e)
            return ValidationResult(
                is_valid=False,
                message=INVALID_MESSAGE,
                error_detail=str(e) or type(e).__name__,
            )

        logger.debug("Markdown parsed into %d tokens", len(tokens))
        return ValidationResult(is_valid=True, message=VALID_MESSAGE)
