import logging

from shader_tune.config import MIN_COMPLETION_PREFIX
from shader_tune.keywords import METAL_COMPLETIONS

log = logging.getLogger(__name__)


def is_word_char(ch):
    return ch.isalnum() or ch == "_"


def _resolve_cursor(text, cursor):
    """None means end of buffer; out of range offsets yield None."""
    if cursor is None:
        return len(text)
    if 0 <= cursor <= len(text):
        return cursor
    return None


def _word_start(text, cursor):
    start = cursor
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1
    return start


class CompletionEngine:
    """
    Prefix completion over a static keyword database.

    The partial word is the run of letters, digits and underscores ending
    exactly at the cursor. Runs made only of digits never count, since a
    number is not the start of an identifier.
    """
    def __init__(self, database=METAL_COMPLETIONS, min_prefix=MIN_COMPLETION_PREFIX):
        self.database = tuple(database)
        self.min_prefix = min_prefix

    def partial_word(self, text, cursor=None):
        """Returns the identifier prefix before the cursor, or None if there is none."""
        cursor = _resolve_cursor(text, cursor)
        if cursor is None:
            return None

        start = _word_start(text, cursor)
        if start == cursor:
            return None

        word = text[start:cursor]
        if not any(ch.isalpha() or ch == "_" for ch in word):
            return None
        return word

    def should_trigger(self, text, cursor=None):
        word = self.partial_word(text, cursor)
        return word is not None and len(word) >= self.min_prefix

    def complete(self, text, cursor=None):
        """
        Returns the database items matching the partial word at the cursor.

        Matching is a case-insensitive prefix test; results are sorted by
        item text. An absent or too-short partial word gives an empty tuple.
        """
        word = self.partial_word(text, cursor)
        if word is None or len(word) < self.min_prefix:
            return ()

        prefix = word.lower()
        matches = [item for item in self.database if item.text.lower().startswith(prefix)]
        log.debug(f"{len(matches)} completions for '{word}'")
        return tuple(sorted(matches, key=lambda item: item.text))

    def word_range(self, text, cursor=None):
        """
        Returns (start, end) of the word the cursor touches, scanning both
        backward and forward over word characters, or None when empty.
        """
        cursor = _resolve_cursor(text, cursor)
        if cursor is None:
            return None

        start = _word_start(text, cursor)
        end = cursor
        while end < len(text) and is_word_char(text[end]):
            end += 1

        if start == end:
            return None
        return start, end
