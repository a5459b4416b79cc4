"""Tokenizer and bounds-checked token stream for the phrase parser."""

import re

_WHITESPACE = re.compile(r"\s+")


def tokenize(phrase):
    """Split a phrase on runs of whitespace. None or blank gives []."""
    if not phrase:
        return []
    return [t for t in _WHITESPACE.split(phrase) if t]


class TokenStream:
    """A cursor over a token list. Lookahead past the end returns None."""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.pos = 0

    def __len__(self):
        return len(self.tokens)

    @property
    def done(self):
        return self.pos >= len(self.tokens)

    def peek(self, offset=0):
        """Return the token offset places from the cursor, or None."""
        i = self.pos + offset
        if 0 <= i < len(self.tokens):
            return self.tokens[i]
        return None

    def peek_is(self, *words, offset=0):
        """True if the next len(words) tokens equal words, ignoring case.

        False when fewer tokens remain than words given.
        """
        for i, word in enumerate(words):
            token = self.peek(offset + i)
            if token is None or token.lower() != word:
                return False
        return True

    def advance(self, count=1):
        # Never move past the end
        self.pos = min(self.pos + count, len(self.tokens))

    def __repr__(self):
        return f"TokenStream(pos={self.pos}, tokens={self.tokens!r})"
