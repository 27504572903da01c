"""
jj Lexer - turns source text into tokens

Tokens are produced on demand: the lexer keeps exactly one token of
lookahead, exposed through peek() and consumed with advance(). The parser
usually wants the whole list up front, which is what tokenize() gives it.

Rules are tried in a fixed order at every position: strings, numbers,
names/keywords, then symbols (longest spelling first).

Author: xwest
"""

import re
from typing import List, Optional

from .tokens import (
    Token, TokenType, Source, SourceLocation, KEYWORDS, SYMBOLS,
    SYMBOLS_LONGEST_FIRST
)
from .errors import (
    create_unterminated_comment_error, create_unknown_escape_error,
    create_unrecognized_token_error, create_unterminated_string_error
)


class Lexer:
    """
    jj lexical analyzer.

    Converts source code text into a stream of tokens. Any input either
    lexes to a finite token sequence ending in a single EOF token, or raises
    a LexerError at the first offending character.
    """

    ESCAPE_SEQUENCES = {
        't': '\t',
        'n': '\n',
        '\\': '\\',
        "'": "'",
        '"': '"',
    }

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: uri of the source, used in diagnostics and debug info
        """
        self.source = Source(filename, source)
        self.text = source
        self.filename = filename
        self.pos = 0

        # Precompile regex patterns for efficiency
        self._compile_patterns()

        self._lookahead = self._extract()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.number_pattern = re.compile(r'\d*\.?\d*', re.ASCII)
        self.name_pattern = re.compile(r'\w+', re.ASCII)
        self.whitespace_pattern = re.compile(r'[ \r\n\t]+')

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        return self._lookahead

    def advance(self) -> Token:
        """Consume and return the next token. EOF is returned forever."""
        token = self._lookahead
        if token.type != TokenType.EOF:
            self._lookahead = self._extract()
        return token

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source code.

        Returns:
            List of tokens including exactly one trailing EOF token
        """
        tokens = []
        while self.peek().type != TokenType.EOF:
            tokens.append(self.advance())
        tokens.append(self.peek())
        return tokens

    def _make_token(self, token_type: TokenType, start: int, value=None) -> Token:
        return Token(token_type, value, SourceLocation(self.source, start))

    def _startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _skip_whitespace_and_comments(self):
        """Skip whitespace, '//' line comments and '/* */' block comments."""
        while not self._at_end():
            match = self.whitespace_pattern.match(self.text, self.pos)
            if match:
                self.pos = match.end()
                continue

            if self._startswith('//'):
                end = self.text.find('\n', self.pos)
                self.pos = len(self.text) if end == -1 else end
                continue

            if self._startswith('/*'):
                end = self.text.find('*/', self.pos + 2)
                if end == -1:
                    raise create_unterminated_comment_error(
                        self._make_token(TokenType.ERROR, self.pos))
                self.pos = end + 2
                continue

            break

    def _extract(self) -> Token:
        """Lex one token starting at the current position."""
        self._skip_whitespace_and_comments()
        if self._at_end():
            return self._make_token(TokenType.EOF, self.pos)

        token = (self._try_string() or
                 self._try_number() or
                 self._try_name_or_keyword() or
                 self._try_symbol())
        if token is None:
            raise create_unrecognized_token_error(
                self._make_token(TokenType.ERROR, self.pos))
        return token

    def _try_string(self) -> Optional[Token]:
        """Tokenize a string literal: quotes, tripled quotes, optional 'r'."""
        start = self.pos
        raw = False
        if self._startswith('r"') or self._startswith("r'"):
            raw = True
            self.pos += 1
        elif not (self._startswith('"') or self._startswith("'")):
            return None

        quote = self.text[self.pos]
        if self._startswith(quote * 3):
            quote = quote * 3
        self.pos += len(quote)

        value_parts = []
        while not self._startswith(quote):
            if self._at_end():
                raise create_unterminated_string_error(
                    quote, self._make_token(TokenType.ERROR, start))
            char = self.text[self.pos]
            if not raw and char == '\\':
                self.pos += 1
                escape = self.text[self.pos] if not self._at_end() else ''
                if escape not in self.ESCAPE_SEQUENCES:
                    raise create_unknown_escape_error(
                        escape, self._make_token(TokenType.ERROR, self.pos))
                value_parts.append(self.ESCAPE_SEQUENCES[escape])
            else:
                value_parts.append(char)
            self.pos += 1

        self.pos += len(quote)
        return self._make_token(TokenType.STRING, start, ''.join(value_parts))

    def _try_number(self) -> Optional[Token]:
        """Tokenize digits, an optional '.', more digits; kept verbatim."""
        match = self.number_pattern.match(self.text, self.pos)
        lexeme = match.group(0)
        if not any(c.isdigit() for c in lexeme):
            return None
        start = self.pos
        self.pos = match.end()
        return self._make_token(TokenType.NUMBER, start, lexeme)

    def _try_name_or_keyword(self) -> Optional[Token]:
        """Tokenize a run of word characters as a keyword or NAME."""
        match = self.name_pattern.match(self.text, self.pos)
        if not match:
            return None
        start = self.pos
        self.pos = match.end()
        lexeme = match.group(0)
        keyword = KEYWORDS.get(lexeme)
        if keyword is not None:
            return self._make_token(keyword, start)
        return self._make_token(TokenType.NAME, start, lexeme)

    def _try_symbol(self) -> Optional[Token]:
        for symbol in SYMBOLS_LONGEST_FIRST:
            if self._startswith(symbol):
                start = self.pos
                self.pos += len(symbol)
                return self._make_token(SYMBOLS[symbol], start)
        return None


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: uri for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
