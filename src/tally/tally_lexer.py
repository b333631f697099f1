"""Lexer for Tally expressions, producing nested token trees."""

import math
from typing import List, Tuple

from tally.tally_error import TallyTokenError
from tally.tally_token import TallyOperator, TallyToken, TallyTokenTree, TallyTokenType
from tally.tally_value import TallyFloat, TallyInteger, TallyLiteral, fits_int64, literal_from_float


class TallyLexer:
    """
    Lexes a single line of Tally text into a TallyTokenTree.

    At every position whitespace is skipped and then the recognizers are tried in a
    fixed order, the first match winning:

        1. variable definition  ``name:``
        2. numeric literal
        3. function call        ``name(arg, ...)``
        4. variable reference   ``name``
        5. binary operator      ``+ - * / % ^``
        6. parenthesized group  ``( ... )``

    A leading ``-`` is folded into a numeric literal only at a sign position, which is
    the start of a nesting level or the position directly after an operator.
    """

    def __init__(self, max_depth: int = 100) -> None:
        """
        Initialize lexer.

        Args:
            max_depth: Maximum nesting depth for groups and function arguments
        """
        self.max_depth = max_depth

    def lex(self, text: str) -> TallyTokenTree:
        """
        Lex a line of text.

        Args:
            text: The line to lex

        Returns:
            Token tree for the top nesting level

        Raises:
            TallyTokenError: If the text cannot be tokenized
        """
        return self._lex_level(text, 0, 0)

    def _lex_level(self, text: str, depth: int, offset: int) -> TallyTokenTree:
        """Lex one nesting level; offset maps local indices back to line positions."""
        if depth > self.max_depth:
            raise TallyTokenError(
                message=f"Expression nested too deeply (maximum depth {self.max_depth})",
                position=offset,
                suggestion="Reduce the number of nested parentheses or function calls"
            )

        tree = TallyTokenTree()
        sign_position = True
        i = 0

        while True:
            while i < len(text) and text[i].isspace():
                i += 1

            if i >= len(text):
                break

            token, i = self._next_token(text, i, depth, offset, sign_position)
            tree.append(token)
            sign_position = token.type in (TallyTokenType.OPERATOR, TallyTokenType.VARIABLE_DEF)

        return tree

    def _next_token(
        self,
        text: str,
        start: int,
        depth: int,
        offset: int,
        sign_position: bool
    ) -> Tuple[TallyToken, int]:
        """Try every recognizer in priority order at start."""
        name_end = self._match_identifier(text, start)
        if name_end is not None:
            after = self._skip_whitespace(text, name_end)
            if after < len(text) and text[after] == ':':
                token = TallyToken(
                    TallyTokenType.VARIABLE_DEF, text[start:name_end], offset + start, after + 1 - start
                )
                return token, after + 1

        number = self._match_number(text, start, offset, sign_position)
        if number is not None:
            literal, end = number
            return TallyToken(TallyTokenType.NUMBER, literal, offset + start, end - start), end

        if name_end is not None:
            after = self._skip_whitespace(text, name_end)
            if after < len(text) and text[after] == '(':
                close = self._find_closing(text, after, offset)
                args = self._lex_arguments(text, after + 1, close, depth + 1, offset)
                token = TallyToken(
                    TallyTokenType.FUNCTION, text[start:name_end], offset + start, close + 1 - start, args
                )
                return token, close + 1

            token = TallyToken(TallyTokenType.VARIABLE_REF, text[start:name_end], offset + start, name_end - start)
            return token, name_end

        op = TallyOperator.from_char(text[start])
        if op is not None:
            return TallyToken(TallyTokenType.OPERATOR, op, offset + start), start + 1

        if text[start] == '(':
            close = self._find_closing(text, start, offset)
            child = self._lex_level(text[start + 1:close], depth + 1, offset + start + 1)
            token = TallyToken(TallyTokenType.GROUP, None, offset + start, close + 1 - start, [child])
            return token, close + 1

        raise TallyTokenError(
            message=f"Unexpected character: '{text[start]}'",
            position=offset + start,
            received=text[start:start + 20],
            expected="A number, name, operator or '('",
            example="total: 2 * (price + 1.5)"
        )

    def _skip_whitespace(self, text: str, i: int) -> int:
        while i < len(text) and text[i].isspace():
            i += 1

        return i

    def _match_identifier(self, text: str, start: int) -> int | None:
        """Return the end index of an identifier starting at start, or None."""
        if not text[start].isalpha():
            return None

        i = start + 1
        while i < len(text) and text[i].isascii() and (text[i].isalnum() or text[i] == '_'):
            i += 1

        return i

    def _match_digits(self, text: str, start: int) -> int:
        """
        Match a digit run starting at start.

        Underscores are accepted as separators once the first digit has been seen.
        Returns the end index, equal to start when there is no digit.
        """
        if start >= len(text) or not _is_digit(text[start]):
            return start

        i = start + 1
        while i < len(text) and (_is_digit(text[i]) or text[i] == '_'):
            i += 1

        return i

    def _match_number(
        self,
        text: str,
        start: int,
        offset: int,
        allow_sign: bool
    ) -> Tuple[TallyLiteral, int] | None:
        """
        Match an integer, decimal or scientific literal.

        Returns:
            The canonicalized literal and the end index, or None if there is no number here
        """
        i = start
        if allow_sign and text[i] == '-':
            i += 1

        int_end = self._match_digits(text, i)
        has_int_digits = int_end > i
        i = int_end

        is_integer = True
        if i < len(text) and text[i] == '.':
            frac_end = self._match_digits(text, i + 1)
            if has_int_digits or frac_end > i + 1:
                is_integer = False
                i = frac_end

        if is_integer and not has_int_digits:
            return None

        if i < len(text) and text[i] in 'eE':
            exp_start = i + 1
            if exp_start < len(text) and text[exp_start] == '-':
                exp_start += 1

            exp_end = self._match_digits(text, exp_start)
            if exp_end > exp_start:
                is_integer = False
                i = exp_end

        source = text[start:i].replace('_', '')
        if is_integer:
            return self._integer_literal(source, offset + start), i

        value = float(source)
        if math.isinf(value):
            raise self._range_error(source, offset + start)

        return literal_from_float(value), i

    def _integer_literal(self, source: str, position: int) -> TallyLiteral:
        """Convert a digit run, promoting to float outside the 64-bit range."""
        try:
            value = int(source)
            if fits_int64(value):
                return TallyInteger(value)

            return TallyFloat(float(value))

        except (OverflowError, ValueError) as e:
            # Too many digits for int(), or too large for a float
            raise self._range_error(source, position) from e

    def _range_error(self, source: str, position: int) -> TallyTokenError:
        return TallyTokenError(
            message=f"Number out of range: {source}",
            position=position,
            context="Numbers must fit a 64-bit floating point value"
        )

    def _find_closing(self, text: str, open_index: int, offset: int) -> int:
        """Find the ')' matching the '(' at open_index by counting depth."""
        depth = 0
        for i in range(open_index, len(text)):
            if text[i] == '(':
                depth += 1

            elif text[i] == ')':
                depth -= 1
                if depth == 0:
                    return i

        raise TallyTokenError(
            message="Unterminated parenthesis",
            position=offset + open_index,
            expected="A matching ')'",
            suggestion=f"Add {depth} closing parenthes{'is' if depth == 1 else 'es'}",
            example="Correct: (1 + 2) * 3\nIncorrect: (1 + 2 * 3"
        )

    def _lex_arguments(self, text: str, start: int, end: int, depth: int, offset: int) -> List[TallyTokenTree]:
        """Split a call body on top-level commas and lex each argument."""
        if not text[start:end].strip():
            return []

        args = []
        nesting = 0
        arg_start = start
        for i in range(start, end):
            if text[i] == '(':
                nesting += 1

            elif text[i] == ')':
                nesting -= 1

            elif text[i] == ',' and nesting == 0:
                args.append(self._lex_level(text[arg_start:i], depth, offset + arg_start))
                arg_start = i + 1

        args.append(self._lex_level(text[arg_start:end], depth, offset + arg_start))
        return args


def _is_digit(char: str) -> bool:
    return '0' <= char <= '9'
