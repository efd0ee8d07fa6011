# This module renders machine file lines from a line format.
#
# tokens:
#   %%       literal percent sign
#   %h       host name
#   %c       task count
#   %C       task count, omitted when the count is 1 or less
#   %[:]c    task count preceded by the delimiter ':'
#   %[:]C    as %[:]c, omitted when the count is 1 or less
#
# the delimiter is one or more characters from -_:;.,/\| or whitespace,
# any other %-sequence (and a trailing %) produces no output

from snodelist.common import SnodelistError

# token tags
PERCENT = 'Percent'
HOST = 'Host'
COUNT = 'Count'
COUNT_IF_PLURAL = 'CountIfPlural'
DELIM_COUNT = 'DelimCount'
DELIM_COUNT_IF_PLURAL = 'DelimCountIfPlural'
LITERAL = 'Literal'

COUNT_TAGS = (COUNT, COUNT_IF_PLURAL, DELIM_COUNT, DELIM_COUNT_IF_PLURAL)

MALFORMED_DELIMITER = 'MalformedDelimiter'

DELIMITER_CHARS = '-_:;.,/\\|'


class FormatError(SnodelistError):
    """Raised when a line format contains a malformed delimited token."""

    def __init__(self, reason, offset, template):
        self.kind = MALFORMED_DELIMITER
        self.offset = offset
        self.template = template
        super().__init__(
            f'invalid delimiter in format specification ({reason}) at offset {offset}: {template}'
        )


def is_delimiter_char(c):
    return c in DELIMITER_CHARS or c.isspace()


class Token:
    """One element of a parsed line format.

    text holds the literal text for LITERAL tokens and the delimiter for
    DELIM_COUNT and DELIM_COUNT_IF_PLURAL, it is empty otherwise.
    """

    def __init__(self, tag, text=''):
        self.tag = tag
        self.text = text

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.tag == other.tag and self.text == other.text

    def __repr__(self):
        if self.text:
            return f'Token({self.tag}, {self.text!r})'
        return f'Token({self.tag})'


def tokenize(template):
    """Return the list of tokens for a line format.

    Raises FormatError for a delimited token that is unterminated, empty,
    or contains a character outside the delimiter set.
    """
    tokens = []
    literal = ''
    i = 0
    n = len(template)
    while i < n:
        c = template[i]
        if c != '%':
            literal += c
            i += 1
            continue

        if literal:
            tokens.append(Token(LITERAL, literal))
            literal = ''

        start = i
        i += 1
        if i >= n:
            # trailing lone '%'
            break

        c = template[i]
        i += 1
        if c == '%':
            tokens.append(Token(PERCENT))
        elif c == 'h':
            tokens.append(Token(HOST))
        elif c == 'c':
            tokens.append(Token(COUNT))
        elif c == 'C':
            tokens.append(Token(COUNT_IF_PLURAL))
        elif c == '[':
            close = template.find(']', i)
            if close < 0:
                raise FormatError('unterminated', start, template)
            delim = template[i:close]
            if not delim:
                raise FormatError('empty', start, template)
            for j, d in enumerate(delim):
                if not is_delimiter_char(d):
                    raise FormatError(f'unexpected {d!r}', i + j, template)
            i = close + 1
            if i < n:
                c = template[i]
                i += 1
                if c == 'c':
                    tokens.append(Token(DELIM_COUNT, delim))
                elif c == 'C':
                    tokens.append(Token(DELIM_COUNT_IF_PLURAL, delim))

    if literal:
        tokens.append(Token(LITERAL, literal))

    return tokens


class LineFormat:
    """A parsed line format.

    The template is scanned once on construction, so a malformed format
    is reported before any line is rendered.  has_count tells whether the
    format carries the task count itself; when it does not, the line is
    repeated once per task instead (unless no_repeats is given).
    """

    def __init__(self, template):
        self.template = template
        self.tokens = tokenize(template)
        self.has_count = any(t.tag in COUNT_TAGS for t in self.tokens)

    def format_line(self, host, count):
        """Return one line (with newline) for host and count."""
        out = []
        for token in self.tokens:
            tag = token.tag
            if tag == LITERAL:
                out.append(token.text)
            elif tag == PERCENT:
                out.append('%')
            elif tag == HOST:
                out.append(host)
            elif tag == COUNT:
                out.append(str(count))
            elif tag == COUNT_IF_PLURAL:
                if count > 1:
                    out.append(str(count))
            elif tag == DELIM_COUNT:
                out.append(token.text + str(count))
            elif tag == DELIM_COUNT_IF_PLURAL:
                if count > 1:
                    out.append(token.text + str(count))
        out.append('\n')
        return ''.join(out)

    def lines(self, host, count, no_repeats=False):
        """Return the list of lines written for one host."""
        return _lines(self, host, count, self.has_count or no_repeats)

    def render(self, host, count, no_repeats=False):
        return ''.join(self.lines(host, count, no_repeats))


def _lines(fmt, host, count, single):
    if single:
        return [fmt.format_line(host, count)]

    # repeat mode, the count is given by the number of lines
    line = fmt.format_line(host, count)
    return [line] * max(count, 0)


def classify(template):
    """Return True if the line format contains a task count token."""
    return LineFormat(template).has_count


def render(template, host, count, has_count=None, no_repeats=False):
    """Render the output for one host as a single string.

    has_count is the result of classify(template), it is computed here
    when not given.

    render('%h%[:]C', 'n001', 3) returns 'n001:3\\n'
    render('%h', 'n001', 2) returns 'n001\\nn001\\n'
    """
    fmt = LineFormat(template)
    if has_count is None:
        has_count = fmt.has_count
    return ''.join(_lines(fmt, host, count, has_count or no_repeats))
