# This module decodes Slurm-style run-length encoded task counts,
# as found in SLURM_TASKS_PER_NODE.
#
#   '4(x2),2,1(x3)' -> 4, 4, 2, 1, 1, 1
#
# grammar:  entry (',' entry)*  where  entry = INT | INT '(x' INT ')'

from snodelist.common import SnodelistError

INVALID_INTEGER = 'InvalidInteger'
INVALID_REPEAT = 'InvalidRepeat'
UNEXPECTED_CHARACTER = 'UnexpectedCharacter'

_DIGITS = '0123456789'

_MESSAGES = {
    INVALID_INTEGER: 'invalid integer value',
    INVALID_REPEAT: 'invalid repeat count',
    UNEXPECTED_CHARACTER: 'unexpected character',
}


class TaskCountError(SnodelistError):
    """Raised when a task count string cannot be decoded.

    Attributes
    ----------
    kind    - one of INVALID_INTEGER, INVALID_REPEAT, UNEXPECTED_CHARACTER
    offset  - index into spec of the offending character
    spec    - the original task count string
    """

    def __init__(self, kind, offset, spec, message=None):
        self.kind = kind
        self.offset = offset
        self.spec = spec
        if message is None:
            message = _MESSAGES[kind]
        super().__init__(f'{message} at offset {offset}: {spec}')


class RunLengthEntry:
    """A task count value repeated over consecutive nodes."""

    def __init__(self, value, repeat=1):
        self.value = value
        self.repeat = repeat

    def __repr__(self):
        return f'RunLengthEntry(value={self.value}, repeat={self.repeat})'


class TaskCountDecoder:
    """Lazily expands a run-length encoded task count string.

    The decoder is an iterator, each step returns the task count for the
    next node.  Iteration stops at the end of the string.  A malformed
    string raises TaskCountError at the step that reaches the bad entry,
    so counts before it are still produced.
    """

    def __init__(self, spec):
        self.spec = spec if spec is not None else ''
        self.cursor = 0
        self.entry = None

    def __iter__(self):
        return self

    def __next__(self):
        if self.entry is None:
            self.entry = self._parse_entry()
            if self.entry is None:
                raise StopIteration

        value = self.entry.value
        self.entry.repeat -= 1
        if self.entry.repeat == 0:
            self.entry = None
        return value

    def next_count(self):
        """Return the next task count, or None once the string is used up."""
        return next(self, None)

    def _read_int(self, pos):
        # return (value, end) for the digits starting at pos,
        # end == pos when there are none
        end = pos
        while end < len(self.spec) and self.spec[end] in _DIGITS:
            end += 1
        if end == pos:
            return None, pos
        return int(self.spec[pos:end]), end

    def _fail(self, kind, offset, message=None):
        raise TaskCountError(kind, offset, self.spec, message)

    def _parse_entry(self):
        # return the entry at the cursor and advance past it,
        # None at the end of the string
        spec = self.spec
        value, pos = self._read_int(self.cursor)
        if value is None:
            if self.cursor >= len(spec):
                return None
            self._fail(INVALID_INTEGER, self.cursor)

        if pos == len(spec):
            self.cursor = pos
            return RunLengthEntry(value)

        if spec[pos] == ',':
            self.cursor = pos + 1
            return RunLengthEntry(value)

        if spec[pos] != '(':
            self._fail(UNEXPECTED_CHARACTER, pos)

        # value(xN)
        pos += 1
        if pos >= len(spec) or spec[pos] != 'x':
            self._fail(INVALID_REPEAT, pos, 'invalid repeat specification')
        pos += 1
        repeat, end = self._read_int(pos)
        if repeat is None or repeat <= 0:
            self._fail(INVALID_REPEAT, pos)
        pos = end

        if pos >= len(spec) or spec[pos] != ')':
            self._fail(UNEXPECTED_CHARACTER, pos)
        pos += 1
        if pos < len(spec):
            if spec[pos] != ',':
                # reported at the closing parenthesis
                self._fail(UNEXPECTED_CHARACTER, pos - 1)
            pos += 1

        self.cursor = pos
        return RunLengthEntry(value, repeat)


def decode(spec):
    """Return the full list of task counts for a task count string.

    decode('4(x2),2,1(x3)') returns [4, 4, 2, 1, 1, 1]
    """
    return list(TaskCountDecoder(spec))
