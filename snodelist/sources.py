# Methods to add hostlist expressions from the environment or from files.

import os
import sys

from snodelist.common import SnodelistError


class SourceError(SnodelistError):
    """Raised when a host source named on the command line is unusable."""
    pass


def add_from_env(hostlist, name):
    """Push the expression held in environment variable name.

    Returns True if the variable was set and non-empty.
    """
    if not name:
        raise SourceError(
            'invalid variable name provided with -i/--include-env option')

    value = os.environ.get(name)
    if not value:
        return False

    hostlist.push(value)
    return True


def read_expressions(infile):
    """Return the hostlist expressions found in an open file.

    Expressions are separated by whitespace, a word starting with '#'
    comments out the rest of its line.
    """
    exprs = []
    for line in infile:
        for word in line.split():
            if word.startswith('#'):
                break
            exprs.append(word)
    return exprs


def add_from_file(hostlist, path):
    """Push every expression read from the file at path ('-' for stdin).

    Returns the number of expressions pushed.
    """
    if not path:
        raise SourceError(
            'invalid file path provided with -l/--nodelist option')

    if path == '-':
        exprs = read_expressions(sys.stdin)
    else:
        try:
            with open(path, 'r') as infile:
                exprs = read_expressions(infile)
        except OSError as e:
            raise SourceError(f'unable to open nodelist: {path}') from e

    for expr in exprs:
        hostlist.push(expr)
    return len(exprs)
