"""Defines for common methods and errors shared across modules."""

import sys


class SnodelistError(RuntimeError):
    """Base class for the fatal errors raised by snodelist modules.

    These are deterministic failures on static input (a bad task count
    string, a bad line format, an unreadable node file).  Library code
    raises them and only the command line front end catches them.
    """
    pass


def print_error(msg):
    """Write a diagnostic line to stderr."""
    print('ERROR:  ' + str(msg), file=sys.stderr)


def print_verbose(msg, verbose=False):
    if verbose:
        print(str(msg), file=sys.stderr)
