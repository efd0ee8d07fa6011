# Generate an MPI machine file, one line per host (or per task on
# the host), from a hostlist and a run-length encoded task count string.

import sys

from snodelist.lineformat import LineFormat


def print_machinefile(hosts, decoder, template, no_repeats=False, out=None):
    """Write machine file lines for each host to out (default stdout).

    Params
    ------
    hosts      - HostList, or anything with a shift() method returning None
                 when empty
    decoder    - TaskCountDecoder, supplies one task count per host
    template   - line format string or LineFormat, see snodelist.lineformat
    no_repeats - when the format has no count token, write one line per
                 host instead of one per task

    Output stops at the first host without a task count, and at the first
    task count of zero or less, so a short task count string yields a
    short machine file.

    Returns
    -------
    int
        number of hosts written
    """
    if out is None:
        out = sys.stdout

    # parse the format up front, a bad format fails before any output
    fmt = template
    if not isinstance(fmt, LineFormat):
        fmt = LineFormat(template)

    written = 0
    while True:
        host = hosts.shift()
        if host is None:
            break

        count = decoder.next_count()
        if count is None or count <= 0:
            break

        for line in fmt.lines(host, count, no_repeats):
            out.write(line)
        written += 1

    return written
