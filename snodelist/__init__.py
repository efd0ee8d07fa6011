"""snodelist expands, compresses, and formats Slurm host lists.

The machine file support renders one line per host from a hostlist
expression and a run-length encoded task count string:

    >>> from snodelist import HostList, TaskCountDecoder, print_machinefile
    >>> with HostList('n[000-002]') as hosts:
    ...     n = print_machinefile(hosts, TaskCountDecoder('2,1(x2)'), '%h%[:]C')
    n000:2
    n001
    n002
"""

from snodelist.common import SnodelistError
from snodelist.taskcount import TaskCountDecoder, TaskCountError, decode
from snodelist.lineformat import LineFormat, FormatError, classify, render
from snodelist.hostlist import HostList, HostListError
from snodelist.machinefile import print_machinefile
