# This module holds an ordered list of host names built from
# slurm-style hostlist expressions, using ClusterShell NodeSet
# to expand and compress the bracketed ranges.

from collections import deque

from ClusterShell.NodeSet import NodeSet, NodeSetException, RESOLVER_NOGROUP

from snodelist.common import SnodelistError


class HostListError(SnodelistError):
    """Raised when a hostlist expression cannot be parsed."""

    def __init__(self, expr, reason):
        self.expr = expr
        super().__init__(f'invalid host expression {expr!r}: {reason}')


# split a hostlist expression into single host or range pieces
# we split on commas and whitespace, but not on commas within brackets
# splithosts('rhea[1,3-5],rhea7 login1') -> ['rhea[1,3-5]', 'rhea7', 'login1']
def splithosts(expr=''):
    if expr is None:
        return []

    parts = []
    depth = 0
    start = 0
    for i, c in enumerate(expr):
        if c == '[':
            depth += 1
        elif c == ']':
            depth -= 1
        elif depth == 0 and (c == ',' or c.isspace()):
            if i > start:
                parts.append(expr[start:i])
            start = i + 1

    if len(expr) > start:
        parts.append(expr[start:])

    return parts


def expand_hosts(expr):
    """Return list of hosts, where each element is a single host.

    Params
    ------
    expr - string of hostnames like 'node[1-3],login1'

    Returns
    -------
    list
        list of expanded hosts, e.g., ['node1','node2','node3','login1']

    The pieces of the expression keep their order and repeated pieces
    are kept.  Within one bracketed range NodeSet sorts the names and
    drops repeats: n[3,1,1] expands to ['n1', 'n3'].
    """
    hosts = []
    for part in splithosts(expr):
        try:
            nodeset = NodeSet(part, resolver=RESOLVER_NOGROUP)
        except NodeSetException as e:
            raise HostListError(part, str(e)) from e
        hosts.extend(node for node in nodeset)
    return hosts


def compress_hosts(nodes):
    """Return hostlist string, where the hostlist is in a compressed form.

    Params
    ------
    nodes - list of nodes

    Returns
    -------
    str
        comma separated hostlist in compressed form, e.g., 'node[1-4],node7'
    """
    if not nodes:
        return ''
    nodeset = NodeSet.fromlist(nodes, resolver=RESOLVER_NOGROUP)
    return str(nodeset)


class HostList:
    """An ordered list of host names, consumed from the front.

    The handle is a context manager, the names are released on leaving
    the with block whether or not an error was raised.

        with HostList('n[000-002]') as hostlist:
            hostlist.push('g[100-101]')
            while True:
                host = hostlist.shift()
                if host is None:
                    break
    """

    def __init__(self, expr=''):
        self.hosts = deque()
        self.closed = False
        if expr:
            self.push(expr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def __len__(self):
        return len(self.hosts)

    def _check_open(self):
        if self.closed:
            raise ValueError('operation on a released HostList')

    def push(self, expr):
        """Expand expr and append its hosts, return the number added."""
        self._check_open()
        hosts = expand_hosts(expr)
        self.hosts.extend(hosts)
        return len(hosts)

    def count(self):
        return len(self.hosts)

    def uniq(self):
        """Drop duplicate names, leaving the list sorted."""
        self._check_open()
        if self.hosts:
            nodeset = NodeSet.fromlist(self.hosts, resolver=RESOLVER_NOGROUP)
            self.hosts = deque(nodeset)

    def shift(self):
        """Remove and return the first host, or None if the list is empty."""
        self._check_open()
        if not self.hosts:
            return None
        return self.hosts.popleft()

    def ranged_string(self):
        self._check_open()
        return compress_hosts(self.hosts)

    def close(self):
        self.hosts.clear()
        self.closed = True
