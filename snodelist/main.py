#! /usr/bin/env python3

# Build a Slurm host list from expressions on the command line, from
# environment variables, or from files, and print it expanded (one name
# per delimiter), compressed ('n[000-002,005-008]'), or as an MPI machine
# file driven by SLURM_JOB_NODELIST and SLURM_TASKS_PER_NODE.

import os
import sys
import argparse

from snodelist import config
from snodelist.common import SnodelistError, print_error, print_verbose
from snodelist.hostlist import HostList
from snodelist.lineformat import LineFormat
from snodelist.machinefile import print_machinefile
from snodelist.sources import SourceError, add_from_env, add_from_file
from snodelist.taskcount import TaskCountDecoder

EPILOG = '''\
expand/compress modes:
  if no host lists are explicitly added then SLURM_JOB_NODELIST is
  checked by default.

machinefile line format tokens:
  %%       literal percent sign
  %h       host name
  %c       rank count
  %C       optional rank count (omitted if 1)
  %[:]c    rank count with preceding colon
  %[:]C    optional rank count with preceding colon

  the colon in the latter two tokens can be any string of punctuation
  in the set [-_:;.,/\\|] or whitespace
'''


class SourceAction(argparse.Action):
    """Record -i and -l values in a single list to keep their order."""

    def __call__(self, parser, namespace, values, option_string=None):
        sources = getattr(namespace, self.dest, None)
        if sources is None:
            sources = []
        sources.append((self.kind, values))
        setattr(namespace, self.dest, sources)


class EnvSourceAction(SourceAction):
    kind = 'env'


class FileSourceAction(SourceAction):
    kind = 'file'


class ArgumentParser(argparse.ArgumentParser):
    """Exit with EINVAL on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print_error(message)
        sys.exit(config.EXIT_INVALID)


def build_parser():
    parser = ArgumentParser(
        prog='snodelist',
        usage='%(prog)s {options} {<host expression> {<host expression> ..}}',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG)

    parser.add_argument('-e',
                        '--expand',
                        dest='mode',
                        action='store_const',
                        const=config.MODE_EXPAND,
                        help='Output as individual names (default mode).')
    parser.add_argument(
        '-d',
        '--delimiter',
        metavar='<str>',
        type=str,
        default=config.DEFAULT_DELIMITER,
        help='Use <str> between each hostname in expanded mode '
        '(default: a newline character).')
    parser.add_argument('-c',
                        '--compress',
                        dest='mode',
                        action='store_const',
                        const=config.MODE_COMPRESS,
                        help='Output in compressed (compact) form.')
    parser.add_argument(
        '-i',
        '--include-env',
        dest='sources',
        metavar='<varname>',
        nargs='?',
        const=config.NODELIST_ENV,
        action=EnvSourceAction,
        help='Include a host list present in the environment variable '
        '<varname>, default ' + config.NODELIST_ENV +
        ' (can be used multiple times).')
    parser.add_argument(
        '-l',
        '--nodelist',
        dest='sources',
        metavar='<file>',
        type=str,
        action=FileSourceAction,
        help='Read node expressions from the given <file>; use a dash (-) '
        'to read from stdin (can be used multiple times).')
    parser.add_argument(
        '-u',
        '--unique',
        action='store_true',
        help='Remove any duplicate names (for expand and compress modes).')
    parser.add_argument(
        '-m',
        '--machinefile',
        dest='mode',
        action='store_const',
        const=config.MODE_MACHINEFILE,
        help='Generate an MPI-style machine file using the ' +
        config.NODELIST_ENV + ' and ' + config.TASKS_PER_NODE_ENV +
        ' environment variables.')
    parser.add_argument('-f',
                        '--format',
                        metavar='<line-format>',
                        type=str,
                        default=config.DEFAULT_FORMAT,
                        help='Apply <line-format> to each host in the list '
                        '(default: %(default)s).')
    parser.add_argument(
        '-n',
        '--no-repeats',
        action='store_true',
        help='If the <line-format> lacks a count token, do not repeat the '
        'line once for each task on the host.')
    parser.add_argument('-v',
                        '--verbose',
                        action='store_true',
                        help='Print the resolved options to stderr.')
    parser.add_argument('hosts',
                        metavar='<host expression>',
                        nargs='*',
                        help='Host list expression, e.g. n[000-002],g100.')
    return parser


def parse_options(argv=None):
    """Return the Options record for the command line in argv."""
    parser = build_parser()
    args = parser.parse_args(argv)

    sources = list(args.sources or [])
    sources.extend(('expr', expr) for expr in args.hosts)

    return config.Options(mode=args.mode or config.DEFAULT_MODE,
                          sources=tuple(sources),
                          explicit=len(sources) > 0,
                          unique=args.unique,
                          delimiter=args.delimiter,
                          format=args.format,
                          no_repeats=args.no_repeats,
                          verbose=args.verbose)


def required_env(name):
    value = os.environ.get(name)
    if not value:
        raise SourceError(f'no {name} in environment')
    return value


def run_machinefile(options, out=None):
    """Write the machine file for the current Slurm job."""
    node_list = required_env(config.NODELIST_ENV)
    task_counts = required_env(config.TASKS_PER_NODE_ENV)

    fmt = LineFormat(options.format)
    decoder = TaskCountDecoder(task_counts)

    with HostList(node_list) as hostlist:
        print_verbose(
            f'machinefile: {hostlist.count()} hosts, tasks {task_counts}, '
            f'format {options.format!r}', options.verbose)
        if hostlist.count() > 0:
            print_machinefile(hostlist,
                              decoder,
                              fmt,
                              no_repeats=options.no_repeats,
                              out=out)


def run_hostlist(options, out=None):
    """Print the host list in expanded or compressed form."""
    if out is None:
        out = sys.stdout

    with HostList() as hostlist:
        for kind, value in options.sources:
            if kind == 'env':
                add_from_env(hostlist, value)
            elif kind == 'file':
                add_from_file(hostlist, value)
            else:
                hostlist.push(value)

        if not options.explicit:
            add_from_env(hostlist, config.NODELIST_ENV)

        print_verbose(f'{options.mode}: {hostlist.count()} hosts',
                      options.verbose)
        if hostlist.count() == 0:
            return

        if options.unique:
            hostlist.uniq()

        if options.mode == config.MODE_COMPRESS:
            out.write(hostlist.ranged_string() + '\n')
            return

        names = []
        while True:
            host = hostlist.shift()
            if host is None:
                break
            names.append(host)
        out.write(options.delimiter.join(names) + '\n')


def main(argv=None):
    options = parse_options(argv)

    try:
        if options.mode == config.MODE_MACHINEFILE:
            run_machinefile(options)
        else:
            run_hostlist(options)
    except SnodelistError as e:
        print_error(e)
        return config.EXIT_INVALID

    return 0


if __name__ == '__main__':
    sys.exit(main())
