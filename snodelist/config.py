# constants used across snodelist, other modules reference
# config.NODELIST_ENV (etc) rather than hard-coding the names

import errno
from collections import namedtuple

# environment variables read by the machinefile mode and the
# default host source for the expand/compress modes
NODELIST_ENV = 'SLURM_JOB_NODELIST'
TASKS_PER_NODE_ENV = 'SLURM_TASKS_PER_NODE'

# output modes
MODE_EXPAND = 'expand'
MODE_COMPRESS = 'compress'
MODE_MACHINEFILE = 'machinefile'
DEFAULT_MODE = MODE_EXPAND

# separator between host names in expanded output
DEFAULT_DELIMITER = '\n'

# line format for machine files: host name, then ':<count>' when count > 1
DEFAULT_FORMAT = '%h%[:]C'

# exit status for any parse, usage, or configuration error
EXIT_INVALID = errno.EINVAL

# Options is built once from the parsed command line and handed to the
# mode handlers, nothing else holds flag state
#
# sources    - list of (kind, value) tuples in command line order,
#              kind is 'env', 'file', or 'expr'
# explicit   - True if any host source was given on the command line
Options = namedtuple('Options', [
    'mode', 'sources', 'explicit', 'unique', 'delimiter', 'format',
    'no_repeats', 'verbose'
])
