"""Print-based logging for synapse wiring and propagation runs.

Messages go to stdout (and an optional extra stream) with a ruled header
carrying the logger name, level and time. The package logs only at
construction and run boundaries, never per cycle:

    config                  configuration loaded from YAML
    synapse.construction    delays assigned (method, count, mean, max)
    simulation.network      network wired, edges dropped or out of scope
    simulation.engine       propagation started and finished

Usage:
    from rcsynapse.utils import get_logger
    LOG = get_logger("synapse.construction")
    LOG.info("Assigned %s delays to %d synapses", "random", 120)
"""

import sys
from datetime import datetime


def get_logger(name, out=None):
    """Create a print-based logger.

    Parameters
    ----------
    name : str
        Logger name, displayed in every message header.
    out : file-like, optional
        Additional output stream (e.g., an open log file).

    Returns
    -------
    callable
        A log function with .debug, .info, .warning, .error methods.
    """
    prefix = f"rcsynapse:{name}"
    line_length = 72

    def _outputs():
        # sys.stdout is looked up per call so captured streams see the output
        return [sys.stdout] + ([out] if out else [])

    def _header(level, outputs):
        now = datetime.now().strftime("%H:%M:%S")
        for dest in outputs:
            print(f"{'_' * line_length}", file=dest)
            print(f"{prefix} {level} [{now}]", file=dest)

    def log(level, msg, args):
        outputs = _outputs()
        _header(level, outputs)
        for dest in outputs:
            try:
                print(msg % args, file=dest)
            except TypeError:
                print(msg, file=dest)

    log.debug = lambda msg, *args: log("DEBUG", msg, args)
    log.info = lambda msg, *args: log("INFO", msg, args)
    log.warning = lambda msg, *args: log("WARNING", msg, args)
    log.error = lambda msg, *args: log("ERROR", msg, args)

    return log
