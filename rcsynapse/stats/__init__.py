"""stats — Running statistics for efficacy bookkeeping."""

from .basic_stat import BasicStat
