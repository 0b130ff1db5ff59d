"""Exception hierarchy for rcsynapse.

RCSynapseError (base)
├── InvalidConfiguration          out-of-range parameters, raised at construction
├── UnsupportedConfigurationValue unknown enum token, raised at parse time
└── ProtocolMisuse                violation of the once-per-cycle contract

Nothing in the package retries. A raised error aborts the current
reservoir step, since queue and efficacy state would otherwise be
inconsistent.
"""

import numpy as np


class RCSynapseError(Exception):
    """Base exception for all rcsynapse errors."""


class InvalidConfiguration(RCSynapseError, ValueError):
    """A parameter is outside its valid range."""


class UnsupportedConfigurationValue(RCSynapseError, ValueError):
    """A configuration token does not name a supported value.

    Parameters
    ----------
    kind : str
        What was being parsed (e.g., "synaptic delay method").
    token : str
        The offending token.
    supported : iterable of str
        Accepted tokens, listed in the message.
    """

    def __init__(self, kind, token, supported=()):
        self.kind = kind
        self.token = token
        self.supported = tuple(supported)
        message = f"Unsupported {kind} '{token}'."
        if self.supported:
            message += f" Available: {list(self.supported)}"
        super().__init__(message)


class ProtocolMisuse(RCSynapseError, RuntimeError):
    """The cycle protocol was violated (e.g., two reads in one cycle)."""


def check_range(name, value, low=None, high=None):
    """Raise InvalidConfiguration unless low <= value <= high.

    Either bound may be None (unbounded on that side).
    """
    if value is None or value != value:
        raise InvalidConfiguration(f"Invalid {name} {value}. A number is required.")
    if low is not None and value < low:
        raise InvalidConfiguration(
            f"Invalid {name} {value}. {name} must be GE to {low}."
        )
    if high is not None and value > high:
        raise InvalidConfiguration(
            f"Invalid {name} {value}. {name} must be LE to {high}."
        )
    return value


def check_count(name, value):
    """Return ``value`` as an int, or raise InvalidConfiguration.

    Accepts integral numbers >= 0 (including integral floats). Booleans,
    non-numbers, NaN and infinities are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise InvalidConfiguration(f"Invalid {name} {value!r}. An integer is required.")
    if not np.isfinite(value) or int(value) != value:
        raise InvalidConfiguration(f"Invalid {name} {value}. An integer is required.")
    return int(check_range(name, int(value), 0))
