"""Running statistics of a stream of samples.

Used for synapse efficacy bookkeeping: every delivered (non-zero) signal
may add one efficacy sample. Only sums are kept, so memory does not grow
with the number of cycles.
"""

import math

import numpy as np


class BasicStat:
    """Count, sum, sum of squares, min and max of added samples.

    Derived figures (average, variance, ...) are computed on demand. An
    empty statistic reports 0 for every figure.
    """

    def __init__(self, samples=None):
        self.reset()
        if samples is not None:
            self.add_samples(samples)

    def reset(self):
        """Forget all samples."""
        self._sum = 0.0
        self._sum_of_squares = 0.0
        self._min = 0.0
        self._max = 0.0
        self._num_samples = 0
        self._num_nonzero_samples = 0

    def add_sample(self, value):
        value = float(value)
        if self._num_samples == 0:
            self._min = value
            self._max = value
        else:
            self._min = min(self._min, value)
            self._max = max(self._max, value)
        self._sum += value
        self._sum_of_squares += value * value
        self._num_samples += 1
        if value != 0.0:
            self._num_nonzero_samples += 1

    def add_samples(self, values):
        values = np.asarray(values, dtype=np.float64).ravel()
        if values.size == 0:
            return
        if self._num_samples == 0:
            self._min = float(values.min())
            self._max = float(values.max())
        else:
            self._min = min(self._min, float(values.min()))
            self._max = max(self._max, float(values.max()))
        self._sum += float(values.sum())
        self._sum_of_squares += float(np.dot(values, values))
        self._num_samples += int(values.size)
        self._num_nonzero_samples += int(np.count_nonzero(values))

    def copy(self):
        clone = BasicStat()
        clone.__dict__.update(self.__dict__)
        return clone

    @property
    def num_samples(self):
        return self._num_samples

    @property
    def num_nonzero_samples(self):
        return self._num_nonzero_samples

    @property
    def is_empty(self):
        return self._num_samples == 0

    @property
    def sum(self):
        return self._sum

    @property
    def sum_of_squares(self):
        return self._sum_of_squares

    @property
    def min(self):
        return self._min

    @property
    def max(self):
        return self._max

    @property
    def mid(self):
        return self._min + (self._max - self._min) / 2.0

    @property
    def span(self):
        return self._max - self._min

    @property
    def arith_avg(self):
        if self._num_samples == 0:
            return 0.0
        return self._sum / self._num_samples

    @property
    def mean_square(self):
        if self._num_samples == 0:
            return 0.0
        return self._sum_of_squares / self._num_samples

    @property
    def root_mean_square(self):
        return math.sqrt(self.mean_square)

    @property
    def variance(self):
        # Population variance; clipped because rounding can go slightly negative
        if self._num_samples == 0:
            return 0.0
        return max(0.0, self.mean_square - self.arith_avg ** 2)

    @property
    def std_dev(self):
        return math.sqrt(self.variance)

    def to_dict(self):
        """Serialize to dict for export."""
        return {
            "num_samples": self.num_samples,
            "num_nonzero_samples": self.num_nonzero_samples,
            "sum": self.sum,
            "min": self.min,
            "max": self.max,
            "mean": self.arith_avg,
            "rms": self.root_mean_square,
            "std": self.std_dev,
        }

    def __repr__(self):
        return (f"BasicStat(n={self._num_samples}, mean={self.arith_avg:.4g}, "
                f"min={self._min:.4g}, max={self._max:.4g})")
