"""Statistical building blocks: label generation, normal distribution helpers and power."""

from . import data_generation as data_generation
from . import distributions as distributions
from . import power as power
