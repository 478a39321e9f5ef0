"""League analytics engine.

Pure computations over a league-season snapshot: power rankings, trade
grades, keeper success and transaction activity. Subpackages:

- ``compute``: the calculators
- ``report``: JSON-ready bundling of calculator outputs
"""

from . import compute, config, models, report

__all__ = ["compute", "config", "models", "report"]
