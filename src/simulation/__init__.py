"""
Simulation of truncated-normal data.

- TruncatedNormalSimulator: Draw samples on [a, b] and compute the moments
  of the truncated distribution

**Usage:**
```python
from simulation.simulator import TruncatedNormalSimulator

sim = TruncatedNormalSimulator(a=0.0, b=2.0)
x = sim.sample(100, mean=0.5, sd=0.5, random_seed=42)
```
"""

from simulation.simulator import TruncatedNormalSimulator

__all__ = [
    "TruncatedNormalSimulator",
]
