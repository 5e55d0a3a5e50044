"""
scheduler.rules
---------------

Exposes all candidate rules by importing from:

- `fixed`: Previous-month bridge used for continuity checks across the month boundary.
- `hard`: Hard eligibility rules (tier/unit, availability, adjacency, roommates, senior cap).
- `soft`: Soft pre-filters skipped in desperate mode (weekend span, quotas, weekend balance, catch-up).
- `scoring`: Weighted score terms used to rank the admitted candidates.

Allows unified access to all rule definitions via wildcard imports.
"""
from .fixed import *
from .hard import *
from .soft import *
from .scoring import *
