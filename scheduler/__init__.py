"""
scheduler
---------

Main scheduling module. Initializes key components:

- `builder`: Entry point `generate_roster()`, choosing Monte Carlo or genetic search.
- `engine`: Greedy layered assignment of one roster attempt.
- `montecarlo` / `genetic`: Restart and refinement controllers around the engine.
- `editor`: Manual edits of a finished roster.

Provides high-level access to core scheduling functionality.
"""
from . import builder, editor
