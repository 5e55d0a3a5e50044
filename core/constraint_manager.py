from typing import Callable, List


class ConstraintManager:
    """
    Ordered set of candidate filter rules.

    A rule takes a `CandidateProbe` and returns True when the candidate may take the slot.
    Relaxable rules are skipped when the probe is in desperate mode.
    """

    def __init__(self):
        self.rules: List[Callable] = []
        self.relaxable_rules: List[Callable] = []

    def add_rule(self, rule_func: Callable, condition: bool = True, relaxable: bool = False):
        """Register a rule with optional enablement condition."""
        if not condition:
            return
        if relaxable:
            self.relaxable_rules.append(rule_func)
        else:
            self.rules.append(rule_func)

    def admits(self, probe) -> bool:
        """Apply all registered rules in order; stop at the first rejection."""
        for rule in self.rules:
            if not rule(probe):
                return False
        if probe.desperate:
            return True
        for rule in self.relaxable_rules:
            if not rule(probe):
                return False
        return True

    @property
    def rule_names(self) -> List[str]:
        return [r.__name__ for r in self.rules + self.relaxable_rules]
