"""Per-account stake records."""

from dataclasses import dataclass

from .integrator import YieldIntegrator


@dataclass(frozen=True)
class AccountStake:
    """A live position: principal deposited (or compounded) at t0."""
    principal: int
    t0: int  # Seconds

    def interest(self, integrator: YieldIntegrator, t: int) -> int:
        return integrator.interest(self.principal, self.t0, t)

    def value(self, integrator: YieldIntegrator, t: int) -> int:
        """
        Withdrawable amount at time t.

        Formula: principal * (1 + C(t) - C(t0)), interest floored.
        """
        return integrator.accrued_value(self.principal, self.t0, t)
