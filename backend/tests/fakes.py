"""Fake Collaborators — in-process stand-ins for the Stripe and GraphHopper clients.

Invariants:
    - Same public surface as the real clients (configured, create/retrieve/expire, plan_route)
    - Every call recorded in .calls for assertions
    - Setting .error makes the next call raise it
"""

from shuttle.core.domain_types import PlanSource
from shuttle.core.route_estimate import RouteInstruction, RoutePlan
from shuttle.infrastructure.payment_client import CheckoutSession


class FakePayments:
    def __init__(self, configured: bool = True):
        self.configured = configured
        self.calls: list[tuple[str, dict]] = []
        self.error: Exception | None = None
        self._counter = 0
        self.status = "open"

    def _maybe_raise(self):
        if self.error is not None:
            err, self.error = self.error, None
            raise err

    async def create_session(self, **kwargs) -> CheckoutSession:
        self.calls.append(("create", kwargs))
        self._maybe_raise()
        self._counter += 1
        item = kwargs["line_items"][0]
        return CheckoutSession(
            session_id=f"cs_test_{self._counter:03d}",
            url=f"https://checkout.stripe.com/c/pay/cs_test_{self._counter:03d}",
            status="open",
            payment_status="unpaid",
            amount_total=item.unit_amount * item.quantity,
            currency=kwargs["currency"],
        )

    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        self.calls.append(("retrieve", {"session_id": session_id}))
        self._maybe_raise()
        return CheckoutSession(
            session_id=session_id, url=None, status=self.status,
            payment_status="paid" if self.status == "complete" else "unpaid",
        )

    async def expire_session(self, session_id: str) -> CheckoutSession:
        self.calls.append(("expire", {"session_id": session_id}))
        self._maybe_raise()
        return CheckoutSession(
            session_id=session_id, url=None, status="expired", payment_status="unpaid",
        )


class FakeRouting:
    def __init__(self, configured: bool = True):
        self.configured = configured
        self.calls: list[tuple[list, str]] = []
        self.error: Exception | None = None

    async def plan_route(self, points, profile) -> RoutePlan:
        self.calls.append((points, profile.value))
        if self.error is not None:
            raise self.error
        return RoutePlan(
            distance_m=1234.5,
            duration_s=180.0,
            instructions=[RouteInstruction("Continue onto N1", 1234.5, 180.0)],
            source=PlanSource.GRAPHHOPPER,
        )
