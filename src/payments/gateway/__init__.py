"""Payment service port and adapters.

- PaymentService: the interface the ordering workflow is built against
- FakePaymentService: configurable adapter for development and testing
"""

from payments.gateway.fake_adapter import FakePaymentService
from payments.gateway.port import PaymentService

__all__ = ["FakePaymentService", "PaymentService"]
