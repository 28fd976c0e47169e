"""Business logic services."""
from services.charge_calculator import ChargeCalculator
from services.rate_resolver import RateResolver
from services.movement_selector import MovementSelector
from services.audit_service import AuditService, RequestContext

__all__ = [
    "ChargeCalculator",
    "RateResolver",
    "MovementSelector",
    "AuditService",
    "RequestContext",
]
