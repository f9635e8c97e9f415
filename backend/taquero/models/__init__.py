"""Aggregate model imports for Alembic auto-detection."""

# Food safety records
from taquero.models.allergen import AllergenRecord  # noqa: F401
from taquero.models.b2b_sale import B2BSale  # noqa: F401
from taquero.models.cleaning import CleaningRecord  # noqa: F401
from taquero.models.complaint import ComplaintRecord  # noqa: F401
from taquero.models.delivery import DeliveryRecord  # noqa: F401
from taquero.models.incident import IncidentRecord  # noqa: F401
from taquero.models.maintenance import MaintenanceRecord  # noqa: F401
from taquero.models.staff_sickness import StaffSickness  # noqa: F401
from taquero.models.supplier import SupplierRecord  # noqa: F401
from taquero.models.temperature_check import (  # noqa: F401
    BatchCheck,
    CoolingBatchCheck,
    FridgeTempCheck,
    TransportTempCheck,
)
from taquero.models.traceability import TraceabilityRecord  # noqa: F401

# Owned sub-records
from taquero.models.proving import ProvingBatch, ProvingMethod  # noqa: F401
from taquero.models.staff import StaffMember, TrainingRecord  # noqa: F401

# Business
from taquero.models.event import CaravanEvent  # noqa: F401
from taquero.models.finance import FinanceMonth, PayeeClassification  # noqa: F401

# Bookkeeping
from taquero.models.activity_log import ActivityLog  # noqa: F401
from taquero.models.wizard_state import WizardState  # noqa: F401
