"""Registry of the flat record types served by the generic record service.

Proving methods are not here; they own ordered batches and have their own
service.
"""

from sqlalchemy import inspect

from taquero.models.allergen import AllergenRecord
from taquero.models.b2b_sale import B2BSale
from taquero.models.cleaning import CleaningRecord
from taquero.models.complaint import ComplaintRecord
from taquero.models.delivery import DeliveryRecord
from taquero.models.event import CaravanEvent
from taquero.models.incident import IncidentRecord
from taquero.models.maintenance import MaintenanceRecord
from taquero.models.staff import StaffMember
from taquero.models.staff_sickness import StaffSickness
from taquero.models.supplier import SupplierRecord
from taquero.models.temperature_check import (
    BatchCheck,
    CoolingBatchCheck,
    FridgeTempCheck,
    TransportTempCheck,
)
from taquero.models.traceability import TraceabilityRecord
from taquero.schemas.allergen import AllergenCreate, AllergenOut, AllergenUpdate
from taquero.schemas.b2b_sale import B2BSaleCreate, B2BSaleOut, B2BSaleUpdate
from taquero.schemas.cleaning import CleaningCreate, CleaningOut, CleaningUpdate
from taquero.schemas.complaint import ComplaintCreate, ComplaintOut, ComplaintUpdate
from taquero.schemas.delivery import DeliveryCreate, DeliveryOut, DeliveryUpdate
from taquero.schemas.event import EventCreate, EventOut, EventUpdate
from taquero.schemas.incident import IncidentCreate, IncidentOut, IncidentUpdate
from taquero.schemas.maintenance import MaintenanceCreate, MaintenanceOut, MaintenanceUpdate
from taquero.schemas.staff import (
    SicknessCreate,
    SicknessOut,
    SicknessUpdate,
    StaffCreate,
    StaffOut,
    StaffUpdate,
)
from taquero.schemas.supplier import SupplierCreate, SupplierOut, SupplierUpdate
from taquero.schemas.temperature_check import (
    BatchCheckCreate,
    BatchCheckOut,
    BatchCheckUpdate,
    CoolingCheckCreate,
    CoolingCheckOut,
    CoolingCheckUpdate,
    FridgeCheckCreate,
    FridgeCheckOut,
    FridgeCheckUpdate,
    TransportCheckCreate,
    TransportCheckOut,
    TransportCheckUpdate,
)
from taquero.schemas.traceability import TraceabilityCreate, TraceabilityOut, TraceabilityUpdate
from taquero.services.records import RecordDomain
from taquero.services.temperature import (
    classify_transport,
    delivery_warning,
    evaluate_cooling,
    is_cooking_safe,
    is_reheating_safe,
    storage_faults,
)


# ── Derived fields ──────────────────────────────────────────

def _event_year(record: CaravanEvent) -> None:
    """``year`` follows the earliest date unless the same write changes it."""
    if not record.dates:
        return
    state = inspect(record)
    rescheduled = (
        state.persistent
        and state.attrs.dates.history.has_changes()
        and not state.attrs.year.history.has_changes()
    )
    if record.year is None or rescheduled:
        record.year = int(min(record.dates)[:4])


def _transport_level(record: TransportTempCheck) -> None:
    record.temperature_level = classify_transport(record.temperature)


def _batch_safe(record: BatchCheck) -> None:
    if record.check_type == "reheating":
        record.is_safe = is_reheating_safe(record.temperature)
    else:
        record.is_safe = is_cooking_safe(record.temperature)


def _cooling_passed(record: CoolingBatchCheck) -> None:
    record.passed = evaluate_cooling(
        record.start_time,
        record.second_time_check,
        record.second_temp_check,
        record.third_time_check,
        record.third_temp_check,
        start_temp=record.start_temp,
    ).passed


def _delivery_warning(record: DeliveryRecord) -> None:
    if not record.requires_temp_check:
        record.temperature = None
        record.temperature_warning = None
    else:
        record.temperature_warning = delivery_warning(record.temperature)


def _fridge_ranges(record: FridgeTempCheck) -> None:
    record.out_of_range = storage_faults(record.chillers, record.freezer)
    record.all_in_range = not record.out_of_range


def _manufacturer_defaults(record: TraceabilityRecord) -> None:
    # Blank manufacturer means the supplier made it
    if not (record.manufacturer_name or "").strip():
        record.manufacturer_name = record.supplier_name
    if not (record.manufacturer_contact or "").strip():
        record.manufacturer_contact = record.supplier_contact


def _staff_training(record: StaffMember) -> None:
    # New staff start with no training; never lazy-load under asyncio
    if not inspect(record).persistent and "training_records" not in record.__dict__:
        record.training_records = []


# ── Domains ─────────────────────────────────────────────────

EVENTS = RecordDomain(
    name="events",
    model=CaravanEvent,
    create_schema=EventCreate,
    update_schema=EventUpdate,
    out_schema=EventOut,
    id_prefix="caravan",
    label="Event",
    title_field="name",
    derive=_event_year,
)

ALLERGENS = RecordDomain(
    name="allergens",
    model=AllergenRecord,
    create_schema=AllergenCreate,
    update_schema=AllergenUpdate,
    out_schema=AllergenOut,
    id_prefix="allergen",
    label="Allergen record",
    title_field="dish_name",
)

INCIDENTS = RecordDomain(
    name="incidents",
    model=IncidentRecord,
    create_schema=IncidentCreate,
    update_schema=IncidentUpdate,
    out_schema=IncidentOut,
    id_prefix="incident",
    label="Incident",
    title_field="what_went_wrong",
)

COMPLAINTS = RecordDomain(
    name="complaints",
    model=ComplaintRecord,
    create_schema=ComplaintCreate,
    update_schema=ComplaintUpdate,
    out_schema=ComplaintOut,
    id_prefix="complaint",
    label="Complaint",
    title_field="customer_name",
)

DELIVERIES = RecordDomain(
    name="deliveries",
    model=DeliveryRecord,
    create_schema=DeliveryCreate,
    update_schema=DeliveryUpdate,
    out_schema=DeliveryOut,
    id_prefix="delivery",
    label="Delivery",
    title_field="supplier_name",
    derive=_delivery_warning,
)

SUPPLIERS = RecordDomain(
    name="suppliers",
    model=SupplierRecord,
    create_schema=SupplierCreate,
    update_schema=SupplierUpdate,
    out_schema=SupplierOut,
    id_prefix="supplier",
    label="Supplier",
    title_field="business_name",
)

B2B_SALES = RecordDomain(
    name="b2b_sales",
    model=B2BSale,
    create_schema=B2BSaleCreate,
    update_schema=B2BSaleUpdate,
    out_schema=B2BSaleOut,
    id_prefix="b2b",
    label="B2B sale",
    title_field="business_name",
)

TRANSPORT_CHECKS = RecordDomain(
    name="transport_checks",
    model=TransportTempCheck,
    create_schema=TransportCheckCreate,
    update_schema=TransportCheckUpdate,
    out_schema=TransportCheckOut,
    id_prefix="transport",
    label="Transport check",
    title_field="type_of_food",
    derive=_transport_level,
)

BATCH_CHECKS = RecordDomain(
    name="batch_checks",
    model=BatchCheck,
    create_schema=BatchCheckCreate,
    update_schema=BatchCheckUpdate,
    out_schema=BatchCheckOut,
    id_prefix="batch",
    label="Batch check",
    title_field="food_type",
    derive=_batch_safe,
)

COOLING_CHECKS = RecordDomain(
    name="cooling_checks",
    model=CoolingBatchCheck,
    create_schema=CoolingCheckCreate,
    update_schema=CoolingCheckUpdate,
    out_schema=CoolingCheckOut,
    id_prefix="cooling",
    label="Cooling check",
    title_field="food_type",
    derive=_cooling_passed,
)

STAFF_SICKNESS = RecordDomain(
    name="staff_sickness",
    model=StaffSickness,
    create_schema=SicknessCreate,
    update_schema=SicknessUpdate,
    out_schema=SicknessOut,
    id_prefix="sickness",
    label="Sickness record",
    title_field="staff_name",
)

CLEANING = RecordDomain(
    name="cleaning",
    model=CleaningRecord,
    create_schema=CleaningCreate,
    update_schema=CleaningUpdate,
    out_schema=CleaningOut,
    id_prefix="cleaning",
    label="Cleaning record",
    title_field="cleaning_task",
)

MAINTENANCE = RecordDomain(
    name="maintenance",
    model=MaintenanceRecord,
    create_schema=MaintenanceCreate,
    update_schema=MaintenanceUpdate,
    out_schema=MaintenanceOut,
    id_prefix="maintenance",
    label="Maintenance record",
    title_field="equipment_name",
)

TRACEABILITY = RecordDomain(
    name="traceability",
    model=TraceabilityRecord,
    create_schema=TraceabilityCreate,
    update_schema=TraceabilityUpdate,
    out_schema=TraceabilityOut,
    id_prefix="trace",
    label="Traceability record",
    title_field="product_type",
    derive=_manufacturer_defaults,
)

FRIDGE_TEMPS = RecordDomain(
    name="fridge_temps",
    model=FridgeTempCheck,
    create_schema=FridgeCheckCreate,
    update_schema=FridgeCheckUpdate,
    out_schema=FridgeCheckOut,
    id_prefix="fridge",
    label="Fridge temperature check",
    title_field="check_date",
    derive=_fridge_ranges,
)

STAFF = RecordDomain(
    name="staff",
    model=StaffMember,
    create_schema=StaffCreate,
    update_schema=StaffUpdate,
    out_schema=StaffOut,
    id_prefix="staff",
    label="Staff member",
    title_field="name",
    sheet="staff_training",
    actions={"create": "addStaff", "update": "updateStaff", "delete": "deleteStaff"},
    form_encoded=True,
    derive=_staff_training,
)

DOMAINS: dict[str, RecordDomain] = {
    d.name: d
    for d in (
        EVENTS,
        ALLERGENS,
        INCIDENTS,
        COMPLAINTS,
        DELIVERIES,
        SUPPLIERS,
        B2B_SALES,
        TRANSPORT_CHECKS,
        BATCH_CHECKS,
        COOLING_CHECKS,
        STAFF_SICKNESS,
        CLEANING,
        MAINTENANCE,
        TRACEABILITY,
        FRIDGE_TEMPS,
        STAFF,
    )
}
