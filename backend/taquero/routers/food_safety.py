"""Food-safety record routers (one per record type, same endpoints each).

Mounted at:
    /api/allergens  /api/incidents  /api/complaints  /api/deliveries
    /api/suppliers  /api/b2b-sales  /api/transport-checks  /api/batch-checks
    /api/cooling-checks  /api/staff-sickness  /api/cleaning  /api/maintenance
    /api/traceability  /api/fridge-temps
"""

from taquero.routers.records import build_record_router
from taquero.services.domains import (
    ALLERGENS,
    B2B_SALES,
    BATCH_CHECKS,
    CLEANING,
    COMPLAINTS,
    COOLING_CHECKS,
    DELIVERIES,
    FRIDGE_TEMPS,
    INCIDENTS,
    MAINTENANCE,
    STAFF_SICKNESS,
    SUPPLIERS,
    TRACEABILITY,
    TRANSPORT_CHECKS,
)

# url prefix -> router
ROUTERS = {
    "/api/allergens": build_record_router(ALLERGENS),
    "/api/incidents": build_record_router(INCIDENTS),
    "/api/complaints": build_record_router(COMPLAINTS),
    "/api/deliveries": build_record_router(DELIVERIES),
    "/api/suppliers": build_record_router(SUPPLIERS),
    "/api/b2b-sales": build_record_router(B2B_SALES),
    "/api/transport-checks": build_record_router(TRANSPORT_CHECKS),
    "/api/batch-checks": build_record_router(BATCH_CHECKS),
    "/api/cooling-checks": build_record_router(COOLING_CHECKS),
    "/api/staff-sickness": build_record_router(STAFF_SICKNESS),
    "/api/cleaning": build_record_router(CLEANING),
    "/api/maintenance": build_record_router(MAINTENANCE),
    "/api/traceability": build_record_router(TRACEABILITY),
    "/api/fridge-temps": build_record_router(FRIDGE_TEMPS),
}
