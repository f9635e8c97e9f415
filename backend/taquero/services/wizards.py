"""Step-by-step record entry with save/resume.

Design:
  - A wizard is an ordered list of steps; each step names the fields it
    collects and which of them must be filled before "Next" is allowed.
  - Progress (current step, completed steps, draft fields) is stored per
    wizard and staff member, so a half-finished form survives a reload.
  - Completing step N requires steps 1..N-1 to be complete already.
  - Submitting turns the merged draft into the domain's create schema and
    saves it through the same service as the plain CRUD endpoint.
"""

from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taquero.middleware.exceptions import BusinessLogicError, ResourceNotFoundError, WizardStepError
from taquero.models.wizard_state import WizardState
from taquero.schemas.wizard import WizardOut, WizardProgress, WizardStepOut


@dataclass
class WizardStep:
    title: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    # field -> (other field, value): required only when other field == value
    required_when: dict[str, tuple[str, object]] = field(default_factory=dict)

    @property
    def fields(self) -> set[str]:
        return set(self.required) | set(self.optional) | set(self.required_when)


@dataclass
class WizardDefinition:
    name: str
    title: str
    domain: str
    steps: list[WizardStep]

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def step(self, number: int) -> WizardStep:
        if number < 1 or number > self.total_steps:
            raise ResourceNotFoundError(f"Step of wizard '{self.name}'", str(number))
        return self.steps[number - 1]


WIZARDS: dict[str, WizardDefinition] = {
    w.name: w
    for w in (
        WizardDefinition("allergen", "Add allergen record", "allergens", [
            WizardStep("Dish", required=("dish_name",)),
            WizardStep("Ingredients", required=("ingredients",)),
            WizardStep("Allergens", optional=("allergens",)),
        ]),
        WizardDefinition("incident", "Something went wrong", "incidents", [
            WizardStep(
                "Who and when",
                required=("person_responsible", "incident_date"),
                optional=("staff_involved", "category", "severity"),
            ),
            WizardStep("What went wrong", required=("what_went_wrong",)),
            WizardStep("What you did to fix it", required=("what_did_to_fix",)),
            WizardStep(
                "Preventing it next time",
                required=("preventive_action",),
                optional=("incident_status", "follow_up_date", "notes"),
            ),
        ]),
        WizardDefinition("complaint", "Customer complaint", "complaints", [
            WizardStep("Customer", required=("customer_name", "customer_contact")),
            WizardStep(
                "Purchase",
                required=("purchase_date", "purchase_time", "food_item"),
                optional=("batch_lot_number",),
            ),
            WizardStep("Complaint", required=("complaint_description", "complaint_type")),
            WizardStep(
                "Investigation",
                required=("cause_investigation",),
                optional=("action_taken_immediate",),
            ),
            WizardStep("Preventive action", required=("action_taken_preventive",)),
            WizardStep(
                "Resolution",
                required=("resolved_by",),
                optional=("resolution_date", "complaint_status", "linked_incident_id", "notes"),
            ),
        ]),
        WizardDefinition("delivery", "Goods received", "deliveries", [
            WizardStep("Supplier", required=("supplier_name", "supplier_contact")),
            WizardStep(
                "Goods",
                required=("delivery_date", "type_of_food", "quantity"),
                optional=("unit", "batch_lot_id"),
            ),
            WizardStep(
                "Temperature",
                required=("requires_temp_check",),
                required_when={"temperature": ("requires_temp_check", True)},
            ),
            WizardStep("Sign off", required=("task_done_by",), optional=("notes",)),
        ]),
        WizardDefinition("supplier", "Add supplier", "suppliers", [
            WizardStep(
                "Business",
                required=("business_name",),
                optional=("site_registration_number",),
            ),
            WizardStep(
                "Contact",
                required=("contact_person", "phone"),
                optional=("email", "address"),
            ),
            WizardStep(
                "Ordering",
                optional=("order_days", "delivery_days", "custom_arrangement"),
            ),
            WizardStep("Goods", required=("goods_supplied",), optional=("comments",)),
        ]),
        WizardDefinition("b2b_sale", "Business sale", "b2b_sales", [
            WizardStep("Business", required=("business_name",), optional=("contact_details",)),
            WizardStep(
                "Product",
                required=("product_supplied", "quantity", "date_supplied"),
                optional=("unit",),
            ),
            WizardStep("Sign off", required=("task_done_by",), optional=("notes",)),
        ]),
        WizardDefinition("transport_check", "Transport temperature check", "transport_checks", [
            WizardStep("Food", required=("check_date", "type_of_food")),
            WizardStep("Temperature", required=("temperature",)),
            WizardStep("Sign off", required=("task_done_by",), optional=("notes",)),
        ]),
        WizardDefinition("batch_check", "Cooking batch check", "batch_checks", [
            WizardStep("Food", required=("food_type", "check_date"), optional=("check_type",)),
            WizardStep(
                "Temperature",
                required=("temperature",),
                optional=("check_time", "time_at_temp"),
            ),
            WizardStep("Sign off", required=("completed_by",), optional=("notes",)),
        ]),
        WizardDefinition("cooling_check", "Cooling batch check", "cooling_checks", [
            WizardStep("Food", required=("food_type", "date_cooked")),
            WizardStep("Start", required=("start_time",), optional=("start_temp",)),
            WizardStep(
                "Readings",
                optional=(
                    "second_time_check",
                    "second_temp_check",
                    "third_time_check",
                    "third_temp_check",
                    "cooling_method",
                ),
            ),
            WizardStep("Sign off", required=("completed_by",)),
        ]),
        WizardDefinition("staff_sickness", "Staff sickness", "staff_sickness", [
            WizardStep("Who", required=("staff_name", "date_sick")),
            WizardStep("Symptoms", required=("symptoms",)),
            WizardStep(
                "Action",
                required=("checked_by",),
                optional=("action_taken", "date_returned", "sickness_status"),
            ),
        ]),
        WizardDefinition("cleaning", "Cleaning record", "cleaning", [
            WizardStep("Task", required=("cleaning_task", "date_completed")),
            WizardStep("Method", optional=("cleaning_method",)),
            WizardStep("Sign off", required=("completed_by",), optional=("notes",)),
        ]),
        WizardDefinition("maintenance", "Equipment maintenance", "maintenance", [
            WizardStep("Equipment", required=("equipment_name", "maintenance_description")),
            WizardStep(
                "Done by",
                required=("date_completed", "performed_by"),
                optional=("checking_frequency", "notes"),
            ),
        ]),
        WizardDefinition("traceability", "Trace your food", "traceability", [
            WizardStep(
                "Product",
                required=("trace_date", "product_type", "brand", "batch_lot_info"),
            ),
            WizardStep(
                "Supplier and manufacturer",
                required=("supplier_name", "supplier_contact"),
                optional=("manufacturer_name", "manufacturer_contact"),
            ),
            WizardStep(
                "Details",
                required=("performed_by",),
                optional=("date_received", "other_info"),
            ),
        ]),
        WizardDefinition("fridge_temps", "Fridge and freezer temperatures", "fridge_temps", [
            WizardStep("Date", required=("check_date", "checked_by")),
            WizardStep("Chillers", required=("chillers",)),
            WizardStep("Freezer", required=("freezer",), optional=("notes",)),
        ]),
        WizardDefinition("event", "Caravan event", "events", [
            WizardStep("Event", required=("name", "event_type")),
            WizardStep("Dates", required=("dates",), optional=("year", "location")),
            WizardStep(
                "Organizer",
                optional=("organizer_name", "organizer_email", "organizer_phone", "website_url"),
            ),
            WizardStep(
                "Money and logistics",
                optional=(
                    "event_status",
                    "fee_amount",
                    "fee_paid",
                    "power_available",
                    "generator_needed",
                    "expected_revenue",
                    "actual_revenue",
                    "notes",
                ),
            ),
        ]),
    )
}


def get_wizard(name: str) -> WizardDefinition:
    wizard = WIZARDS.get(name)
    if wizard is None:
        raise ResourceNotFoundError("Wizard", name)
    return wizard


def describe(wizard: WizardDefinition) -> WizardOut:
    return WizardOut(
        name=wizard.name,
        title=wizard.title,
        domain=wizard.domain,
        steps=[
            WizardStepOut(
                number=i,
                title=s.title,
                required=list(s.required),
                optional=sorted(set(s.optional) | set(s.required_when)),
            )
            for i, s in enumerate(wizard.steps, start=1)
        ],
    )


def is_filled(value) -> bool:
    """Blank strings and empty lists do not count; False and 0 do."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def missing_fields(step: WizardStep, data: dict) -> list[str]:
    missing = [f for f in step.required if not is_filled(data.get(f))]
    for f, (other, expected) in step.required_when.items():
        if data.get(other) == expected and not is_filled(data.get(f)):
            missing.append(f)
    return missing


# ── Progress ────────────────────────────────────────────────

async def get_or_create_state(db: AsyncSession, wizard: WizardDefinition, user_name: str) -> WizardState:
    result = await db.execute(
        select(WizardState).where(
            WizardState.wizard == wizard.name,
            WizardState.user_name == user_name,
        )
    )
    state = result.scalar_one_or_none()
    if not state:
        state = WizardState(
            wizard=wizard.name,
            user_name=user_name,
            current_step=1,
            completed_steps=[],
            draft_data={},
        )
        db.add(state)
        await db.flush()
    return state


def make_progress(wizard: WizardDefinition, state: WizardState) -> WizardProgress:
    completed = sorted(state.completed_steps or [])
    return WizardProgress(
        wizard=wizard.name,
        current_step=state.current_step,
        completed_steps=completed,
        total_steps=wizard.total_steps,
        is_complete=len(completed) == wizard.total_steps,
        draft_data=state.draft_data or {},
    )


def check_prerequisites(wizard: WizardDefinition, step: int, completed: list[int]) -> None:
    missing = [s for s in range(1, step) if s not in completed]
    if missing:
        names = [f"Step {s} ({wizard.steps[s - 1].title})" for s in missing]
        raise WizardStepError(f"Complete these first: {', '.join(names)}")


async def save_step(
    db: AsyncSession,
    wizard: WizardDefinition,
    state: WizardState,
    step: int,
    data: dict,
    complete: bool,
) -> WizardProgress:
    """Merge ``data`` into the draft; with ``complete`` also validate the step."""
    definition = wizard.step(step)
    unknown = sorted(set(data) - definition.fields)
    if unknown:
        raise BusinessLogicError(
            f"Step {step} does not collect: {', '.join(unknown)}",
            error_code="WIZARD_UNKNOWN_FIELDS",
            details={"fields": unknown},
        )

    draft = dict(state.draft_data or {})
    draft.update(data)

    if complete:
        check_prerequisites(wizard, step, state.completed_steps or [])
        missing = missing_fields(definition, draft)
        if missing:
            raise WizardStepError(
                f"Step {step} ({definition.title}) is missing: {', '.join(missing)}",
                missing=missing,
            )
        if step not in (state.completed_steps or []):
            state.completed_steps = (state.completed_steps or []) + [step]
        state.current_step = min(step + 1, wizard.total_steps)
    else:
        # Blanking a required field reopens this step and everything after it
        if missing_fields(definition, draft):
            state.completed_steps = [s for s in (state.completed_steps or []) if s < step]
        state.current_step = step

    # Assign a new dict so the JSON column change is detected
    state.draft_data = draft
    await db.flush()
    return make_progress(wizard, state)


def ready_to_submit(wizard: WizardDefinition, state: WizardState) -> dict:
    """Return the merged draft once every step is complete."""
    completed = state.completed_steps or []
    missing_steps = [s for s in range(1, wizard.total_steps + 1) if s not in completed]
    if missing_steps:
        names = [f"Step {s} ({wizard.steps[s - 1].title})" for s in missing_steps]
        raise WizardStepError(f"Complete these first: {', '.join(names)}")

    draft = dict(state.draft_data or {})
    missing = [f for s in wizard.steps for f in missing_fields(s, draft)]
    if missing:
        raise WizardStepError(f"Required fields are empty: {', '.join(missing)}", missing=missing)
    return draft


async def discard(db: AsyncSession, state: WizardState) -> None:
    await db.delete(state)
    await db.flush()
