"""Initial schema: record stores, proving, staff, finance, bookkeeping.

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-19

Run with:
    alembic upgrade head
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def _record_columns() -> list[sa.Column]:
    """Audit, soft-delete and sync columns every synced record carries."""
    return [
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime()),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("synced_at", sa.DateTime()),
        sa.Column("sync_error", sa.Text()),
    ]


def _record_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])
    op.create_index(f"ix_{table}_status", table, ["status"])


RECORD_TABLES = (
    "caravan_events",
    "allergen_records",
    "incident_records",
    "complaint_records",
    "delivery_records",
    "supplier_records",
    "b2b_sales",
    "transport_temp_checks",
    "batch_checks",
    "cooling_batch_checks",
    "staff_sickness",
    "cleaning_records",
    "maintenance_records",
    "traceability_records",
    "fridge_temp_checks",
    "staff_members",
    "proving_methods",
)


def upgrade() -> None:
    # ── Business ─────────────────────────────────────────────

    op.create_table(
        "caravan_events",
        *_record_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("event_type", sa.String(20), server_default="festival"),
        sa.Column("event_status", sa.String(30), server_default="discovered"),
        sa.Column("dates", sa.JSON()),
        sa.Column("year", sa.Integer()),
        sa.Column("location", sa.String(255)),
        sa.Column("organizer_name", sa.String(255)),
        sa.Column("organizer_email", sa.String(255)),
        sa.Column("organizer_phone", sa.String(50)),
        sa.Column("website_url", sa.String(500)),
        sa.Column("fee_amount", sa.Float()),
        sa.Column("fee_paid", sa.Boolean(), server_default="false"),
        sa.Column("power_available", sa.Boolean(), server_default="false"),
        sa.Column("generator_needed", sa.Boolean(), server_default="false"),
        sa.Column("expected_revenue", sa.Float()),
        sa.Column("actual_revenue", sa.Float()),
        sa.Column("notes", sa.Text()),
    )
    op.create_index("ix_caravan_events_event_status", "caravan_events", ["event_status"])
    op.create_index("ix_caravan_events_year", "caravan_events", ["year"])

    op.create_table(
        "b2b_sales",
        *_record_columns(),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("contact_details", sa.String(255)),
        sa.Column("product_supplied", sa.String(255), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(20), server_default="kg"),
        sa.Column("date_supplied", sa.String(10), nullable=False),
        sa.Column("task_done_by", sa.String(100), nullable=False),
        sa.Column("notes", sa.Text()),
    )

    op.create_table(
        "finance_months",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("month", sa.String(7), nullable=False, unique=True),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("uploaded_by", sa.String(100)),
        sa.Column("uploaded_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "payee_classifications",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("payee", sa.String(255), nullable=False, unique=True),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("user_correction", sa.String(50)),
        sa.Column("confidence", sa.String(10)),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )

    # ── Food safety records ──────────────────────────────────

    op.create_table(
        "allergen_records",
        *_record_columns(),
        sa.Column("dish_name", sa.String(255), nullable=False),
        sa.Column("ingredients", sa.Text(), nullable=False),
        sa.Column("allergens", sa.JSON()),
    )

    op.create_table(
        "incident_records",
        *_record_columns(),
        sa.Column("incident_date", sa.String(10), nullable=False),
        sa.Column("person_responsible", sa.String(100), nullable=False),
        sa.Column("staff_involved", sa.String(255)),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("what_went_wrong", sa.Text(), nullable=False),
        sa.Column("what_did_to_fix", sa.Text(), nullable=False),
        sa.Column("preventive_action", sa.Text()),
        sa.Column("severity", sa.String(10), server_default="minor"),
        sa.Column("incident_status", sa.String(20), server_default="open"),
        sa.Column("follow_up_date", sa.String(10)),
        sa.Column("notes", sa.Text()),
    )
    op.create_index("ix_incident_records_incident_status", "incident_records", ["incident_status"])

    op.create_table(
        "complaint_records",
        *_record_columns(),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("customer_contact", sa.String(255)),
        sa.Column("purchase_date", sa.String(10), nullable=False),
        sa.Column("purchase_time", sa.String(5)),
        sa.Column("food_item", sa.String(255), nullable=False),
        sa.Column("batch_lot_number", sa.String(100)),
        sa.Column("complaint_description", sa.Text(), nullable=False),
        sa.Column("complaint_type", sa.String(30), nullable=False),
        sa.Column("cause_investigation", sa.Text()),
        sa.Column("action_taken_immediate", sa.Text()),
        sa.Column("action_taken_preventive", sa.Text()),
        sa.Column("resolved_by", sa.String(100)),
        sa.Column("resolution_date", sa.String(10)),
        sa.Column("complaint_status", sa.String(20), server_default="open"),
        sa.Column("linked_incident_id", sa.String(64)),
        sa.Column("notes", sa.Text()),
    )
    op.create_index("ix_complaint_records_complaint_status", "complaint_records", ["complaint_status"])

    op.create_table(
        "delivery_records",
        *_record_columns(),
        sa.Column("delivery_date", sa.String(10), nullable=False),
        sa.Column("supplier_name", sa.String(255), nullable=False),
        sa.Column("supplier_contact", sa.String(255)),
        sa.Column("batch_lot_id", sa.String(100)),
        sa.Column("type_of_food", sa.String(255), nullable=False),
        sa.Column("quantity", sa.Float()),
        sa.Column("unit", sa.String(20)),
        sa.Column("requires_temp_check", sa.Boolean(), server_default="false"),
        sa.Column("temperature", sa.Float()),
        sa.Column("temperature_warning", sa.String(255)),
        sa.Column("task_done_by", sa.String(100), nullable=False),
        sa.Column("notes", sa.Text()),
    )

    op.create_table(
        "supplier_records",
        *_record_columns(),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("site_registration_number", sa.String(100)),
        sa.Column("contact_person", sa.String(255)),
        sa.Column("phone", sa.String(50)),
        sa.Column("email", sa.String(255)),
        sa.Column("address", sa.Text()),
        sa.Column("order_days", sa.JSON()),
        sa.Column("delivery_days", sa.JSON()),
        sa.Column("custom_arrangement", sa.Text()),
        sa.Column("goods_supplied", sa.Text()),
        sa.Column("comments", sa.Text()),
    )
    op.create_index("ix_supplier_records_business_name", "supplier_records", ["business_name"])

    op.create_table(
        "transport_temp_checks",
        *_record_columns(),
        sa.Column("check_date", sa.String(10), nullable=False),
        sa.Column("type_of_food", sa.String(255), nullable=False),
        sa.Column("temperature", sa.Float(), nullable=False),
        sa.Column("temperature_level", sa.String(20), nullable=False),
        sa.Column("task_done_by", sa.String(100), nullable=False),
        sa.Column("notes", sa.Text()),
    )

    op.create_table(
        "batch_checks",
        *_record_columns(),
        sa.Column("check_date", sa.String(10), nullable=False),
        sa.Column("check_time", sa.String(5)),
        sa.Column("food_type", sa.String(100), nullable=False),
        sa.Column("check_type", sa.String(20), server_default="cooking"),
        sa.Column("temperature", sa.Float(), nullable=False),
        sa.Column("time_at_temp", sa.String(50)),
        sa.Column("is_safe", sa.Boolean(), nullable=False),
        sa.Column("completed_by", sa.String(100), nullable=False),
        sa.Column("notes", sa.Text()),
    )

    op.create_table(
        "cooling_batch_checks",
        *_record_columns(),
        sa.Column("food_type", sa.String(100), nullable=False),
        sa.Column("date_cooked", sa.String(10), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("start_temp", sa.Float(), server_default="60"),
        sa.Column("second_time_check", sa.String(5)),
        sa.Column("second_temp_check", sa.Float()),
        sa.Column("third_time_check", sa.String(5)),
        sa.Column("third_temp_check", sa.Float()),
        sa.Column("cooling_method", sa.String(100)),
        sa.Column("passed", sa.Boolean()),
        sa.Column("completed_by", sa.String(100), nullable=False),
    )

    op.create_table(
        "staff_sickness",
        *_record_columns(),
        sa.Column("staff_name", sa.String(100), nullable=False),
        sa.Column("symptoms", sa.Text(), nullable=False),
        sa.Column("date_sick", sa.String(10), nullable=False),
        sa.Column("date_returned", sa.String(10)),
        sa.Column("action_taken", sa.Text()),
        sa.Column("checked_by", sa.String(100), nullable=False),
        sa.Column("sickness_status", sa.String(20), server_default="sick"),
    )
    op.create_index("ix_staff_sickness_staff_name", "staff_sickness", ["staff_name"])
    op.create_index("ix_staff_sickness_sickness_status", "staff_sickness", ["sickness_status"])

    op.create_table(
        "cleaning_records",
        *_record_columns(),
        sa.Column("cleaning_task", sa.String(255), nullable=False),
        sa.Column("date_completed", sa.String(10), nullable=False),
        sa.Column("cleaning_method", sa.Text()),
        sa.Column("completed_by", sa.String(100), nullable=False),
        sa.Column("notes", sa.Text()),
    )

    op.create_table(
        "maintenance_records",
        *_record_columns(),
        sa.Column("equipment_name", sa.String(255), nullable=False),
        sa.Column("date_completed", sa.String(10), nullable=False),
        sa.Column("performed_by", sa.String(100), nullable=False),
        sa.Column("maintenance_description", sa.Text(), nullable=False),
        sa.Column("checking_frequency", sa.String(100)),
        sa.Column("notes", sa.Text()),
    )

    op.create_table(
        "traceability_records",
        *_record_columns(),
        sa.Column("trace_date", sa.String(10), nullable=False),
        sa.Column("product_type", sa.String(255), nullable=False),
        sa.Column("brand", sa.String(255), nullable=False),
        sa.Column("batch_lot_info", sa.String(255), nullable=False),
        sa.Column("supplier_name", sa.String(255), nullable=False),
        sa.Column("supplier_contact", sa.String(255), nullable=False),
        sa.Column("manufacturer_name", sa.String(255), nullable=False),
        sa.Column("manufacturer_contact", sa.String(255), nullable=False),
        sa.Column("date_received", sa.String(10)),
        sa.Column("performed_by", sa.String(100), nullable=False),
        sa.Column("other_info", sa.Text()),
    )
    op.create_index("ix_traceability_records_trace_date", "traceability_records", ["trace_date"])

    op.create_table(
        "fridge_temp_checks",
        *_record_columns(),
        sa.Column("check_date", sa.String(10), nullable=False),
        sa.Column("chillers", sa.JSON(), nullable=False),
        sa.Column("freezer", sa.Float(), nullable=False),
        sa.Column("out_of_range", sa.JSON()),
        sa.Column("all_in_range", sa.Boolean(), nullable=False),
        sa.Column("checked_by", sa.String(100), nullable=False),
        sa.Column("notes", sa.Text()),
    )
    op.create_index("ix_fridge_temp_checks_check_date", "fridge_temp_checks", ["check_date"])

    # ── Owned sub-records ────────────────────────────────────

    op.create_table(
        "staff_members",
        *_record_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(100)),
        sa.Column("start_date", sa.String(10)),
        sa.Column("notes", sa.Text()),
    )
    op.create_index("ix_staff_members_name", "staff_members", ["name"])

    op.create_table(
        "training_records",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "staff_id", sa.String(64),
            sa.ForeignKey("staff_members.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("training_type", sa.String(255), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("trainer", sa.String(100)),
        sa.Column("notes", sa.Text()),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime()),
    )
    op.create_index("ix_training_records_staff_id", "training_records", ["staff_id"])

    op.create_table(
        "proving_methods",
        *_record_columns(),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("item_description", sa.String(255), nullable=False),
        sa.Column("process_description", sa.Text(), nullable=False),
        sa.Column("method_status", sa.String(20), nullable=False, server_default="in-progress"),
        sa.Column("proven_at", sa.DateTime()),
    )
    op.create_index("ix_proving_methods_kind", "proving_methods", ["kind"])
    op.create_index("ix_proving_methods_method_status", "proving_methods", ["method_status"])

    op.create_table(
        "proving_batches",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "method_id", sa.String(64),
            sa.ForeignKey("proving_methods.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("batch_number", sa.Integer(), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("temperature", sa.Float()),
        sa.Column("time_at_temp", sa.String(50)),
        sa.Column("start_time", sa.String(5)),
        sa.Column("start_temp", sa.Float()),
        sa.Column("second_time", sa.String(5)),
        sa.Column("second_temp", sa.Float()),
        sa.Column("third_time", sa.String(5)),
        sa.Column("third_temp", sa.Float()),
        sa.Column("completed_by", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_proving_batches_method_id", "proving_batches", ["method_id"])

    for table in RECORD_TABLES:
        _record_indexes(table)

    # ── Bookkeeping ──────────────────────────────────────────

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.String(64)),
        sa.Column("summary", sa.Text()),
        sa.Column("details", sa.JSON()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_activity_logs_user_name", "activity_logs", ["user_name"])
    op.create_index("ix_activity_logs_action", "activity_logs", ["action"])
    op.create_index("ix_activity_logs_entity_type", "activity_logs", ["entity_type"])
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"])

    op.create_table(
        "wizard_state",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("wizard", sa.String(50), nullable=False),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("current_step", sa.Integer(), server_default="1"),
        sa.Column("completed_steps", sa.JSON()),
        sa.Column("draft_data", sa.JSON()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint("wizard", "user_name"),
    )


def downgrade() -> None:
    op.drop_table("wizard_state")
    op.drop_table("activity_logs")
    op.drop_table("proving_batches")
    op.drop_table("proving_methods")
    op.drop_table("training_records")
    op.drop_table("staff_members")
    for table in (
        "fridge_temp_checks",
        "traceability_records",
        "maintenance_records",
        "cleaning_records",
        "staff_sickness",
        "cooling_batch_checks",
        "batch_checks",
        "transport_temp_checks",
        "supplier_records",
        "delivery_records",
        "complaint_records",
        "incident_records",
        "allergen_records",
        "payee_classifications",
        "finance_months",
        "b2b_sales",
        "caravan_events",
    ):
        op.drop_table(table)
