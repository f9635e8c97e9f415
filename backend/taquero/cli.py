"""Management CLI.

Usage:
    python -m taquero.cli init-db                    # Create tables (dev shortcut for Alembic)
    python -m taquero.cli list-staff                 # Show names allowed to log in
    python -m taquero.cli pull <domain>|all          # Refresh from Google Sheets
    python -m taquero.cli import-finance a.csv ...   # Import POS/bank CSV exports
"""

import asyncio
import sys
from pathlib import Path

from taquero.config import settings
from taquero.database import async_session, create_all
from taquero.finance import storage
from taquero.finance.data import ImportedData
from taquero.finance.importer import overlay, parse_uploads
from taquero.services.domains import DOMAINS
from taquero.services.proving import PROVING_KINDS, ProvingService
from taquero.services.records import RecordService
from taquero.services.scheduler import refresh_all
from taquero.services.sheets import SheetsClient


def init_db():
    asyncio.run(create_all())
    print("Tables created.")


def list_staff():
    names = settings.staff_name_list
    for name in names:
        print(f"  {name}")
    print(f"\n{len(names)} staff member(s)")


async def _pull(target: str):
    if target == "all":
        for name, outcome in (await refresh_all()).items():
            print(f"  {name}: {outcome}")
        return

    sheets = SheetsClient()
    async with async_session() as db:
        if target in DOMAINS:
            result = await RecordService(db, None, sheets).refresh(DOMAINS[target])
        elif target.removeprefix("proving_") in PROVING_KINDS:
            result = await ProvingService(db, None, sheets).refresh(target.removeprefix("proving_"))
        else:
            known = ", ".join([*DOMAINS, *(f"proving_{k}" for k in PROVING_KINDS)])
            print(f"Unknown domain '{target}'. Known: {known}")
            return
        await db.commit()

    if result.error:
        print(f"  FAILED: {result.error}")
    else:
        print(f"  {result.fetched} fetched: {result.created} new, "
              f"{result.updated} updated, {result.skipped} skipped")


async def _import_finance(paths: list[str]):
    files = [(Path(p).name, Path(p).read_text(encoding="utf-8-sig")) for p in paths]
    outcome = parse_uploads(files)
    for error in outcome.errors:
        print(f"  {error}")
    if not outcome.processed:
        print("Nothing imported.")
        return

    async with async_session() as db:
        month = storage.detect_month(outcome.data)
        existing = await storage.get_month(db, month)
        base = ImportedData.from_dict(existing.data) if existing else ImportedData()
        await storage.save_month(db, month, overlay(base, outcome), uploaded_by="cli")
        await db.commit()
    print(f"Imported {', '.join(outcome.processed)} into {month}")


if __name__ == "__main__":
    cmd = sys.argv[1] if len(sys.argv) > 1 else ""
    args = sys.argv[2:]
    if cmd == "init-db":
        init_db()
    elif cmd == "list-staff":
        list_staff()
    elif cmd == "pull" and len(args) == 1:
        asyncio.run(_pull(args[0]))
    elif cmd == "import-finance" and args:
        asyncio.run(_import_finance(args))
    else:
        print("Usage: python -m taquero.cli [init-db|list-staff|pull <domain>|import-finance <file.csv>...]")
