from __future__ import annotations

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from event_checkin.database.bootstrap import apply_schema, list_tables
from event_checkin.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG))

    apply_schema(conn)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {conn.config.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
