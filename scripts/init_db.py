from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.academy_attendance.academy_attendance.database.bootstrap import apply_schema, list_tables, missing_tables

logger = logging.getLogger("init_db")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    missing = missing_tables(list_tables(db_config))
    if missing:
        logger.error("schema applied but tables are missing: %s", ", ".join(missing))
        return 1

    logger.info("schema ready on %s/%s", db_config.get("host"), db_config.get("database"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
