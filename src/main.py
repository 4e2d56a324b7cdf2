import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from config.settings import LOG_LEVEL
from database.db import init_db, SessionLocal
from database.repository import EmployeeRepository
from processors.csv_exporter import EmployeeCSVExporter, filter_employees

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def main(argv=None):
    """Main entry point: initialise the database and optionally export employees"""
    parser = argparse.ArgumentParser(description="Payslip generator")
    parser.add_argument('--export-csv', action='store_true', help="export employees to CSV")
    parser.add_argument('--search', default='', help="filter by name, code, designation or department")
    parser.add_argument('--department', default='all', help="exact department filter")
    args = parser.parse_args(argv)

    logger.info("Initializing database...")
    init_db()

    if args.export_csv:
        db = SessionLocal()
        try:
            employees = EmployeeRepository(db).get_all_employees()
        finally:
            db.close()
        filepath = EmployeeCSVExporter().generate(
            filter_employees(employees, args.search, args.department)
        )
        print(f"Exported employees to {filepath}")

    logger.info("System initialized successfully")
    return 0

if __name__ == "__main__":
    sys.exit(main())
