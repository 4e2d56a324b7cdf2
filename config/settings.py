import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/payroll.db")

# Paths
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", BASE_DIR / "output"))
DATA_DIR = BASE_DIR / "data"

# Ensure directories exist
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
(OUTPUT_DIR / "payslips").mkdir(exist_ok=True)
(OUTPUT_DIR / "exports").mkdir(exist_ok=True)
DATA_DIR.mkdir(exist_ok=True)

# Application settings
DEBUG = os.getenv("DEBUG", "True").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Secret for Flask app, override in production via environment
SECRET_KEY = os.getenv("SECRET_KEY", "dev-payslip-secret")

# Payslip settings
COMPANY_ADDRESS = os.getenv(
    "COMPANY_ADDRESS", "38, 1st floor, 4th main road, Besant Nagar, Chennai"
)
CURRENCY_LABEL = "Rs."
