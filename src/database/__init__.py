from .db import engine, SessionLocal, Base, init_db
from .models import EmployeeDB
from .repository import EmployeeRepository

__all__ = [
    'engine',
    'SessionLocal',
    'Base',
    'init_db',
    'EmployeeDB',
    'EmployeeRepository'
]
