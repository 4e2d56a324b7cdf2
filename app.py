from flask import Flask, request, jsonify, send_file, Response
from pathlib import Path
import sys, os
import logging
from datetime import datetime

sys.path.insert(0, str(Path(__file__).parent / 'src'))

from processors.csv_exporter import EmployeeCSVExporter, filter_employees, list_departments
from processors.payslip_document import PayslipSession
from processors.payslip_generator import PayslipGenerator
from models.payroll import AttendanceInput
from utils.validators import MONTHS
from database.db import init_db, SessionLocal
from database.repository import EmployeeRepository
from config.settings import SECRET_KEY, LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = SECRET_KEY
app.config['DEBUG'] = os.getenv('DEBUG', 'False').lower() == 'true'

init_db()


def load_employees():
    """Fetch all employees from the persistence layer"""
    db = SessionLocal()
    try:
        return EmployeeRepository(db).get_all_employees()
    finally:
        db.close()


def build_session(data):
    """Replay a payslip request into a fresh generation session"""
    if not isinstance(data, dict):
        return None, ('Request body must be a JSON object', 400)
    for key in ('attendance', 'deductions', 'edits'):
        if not isinstance(data.get(key) or {}, dict):
            return None, (f'{key} must be an object', 400)

    employee_id = data.get('employee_id')
    if not employee_id:
        return None, ('No employee selected', 400)

    db = SessionLocal()
    try:
        employee = EmployeeRepository(db).get_employee(employee_id)
    finally:
        db.close()
    if employee is None:
        return None, (f'Employee {employee_id} not found', 404)

    session = PayslipSession()
    session.select_employee(employee)
    try:
        session.set_period(data.get('month', MONTHS[datetime.now().month - 1]),
                           data.get('year', datetime.now().year))
    except ValueError as e:
        return None, (str(e), 400)
    session.set_attendance(AttendanceInput.from_mapping(data.get('attendance') or {}))
    for name, value in (data.get('deductions') or {}).items():
        try:
            session.set_deduction_input(name, value)
        except KeyError as e:
            return None, (str(e), 400)

    document = session.generate()
    if data.get('edits'):
        document.set_editing(True)
        for name, value in data['edits'].items():
            try:
                document.set_field(name, value)
            except KeyError as e:
                return None, (str(e), 400)
    document.set_editing(bool(data.get('editing', False)))
    return session, None

# ============================================================================
# Routes
# ============================================================================

@app.route('/')
def index():
    """Service information"""
    return jsonify({
        'name': 'Payslip Generator',
        'months': MONTHS,
        'years': [str(datetime.now().year - 10 + i) for i in range(21)]
    })

# ============================================================================
# API Endpoints
# ============================================================================

@app.route('/api/employees')
def get_employees():
    """Get list of employees, optionally filtered"""
    employees = load_employees()
    filtered = filter_employees(
        employees,
        request.args.get('search', ''),
        request.args.get('department', 'all')
    )
    return jsonify({
        'employees': [
            {k: (str(v) if v is not None else None) for k, v in e.to_record().items()}
            for e in filtered
        ],
        'departments': list_departments(employees)
    })

@app.route('/api/employees', methods=['POST'])
def save_employee():
    """Create or update an employee"""
    data = request.json or {}
    if not data.get('name'):
        return jsonify({'success': False, 'message': 'Name is required'}), 400

    db = SessionLocal()
    try:
        employee = EmployeeRepository(db).save_employee(data)
        return jsonify({'success': True, 'id': employee.employee_id})
    except Exception as e:
        logger.error("Failed to save employee: %s", e)
        return jsonify({'success': False, 'message': str(e)}), 500
    finally:
        db.close()

@app.route('/api/export/employees')
def export_employees():
    """Download the filtered employee list as CSV"""
    employees = filter_employees(
        load_employees(),
        request.args.get('search', ''),
        request.args.get('department', 'all')
    )
    exporter = EmployeeCSVExporter()
    return Response(
        exporter.to_csv(employees),
        mimetype='text/csv; charset=utf-8',
        headers={'Content-Disposition': f'attachment; filename={exporter.filename()}'}
    )

@app.route('/api/payslip', methods=['POST'])
def compute_payslip():
    """Compute the payslip for an employee and period"""
    session, error = build_session(request.json or {})
    if error:
        message, status = error
        return jsonify({'success': False, 'message': message}), status

    return jsonify({'success': True, 'payslip': session.document.to_dict()})

@app.route('/api/payslip/download', methods=['POST'])
def download_payslip():
    """Render the payslip and send it as a file"""
    session, error = build_session(request.json or {})
    if error:
        message, status = error
        return jsonify({'success': False, 'message': message}), status

    try:
        filepath = session.export_snapshot(PayslipGenerator())
    except Exception as e:
        logger.error("Payslip export failed: %s", e)
        return jsonify({'success': False, 'message': str(e)}), 500

    return send_file(filepath, as_attachment=True, download_name=Path(filepath).name)

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    app.run(host='0.0.0.0', port=port)
