from flask import Flask, render_template, request, redirect, url_for, jsonify, session
import datetime, os
import math
import threading
import logging

from tischplan.core.floorplan import FloorPlan

logging.basicConfig(level=os.environ.get('TISCHPLAN_LOG_LEVEL', 'INFO').upper(),
                    format='%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s')

app = Flask(__name__)
app.secret_key = os.environ.get('TISCHPLAN_SECRET_KEY') or os.urandom(24)


def parse_users(raw):
    # Format: "name:passwort,name2:passwort2"
    users = {}
    for entry in raw.split(','):
        name, sep, password = entry.strip().partition(':')
        if name and sep:
            users[name] = password
    return users


USERS = {
    "admin": "admin123",
}
if os.environ.get('TISCHPLAN_USERS'):
    USERS = parse_users(os.environ['TISCHPLAN_USERS'])

app.config['USERS'] = USERS
app.config['SEED_TABLES'] = os.environ.get('TISCHPLAN_SEED_TABLES', '1').lower() not in ('0', 'false', 'no')

# Tischpläne liegen nur im Speicher, einer pro angemeldetem Benutzer
_floor_plans = {}
_floor_plans_lock = threading.Lock()


def get_floor_plan():
    username = session.get('username')
    with _floor_plans_lock:
        plan = _floor_plans.get(username)
        if plan is None:
            plan = FloorPlan.with_default_layout() if app.config['SEED_TABLES'] else FloorPlan()
            _floor_plans[username] = plan
            app.logger.info(f"Tischplan für Benutzer '{username}' angelegt.")
        return plan


def drop_floor_plan(username):
    with _floor_plans_lock:
        return _floor_plans.pop(username, None) is not None


def floor_plan_response(plan, **extra):
    payload = {"success": True, "tischplan": plan.snapshot()}
    payload.update(extra)
    return jsonify(payload)


def read_json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def bad_request(message):
    return jsonify({"success": False, "message": message}), 400


def read_number(value):
    # nur endliche Zahlen, kein NaN/Infinity
    if isinstance(value, bool):
        raise TypeError(f"Keine Zahl: {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError(f"Zahl zu groß: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"Keine endliche Zahl: {value!r}")
    return number


def read_integer(value):
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = read_number(value)
    if not number.is_integer():
        raise ValueError(f"Keine ganze Zahl: {value!r}")
    return int(number)


def read_coordinates(data):
    return read_number(data['x']), read_number(data['y'])


@app.context_processor
def inject_global_vars():
    return {
        'current_year': datetime.datetime.now().year,
        'active_nav_tab': request.endpoint,
        'username': session.get('username')
    }


@app.route('/login', methods=['GET', 'POST'])
def login():
    error = None
    if request.method == 'POST':
        username = request.form.get('username')
        password = request.form.get('password')

        users = app.config['USERS']
        if username in users and users[username] == password:
            session['logged_in'] = True
            session['username'] = username
            app.logger.info(f"Benutzer '{username}' hat sich angemeldet.")
            return redirect(url_for('index'))
        else:
            error = 'Ungültige Zugangsdaten. Bitte erneut versuchen.'
            app.logger.warning(f"Fehlgeschlagener Login-Versuch für User: {username}")

    return render_template('login.html', error=error)


@app.before_request
def require_login():
    # Endpunkte, die man OHNE Login sehen darf
    allowed_routes = ['login', 'static', 'healthz']

    if 'logged_in' not in session and request.endpoint not in allowed_routes:
        if request.endpoint and 'static' in request.endpoint:
            return

        if request.path.startswith('/api/'):
            return jsonify({"success": False, "message": "Nicht angemeldet."}), 401
        return redirect(url_for('login'))


@app.route('/logout')
def logout():
    username = session.get('username')
    if username and drop_floor_plan(username):
        app.logger.info(f"Tischplan von Benutzer '{username}' verworfen.")
    session.clear()
    return redirect(url_for('login'))


@app.errorhandler(500)
def internal_error(e):
    original = getattr(e, 'original_exception', None) or e
    app.logger.error(f"Unerwarteter Fehler bei {request.method} {request.path}: {original}")
    if request.path.startswith('/api/'):
        return jsonify({"success": False, "message": f"Serverfehler: {str(original)}"}), 500
    return "Interner Serverfehler", 500


@app.route('/healthz')
def healthz():
    return jsonify({"status": "ok"})


@app.route('/')
def index():
    plan = get_floor_plan()
    return render_template('floorplan.html', tischplan=plan.snapshot())


@app.route('/api/tischplan', methods=['GET'])
def api_get_floor_plan():
    return floor_plan_response(get_floor_plan())


@app.route('/api/neuer_tisch', methods=['POST'])
def api_create_table():
    plan = get_floor_plan()
    try:
        table = plan.add_table()
        return floor_plan_response(plan, message=f"Tisch {table.id} angelegt.", table=table.to_dict())
    except Exception as e:
        app.logger.error(f"Fehler beim Anlegen eines Tisches: {e}", exc_info=True)
        return jsonify({"success": False, "message": f"Serverfehler: {str(e)}"}), 500


@app.route('/api/tisch_loeschen/<int:table_id>', methods=['DELETE'])
def api_delete_table(table_id):
    plan = get_floor_plan()
    deleted = plan.delete_table(table_id)
    message = f"Tisch {table_id} gelöscht." if deleted else f"Tisch {table_id} existiert nicht mehr."
    return floor_plan_response(plan, message=message, deleted=deleted)


@app.route('/api/tisch_plaetze/<int:table_id>', methods=['POST'])
def api_adjust_table_seats(table_id):
    data = read_json_body()
    try:
        delta = read_integer(data['delta'])
    except (KeyError, TypeError, ValueError):
        return bad_request("Fehlendes oder ungültiges 'delta' im Request.")

    plan = get_floor_plan()
    plan.adjust_seats(table_id, delta)
    return floor_plan_response(plan)


@app.route('/api/auswahl/<int:table_id>', methods=['POST'])
def api_select_table(table_id):
    plan = get_floor_plan()
    plan.select(table_id)
    return floor_plan_response(plan)


@app.route('/api/auswahl/plaetze', methods=['POST'])
def api_adjust_selected_seats():
    data = read_json_body()
    try:
        delta = read_integer(data['delta'])
    except (KeyError, TypeError, ValueError):
        return bad_request("Fehlendes oder ungültiges 'delta' im Request.")

    plan = get_floor_plan()
    plan.adjust_selected_seats(delta)
    return floor_plan_response(plan)


@app.route('/api/auswahl/reservierung', methods=['POST'])
def api_toggle_selected_reservation():
    plan = get_floor_plan()
    plan.toggle_selected_reservation()
    return floor_plan_response(plan)


@app.route('/api/auswahl/notiz', methods=['POST'])
def api_edit_selected_note():
    data = read_json_body()
    note = data.get('note')
    if not isinstance(note, str):
        return bad_request("Fehlende 'note' im Request.")

    plan = get_floor_plan()
    plan.edit_selected_note(note)
    return floor_plan_response(plan)


@app.route('/api/zeiger/runter', methods=['POST'])
def api_pointer_down():
    data = read_json_body()
    try:
        table_id = read_integer(data['table_id'])
        x, y = read_coordinates(data)
    except (KeyError, TypeError, ValueError):
        return bad_request("Request braucht 'table_id', 'x' und 'y'.")

    plan = get_floor_plan()
    plan.pointer_down(table_id, x, y)
    return floor_plan_response(plan)


@app.route('/api/zeiger/bewegen', methods=['POST'])
def api_pointer_move():
    data = read_json_body()
    try:
        x, y = read_coordinates(data)
    except (KeyError, TypeError, ValueError):
        return bad_request("Request braucht 'x' und 'y'.")

    plan = get_floor_plan()
    plan.pointer_move(x, y)
    return floor_plan_response(plan)


@app.route('/api/zeiger/hoch', methods=['POST'])
def api_pointer_up():
    plan = get_floor_plan()
    plan.pointer_up()
    return floor_plan_response(plan)


@app.route('/api/zeiger/verlassen', methods=['POST'])
def api_pointer_leave():
    plan = get_floor_plan()
    plan.pointer_leave()
    return floor_plan_response(plan)


if __name__ == '__main__':
    app.run(debug=False, host='0.0.0.0', port=5001)
