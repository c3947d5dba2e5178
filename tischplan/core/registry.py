import logging

from .models import Table, DEFAULT_SEATS, DEFAULT_POSITION, clamp_seats

logger = logging.getLogger(__name__)


class TableRegistry:
    """
    Besitzt alle Tische eines Tischplans.

    Jede Operation auf eine unbekannte ID ist ein stiller No-op (Rückgabe None
    bzw. False): UI-Befehle können sich mit einem Löschen überschneiden.
    """

    def __init__(self):
        self._tables = []
        self._last_allocated_id = 0

    def __len__(self):
        return len(self._tables)

    def __contains__(self, table_id):
        return self.get(table_id) is not None

    def _next_id(self):
        highest = max([t.id for t in self._tables] + [self._last_allocated_id, 0])
        return highest + 1

    def get(self, table_id):
        for table in self._tables:
            if table.id == table_id:
                return table
        return None

    def _lookup(self, table_id, operation):
        table = self.get(table_id)
        if table is None:
            logger.debug(f"{operation}: Tisch {table_id} nicht gefunden, ignoriert.")
        return table

    def list_tables(self):
        return list(self._tables)

    def create(self, seats=DEFAULT_SEATS, x=DEFAULT_POSITION[0], y=DEFAULT_POSITION[1]):
        new_id = self._next_id()
        table = Table(new_id, seats=seats, x=x, y=y)
        self._tables.append(table)
        self._last_allocated_id = new_id
        logger.info(f"Tisch {new_id} angelegt ({table.seats} Plätze).")
        return table

    def delete(self, table_id):
        initial_length = len(self._tables)
        self._tables = [t for t in self._tables if t.id != table_id]
        if len(self._tables) < initial_length:
            logger.info(f"Tisch {table_id} gelöscht.")
            return True
        logger.debug(f"delete: Tisch {table_id} nicht gefunden, ignoriert.")
        return False

    def update_seats(self, table_id, delta):
        table = self._lookup(table_id, "update_seats")
        if table is None:
            return None
        table.seats = clamp_seats(table.seats + int(delta))
        return table

    def toggle_reserved(self, table_id):
        table = self._lookup(table_id, "toggle_reserved")
        if table is None:
            return None
        table.is_reserved = not table.is_reserved
        return table

    def set_note(self, table_id, text):
        table = self._lookup(table_id, "set_note")
        if table is None:
            return None
        table.note = text
        return table

    def set_position(self, table_id, x, y):
        table = self._lookup(table_id, "set_position")
        if table is None:
            return None
        table.x = float(x)
        table.y = float(y)
        return table
