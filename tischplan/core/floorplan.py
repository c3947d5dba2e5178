import threading
import logging

from .models import DEFAULT_LAYOUT
from .registry import TableRegistry
from .selection import SelectionCoordinator
from .drag import DragController

logger = logging.getLogger(__name__)


class FloorPlan:
    """
    Tischplan eines Benutzers: Register, Auswahl und Ziehzustand.

    Jede Methode ist ein vollständiger Ereignis-Handler und läuft unter
    `lock`, damit Ereignisse strikt in Eingangsreihenfolge angewendet werden.
    """

    def __init__(self):
        self.registry = TableRegistry()
        self.selection = SelectionCoordinator(self.registry)
        self.drag = DragController(self.registry, self.selection)
        self.lock = threading.Lock()

    @classmethod
    def with_default_layout(cls):
        plan = cls()
        for seats, x, y in DEFAULT_LAYOUT:
            plan.registry.create(seats=seats, x=x, y=y)
        logger.info(f"Neuer Tischplan mit {len(plan.registry)} Standardtischen erstellt.")
        return plan

    def _end_foreign_drag(self):
        # Ziehziel ist immer der ausgewählte Tisch
        if self.drag.is_dragging and self.drag.target_id != self.selection.selected_id:
            self.drag.pointer_up()

    def add_table(self):
        with self.lock:
            table = self.registry.create()
            self.selection.select(table.id)
            self._end_foreign_drag()
            return table

    def delete_table(self, table_id):
        with self.lock:
            deleted = self.registry.delete(table_id)
            self.selection.clear_if_matches(table_id)
            self.drag.cancel_if_target(table_id)
            return deleted

    def adjust_seats(self, table_id, delta):
        with self.lock:
            return self.registry.update_seats(table_id, delta)

    def select(self, table_id):
        with self.lock:
            table = self.selection.select(table_id)
            self._end_foreign_drag()
            return table

    def adjust_selected_seats(self, delta):
        with self.lock:
            return self.selection.adjust_selected_seats(delta)

    def toggle_selected_reservation(self):
        with self.lock:
            return self.selection.toggle_selected_reservation()

    def edit_selected_note(self, text):
        with self.lock:
            return self.selection.edit_selected_note(text)

    def pointer_down(self, table_id, px, py):
        with self.lock:
            return self.drag.pointer_down(table_id, px, py)

    def pointer_move(self, px, py):
        with self.lock:
            return self.drag.pointer_move(px, py)

    def pointer_up(self):
        with self.lock:
            self.drag.pointer_up()

    def pointer_leave(self):
        with self.lock:
            self.drag.pointer_leave()

    def snapshot(self):
        with self.lock:
            selected = self.selection.selected_table
            return {
                "tables": [t.to_dict() for t in self.registry.list_tables()],
                "selected_id": selected.id if selected else None,
                "selected_table": selected.to_dict() if selected else None,
                "dragging": self.drag.is_dragging,
                "drag_target_id": self.drag.target_id
            }
