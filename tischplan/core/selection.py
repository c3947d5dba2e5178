import logging

logger = logging.getLogger(__name__)


class SelectionCoordinator:
    """Hält höchstens einen ausgewählten Tisch (nur die ID, nicht den Tisch selbst)."""

    def __init__(self, registry):
        self.registry = registry
        self._selected_id = None

    @property
    def selected_id(self):
        return self._selected_id

    @property
    def selected_table(self):
        if self._selected_id is None:
            return None
        return self.registry.get(self._selected_id)

    def select(self, table_id):
        if table_id is not None and table_id in self.registry:
            self._selected_id = table_id
        else:
            if table_id is not None:
                logger.debug(f"select: Tisch {table_id} nicht gefunden, Auswahl geleert.")
            self._selected_id = None
        return self.selected_table

    def clear(self):
        self._selected_id = None

    def clear_if_matches(self, table_id):
        if self._selected_id is not None and self._selected_id == table_id:
            self._selected_id = None
            return True
        return False

    def adjust_selected_seats(self, delta):
        if self._selected_id is None:
            return None
        return self.registry.update_seats(self._selected_id, delta)

    def toggle_selected_reservation(self):
        if self._selected_id is None:
            return None
        return self.registry.toggle_reserved(self._selected_id)

    def edit_selected_note(self, text):
        if self._selected_id is None:
            return None
        return self.registry.set_note(self._selected_id, text)
