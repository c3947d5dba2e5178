import logging

logger = logging.getLogger(__name__)


class DragController:
    """
    Zustandsautomat für eine Zeigergeste: idle -> dragging -> idle.

    Der Versatz zwischen Zeiger und Tischposition wird einmal beim
    Zeiger-runter festgehalten; jede Bewegung berechnet daraus die absolute
    Position neu (keine aufaddierten Deltas).
    """

    STATE_IDLE = "idle"
    STATE_DRAGGING = "dragging"

    def __init__(self, registry, selection):
        self.registry = registry
        self.selection = selection
        self.state = self.STATE_IDLE
        self.target_id = None
        self.offset = None

    @property
    def is_dragging(self):
        return self.state == self.STATE_DRAGGING

    def _reset(self):
        self.state = self.STATE_IDLE
        self.target_id = None
        self.offset = None

    def pointer_down(self, table_id, px, py):
        if self.is_dragging:
            logger.debug(f"Neue Geste auf Tisch {table_id}, alte Geste auf Tisch {self.target_id} verworfen.")
            self._reset()

        table = self.selection.select(table_id)
        if table is None:
            return False

        self.offset = (px - table.x, py - table.y)
        self.target_id = table.id
        self.state = self.STATE_DRAGGING
        logger.debug(f"Ziehen von Tisch {table.id} gestartet, Versatz {self.offset}.")
        return True

    def pointer_move(self, px, py):
        if not self.is_dragging:
            return None

        table = self.registry.set_position(self.target_id, px - self.offset[0], py - self.offset[1])
        if table is None:
            # Zieltisch wurde während der Geste gelöscht
            logger.debug(f"Zieltisch {self.target_id} existiert nicht mehr, Ziehen beendet.")
            self._reset()
        return table

    def pointer_up(self):
        if self.is_dragging:
            logger.debug(f"Ziehen von Tisch {self.target_id} beendet.")
        self._reset()

    def pointer_leave(self):
        self.pointer_up()

    def cancel_if_target(self, table_id):
        if self.is_dragging and self.target_id == table_id:
            self._reset()
            return True
        return False
