SEATS_MIN = 1
SEATS_MAX = 12
DEFAULT_SEATS = 2
DEFAULT_POSITION = (50.0, 50.0)


def clamp_seats(seats):
    return max(SEATS_MIN, min(SEATS_MAX, int(seats)))


class Table:
    def __init__(self, table_id, seats=DEFAULT_SEATS, is_reserved=False, note="", x=None, y=None):
        self.id = table_id
        self.seats = clamp_seats(seats)
        self.is_reserved = is_reserved
        self.note = note
        self.x = float(DEFAULT_POSITION[0] if x is None else x)
        self.y = float(DEFAULT_POSITION[1] if y is None else y)

    @property
    def position(self):
        return (self.x, self.y)

    def __repr__(self):
        reserved_str = ", reserviert" if self.is_reserved else ""
        return f"<Table {self.id} ({self.seats} Plätze, Pos: {self.x:g}/{self.y:g}{reserved_str})>"

    def to_dict(self):
        return {
            "id": self.id, "seats": self.seats,
            "is_reserved": self.is_reserved, "note": self.note,
            "position": {"x": self.x, "y": self.y}
        }


# Startaufstellung eines neuen Tischplans: (Plätze, x, y)
DEFAULT_LAYOUT = [
    (2, 50, 50),
    (4, 200, 50),
    (6, 350, 50),
]
