"""
Tests für die Ereignis-Handler des Tischplans (Register, Auswahl und Ziehen zusammen).
"""

import threading

from tischplan.core.floorplan import FloorPlan


class TestFloorPlan:

    def test_default_layout(self):
        plan = FloorPlan.with_default_layout()
        tables = plan.registry.list_tables()
        assert [(t.id, t.seats, t.position) for t in tables] == [
            (1, 2, (50.0, 50.0)),
            (2, 4, (200.0, 50.0)),
            (3, 6, (350.0, 50.0)),
        ]
        assert plan.selection.selected_id is None
        assert plan.registry.create().id == 4

    def test_add_table_selects_it(self, plan):
        table = plan.add_table()
        assert plan.selection.selected_id == table.id
        second = plan.add_table()
        assert plan.selection.selected_id == second.id

    def test_delete_selected_clears_selection(self, plan):
        table = plan.add_table()
        assert plan.delete_table(table.id) is True
        assert plan.snapshot()["selected_id"] is None

    def test_delete_other_keeps_selection(self, plan):
        first = plan.add_table()
        second = plan.add_table()
        plan.select(first.id)
        plan.delete_table(second.id)
        assert plan.selection.selected_id == first.id

    def test_delete_drag_target_ends_drag(self, plan):
        table = plan.add_table()
        plan.pointer_down(table.id, 60, 60)
        plan.delete_table(table.id)
        snapshot = plan.snapshot()
        assert snapshot["dragging"] is False
        assert snapshot["drag_target_id"] is None
        assert plan.pointer_move(10, 10) is None

    def test_delete_missing_is_noop(self, plan):
        plan.add_table()
        assert plan.delete_table(99) is False
        assert len(plan.registry) == 1

    def test_drag_one_while_editing_another(self, plan):
        first = plan.add_table()
        second = plan.add_table()

        plan.pointer_down(first.id, 55, 55)
        plan.pointer_move(105, 155)
        plan.adjust_seats(second.id, 2)
        plan.pointer_move(205, 255)
        plan.pointer_up()

        assert first.position == (200.0, 250.0)
        assert second.seats == 4
        assert second.position == (50.0, 50.0)
        assert plan.selection.selected_id == first.id

    def test_selected_wrappers(self, plan):
        table = plan.add_table()
        plan.adjust_selected_seats(1)
        plan.toggle_selected_reservation()
        plan.edit_selected_note("Terrasse")
        assert table.to_dict() == {
            "id": table.id, "seats": 3, "is_reserved": True, "note": "Terrasse",
            "position": {"x": 50.0, "y": 50.0}
        }

    def test_snapshot_shape(self, plan):
        table = plan.add_table()
        plan.pointer_down(table.id, 50, 50)
        snapshot = plan.snapshot()
        assert snapshot["tables"] == [table.to_dict()]
        assert snapshot["selected_id"] == table.id
        assert snapshot["selected_table"] == table.to_dict()
        assert snapshot["dragging"] is True
        assert snapshot["drag_target_id"] == table.id

    def test_pointer_leave(self, plan):
        table = plan.add_table()
        plan.pointer_down(table.id, 50, 50)
        plan.pointer_leave()
        assert plan.snapshot()["dragging"] is False

    def test_concurrent_handlers_keep_ids_unique(self, plan):
        def add_many():
            for _ in range(50):
                plan.add_table()

        workers = [threading.Thread(target=add_many) for _ in range(4)]
        for w in workers:
            w.start()
        for w in workers:
            w.join()

        ids = [t.id for t in plan.registry.list_tables()]
        assert len(ids) == 200
        assert len(set(ids)) == 200

    def test_selecting_another_table_ends_drag(self, plan):
        first = plan.add_table()
        second = plan.add_table()
        plan.pointer_down(first.id, 50, 50)
        plan.select(second.id)
        assert plan.snapshot()["dragging"] is False
        plan.pointer_move(300, 300)
        assert first.position == (50.0, 50.0)

    def test_reselecting_drag_target_keeps_drag(self, plan):
        table = plan.add_table()
        plan.pointer_down(table.id, 50, 50)
        plan.select(table.id)
        assert plan.snapshot()["dragging"] is True

    def test_adding_table_during_drag_ends_drag(self, plan):
        dragged = plan.add_table()
        plan.pointer_down(dragged.id, 50, 50)
        added = plan.add_table()
        snapshot = plan.snapshot()
        assert snapshot["selected_id"] == added.id
        assert snapshot["dragging"] is False
