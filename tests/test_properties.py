import unittest

from seatmap.editor import EditorSession
from seatmap.model import ObjectRef, Scene, SeatMapError, SeatStatus
from seatmap.properties import get_properties, rename_category, seat_stats, set_property, set_seat_status
from seatmap.selection import SelectionMode


def _seat(guid, x, y, category=None, status=None):
    d = {"seat_guid": guid, "seat_number": guid, "position": {"x": x, "y": y}, "category": category}
    if status is not None:
        d["status"] = status
    return d


def _scene() -> Scene:
    return Scene.model_validate(
        {
            "name": "Hall",
            "size": {"width": 400, "height": 300},
            "categories": [{"name": "VIP", "color": "#ff0000"}, {"name": "Standard", "color": "#00ff00"}],
            "zones": [
                {
                    "position": {"x": 0, "y": 0},
                    "rows": [
                        {
                            "position": {"x": 10, "y": 10},
                            "label": "A",
                            "seats": [
                                _seat("s1", 5, 5, "VIP"),
                                _seat("s2", 25, 5, "Standard", "SOLD"),
                                _seat("s3", 45, 5, "VIP", "void"),
                            ],
                        }
                    ],
                    "areas": [
                        {"shape": "rectangle", "position": {"x": 100, "y": 100},
                         "rectangle": {"width": 40, "height": 20}, "color": "#eeeeee"},
                        {"shape": "circle", "position": {"x": 200, "y": 100}, "circle": {"radius": 15},
                         "text": {"text": "Bar", "color": "#111111", "size": 12}},
                        {"shape": "ellipse", "position": {"x": 300, "y": 100},
                         "ellipse": {"radius_x": 30, "radius_y": 10}},
                        {"shape": "polygon", "position": {"x": 100, "y": 200}, "rotation": 45,
                         "polygon": {"points": [[0, 0], [40, 0], [20, 30]]},
                         "text": {"text": "Pit", "offset": {"x": 20, "y": 10}}},
                    ],
                },
                {
                    "position": {"x": 0, "y": 250},
                    "rows": [{"seats": [_seat("s4", 0, 0, "vip")]}],
                },
            ],
        }
    )


def _categories(scene):
    return {s.seat_guid: s.category for z in scene.zones for r in z.rows for s in r.seats}


class TestGetProperties(unittest.TestCase):
    def setUp(self):
        self.scene = _scene()

    def test_seat(self):
        props = get_properties(self.scene, ObjectRef.seat(0, 0, 1))
        self.assertEqual(props["position_x"], 35.0)
        self.assertEqual(props["position_y"], 15.0)
        self.assertEqual(props["status"], "sold")
        self.assertEqual(props["category"], "Standard")
        self.assertEqual(props["radius"], 8.0)

    def test_rectangle_exposes_size_only(self):
        props = get_properties(self.scene, ObjectRef.area(0, 0))
        self.assertEqual((props["width"], props["height"]), (40.0, 20.0))
        self.assertNotIn("radius", props)
        self.assertNotIn("text", props)
        self.assertEqual(props["id"], "zone0-area0")

    def test_circle_with_label(self):
        props = get_properties(self.scene, ObjectRef.area(0, 1))
        self.assertEqual(props["radius"], 15.0)
        self.assertEqual((props["text"], props["text_color"], props["text_size"]), ("Bar", "#111111", 12.0))
        self.assertNotIn("text_offset_x", props)

    def test_ellipse(self):
        props = get_properties(self.scene, ObjectRef.area(0, 2))
        self.assertEqual((props["radius_x"], props["radius_y"]), (30.0, 10.0))

    def test_polygon_label_offset(self):
        props = get_properties(self.scene, ObjectRef.area(0, 3))
        self.assertEqual((props["text_offset_x"], props["text_offset_y"]), (20.0, 10.0))
        self.assertEqual(props["rotation"], 45.0)

    def test_row_and_category(self):
        self.assertEqual(get_properties(self.scene, ObjectRef.for_row(0, 0))["label"], "A")
        self.assertEqual(get_properties(self.scene, ObjectRef.category(0)),
                         {"kind": "category", "name": "VIP", "color": "#ff0000"})

    def test_unknown_reference(self):
        with self.assertRaises(SeatMapError):
            get_properties(self.scene, ObjectRef.seat(0, 0, 9))


class TestSetProperty(unittest.TestCase):
    def setUp(self):
        self.scene = _scene()

    def test_position_routes_through_inverse(self):
        ref = ObjectRef.seat(0, 0, 0)
        out = set_property(self.scene, ref, "position_x", "50")
        seat = out.zones[0].rows[0].seats[0]
        self.assertEqual((seat.position.x, seat.position.y), (40.0, 5.0))
        self.assertEqual(get_properties(out, ref)["position_x"], 50.0)

    def test_area_position(self):
        ref = ObjectRef.area(0, 0)
        scene = set_property(self.scene, ObjectRef.area(0, 0), "position_y", 130)
        self.assertEqual(scene.zones[0].areas[0].position.y, 130.0)
        self.assertEqual(get_properties(scene, ref)["position_y"], 130.0)

    def test_radius_on_rectangle_is_ignored(self):
        self.assertIs(set_property(self.scene, ObjectRef.area(0, 0), "radius", 10), self.scene)

    def test_width_on_circle_is_ignored(self):
        self.assertIs(set_property(self.scene, ObjectRef.area(0, 1), "width", 10), self.scene)

    def test_text_without_label_is_ignored(self):
        self.assertIs(set_property(self.scene, ObjectRef.area(0, 0), "text", "Hello"), self.scene)

    def test_unknown_field_is_ignored(self):
        self.assertIs(set_property(self.scene, ObjectRef.seat(0, 0, 0), "width", 3), self.scene)

    def test_shape_fields(self):
        out = set_property(self.scene, ObjectRef.area(0, 0), "width", "55.5")
        self.assertEqual(out.zones[0].areas[0].rectangle.width, 55.5)
        out = set_property(out, ObjectRef.area(0, 1), "radius", 20)
        self.assertEqual(out.zones[0].areas[1].circle.radius, 20.0)
        out = set_property(out, ObjectRef.area(0, 2), "radius_y", 4)
        self.assertEqual(out.zones[0].areas[2].ellipse.radius_y, 4.0)
        out = set_property(out, ObjectRef.area(0, 1), "text_size", "18")
        self.assertEqual(out.zones[0].areas[1].text.size, 18.0)
        out = set_property(out, ObjectRef.area(0, 1), "text", "Bar & Grill")
        self.assertEqual(out.zones[0].areas[1].text.text, "Bar & Grill")

    def test_text_offset_only_on_polygon(self):
        out = set_property(self.scene, ObjectRef.area(0, 3), "text_offset_y", -5)
        self.assertEqual(out.zones[0].areas[3].text.offset.y, -5.0)
        self.assertEqual(out.zones[0].areas[3].text.offset.x, 20.0)
        self.assertIs(set_property(self.scene, ObjectRef.area(0, 1), "text_offset_x", 3), self.scene)

    def test_bad_number(self):
        with self.assertRaises(SeatMapError):
            set_property(self.scene, ObjectRef.area(0, 0), "width", "wide")

    def test_seat_fields(self):
        ref = ObjectRef.seat(0, 0, 0)
        out = set_property(self.scene, ref, "status", "Unavailable")
        self.assertEqual(out.zones[0].rows[0].seats[0].status, SeatStatus.unavailable)
        out = set_property(out, ref, "category", "Standard")
        self.assertEqual(out.zones[0].rows[0].seats[0].category, "Standard")
        out = set_property(out, ref, "radius", 12)
        self.assertEqual(out.zones[0].rows[0].seats[0].effective_radius, 12.0)
        with self.assertRaises(SeatMapError):
            set_property(out, ref, "status", "reserved")

    def test_input_scene_untouched(self):
        set_property(self.scene, ObjectRef.area(0, 0), "width", 99)
        self.assertEqual(self.scene.zones[0].areas[0].rectangle.width, 40.0)


class TestCategoryRename(unittest.TestCase):
    def setUp(self):
        self.scene = _scene()

    def test_cascade(self):
        out = rename_category(self.scene, "VIP", "Premium")
        self.assertEqual(_categories(out), {"s1": "Premium", "s2": "Standard", "s3": "Premium", "s4": "vip"})
        self.assertEqual([(c.name, c.color) for c in out.categories],
                         [("Premium", "#ff0000"), ("Standard", "#00ff00")])
        self.assertEqual(_categories(self.scene)["s1"], "VIP")

    def test_rename_through_property_editor(self):
        out = set_property(self.scene, ObjectRef.category(1), "name", "  Economy ")
        self.assertEqual(out.categories[1].name, "Economy")
        self.assertEqual(_categories(out)["s2"], "Economy")

    def test_blank_name_is_noop(self):
        self.assertIs(rename_category(self.scene, "VIP", "   "), self.scene)

    def test_same_name_is_noop(self):
        self.assertIs(rename_category(self.scene, "VIP", " VIP "), self.scene)
        self.assertIs(set_property(self.scene, ObjectRef.category(0), "name", "VIP"), self.scene)
        editor = EditorSession(self.scene)
        self.assertFalse(editor.rename_category("VIP", "VIP"))

    def test_unknown_category_is_noop(self):
        self.assertIs(rename_category(self.scene, "Balcony", "Upper"), self.scene)

    def test_collision_is_allowed(self):
        out = rename_category(self.scene, "VIP", "Standard")
        self.assertEqual([c.name for c in out.categories], ["Standard", "Standard"])
        self.assertEqual(_categories(out)["s1"], "Standard")


class TestStatus(unittest.TestCase):
    def test_stats(self):
        self.assertEqual(seat_stats(_scene()), {"available": 2, "unavailable": 0, "void": 1, "sold": 1})

    def test_bulk_status(self):
        out = set_seat_status(_scene(), {"s1", "s4"}, "SOLD")
        self.assertEqual(seat_stats(out), {"available": 0, "unavailable": 0, "void": 1, "sold": 3})

    def test_editor_applies_status_to_selection(self):
        editor = EditorSession(_scene(), mode=SelectionMode.area)
        editor.pointer_down(0, 0)
        editor.pointer_up(40, 20)
        self.assertEqual(editor.controller.selected_seat_ids, {"s1", "s2"})
        self.assertEqual(editor.apply_status("unavailable"), 2)
        self.assertEqual(editor.controller.selected_seat_ids, set())
        self.assertEqual(editor.stats()["unavailable"], 2)

    def test_editor_property_on_selection(self):
        editor = EditorSession(_scene(), mode=SelectionMode.object)
        editor.pointer_down(120, 110)
        self.assertEqual(editor.properties()["shape"], "rectangle")
        self.assertFalse(editor.apply_property("radius", 5))
        self.assertTrue(editor.apply_property("height", 25))
        self.assertEqual(editor.properties()["height"], 25.0)


if __name__ == "__main__":
    unittest.main()
