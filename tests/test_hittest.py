import unittest

from seatmap.hittest import hit_test, hit_test_select, pick, seats_in_rect
from seatmap.model import ObjectKind, ObjectRef, Position, Scene


def _seat(guid, x, y, **extra):
    return {"seat_guid": guid, "seat_number": guid, "position": {"x": x, "y": y}, **extra}


def _areas_scene() -> Scene:
    # Zone offset (50, 0): every area below sits 50 units right of its stored position.
    return Scene.model_validate(
        {
            "size": {"width": 300, "height": 200},
            "zones": [
                {
                    "position": {"x": 50, "y": 0},
                    "areas": [
                        {"shape": "rectangle", "position": {"x": 0, "y": 0}, "rectangle": {"width": 20, "height": 10}},
                        {"shape": "circle", "position": {"x": 60, "y": 50}, "circle": {"radius": 10}},
                        {"shape": "ellipse", "position": {"x": 10, "y": 50}, "ellipse": {"radius_x": 20, "radius_y": 5}},
                        {
                            "shape": "polygon",
                            "position": {"x": 100, "y": 0},
                            "polygon": {"points": [[0, 0], [20, 0], [0, 20]]},
                        },
                        {"shape": "text", "position": {"x": 150, "y": 150}, "text": {"text": "STAGE"}},
                        {"shape": "polygon", "position": {"x": 0, "y": 150}, "polygon": {"points": [[0, 0], [10, 10]]}},
                    ],
                }
            ],
        }
    )


def _hits(scene, x, y):
    return hit_test(scene, Position.of(x, y))


class TestShapes(unittest.TestCase):
    def setUp(self):
        self.scene = _areas_scene()

    def test_seat_circle_edge_inclusive(self):
        scene = Scene.model_validate(
            {"size": {"width": 100, "height": 100},
             "zones": [{"rows": [{"position": {"x": 10, "y": 10}, "seats": [_seat("s1", 5, 5)]}]}]}
        )
        self.assertEqual(_hits(scene, 23, 15), [ObjectRef.seat(0, 0, 0)])
        self.assertEqual(_hits(scene, 23.1, 15), [])

    def test_seat_radius_override(self):
        scene = Scene.model_validate(
            {"size": {"width": 100, "height": 100},
             "zones": [{"rows": [{"seats": [_seat("s1", 50, 50, radius=2)]}]}]}
        )
        self.assertEqual(_hits(scene, 52, 50), [ObjectRef.seat(0, 0, 0)])
        self.assertEqual(_hits(scene, 53, 50), [])

    def test_rectangle_edges_inclusive(self):
        rect = ObjectRef.area(0, 0)
        for x, y in [(50, 0), (70, 0), (50, 10), (70, 10), (60, 5)]:
            self.assertEqual(_hits(self.scene, x, y), [rect], (x, y))
        self.assertEqual(_hits(self.scene, 70.01, 5), [])
        self.assertEqual(_hits(self.scene, 49.99, 5), [])

    def test_circle_area(self):
        self.assertEqual(_hits(self.scene, 120, 50), [ObjectRef.area(0, 1)])
        self.assertEqual(_hits(self.scene, 118, 58), [])

    def test_ellipse_area(self):
        self.assertEqual(_hits(self.scene, 79, 50), [ObjectRef.area(0, 2)])
        self.assertEqual(_hits(self.scene, 60, 56), [])

    def test_polygon_area(self):
        self.assertEqual(_hits(self.scene, 155, 5), [ObjectRef.area(0, 3)])
        self.assertEqual(_hits(self.scene, 165, 15), [])

    def test_text_area_never_hit(self):
        self.assertEqual(_hits(self.scene, 200, 150), [])

    def test_degenerate_polygon_never_hit(self):
        self.assertEqual(_hits(self.scene, 50, 150), [])
        self.assertEqual(_hits(self.scene, 55, 155), [])


class TestRotationIsIgnored(unittest.TestCase):
    """Rotation only affects drawing; the clickable region stays un-rotated."""

    def _scene(self, area):
        return Scene.model_validate({"size": {"width": 200, "height": 200}, "zones": [{"areas": [area]}]})

    def test_rotated_ellipse_uses_unrotated_region(self):
        scene = self._scene(
            {"shape": "ellipse", "position": {"x": 100, "y": 100}, "rotation": 90,
             "ellipse": {"radius_x": 20, "radius_y": 5}}
        )
        # Inside the un-rotated ellipse, outside the drawn (rotated) one.
        self.assertEqual(_hits(scene, 115, 100), [ObjectRef.area(0, 0)])
        # Inside the drawn ellipse, outside the un-rotated one.
        self.assertEqual(_hits(scene, 100, 115), [])

    def test_rotated_polygon_uses_unrotated_region(self):
        scene = self._scene(
            {"shape": "polygon", "position": {"x": 100, "y": 100}, "rotation": 180,
             "polygon": {"points": [[0, 0], [30, 0], [30, 10], [0, 10]]}}
        )
        self.assertEqual(_hits(scene, 115, 105), [ObjectRef.area(0, 0)])
        self.assertEqual(_hits(scene, 85, 95), [])


class TestOrderingAndCycling(unittest.TestCase):
    def test_seats_before_areas_across_zones(self):
        scene = Scene.model_validate(
            {
                "size": {"width": 100, "height": 100},
                "zones": [
                    {"areas": [{"shape": "rectangle", "position": {"x": 0, "y": 0},
                                "rectangle": {"width": 40, "height": 40}}]},
                    {"position": {"x": 10, "y": 10}, "rows": [{"seats": [_seat("s1", 5, 5)]}]},
                ],
            }
        )
        self.assertEqual(_hits(scene, 15, 15), [ObjectRef.seat(1, 0, 0), ObjectRef.area(0, 0)])

    def test_cycle_two_overlapping_seats(self):
        scene = Scene.model_validate(
            {"size": {"width": 100, "height": 100},
             "zones": [{"rows": [{"seats": [_seat("A", 20, 20), _seat("B", 20, 20)]}]}]}
        )
        a, b = ObjectRef.seat(0, 0, 0), ObjectRef.seat(0, 0, 1)
        p = Position.of(20, 20)

        first = hit_test_select(scene, p)
        second = hit_test_select(scene, p, first)
        third = hit_test_select(scene, p, second)
        self.assertEqual((first, second, third), (a, b, a))

    def test_pick_wraps_through_three(self):
        refs = [ObjectRef.seat(0, 0, i) for i in range(3)]
        self.assertEqual(pick(refs, refs[0]), refs[1])
        self.assertEqual(pick(refs, refs[1]), refs[2])
        self.assertEqual(pick(refs, refs[2]), refs[0])

    def test_pick_previous_not_a_candidate(self):
        refs = [ObjectRef.seat(0, 0, 0), ObjectRef.area(0, 0)]
        self.assertEqual(pick(refs, ObjectRef.area(0, 5)), refs[0])

    def test_pick_single_candidate_stays(self):
        ref = ObjectRef.area(0, 0)
        self.assertEqual(pick([ref], ref), ref)

    def test_pick_empty(self):
        self.assertIsNone(pick([], ObjectRef.area(0, 0)))
        self.assertIsNone(hit_test_select(_areas_scene(), Position.of(-100, -100)))


class TestSeatsInRect(unittest.TestCase):
    def setUp(self):
        self.scene = Scene.model_validate(
            {"size": {"width": 100, "height": 100},
             "zones": [{"rows": [{"position": {"x": 10, "y": 10}, "seats": [_seat("s1", 5, 5)]}]}]}
        )

    def test_scenario(self):
        self.assertEqual(seats_in_rect(self.scene, Position.of(10, 10), Position.of(20, 20)), ["s1"])
        self.assertEqual(seats_in_rect(self.scene, Position.of(16, 16), Position.of(20, 20)), [])

    def test_boundary_inclusive(self):
        self.assertEqual(seats_in_rect(self.scene, Position.of(15, 15), Position.of(30, 30)), ["s1"])
        self.assertEqual(seats_in_rect(self.scene, Position.of(0, 0), Position.of(15, 15)), ["s1"])

    def test_corner_order_irrelevant(self):
        self.assertEqual(seats_in_rect(self.scene, Position.of(20, 20), Position.of(10, 10)), ["s1"])

    def test_later_drawn_seats_first(self):
        scene = Scene.model_validate(
            {"size": {"width": 100, "height": 100},
             "zones": [{"rows": [{"seats": [_seat("a", 1, 1), _seat("b", 2, 2)]},
                                 {"seats": [_seat("c", 3, 3)]}]}]}
        )
        self.assertEqual(seats_in_rect(scene, Position.of(0, 0), Position.of(10, 10)), ["c", "b", "a"])

    def test_kinds(self):
        refs = hit_test(self.scene, Position.of(15, 15))
        self.assertEqual([r.kind for r in refs], [ObjectKind.seat])


if __name__ == "__main__":
    unittest.main()
