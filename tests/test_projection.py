import math
import unittest

import numpy as np

from space_map.projection import (
    MAX_ZOOM, MIN_ZOOM, ScreenPoint, ViewportState, clamp_zoom, is_visible,
    project, project_many, visible_mask,
)


class TestProject(unittest.TestCase):
    def test_ra_12h_is_horizontally_centred(self):
        # sin(0) = 0 puts RA 12h on the vertical axis, cos(0) = 1 a full radius above
        pt = project(12.0, 0.0, ViewportState(), 800, 600)
        self.assertAlmostEqual(pt.x, 400.0)
        self.assertAlmostEqual(pt.y, 300.0 - 800 * 0.4)

    def test_pole_is_canvas_center(self):
        pt = project(12.0, 90.0, ViewportState(), 800, 600)
        self.assertAlmostEqual(pt.x, 400.0)
        self.assertAlmostEqual(pt.y, 300.0)

    def test_deterministic(self):
        vp = ViewportState(zoom=2.3, pan_x=-17.0, pan_y=42.5)
        self.assertEqual(project(18.62, 38.8, vp, 1024, 600),
                         project(18.62, 38.8, vp, 1024, 600))

    def test_formula(self):
        vp = ViewportState(zoom=1.5, pan_x=10.0, pan_y=-20.0)
        w, h = 900, 600
        ra, dec = 6.75, -16.7
        ra_rad = (ra * 15 - 180) * math.pi / 180
        cos_dec = math.cos(dec * math.pi / 180)
        expected_x = w / 2 + 10.0 + math.sin(ra_rad) * cos_dec * w * 1.5 * 0.4
        expected_y = h / 2 - 20.0 - math.cos(ra_rad) * cos_dec * w * 1.5 * 0.4
        pt = project(ra, dec, vp, w, h)
        self.assertAlmostEqual(pt.x, expected_x, places=9)
        self.assertAlmostEqual(pt.y, expected_y, places=9)

    def test_ra_0h_is_below_center(self):
        # RA 0h sits half a turn away from the 12h centre, on the +y side
        pt = project(0.0, 0.0, ViewportState(), 800, 600)
        self.assertAlmostEqual(pt.x, 400.0)
        self.assertAlmostEqual(pt.y, 300.0 + 800 * 0.4)

    def test_poles_collapse_to_projection_center(self):
        vp = ViewportState(pan_x=5.0, pan_y=7.0)
        for ra in (0.0, 6.0, 13.5):
            pt = project(ra, 90.0, vp, 800, 600)
            self.assertAlmostEqual(pt.x, 405.0)
            self.assertAlmostEqual(pt.y, 307.0)

    def test_pan_shifts_every_point(self):
        base = project(3.0, 20.0, ViewportState(), 800, 600)
        moved = project(3.0, 20.0, ViewportState(pan_x=30.0, pan_y=-12.0), 800, 600)
        self.assertAlmostEqual(moved.x - base.x, 30.0)
        self.assertAlmostEqual(moved.y - base.y, -12.0)

    def test_out_of_range_input_is_accepted(self):
        pt = project(31.0, 123.0, ViewportState(), 800, 600)
        self.assertIsInstance(pt, ScreenPoint)
        self.assertTrue(math.isfinite(pt.x) and math.isfinite(pt.y))

    def test_project_many_matches_project(self):
        vp = ViewportState(zoom=3.0, pan_x=-100.0, pan_y=50.0)
        ras = [0.0, 5.24, 12.0, 18.62, 23.9]
        decs = [-89.0, -8.2, 0.0, 38.8, 60.0]
        xs, ys = project_many(ras, decs, vp, 640, 480)
        for ra, dec, x, y in zip(ras, decs, xs, ys):
            pt = project(ra, dec, vp, 640, 480)
            self.assertAlmostEqual(pt.x, float(x), places=9)
            self.assertAlmostEqual(pt.y, float(y), places=9)


class TestVisibility(unittest.TestCase):
    def test_center_is_visible_at_any_zoom(self):
        for w, h in ((800, 600), (320, 240), (1920, 1080)):
            self.assertTrue(is_visible((w / 2, h / 2), w, h))
            self.assertFalse(is_visible((-1000, -1000), w, h))

    def test_margin_is_exclusive(self):
        self.assertTrue(is_visible((-49.9, 10), 800, 600))
        self.assertFalse(is_visible((-50.0, 10), 800, 600))
        self.assertTrue(is_visible((849.9, 649.9), 800, 600))
        self.assertFalse(is_visible((850.0, 300), 800, 600))
        self.assertFalse(is_visible((400, 650.0), 800, 600))

    def test_visible_mask_matches_is_visible(self):
        xs = np.array([-60.0, -10.0, 400.0, 845.0, 900.0])
        ys = np.array([10.0, 700.0, 300.0, 640.0, 300.0])
        mask = visible_mask(xs, ys, 800, 600)
        self.assertEqual(list(mask), [is_visible((x, y), 800, 600) for x, y in zip(xs, ys)])


class TestViewportState(unittest.TestCase):
    def test_defaults(self):
        vp = ViewportState()
        self.assertEqual((vp.zoom, vp.pan_x, vp.pan_y, vp.show_constellations),
                         (1.0, 0.0, 0.0, True))

    def test_copy_is_independent(self):
        vp = ViewportState(zoom=2.0)
        snap = vp.copy()
        vp.zoom = 4.0
        self.assertEqual(snap.zoom, 2.0)

    def test_clamp_zoom(self):
        self.assertEqual(clamp_zoom(0.1), MIN_ZOOM)
        self.assertEqual(clamp_zoom(99.0), MAX_ZOOM)
        self.assertEqual(clamp_zoom(2.5), 2.5)


if __name__ == '__main__':
    unittest.main()
