import unittest
from unittest.mock import MagicMock

from resume_tailor.core.progress import STAGE_WINDOWS, StageWindow, interpolate, scoped_progress


class TestProgress(unittest.TestCase):

    def test_interpolate(self):
        self.assertEqual(interpolate(40, 30, 0), 40)
        self.assertEqual(interpolate(40, 30, 50), 55)
        self.assertEqual(interpolate(40, 30, 100), 70)

    def test_interpolate_clamps_local_percentage(self):
        self.assertEqual(interpolate(20, 20, 150), 40)
        self.assertEqual(interpolate(20, 20, -10), 20)

    def test_windows_cover_the_bar_in_order(self):
        windows = list(STAGE_WINDOWS.values())
        for previous, current in zip(windows, windows[1:]):
            self.assertEqual(previous.start + previous.weight, current.start)
        last = windows[-1]
        self.assertEqual(last.start + last.weight, 100)

    def test_apply_is_the_widest_stage(self):
        self.assertEqual(max(STAGE_WINDOWS, key=lambda name: STAGE_WINDOWS[name].weight), "apply")

    def test_scoped_progress(self):
        on_progress = MagicMock()
        report = scoped_progress(on_progress, StageWindow(70, 20))

        report(25, "Validating resume quality...")

        on_progress.assert_called_once_with(75, "Validating resume quality...")


if __name__ == '__main__':
    unittest.main()
