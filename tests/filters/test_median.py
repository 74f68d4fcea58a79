import unittest

import numpy as np

from dspfilters.filters.median import MedianFilter, MedianSettings, window_order_statistic


class TestWindowOrderStatistic(unittest.TestCase):
    def test_single_element(self):
        self.assertEqual(window_order_statistic([5.0]), 5.0)

    def test_upper_middle_element(self):
        self.assertEqual(window_order_statistic([2.0, 1.0]), 2.0)
        self.assertEqual(window_order_statistic([3.0, 1.0, 2.0]), 3.0)
        self.assertEqual(window_order_statistic([4.0, 1.0, 3.0, 2.0]), 3.0)


class TestMedianFilter(unittest.TestCase):
    def make_filter(self, window_size: int) -> MedianFilter:
        return MedianFilter(MedianSettings(window_size=window_size))

    def test_spike_signal(self):
        out = self.make_filter(3).process([1.0, 5.0, 2.0, 8.0, 3.0])

        np.testing.assert_array_equal(out, [5.0, 8.0, 8.0, 8.0, 8.0])

    def test_sorted_input_picks_index_ceil_half(self):
        samples = np.arange(1.0, 8.0)
        for window in (3, 4):
            with self.subTest(window=window):
                out = self.make_filter(window).process(samples)
                offset = -(-window // 2)
                for i in range(len(samples) - window + 1):
                    self.assertEqual(out[i], samples[i + offset])

    def test_tail_repeats_previous_output(self):
        out = self.make_filter(3).process([4.0, 1.0, 3.0, 2.0])

        np.testing.assert_array_equal(out, [4.0, 3.0, 3.0, 3.0])

    def test_signal_shorter_than_window_uses_tail(self):
        out = self.make_filter(5).process([3.0, 1.0, 2.0])

        np.testing.assert_array_equal(out, [3.0, 2.0, 2.0])

    def test_window_one_is_identity(self):
        samples = [3.0, -1.0, 7.5, 0.0]
        out = self.make_filter(1).process(samples)

        np.testing.assert_array_equal(out, samples)

    def test_output_length_matches_input(self):
        samples = np.random.default_rng(2).normal(size=33)
        out = self.make_filter(6).process(samples)

        self.assertEqual(len(out), len(samples))
        self.assertTrue(set(out.tolist()) <= set(samples.tolist()))

    def test_invalid_window_leaves_output_untouched(self):
        flt = self.make_filter(0)
        flt.set_signal([1.0, 2.0])
        flt.apply_filter()

        self.assertEqual(len(flt.get_filtered_signal()), 0)


if __name__ == "__main__":
    unittest.main()
