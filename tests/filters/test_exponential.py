import unittest

import numpy as np

from dspfilters.core.types import Environment
from dspfilters.filters.exponential import (
    ExponentialSmoothingFilter,
    ExponentialSmoothingSettings,
)


class TestExponentialSmoothingFilter(unittest.TestCase):
    def make_filter(self, **kwargs) -> ExponentialSmoothingFilter:
        return ExponentialSmoothingFilter(ExponentialSmoothingSettings(**kwargs))

    def test_first_output_seeded_with_standard_factor(self):
        flt = self.make_filter(environment=Environment.PHYSICAL, standard_factor=0.25)
        out = flt.process([4.0, 4.0])

        self.assertEqual(out[0], 1.0)

    def test_radio_technical_switches_on_delta(self):
        flt = self.make_filter(
            environment=Environment.RADIO_TECHNICAL,
            standard_factor=0.25,
            maximal_factor=0.75,
            delta_threshold=5.0,
        )
        out = flt.process([10.0, 10.0, 20.0, 21.0])

        np.testing.assert_allclose(out, [2.5, 8.125, 17.03125, 18.0234375])

    def test_physical_damps_large_moves(self):
        flt = self.make_filter(
            environment=Environment.PHYSICAL,
            physical_factor=0.5,
            standard_factor=0.5,
        )
        # variance of [0, 2, 0, 2] is 1
        out = flt.process([0.0, 2.0, 0.0, 2.0])

        np.testing.assert_allclose(out, [0.0, 0.5, 0.25, 0.75])

    def test_undefined_triggers_at_twice_variance(self):
        flt = self.make_filter(
            environment=Environment.UNDEFINED,
            standard_factor=0.25,
            maximal_factor=0.75,
            delta_threshold=1.0,
        )
        # variance 18.75: no delta reaches 37.5, delta_threshold is ignored
        out = flt.process([0.0, 10.0, 10.0, 10.0])

        np.testing.assert_allclose(out, [0.0, 2.5, 4.375, 5.78125])

    def test_radio_technical_delta_at_threshold_uses_maximal_factor(self):
        flt = self.make_filter(
            environment=Environment.RADIO_TECHNICAL,
            standard_factor=0.25,
            maximal_factor=0.75,
            delta_threshold=5.0,
        )
        # seed 1.0, delta |6 - 1| equals the threshold
        out = flt.process([4.0, 6.0])

        np.testing.assert_array_equal(out, [1.0, 4.75])

    def test_undefined_delta_at_twice_variance_uses_standard_factor(self):
        flt = self.make_filter(
            environment=Environment.UNDEFINED,
            standard_factor=0.25,
            maximal_factor=0.75,
        )
        # variance 1, delta |2 - 0| equals 2 * variance
        out = flt.process([0.0, 2.0])

        np.testing.assert_array_equal(out, [0.0, 0.5])

    def test_physical_delta_at_variance_keeps_full_factor(self):
        flt = self.make_filter(environment=Environment.PHYSICAL, physical_factor=0.5)
        # variance 4, delta |4 - 0| equals the variance
        out = flt.process([0.0, 4.0])

        np.testing.assert_array_equal(out, [0.0, 2.0])

    def test_factor_sum_mismatch_leaves_output_untouched(self):
        for environment in (Environment.RADIO_TECHNICAL, Environment.UNDEFINED):
            with self.subTest(environment=environment):
                flt = self.make_filter(
                    environment=environment,
                    standard_factor=0.5,
                    maximal_factor=0.6,
                )
                flt.filtered.set_signal([1.0, 2.0, 3.0])
                flt.set_signal([4.0, 5.0, 6.0])
                flt.apply_filter()

                np.testing.assert_array_equal(flt.get_filtered_signal(), [1.0, 2.0, 3.0])

    def test_physical_ignores_factor_sum(self):
        flt = self.make_filter(
            environment=Environment.PHYSICAL,
            standard_factor=0.9,
            maximal_factor=0.9,
        )
        out = flt.process([1.0, 1.0, 1.0])

        self.assertEqual(len(out), 3)

    def test_output_stays_within_signal_range(self):
        samples = np.random.default_rng(9).uniform(1.0, 2.0, size=64)
        flt = self.make_filter(
            environment=Environment.RADIO_TECHNICAL,
            standard_factor=0.5,
            maximal_factor=0.5,
        )
        out = flt.process(samples)

        self.assertTrue(np.all(out[1:] <= samples.max()))
        self.assertTrue(np.all(out[1:] >= out[0]))

    def test_empty_signal_is_noop(self):
        flt = self.make_filter()
        flt.set_signal([])
        flt.apply_filter()

        self.assertEqual(len(flt.filtered), 0)


if __name__ == "__main__":
    unittest.main()
