"""
Unit tests for the amortization schedule.

Each row of the schedule must agree with the single-period formulas, and the
balances must roll forward and land on the target future value.

Version: 0.1.0
Last Updated: 2026-10-18
Status: Active
"""

import os
import unittest
import warnings

import numpy as np

from tvm_formulas.annuity import interest_portion, payment, principal_portion
from tvm_formulas.results import ZeroRateWarning
from tvm_formulas.schedule import AmortizationSchedule, amortization_schedule

DECIMAL_PLACES_FOR_ASSERTIONS: int = 6
BALANCE_DELTA: float = 1e-6


class TestAmortizationScheduleEndOfPeriod(unittest.TestCase):
    """36-month, 10% annual, $8,000 loan with payments at period end."""

    def setUp(self):
        self.rate, self.nper, self.pv = 0.1 / 12, 36, 8000.0
        self.schedule = amortization_schedule(self.rate, self.nper, self.pv)

    def test_shape(self):
        self.assertIsInstance(self.schedule, AmortizationSchedule)
        self.assertEqual(len(self.schedule.period), self.nper)
        self.assertEqual(self.schedule.period[0], 1)
        self.assertEqual(self.schedule.period[-1], self.nper)

    def test_first_row(self):
        self.assertAlmostEqual(self.schedule.interest[0], -66.67, places=2)
        self.assertAlmostEqual(self.schedule.opening_balance[0], self.pv, places=10)

    def test_rows_match_single_period_formulas(self):
        pmt = payment(self.rate, self.nper, self.pv)
        for i, per in enumerate(self.schedule.period):
            with self.subTest(per=int(per)):
                self.assertAlmostEqual(self.schedule.payment[i], pmt, places=10)
                self.assertAlmostEqual(self.schedule.interest[i],
                                       interest_portion(self.rate, int(per), self.nper, self.pv),
                                       places=10)
                self.assertAlmostEqual(self.schedule.principal[i],
                                       principal_portion(self.rate, int(per), self.nper, self.pv),
                                       places=10)

    def test_payment_is_interest_plus_principal(self):
        np.testing.assert_allclose(self.schedule.interest + self.schedule.principal,
                                   self.schedule.payment, rtol=0, atol=1e-9)

    def test_balance_rolls_forward(self):
        np.testing.assert_allclose(self.schedule.opening_balance + self.schedule.principal,
                                   self.schedule.closing_balance, rtol=0, atol=BALANCE_DELTA)

    def test_fully_amortizes(self):
        self.assertAlmostEqual(self.schedule.closing_balance[-1], 0.0, delta=BALANCE_DELTA)
        self.assertAlmostEqual(self.schedule.total_principal, -self.pv, delta=BALANCE_DELTA)

    def test_total_interest(self):
        total_paid = payment(self.rate, self.nper, self.pv) * self.nper
        self.assertAlmostEqual(self.schedule.total_interest, total_paid + self.pv,
                               places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_interest_shrinks_principal_grows(self):
        # Amounts are negative: interest magnitude falls, principal magnitude rises
        self.assertTrue(np.all(np.diff(self.schedule.interest) > 0))
        self.assertTrue(np.all(np.diff(self.schedule.principal) < 0))


class TestAmortizationScheduleVariants(unittest.TestCase):

    def test_balloon_lands_on_future_value(self):
        rate, nper, pv, fv = 0.06 / 12, 60, 50_000.0, -20_000.0
        schedule = amortization_schedule(rate, nper, pv, fv)
        self.assertAlmostEqual(schedule.closing_balance[-1], -fv, delta=BALANCE_DELTA)
        self.assertAlmostEqual(schedule.total_principal, -(pv + fv), delta=BALANCE_DELTA)

    def test_due_at_start(self):
        rate, nper, pv = 0.01, 24, 5000.0
        schedule = amortization_schedule(rate, nper, pv, due_at_start=True)
        np.testing.assert_allclose(schedule.payment, payment(rate, nper, pv, 0.0, True))
        np.testing.assert_allclose(schedule.interest + schedule.principal, schedule.payment,
                                   rtol=0, atol=1e-9)
        self.assertAlmostEqual(schedule.closing_balance[-1], 0.0, delta=BALANCE_DELTA)

    def test_zero_rate_is_straight_line(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ZeroRateWarning)
            schedule = amortization_schedule(0.0, 12, 1200.0)
        np.testing.assert_allclose(schedule.interest, 0.0)
        np.testing.assert_allclose(schedule.principal, -100.0)
        np.testing.assert_allclose(schedule.closing_balance, 1200.0 - 100.0 * schedule.period)

    def test_zero_rate_warns_once(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            amortization_schedule(0.0, 12, 1200.0)
        zero_rate = [w for w in caught if issubclass(w.category, ZeroRateWarning)]
        self.assertEqual(len(zero_rate), 1)
        self.assertEqual(os.path.basename(zero_rate[0].filename), os.path.basename(__file__))

    def test_invalid_nper_raises(self):
        for nper in (0, -12, 2.5):
            with self.subTest(nper=nper):
                with self.assertRaises(ValueError):
                    amortization_schedule(0.01, nper, 1000.0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
