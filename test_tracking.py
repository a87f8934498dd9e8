import unittest
from datetime import date

from pediacalc import tracking
from pediacalc.constants import ProgressBand, Trend
from pediacalc.models import RespiratoryScore

class TestWardTracking(unittest.TestCase):

    def setUp(self):
        """7-day amoxicillin course started on 1 March."""
        self.start = date(2024, 3, 1)
        self.planned = 7

    def test_01_current_day(self):
        print("\nTEST 1: Treatment day counter")
        self.assertEqual(tracking.current_day(self.start, today=self.start), 1)
        self.assertEqual(tracking.current_day(self.start, today=date(2024, 3, 7)), 7)
        self.assertEqual(tracking.current_day("2024-03-01", today="2024-03-03"), 3)
        # Started tomorrow: still day 1
        self.assertEqual(tracking.current_day(self.start, today=date(2024, 2, 28)), 1)

    def test_02_end_date(self):
        self.assertEqual(tracking.end_date(self.start, self.planned), date(2024, 3, 7))

    def test_03_ending_soon_boundaries(self):
        print("\nTEST 3: Ending-soon window")
        expected = {4: False, 5: True, 6: True, 7: False, 8: False}
        for day, soon in expected.items():
            self.assertEqual(tracking.is_ending_soon(day, self.planned), soon, f"day {day}")
        self.assertFalse(tracking.has_ended(6, self.planned))
        self.assertTrue(tracking.has_ended(7, self.planned))

    def test_04_progress(self):
        self.assertEqual(tracking.progress_band(3, self.planned), ProgressBand.EARLY)
        self.assertEqual(tracking.progress_band(4, self.planned), ProgressBand.MID)
        self.assertEqual(tracking.progress_band(6, self.planned), ProgressBand.LATE)
        self.assertEqual(tracking.progress_percent(10, self.planned), 100.0)

    def test_05_track_and_refresh(self):
        course = tracking.track_antibiotic("Amoxicillin", self.start, self.planned, today=date(2024, 3, 3))
        self.assertEqual(tracking.format_antibiotic_display(course), "D3/7")

        refreshed = tracking.update_antibiotic_tracking([course], today=date(2024, 3, 6))
        self.assertEqual(refreshed[0].current_day, 6)
        self.assertEqual(refreshed[0].end_date, date(2024, 3, 7))

    def test_06_score_delta(self):
        print("\nTEST 6: Respiratory score trend")
        better = tracking.score_delta(RespiratoryScore(at_admission=8, current=5))
        self.assertEqual((better.delta, better.trend, better.color), (-3, Trend.DOWN, "green"))

        worse = tracking.score_delta(RespiratoryScore(at_admission=5, current=8))
        self.assertEqual((worse.trend, worse.color), (Trend.UP, "red"))

        same = tracking.score_delta(RespiratoryScore(at_admission=5, current=5))
        self.assertEqual((same.trend, same.color), (Trend.FLAT, "gray"))

    def test_07_length_of_stay(self):
        days = tracking.days_hospitalized("2024-03-01", today="2024-03-04")
        self.assertEqual(days, 3)
        self.assertEqual(tracking.days_hospitalized(self.start, discharge_date=date(2024, 3, 10)), 9)

        colors = {0: "green", 6: "green", 7: "yellow", 14: "orange", 21: "red"}
        for d, color in colors.items():
            self.assertEqual(tracking.hospitalization_color(d), color)

        self.assertEqual(tracking.format_days_hospitalized(0), "Today")
        self.assertEqual(tracking.format_days_hospitalized(1), "1 day")
        self.assertEqual(tracking.format_days_hospitalized(5), "5 days")

    def test_08_pediatric_age(self):
        print("\nTEST 8: Age labels")
        born = date(2024, 3, 1)
        fmt = tracking.format_pediatric_age
        self.assertEqual(fmt(born, today=born), "Newborn")
        self.assertEqual(fmt(born, today=date(2024, 3, 15)), "14 days")
        self.assertEqual(fmt(born, today=date(2024, 3, 29)), "28 days")
        self.assertEqual(fmt(date(2024, 1, 1), today=date(2024, 2, 5)), "1 month")
        self.assertEqual(fmt(born, today=date(2024, 6, 15)), "3 months")
        self.assertEqual(fmt(date(2020, 3, 20), today=date(2024, 3, 20)), "4 years")
        self.assertEqual(fmt(date(2020, 1, 10), today=date(2024, 3, 20)), "4 years and 2 months")

        short = tracking.format_pediatric_age_short
        self.assertEqual(short(born, today=born), "NB")
        self.assertEqual(short(born, today=date(2024, 3, 15)), "14d")
        self.assertEqual(short(born, today=date(2024, 6, 15)), "3m")
        self.assertEqual(short(date(2020, 1, 10), today=date(2024, 3, 20)), "4y 2m")

if __name__ == '__main__':
    unittest.main()
