"""
Run the usage examples in public docstrings.
"""

import doctest
import sys

import pytest

from src.aggregators.monthly_metrics import calculate_monthly_client_metrics
from src.aggregators.week_bookings import get_bookings_for_week
from src.calculators.pricing_calculator import resolve_project_rate
from src.calculators.time_utils import to_calendar_time
from src.readers.booking_data_reader import BookingDataReader


@pytest.mark.parametrize(
    "obj",
    [
        calculate_monthly_client_metrics,
        get_bookings_for_week,
        resolve_project_rate,
        to_calendar_time,
        BookingDataReader,
    ],
    ids=lambda obj: obj.__name__,
)
def test_docstring_example_runs(obj):
    """Test the example runs as written in the defining module's namespace."""
    module_globals = vars(sys.modules[obj.__module__])
    tests = doctest.DocTestFinder(recurse=False).find(obj, globs=dict(module_globals))
    runner = doctest.DocTestRunner(optionflags=doctest.ELLIPSIS)

    for test in tests:
        runner.run(test)

    assert sum(len(test.examples) for test in tests) > 0
    assert runner.failures == 0
