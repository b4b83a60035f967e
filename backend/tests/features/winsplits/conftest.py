"""
Fixtures for the winsplits tests.

Sample exports live in winsplits_exports.py.
"""

import pytest

from splitanalysis.shared.constants import TimeDataType

from winsplits_exports import ACTUAL_EXPORT, RELATIVE_EXPORT


@pytest.fixture
def relative_export():
    return RELATIVE_EXPORT


@pytest.fixture
def actual_export():
    return ACTUAL_EXPORT


@pytest.fixture(params=[TimeDataType.RELATIVE, TimeDataType.ACTUAL], ids=["relative", "actual"])
def export_and_type(request):
    """Both exports of the same race, with their time data type."""
    if request.param is TimeDataType.RELATIVE:
        return RELATIVE_EXPORT, request.param
    return ACTUAL_EXPORT, request.param
