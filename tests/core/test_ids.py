from __future__ import annotations

import pytest

from daily_report_system.core.exceptions import InvalidIdentifierError
from daily_report_system.core.ids import (
    create_daily_report_id,
    create_user_id,
    generate_daily_report_id,
    generate_user_id,
    is_valid_id,
)


def test_generated_ids_are_valid_and_unique():
    ids = {generate_user_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(is_valid_id(i) for i in ids)
    assert is_valid_id(generate_daily_report_id())


def test_create_accepts_a_valid_ulid():
    value = "01ARZ3NDEKTSV4RRFFQ69G5FAV"
    assert create_user_id(value) == value


@pytest.mark.parametrize(
    "value",
    [
        "",
        "short",
        "01ARZ3NDEKTSV4RRFFQ69G5FA",  # 25 chars
        "01ARZ3NDEKTSV4RRFFQ69G5FAVX",  # 27 chars
        "01ARZ3NDEKTSV4RRFFQ69G5FAI",  # I is not in the alphabet
        "01ARZ3NDEKTSV4RRFFQ69G5FAV\n",  # trailing newline
        "81ARZ3NDEKTSV4RRFFQ69G5FAV",  # timestamp overflow
        None,
        12345,
    ],
)
def test_create_rejects_malformed_ids(value):
    assert not is_valid_id(value)
    with pytest.raises(InvalidIdentifierError):
        create_daily_report_id(value)
