"""Tests for filtering and pagination of transaction rows."""

from __future__ import annotations

import pandas as pd
import pytest
from dashboard import normalize, synth, view

RECORDS = [
    ("t1", "Kopi Susu", "QRIS", "SUCCESS", 12_000, 600),
    ("t2", "Teh Botol", "CASH", "SUCCESS", 7_000, 500),
    ("t3", "Kopi Hitam", "GOPAY", "FAILED", 10_000, 400),
    ("t4", "Roti Coklat", "QRIS", "PENDING", 9_000, 300),
    ("t5", "Air Mineral", "CASH", "FAILED", 5_000, 200),
]


def _frame() -> pd.DataFrame:
    data = {
        txn_id: {
            "product": {"name": name},
            "payment": {"amount": amount, "method": method, "detail": {"transaction_status": status}},
            "time": {"firestore_timestamp": {"_seconds": seconds}},
        }
        for txn_id, name, method, status, amount, seconds in RECORDS
    }
    return normalize.to_frame(normalize.normalize_transactions(data))


def _ids(frame: pd.DataFrame) -> list[str]:
    return frame["id"].tolist()


def test_empty_global_filter_returns_input_unchanged() -> None:
    frame = _frame()
    pd.testing.assert_frame_equal(view.filter_rows(frame, ""), frame)
    pd.testing.assert_frame_equal(view.filter_rows(frame, "", {"product_name": ""}), frame)


def test_global_filter_is_case_insensitive_across_fields() -> None:
    frame = _frame()

    assert _ids(view.filter_rows(frame, "qris")) == ["t1", "t4"]
    assert _ids(view.filter_rows(frame, "kopi")) == ["t1", "t3"]
    assert _ids(view.filter_rows(frame, "Failed")) == ["t3", "t5"]
    assert view.filter_rows(frame, "no-such-thing").empty


def test_global_filter_ignores_other_fields() -> None:
    frame = _frame()
    # "t2" is an id, not one of the globally searched fields.
    assert view.filter_rows(frame, "t2").empty


def test_column_filters_are_combined_with_and() -> None:
    frame = _frame()

    assert _ids(view.filter_rows(frame, column_filters={"payment_method": "cash"})) == ["t2", "t5"]
    assert _ids(
        view.filter_rows(frame, column_filters={"payment_method": "cash", "transaction_status": "fail"})
    ) == ["t5"]


def test_column_filter_matches_numbers_as_displayed() -> None:
    frame = _frame()
    assert _ids(view.filter_rows(frame, column_filters={"payment_amount": "12000"})) == ["t1"]
    assert view.filter_rows(frame, column_filters={"payment_amount": "12000.0"}).empty


def test_combined_filters_equal_intersection() -> None:
    frame = normalize.normalize_payload(synth.generate_payload(rows=150, seed=5))
    global_filter = "qris"
    column_filters = {"transaction_status": "success"}

    both = view.filter_rows(frame, global_filter, column_filters)
    global_only = set(_ids(view.filter_rows(frame, global_filter)))
    column_only = set(_ids(view.filter_rows(frame, column_filters=column_filters)))

    assert set(_ids(both)) == global_only & column_only
    expected_order = [txn_id for txn_id in _ids(frame) if txn_id in global_only & column_only]
    assert _ids(both) == expected_order


def test_unknown_filter_column_raises() -> None:
    with pytest.raises(ValueError):
        view.filter_rows(_frame(), column_filters={"nope": "x"})


def test_filter_state_applies_both_filters() -> None:
    state = view.FilterState("kopi", {"payment_method": "gopay"})
    assert state.is_active
    assert _ids(state.apply(_frame())) == ["t3"]
    assert not view.FilterState().is_active


def test_pages_reassemble_filtered_sequence() -> None:
    frame = normalize.normalize_payload(synth.generate_payload(rows=23, seed=9))
    size = 10
    pages = [view.paginate(frame, index, size) for index in range(view.page_count(len(frame), size))]

    assert [len(page) for page in pages] == [10, 10, 3]
    pd.testing.assert_frame_equal(pd.concat(pages), frame)
    assert view.paginate(frame, 3, size).empty
    assert view.paginate(frame, 99, size).empty


def test_page_count_and_clamping() -> None:
    assert view.page_count(0, 10) == 1
    assert view.page_count(10, 10) == 1
    assert view.page_count(11, 10) == 2
    assert view.clamp_page_index(5, 23, 10) == 2
    assert view.clamp_page_index(-3, 23, 10) == 0
    assert view.clamp_page_index(4, 0, 10) == 0

    with pytest.raises(ValueError):
        view.paginate(_frame(), -1, 10)
    with pytest.raises(ValueError):
        view.page_count(5, 0)


def test_page_state_navigation_stays_in_range() -> None:
    page = view.PageState(size=10)
    assert not page.has_previous
    assert page.previous().index == 0

    page = page.next(23).next(23)
    assert page.index == 2
    assert not page.has_next(23)
    assert page.next(23).index == 2
    assert page.previous().index == 1

    # Shrinking the filtered set pulls the index back to the last page.
    assert page.clamp(12).index == 1
    assert page.clamp(0).index == 0
    assert len(view.PageState(index=1, size=2).slice(_frame())) == 2
