from relief.api import ApiError
from relief.dashboard import (
    ROWS_FAILED, STATS_FAILED, UNREACHABLE, DashboardData, bar_percent,
    fetch_dashboard, filter_rows, max_need, needs_breakdown, stat_cards, top_priorities,
)

ROWS = [
    {"name": "Asha", "contact_number": "0771234567", "priority_1": "water shortage", "token_number": "T-001"},
    {"name": "Ravi", "contact_number": "0719876543", "priority_2": "Bedding", "token_number": "T-002"},
    {"name": "Nimal", "contact_number": None, "priority_3": "Medicine", "token_number": "T-003"},
]

STATS = {
    "code": "OK",
    "cards": {"total_households": 3, "structural_damage": 1, "unable_to_work": 0},
    "charts": {
        "needs_breakdown": {"repairs": 4, "bedding": 2, "cooking": 0, "water": 8, "sanitation": 1},
        "top_priorities": [{"priority": "Water", "count": 5}, {"priority": "Food", "count": 3}],
    },
}


class StubClient:
    def __init__(self, stats=None, rows=None, stats_error=None, rows_error=None):
        self.stats, self.rows = stats, rows
        self.stats_error, self.rows_error = stats_error, rows_error

    def get_today_assessment_stats(self):
        if self.stats_error:
            raise self.stats_error
        return self.stats

    def get_today_assessments(self):
        if self.rows_error:
            raise self.rows_error
        return self.rows


def test_stat_cards_fixed_order_missing_is_zero():
    cards = stat_cards({"cards": {"structural_damage": 2}})
    assert len(cards) == 12
    assert cards[0]["label"] == "Total households"
    assert cards[0]["value"] == 0
    assert cards[1]["value"] == 2
    assert cards[-1]["label"] == "Unable to work"


def test_stat_cards_without_stats():
    assert all(c["value"] == 0 for c in stat_cards(None))


def test_needs_breakdown_order_and_tones():
    needs = needs_breakdown(STATS)
    assert [n["label"] for n in needs] == ["Repairs", "Bedding", "Cooking items", "Water", "Sanitation"]
    assert [n["tone"] for n in needs] == ["emerald", "sky", "violet", "teal", "amber"]
    assert max_need(needs) == 8
    assert [bar_percent(n["value"], 8) for n in needs] == [50, 25, 0, 100, 13]


def test_needs_breakdown_bad_values_count_as_zero():
    needs = needs_breakdown({"charts": {"needs_breakdown": {"repairs": "n/a", "water": None, "bedding": "3"}}})
    assert [n["value"] for n in needs] == [0, 3, 0, 0, 0]


def test_all_zero_needs_scale_to_zero():
    needs = needs_breakdown({})
    top = max_need(needs)
    assert top == 0
    assert [bar_percent(n["value"], top) for n in needs] == [0, 0, 0, 0, 0]


def test_top_priorities_capped_at_five():
    items = [{"priority": f"P{i}", "count": 10 - i} for i in range(7)]
    out = top_priorities({"charts": {"top_priorities": items}})
    assert [p["priority"] for p in out] == ["P0", "P1", "P2", "P3", "P4"]
    assert top_priorities(None) == []


def test_empty_query_returns_all_rows_in_order():
    out = filter_rows(ROWS, "")
    assert out == ROWS
    assert out is not ROWS
    assert filter_rows(ROWS, "   ") == ROWS


def test_search_is_case_insensitive():
    assert filter_rows(ROWS, "WATER") == [ROWS[0]]


def test_search_fields():
    assert filter_rows(ROWS, "t-002") == [ROWS[1]]
    assert filter_rows(ROWS, "0771") == [ROWS[0]]
    assert filter_rows(ROWS, "medicine") == [ROWS[2]]
    assert filter_rows(ROWS, "nobody") == []


def test_search_does_not_touch_source():
    before = [dict(r) for r in ROWS]
    filter_rows(ROWS, "asha")
    assert ROWS == before


def test_fetch_both_ok():
    client = StubClient(stats=STATS, rows={"code": "OK", "data": ROWS})
    data = fetch_dashboard(client)
    assert data.stats == STATS
    assert data.rows == ROWS
    assert data.errors == []


def test_rows_fail_stats_still_shown():
    client = StubClient(stats=STATS, rows_error=ApiError("boom"))
    data = fetch_dashboard(client)
    assert data.stats == STATS
    assert data.rows == []
    assert data.errors == [UNREACHABLE]


def test_server_errors_reported_per_resource():
    client = StubClient(stats={"code": "ERR"}, rows={"code": "ERR", "message": "DB offline"})
    data = fetch_dashboard(client)
    assert data.errors == [STATS_FAILED, "DB offline"]
    assert data.stats is None


def test_failed_slice_keeps_previous_value():
    previous = DashboardData(stats=STATS, rows=ROWS)
    client = StubClient(stats_error=ApiError("timeout"), rows={"code": "OK", "data": ROWS[:1]})
    data = fetch_dashboard(client, previous=previous)
    assert data.stats == STATS
    assert data.rows == ROWS[:1]
    assert data.errors == [UNREACHABLE]


def test_rows_fallback_message():
    data = fetch_dashboard(StubClient(stats=STATS, rows={"code": "NOPE"}))
    assert data.errors == [ROWS_FAILED]


def test_negative_needs_count_as_zero():
    needs = needs_breakdown({"charts": {"needs_breakdown": {"repairs": 4, "water": -1}}})
    assert [n["value"] for n in needs] == [4, 0, 0, 0, 0]
    assert [bar_percent(n["value"], 4) for n in needs] == [100, 0, 0, 0, 0]


def test_bar_percent_stays_in_range():
    assert bar_percent(-1, 4) == 0
    assert bar_percent(9, 4) == 100
    assert bar_percent(3, -2) == 0


def test_top_priorities_keep_missing_label_as_none():
    out = top_priorities({"charts": {"top_priorities": [{"priority": None, "count": "2"}]}})
    assert out == [{"priority": None, "count": 2}]
