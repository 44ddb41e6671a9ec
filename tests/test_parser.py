import pytest

from bistro.models import EventKind
from bistro.parser import ScriptRejected, is_valid_name, parse_positive_int, parse_script, parse_time

HEADER = ["3", "09:00 19:00", "10"]


def rejected_at(lines):
    with pytest.raises(ScriptRejected) as exc:
        parse_script(lines)
    return exc.value.line_no


def test_parse_time_bounds():
    assert parse_time("00:00") == 0
    assert parse_time("23:59") == 1439
    assert parse_time("24:00") is None
    assert parse_time("12:60") is None
    assert parse_time("9:00") is None
    assert parse_time("09:00:00") is None


def test_parse_positive_int():
    assert parse_positive_int("1000", 1000) == 1000
    assert parse_positive_int("0007", 1000) == 7
    assert parse_positive_int("1001", 1000) is None
    assert parse_positive_int("0", 1000) is None
    assert parse_positive_int("-3", 1000) is None
    assert parse_positive_int(" 3", 1000) is None


def test_names():
    assert is_valid_name("client_1-a")
    assert not is_valid_name("Ann")
    assert not is_valid_name("")
    assert not is_valid_name("ann!")


def test_header_accepted():
    script = parse_script(HEADER)
    assert script.schedule.num_tables == 3
    assert script.schedule.open_time == 9 * 60
    assert script.schedule.close_time == 19 * 60
    assert script.schedule.price == 10
    assert script.events == []


@pytest.mark.parametrize(
    "lines, line_no",
    [
        (["0"], 1),
        (["1001", "09:00 19:00", "10"], 1),
        (["abc", "09:00 19:00", "10"], 1),
        ([""], 1),
        ([], 1),
        (["3"], 2),
        (["3", "19:00 09:00", "10"], 2),
        (["3", "09:00 09:00", "10"], 2),
        (["3", "9:00 19:00", "10"], 2),
        (["3", "09:00 19:00"], 3),
        (["3", "09:00 19:00", "0"], 3),
        (["3", "09:00 19:00", "1000000001"], 3),
    ],
)
def test_header_rejections(lines, line_no):
    assert rejected_at(lines) == line_no


def test_max_price_accepted():
    assert parse_script(["1", "09:00 19:00", "1000000000"]).schedule.price == 1_000_000_000


def test_events_parsed_in_order():
    script = parse_script(HEADER + ["09:10 1 ann", "09:10 2 ann 3", "09:20 3 bob", "09:30 4 ann"])
    kinds = [e.kind for e in script.events]
    assert kinds == [EventKind.ARRIVAL, EventKind.SIT, EventKind.WAIT, EventKind.LEAVE]
    assert script.events[1].table == 3
    assert script.events[1].raw == "09:10 2 ann 3"
    assert [e.line_no for e in script.events] == [4, 5, 6, 7]


def test_blank_event_lines_skipped_and_not_counted():
    lines = HEADER + ["", "09:10 1 ann", "", "", "09:05 1 bob"]
    assert rejected_at(lines) == 5


def test_whitespace_only_line_is_malformed():
    assert rejected_at(HEADER + ["09:10 1 ann", "   "]) == 5


def test_non_monotonic_time_rejected():
    assert rejected_at(HEADER + ["10:00 1 ann", "09:59 1 bob"]) == 5


@pytest.mark.parametrize(
    "line",
    [
        "09:10 1 Ann",
        "09:10 1 ann bob",
        "09:10 1",
        "09:10 2 ann",
        "09:10 2 ann 0",
        "09:10 2 ann 4",
        "09:10 2 ann x",
        "09:10 2 ann 1 2",
        "09:10 5 ann",
        "09:10 11 ann",
        "09:10 x ann",
        "9:10 1 ann",
        "25:10 1 ann",
        "09:10",
    ],
)
def test_malformed_event_lines(line):
    assert rejected_at(HEADER + [line]) == 4


def test_event_id_with_leading_zero():
    script = parse_script(HEADER + ["09:10 01 ann"])
    assert script.events[0].kind == EventKind.ARRIVAL


def test_events_before_opening_are_grammatical():
    script = parse_script(HEADER + ["08:00 1 ann"])
    assert script.events[0].timestamp == 8 * 60


def test_rejection_is_value_error():
    with pytest.raises(ValueError):
        parse_script(["0"])


def test_hours_line_ignores_trailing_tokens():
    script = parse_script(["1", "10:00 12:00 extra", "10"])
    assert script.schedule.open_time == 600
    assert script.schedule.close_time == 720


def test_huge_numbers_rejected_at_their_line():
    huge = "1" * 5000
    assert rejected_at([huge, "10:00 12:00", "10"]) == 1
    assert rejected_at(["1", "10:00 12:00", huge]) == 3
    assert rejected_at(["1", "10:00 12:00", "10", f"10:00 {huge} ann"]) == 4
    assert rejected_at(["1", "10:00 12:00", "10", f"10:00 2 ann {huge}"]) == 4
    assert parse_positive_int("0" * 5000 + "7", 1000) == 7


def test_only_ascii_whitespace_separates_tokens():
    assert rejected_at(HEADER + ["09:10 1\u2028ann"]) == 4
    assert rejected_at(HEADER + ["09:10 1\xa0ann"]) == 4
    script = parse_script(HEADER + ["09:10\t1  ann\r"])
    assert script.events[0].client == "ann"
    assert script.events[0].raw == "09:10\t1  ann\r"


def test_carriage_return_line_is_not_blank():
    assert rejected_at(HEADER + ["\r"]) == 4
