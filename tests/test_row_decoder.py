"""Tests for decoding tab-delimited extract lines."""

from src.dart_revenue import AmountParse, decode_line, iter_filing_rows

from filing_helpers import make_line


def test_decode_line_strips_brackets_and_separators():
    row = decode_line(make_line("[005930]", "삼성전자", "ifrs-full_Revenue", "매출액", "1,000,000"))

    assert row is not None
    assert row.entity_code == "005930"
    assert row.entity_name == "삼성전자"
    assert row.account_id == "ifrs-full_Revenue"
    assert row.account_label == "매출액"
    assert row.amount == 1_000_000
    assert isinstance(row.amount, int)


def test_decode_line_skips_short_lines():
    assert decode_line("a\tb\tc") is None
    assert decode_line("") is None
    assert decode_line("   \r\n") is None


def test_decode_line_skips_missing_essential_fields():
    assert decode_line(make_line("", "삼성전자", "ifrs-full_Revenue", "매출액", "100")) is None
    assert decode_line(make_line("[005930]", "삼성전자", "", "매출액", "100")) is None
    assert decode_line(make_line("[005930]", "삼성전자", "ifrs-full_Revenue", "매출액", "")) is None


def test_decode_line_skips_unparsable_amounts():
    assert decode_line(make_line("[005930]", "삼성전자", "ifrs-full_Revenue", "매출액", "n/a")) is None


def test_decode_line_keeps_negative_and_fractional_amounts():
    row = decode_line(make_line("[000660]", "SK하이닉스", "dart_OperatingIncomeLoss", "영업손실", "-1,234.5"))

    assert row is not None
    assert row.amount == -1234.5


def test_amount_parse_reports_failures_explicitly():
    assert AmountParse.parse("1,000").ok
    assert AmountParse.parse("1,000").value == 1000

    failed = AmountParse.parse("abc")
    assert not failed.ok
    assert failed.value is None
    assert "abc" in failed.error

    assert not AmountParse.parse("NaN").ok
    assert not AmountParse.parse("").ok


def test_iter_filing_rows_reads_cp949(write_filing):
    path = write_filing(
        "sample.txt",
        [
            make_line("[005930]", "삼성전자", "ifrs-full_Revenue", "매출액", "1,000,000"),
            "broken\tline",
            make_line("[000660]", "SK하이닉스", "ifrs-full_Revenue", "매출액", "500"),
        ],
    )

    rows = list(iter_filing_rows(path))

    # Header has no parsable amount and is dropped along with the broken line.
    assert [row.entity_code for row in rows] == ["005930", "000660"]
    assert rows[1].entity_name == "SK하이닉스"
    assert rows[1].amount == 500


def test_amount_parse_rejects_amounts_beyond_float_range():
    huge = AmountParse.parse("1E400")
    assert not huge.ok
    assert "out of range" in huge.error

    assert decode_line(make_line("[000660]", "SK하이닉스", "ifrs-full_Revenue", "매출액", "1E400")) is None
