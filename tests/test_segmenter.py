from decimal import Decimal

from budget_tracker.models import ParsedTransaction
from budget_tracker.segmenter import BLOCK_STRIDE, segment, split_lines


def test_single_block_example():
    rows = segment("Torsdag 07.08.25\nRema 1000\n-111,00\n")
    assert rows == [
        ParsedTransaction(
            date="2025-08-07",
            description="Rema 1000",
            amount=Decimal("-111.00"),
            category="Essentials",
        )
    ]
    assert rows[0].amount == -111


def test_well_formed_blocks_round_trip(statement_text):
    rows = segment(statement_text)
    assert [(r.date, r.description, r.amount, r.category) for r in rows] == [
        ("2025-08-07", "Rema 1000", Decimal("-111.00"), "Essentials"),
        ("2025-08-08", "Netflix", Decimal("-129.00"), "Variable"),
        ("2025-08-09", "Arbeidsgiver AS", Decimal("32500.00"), "Income"),
    ]


def test_category_hint_overrides_description_keywords():
    text = "Mandag 04.08.25\nRema 1000\n-50,00\nSpotify\n"
    (row,) = segment(text)
    assert row.category == "Variable"


def test_numeric_category_line_is_ignored():
    # Amount on both candidate lines: the first one wins and the second is not
    # used as a category hint.
    text = "Mandag 04.08.25\nNetflix\n-129,00\n-1,00\n"
    (row,) = segment(text)
    assert row.amount == Decimal("-129.00")
    assert row.category == "Variable"


def test_amount_on_fourth_line_frees_third_as_category():
    text = "Mandag 04.08.25\nArbeidsgiver AS\nLønn\n32 500,00\n"
    (row,) = segment(text)
    assert row.amount == Decimal("32500.00")
    # "Arbeidsgiver AS" alone would be Other; the freed third line decides.
    assert row.category == "Income"


def test_zero_or_missing_amount_is_rejected():
    assert segment("Mandag 04.08.25\nRema 1000\nkr\nMatvarer\n") == []
    assert segment("Mandag 04.08.25\nRema 1000\n0,00\n") == []


def test_missing_description_is_rejected():
    assert segment("Mandag 04.08.25\n") == []


def test_noise_lines_are_skipped():
    text = "Saldo\nKonto 1234\nTirsdag 05.08.25\nKiwi\n-42,50\n\n   \nSide 1 av 2\n"
    (row,) = segment(text)
    assert row.description == "Kiwi"
    assert row.amount == Decimal("-42.50")


def test_stride_is_fixed_at_four_lines():
    # The first block is only three lines tall, so the fixed stride lands on
    # the second block's description and that block is lost.
    text = (
        "Mandag 04.08.25\nKiwi\n-10,00\n"
        "Tirsdag 05.08.25\nMeny\n-20,00\nMatvarer\n"
    )
    rows = segment(text)
    assert BLOCK_STRIDE == 4
    assert [r.description for r in rows] == ["Kiwi"]


def test_memory_is_consulted_for_categories():
    rows = segment("Mandag 04.08.25\nRema 1000\n-10,00\n", {"rema 1000": "Savings"})
    assert rows[0].category == "Savings"


def test_empty_and_garbage_text_yield_no_records():
    assert segment("") == []
    assert segment("no transactions here\njust text") == []


def test_split_lines_trims_and_drops_blanks():
    assert split_lines("  a \r\n\n b\n   \n") == ["a", "b"]


def test_only_newlines_split_lines():
    # A form feed inside a line must not shift the 4-line stride.
    text = "Mandag 04.08.25\nRema\x0c1000\n-10,00\nMatvarer\nTirsdag 05.08.25\nKiwi\n-20,00\n"
    rows = segment(text)
    assert [r.description for r in rows] == ["Rema\x0c1000", "Kiwi"]
    assert split_lines("a\x0cb c\nd") == ["a\x0cb c", "d"]
