"""Property-based tests for trim-then-lookup replacement.

These verify invariants that must hold for any value and table, not just
the hand-picked examples in core/test_replace.py.
"""

from hypothesis import given
from hypothesis import strategies as st

from tamperline.contracts import ReplacementTable, TrimSpec
from tamperline.core.allowed_values import parse_table
from tamperline.core.replace import replace_pair

texts = st.text(max_size=30)
tables = st.dictionaries(st.text(min_size=1, max_size=10), st.text(max_size=10), max_size=5).map(ReplacementTable)
trims = st.builds(
    TrimSpec,
    left=st.none() | st.integers(min_value=0, max_value=40),
    right=st.none() | st.integers(min_value=0, max_value=40),
)


class TestReplacePairProperties:
    @given(value=texts, trim=trims)
    def test_empty_table_is_identity(self, value: str, trim: TrimSpec) -> None:
        assert replace_pair(value, ReplacementTable.empty(), trim) == value

    @given(value=texts, table=tables, trim=trims)
    def test_unmatched_probe_is_identity(self, value: str, table: ReplacementTable, trim: TrimSpec) -> None:
        if trim.probe(value) not in table:
            assert replace_pair(value, table, trim) == value

    @given(value=texts, table=tables, trim=trims)
    def test_matched_probe_is_rewritten(self, value: str, table: ReplacementTable, trim: TrimSpec) -> None:
        probe = trim.probe(value)
        if probe and probe in table:
            assert replace_pair(value, table, trim) == value.replace(probe, table[probe])

    @given(value=st.text(min_size=1, max_size=30), replacement=texts)
    def test_exact_key_without_trim(self, value: str, replacement: str) -> None:
        assert replace_pair(value, ReplacementTable({value: replacement})) == replacement

    @given(value=texts, trim=trims)
    def test_probe_is_a_prefix(self, value: str, trim: TrimSpec) -> None:
        assert value.startswith(trim.probe(value))


class TestParseTableProperties:
    @given(lines=st.lists(st.text(alphabet=st.characters(blacklist_characters="|\n\r"), max_size=10), max_size=8))
    def test_positional_keys_are_line_indexes(self, lines: list[str]) -> None:
        table = parse_table("\n".join(lines))

        expected = {str(i): line.strip() for i, line in enumerate(lines) if line.strip()}
        assert table.to_dict() == expected
