import pytest

from bootcamp_directory.domain.exceptions import InvalidQueryError
from bootcamp_directory.domain.models.query import (
    Comparison,
    ComparisonOperator,
    FieldFilter,
    PageRequest,
    Populate,
    Scalar,
    SortKey,
)
from bootcamp_directory.domain.services.query_translator import MAX_OFFSET, QueryTranslator


class TestQueryTranslator:
    @pytest.fixture
    def translator(self):
        return QueryTranslator(default_limit=25, max_limit=1000, default_sort="-created_at")

    def test_reserved_keys_never_reach_filter(self, translator):
        spec = translator.translate({"select": "name", "sort": "name", "page": "2", "limit": "5", "housing": "true"})

        assert [f.field for f in spec.filters] == ["housing"]

    def test_scalar_filter(self, translator):
        spec = translator.translate({"name": "Devworks Bootcamp"})

        assert spec.filters == (FieldFilter("name", Scalar("Devworks Bootcamp")),)

    def test_comparison_filter(self, translator):
        spec = translator.translate({"price": {"gt": "100"}})

        assert spec.filters == (FieldFilter("price", Comparison(ComparisonOperator.GT, "100")),)

    def test_every_comparison_operator_is_rewritten(self, translator):
        """Two filter clauses with different operators must both reach the store"""
        spec = translator.translate({"price": {"gt": "100"}, "rating": {"gte": "4"}})

        assert spec.filters == (
            FieldFilter("price", Comparison(ComparisonOperator.GT, "100")),
            FieldFilter("rating", Comparison(ComparisonOperator.GTE, "4")),
        )

    def test_range_on_a_single_field(self, translator):
        spec = translator.translate({"average_cost": {"gte": "1000", "lt": "5000"}})

        operators = [f.condition.operator for f in spec.filters]
        assert operators == [ComparisonOperator.GTE, ComparisonOperator.LT]

    def test_in_operand_is_split_on_commas(self, translator):
        spec = translator.translate({"minimum_skill": {"in": "beginner,intermediate"}})

        assert spec.filters[0].condition == Comparison(ComparisonOperator.IN, ("beginner", "intermediate"))

    def test_in_operand_accepts_a_sequence(self, translator):
        spec = translator.translate({"minimum_skill": {"in": ["beginner", "advanced"]}})

        assert spec.filters[0].condition.value == ("beginner", "advanced")

    def test_operator_keyword_as_a_value_is_not_rewritten(self, translator):
        spec = translator.translate({"title": "in", "careers": "gt"})

        assert spec.filters == (FieldFilter("title", Scalar("in")), FieldFilter("careers", Scalar("gt")))

    def test_unknown_operator_is_rejected(self, translator):
        with pytest.raises(InvalidQueryError, match="Unsupported operator 'ne'"):
            translator.translate({"price": {"ne": "100"}})

    def test_select_is_split_on_commas(self, translator):
        spec = translator.translate({"select": "name, email,,description"})

        assert spec.projection == ("name", "email", "description")

    def test_no_select_means_full_documents(self, translator):
        assert translator.translate({}).projection is None

    def test_sort_tokens(self, translator):
        spec = translator.translate({"sort": "name,-age"})

        assert spec.sort == (SortKey("name"), SortKey("age", descending=True))

    def test_default_sort_is_newest_first(self, translator):
        spec = translator.translate({})

        assert spec.sort == (SortKey("created_at", descending=True),)

    def test_default_pagination(self, translator):
        spec = translator.translate({})

        assert spec.page == PageRequest(page=1, limit=25)
        assert spec.offset == 0

    @pytest.mark.parametrize(
        "page, limit",
        [("abc", "xyz"), ("0", "0"), ("-3", "-10"), ("", ""), ("1.5", "2.5")],
    )
    def test_malformed_pagination_falls_back_to_defaults(self, translator, page, limit):
        spec = translator.translate({"page": page, "limit": limit})

        assert spec.page == PageRequest(page=1, limit=25)

    def test_limit_is_clamped(self, translator):
        spec = translator.translate({"limit": "5000"})

        assert spec.limit == 1000

    @pytest.mark.parametrize("limit", ["1", "25", "1000"])
    def test_huge_page_keeps_offset_within_64_bits(self, translator, limit):
        spec = translator.translate({"page": "99999999999999999999", "limit": limit})

        assert spec.page.page > 1
        assert spec.offset + spec.limit <= MAX_OFFSET
        assert spec.offset > MAX_OFFSET - 2 * spec.limit

    @pytest.mark.parametrize("page, limit, offset", [(1, 25, 0), (2, 10, 10), (3, 7, 14), (10, 1, 9)])
    def test_offset(self, translator, page, limit, offset):
        spec = translator.translate({"page": str(page), "limit": str(limit)})

        assert spec.offset == offset
        assert spec.offset == (spec.page.page - 1) * spec.limit

    def test_populate_is_carried_on_the_query(self, translator):
        populate = Populate("bootcamp", ("name", "description"))

        assert translator.translate({}, populate).populate is populate

    def test_input_mapping_is_not_mutated(self, translator):
        params = {"select": "name", "minimum_skill": {"in": "beginner,advanced"}}

        translator.translate(params)

        assert params == {"select": "name", "minimum_skill": {"in": "beginner,advanced"}}
