import pytest

from bootcamp_directory.applications.interfaces.dtos.envelope import PageLink
from bootcamp_directory.applications.use_cases.documents.list_documents import ListDocumentsUseCase, paginate
from bootcamp_directory.domain.exceptions import InvalidQueryError, RepositoryError
from bootcamp_directory.domain.models.query import PageRequest, Populate, QuerySpec
from bootcamp_directory.domain.services.query_translator import QueryTranslator


def _documents(count):
    return [{"id": n, "name": f"Bootcamp {n:02d}"} for n in range(1, count + 1)]


class TestPaginate:
    def test_middle_page_links_both_ways(self):
        envelope = paginate(_documents(10), PageRequest(page=2, limit=10), total=25)

        assert envelope.count == 10
        assert envelope.pagination == {"next": PageLink(page=3, limit=10), "prev": PageLink(page=1, limit=10)}

    @pytest.mark.parametrize(
        "page, limit, total, has_next, has_prev",
        [
            (1, 25, 0, False, False),
            (1, 25, 25, False, False),
            (1, 25, 26, True, False),
            (2, 25, 26, False, True),
            (3, 10, 25, False, True),
            (4, 10, 25, False, True),
            (1, 1, 2, True, False),
        ],
    )
    def test_links_follow_offset_and_total(self, page, limit, total, has_next, has_prev):
        envelope = paginate([], PageRequest(page=page, limit=limit), total)

        assert ("next" in envelope.pagination) is has_next
        assert ("prev" in envelope.pagination) is has_prev
        if has_next:
            assert envelope.pagination["next"] == PageLink(page=page + 1, limit=limit)
        if has_prev:
            assert envelope.pagination["prev"] == PageLink(page=page - 1, limit=limit)

    def test_count_is_the_page_size_not_the_total(self):
        envelope = paginate(_documents(5), PageRequest(page=3, limit=10), total=25)

        assert envelope.count == 5
        assert envelope.success is True

    def test_serialized_shape(self):
        envelope = paginate(_documents(1), PageRequest(page=2, limit=1), total=3)

        assert envelope.model_dump() == {
            "success": True,
            "count": 1,
            "pagination": {"next": {"page": 3, "limit": 1}, "prev": {"page": 1, "limit": 1}},
            "data": [{"id": 1, "name": "Bootcamp 01"}],
        }


class TestListDocumentsUseCase:
    @pytest.fixture
    def use_case(self, mock_document_store):
        return ListDocumentsUseCase(mock_document_store, QueryTranslator())

    @pytest.mark.asyncio
    async def test_execute_builds_envelope(self, use_case, mock_document_store):
        mock_document_store.count.return_value = 25
        mock_document_store.find.return_value = _documents(10)

        envelope = await use_case.execute({"page": "2", "limit": "10"})

        assert envelope.count == 10
        assert envelope.pagination["next"] == PageLink(page=3, limit=10)
        assert envelope.pagination["prev"] == PageLink(page=1, limit=10)

    @pytest.mark.asyncio
    async def test_total_is_counted_with_the_same_filters(self, use_case, mock_document_store):
        mock_document_store.count.return_value = 0
        mock_document_store.find.return_value = []

        await use_case.execute({"average_cost": {"lte": "5000"}, "housing": "true", "select": "name"})

        spec = mock_document_store.find.call_args.args[0]
        assert isinstance(spec, QuerySpec)
        mock_document_store.count.assert_awaited_once_with(spec.filters)
        assert [f.field for f in spec.filters] == ["average_cost", "housing"]
        assert spec.projection == ("name",)

    @pytest.mark.asyncio
    async def test_populate_reaches_the_store(self, use_case, mock_document_store):
        mock_document_store.count.return_value = 0
        mock_document_store.find.return_value = []
        populate = Populate("courses")

        await use_case.execute({}, populate)

        assert mock_document_store.find.call_args.args[0].populate == populate

    @pytest.mark.asyncio
    async def test_translation_errors_skip_the_store(self, use_case, mock_document_store):
        with pytest.raises(InvalidQueryError):
            await use_case.execute({"rating": {"regex": "^4"}})

        mock_document_store.count.assert_not_awaited()
        mock_document_store.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_errors_propagate(self, use_case, mock_document_store):
        mock_document_store.count.return_value = 3
        mock_document_store.find.side_effect = RepositoryError("Database connection failed")

        with pytest.raises(RepositoryError, match="Database connection failed"):
            await use_case.execute({})
