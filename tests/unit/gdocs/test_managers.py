"""
Unit tests for the gdocs managers.

BatchOperationManager and MarkdownDocumentManager run against in-memory
fakes of the document and folder stores; no Google API is involved.
"""

import pytest

from core.container import DocumentStoreProtocol, FolderStoreProtocol
from core.errors import BatchSubmissionError, InvalidRequestError
from gdocs.batching import chunk_requests
from gdocs.converter import MarkdownToDocsConverter
from gdocs.docs_store import DocumentInfo
from gdocs.managers import BatchOperationManager, MarkdownDocumentManager, ValidationManager
from gdocs.mutations import InsertText, SetParagraphStyle
from gdocs.request_builder import ImageSpec


class FakeDocumentStore:
    """In-memory document store recording applied batches."""

    def __init__(self, end_index: int = 2, fail_on_batch: int | None = None):
        self.end_index = end_index
        self.fail_on_batch = fail_on_batch
        self.applied = []
        self.created = []

    async def get(self, document_id):
        return DocumentInfo(document_id=document_id, title="Doc", end_index=self.end_index)

    async def apply_batch(self, document_id, batch):
        if batch.index == self.fail_on_batch:
            raise InvalidRequestError("Invalid range", status_code=400)
        self.applied.append((document_id, batch))
        return {"replies": [{} for _ in batch.requests]}

    async def create_document(self, title):
        self.created.append(title)
        return "doc_new"


class FakeFolderStore:
    """Folder store that only records moves."""

    def __init__(self):
        self.moves = []

    async def create_folder(self, name, parent_id="root"):
        return {"id": "folder_new", "name": name}

    async def list_children(self, folder_id="root", page_size=100):
        return []

    async def move(self, file_id, folder_id):
        self.moves.append((file_id, folder_id))
        return {"id": file_id, "parents": [folder_id]}

    async def rename(self, file_id, new_name):
        return {"id": file_id, "name": new_name}

    async def delete(self, file_id):
        return None

    async def check_permissions(self, file_id):
        return []

    async def share(self, file_id, recipient):
        return {}


def make_batches(count, batch_size):
    return chunk_requests([InsertText(index + 1, "x") for index in range(count)], batch_size)


class TestFakes:
    def test_fakes_satisfy_protocols(self):
        assert isinstance(FakeDocumentStore(), DocumentStoreProtocol)
        assert isinstance(FakeFolderStore(), FolderStoreProtocol)


class TestBatchOperationManager:
    @pytest.mark.asyncio
    async def test_submits_all_batches_in_order(self):
        store = FakeDocumentStore()
        batches = make_batches(80, 35)

        report = await BatchOperationManager(store).submit("doc1", batches)

        assert [batch.index for _, batch in store.applied] == [0, 1, 2]
        assert report.batches_applied == 3
        assert report.requests_applied == 80
        assert len(report.replies) == 80

    @pytest.mark.asyncio
    async def test_failure_aborts_remaining_batches(self):
        store = FakeDocumentStore(fail_on_batch=1)
        batches = make_batches(80, 35)

        with pytest.raises(BatchSubmissionError) as exc_info:
            await BatchOperationManager(store).submit("doc1", batches)

        error = exc_info.value
        assert len(store.applied) == 1
        assert error.batches_applied == 1
        assert error.total_batches == 3
        assert error.document_id == "doc1"
        assert isinstance(error.cause, InvalidRequestError)
        assert error.status_code == 400
        assert "Batch 2/3" in str(error)

    @pytest.mark.asyncio
    async def test_first_batch_failure_applies_nothing(self):
        store = FakeDocumentStore(fail_on_batch=0)

        with pytest.raises(BatchSubmissionError) as exc_info:
            await BatchOperationManager(store).submit("doc1", make_batches(5, 2))

        assert exc_info.value.batches_applied == 0
        assert store.applied == []

    @pytest.mark.asyncio
    async def test_no_batches(self):
        report = await BatchOperationManager(FakeDocumentStore()).submit("doc1", [])
        assert report.batches_applied == 0
        assert report.requests_applied == 0


class TestMarkdownDocumentManager:
    @pytest.fixture
    def converter(self, settings):
        return MarkdownToDocsConverter(settings)

    @pytest.mark.asyncio
    async def test_append_starts_before_final_newline(self, converter):
        store = FakeDocumentStore(end_index=20)
        manager = MarkdownDocumentManager(store, converter=converter)

        result = await manager.append_markdown("doc1", "Hello")

        _, first_batch = store.applied[0]
        assert first_batch.requests[0] == InsertText(19, "\n")
        assert first_batch.requests[1] == InsertText(20, "Hello\n")
        assert result.start_index == 19
        assert result.end_index == 26
        assert result.characters_inserted == 7

    @pytest.mark.asyncio
    async def test_appended_heading_gets_its_own_paragraph(self, converter):
        store = FakeDocumentStore(end_index=5)
        manager = MarkdownDocumentManager(store, converter=converter)

        await manager.append_markdown("doc1", "# Title")

        _, first_batch = store.applied[0]
        assert list(first_batch.requests) == [
            InsertText(4, "\n"),
            InsertText(5, "Title\n"),
            SetParagraphStyle(5, 10, "HEADING_1"),
        ]

    @pytest.mark.asyncio
    async def test_append_to_empty_document_has_no_separator(self, converter):
        store = FakeDocumentStore(end_index=2)
        manager = MarkdownDocumentManager(store, converter=converter)

        await manager.append_markdown("doc1", "Hello")

        _, first_batch = store.applied[0]
        assert list(first_batch.requests) == [InsertText(1, "Hello\n")]

    @pytest.mark.asyncio
    async def test_append_respects_batch_size(self, converter):
        store = FakeDocumentStore()
        manager = MarkdownDocumentManager(store, converter=converter)

        result = await manager.append_markdown("doc1", "a\nb\nc", batch_size=2)

        assert result.submission.batches_applied == 2
        assert [len(batch) for _, batch in store.applied] == [2, 1]

    @pytest.mark.asyncio
    async def test_create_writes_into_new_document(self, converter):
        store = FakeDocumentStore(end_index=2)
        manager = MarkdownDocumentManager(store, converter=converter)

        result = await manager.create_from_markdown("Notes", "# Title")

        assert store.created == ["Notes"]
        assert result.document_id == "doc_new"
        assert result.start_index == 1
        assert result.folder_id is None

    @pytest.mark.asyncio
    async def test_create_with_images(self, converter):
        store = FakeDocumentStore()
        manager = MarkdownDocumentManager(store, converter=converter)

        result = await manager.create_from_markdown("Notes", "Hi", images=[ImageSpec("https://example.com/a.png")])

        assert result.end_index == 6

    @pytest.mark.asyncio
    async def test_create_moves_document_to_folder(self, converter):
        folders = FakeFolderStore()
        manager = MarkdownDocumentManager(FakeDocumentStore(), folders, converter=converter)

        result = await manager.create_from_markdown("Notes", "Body", folder_id="folder_1")

        assert folders.moves == [("doc_new", "folder_1")]
        assert result.folder_id == "folder_1"

    @pytest.mark.asyncio
    async def test_create_without_folder_store_skips_move(self, converter):
        manager = MarkdownDocumentManager(FakeDocumentStore(), converter=converter)

        result = await manager.create_from_markdown("Notes", "Body", folder_id="folder_1")

        assert result.folder_id is None

    @pytest.mark.asyncio
    async def test_failed_batch_skips_folder_move(self, converter):
        folders = FakeFolderStore()
        manager = MarkdownDocumentManager(FakeDocumentStore(fail_on_batch=0), folders, converter=converter)

        with pytest.raises(BatchSubmissionError):
            await manager.create_from_markdown("Notes", "Body", folder_id="folder_1")

        assert folders.moves == []


class TestValidationManager:
    def setup_method(self):
        self.validator = ValidationManager()

    def test_valid_document_id(self):
        assert self.validator.validate_document_id("1AbC_d-e") == (True, "")

    def test_invalid_document_id(self):
        is_valid, message = self.validator.validate_document_id("bad/id")
        assert not is_valid
        assert "invalid characters" in message

    def test_empty_title(self):
        assert self.validator.validate_title("   ")[0] is False

    def test_long_title(self):
        assert self.validator.validate_title("x" * 256)[0] is False

    def test_markdown_must_be_string(self):
        assert self.validator.validate_markdown(None)[0] is False
        assert self.validator.validate_markdown("") == (True, "")

    @pytest.mark.parametrize("batch_size", [None, 1, 35, 500])
    def test_valid_batch_sizes(self, batch_size):
        assert self.validator.validate_batch_size(batch_size) == (True, "")

    @pytest.mark.parametrize("batch_size", [0, -1, 501])
    def test_invalid_batch_sizes(self, batch_size):
        assert self.validator.validate_batch_size(batch_size)[0] is False

    def test_parse_image_specs(self):
        specs, error = self.validator.parse_image_specs(
            [{"uri": "https://example.com/a.png", "width": 100, "height": 0}]
        )
        assert error == ""
        assert specs == [ImageSpec("https://example.com/a.png", 100, None)]

    def test_parse_image_specs_none(self):
        assert self.validator.parse_image_specs(None) == ([], "")

    @pytest.mark.parametrize(
        "image",
        [
            {"uri": "ftp://example.com/a.png"},
            {"uri": ""},
            {"uri": "https://example.com/a.png", "width": -1},
            {"uri": "https://example.com/a.png", "height": "tall"},
        ],
    )
    def test_parse_image_specs_rejects(self, image):
        specs, error = self.validator.parse_image_specs([image])
        assert specs == []
        assert error.startswith("images[0]")
