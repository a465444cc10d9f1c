"""Tests for rendering and writing atomic cards."""

import frontmatter
import pytest

from atomic_notes.core.card_operations import (
    build_banner,
    card_folder_for,
    create_cards,
    render_card_markdown,
)
from atomic_notes.core.operation_log import OperationLog
from atomic_notes.data_models import CardSettings, CreateOperation, ModifyOperation
from atomic_notes.models import AtomicCard, CardPosition, Relation
from conftest import write_note


@pytest.fixture
def cards():
    return [
        AtomicCard(
            title="Affordance",
            description="What an object lets you do",
            tags=["concept", "design"],
            content="Properties that suggest how a thing can be used.",
            explanation="A door handle affords pulling.",
            relations=[Relation(logic="contrast", concept="Signifier")],
            position=CardPosition(parent="Design of Everyday Things", children=["Door Handles"]),
        ),
        AtomicCard(title="Signifier", description="Cue for an action"),
    ]


class TestRendering:
    def test_frontmatter_holds_description_and_tags(self, cards):
        post = frontmatter.loads(render_card_markdown(cards[0]))

        assert post.metadata == {
            "description": "What an object lets you do",
            "tags": ["concept", "design"],
        }

    def test_body_links_relations_and_position(self, cards):
        body = frontmatter.loads(render_card_markdown(cards[0])).content

        assert "- **Content**: Properties that suggest how a thing can be used." in body
        assert "- **Related**: contrast [[Signifier]]" in body
        assert "[Up] [[Design of Everyday Things]]" in body
        assert "[Down] [[Door Handles]]" in body

    def test_minimal_card_has_no_optional_lines(self, cards):
        body = frontmatter.loads(render_card_markdown(cards[1])).content

        assert "**Related**" not in body
        assert "**Position**" not in body

    def test_banner_lists_cards(self, cards):
        banner = build_banner(cards)

        assert banner.startswith("\n\n---\n")
        assert "- [[Affordance]]\n- [[Signifier]]" in banner


class TestCardFolder:
    @pytest.mark.parametrize(
        "source, default_folder, expected",
        [
            ("Reading/Book.md", "", "Reading/Book-atomic"),
            ("Book.md", "", "Book-atomic"),
            ("Reading/Book.md", "Cards/", "Cards/Book-atomic"),
            ("Reading/v1.2 Notes.md", "", "Reading/v1.2 Notes-atomic"),
        ],
    )
    def test_folder_layout(self, source, default_folder, expected):
        assert card_folder_for(source, default_folder) == expected


class TestCreateCards:
    def test_writes_cards_and_banner(self, vault_path, storage, cards):
        write_note(vault_path, "Reading/Book.md", "Body")

        result = create_cards(storage, "Reading/Book.md", cards, CardSettings())

        assert result.created == [
            "Reading/Book-atomic/Affordance.md",
            "Reading/Book-atomic/Signifier.md",
        ]
        assert result.source_updated
        source = (vault_path / "Reading/Book.md").read_text(encoding="utf-8")
        assert source.startswith("Body")
        assert "[[Affordance]]" in source
        assert result.operations == [
            CreateOperation(path="Reading/Book-atomic/Affordance.md"),
            CreateOperation(path="Reading/Book-atomic/Signifier.md"),
            ModifyOperation(path="Reading/Book.md", prior_content="Body"),
        ]

    def test_banner_disabled(self, vault_path, storage, cards):
        write_note(vault_path, "Book.md", "Body")

        result = create_cards(storage, "Book.md", cards, CardSettings(add_banner=False))

        assert not result.source_updated
        assert (vault_path / "Book.md").read_text(encoding="utf-8") == "Body"
        assert all(isinstance(op, CreateOperation) for op in result.operations)

    def test_existing_card_is_skipped(self, vault_path, storage, cards):
        write_note(vault_path, "Book.md", "Body")
        write_note(vault_path, "Book-atomic/Affordance.md", "hand written")

        result = create_cards(storage, "Book.md", cards, CardSettings())

        assert result.skipped == ["Book-atomic/Affordance.md"]
        assert result.created == ["Book-atomic/Signifier.md"]
        assert (vault_path / "Book-atomic/Affordance.md").read_text(encoding="utf-8") == "hand written"
        assert "[[Affordance]]" not in (vault_path / "Book.md").read_text(encoding="utf-8")

    def test_default_folder(self, vault_path, storage, cards):
        write_note(vault_path, "Reading/Book.md", "Body")

        result = create_cards(storage, "Reading/Book.md", cards[1:], CardSettings(default_folder="Cards"))

        assert result.created == ["Cards/Book-atomic/Signifier.md"]

    def test_missing_source_raises(self, storage, cards):
        with pytest.raises(FileNotFoundError):
            create_cards(storage, "Missing.md", cards, CardSettings())

    def test_batch_is_undoable_as_one_transaction(self, vault_path, storage, cards):
        write_note(vault_path, "Book.md", "Body")
        log = OperationLog(storage)

        result = create_cards(storage, "Book.md", cards, CardSettings())
        log.add_transaction(result.operations)
        outcome = log.undo()

        assert outcome.count == 3
        assert not (vault_path / "Book-atomic/Affordance.md").exists()
        assert (vault_path / "Book.md").read_text(encoding="utf-8") == "Body"

        log.redo()
        assert (vault_path / "Book-atomic/Signifier.md").exists()
        assert "[[Signifier]]" in (vault_path / "Book.md").read_text(encoding="utf-8")

    def test_undecodable_source_keeps_created_cards_undoable(self, vault_path, storage, cards):
        (vault_path / "Book.md").write_bytes(b"\xff\xfe not utf-8")

        result = create_cards(storage, "Book.md", cards, CardSettings())

        assert result.failed == ["Book.md"]
        assert not result.source_updated
        assert result.operations == [
            CreateOperation(path="Book-atomic/Affordance.md"),
            CreateOperation(path="Book-atomic/Signifier.md"),
        ]
