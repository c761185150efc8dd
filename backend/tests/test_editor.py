"""
Tests for editor commands on section drafts.

Validates:
- Add/update/remove/move produce new drafts and leave the old one alone
- order_index always matches list position
- Unknown ids are rejected
"""
import pytest

from careersite.errors import SectionValidationError
from careersite.schemas.section import (
    AddSectionCommand,
    CommandBatchRequest,
    MoveSectionCommand,
    RemoveSectionCommand,
    SectionInput,
    UpdateSectionCommand,
)
from careersite.services.blocks import is_provisional_id
from careersite.services.editor import SectionDraft


@pytest.fixture
def draft() -> SectionDraft:
    return SectionDraft((
        SectionInput(id="a", title="A", order_index=0),
        SectionInput(id="b", type="cards", title="B", layout=[{"title": "x"}], order_index=1),
        SectionInput(id="c", title="C", order_index=2),
    ))


def positions(draft: SectionDraft) -> list[int]:
    return [section.order_index for section in draft.sections]


def test_add_appends_template(draft):
    updated = draft.apply(AddSectionCommand(type="cards"))

    added = updated.sections[-1]
    assert len(updated.sections) == 4
    assert is_provisional_id(added.id)
    assert added.type == "cards"
    assert added.title == "Our Values"
    assert len(added.layout) == 2
    assert positions(updated) == [0, 1, 2, 3]
    # Original draft untouched
    assert len(draft.sections) == 3


def test_add_at_position_with_overrides(draft):
    updated = draft.apply(AddSectionCommand(type="text", title="Benefits", visible=False, position=1))

    assert updated.ids[0] == "a"
    assert updated.sections[1].title == "Benefits"
    assert updated.sections[1].visible is False
    assert updated.ids[2:] == ["b", "c"]
    assert positions(updated) == [0, 1, 2, 3]


def test_add_position_past_end_appends(draft):
    updated = draft.apply(AddSectionCommand(position=99))

    assert updated.ids[:3] == ["a", "b", "c"]


def test_update_patches_only_given_fields(draft):
    updated = draft.apply(UpdateSectionCommand(id="b", title="Values"))

    section = updated.sections[1]
    assert section.title == "Values"
    assert section.type == "cards"
    assert section.layout == [{"title": "x"}]


def test_type_change_clears_layout(draft):
    updated = draft.apply(UpdateSectionCommand(id="b", type="carousel"))

    assert updated.sections[1].type == "carousel"
    assert updated.sections[1].layout is None


def test_type_change_with_new_layout_keeps_it(draft):
    updated = draft.apply(UpdateSectionCommand(id="b", type="carousel", layout=[{"title": "Slide"}]))

    assert updated.sections[1].layout == [{"title": "Slide"}]


def test_remove_renumbers(draft):
    updated = draft.apply(RemoveSectionCommand(id="a"))

    assert updated.ids == ["b", "c"]
    assert positions(updated) == [0, 1]


@pytest.mark.parametrize("to_index, expected", [
    (0, ["c", "a", "b"]),
    (1, ["a", "c", "b"]),
    (2, ["a", "b", "c"]),
    (10, ["a", "b", "c"]),
])
def test_move(draft, to_index, expected):
    updated = draft.apply(MoveSectionCommand(id="c", to_index=to_index))

    assert updated.ids == expected
    assert positions(updated) == [0, 1, 2]


@pytest.mark.parametrize("command", [
    UpdateSectionCommand(id="missing", title="x"),
    RemoveSectionCommand(id="missing"),
    MoveSectionCommand(id="missing", to_index=0),
])
def test_unknown_id_rejected(draft, command):
    with pytest.raises(SectionValidationError) as exc_info:
        draft.apply(command)

    assert exc_info.value.section_id == "missing"


def test_apply_all_from_request_payload(draft):
    request = CommandBatchRequest.model_validate({"commands": [
        {"op": "remove", "id": "b"},
        {"op": "add", "type": "video", "media_url": "https://youtu.be/dQw4w9WgXcQ"},
        {"op": "move", "id": "c", "to_index": 0},
    ]})

    updated = draft.apply_all(request.commands)

    assert updated.ids[:2] == ["c", "a"]
    assert updated.sections[2].type == "video"
    assert updated.sections[2].media_url == "https://youtu.be/dQw4w9WgXcQ"
    assert positions(updated) == [0, 1, 2]


@pytest.mark.asyncio
async def test_from_rows_uses_persisted_ids(company, make_section):
    second = await make_section(company.id, title="Second", order_index=5)
    first = await make_section(company.id, title="First", order_index=2)

    draft = SectionDraft.from_rows([first, second])

    assert draft.ids == [str(first.id), str(second.id)]
    assert positions(draft) == [0, 1]


def test_update_with_null_type_or_visibility_keeps_them(draft):
    command = UpdateSectionCommand.model_validate({"id": "b", "type": None, "visible": None, "title": "Values"})

    updated = draft.apply(command)

    section = updated.sections[1]
    assert section.type == "cards"
    assert section.visible is True
    assert section.layout == [{"title": "x"}]
    assert section.title == "Values"
