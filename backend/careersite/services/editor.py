"""
Section editor: explicit commands over an immutable section list.

A draft never changes in place; every command returns a new draft with
order_index renumbered to match list position. Saving a draft is just
reconcile_sections(draft.sections).
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from careersite.errors import SectionValidationError
from careersite.models.content_block import ContentBlock
from careersite.schemas.section import (
    AddSectionCommand,
    MoveSectionCommand,
    RemoveSectionCommand,
    SectionInput,
    UpdateSectionCommand,
)
from careersite.services.blocks import new_provisional_id, new_section_template

logger = logging.getLogger(__name__)


# Fields an "add" command may override on top of the type's template
ADD_OVERRIDABLE = ("title", "content", "media_url", "layout", "visible")


@dataclass(frozen=True)
class SectionDraft:
    sections: tuple[SectionInput, ...] = ()

    @classmethod
    def from_rows(cls, rows: Sequence[ContentBlock]) -> "SectionDraft":
        """Start a draft from persisted sections (already in display order)."""
        return cls(_renumber(SectionInput.model_validate(row) for row in rows))

    @property
    def ids(self) -> list[str]:
        return [section.id for section in self.sections]

    def index_of(self, section_id: str) -> int:
        for index, section in enumerate(self.sections):
            if section.id == section_id:
                return index
        raise SectionValidationError(f"Section {section_id} is not in the draft", section_id=section_id)

    def apply(self, command) -> "SectionDraft":
        """Return a new draft with one command applied."""
        sections = list(self.sections)

        if isinstance(command, AddSectionCommand):
            section_id = new_provisional_id()
            fields = new_section_template(command.type, section_id)
            for name in ADD_OVERRIDABLE:
                if name in command.model_fields_set:
                    fields[name] = getattr(command, name)
            position = len(sections) if command.position is None else min(command.position, len(sections))
            sections.insert(position, SectionInput(**fields))

        elif isinstance(command, UpdateSectionCommand):
            index = self.index_of(command.id)
            patch = command.patch()
            current = sections[index]
            if "type" in patch and patch["type"] != current.type and "layout" not in patch:
                # A layout only makes sense for the type it was written for
                patch["layout"] = None
            sections[index] = current.model_copy(update=patch)

        elif isinstance(command, RemoveSectionCommand):
            sections.pop(self.index_of(command.id))

        elif isinstance(command, MoveSectionCommand):
            section = sections.pop(self.index_of(command.id))
            sections.insert(min(command.to_index, len(sections)), section)

        else:
            raise SectionValidationError(f"Unsupported editor command {type(command).__name__}")

        return SectionDraft(_renumber(sections))

    def apply_all(self, commands: Iterable) -> "SectionDraft":
        draft = self
        for command in commands:
            draft = draft.apply(command)
        return draft


def _renumber(sections: Iterable[SectionInput]) -> tuple[SectionInput, ...]:
    return tuple(
        section.model_copy(update={"order_index": index})
        for index, section in enumerate(sections)
    )
