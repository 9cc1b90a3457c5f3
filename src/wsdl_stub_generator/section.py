"""Staging of generated text per output section.

The writer visits a document only once, but generated text does not always belong
where it is discovered: nested records must precede the record that contains them,
and aliases of an interface belong after its closing brace. Each section therefore
stages its text in buffers indexed by nesting level, plus a deferred queue that is
flushed when the enclosing construct closes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from wsdl_stub_generator.wsdl_types import Section

logger = logging.getLogger(__name__)


class SectionBuffer:
    """The staged text of one output section.

    Attributes:
        section (Section): The section that this buffer holds text for.
        level (int): The current nesting level, 0 when no construct is open.
    """

    def __init__(self, section: Section):
        """Initialize the buffer, with the module header for non-root sections.

        Args:
            section (Section): The section that this buffer holds text for.
        """
        self.section = section
        self.level = 0

        self._final_stage: list[str] = []
        self._buffers: list[list[str]] = []
        self._deferred: list[str] = []
        self._seen: set[str] = set()
        self._finalized = False

        if section.module_name is not None:
            self._write_module_header(section.module_name)

    def _write_module_header(self, module_name: str):
        self.write(f"pub mod {module_name} {{\n", 0)
        self.write("use yaserde::{YaSerialize, YaDeserialize};\n\n", 0)
        self.write("use super::*;\n\n", 0)

    @property
    def depth(self) -> int:
        """The number of nested buffers that are currently pushed."""
        return len(self._buffers)

    def set_level(self, level: int):
        """Change the nesting level.

        Raising the level pushes a nested buffer for it. Returning to level 0 moves
        all nested buffers to the final stage, innermost first, so that nested
        constructs precede the construct that encloses them.

        Args:
            level (int): The new nesting level.
        """
        assert level >= 0, "The nesting level can not be negative."
        self.level = level

        if level == 0:
            self._flush_buffers()

        if len(self._buffers) < level:
            self._buffers.append([])

    def _flush_buffers(self):
        while self._buffers:
            self._final_stage.extend(self._buffers.pop())

    def _active_buffer(self, level: int) -> list[str]:
        if level == 0:
            return self._final_stage

        return self._buffers[level - 1]

    def write(self, text: str, level: int | None = None):
        """Write text at a nesting level.

        Args:
            text (str): The text to write.
            level (int | None): The nesting level to write at, defaults to the current level.
        """
        self._active_buffer(self.level if level is None else level).append(text)

    def deferred_write(self, text: str):
        """Queue text that is written when the current construct closes."""
        self._deferred.append(text)

    def flush_deferred(self):
        """Move the deferred queue to the buffer of the current level and empty it."""
        self._active_buffer(self.level).extend(self._deferred)
        self._deferred.clear()

    def mark_seen(self, signature: str):
        self._seen.add(signature)

    def have_seen(self, signature: str) -> bool:
        return signature in self._seen

    def reset_seen(self):
        self._seen.clear()

    def finalize(self) -> str:
        """Close all open levels and the module, and return the text of the section.

        Finalizing is idempotent; the module footer is only added once.

        Returns:
            str: The complete text of the section.
        """
        if not self._finalized:
            self.set_level(0)
            self.flush_deferred()

            if self.section.module_name is not None:
                self.write("}\n\n", 0)

            self._finalized = True

        return "".join(self._final_stage)


class SectionRouter:
    """Routes writes to the buffer of the current section.

    Attributes:
        current_section (Section): The section that receives writes.
        level (int): The nesting level, shared with the buffer of the current section.
    """

    def __init__(self):
        self.current_section = Section.ROOT
        self.level = 0
        self._buffers = {section: SectionBuffer(section) for section in Section}

    @property
    def current(self) -> SectionBuffer:
        """The buffer of the current section."""
        return self._buffers[self.current_section]

    def switch_section(self, section: Section):
        """Make a section current. The state of all other sections is kept."""
        if section is not self.current_section:
            logger.debug("Switching from section %s to %s.", self.current_section.name, section.name)
            self.current_section = section

    def set_level(self, level: int):
        self.level = level
        self.current.set_level(level)

    def inc_level(self):
        self.set_level(self.level + 1)

    def dec_level(self):
        self.set_level(self.level - 1)

    def write(self, text: str):
        self.current.write(text, self.level)

    def deferred_write(self, text: str):
        self.current.deferred_write(text)

    def flush_deferred(self):
        self.current.flush_deferred()

    def deferred_write_once(self, signature: str):
        """Queue text unless the same text was queued since the last reset of the current section.

        Args:
            signature (str): The text to queue, which is also its de-duplication key.
        """
        if not signature or self.current.have_seen(signature):
            return

        self.current.mark_seen(signature)
        self.current.deferred_write(signature)

    def reset_seen(self):
        self.current.reset_seen()

    def finalize(self) -> Iterator[tuple[Section, str]]:
        """Finalize all sections and yield their text in output order."""
        for section in Section:
            yield section, self._buffers[section].finalize()
