"""Markdown documents as an ordered list of named sections."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Section:
    name: str
    body: str
    heading: Optional[str] = None
    level: int = 2
    # Draw a horizontal rule above the section.
    rule_before: bool = False

    def render(self) -> str:
        parts = []
        if self.rule_before:
            parts.append("---\n\n")
        if self.heading is not None:
            parts.append(f"{'#' * self.level} {self.heading}\n")
        parts.append(self.body)
        return "".join(parts).rstrip()


@dataclass
class Document:
    sections: list[Section] = field(default_factory=list)

    def add(self, name: str, body: str, heading: Optional[str] = None, level: int = 2, rule_before: bool = False) -> Section:
        if name in self.section_names():
            raise ValueError(f"Duplicate section '{name}'")
        section = Section(name=name, body=body, heading=heading, level=level, rule_before=rule_before)
        self.sections.append(section)
        return section

    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]

    def get(self, name: str) -> Section:
        for section in self.sections:
            if section.name == name:
                return section
        raise KeyError(name)

    def __contains__(self, name: str) -> bool:
        return name in self.section_names()

    def render(self) -> str:
        rendered = (section.render() for section in self.sections)
        return "\n\n".join(part for part in rendered if part) + "\n"
