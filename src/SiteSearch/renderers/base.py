"""Writer interface shared by every output format.

Commands hand each finished `SearchOutcome` to a writer and call `finalize`
exactly once when the command is done; file writers buffer until then.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from SiteSearch.services.search import SearchOutcome


class OutputWriter(ABC):
    """Destination for search outcomes."""

    @abstractmethod
    def write_search_result(self, outcome: SearchOutcome) -> None:
        """Accept one executed search."""

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Flush buffered output; `action` is the CLI command name."""


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Fan each call out to several writers, in order."""

    writers: Sequence[OutputWriter]

    def write_search_result(self, outcome: SearchOutcome) -> None:
        for writer in self.writers:
            writer.write_search_result(outcome)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
