"""Base class for plan exporters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

PlanT = TypeVar("PlanT")


class PlanExporter(ABC, Generic[PlanT]):
    """Abstract base class for plan exporters.

    Each exporter renders a plan as text for one downstream consumer
    (the ffmpeg render step, a human reviewer).
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Human-readable format name (e.g., 'ffmpeg filtergraph')."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension including dot (e.g., '.txt')."""
        ...

    @abstractmethod
    def render(self, plan: PlanT) -> str:
        """Render the plan as text."""
        ...

    async def export(self, plan: PlanT, output_path: Path) -> Path:
        """Write the rendered plan to a file.

        Args:
            plan: Plan to export
            output_path: Path for the output file; the format's extension
                is added when it has none

        Returns:
            Path to the exported file
        """
        output_path = Path(output_path)
        if not output_path.suffix:
            output_path = output_path.with_suffix(self.file_extension)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.render(plan))

        return output_path

    def get_output_filename(self, base_name: str) -> str:
        """Generate output filename with correct extension."""
        return f"{base_name}{self.file_extension}"
