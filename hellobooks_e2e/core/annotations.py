"""
Soft-fail annotation log.

Optional UI steps never fail a test outright. When one cannot be performed,
the helper records a note here and the scenario carries on; the notes end up
in the pytest report and in the run report.
"""

from typing import Callable, Iterator, List, Optional

from hellobooks_e2e.core.types import Annotation, AnnotationType
from hellobooks_e2e.monitoring.logger import get_logger

logger = get_logger("hellobooks_e2e.annotations")

AnnotationSink = Callable[[Annotation], None]


class AnnotationLog:
    """Ordered collection of annotations for one test."""

    def __init__(self, test_id: str = "", sink: Optional[AnnotationSink] = None) -> None:
        self.test_id = test_id
        self._sink = sink
        self._items: List[Annotation] = []

    def add(self, description: str, type: AnnotationType = AnnotationType.NOTE) -> Annotation:
        annotation = Annotation(type=type, description=description)
        self._items.append(annotation)
        logger.warning(
            f"[{type.value}] {description}",
            extra={"test_id": self.test_id, "note": description},
        )
        if self._sink is not None:
            self._sink(annotation)
        return annotation

    def note(self, description: str) -> Annotation:
        """Record a soft-fail note."""
        return self.add(description, AnnotationType.NOTE)

    @property
    def items(self) -> List[Annotation]:
        return list(self._items)

    @property
    def notes(self) -> List[str]:
        return [a.description for a in self._items if a.type == AnnotationType.NOTE]

    def contains(self, text: str) -> bool:
        """True if any annotation mentions ``text`` (case-insensitive)."""
        needle = text.lower()
        return any(needle in a.description.lower() for a in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._items)
