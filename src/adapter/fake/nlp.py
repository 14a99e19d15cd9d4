"""In-memory implementation of NLPPort for testing."""

from domain.model.annotation import AnnotationGraph
from domain.model.errors import AnnotationError


class FakeNLPAdapter:
    """Fake NLP adapter that returns a preconfigured annotation graph."""

    def __init__(
        self,
        graph: AnnotationGraph | None = None,
        error: Exception | None = None,
        alive: bool = True,
    ):
        self.graph = graph or AnnotationGraph()
        self.error = error
        self.alive = alive
        self.calls: list[str] = []

    async def analyze(self, text: str) -> AnnotationGraph:
        self.calls.append(text)
        if self.error is not None:
            raise AnnotationError("Text analysis failed") from self.error
        return self.graph

    def ping(self) -> bool:
        return self.alive
