"""Output side of the archive: page storage, index rendering and serving."""

from oldnews.publishing.index import IndexAccumulator
from oldnews.publishing.store import ArtifactStore, artifact_filename

__all__ = ["ArtifactStore", "IndexAccumulator", "artifact_filename"]
