"""Output subsystem: local README files and commits back to GitHub."""

from readmegen.output.publisher import PublishError, ReadmePublisher
from readmegen.output.writer import ReadmeWriter

__all__ = [
    "PublishError",
    "ReadmePublisher",
    "ReadmeWriter",
]
